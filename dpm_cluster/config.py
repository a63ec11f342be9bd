# dpm_cluster/config.py
from dataclasses import dataclass
import numpy as np
from typing import Dict, Any, Union

from .emission import EmitMode, EmitPolicy
from .errors import ConfigurationError


@dataclass
class Config:
    """
    Configuration for a Dirichlet-process mixture sampling run.

    Everything is validated at construction so a bad value never reaches
    the first iteration. RNG is provided from the top level for reproducibility.
    """

    # Required
    num_clusters: int
    rng: Union[np.random.Generator, int] = 0

    # Sampler
    alpha0: float = 1.0
    thin: int = 1
    burnin: int = 0
    num_iterations: int = 100

    # Emission
    emit_most_likely: bool = True
    threshold: float = 0.5

    def __post_init__(self):
        # Normalize rng: accept int seed or Generator
        if isinstance(self.rng, (int, np.integer)):
            self.rng = np.random.default_rng(int(self.rng))
        elif not isinstance(self.rng, np.random.Generator):
            raise TypeError(
                f"rng must be int or np.random.Generator (got {type(self.rng)})"
            )

        self._ensure_positive_int("num_clusters", self.num_clusters)
        self._ensure_positive_int("thin", self.thin)
        self._ensure_non_negative_int("burnin", self.burnin)
        self._ensure_non_negative_int("num_iterations", self.num_iterations)

        if not (np.isfinite(self.alpha0) and self.alpha0 > 0):
            raise ConfigurationError(f"`alpha0` must be a positive real (got {self.alpha0!r}).")
        if not (0.0 <= self.threshold <= 1.0):
            raise ConfigurationError(f"`threshold` must lie in [0, 1] (got {self.threshold!r}).")

    @staticmethod
    def _ensure_positive_int(name: str, x: Any) -> None:
        if isinstance(x, bool) or not isinstance(x, (int, np.integer)) or x <= 0:
            raise ConfigurationError(f"`{name}` must be a positive integer (got {x!r}).")

    @staticmethod
    def _ensure_non_negative_int(name: str, x: Any) -> None:
        if isinstance(x, bool) or not isinstance(x, (int, np.integer)) or x < 0:
            raise ConfigurationError(f"`{name}` must be a non-negative integer (got {x!r}).")

    # ---- Convenience accessors ----
    @property
    def emit_policy(self) -> EmitPolicy:
        if self.emit_most_likely:
            return EmitPolicy(EmitMode.MOST_LIKELY)
        return EmitPolicy(EmitMode.THRESHOLD, threshold=self.threshold)

    @property
    def sampler(self) -> Dict[str, Any]:
        return dict(
            alpha0=self.alpha0,
            num_clusters=self.num_clusters,
            thin=self.thin,
            burnin=self.burnin,
            num_iterations=self.num_iterations,
        )
