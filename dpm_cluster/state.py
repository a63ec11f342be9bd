from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence
import logging
import numpy as np

from .distributions import stick_breaking_weights
from .errors import ConfigurationError, ContractViolationError
from .models import Model, ModelDistribution, O

Array = np.ndarray

log = logging.getLogger(__name__)


@dataclass
class Cluster(Generic[O]):
    """
    One of the K mixture components.

    `total_count` accumulates observations across all iterations; the model's
    own `count` only covers the iteration that produced it.
    """
    index: int
    model: Model[O]
    total_count: int = 0


class DirichletState(Generic[O]):
    """
    The live mixture: K index-stable clusters, the concentration parameter
    and the mixture weights shared by every observation of an iteration.
    """

    def __init__(
        self,
        model_factory: ModelDistribution[O],
        num_clusters: int,
        alpha0: float,
        rng: Optional[np.random.Generator] = None,
    ):
        if num_clusters <= 0:
            raise ConfigurationError(f"`num_clusters` must be positive (got {num_clusters!r}).")
        if not (np.isfinite(alpha0) and alpha0 > 0):
            raise ConfigurationError(f"`alpha0` must be a positive real (got {alpha0!r}).")

        self.model_factory = model_factory
        self.num_clusters = int(num_clusters)
        self.alpha0 = float(alpha0)
        self.rng = rng if rng is not None else np.random.default_rng()

        models = list(model_factory.sample_from_prior(self.num_clusters))
        if len(models) != self.num_clusters:
            raise ContractViolationError(self.num_clusters, len(models))
        self.clusters: List[Cluster[O]] = [Cluster(k, m) for k, m in enumerate(models)]

        # occupancy of the most recent iteration, zero before the first update
        self.occupancy = np.zeros(self.num_clusters, dtype=float)
        self._mixture: Optional[Array] = None

    @property
    def models(self) -> List[Model[O]]:
        return [c.model for c in self.clusters]

    @property
    def mixture(self) -> Array:
        """Mixture weights for the current iteration, drawn once and cached until `update`."""
        if self._mixture is None:
            self._mixture = stick_breaking_weights(self.rng, self.occupancy, self.alpha0)
        return self._mixture

    def total_counts(self) -> Array:
        return np.array([c.total_count for c in self.clusters], dtype=float)

    def adjusted_probability(self, x: O, k: int) -> float:
        """Mixture weight of component k times the component's likelihood of x."""
        return float(self.mixture[k] * self.clusters[k].model.pdf(x))

    def adjusted_probabilities(self, x: O) -> Array:
        mix = self.mixture
        return np.array([mix[k] * c.model.pdf(x) for k, c in enumerate(self.clusters)], dtype=float)

    def update(self, new_models: Sequence[Model[O]]) -> None:
        """
        Adopt the models of a completed iteration. Each cluster's model is
        replaced, its total count grows by what the new model absorbed, and
        the cached mixture is dropped so the next iteration draws fresh weights.
        """
        if len(new_models) != self.num_clusters:
            raise ContractViolationError(self.num_clusters, len(new_models))
        for cluster, model in zip(self.clusters, new_models):
            cluster.model = model
            cluster.total_count += model.count
        self.occupancy = np.array([m.count for m in new_models], dtype=float)
        self._mixture = None
        log.debug("state updated: occupancy=%s", self.occupancy.astype(int).tolist())
