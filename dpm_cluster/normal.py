from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union
import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class NormalPrior:
    """
    Normal-Inverse-Gamma hyperparameters, applied independently per dimension.

        sigma^2 ~ InvGamma(shape, scale)
        mu      ~ N(mean, sigma^2 / precision_scale)
    """
    mean: Union[float, Sequence[float]] = 0.0
    precision_scale: float = 1.0
    shape: float = 1.0
    scale: float = 1.0
    dimension: int = 1

    def __post_init__(self):
        if self.dimension <= 0:
            raise ValueError(f"`dimension` must be positive (got {self.dimension!r}).")
        for name in ("precision_scale", "shape", "scale"):
            if not getattr(self, name) > 0:
                raise ValueError(f"`{name}` must be positive (got {getattr(self, name)!r}).")

    @property
    def mu0(self) -> Array:
        return np.broadcast_to(np.asarray(self.mean, dtype=float), (self.dimension,)).copy()

    def posterior(self, count: int, s1: Array, s2: Array) -> Tuple[Array, float, float, Array]:
        """(mu_n, kappa_n, a_n, b_n) given count, sum and sum of squares."""
        mu0 = self.mu0
        kappa0, a0, b0 = self.precision_scale, self.shape, self.scale
        if count == 0:
            return mu0, kappa0, a0, np.full(self.dimension, b0, dtype=float)

        kappa_n = kappa0 + count
        mu_n = (kappa0 * mu0 + s1) / kappa_n
        a_n = a0 + count / 2.0
        xbar = s1 / count
        # clip round-off below zero
        ss = np.maximum(s2 - count * xbar ** 2, 0.0)
        b_n = b0 + 0.5 * ss + kappa0 * count * (xbar - mu0) ** 2 / (2.0 * kappa_n)
        return mu_n, kappa_n, a_n, b_n


class NormalModel:
    """Diagonal Gaussian component accumulating count, sum and sum of squares."""

    def __init__(self, prior: NormalPrior, mean: Array, variance: Array):
        self.prior = prior
        self.mean = np.asarray(mean, dtype=float).reshape(prior.dimension)
        self.variance = np.asarray(variance, dtype=float).reshape(prior.dimension)
        self._count = 0
        self.s1 = np.zeros(prior.dimension, dtype=float)
        self.s2 = np.zeros(prior.dimension, dtype=float)

    @property
    def count(self) -> int:
        return self._count

    def _as_vector(self, x) -> Array:
        v = np.asarray(x, dtype=float).reshape(-1)
        if v.shape[0] != self.prior.dimension:
            raise ValueError(
                f"observation has dimension {v.shape[0]}, model expects {self.prior.dimension}"
            )
        return v

    def pdf(self, x) -> float:
        v = self._as_vector(x)
        z = (v - self.mean) ** 2 / self.variance
        norm = np.sqrt((2.0 * np.pi) ** self.prior.dimension * np.prod(self.variance))
        return float(np.exp(-0.5 * z.sum()) / norm)

    def observe(self, x) -> None:
        v = self._as_vector(x)
        self._count += 1
        self.s1 += v
        self.s2 += v * v

    def compute_parameters(self) -> None:
        # an empty component keeps the parameters it was drawn with
        if self._count == 0:
            return
        mu_n, _kappa_n, a_n, b_n = self.prior.posterior(self._count, self.s1, self.s2)
        self.mean = mu_n
        self.variance = b_n / (a_n + 1.0)  # posterior mode of sigma^2

    def __repr__(self) -> str:
        return (
            f"NormalModel(n={self._count}, mean={np.round(self.mean, 3).tolist()}, "
            f"sd={np.round(np.sqrt(self.variance), 3).tolist()})"
        )


class NormalModelDistribution:
    """Draws NormalModels from the Normal-Inverse-Gamma prior or posterior."""

    def __init__(
        self,
        prior: Optional[NormalPrior] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.prior = prior if prior is not None else NormalPrior()
        if rng is not None:
            self.rng = rng
        else:
            self.rng = np.random.default_rng(seed)

    def _draw(self, mu_n: Array, kappa_n: float, a_n: float, b_n: Array) -> NormalModel:
        variance = 1.0 / self.rng.gamma(a_n, 1.0 / b_n)
        mean = self.rng.normal(mu_n, np.sqrt(variance / kappa_n))
        return NormalModel(self.prior, mean, variance)

    def sample_from_prior(self, how_many: int) -> List[NormalModel]:
        p = self.prior
        b0 = np.full(p.dimension, p.scale, dtype=float)
        return [self._draw(p.mu0, p.precision_scale, p.shape, b0) for _ in range(how_many)]

    def sample_from_posterior(self, models: Sequence[NormalModel]) -> List[NormalModel]:
        return [self._draw(*self.prior.posterior(m.count, m.s1, m.s2)) for m in models]
