from __future__ import annotations
import numpy as np

from .errors import NumericalDegeneracyError

Array = np.ndarray


# --------- Dirichlet (stick-breaking) ---------
def stick_breaking_weights(rng: np.random.Generator, counts: Array, alpha0: float) -> Array:
    """
    Truncated stick-breaking draw of K mixture weights given per-component counts.

    beta_k ~ Beta(1 + n_k, max(0, alpha0 + sum_{j>k} n_j)), pi_k = beta_k * remaining.
    The weights need not sum to one; the unbroken remainder is left over.
    """
    counts = np.asarray(counts, dtype=float)
    K = counts.shape[0]
    pi = np.empty(K, dtype=float)
    total = float(counts.sum())
    remainder = 1.0
    for k in range(K):
        total -= counts[k]
        b = max(0.0, alpha0 + total)
        # Beta(a, 0) is a point mass at 1
        beta_k = rng.beta(1.0 + counts[k], b) if b > 0 else 1.0
        pi[k] = beta_k * remainder
        remainder -= pi[k]
    return pi


# --------- Multinomial ---------
def draw_index(rng: np.random.Generator, weights: Array) -> int:
    """
    Draw index k with probability weights[k] / sum(weights).

    Weights are non-negative but not necessarily normalized. A single uniform
    draw u in (0, total] is located with one scan of the cumulative sum; the
    first index whose cumulative weight equals or exceeds u wins, so entries
    with zero weight are never returned.
    """
    w = np.asarray(weights, dtype=float)
    if w.ndim != 1 or w.size == 0:
        raise NumericalDegeneracyError(f"weights must be a non-empty vector (got shape {w.shape})")
    if np.any(np.isnan(w)) or np.any(w < 0):
        raise NumericalDegeneracyError(f"weights must be non-negative and not NaN (got {w!r})")
    total = float(w.sum())
    if not np.isfinite(total) or total <= 0:
        raise NumericalDegeneracyError(f"weights must have a positive finite sum (got {total!r})")

    u = (1.0 - rng.random()) * total
    cumulative = np.cumsum(w)
    k = int(np.searchsorted(cumulative, u, side="left"))
    if k >= w.size:
        # round-off pushed u past the last cumulative value
        k = int(np.flatnonzero(w > 0)[-1])
    return k


# --------- Normalization ---------
def normalize_by_max(p: Array) -> Array:
    """Rescale to [0, 1] by the largest entry. Raises when the max is zero or not finite."""
    p = np.asarray(p, dtype=float)
    m = float(p.max()) if p.size else 0.0
    if not np.isfinite(m) or m <= 0:
        raise NumericalDegeneracyError(f"cannot normalize by max={m!r}; every component assigns zero likelihood")
    return p / m


def normalize_by_sum(p: Array) -> Array:
    """Ordinary probability normalization. Raises when the sum is zero or not finite."""
    p = np.asarray(p, dtype=float)
    s = float(p.sum())
    if not np.isfinite(s) or s <= 0:
        raise NumericalDegeneracyError(f"cannot normalize by sum={s!r}; every cluster assigns zero likelihood")
    return p / s
