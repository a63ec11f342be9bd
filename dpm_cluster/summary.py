from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Sequence

import numpy as np

from .models import Model

Array = np.ndarray


# ---------------- Results dataclasses ----------------

@dataclass
class SampleSummary:
    num_samples: int
    num_clusters: int
    mean_active: float
    std_active: float
    active_counts: List[int]
    # active-component count -> fraction of samples
    active_histogram: Dict[int, float]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def active_cluster_counts(samples: Sequence[Sequence[Model]]) -> Array:
    """Number of components with at least one observation, per sample."""
    return np.array([sum(1 for m in s if m.count > 0) for s in samples], dtype=int)


def most_likely_assignments(points: Sequence[Any], models: Sequence[Model]) -> Array:
    """
    Index of the highest-pdf model for each point. Only occupied models
    compete, unless none is occupied.
    """
    active = [k for k, m in enumerate(models) if m.count > 0] or list(range(len(models)))
    out = np.empty(len(points), dtype=int)
    for j, x in enumerate(points):
        pdfs = [models[k].pdf(x) for k in active]
        out[j] = active[int(np.argmax(pdfs))]
    return out


def co_assignment_matrix(points: Sequence[Any], samples: Sequence[Sequence[Model]]) -> Array:
    """
    (N, N) fraction of samples in which two points share a most-likely
    component. Diagonal is 1 whenever there is at least one sample.
    """
    n = len(points)
    co = np.zeros((n, n), dtype=float)
    if not samples:
        return co
    for s in samples:
        z = most_likely_assignments(points, s)
        co += (z[:, None] == z[None, :])
    return co / len(samples)


def summarize_samples(samples: Sequence[Sequence[Model]]) -> SampleSummary:
    counts = active_cluster_counts(samples)
    num_clusters = len(samples[0]) if len(samples) else 0
    if counts.size:
        values, freq = np.unique(counts, return_counts=True)
        hist = {int(v): float(f) / counts.size for v, f in zip(values, freq)}
        mean, std = float(counts.mean()), float(counts.std())
    else:
        hist, mean, std = {}, 0.0, 0.0
    return SampleSummary(
        num_samples=int(counts.size),
        num_clusters=num_clusters,
        mean_active=mean,
        std_active=std,
        active_counts=counts.tolist(),
        active_histogram=hist,
    )
