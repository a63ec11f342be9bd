from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, List, Sequence

import numpy as np

from .distributions import normalize_by_sum
from .errors import ConfigurationError

# (cluster_index, weight, observation)
Sink = Callable[[int, float, Any], None]


class EmitMode(Enum):
    MOST_LIKELY = "most_likely"
    THRESHOLD = "threshold"


@dataclass(frozen=True)
class EmitPolicy:
    """How a scored point is routed to clusters. Fixed once, never per call."""
    mode: EmitMode = EmitMode.MOST_LIKELY
    threshold: float = 0.0

    def __post_init__(self):
        if not (0.0 <= self.threshold <= 1.0):
            raise ConfigurationError(f"`threshold` must lie in [0, 1] (got {self.threshold!r}).")


@dataclass(frozen=True)
class WeightedPoint:
    cluster_index: int
    weight: float
    observation: Any


@dataclass
class PointCollector:
    """In-memory sink keeping every emitted point in order."""
    points: List[WeightedPoint] = field(default_factory=list)

    def __call__(self, cluster_index: int, weight: float, observation: Any) -> None:
        self.points.append(WeightedPoint(int(cluster_index), float(weight), observation))

    def by_cluster(self) -> dict:
        out: dict = {}
        for wp in self.points:
            out.setdefault(wp.cluster_index, []).append(wp)
        return out


def emit_point_to_clusters(point: Any, clusters: Sequence, policy: EmitPolicy, sink: Sink) -> None:
    """
    Score `point` against a finalized cluster set and write it to the sink.

    Probabilities are the cluster pdfs normalized by their sum. MOST_LIKELY
    writes the single best cluster (first one on ties); THRESHOLD writes every
    cluster above `policy.threshold` that has ever observed a point.
    """
    pi = normalize_by_sum([c.model.pdf(point) for c in clusters])

    if policy.mode is EmitMode.MOST_LIKELY:
        k = int(np.argmax(pi))
        sink(k, float(pi[k]), point)
        return

    for k, c in enumerate(clusters):
        if pi[k] > policy.threshold and c.total_count > 0:
            sink(k, float(pi[k]), point)


def emit_points(points: Iterable[Any], clusters: Sequence, policy: EmitPolicy, sink: Sink) -> None:
    for point in points:
        emit_point_to_clusters(point, clusters, policy, sink)
