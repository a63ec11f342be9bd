from .config import Config
from .errors import (
    DirichletError,
    ConfigurationError,
    NumericalDegeneracyError,
    ContractViolationError,
)
from .distributions import draw_index, stick_breaking_weights, normalize_by_max, normalize_by_sum
from .models import Model, ModelDistribution
from .normal import NormalPrior, NormalModel, NormalModelDistribution
from .state import Cluster, DirichletState
from .emission import EmitMode, EmitPolicy, WeightedPoint, PointCollector, emit_point_to_clusters, emit_points
from .clusterer import DirichletClusterer, Phase, cluster_points
from .summary import (
    SampleSummary,
    active_cluster_counts,
    most_likely_assignments,
    co_assignment_matrix,
    summarize_samples,
)
from .logger import RunLogger, make_base_path

__all__ = [
    "Config",
    "DirichletError", "ConfigurationError", "NumericalDegeneracyError", "ContractViolationError",
    "draw_index", "stick_breaking_weights", "normalize_by_max", "normalize_by_sum",
    "Model", "ModelDistribution",
    "NormalPrior", "NormalModel", "NormalModelDistribution",
    "Cluster", "DirichletState",
    "EmitMode", "EmitPolicy", "WeightedPoint", "PointCollector", "emit_point_to_clusters", "emit_points",
    "DirichletClusterer", "Phase", "cluster_points",
    "SampleSummary", "active_cluster_counts", "most_likely_assignments",
    "co_assignment_matrix", "summarize_samples",
    "RunLogger", "make_base_path",
]
