from __future__ import annotations
import contextlib
import copy
import logging
from enum import Enum
from typing import Generic, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import Config
from .distributions import draw_index, normalize_by_max
from .errors import ConfigurationError, ContractViolationError, NumericalDegeneracyError
from .logger import RunLogger, make_base_path
from .models import Model, ModelDistribution, O
from .state import DirichletState

Array = np.ndarray
Sample = Tuple[Model, ...]

log = logging.getLogger(__name__)


class Phase(Enum):
    NOT_STARTED = "not_started"
    ITERATING = "iterating"
    DONE = "done"


class DirichletClusterer(Generic[O]):
    """
    Gibbs-style sampler for a Dirichlet-process mixture.

        theta_k ~ prior()
        lambda  ~ Dirichlet(alpha0)
        z_j     ~ Multinomial(lambda)
        x_j     ~ model(theta_{z_j})

    Every iteration draws new models from the posterior of the current ones,
    routes each observation to one of them with probability proportional to
    mixture weight times likelihood, and hands the new models to the state.
    After `burnin` iterations, every `thin`-th set of models is kept as a
    sample. Counting how many components of a sample are occupied estimates
    the number of clusters the data support; how often two points land in the
    same component gives a soft membership measure.
    """

    def __init__(self, sample_data: Sequence[O], model_factory: ModelDistribution[O], cfg: Config):
        self.sample_data: Tuple[O, ...] = tuple(sample_data)
        self.model_factory = model_factory
        self.cfg = cfg
        self.rng = cfg.rng
        self.num_clusters = cfg.num_clusters
        self.thin = cfg.thin
        self.burnin = cfg.burnin

        self.state: DirichletState[O] = DirichletState(
            model_factory, cfg.num_clusters, cfg.alpha0, rng=self.rng
        )
        self.samples: List[Sample] = []
        self.iteration = 0
        self.phase = Phase.NOT_STARTED

    def cluster(self, num_iterations: Optional[int] = None) -> List[Sample]:
        """
        Run `num_iterations` more iterations (default `cfg.num_iterations`)
        and return the sample history. Repeated calls continue the same chain.
        """
        if num_iterations is None:
            num_iterations = self.cfg.num_iterations
        if num_iterations < 0:
            raise ConfigurationError(f"`num_iterations` must be non-negative (got {num_iterations!r}).")
        if num_iterations == 0:
            return list(self.samples)

        if not self.sample_data:
            log.warning("no observations: every sample will be drawn from the prior")

        log.info(
            "sampling %d iterations (K=%d, alpha0=%g, burnin=%d, thin=%d, n=%d)",
            num_iterations, self.num_clusters, self.state.alpha0,
            self.burnin, self.thin, len(self.sample_data),
        )
        self.phase = Phase.ITERATING
        for _ in range(num_iterations):
            self.iterate()
        self.phase = Phase.DONE
        log.info("done: %d samples after %d iterations", len(self.samples), self.iteration)
        return list(self.samples)

    def iterate(self) -> None:
        """One full sweep; also the only point where a host may stop the chain."""
        iteration = self.iteration

        # 1) posterior models
        new_models = list(self.model_factory.sample_from_posterior(self.state.models))
        if len(new_models) != self.num_clusters:
            raise ContractViolationError(self.num_clusters, len(new_models), iteration=iteration)

        # 2) route every observation
        for j, x in enumerate(self.sample_data):
            k = self.assign_to_model(x, iteration=iteration, observation_index=j)
            new_models[k].observe(x)

        # 3) finalize
        for m in new_models:
            m.compute_parameters()

        # 4) capture after burn-in, every `thin` iterations
        if self._is_sample_iteration(iteration):
            self.samples.append(tuple(copy.deepcopy(new_models)))
            log.info("iteration %d: captured sample %d", iteration, len(self.samples))

        # 5) hand over to the state
        self.state.update(new_models)
        log.debug(
            "iteration %d: active components=%d",
            iteration, int(np.count_nonzero(self.state.occupancy)),
        )
        self.iteration += 1

    def _is_sample_iteration(self, iteration: int) -> bool:
        return iteration >= self.burnin and (iteration - self.burnin) % self.thin == 0

    def normalized_probabilities(self, x: O) -> Array:
        """Adjusted probabilities of x for every component, rescaled by the largest."""
        return normalize_by_max(self.state.adjusted_probabilities(x))

    def assign_to_model(
        self,
        x: O,
        iteration: Optional[int] = None,
        observation_index: Optional[int] = None,
    ) -> int:
        """Draw the component that generated x."""
        try:
            pi = self.normalized_probabilities(x)
            return draw_index(self.rng, pi)
        except NumericalDegeneracyError as e:
            raise NumericalDegeneracyError(
                str(e), iteration=iteration, observation_index=observation_index
            ) from e


def cluster_points(
    points: Sequence[O],
    model_factory: ModelDistribution[O],
    alpha0: float,
    num_clusters: int,
    thin: int,
    burnin: int,
    num_iterations: int,
    rng: Union[np.random.Generator, int] = 0,
    log_path: Optional[str] = None,
) -> List[Sample]:
    """
    Cluster `points` and return the captured samples.

    Parameters
    ----------
    alpha0 : float
        Concentration parameter of the Dirichlet process.
    num_clusters : int
        Number of candidate components K.
    thin : int
        Keep every `thin`-th iteration after burn-in.
    burnin : int
        Iterations discarded before the first sample.
    log_path : str, optional
        If given (empty for a timestamped default), console and logging
        output are mirrored into <log_path stem>.log.
    """
    cfg = Config(
        num_clusters=num_clusters,
        rng=rng,
        alpha0=alpha0,
        thin=thin,
        burnin=burnin,
        num_iterations=num_iterations,
    )
    run_log = RunLogger(make_base_path(log_path)) if log_path is not None else contextlib.nullcontext()
    with run_log:
        return DirichletClusterer(points, model_factory, cfg).cluster()
