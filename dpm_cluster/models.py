# dpm_cluster/models.py
from __future__ import annotations
from typing import List, Protocol, Sequence, TypeVar, runtime_checkable

O = TypeVar("O")


@runtime_checkable
class Model(Protocol[O]):
    """
    A mixture component: a distribution plus a running accumulator.

    Lifecycle within one iteration: created by a ModelDistribution, fed
    observations with `observe`, finalized once with `compute_parameters`.
    """

    @property
    def count(self) -> int:
        """Observations absorbed since this model was created."""
        ...

    def pdf(self, x: O) -> float:
        ...

    def observe(self, x: O) -> None:
        ...

    def compute_parameters(self) -> None:
        ...


@runtime_checkable
class ModelDistribution(Protocol[O]):
    """Factory of models from the prior and from the posterior of existing models."""

    def sample_from_prior(self, how_many: int) -> List[Model[O]]:
        ...

    def sample_from_posterior(self, models: Sequence[Model[O]]) -> List[Model[O]]:
        """
        One new model per input model, index-aligned. Each is drawn from the
        posterior given the statistics held by its counterpart; an empty
        counterpart yields a draw from the prior.
        """
        ...
