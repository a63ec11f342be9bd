# dpm_cluster/errors.py
from __future__ import annotations
from typing import Optional


class DirichletError(Exception):
    """Base class for every failure raised by the sampler."""


class ConfigurationError(DirichletError, ValueError):
    """Invalid sampler configuration, rejected before any iteration runs."""


class NumericalDegeneracyError(DirichletError, ArithmeticError):
    """
    A probability or weight vector cannot be sampled from (all zero,
    negative, NaN). Carries the iteration and observation index when known.
    """

    def __init__(
        self,
        message: str,
        iteration: Optional[int] = None,
        observation_index: Optional[int] = None,
    ):
        self.iteration = iteration
        self.observation_index = observation_index
        context = []
        if iteration is not None:
            context.append(f"iteration={iteration}")
        if observation_index is not None:
            context.append(f"observation={observation_index}")
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class ContractViolationError(DirichletError):
    """A model distribution returned the wrong number of models."""

    def __init__(self, expected: int, actual: int, iteration: Optional[int] = None):
        self.expected = expected
        self.actual = actual
        self.iteration = iteration
        where = f" at iteration {iteration}" if iteration is not None else ""
        super().__init__(
            f"model distribution returned {actual} models, expected {expected}{where}"
        )
