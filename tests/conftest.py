"""Stub model families with fixed likelihoods."""

import pytest


class StubModel:
    """A model whose pdf comes from pdf_fn(index, x); records every call."""

    def __init__(self, pdf_fn, index):
        self.pdf_fn = pdf_fn
        self.index = index
        self.observed = []
        self.finalized = 0
        self.pdf_calls = 0

    @property
    def count(self):
        return len(self.observed)

    def pdf(self, x):
        self.pdf_calls += 1
        return self.pdf_fn(self.index, x)

    def observe(self, x):
        self.observed.append(x)

    def compute_parameters(self):
        self.finalized += 1


class StubDistribution:
    """Creates StubModels; `posterior_size` forces a wrong-length posterior."""

    def __init__(self, pdf_fn, prior_size=None, posterior_size=None):
        self.pdf_fn = pdf_fn
        self.prior_size = prior_size
        self.posterior_size = posterior_size
        self.created = []

    def _make(self, k):
        m = StubModel(self.pdf_fn, k)
        self.created.append(m)
        return m

    def sample_from_prior(self, how_many):
        n = how_many if self.prior_size is None else self.prior_size
        return [self._make(k) for k in range(n)]

    def sample_from_posterior(self, models):
        n = len(models) if self.posterior_size is None else self.posterior_size
        return [self._make(k) for k in range(n)]


def fixed_pdfs(values):
    """pdf_fn returning values[k] for component k, whatever the observation."""
    return lambda k, x: values[k]


@pytest.fixture
def uniform_factory():
    return StubDistribution(lambda k, x: 1.0)
