"""Tests for sample-history analysis."""

import numpy as np

from dpm_cluster.normal import NormalModel, NormalPrior
from dpm_cluster.summary import (
    active_cluster_counts,
    co_assignment_matrix,
    most_likely_assignments,
    summarize_samples,
)


def _model(mean, observed=()):
    m = NormalModel(NormalPrior(), mean=[mean], variance=[1.0])
    for x in observed:
        m.observe(x)
    return m


def test_active_cluster_counts():
    samples = [
        (_model(0.0, [0.1]), _model(5.0, [5.0]), _model(9.0)),
        (_model(0.0, [0.1, 5.0]), _model(5.0), _model(9.0)),
    ]
    assert active_cluster_counts(samples).tolist() == [2, 1]


def test_most_likely_assignments_ignore_empty_models():
    models = [_model(0.0, [0.0]), _model(5.0), _model(10.0, [10.0])]
    assert most_likely_assignments([0.2, 6.0, 9.0], models).tolist() == [0, 2, 2]


def test_most_likely_assignments_without_active_models():
    models = [_model(0.0), _model(5.0)]
    assert most_likely_assignments([4.0], models).tolist() == [1]


def test_co_assignment_matrix():
    points = [0.0, 0.1, 5.0]
    split = (_model(0.0, [0.0]), _model(5.0, [5.0]))
    merged = (_model(2.0, [0.0, 5.0]), _model(9.0))
    co = co_assignment_matrix(points, [split, merged])
    assert np.allclose(np.diag(co), 1.0)
    assert co[0, 1] == 1.0
    assert co[0, 2] == 0.5
    assert np.allclose(co, co.T)


def test_co_assignment_matrix_without_samples():
    assert co_assignment_matrix([1.0, 2.0], []).tolist() == [[0.0, 0.0], [0.0, 0.0]]


def test_summarize_samples():
    samples = [
        (_model(0.0, [0.0]), _model(5.0, [5.0])),
        (_model(0.0, [0.0]), _model(5.0, [5.0])),
        (_model(0.0, [0.0, 5.0]), _model(5.0)),
        (_model(0.0, [0.0]), _model(5.0, [5.0])),
    ]
    summary = summarize_samples(samples)
    assert summary.num_samples == 4
    assert summary.num_clusters == 2
    assert summary.mean_active == 1.75
    assert summary.active_histogram == {1: 0.25, 2: 0.75}
    d = summary.to_dict()
    assert d["active_counts"] == [2, 2, 1, 2]


def test_summarize_no_samples():
    summary = summarize_samples([])
    assert summary.num_samples == 0
    assert summary.active_histogram == {}
