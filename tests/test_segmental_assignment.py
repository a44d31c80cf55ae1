# tests/test_segmental_assignment.py
"""
U6: Assignment under Manhattan segmental distance

Covers:
- each representative is compared only on its own dimensions
- ties go to the first representative
- an entity with no dimensions never attracts a point
- build_clusters drops empty entities and recomputes centroids as member means
- SegmentalAssignment implements the AssignmentStrategy interface
"""

from __future__ import annotations

import pytest
import torch

from proclus.assignments import SegmentalAssignment, build_clusters
from proclus.base.data_structures import DimensionAssignment
from proclus.base.interfaces import AssignmentStrategy
from proclus.relations import TensorRelation


def _t(rows):
    return torch.tensor(rows, dtype=torch.float64)


def test_segmental_nearest_differs_from_full_space():
    """Full-space nearest would be rep 0; on its own dims rep 1 is closer."""
    points = _t([[0.0, 9.0]])
    reps = _t([[0.0, 5.0], [10.0, 9.0]])
    dims = [frozenset({1}), frozenset({1})]

    labels = SegmentalAssignment().compute_assignments(points, reps, dims)
    assert labels.tolist() == [1]

    dims = [frozenset({0}), frozenset({1})]
    labels = SegmentalAssignment().compute_assignments(points, reps, dims)
    assert labels.tolist() == [0]


def test_distance_matrix_values():
    points = _t([[1.0, 2.0, 3.0]])
    reps = _t([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]])
    dims = [frozenset({0, 1, 2}), frozenset({2})]

    d = SegmentalAssignment().distance_matrix(points, reps, dims)
    torch.testing.assert_close(d, _t([[2.0, 2.0]]))


def test_ties_go_to_first_entity():
    points = _t([[5.0, 0.0]])
    reps = _t([[0.0, 0.0], [10.0, 0.0], [5.0, 100.0]])
    dims = [frozenset({0}), frozenset({0}), frozenset({1})]

    assert SegmentalAssignment().compute_assignments(points, reps, dims).tolist() == [0]


def test_entity_without_dimensions_attracts_nothing():
    points = _t([[0.0, 0.0], [1.0, 1.0]])
    reps = _t([[0.0, 0.0], [100.0, 100.0]])
    dims = [frozenset(), frozenset({0, 1})]

    assert SegmentalAssignment().compute_assignments(points, reps, dims).tolist() == [1, 1]


def test_mismatched_dimension_sets():
    with pytest.raises(ValueError):
        SegmentalAssignment().compute_assignments(_t([[0.0]]), _t([[0.0], [1.0]]),
                                                  [frozenset({0})])


def test_assign_builds_non_empty_clusters_with_mean_centroids():
    rel = TensorRelation(_t([[0.0, 0.0], [1.0, 0.0], [10.0, 10.0], [12.0, 10.0]]),
                         ids=["a", "b", "c", "d"])
    assignment = DimensionAssignment(
        entities=("a", "x", "c"),
        dimensions=(frozenset({0, 1}), frozenset({0}), frozenset({0, 1}))
    )
    reps = _t([[0.0, 0.0], [500.0, 500.0], [10.0, 10.0]])

    clusters = SegmentalAssignment().assign(rel, reps, assignment)

    # entity "x" is far from everything and is dropped
    assert [c.entity for c in clusters] == ["a", "c"]
    assert clusters[0].ids == ("a", "b")
    assert clusters[1].ids == ("c", "d")
    assert clusters[1].dimensions == frozenset({0, 1})
    torch.testing.assert_close(clusters[0].centroid, _t([0.5, 0.0]))
    torch.testing.assert_close(clusters[1].centroid, _t([11.0, 10.0]))
    assert sum(c.size for c in clusters) == rel.size


def test_build_clusters_preserves_entity_order():
    points = _t([[0.0], [1.0], [2.0]])
    labels = torch.tensor([2, 0, 2])
    assignment = DimensionAssignment(entities=(7, 8, 9),
                                     dimensions=(frozenset({0}),) * 3)

    clusters = build_clusters([0, 1, 2], points, labels, assignment)
    assert [c.entity for c in clusters] == [7, 9]
    assert clusters[1].ids == (0, 2)
    torch.testing.assert_close(clusters[1].centroid, _t([1.0]))


def test_segmental_assignment_is_an_assignment_strategy():
    assert isinstance(SegmentalAssignment(), AssignmentStrategy)

    with pytest.raises(TypeError):
        AssignmentStrategy()

    class OnlyArgmin(AssignmentStrategy):
        def compute_assignments(self, points, representatives, dimensions):
            return torch.zeros(points.shape[0], dtype=torch.long)

    # assign() is abstract as well
    with pytest.raises(TypeError):
        OnlyArgmin()
