"""Unit tests for the sort policy engine."""

import pytest

from vitae.contexts.projects.project_data_structures import Project, SortPolicy
from vitae.contexts.projects.sort_policy import sort_projects


def names(projects):
    return [p.name for p in projects]


@pytest.mark.unit
def test_sort_by_stars_descending():
    projects = [Project("a", stars=5), Project("b", stars=50), Project("c", stars=10)]

    result = sort_projects(projects, SortPolicy.STARS)

    assert names(result) == ["b", "c", "a"]
    for left, right in zip(result, result[1:]):
        assert left.stars >= right.stars


@pytest.mark.unit
def test_missing_counts_sort_last():
    projects = [Project("unset"), Project("zero", stars=0), Project("some", stars=3)]

    assert names(sort_projects(projects, SortPolicy.STARS)) == ["some", "zero", "unset"]


@pytest.mark.unit
def test_sort_is_stable_for_equal_keys():
    projects = [Project("first", stars=7), Project("second", stars=7), Project("third", stars=7)]

    assert names(sort_projects(projects, SortPolicy.STARS)) == ["first", "second", "third"]


@pytest.mark.unit
def test_stars_then_forks_breaks_ties_on_forks():
    projects = [
        Project("a", stars=10, forks=1),
        Project("b", stars=10, forks=5),
        Project("c", stars=20, forks=0),
    ]

    assert names(sort_projects(projects, SortPolicy.STARS_THEN_FORKS)) == ["c", "b", "a"]


@pytest.mark.unit
def test_forks_then_stars():
    projects = [
        Project("a", stars=100, forks=1),
        Project("b", stars=1, forks=2),
        Project("c", stars=50, forks=1),
    ]

    assert names(sort_projects(projects, SortPolicy.FORKS_THEN_STARS)) == ["b", "a", "c"]
    assert names(sort_projects(projects, SortPolicy.FORKS)) == ["b", "a", "c"]


@pytest.mark.unit
def test_manual_uses_last_appearance_and_puts_unlisted_last():
    projects = [Project("fetched1"), Project("x"), Project("fetched2"), Project("y")]

    result = sort_projects(projects, SortPolicy.MANUAL, manual_names=["x", "y", "x"])

    # x last appears at index 2, y at index 1
    assert names(result) == ["y", "x", "fetched1", "fetched2"]


@pytest.mark.unit
def test_no_policy_keeps_order():
    projects = [Project("b", stars=1), Project("a", stars=2)]

    assert names(sort_projects(projects, None)) == ["b", "a"]


@pytest.mark.unit
def test_manual_unlisted_stays_behind_repeated_names():
    """A repeated manual name must not let unlisted projects tie with listed ones."""
    projects = [Project("y"), Project("a"), Project("b")]

    result = sort_projects(projects, SortPolicy.MANUAL, manual_names=["a", "b", "a"])

    assert names(result) == ["b", "a", "y"]
