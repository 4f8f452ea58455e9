"""
Sort Policy Engine

Orders the final project list. All sorts are stable, so entries with equal
keys keep their relative order from before the sort.
"""

from typing import Dict, List, Optional, Sequence

from vitae.contexts.projects.project_data_structures import Project, SortPolicy


def _count(value: Optional[int]) -> int:
    # Missing counts sort as lowest
    return -1 if value is None else value


NUMERIC_KEYS = {
    SortPolicy.STARS: lambda p: (_count(p.stars),),
    SortPolicy.FORKS: lambda p: (_count(p.forks),),
    SortPolicy.STARS_THEN_FORKS: lambda p: (_count(p.stars), _count(p.forks)),
    SortPolicy.FORKS_THEN_STARS: lambda p: (_count(p.forks), _count(p.stars)),
}


def manual_positions(manual_names: Sequence[str]) -> Dict[str, int]:
    """Map each name to the index of its last appearance among the manual entries."""
    return {name: index for index, name in enumerate(manual_names)}


def sort_projects(
    projects: List[Project],
    policy: Optional[SortPolicy],
    manual_names: Sequence[str] = (),
) -> List[Project]:
    """
    Return projects ordered by the given policy.

    Args:
        projects: Projects in their pre-sort order
        policy: Active sort policy; None keeps the input order
        manual_names: Names of the manual project entries in declaration order
            (only used by SortPolicy.MANUAL)

    Returns:
        New sorted list
    """
    if policy is None:
        return list(projects)

    if policy is SortPolicy.MANUAL:
        positions = manual_positions(manual_names)
        # Ranks after every index in manual_names
        unlisted = len(manual_names)
        return sorted(projects, key=lambda p: positions.get(p.name, unlisted))

    return sorted(projects, key=NUMERIC_KEYS[policy], reverse=True)
