"""
Project Merge Store

Keyed reconciliation of fetched project records with manually authored ones.
Entries keep first-seen insertion order, which is the base order for combine mode.
"""

from dataclasses import replace
from typing import Dict, Iterable, List

from vitae.contexts.projects.logger import _log_debug
from vitae.contexts.projects.project_data_structures import Project, sort_languages

# Fields a manual entry may override on a fetched one. Everything else
# (stars, forks, active, commit stats, languages) stays as fetched.
MANUAL_OVERRIDE_FIELDS = ("url", "description", "owner", "contributions", "role")


class ProjectMergeStore:
    """Projects keyed by name."""

    def __init__(self):
        self._entries: Dict[str, Project] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def get(self, name: str):
        return self._entries.get(name)

    def insert_fetched(self, projects: Iterable[Project]) -> None:
        """Insert fetched projects; an existing key is overwritten but keeps its position."""
        for project in projects:
            self._entries[project.name] = project

    def merge(self, manual: Project) -> None:
        """
        Merge a manual project entry into the store.

        If an entry with the same name exists, only fields the manual entry
        explicitly sets are copied over (tags only when non-empty). Otherwise
        the manual entry is inserted as-is with its languages sorted.
        """
        existing = self._entries.get(manual.name)
        if existing is None:
            self._entries[manual.name] = replace(manual, languages=sort_languages(manual.languages))
            return

        _log_debug(f"Merging project entry {manual.name}")
        overrides = {
            key: getattr(manual, key)
            for key in MANUAL_OVERRIDE_FIELDS
            if getattr(manual, key) is not None
        }
        if manual.tags:
            overrides["tags"] = list(manual.tags)
        self._entries[manual.name] = replace(existing, **overrides)

    def all(self) -> List[Project]:
        """Every entry, in first-seen insertion order."""
        return list(self._entries.values())

    def select(self, names: Iterable[str]) -> List[Project]:
        """Resolve names through the store in the given order, dropping unknown and repeated names."""
        return [self._entries[name] for name in dict.fromkeys(names) if name in self._entries]
