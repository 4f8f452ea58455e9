"""
Directive Interpreter

Walks a person's project directives once, in declaration order:

1. Import directives call the project source and fill the merge store
   (later imports overwrite earlier entries with the same name).
2. SetSortOrder / SetImportMode update interpreter state (last one wins).
3. Manual entries are merged into the store after every directive is consumed.
4. The selection for the active import mode is ordered by the active sort policy.

Imports run one after another; a failing import aborts the whole run.
"""

import time
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from vitae.contexts.projects.logger import _log_debug, log_import_result, log_selection
from vitae.contexts.projects.merge_store import ProjectMergeStore
from vitae.contexts.projects.project_data_structures import (
    Directive,
    ImportDirective,
    ImportMode,
    Project,
    RawProject,
    SetImportMode,
    SetSortOrder,
    SortPolicy,
)
from vitae.contexts.projects.sort_policy import sort_projects


class ProjectSource(Protocol):
    def list_owned(
        self, ignore_forks: bool, token: Optional[str] = None, viewer: Optional[str] = None
    ) -> List[Project]: ...

    def list_by_names(
        self, names: Sequence[str], token: Optional[str] = None, viewer: Optional[str] = None
    ) -> List[Project]: ...


@dataclass
class ProjectSelection:
    """
    Result of interpreting a directive list.

    Attributes:
        projects: Final ordered projects
        import_mode: Import mode in effect after the last directive
        sort_policy: Sort policy applied (None means insertion order)
    """

    projects: List[Project]
    import_mode: ImportMode
    sort_policy: Optional[SortPolicy]


class DirectiveInterpreter:
    """Drives a project source and a merge store from a directive list."""

    def __init__(self, source: ProjectSource, viewer: Optional[str] = None):
        self.source = source
        self.viewer = viewer

    def _run_import(self, directive: ImportDirective) -> List[Project]:
        start = time.time()
        if directive.repos is None:
            description = "owned repositories"
            projects = self.source.list_owned(directive.ignore_forks, directive.token, self.viewer)
        else:
            description = f"{len(directive.repos)} listed repositories"
            projects = self.source.list_by_names(directive.repos, directive.token, self.viewer)
        log_import_result(description, len(projects), time.time() - start)
        return projects

    def run(self, directives: Sequence[Directive]) -> ProjectSelection:
        store = ProjectMergeStore()
        sort_policy: Optional[SortPolicy] = None
        import_mode = ImportMode.COMBINE

        for directive in directives:
            if isinstance(directive, ImportDirective):
                store.insert_fetched(self._run_import(directive))
            elif isinstance(directive, SetSortOrder):
                sort_policy = directive.policy
            elif isinstance(directive, SetImportMode):
                import_mode = directive.mode

        if sort_policy is None and import_mode is ImportMode.WHITELIST:
            sort_policy = SortPolicy.MANUAL

        manual = [d.project for d in directives if isinstance(d, RawProject)]
        for project in manual:
            store.merge(project)

        manual_names = [project.name for project in manual]
        if import_mode is ImportMode.WHITELIST:
            projects = store.select(manual_names)
            if sort_policy is not SortPolicy.MANUAL:
                projects = sort_projects(projects, sort_policy)
        else:
            projects = sort_projects(store.all(), sort_policy, manual_names)

        _log_debug(f"Project order: {[p.name for p in projects]}")
        log_selection(import_mode.value, sort_policy, len(projects))
        return ProjectSelection(projects=projects, import_mode=import_mode, sort_policy=sort_policy)
