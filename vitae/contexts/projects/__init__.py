"""
Projects Context

Responsibilities:
- Parses the person's project directives
- Imports project records from GitHub
- Reconciles fetched records with manual entries
- Orders the final project list

Owns: Project records, directive interpretation, merge and sort policies
Never: Renders HTML
"""

from vitae.contexts.projects.github_source import GitHubProjectSource
from vitae.contexts.projects.interpreter import DirectiveInterpreter, ProjectSelection
from vitae.contexts.projects.merge_store import ProjectMergeStore
from vitae.contexts.projects.project_data_structures import (
    Directive,
    ImportDirective,
    ImportMode,
    LanguageStat,
    Project,
    ProjectRole,
    RawProject,
    SetImportMode,
    SetSortOrder,
    SortPolicy,
    parse_directive,
)
from vitae.contexts.projects.sort_policy import sort_projects

__all__ = [
    # Data structures
    "Project",
    "LanguageStat",
    "ProjectRole",
    "ImportMode",
    "SortPolicy",
    "Directive",
    "ImportDirective",
    "SetSortOrder",
    "SetImportMode",
    "RawProject",
    "parse_directive",
    # Engine
    "DirectiveInterpreter",
    "ProjectSelection",
    "ProjectMergeStore",
    "sort_projects",
    "GitHubProjectSource",
]
