"""
Project Data Structures

Defines the project record shared by the GitHub source, the merge store and the
renderer, plus the directive types that make up a person's `projects:` list.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from vitae.utils.exceptions import ConfigError, InputError


class ProjectRole(str, Enum):
    OWNER = "owner"
    MAINTAINER = "maintainer"
    CONTRIBUTOR = "contributor"

    def __str__(self) -> str:
        return self.name.capitalize()


class ImportMode(str, Enum):
    """Whether fetched projects are all kept (combine) or only manual names survive (whitelist)."""

    COMBINE = "combine"
    WHITELIST = "whitelist"


class SortPolicy(str, Enum):
    STARS = "stars"
    FORKS = "forks"
    STARS_THEN_FORKS = "stars_then_forks"
    FORKS_THEN_STARS = "forks_then_stars"
    MANUAL = "manual"


def to_percentage(value: float) -> float:
    """Truncate a percentage to one decimal place (12.37 -> 12.3)."""
    # round first so values already at one decimal (2.3 -> 22.999...) stay put
    return math.floor(round(float(value) * 10, 6)) / 10


@dataclass
class LanguageStat:
    language: str
    percentage: float

    def __post_init__(self):
        self.percentage = to_percentage(self.percentage)

    def to_dict(self) -> Dict[str, Any]:
        return {"language": self.language, "percentage": self.percentage}


def sort_languages(languages: List[LanguageStat]) -> List[LanguageStat]:
    """Return languages ordered by descending percentage."""
    return sorted(languages, key=lambda stat: stat.percentage, reverse=True)


@dataclass
class Project:
    """
    A single project entry.

    Every field except `name` is optional; `None` (or an empty list) means the
    value was never provided, which matters when a manual entry is merged
    over a fetched one.
    """

    name: str
    description: Optional[str] = None
    contributions: Optional[str] = None
    url: Optional[str] = None
    stars: Optional[int] = None
    forks: Optional[int] = None
    active: Optional[bool] = None
    owner: Optional[str] = None
    commits: Optional[int] = None
    additions: Optional[int] = None
    deletions: Optional[int] = None
    languages: List[LanguageStat] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    role: Optional[ProjectRole] = None

    _OPTIONAL_FIELDS = (
        "description",
        "contributions",
        "url",
        "stars",
        "forks",
        "active",
        "owner",
        "commits",
        "additions",
        "deletions",
    )

    _COUNT_FIELDS = ("stars", "forks", "commits", "additions", "deletions")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        if not isinstance(data.get("name"), str):
            raise InputError("Project entry requires a string 'name'", field="projects")

        kwargs = {key: data.get(key) for key in cls._OPTIONAL_FIELDS}
        for key in cls._COUNT_FIELDS:
            value = kwargs[key]
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise InputError(
                    f"Project '{data['name']}': '{key}' must be an integer, got {value!r}", field="projects"
                )
        if kwargs["active"] is not None and not isinstance(kwargs["active"], bool):
            raise InputError(
                f"Project '{data['name']}': 'active' must be true or false, got {kwargs['active']!r}",
                field="projects",
            )

        try:
            languages = [
                LanguageStat(language=str(stat["language"]), percentage=stat["percentage"])
                for stat in data.get("languages") or []
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise InputError(f"Malformed language stats for project '{data['name']}': {e}") from e

        role = data.get("role")
        if role is not None:
            try:
                role = ProjectRole(role)
            except ValueError as e:
                raise ConfigError(f"Unknown project role '{role}' for project '{data['name']}'") from e

        return cls(
            name=data["name"],
            languages=languages,
            tags=list(data.get("tags") or []),
            role=role,
            **kwargs,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, omitting unset fields."""
        result: Dict[str, Any] = {"name": self.name}
        for key in self._OPTIONAL_FIELDS:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.languages:
            result["languages"] = [stat.to_dict() for stat in self.languages]
        if self.tags:
            result["tags"] = list(self.tags)
        if self.role is not None:
            result["role"] = self.role.value
        return result


@dataclass
class ImportDirective:
    """Import projects from GitHub, either everything owned by the viewer or an explicit repo list."""

    source: str = "github"
    ignore_forks: bool = False
    repos: Optional[List[str]] = None
    token: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"from": self.source, "ignore_forks": self.ignore_forks}
        if self.repos is not None:
            result["repos"] = list(self.repos)
        if self.token is not None:
            result["token"] = self.token
        return result


@dataclass
class SetSortOrder:
    policy: SortPolicy

    def to_dict(self) -> Dict[str, Any]:
        return {"order_by": self.policy.value}


@dataclass
class SetImportMode:
    mode: ImportMode

    def to_dict(self) -> Dict[str, Any]:
        return {"import_mode": self.mode.value}


@dataclass
class RawProject:
    """A manually authored project entry."""

    project: Project

    def to_dict(self) -> Dict[str, Any]:
        return self.project.to_dict()


Directive = Union[ImportDirective, SetSortOrder, SetImportMode, RawProject]

SUPPORTED_SOURCES = ("github",)


def parse_directive(data: Dict[str, Any]) -> Directive:
    """
    Parse one entry of a person's `projects:` list.

    Shapes are distinguished by their keys, checked in this order:
    `from` (import), `order_by`, `import_mode`, then anything with a `name`.

    Raises:
        InputError: If the entry matches no directive shape
        ConfigError: If a policy, mode or source value is unknown
    """
    if not isinstance(data, dict):
        raise InputError(f"Project directive must be a mapping, got {type(data).__name__}", field="projects")

    if "from" in data:
        source = str(data["from"]).lower()
        if source not in SUPPORTED_SOURCES:
            raise ConfigError(f"Unsupported project source '{data['from']}'. Supported: {SUPPORTED_SOURCES}")
        repos = data.get("repos")
        if repos is not None and not isinstance(repos, list):
            raise ConfigError("Import 'repos' must be a list of 'owner/repo' strings")
        return ImportDirective(
            source=source,
            ignore_forks=bool(data.get("ignore_forks", False)),
            repos=[str(repo) for repo in repos] if repos is not None else None,
            token=data.get("token"),
        )

    if "order_by" in data:
        try:
            return SetSortOrder(SortPolicy(data["order_by"]))
        except ValueError as e:
            valid = [policy.value for policy in SortPolicy]
            raise ConfigError(f"Unknown sort order '{data['order_by']}'. Valid: {valid}") from e

    if "import_mode" in data:
        try:
            return SetImportMode(ImportMode(data["import_mode"]))
        except ValueError as e:
            valid = [mode.value for mode in ImportMode]
            raise ConfigError(f"Unknown import mode '{data['import_mode']}'. Valid: {valid}") from e

    if "name" in data:
        return RawProject(Project.from_dict(data))

    raise InputError(f"Unrecognized project directive with keys {sorted(data)}", field="projects")
