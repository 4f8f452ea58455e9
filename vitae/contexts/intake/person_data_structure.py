"""
Person Record

Structured representation of the person YAML that drives a résumé build:

    name: Jane Doe
    contacts:
      - {type: github, value: janedoe}
    educations: [...]
    experiences: [...]
    projects: [...]        # project directives, see contexts/projects
    skills: [...]
    references: {...}      # key -> citation, cited from markdown as [^key]
    publications: [...]    # citations

The same schema is used for the resolved record written to the cache.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from vitae.contexts.citations.citation_data_structures import Citation, parse_citation
from vitae.contexts.projects.project_data_structures import Directive, parse_directive
from vitae.utils.exceptions import ConfigError, InputError


@dataclass(frozen=True)
class DateRange:
    """
    Month-granular date range, written as "2019-09~2021-06" or "2021-07~" (ongoing).
    """

    start: date
    end: Optional[date] = None

    @staticmethod
    def _parse_month(text: str) -> date:
        try:
            return datetime.strptime(f"{text.strip()}-01", "%Y-%m-%d").date()
        except ValueError as e:
            raise ConfigError(f"Invalid month '{text}', expected YYYY-MM") from e

    @classmethod
    def parse(cls, text: str) -> "DateRange":
        """
        Raises:
            ConfigError: If the range does not have exactly two parts or a month is malformed
        """
        parts = str(text).split("~")
        if len(parts) != 2:
            raise ConfigError(f"A date range should have 2 and only 2 dates: '{text}'")
        start, end = parts
        return cls(
            start=cls._parse_month(start),
            end=cls._parse_month(end) if end.strip() else None,
        )

    def to_resume_string(self) -> str:
        start = self.start.strftime("%b,&nbsp;%Y")
        if self.end is None:
            return f"{start} - Current"
        return f"{start} - {self.end.strftime('%b,&nbsp;%Y')}"

    def __str__(self) -> str:
        end = self.end.strftime("%Y-%m") if self.end else ""
        return f"{self.start.strftime('%Y-%m')}~{end}"


class Degree(str, Enum):
    BS = "BS"
    MS = "MS"
    PHD = "PhD"

    def to_resume_string(self) -> str:
        return {
            Degree.BS: "Bachelor of Science",
            Degree.MS: "Master of Science",
            Degree.PHD: "PhD",
        }[self]


def _require(data: Dict[str, Any], key: str, location: str) -> Any:
    if not isinstance(data, dict):
        raise InputError(f"Expected a mapping, got {type(data).__name__}", field=location)
    if key not in data or data[key] is None:
        raise InputError(f"Missing required field '{key}'", field=location)
    return data[key]


def _optional(result: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        result[key] = value


@dataclass
class Contact:
    type: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "value": self.value}


@dataclass
class Education:
    institution: str
    degree: Degree
    major: str
    duration: DateRange
    location: Optional[str] = None
    gpa: Optional[float] = None
    courses: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], location: str) -> "Education":
        degree = _require(data, "degree", location)
        try:
            degree = Degree(degree)
        except ValueError as e:
            raise InputError(f"Unknown degree '{degree}'", field=location) from e
        return cls(
            institution=str(_require(data, "institution", location)),
            degree=degree,
            major=str(_require(data, "major", location)),
            duration=DateRange.parse(_require(data, "duration", location)),
            location=data.get("location"),
            gpa=data.get("gpa"),
            courses=data.get("courses"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "institution": self.institution,
            "degree": self.degree.value,
            "major": self.major,
            "duration": str(self.duration),
        }
        _optional(result, "location", self.location)
        _optional(result, "gpa", self.gpa)
        _optional(result, "courses", self.courses)
        return result


@dataclass
class Experience:
    company: str
    position: str
    duration: DateRange
    description: str
    location: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], location: str) -> "Experience":
        return cls(
            company=str(_require(data, "company", location)),
            position=str(_require(data, "position", location)),
            duration=DateRange.parse(_require(data, "duration", location)),
            description=str(_require(data, "description", location)),
            location=data.get("location"),
            tags=list(data.get("tags") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "company": self.company,
            "position": self.position,
            "duration": str(self.duration),
            "description": self.description,
        }
        _optional(result, "location", self.location)
        if self.tags:
            result["tags"] = list(self.tags)
        return result


@dataclass
class Skill:
    category: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"category": self.category}
        _optional(result, "description", self.description)
        return result


def _list_of(data: Dict[str, Any], key: str, required: bool = False) -> List[Any]:
    if key not in data or data[key] is None:
        if required:
            raise InputError(f"Missing required field '{key}'")
        return []
    value = data[key]
    if not isinstance(value, list):
        raise InputError(f"Expected a list, got {type(value).__name__}", field=key)
    return value


@dataclass
class Person:
    """
    The whole person record.

    `projects` holds directives before resolution; after resolution it holds
    the ordered manual entries followed by a manual sort directive.
    `references` and `publications` likewise hold unresolved citations before
    resolution and plain text (with year, for publications) after.
    """

    name: str
    contacts: List[Contact] = field(default_factory=list)
    educations: List[Education] = field(default_factory=list)
    experiences: List[Experience] = field(default_factory=list)
    projects: List[Directive] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    references: Dict[str, Citation] = field(default_factory=dict)
    publications: List[Citation] = field(default_factory=list)
    resume_url: Optional[str] = None

    @property
    def github_username(self) -> Optional[str]:
        """Value of the first github contact, used as the viewer identity."""
        for contact in self.contacts:
            if contact.type == "github":
                return contact.value
        return None

    @classmethod
    def from_dict(cls, data: Any) -> "Person":
        """
        Build a person from the decoded YAML mapping.

        Raises:
            InputError: If the structure is malformed
            ConfigError: If a directive value or date range is malformed
        """
        if not isinstance(data, dict):
            raise InputError("Person record must be a mapping at the top level")

        contacts = []
        for i, contact in enumerate(_list_of(data, "contacts", required=True)):
            location = f"contacts[{i}]"
            contacts.append(
                Contact(
                    type=str(_require(contact, "type", location)),
                    value=str(_require(contact, "value", location)),
                )
            )

        skills = []
        for i, skill in enumerate(_list_of(data, "skills")):
            skills.append(
                Skill(
                    category=str(_require(skill, "category", f"skills[{i}]")),
                    description=skill.get("description"),
                )
            )

        references = data.get("references") or {}
        if not isinstance(references, dict):
            raise InputError("Expected a mapping of reference keys", field="references")

        return cls(
            name=str(_require(data, "name", "name")),
            resume_url=data.get("resume_url"),
            contacts=contacts,
            educations=[
                Education.from_dict(entry, f"educations[{i}]")
                for i, entry in enumerate(_list_of(data, "educations", required=True))
            ],
            experiences=[
                Experience.from_dict(entry, f"experiences[{i}]")
                for i, entry in enumerate(_list_of(data, "experiences", required=True))
            ],
            projects=[parse_directive(entry) for entry in _list_of(data, "projects", required=True)],
            skills=skills,
            references={
                str(key): parse_citation(value, f"references.{key}") for key, value in references.items()
            },
            publications=[
                parse_citation(value, f"publications[{i}]")
                for i, value in enumerate(_list_of(data, "publications"))
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the input schema."""
        result: Dict[str, Any] = {"name": self.name}
        _optional(result, "resume_url", self.resume_url)
        result["contacts"] = [contact.to_dict() for contact in self.contacts]
        result["educations"] = [education.to_dict() for education in self.educations]
        result["experiences"] = [experience.to_dict() for experience in self.experiences]
        result["projects"] = [directive.to_dict() for directive in self.projects]
        result["skills"] = [skill.to_dict() for skill in self.skills]
        result["references"] = {key: citation.to_data() for key, citation in self.references.items()}
        result["publications"] = [citation.to_data() for citation in self.publications]
        return result
