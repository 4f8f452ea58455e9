"""
Intake Context

Responsibilities:
- Parses the person YAML record
- Orchestrates project and citation resolution
- Reads and writes the resolved-person cache

Owns: Person record, resolution pipeline
Never: Renders HTML
"""

from vitae.contexts.intake.person_data_structure import (
    Contact,
    DateRange,
    Degree,
    Education,
    Experience,
    Person,
    Skill,
)
from vitae.contexts.intake.pipeline import build_person, parse_person_yaml, resolve_person

__all__ = [
    "Person",
    "Contact",
    "DateRange",
    "Degree",
    "Education",
    "Experience",
    "Skill",
    "build_person",
    "parse_person_yaml",
    "resolve_person",
]
