"""
Résumé renderer.

Loads the HTML template with Jinja2 and renders it once per call. Every call is
one render pass: it gets a fresh footnote table and returns the table's ordinals
alongside the HTML.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from vitae.contexts.intake.person_data_structure import Education, Experience, Skill
from vitae.contexts.projects.project_data_structures import Project
from vitae.contexts.rendering.filters import emph, language_stats, md
from vitae.contexts.rendering.footnotes import footnote_pass
from vitae.contexts.rendering.logger import _log_debug
from vitae.utils.exceptions import ConfigError

load_dotenv()
DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "template"
TEMPLATE_PATH = Path(os.getenv("VITAE_TEMPLATE_PATH", str(DEFAULT_TEMPLATE_PATH)))
TEMPLATE_NAME = "resume.html.jinja"


@dataclass
class ContactParams:
    value: str
    icon: Optional[str] = None
    link: Optional[str] = None


@dataclass
class ResumeParams:
    """Everything the template sees, apart from the per-pass footnote table."""

    name: str
    resume_url: Optional[str]
    contacts: List[ContactParams]
    educations: List[Education]
    experiences: List[Experience]
    projects: List[Project]
    references: List[Tuple[str, str]]
    publications: List[Tuple[str, Optional[int]]]
    skills: List[Skill] = field(default_factory=list)
    # Reference key -> superscript number; None numbers by first citation
    footnote_numbers: Optional[Dict[str, int]] = None

    def to_context(self) -> Dict[str, Any]:
        # Values stay dataclass instances; the template reads their attributes
        return {key: getattr(self, key) for key in self.__dataclass_fields__}


@dataclass
class RenderResult:
    """
    Attributes:
        html: Rendered document
        footnotes: Reference key -> ordinal of first citation in this pass
    """

    html: str
    footnotes: Dict[str, int]


class ResumeRenderer:
    """Renders ResumeParams through the résumé template."""

    def __init__(self, template_dir: Path = None, template_name: str = TEMPLATE_NAME):
        if template_dir is None:
            template_dir = TEMPLATE_PATH

        self.template_dir = template_dir
        self.template_name = template_name
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            # Catches silent failures
            undefined=StrictUndefined,
            # Citation and markdown output is already HTML
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters.update(md=md, language_stats=language_stats, emph=emph)
        self._template: Optional[Template] = None

    def get_template(self) -> Template:
        if self._template is None:
            try:
                self._template = self.env.get_template(self.template_name)
            except TemplateNotFound as e:
                raise ConfigError(
                    f"Template not found: {self.template_dir / self.template_name}"
                ) from e
        return self._template

    def render(self, params: ResumeParams) -> RenderResult:
        """Run one render pass."""
        template = self.get_template()
        with footnote_pass() as table:
            html = template.render(**params.to_context(), footnotes=table)
        footnotes = table.close()
        _log_debug(f"Render pass cited {len(footnotes)} references")
        return RenderResult(html=html, footnotes=footnotes)
