"""
Footnote-Aware Reference Filter

Which references a résumé actually cites is only known after its markdown
has been rendered, so the document is rendered twice:

1. The first pass renders with every reference and records, per key, the
   order of first citation.
2. The second pass keeps only cited references, ordered by first citation.

Publications are always listed, in declaration order.
"""

import time
from typing import Dict, List, Optional, Tuple

from vitae.contexts.citations.citation_data_structures import PlainText, PlainTextWithYear
from vitae.contexts.intake.person_data_structure import Person
from vitae.contexts.projects.project_data_structures import RawProject
from vitae.contexts.rendering.logger import log_render_result
from vitae.contexts.rendering.renderer import ContactParams, ResumeParams, ResumeRenderer

CONTACT_LINKS = {
    "github": "https://github.com/{value}",
    "email": "mailto:{value}",
    "blog": "{value}",
}

CONTACT_ICONS = {
    "github": "icons/github.svg",
    "email": "icons/mail.svg",
    "blog": "icons/blog.svg",
}


def filter_references(
    references: Dict[str, PlainText],
    footnotes: Optional[Dict[str, int]],
) -> List[Tuple[str, str]]:
    """
    Select the references to list.

    Args:
        references: Resolved references by key
        footnotes: First-citation ordinals from a previous pass, or None to keep all

    Returns:
        (key, text) pairs; cited ones only, by first citation, when footnotes are given
    """
    items = [(key, citation.text) for key, citation in references.items() if isinstance(citation, PlainText)]
    if footnotes is None:
        return items
    cited = [item for item in items if item[0] in footnotes]
    return sorted(cited, key=lambda item: footnotes[item[0]])


def build_params(person: Person, footnotes: Optional[Dict[str, int]] = None) -> ResumeParams:
    """Assemble template parameters from a resolved person."""
    contacts = [
        ContactParams(
            value=contact.value,
            link=CONTACT_LINKS[contact.type].format(value=contact.value) if contact.type in CONTACT_LINKS else None,
            icon=CONTACT_ICONS.get(contact.type),
        )
        for contact in person.contacts
    ]

    references = filter_references(person.references, footnotes)
    return ResumeParams(
        name=person.name,
        resume_url=person.resume_url,
        contacts=contacts,
        educations=person.educations,
        experiences=person.experiences,
        projects=[d.project for d in person.projects if isinstance(d, RawProject)],
        references=references,
        publications=[
            (citation.text, citation.year)
            for citation in person.publications
            if isinstance(citation, PlainTextWithYear)
        ],
        skills=person.skills,
        footnote_numbers=(
            {key: position for position, (key, _) in enumerate(references, start=1)}
            if footnotes is not None
            else None
        ),
    )


def render_resume(person: Person, renderer: ResumeRenderer = None) -> str:
    """
    Render a resolved person with the two-pass reference protocol.

    Returns:
        HTML of the second pass
    """
    renderer = renderer or ResumeRenderer()
    start = time.time()

    first_pass = renderer.render(build_params(person))
    params = build_params(person, first_pass.footnotes)
    second_pass = renderer.render(params)

    log_render_result(person.name, len(params.references), len(params.publications), time.time() - start)
    return second_pass.html
