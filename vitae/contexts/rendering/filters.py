"""
Jinja2 filters used by the résumé template.

- md: markdown to HTML, numbering `[^key]` footnote references as it goes
- language_stats: language bar and legend for a project
- emph: underline every occurrence of a pattern
"""

import math
import xml.etree.ElementTree as etree
from typing import Dict, List, Optional

from jinja2 import pass_context
from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor

from vitae.contexts.projects.project_data_structures import LanguageStat, to_percentage
from vitae.contexts.rendering.footnotes import FootnoteUsageTable

FOOTNOTE_REFERENCE_RE = r"\[\^([^\]\s]+)\]"

# Languages are listed until their cumulative share passes this percentage
LANGUAGE_DISPLAY_THRESHOLD = 95.0


class FootnoteReferenceProcessor(InlineProcessor):
    """
    Replaces `[^key]` with a numbered superscript link and records the key.

    Without `numbers` the superscript is the first-citation ordinal + 1. With
    `numbers` (key -> position in the listed references) keys missing from it
    are cited but not listed, and their marker is removed.
    """

    def __init__(self, pattern: str, table: FootnoteUsageTable, numbers: Optional[Dict[str, int]] = None):
        super().__init__(pattern)
        self.table = table
        self.numbers = numbers

    def handleMatch(self, m, data):
        key = m.group(1)
        ordinal = self.table.record(key)
        if self.numbers is None:
            number = ordinal + 1
        elif key in self.numbers:
            number = self.numbers[key]
        else:
            return "", m.start(0), m.end(0)

        sup = etree.Element("sup")
        sup.set("class", "footnote-reference")
        link = etree.SubElement(sup, "a")
        link.set("href", f"#{key}")
        link.text = str(number)
        return sup, m.start(0), m.end(0)


class FootnoteReferenceExtension(Extension):
    def __init__(self, table: FootnoteUsageTable, numbers: Optional[Dict[str, int]] = None, **kwargs):
        self.table = table
        self.numbers = numbers
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        # Ahead of the link/reference patterns, which would otherwise claim "[...]"
        md.inlinePatterns.register(
            FootnoteReferenceProcessor(FOOTNOTE_REFERENCE_RE, self.table, self.numbers), "footnote_reference", 175
        )


def render_markdown(text: str, table: FootnoteUsageTable, numbers: Optional[Dict[str, int]] = None) -> str:
    return Markdown(extensions=[FootnoteReferenceExtension(table, numbers)]).convert(text)


@pass_context
def md(context, text: Optional[str]) -> str:
    """Markdown filter; footnote references are recorded in the pass's `footnotes` table."""
    if not text:
        return ""
    return render_markdown(text, context["footnotes"], context["footnote_numbers"])


def _opacity(index: int) -> float:
    return math.exp(-0.6 * index)


def _format_number(value: float) -> str:
    return f"{value:g}"


def language_stats(languages: List[LanguageStat]) -> str:
    """
    Render a stacked language bar followed by a legend.

    Languages are shown until the running total passes 95%; whatever is
    left is drawn as "Other".
    """
    shown = list(languages)
    total = 0.0
    for i, stat in enumerate(languages):
        if total > LANGUAGE_DISPLAY_THRESHOLD:
            shown = list(languages[:i])
            break
        total = to_percentage(total + stat.percentage)

    other = to_percentage(100.0 - total) if total < 100.0 else 0.0

    parts = ['<div class="language_bar">']
    for i, stat in enumerate(shown):
        parts.append(
            f'<span style="width:{_format_number(stat.percentage)}%;opacity:{_opacity(i)}"></span>'
        )
    if other > 0:
        parts.append(
            f'<span style="width:{_format_number(other)}%;opacity:{_opacity(len(shown))};border-right:0px"></span>'
        )
    parts.append("</div>")

    parts.append('<div class="language_dots">')
    for i, stat in enumerate(shown):
        parts.append(
            f'<div class="language_dot"><span class="dot" style="opacity:{_opacity(i)}"></span>'
            f"<span>{stat.language}</span></div>"
        )
    if other > 0:
        parts.append(
            f'<div class="language_dot"><span class="dot" style="opacity:{_opacity(len(shown))}"></span>'
            "<span>Other</span></div>"
        )
    parts.append("</div>")
    return "".join(parts)


def emph(text: str, pattern: str) -> str:
    """Underline every occurrence of `pattern` in `text`."""
    if not pattern:
        return text
    return text.replace(pattern, f"<u>{pattern}</u>")
