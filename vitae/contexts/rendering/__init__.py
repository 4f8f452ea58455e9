"""
Rendering Context

Responsibilities:
- Renders the résumé HTML template with Jinja2
- Tracks footnote citations per render pass
- Filters and orders references by first citation (two-pass render)

Owns: Template environment, filters, footnote tables
Never: Fetches anything over the network
"""

from vitae.contexts.rendering.footnotes import FootnoteUsageTable, footnote_pass
from vitae.contexts.rendering.reference_filter import build_params, filter_references, render_resume
from vitae.contexts.rendering.renderer import ContactParams, RenderResult, ResumeParams, ResumeRenderer

__all__ = [
    "FootnoteUsageTable",
    "footnote_pass",
    "build_params",
    "filter_references",
    "render_resume",
    "ContactParams",
    "RenderResult",
    "ResumeParams",
    "ResumeRenderer",
]
