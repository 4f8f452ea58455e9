"""
vitae - résumé builder

Turns a declarative person record into an HTML résumé, enriched with GitHub
project metadata and bibliographic citations.

Architecture:
- Intake Context: Person record parsing, resolution pipeline, caching
- Projects Context: Directive interpretation, merge and sort of project records
- Citations Context: Concurrent fetching and formatting of URL, DOI and BibTeX citations
- Rendering Context: Two-pass HTML rendering with footnote-aware reference lists
"""

__version__ = "0.1.0"
