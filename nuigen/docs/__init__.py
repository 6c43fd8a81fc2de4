"""Documentation helpers.

Usage::

    from nuigen.docs import extract_section, require_section

    section = extract_section(full_docs, "Button")
    if not section:
        ...  # heading missing, a warning has already been printed
"""

from nuigen.docs.sections import (
    HEADING_MARKER,
    extract_section,
    list_headings,
    require_section,
)

__all__ = [
    "HEADING_MARKER",
    "extract_section",
    "list_headings",
    "require_section",
]
