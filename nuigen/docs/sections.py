"""Top-level section extraction for flat documentation dumps.

Documentation such as ``nuxt-ui-llms-full.txt`` is one long text where each
component starts with a ``# Heading`` line.  These helpers slice out the text
belonging to a single heading: from the heading line (inclusive) up to the
next ``# `` heading line or the end of the document.  Only the ``# `` level is
recognised; ``## Sub`` headings stay inside their parent section.  Uses plain
substring search -- no markdown parser.
"""

from __future__ import annotations

from nuigen.errors import SectionNotFoundError
from nuigen.utils import print_warning

HEADING_MARKER = "# "
_NEXT_HEADING = "\n" + HEADING_MARKER


def _heading_ends_at(document: str, pos: int) -> bool:
    """True if the heading text ending at *pos* is followed by a line break or EOF.

    Trailing whitespace is not stripped: ``# Button  `` does not match ``Button``.
    """
    return (
        pos == len(document)
        or document.startswith("\n", pos)
        or document.startswith("\r\n", pos)
    )


def _find_heading(document: str, heading_text: str) -> int:
    """Return the offset of the ``# heading_text`` line, or ``-1``.

    A candidate only counts when the heading text is followed by a line
    break or the end of the document, so ``Button`` never matches
    ``# ButtonGroup``.
    """
    heading = HEADING_MARKER + heading_text

    # Headings after a line break win over one on the first line.
    pattern = "\n" + heading
    pos = document.find(pattern)
    while pos != -1:
        if _heading_ends_at(document, pos + len(pattern)):
            return pos + 1
        pos = document.find(pattern, pos + 1)

    if document.startswith(heading) and _heading_ends_at(document, len(heading)):
        return 0
    return -1


def extract_section(document: str, heading_text: str) -> str:
    """Extract the section that starts at the ``# heading_text`` line.

    Args:
        document: The full documentation text.
        heading_text: Exact, case-sensitive heading text (without ``# ``).

    Returns:
        The section text, starting at the ``#`` of the heading and ending just
        before the line break that precedes the next top-level heading (or at
        the end of the document).  Returns ``""`` and prints a warning when
        the heading is missing or *heading_text* is empty.
    """
    if not heading_text:
        print_warning("No section heading provided. Cannot extract specific section.")
        return ""

    start = _find_heading(document, heading_text)
    if start == -1:
        print_warning(
            f'Section heading "# {heading_text}" not found. Cannot extract specific section.'
        )
        return ""

    # Search past the heading text itself, otherwise its own marker matches.
    end = document.find(_NEXT_HEADING, start + len(HEADING_MARKER) + len(heading_text))
    if end == -1:
        return document[start:]
    return document[start:end]


def require_section(document: str, heading_text: str) -> str:
    """Strict variant of :func:`extract_section`.

    Raises:
        SectionNotFoundError: If the heading does not exist in *document*.
    """
    section = extract_section(document, heading_text)
    if not section:
        raise SectionNotFoundError(heading_text, available=list_headings(document))
    return section


def list_headings(document: str) -> list[str]:
    """Return the text of every top-level ``# `` heading, in document order."""
    headings: list[str] = []
    for line in document.splitlines():
        if line.startswith(HEADING_MARKER):
            title = line[len(HEADING_MARKER):].strip()
            if title:
                headings.append(title)
    return headings
