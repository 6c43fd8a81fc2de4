"""Exception hierarchy for nui-gen.

``ConfigurationError`` and ``SectionNotFoundError`` abort a run;
``GenerationError`` is raised per item and normally caught by the builders.
"""

from __future__ import annotations


class NuigenError(Exception):
    """Base class for all nui-gen errors."""


class ConfigurationError(NuigenError):
    """Raised when the run cannot start (missing docs, API key, output dir)."""


class SectionNotFoundError(NuigenError):
    """Raised by strict extraction when a documentation heading is missing."""

    def __init__(self, heading: str, available: list[str] | None = None) -> None:
        self.heading = heading
        self.available = available or []
        message = f'Section heading "# {heading}" not found in documentation.'
        close = [h for h in self.available if heading.lower() in h.lower()]
        if close:
            message += f" Similar headings: {', '.join(close[:5])}"
        super().__init__(message)


class GenerationError(NuigenError):
    """Raised when the generation service fails or returns an invalid object."""

    def __init__(self, message: str, model: str = "") -> None:
        self.model = model
        super().__init__(f"[{model}] {message}" if model else message)
