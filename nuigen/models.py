"""Pydantic v2 models for nui-gen.

Defines the component definitions fed into the builders, the structured
output schemas sent to the generation service, and the per-item result
records reported at the end of a run.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from nuigen.utils import pascal_case


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ItemStatus(str, Enum):
    """Outcome of processing one component or file."""
    GENERATED = "generated"
    TRANSFORMED = "transformed"
    COPIED = "copied"
    SKIPPED = "skipped"
    FAILED = "failed"


class ActionKind(str, Enum):
    """What the Iconify refactor does with a source entry."""
    TRANSFORM = "transform"
    COPY = "copy"
    SKIP = "skip"


# ---------------------------------------------------------------------------
# Component definitions
# ---------------------------------------------------------------------------

class ComponentSpec(BaseModel):
    """A NUI component to generate."""
    name: str = Field(..., min_length=1, description="Folder name, e.g. 'button'")
    nuxt_ui_docs_url: str = Field(
        default="", description="Nuxt UI docs page, used as a secondary reference"
    )
    doc_section_heading: str = Field(
        default="", description="Heading of the component's section in the full docs"
    )
    features_to_implement: list[str] = Field(
        default_factory=list,
        description="Restrict generation to these features; empty means implement everything",
    )

    @property
    def pascal_name(self) -> str:
        """``button-group`` -> ``ButtonGroup``."""
        return pascal_case(self.name)

    @property
    def vue_file_name(self) -> str:
        return f"{self.pascal_name}.vue"

    @property
    def section_heading(self) -> str:
        """The docs heading to extract, defaulting to the PascalCase name."""
        return self.doc_section_heading or self.pascal_name

    @property
    def docs_url(self) -> str:
        return self.nuxt_ui_docs_url or f"https://ui.nuxt.com/components/{self.name}"


DEFAULT_COMPONENTS: list[ComponentSpec] = [
    ComponentSpec(
        name="button",
        nuxt_ui_docs_url="https://ui.nuxt.com/components/button",
        doc_section_heading="Button",
        features_to_implement=[
            "Loading state (including `loading` and `loading-auto` props, and "
            "`loading-icon` customization as described in Nuxt UI docs)",
        ],
    ),
]

DEFAULT_ICONIFY_COMPONENTS: list[str] = ["checkbox", "button"]


# ---------------------------------------------------------------------------
# Structured output schemas
# ---------------------------------------------------------------------------

class NuxtComponentFiles(BaseModel):
    """Generated files for one NUI component."""
    model_config = ConfigDict(populate_by_name=True)

    component_name: str = Field(
        ...,
        alias="componentName",
        description="The name of the Vue component, e.g., 'Button.vue' or 'Alert.vue'",
    )
    component_content: str = Field(
        ...,
        alias="componentContent",
        description="The full Vue.js SFC code for the component.",
    )
    index_ts_content: str = Field(
        ...,
        alias="indexTsContent",
        description="The content for the index.ts file, including exports or variants.",
    )


class RefactoredComponent(BaseModel):
    """A Vue SFC rewritten to use Iconify icons."""
    model_config = ConfigDict(populate_by_name=True)

    refactored_content: str = Field(
        ...,
        alias="refactoredContent",
        description="The refactored Vue component content, using Iconify for icons.",
    )


# ---------------------------------------------------------------------------
# Run results
# ---------------------------------------------------------------------------

class ComponentResult(BaseModel):
    """Outcome of generating one NUI component."""
    name: str
    status: ItemStatus
    files: list[Path] = Field(default_factory=list)
    prompt_path: Optional[Path] = None
    error: Optional[str] = None


class FileAction(BaseModel):
    """One planned Iconify refactor step for a single source entry."""
    kind: ActionKind
    source: Path
    target: Path
    reason: str = ""


class FileResult(BaseModel):
    """Outcome of applying a ``FileAction``."""
    source: Path
    target: Path
    status: ItemStatus
    error: Optional[str] = None
