"""Shared pytest fixtures for the nui-gen test suite.

Provides reusable fixtures for:
- A sample flat documentation text
- A ``Config`` rooted in a temporary directory
- A deterministic stand-in for the generation service
- A small shadcn-vue / ui-iconify component tree
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel

from nuigen.config import Config, GeminiConfig, PathsConfig
from nuigen.errors import GenerationError
from nuigen.models import NuxtComponentFiles, RefactoredComponent


# ---------------------------------------------------------------------------
# Documentation
# ---------------------------------------------------------------------------

SAMPLE_DOCS = textwrap.dedent("""\
    # Introduction
    Nuxt UI is a component library.

    # Button
    Use the Button component to render a button.

    ## Loading
    Use the `loading` prop to show a loading icon.

    # ButtonGroup
    Group several buttons together.

    # Alert
    Display an alert element to draw attention.
    """)


@pytest.fixture
def sample_docs() -> str:
    """Flat documentation text with four top-level sections."""
    return SAMPLE_DOCS


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Temporary project root containing the docs file."""
    (tmp_path / "gen").mkdir()
    (tmp_path / "gen" / "nuxt-ui-llms-full.txt").write_text(SAMPLE_DOCS, encoding="utf-8")
    yield tmp_path


@pytest.fixture
def config(workspace: Path) -> Config:
    """Config with every path inside ``workspace``."""
    return Config(
        gemini=GeminiConfig(api_key="test-key"),
        paths=PathsConfig(
            docs_path=workspace / "gen" / "nuxt-ui-llms-full.txt",
            base_ui_dir=workspace / "src" / "components" / "ui",
            base_iconify_dir=workspace / "src" / "components" / "ui-iconify",
            output_nui_dir=workspace / "src" / "components" / "nui",
            debug_prompts_dir=workspace / "gen" / "debug_prompts",
        ),
    )


# ---------------------------------------------------------------------------
# Generation service stand-in
# ---------------------------------------------------------------------------

class FakeGenerator:
    """Deterministic ``ObjectGenerator`` that records every call.

    By default it answers ``NuxtComponentFiles`` with a Button component and
    ``RefactoredComponent`` with a marker that echoes the prompt length.
    ``fail_when`` makes calls whose prompt contains the given text raise
    ``GenerationError``.
    """

    def __init__(
        self,
        responses: dict[type[BaseModel], Callable[[str], dict[str, Any]]] | None = None,
        fail_when: str | None = None,
    ) -> None:
        self.calls: list[tuple[type[BaseModel], str, str | None]] = []
        self.responses = responses or {
            NuxtComponentFiles: lambda prompt: {
                "componentName": "Button.vue",
                "componentContent": "<template><UiIconifyButton /></template>",
                "indexTsContent": "export { default as Button } from './Button.vue'\n",
            },
            RefactoredComponent: lambda prompt: {
                "refactoredContent": "<template><Icon icon=\"lucide:check\" /></template>",
            },
        }
        self.fail_when = fail_when

    async def generate(self, schema, prompt, *, model=None):
        self.calls.append((schema, prompt, model))
        if self.fail_when is not None and self.fail_when in prompt:
            raise GenerationError("simulated failure", model=model or "")
        return schema.model_validate(self.responses[schema](prompt))


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def make_generator() -> Callable[..., FakeGenerator]:
    """Factory for ``FakeGenerator`` instances with custom behaviour."""
    return FakeGenerator


# ---------------------------------------------------------------------------
# Component trees
# ---------------------------------------------------------------------------

@pytest.fixture
def ui_tree(config: Config) -> Path:
    """A shadcn-vue ``ui`` directory with button and checkbox components."""
    root = config.paths.base_ui_dir
    button = root / "button"
    button.mkdir(parents=True)
    (button / "Button.vue").write_text(
        "<script setup>import { Loader2 } from 'lucide-vue-next'</script>\n", encoding="utf-8"
    )
    (button / "index.ts").write_text("export { default as Button } from './Button.vue'\n")
    (button / "README.md").write_text("notes\n")
    (button / "variants").mkdir()

    checkbox = root / "checkbox"
    checkbox.mkdir()
    (checkbox / "Checkbox.vue").write_text("<template><Check /></template>\n", encoding="utf-8")
    return root


@pytest.fixture
def iconify_base(config: Config) -> Path:
    """A ui-iconify Button component that NUI generation wraps."""
    button = config.paths.base_iconify_dir / "button"
    button.mkdir(parents=True)
    (button / "Button.vue").write_text("<template><button><slot /></button></template>\n")
    (button / "index.ts").write_text("export const buttonVariants = {}\n")
    return button


# ---------------------------------------------------------------------------
# httpx mocks
# ---------------------------------------------------------------------------

def make_gemini_payload(text: str, finish_reason: str = "STOP") -> dict[str, Any]:
    """Build a realistic ``generateContent`` response body."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": finish_reason,
                "index": 0,
            }
        ],
        "usageMetadata": {
            "promptTokenCount": 1200,
            "candidatesTokenCount": 340,
            "totalTokenCount": 1540,
        },
        "modelVersion": "gemini-2.5-pro-preview-05-06",
    }


@pytest.fixture
def gemini_response() -> Callable[..., MagicMock]:
    """Factory for mocked successful httpx responses."""
    def factory(text: str = "", payload: dict[str, Any] | None = None) -> MagicMock:
        response = MagicMock()
        response.status_code = 200
        response.json.return_value = payload if payload is not None else make_gemini_payload(text)
        response.raise_for_status = MagicMock()
        return response

    return factory
