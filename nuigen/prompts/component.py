"""Prompt builders for the generation commands.

Each builder gathers the context for one work item and renders the matching
template from ``templates/``.
"""

from __future__ import annotations

from nuigen.models import ComponentSpec
from nuigen.prompts.renderer import TemplateRenderer

NUI_TEMPLATE = "nui_component.txt.j2"
ICONIFY_TEMPLATE = "iconify_refactor.txt.j2"

FULL_DOCS_DESCRIPTION = "the full Nuxt UI documentation provided below"
SECTION_DOCS_DESCRIPTION = "the Nuxt UI component documentation section provided below"

_default_renderer: TemplateRenderer | None = None


def _renderer(renderer: TemplateRenderer | None) -> TemplateRenderer:
    global _default_renderer
    if renderer is not None:
        return renderer
    if _default_renderer is None:
        _default_renderer = TemplateRenderer()
    return _default_renderer


def build_nui_prompt(
    component: ComponentSpec,
    docs: str,
    *,
    full_docs: bool = False,
    base_component: str = "",
    base_index: str = "",
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the prompt that asks for a NUI wrapper (or from-scratch) component.

    Args:
        component: The component being generated.
        docs: Documentation text embedded as the primary source of truth.
        full_docs: Whether *docs* is the whole documentation file rather than
            the component's own section.
        base_component: Source of the ``ui-iconify`` component to wrap; empty
            switches the prompt to the from-scratch strategy.
        base_index: Source of the base component's ``index.ts``, if any.
            Ignored without *base_component*.
        renderer: Override the template renderer (tests).
    """
    context = {
        "component": component,
        "pascal": component.pascal_name,
        "vue_file": component.vue_file_name,
        "docs": docs,
        "doc_source_description": FULL_DOCS_DESCRIPTION if full_docs else SECTION_DOCS_DESCRIPTION,
        "base_component": base_component,
        "base_index": base_index if base_component else "",
    }
    return _renderer(renderer).render(NUI_TEMPLATE, context)


def build_iconify_prompt(
    original_content: str,
    file_name: str,
    *,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the prompt that asks for a Vue SFC rewritten with Iconify icons."""
    context = {"original_content": original_content, "file_name": file_name}
    return _renderer(renderer).render(ICONIFY_TEMPLATE, context)
