"""Prompt templates and builders.

Usage::

    from nuigen.prompts import build_nui_prompt

    prompt = build_nui_prompt(component, section, base_component=vue_source)
"""

from nuigen.prompts.component import build_iconify_prompt, build_nui_prompt
from nuigen.prompts.renderer import TemplateRenderer

__all__ = [
    "TemplateRenderer",
    "build_iconify_prompt",
    "build_nui_prompt",
]
