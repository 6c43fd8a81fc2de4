"""NUI component generation.

For every configured component:
1. Take its section out of the full Nuxt UI docs (or use the whole file).
2. Read the ``ui-iconify`` base component and its ``index.ts`` if present.
3. Render the generation prompt, optionally saving a copy for debugging.
4. Ask the generation service for ``NuxtComponentFiles``.
5. Write ``<Name>.vue`` and ``index.ts`` into ``<output_nui_dir>/<name>/``.

Components are processed one after another.  A missing docs file or output
directory aborts the run, and so does a missing documentation section
(strict extraction).  Any other error is reported and the run moves on to
the next component.
"""

from __future__ import annotations

import time
from pathlib import Path

from rich.panel import Panel

from nuigen.config import Config
from nuigen.docs import require_section
from nuigen.errors import ConfigurationError, GenerationError
from nuigen.gemini_client import ObjectGenerator
from nuigen.models import ComponentResult, ComponentSpec, ItemStatus, NuxtComponentFiles
from nuigen.prompts import build_nui_prompt
from nuigen.utils import (
    console,
    ensure_dir,
    format_duration,
    print_error,
    print_info,
    print_item_header,
    print_success,
    print_summary_table,
    print_warning,
    read_text,
    write_text,
)


class NuiGenerator:
    """Generates NUI wrapper components with a structured-output model.

    Attributes:
        config: Paths, model names, and behaviour flags.
        generator: The generation service (``GeminiClient`` in production).
    """

    def __init__(self, config: Config, generator: ObjectGenerator) -> None:
        self.config = config
        self.generator = generator

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self, components: list[ComponentSpec]) -> list[ComponentResult]:
        """Generate every component in *components*, in order.

        Raises:
            ConfigurationError: The docs file cannot be read or the output
                directory cannot be created.
            SectionNotFoundError: A component's documentation section is
                missing and full-docs mode is off.
        """
        started = time.monotonic()
        paths = self.config.paths
        console.print(
            Panel(
                f"[bold bright_cyan]NUI component generation[/bold bright_cyan]\n"
                f"Docs       : {paths.docs_path}\n"
                f"Output     : {paths.output_nui_dir}\n"
                f"Components : {', '.join(c.name for c in components) or '(none)'}\n"
                f"Full docs  : {self.config.use_full_documentation_context}",
                title="[bold]Start[/bold]",
                border_style="bright_cyan",
            )
        )

        full_docs = await self._load_docs()

        try:
            ensure_dir(paths.output_nui_dir)
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot create output directory {paths.output_nui_dir}: {exc}"
            ) from exc
        print_info(f"Ensured base output directory exists: {paths.output_nui_dir}")

        results: list[ComponentResult] = []
        for component in components:
            print_item_header("Component", component.name)
            docs = self._docs_for(component, full_docs)
            results.append(await self.generate_component(component, docs))

        print_summary_table(
            [
                (r.name, r.status.value, r.error or ", ".join(str(f) for f in r.files))
                for r in results
            ],
            title="NUI generation",
        )
        print_info(f"Finished in {format_duration(time.monotonic() - started)}")
        return results

    async def _load_docs(self) -> str:
        docs_path = self.config.paths.docs_path
        try:
            content = await read_text(docs_path)
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read Nuxt UI documentation at {docs_path}: {exc}"
            ) from exc
        print_success(f"Read full Nuxt UI documentation from: {docs_path}")
        return content

    def _docs_for(self, component: ComponentSpec, full_docs: str) -> str:
        if self.config.use_full_documentation_context:
            return full_docs
        print_info(f'Extracting section "{component.section_heading}" from full docs.')
        section = require_section(full_docs, component.section_heading)
        print_success(f'Extracted section for "{component.section_heading}".')
        return section

    # ------------------------------------------------------------------
    # Single component
    # ------------------------------------------------------------------

    async def generate_component(self, component: ComponentSpec, docs: str) -> ComponentResult:
        """Generate one component from already-selected documentation text.

        Never raises for I/O or generation failures; they are returned as a
        ``FAILED`` result.
        """
        try:
            return await self._generate_component(component, docs)
        except (OSError, GenerationError) as exc:
            print_error(f"Error processing component {component.name}: {exc}")
            return ComponentResult(name=component.name, status=ItemStatus.FAILED, error=str(exc))

    async def _generate_component(self, component: ComponentSpec, docs: str) -> ComponentResult:
        output_dir = ensure_dir(self.config.paths.output_nui_dir / component.name)
        print_info(f"Ensured output directory: {output_dir}")

        base_component, base_index = await self._read_base_component(component)
        prompt = build_nui_prompt(
            component,
            docs,
            full_docs=self.config.use_full_documentation_context,
            base_component=base_component,
            base_index=base_index,
        )

        prompt_path = None
        if self.config.debug_prompt_to_file:
            prompt_path = await self._save_debug_prompt(component, prompt)

        print_info(f"Generating component files for {component.name} using AI...")
        files = await self.generator.generate(
            NuxtComponentFiles, prompt, model=self.config.gemini.model
        )

        if files.component_name != component.vue_file_name:
            print_warning(
                f"AI suggested component name '{files.component_name}' differs from "
                f"expected '{component.vue_file_name}'. Using expected name."
            )

        vue_path = await write_text(output_dir / component.vue_file_name, files.component_content)
        print_success(f"Vue component saved to: {vue_path}")
        index_path = await write_text(output_dir / "index.ts", files.index_ts_content)
        print_success(f"index.ts saved to: {index_path}")

        return ComponentResult(
            name=component.name,
            status=ItemStatus.GENERATED,
            files=[vue_path, index_path],
            prompt_path=prompt_path,
        )

    async def _read_base_component(self, component: ComponentSpec) -> tuple[str, str]:
        """Return ``(vue_source, index_ts_source)`` of the base component.

        Both are optional; a missing file yields an empty string.  The
        ``index.ts`` is only looked up when the ``.vue`` file exists.
        """
        base_dir = self.config.paths.base_iconify_dir / component.name
        vue_path = base_dir / component.vue_file_name
        try:
            vue_source = await read_text(vue_path)
        except OSError:
            print_info(
                f"Optional: Could not read existing ui-iconify component at {vue_path}. "
                "Proceeding without it."
            )
            return "", ""
        print_info(f"Read existing ui-iconify component: {vue_path}")

        index_path = base_dir / "index.ts"
        try:
            index_source = await read_text(index_path)
        except OSError:
            print_info(
                f"Optional: Could not read existing ui-iconify index.ts at {index_path}. "
                "Proceeding without it."
            )
            return vue_source, ""
        print_info(f"Read existing ui-iconify index.ts: {index_path}")
        return vue_source, index_source

    async def _save_debug_prompt(self, component: ComponentSpec, prompt: str) -> Path | None:
        """Write the prompt to the debug directory; failures are only reported."""
        path = self.config.paths.debug_prompts_dir / f"prompt-{component.name}.txt"
        try:
            await write_text(path, prompt)
        except OSError as exc:
            print_error(f"DEBUG: Error saving prompt for {component.name}: {exc}")
            return None
        print_info(f"DEBUG: Prompt for {component.name} saved to: {path}")
        return path
