"""Iconify refactor of the base shadcn-vue components.

Mirrors ``<base_ui_dir>/<component>/`` into ``<base_iconify_dir>/<component>/``:

* ``.vue`` files are rewritten by the generation service to use Iconify
  icons (``TRANSFORM``);
* ``.ts`` files are copied unchanged (``COPY``);
* directories, files with other extensions and, when ``skip_existing_output``
  is on, entries whose output already exists are left alone (``SKIP``).

Planning is pure file-system inspection, so the traversal policy can be
checked without touching the generation service.  Actions are applied one at
a time; a failing entry is reported and the run continues.
"""

from __future__ import annotations

from pathlib import Path

from rich.panel import Panel

from nuigen.config import Config
from nuigen.errors import ConfigurationError, GenerationError
from nuigen.gemini_client import ObjectGenerator
from nuigen.models import ActionKind, FileAction, FileResult, ItemStatus, RefactoredComponent
from nuigen.prompts import build_iconify_prompt
from nuigen.utils import (
    console,
    copy_file,
    ensure_dir,
    print_error,
    print_info,
    print_item_header,
    print_success,
    print_summary_table,
    read_text,
    write_text,
)

_SUFFIX_ACTIONS: dict[str, ActionKind] = {
    ".vue": ActionKind.TRANSFORM,
    ".ts": ActionKind.COPY,
}


class IconifyRefactorer:
    """Plans and applies the Iconify refactor for a set of components."""

    def __init__(self, config: Config, generator: ObjectGenerator) -> None:
        self.config = config
        self.generator = generator

    @property
    def source_root(self) -> Path:
        return self.config.paths.base_ui_dir

    @property
    def output_root(self) -> Path:
        return self.config.paths.base_iconify_dir

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def classify(self, entry: Path) -> FileAction:
        """Decide what to do with a single entry of a component directory."""
        target = self.output_root / entry.relative_to(self.source_root)

        if not entry.is_file():
            return FileAction(kind=ActionKind.SKIP, source=entry, target=target, reason="not a file")
        if self.config.skip_existing_output and target.exists():
            return FileAction(
                kind=ActionKind.SKIP, source=entry, target=target, reason="output already exists"
            )
        kind = _SUFFIX_ACTIONS.get(entry.suffix)
        if kind is None:
            return FileAction(
                kind=ActionKind.SKIP, source=entry, target=target, reason="unsupported extension"
            )
        return FileAction(kind=kind, source=entry, target=target)

    def plan(self, component_names: list[str]) -> list[FileAction]:
        """Enumerate and classify the entries of every component directory.

        Unreadable or missing component directories are reported and
        contribute no actions.
        """
        actions: list[FileAction] = []
        for name in component_names:
            component_dir = self.source_root / name
            try:
                entries = sorted(component_dir.iterdir())
            except OSError as exc:
                print_error(f"Error reading component directory {component_dir}: {exc}")
                continue
            actions.extend(self.classify(entry) for entry in entries)
        return actions

    # ------------------------------------------------------------------
    # Applying
    # ------------------------------------------------------------------

    async def apply(self, action: FileAction) -> FileResult:
        """Carry out one planned action.

        Raises:
            OSError: Reading, writing, or copying failed.
            GenerationError: The refactor request failed.
        """
        if action.kind is ActionKind.SKIP:
            print_info(f"Skipping {action.source} ({action.reason})")
            return FileResult(source=action.source, target=action.target, status=ItemStatus.SKIPPED)

        if action.kind is ActionKind.COPY:
            await copy_file(action.source, action.target)
            print_success(f"Copied TS file to: {action.target}")
            return FileResult(source=action.source, target=action.target, status=ItemStatus.COPIED)

        original = await read_text(action.source)
        print_info(f"Generating refactored component for: {action.source}")
        prompt = build_iconify_prompt(original, action.source.name)
        refactored = await self.generator.generate(
            RefactoredComponent, prompt, model=self.config.gemini.refactor_model
        )
        await write_text(action.target, refactored.refactored_content)
        print_success(f"Refactored component saved to: {action.target}")
        return FileResult(
            source=action.source, target=action.target, status=ItemStatus.TRANSFORMED
        )

    async def run(self, component_names: list[str]) -> list[FileResult]:
        """Plan and apply the refactor for *component_names*, in order.

        Raises:
            ConfigurationError: The output directory cannot be created.
        """
        console.print(
            Panel(
                f"[bold bright_cyan]Iconify refactor[/bold bright_cyan]\n"
                f"Source     : {self.source_root}\n"
                f"Output     : {self.output_root}\n"
                f"Components : {', '.join(component_names) or '(none)'}\n"
                f"Skip exist : {self.config.skip_existing_output}",
                title="[bold]Start[/bold]",
                border_style="bright_cyan",
            )
        )
        try:
            ensure_dir(self.output_root)
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot create output directory {self.output_root}: {exc}"
            ) from exc

        results: list[FileResult] = []
        for name in component_names:
            print_item_header("Component", name)
            for action in self.plan([name]):
                try:
                    results.append(await self.apply(action))
                except (OSError, GenerationError) as exc:
                    print_error(f"Error processing entry {action.source}: {exc}")
                    results.append(
                        FileResult(
                            source=action.source,
                            target=action.target,
                            status=ItemStatus.FAILED,
                            error=str(exc),
                        )
                    )

        print_summary_table(
            [(str(r.source), r.status.value, r.error or str(r.target)) for r in results],
            title="Iconify refactor",
        )
        return results
