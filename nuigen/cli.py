"""Command-line entry point.

Usage::

    nuigen extract gen/nuxt-ui-llms-full.txt Button
    nuigen extract gen/nuxt-ui-llms-full.txt --list
    nuigen generate --components components.yaml
    nuigen iconify checkbox button --no-skip-existing

Settings come from the environment (and ``.env``); see ``Config.from_env``.
Flags given on the command line override them.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from nuigen.builder import IconifyRefactorer, NuiGenerator
from nuigen.config import Config
from nuigen.docs import extract_section, list_headings
from nuigen.errors import ConfigurationError, NuigenError
from nuigen.gemini_client import GeminiClient
from nuigen.models import (
    DEFAULT_COMPONENTS,
    DEFAULT_ICONIFY_COMPONENTS,
    ComponentSpec,
    ItemStatus,
)
from nuigen.utils import console, print_error, print_success


def load_components(path: str | Path) -> list[ComponentSpec]:
    """Load component definitions from a YAML file.

    The file holds either a list of component mappings or a mapping with a
    ``components`` key containing that list.

    Raises:
        ConfigurationError: The file is missing, is not valid YAML, or an
            entry does not validate.
    """
    file_path = Path(path)
    try:
        raw: Any = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read components file {file_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {exc}") from exc

    if isinstance(raw, dict):
        raw = raw.get("components", [])
    if not isinstance(raw, list):
        raise ConfigurationError(f"{file_path} must contain a list of components")

    try:
        return [ComponentSpec.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid component definition in {file_path}: {exc}") from exc


def _client(config: Config) -> GeminiClient:
    return GeminiClient(
        api_key=config.require_api_key(),
        base_url=config.gemini.base_url,
        model=config.gemini.model,
        timeout=config.gemini.timeout,
    )


# ---------------------------------------------------------------------------
# Sub-commands
# ---------------------------------------------------------------------------


def cmd_extract(args: argparse.Namespace) -> int:
    docs_path = Path(args.docs)
    try:
        document = docs_path.read_text(encoding="utf-8")
    except OSError as exc:
        print_error(f"Cannot read documentation file {docs_path}: {exc}")
        return 1

    if args.list:
        for heading in list_headings(document):
            console.print(heading, markup=False, highlight=False)
        return 0

    if not args.heading:
        print_error("A heading is required unless --list is given.")
        return 1

    section = extract_section(document, args.heading)
    if not section:
        return 1
    console.print(section, markup=False, highlight=False)
    return 0


def cmd_generate(args: argparse.Namespace, config: Config) -> int:
    if args.full_docs:
        config.use_full_documentation_context = True
    if args.no_debug_prompts:
        config.debug_prompt_to_file = False
    if args.docs:
        config.paths.docs_path = Path(args.docs)

    components = load_components(args.components) if args.components else DEFAULT_COMPONENTS
    generator = NuiGenerator(config, _client(config))
    results = asyncio.run(generator.run(components))
    return 1 if any(r.status is ItemStatus.FAILED for r in results) else 0


def cmd_iconify(args: argparse.Namespace, config: Config) -> int:
    if args.no_skip_existing:
        config.skip_existing_output = False

    names = args.components or DEFAULT_ICONIFY_COMPONENTS
    refactorer = IconifyRefactorer(config, _client(config))
    results = asyncio.run(refactorer.run(names))
    return 1 if any(r.status is ItemStatus.FAILED for r in results) else 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nuigen",
        description="Generate Nuxt-UI-style Vue components with Gemini",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  nuigen extract gen/nuxt-ui-llms-full.txt Button\n"
            "  nuigen generate --components components.yaml\n"
            "  nuigen iconify checkbox button\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="Print one '# Heading' section of a docs file")
    extract.add_argument("docs", help="Path to the documentation text file")
    extract.add_argument("heading", nargs="?", help="Heading text, without the leading '# '")
    extract.add_argument("--list", action="store_true", help="List all top-level headings")

    generate = sub.add_parser("generate", help="Generate NUI components")
    generate.add_argument("--components", help="YAML file with component definitions")
    generate.add_argument("--docs", help="Override the documentation file path")
    generate.add_argument(
        "--full-docs",
        action="store_true",
        help="Send the full documentation instead of the component's section",
    )
    generate.add_argument(
        "--no-debug-prompts", action="store_true", help="Do not save rendered prompts"
    )

    iconify = sub.add_parser("iconify", help="Refactor base components to Iconify icons")
    iconify.add_argument("components", nargs="*", help="Component folder names")
    iconify.add_argument(
        "--no-skip-existing",
        action="store_true",
        help="Regenerate files that already exist in the output directory",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``nuigen`` / ``python -m nuigen``."""
    args = build_parser().parse_args(argv)

    if args.command == "extract":
        return cmd_extract(args)

    try:
        config = Config.from_env()
        if args.command == "generate":
            code = cmd_generate(args, config)
        else:
            code = cmd_iconify(args, config)
    except NuigenError as exc:
        print_error(f"Error: {exc}")
        return 1

    if code == 0:
        print_success("Done.")
    else:
        print_error("Finished with errors.")
    return code


if __name__ == "__main__":
    sys.exit(main())
