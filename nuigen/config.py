"""nui-gen configuration.

Centralised, typed configuration for the generation commands.  All settings
use Pydantic v2 models so they are validated at construction time and can be
serialised to/from JSON or read from environment variables (a ``.env`` file
in the working directory is honoured).

Behaviour flags that used to be edited in source live here and are passed
into the builders explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from nuigen.errors import ConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class GeminiConfig(BaseModel):
    """Configuration for the Google Generative Language API."""

    api_key: str = Field(default="", repr=False)
    base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    model: str = Field(
        default="gemini-2.5-pro-preview-05-06",
        description="Model used for NUI component generation",
    )
    refactor_model: str = Field(
        default="gemini-2.5-pro-exp-03-25",
        description="Model used for the Iconify refactor",
    )
    timeout: int = Field(default=300, ge=10, description="Per-request timeout in seconds")


class PathsConfig(BaseModel):
    """Input and output locations, relative to the working directory."""

    docs_path: Path = Field(default=Path("./gen/nuxt-ui-llms-full.txt"))
    base_ui_dir: Path = Field(default=Path("./src/components/ui"))
    base_iconify_dir: Path = Field(default=Path("./src/components/ui-iconify"))
    output_nui_dir: Path = Field(default=Path("./src/components/nui"))
    debug_prompts_dir: Path = Field(default=Path("./gen/debug_prompts"))


class Config(BaseModel):
    """Global nui-gen configuration.

    Instances are created once by the CLI (usually via :meth:`from_env`) and
    handed to ``NuiGenerator`` / ``IconifyRefactorer``.
    """

    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)

    # Feed the whole documentation file to the model instead of the
    # per-component section.
    use_full_documentation_context: bool = Field(default=False)
    # Save every rendered prompt under ``paths.debug_prompts_dir``.
    debug_prompt_to_file: bool = Field(default=True)
    # Iconify refactor: leave files that were already converted alone.
    skip_existing_output: bool = Field(default=True)

    def require_api_key(self) -> str:
        """Return the API key or raise ``ConfigurationError`` if it is unset."""
        if not self.gemini.api_key:
            raise ConfigurationError(
                "GOOGLE_AI_API_KEY is not set. Export it or add it to a .env file."
            )
        return self.gemini.api_key

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration (without the API key) to a JSON file."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            self.model_dump_json(indent=2, exclude={"gemini": {"api_key"}}),
            encoding="utf-8",
        )
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "Config":
        """Build a ``Config`` from environment variables.

        ``.env`` values are loaded first (without overriding variables that
        are already set).  Recognised variables (all optional):
            GOOGLE_AI_API_KEY, NUIGEN_MODEL, NUIGEN_REFACTOR_MODEL,
            NUIGEN_API_URL, NUIGEN_TIMEOUT, NUIGEN_DOCS_PATH,
            NUIGEN_BASE_UI_DIR, NUIGEN_BASE_ICONIFY_DIR, NUIGEN_OUTPUT_NUI_DIR,
            NUIGEN_DEBUG_PROMPTS_DIR, NUIGEN_FULL_DOCS_CONTEXT,
            NUIGEN_DEBUG_PROMPTS, NUIGEN_SKIP_EXISTING.
        """
        load_dotenv(dotenv_path or Path(".env"))

        gemini_kwargs: dict[str, Any] = {"api_key": os.environ.get("GOOGLE_AI_API_KEY", "")}
        if os.environ.get("NUIGEN_MODEL"):
            gemini_kwargs["model"] = os.environ["NUIGEN_MODEL"]
        if os.environ.get("NUIGEN_REFACTOR_MODEL"):
            gemini_kwargs["refactor_model"] = os.environ["NUIGEN_REFACTOR_MODEL"]
        if os.environ.get("NUIGEN_API_URL"):
            gemini_kwargs["base_url"] = os.environ["NUIGEN_API_URL"]
        if os.environ.get("NUIGEN_TIMEOUT"):
            gemini_kwargs["timeout"] = os.environ["NUIGEN_TIMEOUT"]

        path_vars = {
            "docs_path": "NUIGEN_DOCS_PATH",
            "base_ui_dir": "NUIGEN_BASE_UI_DIR",
            "base_iconify_dir": "NUIGEN_BASE_ICONIFY_DIR",
            "output_nui_dir": "NUIGEN_OUTPUT_NUI_DIR",
            "debug_prompts_dir": "NUIGEN_DEBUG_PROMPTS_DIR",
        }
        paths_kwargs: dict[str, Any] = {
            field: Path(os.environ[var]) for field, var in path_vars.items() if os.environ.get(var)
        }

        flag_kwargs: dict[str, Any] = {}
        for field, var in (
            ("use_full_documentation_context", "NUIGEN_FULL_DOCS_CONTEXT"),
            ("debug_prompt_to_file", "NUIGEN_DEBUG_PROMPTS"),
            ("skip_existing_output", "NUIGEN_SKIP_EXISTING"),
        ):
            value = _env_flag(var)
            if value is not None:
                flag_kwargs[field] = value

        try:
            return cls(
                gemini=GeminiConfig(**gemini_kwargs),
                paths=PathsConfig(**paths_kwargs),
                **flag_kwargs,
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration from environment: {exc}") from exc


def _env_flag(name: str) -> bool | None:
    """Parse a boolean environment variable; ``None`` when unset."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean (got {raw!r})")
