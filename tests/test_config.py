"""Unit tests for Config and related Pydantic models (nuigen.config).

Tests cover:
- GeminiConfig / PathsConfig defaults and validation
- Config flags, require_api_key
- save/load round trip (API key excluded)
- from_env, including .env loading and boolean flags
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from nuigen.config import Config, GeminiConfig, PathsConfig
from nuigen.errors import ConfigurationError

pytestmark = pytest.mark.unit

_ENV_VARS = [
    "GOOGLE_AI_API_KEY",
    "NUIGEN_MODEL",
    "NUIGEN_REFACTOR_MODEL",
    "NUIGEN_API_URL",
    "NUIGEN_TIMEOUT",
    "NUIGEN_DOCS_PATH",
    "NUIGEN_BASE_UI_DIR",
    "NUIGEN_BASE_ICONIFY_DIR",
    "NUIGEN_OUTPUT_NUI_DIR",
    "NUIGEN_DEBUG_PROMPTS_DIR",
    "NUIGEN_FULL_DOCS_CONTEXT",
    "NUIGEN_DEBUG_PROMPTS",
    "NUIGEN_SKIP_EXISTING",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove every recognised variable and run from an empty directory."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path


class TestGeminiConfig:
    def test_defaults(self):
        cfg = GeminiConfig()
        assert cfg.api_key == ""
        assert cfg.base_url == "https://generativelanguage.googleapis.com/v1beta"
        assert cfg.model == "gemini-2.5-pro-preview-05-06"
        assert cfg.refactor_model == "gemini-2.5-pro-exp-03-25"
        assert cfg.timeout == 300

    def test_timeout_below_minimum_rejected(self):
        with pytest.raises(ValidationError):
            GeminiConfig(timeout=5)

    def test_api_key_hidden_from_repr(self):
        assert "secret" not in repr(GeminiConfig(api_key="secret"))


class TestPathsConfig:
    def test_defaults(self):
        paths = PathsConfig()
        assert paths.docs_path == Path("gen/nuxt-ui-llms-full.txt")
        assert paths.base_ui_dir == Path("src/components/ui")
        assert paths.base_iconify_dir == Path("src/components/ui-iconify")
        assert paths.output_nui_dir == Path("src/components/nui")
        assert paths.debug_prompts_dir == Path("gen/debug_prompts")


class TestConfig:
    def test_default_flags(self):
        cfg = Config()
        assert cfg.use_full_documentation_context is False
        assert cfg.debug_prompt_to_file is True
        assert cfg.skip_existing_output is True

    def test_require_api_key_missing(self):
        with pytest.raises(ConfigurationError, match="GOOGLE_AI_API_KEY"):
            Config().require_api_key()

    def test_require_api_key_present(self):
        cfg = Config(gemini=GeminiConfig(api_key="abc"))
        assert cfg.require_api_key() == "abc"

    def test_save_and_load(self, tmp_path):
        cfg = Config(
            gemini=GeminiConfig(api_key="secret", model="gemini-x"),
            use_full_documentation_context=True,
        )
        path = cfg.save(tmp_path / "nested" / "config.json")
        assert path.exists()

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert "api_key" not in raw["gemini"]

        loaded = Config.load(path)
        assert loaded.gemini.model == "gemini-x"
        assert loaded.gemini.api_key == ""
        assert loaded.use_full_documentation_context is True


class TestFromEnv:
    def test_defaults_without_env(self, clean_env):
        cfg = Config.from_env()
        assert cfg.gemini.api_key == ""
        assert cfg.paths == PathsConfig()
        assert cfg.debug_prompt_to_file is True

    def test_reads_variables(self, clean_env, monkeypatch):
        monkeypatch.setenv("GOOGLE_AI_API_KEY", "key-1")
        monkeypatch.setenv("NUIGEN_MODEL", "gemini-a")
        monkeypatch.setenv("NUIGEN_REFACTOR_MODEL", "gemini-b")
        monkeypatch.setenv("NUIGEN_TIMEOUT", "60")
        monkeypatch.setenv("NUIGEN_DOCS_PATH", "/docs/full.txt")
        monkeypatch.setenv("NUIGEN_OUTPUT_NUI_DIR", "/out/nui")
        monkeypatch.setenv("NUIGEN_FULL_DOCS_CONTEXT", "true")
        monkeypatch.setenv("NUIGEN_DEBUG_PROMPTS", "0")
        monkeypatch.setenv("NUIGEN_SKIP_EXISTING", "no")

        cfg = Config.from_env()
        assert cfg.gemini.api_key == "key-1"
        assert cfg.gemini.model == "gemini-a"
        assert cfg.gemini.refactor_model == "gemini-b"
        assert cfg.gemini.timeout == 60
        assert cfg.paths.docs_path == Path("/docs/full.txt")
        assert cfg.paths.output_nui_dir == Path("/out/nui")
        assert cfg.paths.base_ui_dir == Path("src/components/ui")
        assert cfg.use_full_documentation_context is True
        assert cfg.debug_prompt_to_file is False
        assert cfg.skip_existing_output is False

    def test_loads_dotenv_file(self, clean_env, monkeypatch):
        (clean_env / ".env").write_text("GOOGLE_AI_API_KEY=from-dotenv\n", encoding="utf-8")
        with patch.dict("os.environ", {}, clear=False):
            cfg = Config.from_env()
            assert cfg.gemini.api_key == "from-dotenv"

    def test_environment_wins_over_dotenv(self, clean_env, monkeypatch):
        (clean_env / ".env").write_text("GOOGLE_AI_API_KEY=from-dotenv\n", encoding="utf-8")
        monkeypatch.setenv("GOOGLE_AI_API_KEY", "from-env")
        assert Config.from_env().gemini.api_key == "from-env"

    def test_invalid_flag_rejected(self, clean_env, monkeypatch):
        monkeypatch.setenv("NUIGEN_DEBUG_PROMPTS", "maybe")
        with pytest.raises(ConfigurationError, match="NUIGEN_DEBUG_PROMPTS"):
            Config.from_env()

    def test_invalid_timeout_rejected(self, clean_env, monkeypatch):
        monkeypatch.setenv("NUIGEN_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            Config.from_env()
