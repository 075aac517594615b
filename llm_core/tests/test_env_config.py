from __future__ import annotations

import json

from llm_core.config import CONFIG_FILE_ENV, get_model, get_provider_config, reset_config_cache
from llm_core.config.defaults import GEMINI_DEFAULT_MODEL, OPENAI_DEFAULT_MODEL
from llm_core.config.env import (
    get_env_var_candidates,
    get_env_var_name,
    is_placeholder,
    resolve_provider_key,
)


def test_defaults_apply_without_env():
    assert get_model("openai") == OPENAI_DEFAULT_MODEL  # nosec B101 - pytest assert in tests
    assert get_model("gemini") == GEMINI_DEFAULT_MODEL  # nosec B101 - pytest assert in tests
    assert "api_key" not in get_provider_config("openai")  # nosec B101 - pytest assert in tests


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("OPENAI_MODEL", "gpt-env")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:8080/v1")
    cfg = get_provider_config("openai")
    assert cfg == {  # nosec B101 - pytest assert in tests
        "model": "gpt-env",
        "api_key": "sk-env",  # pragma: allowlist secret
        "base_url": "http://localhost:8080/v1",
    }


def test_gemini_accepts_google_api_key_alias(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
    assert get_provider_config("gemini")["api_key"] == "g-key"  # nosec B101 - pytest assert in tests
    monkeypatch.setenv("GEMINI_API_KEY", "primary")
    assert resolve_provider_key("gemini") == ("primary", "GEMINI_API_KEY")  # nosec B101 - canonical name wins


def test_overrides_win_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("OPENAI_MODEL", "gpt-env")
    cfg = get_provider_config("openai", {"model": "gpt-code", "base_url": None})
    assert cfg["model"] == "gpt-code"  # nosec B101 - pytest assert in tests
    assert "base_url" not in cfg  # nosec B101 - pytest assert in tests


def test_yaml_config_file_sits_between_defaults_and_env(monkeypatch, tmp_path):
    path = tmp_path / "llm.yaml"
    path.write_text("gemini:\n  model: gemini-file\n  base_url: https://proxy.local\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    reset_config_cache()
    assert get_provider_config("gemini")["model"] == "gemini-file"  # nosec B101 - pytest assert in tests
    monkeypatch.setenv("GEMINI_MODEL", "gemini-env")
    cfg = get_provider_config("gemini")
    assert cfg["model"] == "gemini-env"  # nosec B101 - pytest assert in tests
    assert cfg["base_url"] == "https://proxy.local"  # nosec B101 - pytest assert in tests


def test_json_config_file(monkeypatch, tmp_path):
    path = tmp_path / "llm.json"
    path.write_text(json.dumps({"openai": {"model": "gpt-json"}}), encoding="utf-8")
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    reset_config_cache()
    assert get_model("openai") == "gpt-json"  # nosec B101 - pytest assert in tests


def test_dotenv_replaces_placeholder_values(monkeypatch, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text(
        "# comment\nexport OPENAI_API_KEY='sk-from-dotenv'\nGEMINI_API_KEY=real-gemini\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    monkeypatch.setenv("OPENAI_API_KEY", "changeme")
    monkeypatch.setenv("GEMINI_API_KEY", "your-key-placeholder")
    reset_config_cache()
    assert get_provider_config("openai")["api_key"] == "sk-from-dotenv"  # nosec B101 - pytest assert in tests
    assert get_provider_config("gemini")["api_key"] == "real-gemini"  # nosec B101 - pytest assert in tests


def test_env_helpers():
    assert get_env_var_name("OpenAI") == "OPENAI_API_KEY"  # nosec B101 - pytest assert in tests
    assert get_env_var_name("unknown") is None  # nosec B101 - pytest assert in tests
    assert list(get_env_var_candidates("gemini")) == ["GEMINI_API_KEY", "GOOGLE_API_KEY"]  # nosec B101 - pytest assert in tests
    assert resolve_provider_key("openai") == (None, None)  # nosec B101 - pytest assert in tests
    assert is_placeholder("CHANGEME")  # nosec B101 - pytest assert in tests
    assert is_placeholder("test_abc")  # nosec B101 - pytest assert in tests
    assert not is_placeholder("sk-live")  # nosec B101 - pytest assert in tests
    assert not is_placeholder(None)  # nosec B101 - pytest assert in tests
