from __future__ import annotations

import pytest

from janus_orchestrator.config import Settings, load_settings


def test_from_env_reads_gates_and_defaults() -> None:
    settings = Settings.from_env(
        {
            "OPENAI_API_KEY": "sk-test",
            "ANTHROPIC_API_KEY": "   ",
            "CLAUDE_FLOW_URL": "http://planner.local/plan",
        }
    )

    assert settings.openai_api_key == "sk-test"
    assert settings.anthropic_api_key is None
    assert settings.claude_flow_url == "http://planner.local/plan"
    assert settings.claude_flow_cmd is None
    assert settings.codex_model == "gpt-4.1-mini"
    assert settings.http_timeout == 120.0
    assert settings.cli_timeout is None
    assert settings.db_path == "janus.db"


def test_from_env_parses_numbers() -> None:
    settings = Settings.from_env({"JANUS_CLAUDE_MAX_TOKENS": "512", "JANUS_CLI_TIMEOUT": "2.5"})
    assert settings.claude_max_tokens == 512
    assert settings.cli_timeout == 2.5


def test_from_env_rejects_bad_numbers() -> None:
    with pytest.raises(ValueError, match="JANUS_HTTP_TIMEOUT"):
        Settings.from_env({"JANUS_HTTP_TIMEOUT": "soon"})


def test_yaml_file_overrides_environment(tmp_path) -> None:
    config = tmp_path / "janus.yaml"
    config.write_text("codex_model: gpt-4o\nclaude_flow_cmd: ./plan.sh\n", encoding="utf-8")

    settings = load_settings(config, {"JANUS_CODEX_MODEL": "gpt-4.1-mini", "OPENAI_API_KEY": "k"})

    assert settings.codex_model == "gpt-4o"
    assert settings.claude_flow_cmd == "./plan.sh"
    assert settings.openai_api_key == "k"


def test_empty_yaml_file_changes_nothing(tmp_path) -> None:
    config = tmp_path / "janus.yaml"
    config.write_text("", encoding="utf-8")
    assert load_settings(config, {}) == Settings()


def test_unknown_yaml_keys_are_rejected(tmp_path) -> None:
    config = tmp_path / "janus.yaml"
    config.write_text("codex_modle: gpt-4o\n", encoding="utf-8")
    with pytest.raises(ValueError, match="codex_modle"):
        load_settings(config, {})


def test_yaml_must_be_a_mapping(tmp_path) -> None:
    config = tmp_path / "janus.yaml"
    config.write_text("- one\n- two\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_settings(config, {})


def test_yaml_numbers_are_converted(tmp_path) -> None:
    config = tmp_path / "janus.yaml"
    config.write_text("http_timeout: 30\ncli_timeout: '2.5'\nclaude_max_tokens: 512\n", encoding="utf-8")

    settings = load_settings(config, {})

    assert settings.http_timeout == 30.0
    assert isinstance(settings.http_timeout, float)
    assert settings.cli_timeout == 2.5
    assert settings.claude_max_tokens == 512


@pytest.mark.parametrize(
    "line, message",
    [
        ("http_timeout: soon", "http_timeout must be a number"),
        ("claude_max_tokens: true", "claude_max_tokens must be a number"),
        ("codex_model: [gpt-4o]", "codex_model must be a string"),
        ("db_path:", "db_path cannot be empty"),
    ],
)
def test_bad_yaml_values_fail_at_load_time(tmp_path, line, message) -> None:
    config = tmp_path / "janus.yaml"
    config.write_text(line + "\n", encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        load_settings(config, {})


def test_optional_yaml_values_may_be_cleared(tmp_path) -> None:
    config = tmp_path / "janus.yaml"
    config.write_text("cli_timeout:\nclaude_flow_url:\n", encoding="utf-8")

    settings = load_settings(config, {"CLAUDE_FLOW_URL": "http://planner.local", "JANUS_CLI_TIMEOUT": "5"})

    assert settings.claude_flow_url is None
    assert settings.cli_timeout is None
