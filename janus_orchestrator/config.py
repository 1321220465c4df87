from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from janus_orchestrator.utils.io import read_text

DEFAULT_DB_PATH = "janus.db"

NUMERIC_FIELDS = {
    "claude_max_tokens": int,
    "flow_max_tokens": int,
    "http_timeout": float,
    "cli_timeout": float,
}
OPTIONAL_FIELDS = frozenset(
    {"openai_api_key", "anthropic_api_key", "claude_flow_url", "claude_flow_cmd", "cli_timeout"}
)


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    claude_flow_url: Optional[str] = None
    claude_flow_cmd: Optional[str] = None
    codex_model: str = "gpt-4.1-mini"
    fallback_model: str = "gpt-4o-mini"
    claude_model: str = "claude-3-5-sonnet-20241022"
    claude_max_tokens: int = 2048
    flow_claude_model: str = "claude-3-5-sonnet-latest"
    flow_max_tokens: int = 800
    http_timeout: float = 120.0
    cli_timeout: Optional[float] = None
    db_path: str = DEFAULT_DB_PATH

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            openai_api_key=_optional(env, "OPENAI_API_KEY"),
            anthropic_api_key=_optional(env, "ANTHROPIC_API_KEY"),
            claude_flow_url=_optional(env, "CLAUDE_FLOW_URL"),
            claude_flow_cmd=_optional(env, "CLAUDE_FLOW_CMD"),
            codex_model=_optional(env, "JANUS_CODEX_MODEL") or defaults.codex_model,
            fallback_model=_optional(env, "JANUS_FALLBACK_MODEL") or defaults.fallback_model,
            claude_model=_optional(env, "JANUS_CLAUDE_MODEL") or defaults.claude_model,
            claude_max_tokens=_number(env, "JANUS_CLAUDE_MAX_TOKENS", int, defaults.claude_max_tokens),
            flow_claude_model=_optional(env, "JANUS_FLOW_CLAUDE_MODEL") or defaults.flow_claude_model,
            flow_max_tokens=_number(env, "JANUS_FLOW_MAX_TOKENS", int, defaults.flow_max_tokens),
            http_timeout=_number(env, "JANUS_HTTP_TIMEOUT", float, defaults.http_timeout),
            cli_timeout=_number(env, "JANUS_CLI_TIMEOUT", float, defaults.cli_timeout),
            db_path=_optional(env, "JANUS_DB_PATH") or defaults.db_path,
        )

    def with_overrides(self, overrides: Mapping[str, Any]) -> "Settings":
        known = {item.name for item in fields(self)}
        unknown = sorted(key for key in overrides if key not in known)
        if unknown:
            raise ValueError(f"Unknown settings keys: {', '.join(unknown)}")
        checked = {key: _check_override(key, value) for key, value in overrides.items()}
        return replace(self, **checked)


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    settings = Settings.from_env(environ)
    if config_path is None:
        return settings
    return settings.with_overrides(_read_config_file(config_path))


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        loaded = yaml.safe_load(read_text(path))
    except yaml.YAMLError as exc:
        raise ValueError(f"Config file {path} is not valid YAML: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {path} must contain a mapping.")
    return loaded


def _optional(env: Mapping[str, str], key: str) -> Optional[str]:
    value = env.get(key, "")
    value = value.strip() if value else ""
    return value or None


def _number(env: Mapping[str, str], key: str, cast: type, default: Any) -> Any:
    raw = _optional(env, key)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}.") from exc


def _check_override(key: str, value: Any) -> Any:
    if value is None:
        if key in OPTIONAL_FIELDS:
            return None
        raise ValueError(f"{key} cannot be empty.")

    cast = NUMERIC_FIELDS.get(key)
    if cast is not None:
        # bool is an int subclass; reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"{key} must be a number, got {value!r}.")
        try:
            return cast(value)
        except ValueError as exc:
            raise ValueError(f"{key} must be a number, got {value!r}.") from exc

    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}.")
    return value
