from __future__ import annotations

import json
import os
from dataclasses import dataclass, field

from smartmask.core.masking import DEFAULT_MASKING_CHARACTER
from smartmask.core.sensitive import Sensitive

SENSITIVE_KEYS_ENV = "SENSITIVE_KEYS_JSON"


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_masking_character_env(name: str) -> str:
    value = os.getenv(name, "")
    if not value:
        return DEFAULT_MASKING_CHARACTER
    if len(value) != 1:
        raise ValueError(f"{name} must be a single character")
    return value


def _parse_directive(key: str, raw: object, character: str) -> Sensitive:
    label = f"{SENSITIVE_KEYS_ENV}[{key}]"
    if isinstance(raw, str):
        try:
            return Sensitive.from_name(key, raw, character)
        except ValueError as exc:
            raise ValueError(f"{label}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"{label} must be a pattern name or an object")
    mask = raw.get("mask")
    if not isinstance(mask, str) or not mask:
        raise ValueError(f"{label}.mask must be a non-empty string")
    directive_character = raw.get("character", character)
    if not isinstance(directive_character, str) or len(directive_character) != 1:
        raise ValueError(f"{label}.character must be a single character")
    directive = Sensitive(
        type=str(raw.get("type", key)), mask=mask, character=directive_character
    )
    try:
        directive.validate()
    except ValueError as exc:
        raise ValueError(f"{label}: invalid masking regex {mask}") from exc
    return directive


def _get_sensitive_keys_env(character: str) -> dict[str, Sensitive]:
    value = os.getenv(SENSITIVE_KEYS_ENV, "")
    if not value.strip():
        return {}
    try:
        payload = json.loads(value)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{SENSITIVE_KEYS_ENV} is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"{SENSITIVE_KEYS_ENV} must be a JSON object")
    return {
        str(key): _parse_directive(str(key), raw, character)
        for key, raw in payload.items()
        if str(key).strip()
    }


@dataclass(frozen=True)
class Settings:
    port: int
    log_level: str
    masking_character: str
    json_indent: int
    sensitive_keys: dict[str, Sensitive] = field(default_factory=dict)


def load_settings() -> Settings:
    masking_character = _get_masking_character_env("MASKING_CHARACTER")
    return Settings(
        port=_get_int_env("PORT", 8000),
        log_level=os.getenv("LOG_LEVEL", "info"),
        masking_character=masking_character,
        json_indent=_get_int_env("JSON_INDENT", 2),
        sensitive_keys=_get_sensitive_keys_env(masking_character),
    )
