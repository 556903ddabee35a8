from __future__ import annotations

import json

import pytest

from smartmask.core.config import load_settings
from smartmask.core.sensitive import MASK_CREDIT_CARD_NUMBER, MASK_SSN


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "LOG_LEVEL", "MASKING_CHARACTER", "JSON_INDENT", "SENSITIVE_KEYS_JSON"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.port == 8000
    assert settings.log_level == "info"
    assert settings.masking_character == "X"
    assert settings.json_indent == 2
    assert settings.sensitive_keys == {}


def test_load_settings_falls_back_on_malformed_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "eighty")

    assert load_settings().port == 8000


def test_load_settings_parses_sensitive_keys_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MASKING_CHARACTER", "#")
    monkeypatch.setenv(
        "SENSITIVE_KEYS_JSON",
        json.dumps(
            {
                "ssn": "ssn",
                "card": {"mask": MASK_CREDIT_CARD_NUMBER, "character": "*", "type": "credit card"},
                "  ": "password",
            }
        ),
    )

    settings = load_settings()

    assert set(settings.sensitive_keys) == {"ssn", "card"}
    assert settings.sensitive_keys["ssn"].mask == MASK_SSN
    assert settings.sensitive_keys["ssn"].character == "#"
    assert settings.sensitive_keys["card"].type == "credit card"
    assert settings.sensitive_keys["card"].censor("1234-5678-9012-3456") == "1234-****-****-3456"


def test_load_settings_rejects_multi_character_mask(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MASKING_CHARACTER", "**")

    with pytest.raises(ValueError, match="MASKING_CHARACTER"):
        load_settings()


def test_load_settings_rejects_non_object_sensitive_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENSITIVE_KEYS_JSON", '["ssn"]')

    with pytest.raises(ValueError, match="SENSITIVE_KEYS_JSON must be a JSON object"):
        load_settings()


def test_load_settings_rejects_invalid_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENSITIVE_KEYS_JSON", "{ssn")

    with pytest.raises(ValueError, match="not valid JSON"):
        load_settings()


def test_load_settings_rejects_unknown_pattern_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENSITIVE_KEYS_JSON", '{"pin": "iban"}')

    with pytest.raises(ValueError, match="SENSITIVE_KEYS_JSON\\[pin\\]"):
        load_settings()


def test_load_settings_rejects_invalid_regex_pattern(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENSITIVE_KEYS_JSON", json.dumps({"ssn": {"mask": "(unclosed"}}))

    with pytest.raises(ValueError, match="SENSITIVE_KEYS_JSON\\[ssn\\]"):
        load_settings()


def test_load_settings_rejects_directive_without_mask(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENSITIVE_KEYS_JSON", json.dumps({"ssn": {"character": "*"}}))

    with pytest.raises(ValueError, match="SENSITIVE_KEYS_JSON\\[ssn\\].mask"):
        load_settings()
