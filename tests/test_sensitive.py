from __future__ import annotations

import pytest
from pydantic import BaseModel

from smartmask.core.sensitive import (
    MASK_CREDIT_CARD_NUMBER,
    MASK_SSN,
    MaskPattern,
    Sensitive,
    SensitiveRegistry,
)


class Payment(BaseModel):
    card: str


class RecurringPayment(Payment):
    interval: str = "monthly"


def test_predefined_patterns_are_bit_exact() -> None:
    assert MaskPattern.PASSWORD.value == "(^\\w{4,100}$)"
    assert MaskPattern.EMAIL.value == "(^[^@]+)@[^@]+$"
    assert MaskPattern.PHONE.value == "(^\\d{3})-(\\d{3})-\\d{4}$"
    assert MaskPattern.CREDIT_CARD.value == "^\\d{4}-(\\d{4})-(\\d{4})-\\d{4}$"
    assert MaskPattern.SSN.value == "(^\\d{3}-\\d{2}-)\\d{4}$"


def test_mask_pattern_from_name_is_case_insensitive() -> None:
    assert MaskPattern.from_name(" credit-card ") is MaskPattern.CREDIT_CARD


def test_mask_pattern_from_name_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unsupported mask pattern 'pin'"):
        MaskPattern.from_name("pin")


def test_sensitive_censor_uses_own_character() -> None:
    directive = Sensitive(type="social security", mask=MASK_SSN, character="#")

    assert directive.censor("123-45-6789") == "#######6789"
    assert directive.censor(None) is None


def test_sensitive_from_name() -> None:
    directive = Sensitive.from_name("email", "email")

    assert directive.censor("hello@mail.com") == "XXXXX@mail.com"


def test_sensitive_validate_rejects_invalid_mask() -> None:
    with pytest.raises(ValueError, match="invalid mask pattern for social security"):
        Sensitive(type="social security", mask=r"(^\d{3}-\d{2}-\d{4}$").validate()


def test_registry_lookup_walks_subclasses() -> None:
    directive = Sensitive(type="credit card", mask=MASK_CREDIT_CARD_NUMBER)
    registry = SensitiveRegistry().register(Payment, "card", directive)

    assert registry.for_field(RecurringPayment, "card") is directive
    assert registry.for_field(RecurringPayment, "interval") is None
    assert len(registry) == 1


def test_registry_keys() -> None:
    directive = Sensitive(type="social security", mask=MASK_SSN)
    registry = SensitiveRegistry().register_key("ssn", directive)

    assert registry.for_key("ssn") is directive
    assert registry.for_key("name") is None
    assert registry.keys == {"ssn": directive}
