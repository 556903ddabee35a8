from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from smartmask.core.masking import DEFAULT_MASKING_CHARACTER, Censor, MaskResult, compile_mask

# Password or alphanumeric pin of 4 to 100 word characters: mask everything.
MASK_PASSWORD = r"(^\w{4,100}$)"
# Email address: mask every character before the @.
MASK_EMAIL_ADDRESS = r"(^[^@]+)@[^@]+$"
# Phone number: XXX-XXX-dddd.
MASK_PHONE_NUMBER = r"(^\d{3})-(\d{3})-\d{4}$"
# Credit card number: dddd-XXXX-XXXX-dddd.
MASK_CREDIT_CARD_NUMBER = r"^\d{4}-(\d{4})-(\d{4})-\d{4}$"
# Social security number: XXX-XX-dddd.
MASK_SSN = r"(^\d{3}-\d{2}-)\d{4}$"


class MaskPattern(str, Enum):
    """Predefined mask patterns addressable by name."""

    PASSWORD = MASK_PASSWORD
    EMAIL = MASK_EMAIL_ADDRESS
    PHONE = MASK_PHONE_NUMBER
    CREDIT_CARD = MASK_CREDIT_CARD_NUMBER
    SSN = MASK_SSN

    @classmethod
    def from_name(cls, name: str) -> MaskPattern:
        """Resolve a pattern by name, case-insensitive.

        Raises:
            ValueError: If no predefined pattern carries that name.
        """
        normalized = name.strip().upper().replace("-", "_")
        try:
            return cls[normalized]
        except KeyError:
            supported = ", ".join(pattern.name for pattern in cls)
            raise ValueError(
                f"Unsupported mask pattern '{name}'. Supported: {supported}"
            ) from None


@dataclass(frozen=True)
class Sensitive:
    """Masking directive for one sensitive field.

    Attributes:
        type: Kind of sensitive value, e.g. "credit card".
        mask: Regular expression whose capture groups are masked.
        character: Character written over every masked position.
    """

    type: str
    mask: str
    character: str = DEFAULT_MASKING_CHARACTER
    _censor: Censor = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_censor", Censor(self.character))

    @classmethod
    def from_name(
        cls, type: str, name: str, character: str = DEFAULT_MASKING_CHARACTER
    ) -> Sensitive:
        return cls(type=type, mask=MaskPattern.from_name(name).value, character=character)

    def censor(self, value: str | None) -> str | None:
        return self._censor.process(value, self.mask)

    def evaluate(self, value: str | None) -> MaskResult:
        return self._censor.evaluate(value, self.mask)

    def validate(self) -> None:
        """Raise ``ValueError`` when the mask cannot be compiled."""
        try:
            compile_mask(self.mask)
        except re.error as exc:
            raise ValueError(f"invalid mask pattern for {self.type}: {self.mask}") from exc


class SensitiveRegistry:
    """Startup-time schema mapping fields and document keys to directives."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._fields: dict[type, dict[str, Sensitive]] = {}
        self._keys: dict[str, Sensitive] = {}

    def register(self, model: type, field_name: str, directive: Sensitive) -> SensitiveRegistry:
        self._logger.debug(
            "Registering %s mask %s on %s.%s",
            directive.type,
            directive.mask,
            model.__name__,
            field_name,
        )
        self._fields.setdefault(model, {})[field_name] = directive
        return self

    def register_key(self, key: str, directive: Sensitive) -> SensitiveRegistry:
        self._logger.debug("Registering %s mask %s on key %s", directive.type, directive.mask, key)
        self._keys[key] = directive
        return self

    def for_field(self, model: type, field_name: str) -> Sensitive | None:
        for klass in model.__mro__:
            directives = self._fields.get(klass)
            if directives and field_name in directives:
                return directives[field_name]
        return None

    def for_key(self, key: str) -> Sensitive | None:
        return self._keys.get(key)

    @property
    def keys(self) -> dict[str, Sensitive]:
        return dict(self._keys)

    def __len__(self) -> int:
        return len(self._keys) + sum(len(directives) for directives in self._fields.values())
