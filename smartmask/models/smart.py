from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

from smartmask.core.dependencies import get_full_mapper, get_safe_mapper
from smartmask.core.mapper import SmartObjectMapper

S = TypeVar("S", bound="SmartModel")


class SmartModel(BaseModel):
    """Model whose string form censors sensitive fields.

    Equality, ordering and hashing use the exposed (uncensored) JSON so that
    masking never hides a difference between two objects.
    """

    def __str__(self) -> str:
        return self.to_string()

    def to_string(
        self, indentation: str | None = None, mapper: SmartObjectMapper | None = None
    ) -> str:
        return (mapper or get_safe_mapper()).dumps(self, indentation)

    def to_exposed_string(self, mapper: SmartObjectMapper | None = None) -> str:
        return (mapper or get_full_mapper()).dumps(self)

    def clone(self: S, mapper: SmartObjectMapper | None = None) -> S:
        full_mapper = mapper or get_full_mapper()
        return full_mapper.loads(full_mapper.dumps(self), type(self))

    @classmethod
    def from_string(cls: type[S], text: str, mapper: SmartObjectMapper | None = None) -> S:
        return (mapper or get_safe_mapper()).loads(text, cls)

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if other is None or type(other) is not type(self):
            return False
        return self.to_exposed_string() == other.to_exposed_string()

    def __hash__(self) -> int:
        return hash(self.to_exposed_string())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SmartModel):
            return NotImplemented
        return self.to_exposed_string() < other.to_exposed_string()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SmartModel):
            return NotImplemented
        return self.to_exposed_string() <= other.to_exposed_string()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SmartModel):
            return NotImplemented
        return self.to_exposed_string() > other.to_exposed_string()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SmartModel):
            return NotImplemented
        return self.to_exposed_string() >= other.to_exposed_string()
