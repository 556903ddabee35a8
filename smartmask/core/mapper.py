from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from smartmask.core.sensitive import Sensitive, SensitiveRegistry

T = TypeVar("T")

_SEPARATORS = (",", " : ")


class SerializationError(ValueError):
    pass


class SmartObjectMapper:
    """Writes objects as pretty JSON, censoring the fields of a registry.

    A mapper without a registry writes every attribute as stored. ``None``
    values are left out of mappings and of fields that have a default, so
    the output reads back into the same model. Dates are written as ISO-8601
    strings.
    """

    def __init__(self, registry: SensitiveRegistry | None = None, indent: int = 2) -> None:
        self._logger = logging.getLogger(__name__)
        self._registry = registry
        self._indent = indent

    @property
    def censored(self) -> bool:
        return self._registry is not None

    def to_jsonable(self, value: Any) -> Any:
        if isinstance(value, BaseModel):
            items = (
                (name, getattr(value, name), info.is_required())
                for name, info in type(value).model_fields.items()
            )
            return self._object_to_jsonable(type(value), items)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            items = (
                (item.name, getattr(value, item.name), _dataclass_field_required(item))
                for item in dataclasses.fields(value)
            )
            return self._object_to_jsonable(type(value), items)
        if isinstance(value, Mapping):
            output: dict[str, Any] = {}
            for key, item in value.items():
                if item is None:
                    continue
                output[str(key)] = self._censor(self._key_directive(str(key)), item)
            return output
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self.to_jsonable(item) for item in value]
        try:
            return to_jsonable_python(value)
        except PydanticSerializationError as exc:
            raise SerializationError(
                f"unable to serialize value of type {type(value).__name__}"
            ) from exc

    def dumps(self, value: Any, indentation: str | None = None) -> str:
        text = json.dumps(
            self.to_jsonable(value),
            ensure_ascii=False,
            indent=self._indent,
            separators=_SEPARATORS,
        )
        if indentation:
            text = text.replace("\n", "\n" + indentation)
        return text

    def loads(self, text: str | bytes, target: type[T] | Any) -> T:
        try:
            return TypeAdapter(target).validate_json(text)
        except ValidationError as exc:
            raise SerializationError(f"unable to read JSON as {target!r}") from exc

    def _object_to_jsonable(self, model: type, items: Any) -> dict[str, Any]:
        output: dict[str, Any] = {}
        for name, item, required in items:
            if item is None and not required:
                continue
            output[name] = self._censor(self._field_directive(model, name), item)
        return output

    def _censor(self, directive: Sensitive | None, item: Any) -> Any:
        if directive is not None and isinstance(item, str):
            self._logger.debug("Censoring %s value with mask %s", directive.type, directive.mask)
            return directive.censor(item)
        return self.to_jsonable(item)

    def _field_directive(self, model: type, name: str) -> Sensitive | None:
        if self._registry is None:
            return None
        directive = self._registry.for_field(model, name)
        if directive is None:
            directive = self._registry.for_key(name)
        return directive

    def _key_directive(self, key: str) -> Sensitive | None:
        if self._registry is None:
            return None
        return self._registry.for_key(key)


def _dataclass_field_required(item: dataclasses.Field[Any]) -> bool:
    return item.default is dataclasses.MISSING and item.default_factory is dataclasses.MISSING
