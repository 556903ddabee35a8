from __future__ import annotations

from functools import lru_cache

from smartmask.core.config import Settings, load_settings
from smartmask.core.mapper import SmartObjectMapper
from smartmask.core.masking import Censor
from smartmask.core.sensitive import SensitiveRegistry
from smartmask.services.masking import MaskingService


@lru_cache
def get_settings() -> Settings:
    return load_settings()


@lru_cache
def get_registry() -> SensitiveRegistry:
    registry = SensitiveRegistry()
    for key, directive in get_settings().sensitive_keys.items():
        registry.register_key(key, directive)
    return registry


@lru_cache
def get_censor() -> Censor:
    return Censor(get_settings().masking_character)


@lru_cache
def get_safe_mapper() -> SmartObjectMapper:
    return SmartObjectMapper(get_registry(), indent=get_settings().json_indent)


@lru_cache
def get_full_mapper() -> SmartObjectMapper:
    return SmartObjectMapper(indent=get_settings().json_indent)


@lru_cache
def get_masking_service() -> MaskingService:
    return MaskingService(get_censor(), get_safe_mapper())
