from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from smartmask.core.sensitive import SensitiveRegistry

HEALTH_CHECK_PATHS = ("/healthz", "/ping", "/openapi.json", "/")


class _HealthCheckFilter(logging.Filter):
    def __init__(self, paths: Iterable[str]) -> None:
        super().__init__()
        self._paths = {path.rstrip("/") or "/" for path in paths}

    def filter(self, record: logging.LogRecord) -> bool:
        path = _extract_path(record)
        if path and path in self._paths:
            return False
        return True


class SensitiveArgsFilter(logging.Filter):
    """Censors mapping-style log arguments whose keys are registered."""

    def __init__(self, registry: SensitiveRegistry) -> None:
        super().__init__()
        self._registry = registry

    def filter(self, record: logging.LogRecord) -> bool:
        args = record.args
        if isinstance(args, dict):
            record.args = {key: self._censor(str(key), value) for key, value in args.items()}
        return True

    def _censor(self, key: str, value: object) -> object:
        directive = self._registry.for_key(key)
        if directive is None or not isinstance(value, str):
            return value
        return directive.censor(value)


def _extract_path(record: logging.LogRecord) -> str | None:
    args = record.args
    if isinstance(args, tuple) and len(args) >= 3:
        path = str(args[2])
    elif isinstance(args, dict) and "path" in args:
        path = str(args["path"])
    else:
        path = ""
    if path:
        return path.split("?", 1)[0]
    message = record.getMessage()
    for candidate in HEALTH_CHECK_PATHS:
        if f" {candidate} " in message or f'"{candidate} ' in message:
            return candidate
    return None


class _SensitiveRecordFactory:
    """Log record factory that censors arguments as each record is created."""

    def __init__(self, base: Callable[..., logging.LogRecord], registry: SensitiveRegistry) -> None:
        self.base = base
        self._filter = SensitiveArgsFilter(registry)

    def __call__(self, *args: Any, **kwargs: Any) -> logging.LogRecord:
        record = self.base(*args, **kwargs)
        self._filter.filter(record)
        return record


def install_sensitive_record_factory(registry: SensitiveRegistry) -> None:
    """Censor registered keys on every record, whichever handler emits it.

    Installing again replaces the previous registry instead of censoring twice.
    """
    base = logging.getLogRecordFactory()
    if isinstance(base, _SensitiveRecordFactory):
        base = base.base
    logging.setLogRecordFactory(_SensitiveRecordFactory(base, registry))


def configure_logging(level: str, registry: SensitiveRegistry | None = None) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    access_logger = logging.getLogger("uvicorn.access")
    access_logger.addFilter(_HealthCheckFilter(HEALTH_CHECK_PATHS))
    if registry is not None:
        install_sensitive_record_factory(registry)
