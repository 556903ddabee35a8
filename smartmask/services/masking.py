from __future__ import annotations

import logging
from typing import Any

from smartmask.core.mapper import SmartObjectMapper
from smartmask.core.masking import Censor, MaskResult
from smartmask.core.sensitive import MaskPattern
from smartmask.schemas.masking import MaskRequest


class MaskingService:
    def __init__(self, censor: Censor, mapper: SmartObjectMapper) -> None:
        self._logger = logging.getLogger(__name__)
        self._censor = censor
        self._mapper = mapper

    def mask(self, request: MaskRequest) -> MaskResult:
        pattern = _resolve_pattern(request)
        censor = self._censor
        if request.masking_character:
            censor = Censor(request.masking_character)
        result = censor.evaluate(request.value, pattern)
        self._logger.debug("Mask request resolved with status %s", result.status.value)
        return result

    def censor_document(self, document: dict[str, Any]) -> dict[str, Any]:
        return self._mapper.to_jsonable(document)


def _resolve_pattern(request: MaskRequest) -> str | None:
    if request.pattern:
        return request.pattern
    if request.pattern_name:
        return MaskPattern.from_name(request.pattern_name).value
    return None
