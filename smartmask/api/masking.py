from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from smartmask.core.dependencies import get_masking_service
from smartmask.schemas.masking import CensorRequest, CensorResponse, MaskRequest, MaskResponse
from smartmask.services.masking import MaskingService

router = APIRouter()


@router.post("/mask", response_model=MaskResponse)
def mask_value(
    request: MaskRequest,
    service: MaskingService = Depends(get_masking_service),  # noqa: B008
) -> MaskResponse:
    try:
        result = service.mask(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return MaskResponse(status=result.status.value, result=result.value, reason=result.reason)


@router.post("/censor", response_model=CensorResponse)
def censor_document(
    request: CensorRequest,
    service: MaskingService = Depends(get_masking_service),  # noqa: B008
) -> CensorResponse:
    """Censor every registered key of a JSON document, at any depth."""
    return CensorResponse(document=service.censor_document(request.document))
