"""Generation API router."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from viralgif_engine.common.config import get_settings
from viralgif_engine.common.exceptions import ViralGifError
from viralgif_engine.common.schemas import ErrorResponse, error_response
from viralgif_engine.generation.schemas import GenerateBody, GenerateResponse
from viralgif_engine.generation.validation import validate_request

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or unsupported industry"},
    403: {"model": ErrorResponse, "description": "Quota exceeded"},
    503: {"model": ErrorResponse, "description": "Text or GIF service unavailable"},
}


def _get_resolver():
    from viralgif_engine.deps import get_identity_resolver
    return get_identity_resolver()


def _get_gate():
    from viralgif_engine.deps import get_quota_gate
    return get_quota_gate()


def _get_orchestrator():
    from viralgif_engine.deps import get_orchestrator
    return get_orchestrator()


@router.post("/generate", response_model=GenerateResponse, responses=_ERROR_RESPONSES)
async def generate(body: GenerateBody, request: Request):
    settings = get_settings()
    resolver = _get_resolver()
    resolution = None
    try:
        gen_request = validate_request(body.industry, body.description)
        resolution = await resolver.resolve_request(request)
        decision = await _get_gate().admit(resolution.identity)
        result = await _get_orchestrator().generate(
            resolution.identity, gen_request, decision,
        )
    except ViralGifError as e:
        response = error_response(e, redact_internal=settings.is_production_like)
    else:
        payload = GenerateResponse(
            data=result.to_payload(),
            timestamp=datetime.now(timezone.utc),
        )
        response = JSONResponse(content=payload.model_dump(mode="json"))

    if resolution is not None:
        resolver.apply_cookie(response, resolution)
    return response
