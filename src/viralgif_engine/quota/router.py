"""Quota status API router."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from viralgif_engine.common.config import get_settings
from viralgif_engine.common.exceptions import ViralGifError
from viralgif_engine.common.schemas import error_response
from viralgif_engine.quota.schemas import QuotaStatusResponse
from viralgif_engine.quota.gate import format_duration

router = APIRouter()


def _get_resolver():
    from viralgif_engine.deps import get_identity_resolver
    return get_identity_resolver()


def _get_gate():
    from viralgif_engine.deps import get_quota_gate
    return get_quota_gate()


@router.get("/quota", response_model=QuotaStatusResponse)
async def get_quota(request: Request):
    """Report the caller's current quota without generating anything."""
    resolver = _get_resolver()
    resolution = None
    try:
        resolution = await resolver.resolve_request(request)
        decision = await _get_gate().check(resolution.identity)
    except ViralGifError as e:
        response = error_response(e, redact_internal=get_settings().is_production_like)
    else:
        status = QuotaStatusResponse(
            admitted=decision.admitted,
            used=decision.used,
            limit=decision.limit,
            remaining=decision.remaining,
            tier=decision.tier.value,
            resets_in=format_duration(decision.resets_in) if decision.resets_in else None,
            resets_in_seconds=(
                int(decision.resets_in.total_seconds()) if decision.resets_in else None
            ),
        )
        response = JSONResponse(content=status.model_dump(mode="json"))

    if resolution is not None:
        resolver.apply_cookie(response, resolution)
    return response
