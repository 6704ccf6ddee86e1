"""Account API router."""

from fastapi import APIRouter, Request

from viralgif_engine.common.exceptions import UnauthenticatedError
from viralgif_engine.accounts.schemas import MeResponse

router = APIRouter()


def _get_resolver():
    from viralgif_engine.deps import get_identity_resolver
    return get_identity_resolver()


def _get_users():
    from viralgif_engine.deps import get_user_store
    return get_user_store()


def _get_db():
    from viralgif_engine.deps import get_db
    return get_db()


@router.get("/me", response_model=MeResponse)
async def me(request: Request):
    resolution = await _get_resolver().resolve_request(request, require_auth=True)
    async with _get_db().get_session() as session:
        user = await _get_users().find_user(session, resolution.identity.user_id)
    if user is None:
        raise UnauthenticatedError("User not found")
    return MeResponse(
        id=user.id,
        email=user.email,
        subscription_tier=user.subscription_tier,
        created_at=user.created_at,
    )
