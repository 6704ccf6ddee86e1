"""Identity resolver — authenticated session or dual-keyed anonymous caller."""

import uuid
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from starlette.requests import Request
from starlette.responses import Response

from viralgif_engine.accounts.service import UserStore
from viralgif_engine.common.config import ViralGifSettings
from viralgif_engine.common.database import DatabaseManager
from viralgif_engine.common.exceptions import (
    InternalError,
    InvalidSessionError,
    UnauthenticatedError,
)
from viralgif_engine.common.logging import get_logger
from viralgif_engine.common.security import SessionVerifier, bearer_token
from viralgif_engine.identity.types import Anonymous, Authenticated, IdentityResolution

logger = get_logger("identity")

# Matches the usage_logs.anon_user_id column width.
ANON_TOKEN_MAX_LENGTH = 64


def mint_anon_token() -> str:
    """New anonymous cookie value (UUID4, drawn from os.urandom)."""
    return str(uuid.uuid4())


def parse_anon_token(value: Optional[str]) -> Optional[str]:
    """Canonical form of a cookie token, or None unless it is a UUID."""
    if not value or len(value) > ANON_TOKEN_MAX_LENGTH:
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


def client_ip(request: Request, trust_forwarded_for: bool = False) -> str:
    """Best-effort client address for quota keying."""
    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class IdentityResolver:
    """Decides whether a request is authenticated or anonymous."""

    def __init__(
        self,
        settings: ViralGifSettings,
        db: DatabaseManager,
        verifier: SessionVerifier,
        users: UserStore,
    ):
        self.settings = settings
        self.db = db
        self.verifier = verifier
        self.users = users

    async def resolve(
        self,
        authorization: Optional[str],
        anon_cookie: Optional[str],
        ip: str,
        require_auth: bool = False,
    ) -> IdentityResolution:
        """Resolve the caller identity.

        A valid bearer session for an existing user yields ``Authenticated``.
        Anything else degrades to ``Anonymous`` unless ``require_auth`` is
        set, in which case UnauthenticatedError is raised. A cookie token is
        minted when none was sent or the sent one is not a UUID.
        """
        token = bearer_token(authorization)
        if token:
            user_id = await self._authenticate(token, require_auth)
            if user_id is not None:
                return IdentityResolution(Authenticated(user_id=user_id, client_ip=ip))
        elif require_auth:
            raise UnauthenticatedError("Please log in to access this feature")

        anon_token = parse_anon_token(anon_cookie)
        if anon_token:
            return IdentityResolution(Anonymous(anon_token=anon_token, client_ip=ip))
        if anon_cookie:
            logger.info("Ignoring malformed anonymous cookie, minting a new one")

        minted = mint_anon_token()
        return IdentityResolution(
            Anonymous(anon_token=minted, client_ip=ip), minted_token=minted,
        )

    async def resolve_request(self, request: Request, require_auth: bool = False) -> IdentityResolution:
        """Resolve the identity behind an incoming HTTP request."""
        return await self.resolve(
            request.headers.get("authorization"),
            request.cookies.get(self.settings.anon_cookie_name),
            client_ip(request, self.settings.trust_forwarded_for),
            require_auth=require_auth,
        )

    async def _authenticate(self, token: str, require_auth: bool) -> Optional[str]:
        try:
            user_id = self.verifier.verify(token)
        except InvalidSessionError as exc:
            if require_auth:
                raise UnauthenticatedError(exc.message) from exc
            logger.info("Invalid session token, treating caller as anonymous")
            return None

        try:
            async with self.db.get_session() as session:
                user = await self.users.find_user(session, user_id)
        except (SQLAlchemyError, OSError) as exc:
            if require_auth:
                raise InternalError("Failed to look up user") from exc
            logger.warning("User lookup failed, treating caller as anonymous", exc_info=True)
            return None
        if user is None:
            if require_auth:
                raise UnauthenticatedError("User not found")
            logger.info("Session refers to unknown user, treating caller as anonymous")
            return None
        return user.id

    def apply_cookie(self, response: Response, resolution: IdentityResolution) -> None:
        """Set the anonymous cookie on ``response`` when a token was minted."""
        if resolution.minted_token is None:
            return
        response.set_cookie(
            key=self.settings.anon_cookie_name,
            value=resolution.minted_token,
            max_age=self.settings.anon_cookie_max_age,
            httponly=True,
            secure=self.settings.is_production_like,
            samesite="lax",
        )
