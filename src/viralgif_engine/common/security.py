"""Signed session tokens for registered users."""

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from viralgif_engine.common.config import ViralGifSettings
from viralgif_engine.common.exceptions import ExpiredSessionError, InvalidSessionError

SESSION_SALT = "viralgif-session"


class SessionVerifier:
    """Issue and verify bearer session tokens.

    Tokens are timestamped itsdangerous payloads of the form
    ``{"user_id": "..."}`` signed with the service secret key.
    """

    def __init__(self, settings: ViralGifSettings):
        self.settings = settings
        self._serializer = URLSafeTimedSerializer(settings.secret_key, salt=SESSION_SALT)

    def issue(self, user_id: str) -> str:
        return self._serializer.dumps({"user_id": user_id})

    def verify(self, token: str) -> str:
        """Return the user id carried by ``token``.

        Raises ExpiredSessionError when older than ``session_ttl`` and
        InvalidSessionError for any other signature or payload problem.
        """
        try:
            payload = self._serializer.loads(token, max_age=self.settings.session_ttl)
        except SignatureExpired as exc:
            raise ExpiredSessionError() from exc
        except BadSignature as exc:
            raise InvalidSessionError() from exc

        user_id = payload.get("user_id") if isinstance(payload, dict) else None
        if not user_id:
            raise InvalidSessionError("Session token has no subject")
        return str(user_id)


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
