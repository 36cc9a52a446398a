"""JWT issuance and verification."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from eventboard.config import Settings


class TokenError(Exception):
    """Base class for token verification failures."""

    reason = "token_invalid"
    message = "Invalid authentication token."

    def __init__(self, message: Optional[str] = None):
        if message:
            self.message = message
        super().__init__(self.message)


class TokenMalformedError(TokenError):
    reason = "token_malformed"
    message = "Invalid authentication token. Malformed token."


class TokenSignatureError(TokenError):
    reason = "token_invalid_signature"
    message = "Invalid authentication token. Bad signature."


class TokenExpiredError(TokenError):
    reason = "token_expired"
    message = "Authentication token has expired. Please log in again."


@dataclass(frozen=True)
class TokenClaims:
    subject_id: int
    expires_at: datetime


class TokenService:
    def __init__(self, settings: Settings):
        self._secret = settings.SECRET_KEY
        self._algorithm = settings.JWT_ALGORITHM
        self._default_ttl = settings.JWT_EXPIRATION_SECONDS

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    def issue(self, subject_id: int, ttl_seconds: Optional[int] = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + timedelta(seconds=self._default_ttl if ttl_seconds is None else ttl_seconds)
        claims = {
            "id": subject_id,
            "sub": str(subject_id),
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        # Structure first, so a garbled token is never reported as a bad signature.
        try:
            jwt.get_unverified_header(token)
            unverified = jwt.get_unverified_claims(token)
        except JWTError:
            raise TokenMalformedError()

        if not isinstance(unverified, dict):
            raise TokenMalformedError()

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError:
            raise TokenSignatureError()

        subject_id = payload.get("id")
        exp = payload.get("exp")
        if isinstance(subject_id, bool) or not isinstance(subject_id, int) or not isinstance(exp, (int, float)):
            raise TokenMalformedError("Invalid token payload: user id or expiry is missing.")

        return TokenClaims(
            subject_id=subject_id,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
