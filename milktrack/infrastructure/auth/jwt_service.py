from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from jose import jwt
from jose.exceptions import JWTError

from milktrack.application.errors import AuthError

STORAGE_TOKEN_TYPE = "storage"


class JWTService:
    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str,
        access_token_expires_minutes: int = 60,
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expires_minutes = access_token_expires_minutes
        self.issuer = issuer
        self.audience = audience

    def _encode(
        self,
        *,
        subject: str,
        token_type: str,
        expires: timedelta,
        extra_claims: Mapping[str, Any] | None = None,
    ) -> str:
        now = datetime.now(timezone.utc)
        to_encode: dict[str, Any] = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + expires).timestamp()),
            "typ": token_type,
        }
        if self.issuer:
            to_encode["iss"] = self.issuer
        if self.audience:
            to_encode["aud"] = self.audience
        if extra_claims:
            to_encode.update(extra_claims)
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def create_access_token(
        self,
        *,
        subject: str,
        extra_claims: Mapping[str, Any] | None = None,
    ) -> str:
        return self._encode(
            subject=subject,
            token_type="access",
            expires=timedelta(minutes=self.access_token_expires_minutes),
            extra_claims=extra_claims,
        )

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
            )
        except JWTError as exc:
            raise AuthError("Token validation failed") from exc

    def create_storage_session(self, *, subject: str) -> str:
        return self._encode(
            subject=subject,
            token_type=STORAGE_TOKEN_TYPE,
            expires=timedelta(minutes=self.access_token_expires_minutes),
        )

    def decode_storage_session(self, token: str, *, subject: str) -> dict[str, Any]:
        claims = self.decode(token)
        if claims.get("typ") != STORAGE_TOKEN_TYPE:
            raise AuthError("Invalid storage session")
        if claims.get("sub") != subject:
            raise AuthError("Storage session belongs to another caller")
        return claims
