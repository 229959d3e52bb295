import jwt
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from config import JwtSettings
from models import User


class JwtService:
    """Issues and verifies HS256 bearer tokens for logged-in users"""

    def __init__(self, settings: JwtSettings, logger: Optional[logging.Logger] = None):
        self._settings = settings
        self._logger = logger or logging.getLogger(__name__)

    def issue_token(self, user: User) -> str:
        """
        Create a signed access token for a user

        Args:
            user: Authenticated user

        Returns:
            Encoded JWT carrying sub, email, name, iss, aud, iat and exp claims
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name,
            "iss": self._settings.issuer,
            "aud": self._settings.audience,
            "iat": now,
            "exp": now + timedelta(minutes=self._settings.expires_minutes),
        }
        return jwt.encode(payload, self._settings.secret_key, algorithm=self._settings.algorithm)

    def verify_jwt(self, token: str) -> Optional[dict]:
        """
        Verify JWT token and return payload

        Signature, issuer, audience and expiry are all checked.

        Args:
            token: JWT token string

        Returns:
            Decoded payload if valid, None otherwise
        """
        try:
            return jwt.decode(
                token,
                self._settings.secret_key,
                algorithms=[self._settings.algorithm],
                audience=self._settings.audience,
                issuer=self._settings.issuer,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            self._logger.info("Rejected expired token")
            return None
        except jwt.InvalidTokenError as exc:
            self._logger.info("Rejected invalid token: %s", exc)
            return None
