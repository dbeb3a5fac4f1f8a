import logging
from dataclasses import dataclass

import jwt
from fastapi import Request

from models.errors import UnauthorizedError

module_logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
REQUIRED_CLAIMS = ["sub", "email", "role", "iat", "exp"]


@dataclass
class AuthenticatedUser:
    id: str
    email: str
    role: str


class BearerAuthFilter:
    """Admits a request only with a valid HS256 bearer token.

    Secret, algorithm and leeway come from the ``Settings`` stored on
    ``app.state.settings``. The decoded user is also kept on
    ``request.state.user`` for handlers that need it.
    """

    async def __call__(self, request: Request) -> AuthenticatedUser:
        header = request.headers.get("Authorization")
        if not header:
            raise UnauthorizedError("Missing Authorization header")
        if not header.startswith(BEARER_PREFIX):
            raise UnauthorizedError("Invalid Authorization header format")

        settings = request.app.state.settings
        token = header[len(BEARER_PREFIX):].strip()

        try:
            claims = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=[settings.JWT_ALGORITHM],
                leeway=settings.JWT_LEEWAY_SECONDS,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.PyJWTError as e:
            module_logger.warning(f"Rejected bearer token on {request.url.path}: {e}")
            raise UnauthorizedError("Invalid or expired token") from e

        user = AuthenticatedUser(
            id=str(claims["sub"]),
            email=claims["email"],
            role=claims["role"],
        )
        request.state.user = user
        return user
