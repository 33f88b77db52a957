"""Bearer-token verification and role guards.

Tokens are issued by an external identity provider. This module only checks
the signature and standard claims, then compares the caller's roles with the
roles an endpoint declares.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from robots_intellect.enterprise.config.settings import AppSettings, AuthSettings
from robots_intellect.enterprise.core import Role
from robots_intellect.server.dependencies import get_app_settings

# Role claim names accepted in token payloads, including the one ASP.NET
# identity providers emit.
ROLE_CLAIMS = (
    "roles",
    "role",
    "http://schemas.microsoft.com/ws/2008/06/identity/claims/role",
)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller."""

    subject: Optional[str]
    roles: FrozenSet[Role]
    claims: Dict[str, Any]


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def roles_from_claims(claims: Dict[str, Any]) -> FrozenSet[Role]:
    """Collect known roles from every supported role claim."""

    names: list[str] = []
    for claim in ROLE_CLAIMS:
        value = claims.get(claim)
        if isinstance(value, str):
            names.append(value)
        elif isinstance(value, Iterable):
            names.extend(item for item in value if isinstance(item, str))
    return frozenset(role for role in map(Role.parse, names) if role is not None)


def decode_token(token: str, settings: AuthSettings) -> Dict[str, Any]:
    """Verify ``token`` and return its claims.

    Raises :class:`jwt.InvalidTokenError` when the signature, expiry,
    audience or issuer do not check out.
    """

    options = {"verify_aud": settings.audience is not None}
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.algorithm],
        audience=settings.audience,
        issuer=settings.issuer,
        options=options,
    )


def get_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: AppSettings = Depends(get_app_settings),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise _unauthorized()
    try:
        claims = decode_token(credentials.credentials, settings.auth)
    except jwt.InvalidTokenError as exc:
        raise _unauthorized() from exc
    return Principal(subject=claims.get("sub"), roles=roles_from_claims(claims), claims=claims)


def require_roles(allowed: FrozenSet[Role]) -> Callable[..., Principal]:
    """Build a dependency admitting callers holding any of ``allowed``.

    Unauthenticated callers get 401; authenticated callers without a matching
    role get 403. Both are raised before the endpoint body runs.
    """

    def guard(principal: Principal = Depends(get_principal)) -> Principal:
        if not principal.roles & allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return principal

    return guard
