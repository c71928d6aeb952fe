"""Per-route request limits backed by slowapi.

Limits are counted per client IP, or per signed-in user where a route opts into
`rate_limit_user_or_ip_key`. Storage is Redis when configured, otherwise memory.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final, ParamSpec, TypeVar, cast

from fastapi import Request
from fastapi.security.utils import get_authorization_scheme_param
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.auth import token_subject
from app.core.config import settings

DEFAULT_RATE_LIMIT: Final[str] = "120/minute"
META_RATE_LIMIT: Final[str] = "300/minute"
AUTH_LOGIN_RATE_LIMIT: Final[str] = "10/minute"
AUTH_USER_RATE_LIMIT: Final[str] = "60/minute"

P = ParamSpec("P")
R = TypeVar("R")
KeyFunc = Callable[[Request], str]


def rate_limit_ip_key(request: Request) -> str:
    return f"ip:{get_remote_address(request)}"


def rate_limit_user_or_ip_key(request: Request) -> str:
    scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() == "bearer" and token:
        user_id = token_subject(token)
        if user_id is not None:
            return f"user:{user_id}"
    return rate_limit_ip_key(request)


limiter = Limiter(
    key_func=rate_limit_user_or_ip_key,
    default_limits=[DEFAULT_RATE_LIMIT],
    storage_uri=settings.rate_limit_storage_url,
    enabled=settings.rate_limit_enabled,
    # With Redis as the store, keep limiting in process memory while it is unreachable
    in_memory_fallback_enabled=settings.rate_limit_storage_url != "memory://",
    in_memory_fallback=[DEFAULT_RATE_LIMIT],
)


def limit(
    limit_value: str, *, key_func: KeyFunc = rate_limit_ip_key
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Apply `limit_value` to a route in place of the default limit.

    The decorated endpoint must accept a `request: Request` argument.
    """
    return cast(
        Callable[[Callable[P, R]], Callable[P, R]],
        limiter.limit(limit_value, key_func=key_func, override_defaults=True),
    )
