"""
Blade Stock Backend — Stock Password Gate
===========================================

What:  Rejects mutating requests whose JSON body does not carry the shared
       stock password.
How:   check_stock_password() is a plain comparison with no HTTP types, so it
       is unit-tested without a server. require_stock_password() is the FastAPI
       dependency attached to every mutating route; it pulls `password` out of
       the raw body and delegates to the comparison.
Who:   routes/inventory.py, routes/logs.py, routes/machines.py, routes/data.py

Behavior:
    Body without a password        → AuthorizationError("Password is required") → 403
    Body with a different password → AuthorizationError("Incorrect password")   → 403
    Matching password              → handler runs; request models ignore the field

There is one secret for the whole deployment: no users, sessions or tokens.
"""

import hmac
import logging
from typing import Any, Optional

from fastapi import Request

from bladestock.config import settings
from bladestock.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


def check_stock_password(supplied: Optional[Any], expected: str) -> None:
    """
    Compare a client-supplied password with the configured secret.

    Any falsy value (null, "", 0, false) counts as missing. Only a JSON string
    can match: {"password": 2255} is incorrect even when the secret is "2255".

    Raises:
        AuthorizationError: password missing, empty, or different
    """
    if not supplied:
        raise AuthorizationError(message="Password is required")

    if not isinstance(supplied, str) or not hmac.compare_digest(
        supplied.encode("utf-8"), expected.encode("utf-8")
    ):
        raise AuthorizationError(message="Incorrect password")


async def _read_password(request: Request) -> Optional[Any]:
    """Returns body["password"], or None for an empty, unparsable or non-object body."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get("password")


async def require_stock_password(request: Request) -> None:
    """
    FastAPI dependency enforcing the stock password.

    Usage:
        @router.post("/inventory", dependencies=[Depends(require_stock_password)])
    """
    supplied = await _read_password(request)
    try:
        check_stock_password(supplied, settings.stock_password)
    except AuthorizationError as exc:
        logger.warning(
            "Stock password rejected for %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
        )
        raise
