"""Route access rules shared by the auth and rate-limit middleware."""

from __future__ import annotations

import re
from enum import Enum

_API_PREFIX = "/api"

_EXEMPT_PREFIXES: tuple[str, ...] = (
    "/api/health",
)

_AUTH_PREFIX = "/api/auth"

_FEEDBACK_SUBMIT = re.compile(r"^/api/feedback/?$")

# (method, pattern) pairs that are open to anonymous callers even though
# they are not plain reads.
_PUBLIC_WRITES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("POST", _FEEDBACK_SUBMIT),
)

# Reads that expose private data and therefore need an admin identity.
_ADMIN_READS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^/api/feedback/?$"),
    re.compile(r"^/api/notifications(/.*)?$"),
    re.compile(r"^/api/financial-transactions/[^/]+/?$"),
)

_READ_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "OPTIONS"})


class Access(str, Enum):
    EXEMPT = "exempt"
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


def classify(method: str, path: str) -> Access:
    """Return the access level required for *method* on *path*."""
    method = method.upper()

    if not path.startswith(_API_PREFIX):
        return Access.EXEMPT
    if any(path == p or path.startswith(p + "/") for p in _EXEMPT_PREFIXES):
        return Access.EXEMPT
    if path == _AUTH_PREFIX or path.startswith(_AUTH_PREFIX + "/"):
        return Access.AUTHENTICATED

    if method in _READ_METHODS:
        if method != "OPTIONS" and any(p.match(path) for p in _ADMIN_READS):
            return Access.ADMIN
        return Access.PUBLIC

    for public_method, pattern in _PUBLIC_WRITES:
        if method == public_method and pattern.match(path):
            return Access.PUBLIC
    return Access.ADMIN


def limiter_for(method: str, path: str) -> str | None:
    """Name of the rate limiter guarding a request, or ``None`` when exempt."""
    access = classify(method, path)
    if access is Access.EXEMPT:
        return None
    if access is Access.AUTHENTICATED:
        return "auth"
    if method.upper() == "POST" and _FEEDBACK_SUBMIT.match(path):
        return "feedback"
    if access is Access.ADMIN:
        return "admin"
    return "general"
