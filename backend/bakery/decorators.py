# Overview: Request decorators for authentication and authorization on API routes.

from functools import wraps
from flask import request, g

from .errors import Unauthenticated
from .permissions import authorize
from .services import get_services


def bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    return token or None


def require_auth(f):
    """
    Require a valid bearer token.

    Sets g.identity to the Identity decoded from the token. Missing,
    malformed or expired tokens answer 401; a bad signature answers 403.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.identity = get_services().credentials.authenticate(bearer_token())
        return f(*args, **kwargs)

    return decorated_function


def require_permission(action: str):
    """Require the authenticated identity to hold ``action``. Use after @require_auth."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not hasattr(g, "identity"):
                raise Unauthenticated("Authentication required")
            authorize(g.identity, action)
            return f(*args, **kwargs)

        return decorated_function
    return decorator
