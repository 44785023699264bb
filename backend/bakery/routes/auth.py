# Overview: Flask API routes for registration, login and the current profile.

# backend/bakery/routes/auth.py
from flask import Blueprint, request, g

from ..services import get_services
from ..validation import LoginRequest, RegisterRequest
from ..decorators import require_auth


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/register")
def register_route():
    """
    Create a student account.

    Returns {token, user}; the token is ready for the Authorization header.
    """
    data = RegisterRequest.from_payload(request.get_json(silent=True))
    result = get_services().credentials.register(
        username=data.username,
        password=data.password,
        full_name=data.full_name,
        classroom=data.classroom,
        contact=data.contact,
    )
    return result, 201


@auth_bp.post("/login")
def login_route():
    """
    Authenticate with username and password.

    Unknown usernames and wrong passwords get the same 401 response.
    """
    data = LoginRequest.from_payload(request.get_json(silent=True))
    return get_services().credentials.login(username=data.username, password=data.password), 200


@auth_bp.get("/me")
@require_auth
def me_route():
    user = get_services().credentials.current_user(g.identity)
    return user.to_dict(), 200
