# Overview: Service-layer operations for accounts and bearer tokens.

"""
Credential Service

Passwords are hashed with bcrypt; tokens are HS256 JWTs carrying
``{id, username, role}`` and an expiry. Nothing about a login is stored
server side: a token is valid for as long as its signature and expiry hold.

SECURITY NOTES:
- Unknown username and wrong password raise the same InvalidCredentials
- Expired or malformed tokens are Unauthenticated (401)
- Tokens whose signature does not verify are Forbidden (403)
"""

from __future__ import annotations

import logging
from datetime import timedelta

import bcrypt
import jwt
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..errors import DuplicateUsername, Forbidden, InvalidCredentials, NotFound, Unauthenticated
from ..models import User, ROLE_ADMIN, ROLE_STUDENT
from ..permissions import Identity
from bakery.time_utils import utcnow

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"


class CredentialService:
    def __init__(self, *, secret_key: str, token_ttl: timedelta, bcrypt_rounds: int = 12):
        self.secret_key = secret_key
        self.token_ttl = token_ttl
        self.bcrypt_rounds = bcrypt_rounds

    # -- passwords ---------------------------------------------------------

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')  # Store as string in database

    def verify_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
        except ValueError:
            # Corrupt or non-bcrypt hash in the database
            return False

    # -- tokens ------------------------------------------------------------

    def issue_token(self, user: User) -> str:
        now = utcnow()
        payload = {
            "id": user.id,
            "username": user.username,
            "role": user.role,
            "iat": now,
            "exp": now + self.token_ttl,
        }
        return jwt.encode(payload, self.secret_key, algorithm=TOKEN_ALGORITHM)

    def authenticate(self, token: str | None) -> Identity:
        """Verify a bearer token and return the identity it carries."""
        if not token:
            raise Unauthenticated("Authentication required")

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[TOKEN_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise Unauthenticated("Token has expired")
        except jwt.InvalidSignatureError:
            raise Forbidden("Invalid token signature")
        except jwt.InvalidTokenError:
            raise Unauthenticated("Invalid token")

        try:
            return Identity(
                id=int(payload["id"]),
                username=str(payload["username"]),
                role=str(payload["role"]),
            )
        except (KeyError, TypeError, ValueError):
            raise Unauthenticated("Invalid token")

    # -- accounts ----------------------------------------------------------

    def _create_user(self, *, username: str, password: str, full_name: str, role: str,
                     classroom: str | None = None, contact: str | None = None) -> User:
        existing = db.session.query(User).filter_by(username=username).first()
        if existing:
            raise DuplicateUsername()

        user = User(
            username=username,
            password_hash=self.hash_password(password),
            full_name=full_name,
            classroom=classroom,
            contact=contact,
            role=role,
        )
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # A concurrent registration took the username after the check above
            db.session.rollback()
            raise DuplicateUsername()
        return user

    def register(self, *, username: str, password: str, full_name: str,
                 classroom: str | None = None, contact: str | None = None) -> dict:
        """Create a student account and log it in."""
        user = self._create_user(
            username=username,
            password=password,
            full_name=full_name,
            classroom=classroom,
            contact=contact,
            role=ROLE_STUDENT,
        )
        logger.info("Registered user id=%s username=%s", user.id, user.username)
        return {"token": self.issue_token(user), "user": user.to_dict()}

    def create_admin(self, *, username: str, password: str, full_name: str) -> User:
        user = self._create_user(
            username=username,
            password=password,
            full_name=full_name,
            role=ROLE_ADMIN,
        )
        logger.info("Created admin id=%s username=%s", user.id, user.username)
        return user

    def login(self, *, username: str, password: str) -> dict:
        user = db.session.query(User).filter_by(username=username).first()
        if not user or not self.verify_password(password, user.password_hash):
            logger.warning("Failed login for username=%s", username)
            raise InvalidCredentials()
        return {"token": self.issue_token(user), "user": user.to_dict()}

    def current_user(self, identity: Identity) -> User:
        user = db.session.get(User, identity.id)
        if not user:
            raise NotFound("User not found")
        return user
