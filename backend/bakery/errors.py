# Overview: Domain error taxonomy and the JSON error handlers that map it to HTTP.

"""
Every failure a service can report derives from ServiceError and carries the
HTTP status it maps to. Routes never build error responses by hand: they let
the exception propagate and the handlers registered here render
``{"message": ..., "errors": [...]}``.
"""

from __future__ import annotations

from flask import Flask, current_app, jsonify
from werkzeug.exceptions import HTTPException

from .extensions import db


class ServiceError(Exception):
    """Base class for errors that are safe to show to API clients."""
    status_code = 500

    def __init__(self, message: str, errors: list | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(ServiceError):
    """400-level input problem."""
    status_code = 400


class InvalidArgument(ValidationError):
    pass


class InvalidStatus(ValidationError):
    pass


class InvalidTransition(ValidationError):
    pass


class Unauthenticated(ServiceError):
    status_code = 401


class InvalidCredentials(Unauthenticated):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class Forbidden(ServiceError):
    status_code = 403


class NotFound(ServiceError):
    status_code = 404


class ProductNotFound(NotFound):
    pass


class OrderNotFound(NotFound):
    pass


class ConflictError(ServiceError):
    """Business rule conflict (duplicate username, stock exhausted)."""
    status_code = 400


class DuplicateUsername(ConflictError):
    def __init__(self, message: str = "Username already exists"):
        super().__init__(message)


class InsufficientStock(ConflictError):
    def __init__(self, product_name: str, requested: int, available: int | None = None):
        super().__init__(f"Insufficient stock for {product_name}")
        self.product_name = product_name
        self.requested = requested
        self.available = available


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        db.session.rollback()
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        return jsonify({"message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        db.session.rollback()
        current_app.logger.exception("Unhandled error while processing request")
        return jsonify({"message": "Internal server error"}), 500
