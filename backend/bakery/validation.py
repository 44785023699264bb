from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from .errors import InvalidStatus, ValidationError
from .models import ORDER_STATUSES, PAYMENT_METHODS


# Maximum price: 99,999,999.99 fits Numeric(10, 2)
MAX_PRICE = Decimal("99999999.99")
MAX_RATING = Decimal("5.0")
# Largest value an Integer column holds
MAX_INT = 2_147_483_647
# bcrypt only hashes the first 72 bytes
MAX_PASSWORD_BYTES = 72

_MISSING = object()


class _Errors:
    """Collects per-field problems so one response reports all of them."""

    def __init__(self):
        self.items: list[dict] = []

    def add(self, field_name: str, message: str) -> None:
        self.items.append({"field": field_name, "message": message})

    def raise_if_any(self) -> None:
        if self.items:
            raise ValidationError("Invalid input data", errors=self.items)


def _require_mapping(payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")
    return payload


def _text(payload: dict, key: str, errors: _Errors, *, required: bool, max_length: int | None = None):
    raw = payload.get(key, _MISSING)
    if raw is _MISSING or raw is None:
        if required:
            errors.add(key, f"{key} is required")
        return _MISSING if raw is _MISSING else None
    if not isinstance(raw, str):
        errors.add(key, f"{key} must be a string")
        return None
    value = raw.strip()
    if required and not value:
        errors.add(key, f"{key} cannot be blank")
        return None
    if max_length and len(value) > max_length:
        errors.add(key, f"{key} exceeds max length {max_length}")
        return None
    return value


def password_problem(password: Any) -> str | None:
    """Why ``password`` cannot be stored, or None when it is acceptable."""
    if not isinstance(password, str) or len(password) < 6:
        return "password must be at least 6 characters"
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return f"password must be at most {MAX_PASSWORD_BYTES} bytes"
    return None


def _integer(payload: dict, key: str, errors: _Errors, *, required: bool, minimum: int | None = None,
             maximum: int = MAX_INT):
    raw = payload.get(key, _MISSING)
    if raw is _MISSING or raw is None:
        if required:
            errors.add(key, f"{key} is required")
        return _MISSING
    # bool is an int subclass; floats are rejected rather than truncated
    if isinstance(raw, bool) or not isinstance(raw, int):
        if isinstance(raw, float) and raw.is_integer():
            raw = int(raw)
        else:
            errors.add(key, f"{key} must be an integer")
            return _MISSING
    if minimum is not None and raw < minimum:
        errors.add(key, f"{key} must be >= {minimum}")
        return _MISSING
    if raw > maximum:
        errors.add(key, f"{key} must be <= {maximum}")
        return _MISSING
    return raw


def _decimal(payload: dict, key: str, errors: _Errors, *, required: bool, places: str,
             minimum: Decimal, maximum: Decimal):
    raw = payload.get(key, _MISSING)
    if raw is _MISSING or raw is None:
        if required:
            errors.add(key, f"{key} is required")
        return _MISSING
    if isinstance(raw, bool):
        errors.add(key, f"{key} must be a number")
        return _MISSING
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        errors.add(key, f"{key} must be a number")
        return _MISSING
    if not value.is_finite():
        errors.add(key, f"{key} must be a number")
        return _MISSING
    # Range check before quantize: quantizing a huge exponent raises InvalidOperation
    if value < minimum or value > maximum:
        errors.add(key, f"{key} must be between {minimum} and {maximum}")
        return _MISSING
    value = value.quantize(Decimal(places), rounding=ROUND_HALF_UP)
    if value > maximum:
        errors.add(key, f"{key} must be between {minimum} and {maximum}")
        return _MISSING
    return value


def _boolean(payload: dict, key: str, errors: _Errors):
    raw = payload.get(key, _MISSING)
    if raw is _MISSING:
        return _MISSING
    if not isinstance(raw, bool):
        errors.add(key, f"{key} must be a boolean")
        return _MISSING
    return raw


# =============================================================================
# AUTH
# =============================================================================

@dataclass(frozen=True)
class RegisterRequest:
    username: str
    password: str
    full_name: str
    classroom: str | None = None
    contact: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "RegisterRequest":
        data = _require_mapping(payload)
        errors = _Errors()
        username = _text(data, "username", errors, required=True, max_length=64)
        password = data.get("password")
        problem = password_problem(password)
        if problem:
            errors.add("password", problem)
        full_name = _text(data, "fullName", errors, required=True, max_length=255)
        classroom = _text(data, "classroom", errors, required=False, max_length=64)
        contact = _text(data, "contact", errors, required=False, max_length=64)
        errors.raise_if_any()
        return cls(
            username=username,
            password=password,
            full_name=full_name,
            classroom=None if classroom is _MISSING else (classroom or None),
            contact=None if contact is _MISSING else (contact or None),
        )


@dataclass(frozen=True)
class LoginRequest:
    username: str
    password: str

    @classmethod
    def from_payload(cls, payload: Any) -> "LoginRequest":
        data = _require_mapping(payload)
        errors = _Errors()
        username = _text(data, "username", errors, required=True)
        password = data.get("password")
        if not isinstance(password, str) or not password:
            errors.add("password", "password is required")
        errors.raise_if_any()
        return cls(username=username, password=password)


# =============================================================================
# PRODUCTS
# =============================================================================

# Wire key -> model attribute
PRODUCT_FIELDS = {
    "name": "name",
    "description": "description",
    "price": "price",
    "stock": "stock",
    "imageUrl": "image_url",
    "rating": "rating",
    "reviewCount": "review_count",
    "isActive": "is_active",
}


def _product_patch(data: dict, errors: _Errors, *, partial: bool) -> dict:
    unknown = sorted(set(data) - set(PRODUCT_FIELDS) - {"id", "createdAt", "updatedAt"})
    for key in unknown:
        errors.add(key, f"Field not allowed: {key}")

    values = {
        "name": _text(data, "name", errors, required=not partial, max_length=255),
        "description": _text(data, "description", errors, required=False),
        "price": _decimal(data, "price", errors, required=not partial, places="0.01",
                          minimum=Decimal("0"), maximum=MAX_PRICE),
        "stock": _integer(data, "stock", errors, required=False, minimum=0),
        "imageUrl": _text(data, "imageUrl", errors, required=False, max_length=512),
        "rating": _decimal(data, "rating", errors, required=False, places="0.1",
                           minimum=Decimal("0"), maximum=MAX_RATING),
        "reviewCount": _integer(data, "reviewCount", errors, required=False, minimum=0),
        "isActive": _boolean(data, "isActive", errors),
    }
    if partial and "name" in data and data["name"] is None:
        errors.add("name", "name cannot be null")

    return {
        PRODUCT_FIELDS[key]: value
        for key, value in values.items()
        if value is not _MISSING and key in data
    }


@dataclass(frozen=True)
class ProductCreate:
    values: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "ProductCreate":
        data = _require_mapping(payload)
        errors = _Errors()
        patch = _product_patch(data, errors, partial=False)
        errors.raise_if_any()
        return cls(values=patch)


@dataclass(frozen=True)
class ProductUpdate:
    values: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "ProductUpdate":
        data = _require_mapping(payload)
        errors = _Errors()
        patch = _product_patch(data, errors, partial=True)
        errors.raise_if_any()
        return cls(values=patch)


@dataclass(frozen=True)
class StockUpdate:
    stock: int

    @classmethod
    def from_payload(cls, payload: Any) -> "StockUpdate":
        data = _require_mapping(payload)
        raw = data.get("stock")
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0 or raw > MAX_INT:
            raise ValidationError("Invalid stock value")
        return cls(stock=raw)


# =============================================================================
# ORDERS
# =============================================================================

@dataclass(frozen=True)
class OrderItemRequest:
    product_id: int
    quantity: int


@dataclass(frozen=True)
class OrderCreate:
    delivery_location: str
    delivery_time: str
    payment_method: str
    items: tuple[OrderItemRequest, ...]
    notes: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "OrderCreate":
        data = _require_mapping(payload)
        errors = _Errors()
        delivery_location = _text(data, "deliveryLocation", errors, required=True, max_length=255)
        delivery_time = _text(data, "deliveryTime", errors, required=True, max_length=64)

        payment_method = data.get("paymentMethod")
        if payment_method not in PAYMENT_METHODS:
            errors.add("paymentMethod", f"paymentMethod must be one of: {', '.join(PAYMENT_METHODS)}")

        notes = _text(data, "notes", errors, required=False)

        raw_items = data.get("items")
        items: list[OrderItemRequest] = []
        if not isinstance(raw_items, list) or not raw_items:
            errors.add("items", "items must be a non-empty list")
        else:
            for index, raw in enumerate(raw_items):
                if not isinstance(raw, dict):
                    errors.add(f"items[{index}]", "item must be an object")
                    continue
                item_errors = _Errors()
                product_id = _integer(raw, "productId", item_errors, required=True, minimum=1)
                quantity = _integer(raw, "quantity", item_errors, required=True, minimum=1)
                for problem in item_errors.items:
                    errors.add(f"items[{index}].{problem['field']}", problem["message"])
                if not item_errors.items:
                    items.append(OrderItemRequest(product_id=product_id, quantity=quantity))

        errors.raise_if_any()
        return cls(
            delivery_location=delivery_location,
            delivery_time=delivery_time,
            payment_method=payment_method,
            notes=None if notes is _MISSING else (notes or None),
            items=tuple(items),
        )


@dataclass(frozen=True)
class StatusUpdate:
    status: str

    @classmethod
    def from_payload(cls, payload: Any) -> "StatusUpdate":
        data = _require_mapping(payload)
        status = data.get("status")
        if status not in ORDER_STATUSES:
            raise InvalidStatus("Invalid status")
        return cls(status=status)
