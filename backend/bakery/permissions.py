# Overview: Capability definitions and the single authorization check used by every route.

"""
Role-based access control.

Each action is defined as (code, description). Roles map to the set of
action codes they hold. authorize() is the only place that decides whether
an identity may perform an action; routes and services call it uniformly
instead of comparing roles inline.

Ownership rules live beside the role table: ``orders:cancel_own`` is only
granted for an order the identity owns while it is still pending.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import Forbidden
from .models import ROLE_ADMIN, ROLE_STUDENT

logger = logging.getLogger(__name__)


MANAGE_PRODUCTS = "products:manage"
MANAGE_STOCK = "stock:manage"
VIEW_STATS = "stats:view"
PLACE_ORDER = "orders:place"
VIEW_OWN_ORDERS = "orders:view_own"
VIEW_ALL_ORDERS = "orders:view_all"
SET_ORDER_STATUS = "orders:set_status"
CANCEL_OWN_ORDER = "orders:cancel_own"

ACTION_DEFINITIONS = [
    (MANAGE_PRODUCTS, "Create, edit and soft-delete catalog products"),
    (MANAGE_STOCK, "Set absolute stock levels"),
    (VIEW_STATS, "View daily stats and low-stock reports"),
    (PLACE_ORDER, "Place delivery orders"),
    (VIEW_OWN_ORDERS, "List orders placed by the caller"),
    (VIEW_ALL_ORDERS, "List orders placed by anyone"),
    (SET_ORDER_STATUS, "Move any order through its lifecycle"),
    (CANCEL_OWN_ORDER, "Cancel the caller's own pending order"),
]

ALL_ACTIONS = frozenset(code for code, _ in ACTION_DEFINITIONS)

ROLE_ACTIONS = {
    ROLE_ADMIN: ALL_ACTIONS,
    ROLE_STUDENT: frozenset({PLACE_ORDER, VIEW_OWN_ORDERS, CANCEL_OWN_ORDER}),
}


@dataclass(frozen=True)
class Identity:
    """Caller identity decoded from a verified bearer token."""
    id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def has_action(identity: Identity, action: str) -> bool:
    return action in ROLE_ACTIONS.get(identity.role, frozenset())


def authorize(identity: Identity, action: str, resource=None) -> None:
    """
    Raise Forbidden unless ``identity`` may perform ``action`` on ``resource``.

    Fail closed: unknown roles and unknown actions are denied.
    """
    if action not in ALL_ACTIONS:
        raise ValueError(f"Unknown action: {action}")

    allowed = has_action(identity, action)

    if allowed and action == CANCEL_OWN_ORDER and not identity.is_admin:
        allowed = (
            resource is not None
            and resource.user_id == identity.id
            and resource.status == "pending"
        )

    if not allowed:
        logger.warning(
            "Authorization denied: user_id=%s role=%s action=%s resource=%r",
            identity.id, identity.role, action, resource,
        )
        raise Forbidden("Not authorized to perform this action")


def require_role(identity: Identity, role: str) -> None:
    if identity.role != role:
        logger.warning("Role check failed: user_id=%s role=%s required=%s", identity.id, identity.role, role)
        raise Forbidden("Insufficient role")
