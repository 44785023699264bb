from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from .credential_service import CredentialService
from .catalog_service import CatalogService
from .order_service import OrderService
from .stats_service import StatsService

EXTENSION_KEY = "bakery.services"


@dataclass(frozen=True)
class Services:
    """Service objects built once by create_app and shared by all requests."""
    credentials: CredentialService
    catalog: CatalogService
    orders: OrderService
    stats: StatsService


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "CredentialService", "CatalogService", "OrderService", "StatsService",
    "Services", "get_services", "EXTENSION_KEY",
]
