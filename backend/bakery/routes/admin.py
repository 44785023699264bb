# Overview: Back-office routes: daily stats and the low-stock report.

from flask import Blueprint

from ..permissions import VIEW_STATS
from ..services import get_services
from ..decorators import require_auth, require_permission

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


@admin_bp.get("/stats")
@require_auth
@require_permission(VIEW_STATS)
def stats_route():
    return get_services().stats.today_stats()


@admin_bp.get("/low-stock")
@require_auth
@require_permission(VIEW_STATS)
def low_stock_route():
    return [p.to_dict() for p in get_services().catalog.low_stock_products()]
