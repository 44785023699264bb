# Overview: Flask API routes for the product catalog; parses input and returns JSON responses.

# backend/bakery/routes/products.py
"""
Catalog routes.

Listing is public and only returns active products. Every write requires an
authenticated identity holding the matching catalog action.
"""
from flask import Blueprint, request

from ..errors import NotFound
from ..permissions import MANAGE_PRODUCTS, MANAGE_STOCK
from ..services import get_services
from ..validation import ProductCreate, ProductUpdate, StockUpdate
from ..decorators import require_auth, require_permission

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
def list_products():
    """
    Query params:
    - search: str (optional) - substring of the product name
    - flavor: str (optional) - substring of the product name; "all" disables it
    - priceRange: str (optional) - accepted, not applied
    """
    products = get_services().catalog.list_products(
        search=request.args.get("search"),
        flavor=request.args.get("flavor"),
        price_range=request.args.get("priceRange"),
    )
    return [p.to_dict() for p in products]


@products_bp.post("")
@require_auth
@require_permission(MANAGE_PRODUCTS)
def create_product_route():
    data = ProductCreate.from_payload(request.get_json(silent=True))
    created = get_services().catalog.create_product(data.values)
    return created.to_dict(), 201


@products_bp.put("/<int:product_id>")
@require_auth
@require_permission(MANAGE_PRODUCTS)
def update_product_route(product_id: int):
    """Partial update: only fields present in the body are changed."""
    data = ProductUpdate.from_payload(request.get_json(silent=True))
    updated = get_services().catalog.update_product(product_id, data.values)
    if not updated:
        raise NotFound("Product not found")
    return updated.to_dict(), 200


@products_bp.delete("/<int:product_id>")
@require_auth
@require_permission(MANAGE_PRODUCTS)
def delete_product_route(product_id: int):
    if not get_services().catalog.soft_delete(product_id):
        raise NotFound("Product not found")
    return {"message": "Product deleted successfully"}, 200


@products_bp.put("/<int:product_id>/stock")
@require_auth
@require_permission(MANAGE_STOCK)
def set_stock_route(product_id: int):
    data = StockUpdate.from_payload(request.get_json(silent=True))
    product = get_services().catalog.set_stock(product_id, data.stock)
    if not product:
        raise NotFound("Product not found")
    return product.to_dict(), 200
