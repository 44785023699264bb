# Overview: Service-layer operations for the product catalog; encapsulates business logic and database work.

"""
Catalog Service

Products are soft-deleted only (is_active=False) so historical order lines
keep resolving. Listing returns active products only.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from ..extensions import db
from ..errors import InvalidArgument
from ..models import Product
from ..validation import MAX_INT

logger = logging.getLogger(__name__)

PRODUCT_MUTABLE_FIELDS = {
    "name", "description", "price", "stock", "image_url", "rating", "review_count", "is_active",
}


def apply_product_patch(p: Product, patch: dict) -> None:
    for k, v in patch.items():
        if k not in PRODUCT_MUTABLE_FIELDS:
            continue
        setattr(p, k, v)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CatalogService:
    def __init__(self, *, low_stock_threshold: int = 5):
        self.low_stock_threshold = low_stock_threshold

    def list_products(
        self,
        search: str | None = None,
        flavor: str | None = None,
        price_range: str | None = None,
    ) -> list[Product]:
        """
        Active products ordered by name.

        ``search`` and ``flavor`` are case-insensitive substring matches on
        the product name. ``flavor == "all"`` disables the flavor filter.
        ``price_range`` is accepted for client compatibility and not applied.
        """
        query = db.session.query(Product).filter(Product.is_active.is_(True))

        if search:
            query = query.filter(Product.name.ilike(f"%{_escape_like(search)}%", escape="\\"))

        if flavor and flavor != "all":
            query = query.filter(Product.name.ilike(f"%{_escape_like(flavor)}%", escape="\\"))

        if price_range:
            logger.debug("Ignoring priceRange=%r on product listing", price_range)

        return query.order_by(Product.name.asc(), Product.id.asc()).all()

    def get_product(self, product_id: int) -> Product | None:
        return db.session.get(Product, product_id)

    def create_product(self, patch: dict) -> Product:
        p = Product()
        apply_product_patch(p, patch)
        db.session.add(p)
        db.session.commit()
        logger.info("Created product id=%s name=%s", p.id, p.name)
        return p

    def update_product(self, product_id: int, patch: dict) -> Product | None:
        """Merge only the supplied fields into the stored row."""
        p = self.get_product(product_id)
        if not p:
            return None

        apply_product_patch(p, patch)
        db.session.commit()
        logger.info("Updated product id=%s fields=%s", p.id, ", ".join(sorted(patch.keys())))
        return p

    def soft_delete(self, product_id: int) -> bool:
        """
        Deactivate a product.

        Returns False if the product does not exist or is already inactive.
        """
        p = self.get_product(product_id)
        if not p or not p.is_active:
            return False

        p.is_active = False
        db.session.commit()
        logger.info("Soft-deleted product id=%s", p.id)
        return True

    def set_stock(self, product_id: int, stock: int) -> Product | None:
        if isinstance(stock, bool) or not isinstance(stock, int) or not 0 <= stock <= MAX_INT:
            raise InvalidArgument("Invalid stock value")

        p = self.get_product(product_id)
        if not p:
            return None

        p.stock = stock
        db.session.commit()
        logger.info("Set stock product id=%s stock=%s", p.id, stock)
        return p

    def low_stock_products(self) -> list[Product]:
        return (
            db.session.query(Product)
            .filter(Product.is_active.is_(True), Product.stock < self.low_stock_threshold)
            .order_by(Product.stock.asc(), Product.name.asc())
            .all()
        )

    def seed(self, products: list[dict]) -> int:
        """Insert ``products`` when the catalog is empty. Returns rows inserted."""
        if db.session.query(Product.id).first() is not None:
            logger.info("Products already exist, skipping seed")
            return 0

        for data in products:
            p = Product()
            apply_product_patch(p, {
                **data,
                "price": Decimal(str(data["price"])),
                "rating": Decimal(str(data.get("rating", "0.0"))),
            })
            db.session.add(p)

        db.session.commit()
        logger.info("Seeded %d products", len(products))
        return len(products)
