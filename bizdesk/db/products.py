"""
Products repository module for the inventory of products and services.
"""

import logging
from typing import Optional

from bizdesk.errors import NotFoundError
from bizdesk.models.records import ProductInput

from .base import BaseRepository
from .models import Product

logger = logging.getLogger(__name__)


class ProductRepository(BaseRepository):
    """Repository for products and services offered by a business."""

    def list_by_business(self, business_id: int) -> list[Product]:
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM products
                WHERE business_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (business_id,),
            )
            return [Product.from_row(row) for row in cursor.fetchall()]

    def get_by_id(self, product_id: int) -> Optional[Product]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM products WHERE id = ?", (product_id,)
            ).fetchone()
            return Product.from_row(row) if row else None

    def save(self, product: ProductInput) -> Product:
        """
        Upsert a product: update when it carries an id, insert otherwise.

        Raises:
            NotFoundError: If an id is given but no such product exists
        """
        columns = {
            "name": product.name,
            "type": product.type.value,
            "price": product.price,
            "description": product.description,
        }
        with self._get_connection() as conn:
            if product.id:
                if not self._update_fields(conn, "products", product.id, columns):
                    raise NotFoundError("Product", product.id)
                product_id = product.id
            else:
                product_id = self._insert(
                    conn, "products", {"business_id": product.business_id, **columns}
                )
            row = conn.execute(
                "SELECT * FROM products WHERE id = ?", (product_id,)
            ).fetchone()

        logger.info(f"Saved product {product_id} ({product.name})")
        return Product.from_row(row)

    def delete(self, product_id: int) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            return cursor.rowcount > 0
