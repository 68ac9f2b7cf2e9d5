"""
Product and service catalog operations.
"""

from bizdesk.errors import NotFoundError
from bizdesk.models import ProductInput

from .base import HandlerGroup, operation, payload_id, rows


class InventoryHandler(HandlerGroup):
    """Operations for the products and services a business sells."""

    @operation("get-products", "products-data")
    def get_products(self, payload):
        business_id = payload_id(payload, "business_id")
        return rows(self.repository.products.list_by_business(business_id))

    @operation("get-product-by-id", "product-data")
    def get_product_by_id(self, payload):
        product_id = payload_id(payload)
        product = self.repository.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product.to_dict()

    @operation("save-product", "product-saved")
    def save_product(self, payload):
        """Insert, or update when the payload carries an id."""
        product = self.repository.products.save(ProductInput.from_payload(payload))
        return {"success": True, "product": product.to_dict()}

    @operation("delete-product", "product-deleted")
    def delete_product(self, payload):
        product_id = payload_id(payload)
        return {"id": product_id, "deleted": self.repository.products.delete(product_id)}
