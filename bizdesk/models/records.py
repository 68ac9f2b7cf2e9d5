"""
Corporate records: business documents, client documents and products.
"""

import datetime as dt
from typing import ClassVar, Optional

from pydantic import Field, PositiveInt

from bizdesk.config import MAX_NAME_LENGTH, MAX_NOTES_LENGTH
from bizdesk.errors import ValidationError

from .base import InputModel, LabelEnum, Money


class DocumentType(LabelEnum):
    LEGAL = "Legal"
    TAX = "Tax"
    COMPLIANCE = "Compliance"
    OTHER = "Other"


class ProductType(LabelEnum):
    SERVICE = "Service"
    PRODUCT = "Product"


class DocumentInput(InputModel):
    """Business-level document; expiry_date drives compliance alerts."""

    required_on_create: ClassVar[tuple[str, ...]] = ("business_id",)
    label: ClassVar[str] = "document"

    id: Optional[PositiveInt] = None
    business_id: Optional[PositiveInt] = None
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    type: DocumentType
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    expiry_date: Optional[dt.date] = None
    status: str = Field(default="Active", max_length=50)


class ClientDocumentInput(InputModel):
    label: ClassVar[str] = "client document"

    client_id: PositiveInt
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    type: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    file_path: Optional[str] = Field(default=None, max_length=1024)


class ProductInput(InputModel):
    """Inventory item. Saved as an update when id is present."""

    label: ClassVar[str] = "product"

    id: Optional[PositiveInt] = None
    business_id: Optional[PositiveInt] = None
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    type: ProductType = ProductType.SERVICE
    price: Money = 0.0
    description: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)

    @classmethod
    def from_payload(cls, payload, require_id: bool = False) -> "ProductInput":
        product = super().from_payload(payload, require_id=require_id)
        # business_id is only needed when the save turns into an insert
        if product.id is None and product.business_id is None:
            raise ValidationError("business_id is required", field="business_id")
        return product
