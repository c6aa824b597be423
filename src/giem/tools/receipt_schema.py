from typing import Optional
from pydantic import BaseModel, Field


class ExtractionResult(BaseModel):
    """
    Extract the NF-e number (Nota Fiscal), the name of the person who received
    the delivery, a summary of the products and, if visible, the delivery date
    from this delivery receipt or invoice.
    """

    nf_number: str = Field(description="The invoice number (Nota Fiscal)")
    receiver_name: str = Field(description="Name of the receiver")
    product_description: str = Field(description="Description or list of products")
    delivery_date: Optional[str] = Field(
        default=None, description="Date of delivery if visible (ISO format)"
    )


class Receipt(BaseModel):
    id: str
    created_at: str
    nf_number: str
    receiver_name: Optional[str] = None
    product_description: Optional[str] = None
    delivery_date: Optional[str] = None  # UTC ISO, e.g. "2024-10-05T14:30:00+00:00"
    image_path: Optional[str] = None     # path inside the storage bucket
    content_type: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def is_pdf(self) -> bool:
        return "pdf" in (self.content_type or "")
