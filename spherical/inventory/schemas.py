from pydantic import BaseModel, Field
from typing import Optional


class UpsertInventoryRequest(BaseModel):
    """POST /inventory — one stock record per (product, location)."""
    product_id: str
    quantity: int = Field(..., ge=0)
    location: str = Field(..., min_length=2, max_length=100)
    min_stock_level: int = Field(0, ge=0)


class UpdateInventoryRequest(BaseModel):
    quantity: Optional[int] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
