"""
Product schemas — solar equipment and GIS hardware sold through the site.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class CreateProductRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    description: str = Field(..., min_length=10)
    category: str = Field(..., min_length=2, max_length=100)
    price: float = Field(..., ge=0, description="Selling price")
    cost_price: Optional[float] = Field(None, ge=0, description="Purchase / cost price")
    sku: str = Field(..., min_length=2, max_length=64)
    image_url: Optional[str] = None
    specifications: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    in_stock: bool = True


class UpdateProductRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = Field(None, min_length=10)
    category: Optional[str] = Field(None, min_length=2, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    cost_price: Optional[float] = Field(None, ge=0)
    sku: Optional[str] = Field(None, min_length=2, max_length=64)
    image_url: Optional[str] = None
    specifications: Optional[str] = None
    features: Optional[List[str]] = None
    in_stock: Optional[bool] = None
