from pydantic import BaseModel, Field, EmailStr
from typing import Optional, List
from enum import Enum


class PaymentMethodEnum(str, Enum):
    CASH = "cash"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    MOBILE_MONEY = "mobile_money"


class SaleItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., gt=0)
    unit_price: float = Field(..., gt=0)


class CreateSaleRequest(BaseModel):
    customer_id: Optional[str] = None
    customer_name: Optional[str] = Field(None, min_length=2)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    items: List[SaleItemRequest] = Field(..., min_length=1)
    payment_method: PaymentMethodEnum
    discount: float = Field(0, ge=0, le=100, description="Discount %")
    tax: float = Field(0, ge=0, description="Tax % on the discounted amount")
