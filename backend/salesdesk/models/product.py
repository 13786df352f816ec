from typing import Optional
from sqlmodel import SQLModel, Field


class ProductBase(SQLModel):
    name: str = Field(..., min_length=1, description="Product name")
    description: Optional[str] = Field(None, description="Free text description, may be missing")
    price: Optional[float] = Field(None, ge=0, description="Unit price, may be missing")


class Product(ProductBase, table=True):
    __tablename__ = "product"
    product_id: Optional[int] = Field(default=None, primary_key=True)


class ProductCreate(ProductBase):
    product_id: Optional[int] = Field(
        None, ge=1, description="Explicit identity; assigned by the database when omitted"
    )


class ProductUpdate(ProductBase):
    """Full replacement payload. `product_id` must match the path id."""
    product_id: int


class ProductRead(ProductBase):
    product_id: int


class ProductDisplay(SQLModel):
    """Product with description and price filled in for display."""
    product_id: int
    name: str
    description: str
    price: float
