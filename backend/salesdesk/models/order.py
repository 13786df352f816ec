from typing import TYPE_CHECKING, List, Optional
from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from salesdesk.models.client import Client


class OrderBase(SQLModel):
    client_id: int = Field(..., foreign_key="client.client_id", description="ID of the client placing the order")
    order_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        description="Date and time when order was placed",
    )


class Order(OrderBase, table=True):
    __tablename__ = "order"
    order_id: Optional[int] = Field(default=None, primary_key=True)

    client: Optional["Client"] = Relationship(back_populates="orders")
    details: List["OrderDetail"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class OrderDetailBase(SQLModel):
    product_id: int = Field(..., foreign_key="product.product_id", description="ID of the product")
    quantity: int = Field(..., ge=1, description="Quantity of the product ordered")
    unit_price: float = Field(..., ge=0, description="Price per unit at time of order")


class OrderDetail(OrderDetailBase, table=True):
    __tablename__ = "order_detail"
    order_detail_id: Optional[int] = Field(default=None, primary_key=True)
    order_id: Optional[int] = Field(default=None, foreign_key="order.order_id")

    order: Optional["Order"] = Relationship(back_populates="details")


class OrderDetailCreate(OrderDetailBase):
    pass


class OrderDetailRead(OrderDetailBase):
    order_detail_id: int
    order_id: int


class OrderCreate(SQLModel):
    client_id: int
    order_date: Optional[datetime] = None
    details: List[OrderDetailCreate] = Field(default_factory=list)


class OrderRead(OrderBase):
    order_id: int
    details: List[OrderDetailRead]
