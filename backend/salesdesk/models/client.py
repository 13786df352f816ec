from typing import TYPE_CHECKING, List, Optional
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from salesdesk.models.order import Order


class ClientBase(SQLModel):
    name: str = Field(..., min_length=1, description="Client name")


class Client(ClientBase, table=True):
    __tablename__ = "client"
    client_id: Optional[int] = Field(default=None, primary_key=True)

    # Deleting a client removes its orders and, through them, their details
    orders: List["Order"] = Relationship(
        back_populates="client",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class ClientCreate(ClientBase):
    client_id: Optional[int] = Field(
        None, ge=1, description="Explicit identity; assigned by the database when omitted"
    )


class ClientUpdate(ClientBase):
    """Full replacement payload. `client_id` must match the path id."""
    client_id: int


class ClientRead(ClientBase):
    client_id: int


class ClientPurchaser(SQLModel):
    client_id: int
    client_name: str
