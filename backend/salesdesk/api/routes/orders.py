from fastapi import APIRouter, HTTPException, Body, status
from typing import List

from salesdesk.api.deps import SessionDep
from salesdesk.core import client_crud, order_crud, product_crud
from salesdesk.models.order import (
    Order,
    OrderCreate,
    OrderDetailRead,
    OrderRead,
)

router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
    responses={
        404: {"description": "Order, client or product not found"}
    }
)


def to_order_read(order: Order) -> OrderRead:
    data = order.model_dump()
    data["details"] = [OrderDetailRead.model_validate(d) for d in order.details]
    return OrderRead(**data)


@router.get(
    "/",
    response_model=List[OrderRead],
    summary="List orders",
    description="Returns every order with its detail lines, by ascending order id.",
)
def list_orders(*, session: SessionDep):
    return [to_order_read(o) for o in order_crud.list_orders(session=session)]


@router.post(
    "/",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description="""
Records an order for a client together with its detail lines.

Business rules:
- The client must exist; otherwise 404.
- Every product referenced by a line must exist; otherwise 404.
- `order_date` defaults to the current UTC time.
""",
)
def create_order(
    *,
    session: SessionDep,
    order_in: OrderCreate = Body(...,
        examples=[
            {
                "client_id": 1,
                "details": [
                    {"product_id": 2, "quantity": 3, "unit_price": 49.90}
                ]
            }
        ]
    ),
):
    if not client_crud.client_exists(session=session, client_id=order_in.client_id):
        raise HTTPException(status_code=404, detail="Client not found")
    for detail in order_in.details:
        if not product_crud.product_exists(session=session, product_id=detail.product_id):
            raise HTTPException(status_code=404, detail=f"Product {detail.product_id} not found")

    db_order = order_crud.create_order(session=session, order_create=order_in)
    return to_order_read(db_order)


@router.get(
    "/{order_id}",
    response_model=OrderRead,
    summary="Get an order",
    responses={
        404: {"description": "Order not found"}
    }
)
def read_order(*, session: SessionDep, order_id: int):
    order = order_crud.get_order(session=session, order_id=order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return to_order_read(order)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete order",
    description="Removes an order and its detail lines.",
)
def delete_order(*, session: SessionDep, order_id: int):
    order = order_crud.get_order(session=session, order_id=order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    order_crud.delete_order(session=session, db_order=order)
    return None
