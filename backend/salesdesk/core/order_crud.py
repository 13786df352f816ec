import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlmodel import Session, col, select

from salesdesk.models.order import Order, OrderCreate, OrderDetail

logger = logging.getLogger(__name__)


def list_orders(*, session: Session) -> Sequence[Order]:
    return session.exec(select(Order).order_by(col(Order.order_id))).all()


def get_order(*, session: Session, order_id: int) -> Optional[Order]:
    return session.get(Order, order_id)


def create_order(*, session: Session, order_create: OrderCreate) -> Order:
    """Insert an order and its detail lines in one transaction.

    A missing order date defaults to now; a naive one is taken as UTC.
    """
    order_date = order_create.order_date or datetime.now(timezone.utc)
    if order_date.tzinfo is None:
        order_date = order_date.replace(tzinfo=timezone.utc)
    db_order = Order(client_id=order_create.client_id, order_date=order_date)
    session.add(db_order)
    session.flush()

    for detail in order_create.details:
        session.add(
            OrderDetail(
                order_id=db_order.order_id,
                product_id=detail.product_id,
                quantity=detail.quantity,
                unit_price=detail.unit_price,
            )
        )
    session.commit()
    session.refresh(db_order)
    logger.info(f"Created order {db_order.order_id} for client {db_order.client_id} with {len(order_create.details)} line(s)")
    return db_order


def delete_order(*, session: Session, db_order: Order) -> None:
    order_id = db_order.order_id
    session.delete(db_order)
    session.commit()
    logger.info(f"Deleted order {order_id}")
