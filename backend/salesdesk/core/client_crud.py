import logging
from typing import List, Optional, Sequence

from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, col, func, select

from salesdesk.models.client import Client, ClientCreate, ClientPurchaser, ClientUpdate
from salesdesk.models.order import Order, OrderDetail

logger = logging.getLogger(__name__)


def list_clients(*, session: Session) -> Sequence[Client]:
    return session.exec(select(Client)).all()


def get_client(*, session: Session, client_id: int) -> Optional[Client]:
    return session.get(Client, client_id)


def client_exists(*, session: Session, client_id: int) -> bool:
    # Goes to the database; the identity map may still hold a deleted row
    statement = select(Client.client_id).where(Client.client_id == client_id)
    return session.exec(statement).first() is not None


def search_clients_by_name(*, session: Session, name: str) -> Sequence[Client]:
    """Clients whose name contains `name`. Case sensitivity follows the database collation."""
    statement = select(Client).where(col(Client.name).contains(name, autoescape=True))
    return session.exec(statement).all()


def get_client_id_with_most_orders(*, session: Session) -> Optional[int]:
    """
    Identity of the client owning the most orders, or None when there are no orders.

    Ties go to the lowest client_id.
    """
    order_count = func.count(col(Order.order_id))
    statement = (
        select(Order.client_id, order_count)
        .group_by(Order.client_id)
        .order_by(order_count.desc(), col(Order.client_id))
        .limit(1)
    )
    row = session.exec(statement).first()
    if row is None:
        return None
    return row[0]


def list_clients_who_purchased_product(*, session: Session, product_id: int) -> List[ClientPurchaser]:
    """
    Distinct clients with at least one order line for `product_id`.

    Rows are distinct by client identity, so two clients sharing a name are
    both reported.
    """
    statement = (
        select(Client.client_id, Client.name)
        .join(Order, col(Order.client_id) == col(Client.client_id))
        .join(OrderDetail, col(OrderDetail.order_id) == col(Order.order_id))
        .where(OrderDetail.product_id == product_id)
        .distinct()
        .order_by(col(Client.client_id))
    )
    return [
        ClientPurchaser(client_id=client_id, client_name=name)
        for client_id, name in session.exec(statement).all()
    ]


def create_client(*, session: Session, client_create: ClientCreate) -> Client:
    db_client = Client.model_validate(client_create)
    session.add(db_client)
    session.commit()
    session.refresh(db_client)
    logger.info(f"Created client {db_client.client_id}")
    return db_client


def replace_client(*, session: Session, client_id: int, client_in: ClientUpdate) -> Optional[Client]:
    """
    Overwrite every field of client `client_id` with `client_in`.

    Returns None when the client does not exist, including when it was
    removed between the read and the write. Any other stale-data conflict is
    re-raised.
    """
    db_client = session.get(Client, client_id)
    if db_client is None:
        return None

    db_client.sqlmodel_update(client_in.model_dump())
    session.add(db_client)
    try:
        session.commit()
    except StaleDataError:
        session.rollback()
        if not client_exists(session=session, client_id=client_id):
            logger.warning(f"Client {client_id} vanished during update")
            return None
        raise
    session.refresh(db_client)
    logger.info(f"Updated client {client_id}")
    return db_client


def delete_client(*, session: Session, db_client: Client) -> None:
    client_id = db_client.client_id
    session.delete(db_client)
    session.commit()
    logger.info(f"Deleted client {client_id}")
