import logging
from typing import List

from fastapi import APIRouter, Body, HTTPException, Request, Response, status

from salesdesk.api.deps import SessionDep
from salesdesk.core import client_crud
from salesdesk.models.client import ClientCreate, ClientPurchaser, ClientRead, ClientUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/clients",
    tags=["Clients"],
    responses={
        400: {"description": "Bad Request", "content": {"application/json": {"example": {"detail": "Client id mismatch"}}}},
        404: {"description": "Not Found",   "content": {"application/json": {"example": {"detail": "Client not found"}}}}
    }
)

@router.get(
    "/",
    response_model=List[ClientRead],
    summary="List Clients",
    description="Returns every client in storage order, unfiltered.",
)
def list_clients(session: SessionDep) -> List[ClientRead]:
    """
    ### Example Response
    ```json
    [
      {"client_id": 1, "name": "Acme Corp"},
      {"client_id": 2, "name": "Acme Ltd"}
    ]
    ```
    """
    return client_crud.list_clients(session=session)


# Fixed paths are declared before "/{client_id}" so they are never parsed as ids

@router.get(
    "/search/{name}",
    response_model=List[ClientRead],
    summary="Search Clients by Name",
    description="Returns clients whose name contains the given fragment.",
)
def search_clients(session: SessionDep, name: str) -> List[ClientRead]:
    """
    Business Rules:
    - Matching is a substring match; case sensitivity follows the database collation.
    - `%` and `_` in the fragment are matched literally.
    - Returns HTTP 404 when nothing matches.

    ### Example Request
    ```http
    GET /clients/search/Acme HTTP/1.1
    ```
    """
    clients = client_crud.search_clients_by_name(session=session, name=name)
    if not clients:
        raise HTTPException(
            status_code=404,
            detail=f"No clients found with a name containing '{name}'",
        )
    return clients


@router.get(
    "/mostOrders",
    response_model=ClientRead,
    summary="Client with Most Orders",
    description="Returns the client that placed the largest number of orders.",
)
def read_client_with_most_orders(session: SessionDep) -> ClientRead:
    """
    Business Rules:
    - Orders are grouped by client and counted; on a tie the lowest `client_id` wins.
    - Returns HTTP 404 when there are no orders at all.
    - Returns HTTP 404 when the top client id no longer resolves to a client.
    """
    client_id = client_crud.get_client_id_with_most_orders(session=session)
    if client_id is None:
        raise HTTPException(status_code=404, detail="No clients found.")

    client = client_crud.get_client(session=session, client_id=client_id)
    if not client:
        logger.warning(f"Orders reference missing client {client_id}")
        raise HTTPException(status_code=404, detail="Client not found.")
    return client


@router.get(
    "/purchasedProduct/{product_id}",
    response_model=List[ClientPurchaser],
    summary="Clients who Purchased a Product",
    description="Returns the distinct clients with at least one order line for the product.",
)
def list_product_purchasers(session: SessionDep, product_id: int) -> List[ClientPurchaser]:
    """
    Business Rules:
    - One row per client identity; clients sharing a name are listed separately.
    - Returns HTTP 404 when nobody bought the product.

    ### Example Response
    ```json
    [
      {"client_id": 1, "client_name": "Ann"},
      {"client_id": 4, "client_name": "Ann"}
    ]
    ```
    """
    purchasers = client_crud.list_clients_who_purchased_product(session=session, product_id=product_id)
    if not purchasers:
        raise HTTPException(
            status_code=404,
            detail=f"No clients found who purchased the product with ProductId {product_id}",
        )
    return purchasers


@router.post(
    "/",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Client",
    description="Registers a new client. The id is assigned by the database unless supplied.",
)
def create_client(
    session: SessionDep,
    request: Request,
    response: Response,
    client_in: ClientCreate = Body(
        ...,
        examples=[{"name": "João Silva"}],
    ),
) -> ClientRead:
    """
    Business Rules:
    - A supplied `client_id` that is already taken returns HTTP 400.
    - The `Location` header points at the new client.

    ### Example Request
    ```json
    {"name": "João Silva"}
    ```

    ### Example Response
    ```json
    {"client_id": 3, "name": "João Silva"}
    ```
    """
    if client_in.client_id is not None and client_crud.client_exists(
        session=session, client_id=client_in.client_id
    ):
        raise HTTPException(status_code=400, detail="Client with this id already exists")

    db_client = client_crud.create_client(session=session, client_create=client_in)
    response.headers["Location"] = str(request.url_for("read_client", client_id=db_client.client_id))
    return db_client


@router.get(
    "/{client_id}",
    response_model=ClientRead,
    summary="Get Client by ID",
    description="Retrieves a client by its id."
)
def read_client(session: SessionDep, client_id: int) -> ClientRead:
    """
    Business Rules:
    - Returns HTTP 404 if the client does not exist.
    """
    client = client_crud.get_client(session=session, client_id=client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.put(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Replace Client",
    description="Replaces every field of an existing client.",
)
def update_client(
    session: SessionDep,
    client_id: int,
    client_in: ClientUpdate = Body(
        ..., examples=[{"client_id": 3, "name": "João Souza"}]
    ),
):
    """
    Business Rules:
    - The body `client_id` must equal the path id, otherwise HTTP 400 and nothing is written.
    - Full replacement: there is no partial update.
    - If the client disappears while the update is being saved, HTTP 404.
    """
    if client_in.client_id != client_id:
        raise HTTPException(status_code=400, detail="Client id mismatch")

    client = client_crud.replace_client(session=session, client_id=client_id, client_in=client_in)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return None


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Client",
    description="Removes a client together with its orders.",
)
def delete_client(session: SessionDep, client_id: int):
    client = client_crud.get_client(session=session, client_id=client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")

    client_crud.delete_client(session=session, db_client=client)
    return None
