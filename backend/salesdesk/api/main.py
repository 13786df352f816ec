from fastapi import APIRouter
from salesdesk.api.routes import clients, orders, products

api_router = APIRouter()
api_router.include_router(clients.router)
api_router.include_router(products.router)
api_router.include_router(orders.router)
