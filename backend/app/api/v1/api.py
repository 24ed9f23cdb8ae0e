"""
API router
Registers every endpoint.
"""
from fastapi import APIRouter

from backend.app.api.v1.endpoints import products

api_router = APIRouter()

api_router.include_router(
    products.router,
    prefix="/products",
    tags=["products"]
)
