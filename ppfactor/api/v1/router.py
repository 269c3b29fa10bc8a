from fastapi import APIRouter
from .factor import router as factor_router

# Main v1 API router
v1_router = APIRouter(prefix="/v1")

# Include all v1 endpoints
v1_router.include_router(factor_router, tags=["factor"])
