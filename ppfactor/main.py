from fastapi import FastAPI

from .config import get_settings
from .api.v1.router import v1_router

# Get settings
settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description=settings.api_description,
)

# Include API routers
app.include_router(v1_router, prefix="/api")

# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "ppfactor-api"}

@app.get("/")
async def root():
    return {
        "service": "Primitive Polynomial Factoring API",
        "version": settings.api_version,
        "docs": "/docs",
        "health": "/health"
    }
