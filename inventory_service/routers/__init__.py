from .product_router import router as product_router
from .category_router import router as category_router
from .health_router import router as health_router

__all__ = ["product_router", "category_router", "health_router"]
