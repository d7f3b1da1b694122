"""REST controllers."""

from src.api.controller.manufacturer_controller import router as manufacturer_router
from src.api.controller.product_controller import router as product_router

__all__ = ["manufacturer_router", "product_router"]
