"""Python client for the inventory service: API access, UI state and a small CLI."""
from .api import ApiError, InventoryApiClient
from .controller import InventoryController
from .form import ProductForm
from .state import InventoryState, reduce

__all__ = [
    "ApiError",
    "InventoryApiClient",
    "InventoryController",
    "InventoryState",
    "ProductForm",
    "reduce",
]
