from .category_service import CategoryService
from .product_service import ProductService
from .exceptions import ConflictError, NotFoundError, ServiceError, ValidationError
