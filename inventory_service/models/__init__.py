from .category_models import Category, CategoryCreate, ObjectIdStr, WireModel
from .product_models import (
    REQUIRED_MESSAGES,
    Pagination,
    Product,
    ProductCreate,
    ProductDoc,
    ProductPage,
    ProductUpdate,
)
from .envelope import ApiResponse, FieldError, error_body
