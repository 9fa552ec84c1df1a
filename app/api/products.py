from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.config import Settings, get_settings
from app.deps import get_product_service
from app.models import Product, ProductCreate
from app.pagination import parse_pagination
from app.schemas import PaginatedResponse
from app.services import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get(
    "",
    response_model=PaginatedResponse,
    summary="Get a paginated list of products, most expensive first",
)
def list_products(
    # Taken as text so malformed values get a pagination error instead of a 422
    page: Optional[str] = Query(None, description="Page number to retrieve (1-based)."),
    limit: Optional[str] = Query(None, description="Number of items per page."),
    service: ProductService = Depends(get_product_service),
    settings: Settings = Depends(get_settings),
):
    pagination = parse_pagination(
        page,
        limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    return service.find_all(pagination)


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
):
    return service.create(payload)
