import time
from typing import Iterable

from app.log import get_logger
from app.models import Product, ProductCreate
from app.pagination import PaginationRequest
from app.repository import ProductOrder, ProductRepository
from app.schemas import PaginatedResponse

log = get_logger(__name__)


class ProductService:
    """Lists products a page at a time and creates new ones.

    Store errors are not caught here; they reach the caller as raised.
    """

    def __init__(self, repository: ProductRepository, sort_by: ProductOrder = "price-descending"):
        self.repository = repository
        self.sort_by = sort_by

    def find_all(self, pagination: PaginationRequest) -> PaginatedResponse:
        start = time.perf_counter()

        total_count = self.repository.count()
        products = self.repository.find_window(pagination.skip, pagination.limit, self.sort_by)

        end = time.perf_counter()
        log.info(
            "products_listed",
            page=pagination.page,
            limit=pagination.limit,
            total_count=total_count,
            returned=len(products),
            duration_ms=round((end - start) * 1000, 2),
        )
        return PaginatedResponse(
            data=list(products),
            page=pagination.page,
            limit=pagination.limit,
            total_count=total_count,
        )

    def create(self, payload: ProductCreate) -> Product:
        product = self.repository.add(Product.model_validate(payload))
        log.info("product_created", product_id=product.id)
        return product

    def create_many(self, payloads: Iterable[ProductCreate]) -> int:
        imported = self.repository.add_all(Product.model_validate(p) for p in payloads)
        log.info("products_imported", imported_count=imported)
        return imported
