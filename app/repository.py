from typing import Iterable, Literal, Protocol, Sequence

from sqlalchemy import func
from sqlmodel import Session, select

from app.models import Product

ProductOrder = Literal["price-descending"]


class ProductRepository(Protocol):
    """Data access used by :class:`app.services.ProductService`."""

    def count(self) -> int: ...

    def find_window(self, offset: int, limit: int, order_by: ProductOrder) -> Sequence[Product]: ...

    def add(self, product: Product) -> Product: ...

    def add_all(self, products: Iterable[Product]) -> int: ...


_ORDERINGS = {
    # id keeps equal prices in a stable order across pages
    "price-descending": (Product.price.desc(), Product.id.asc()),
}


class SQLModelProductRepository:
    def __init__(self, session: Session):
        self.session = session

    def count(self) -> int:
        return self.session.exec(select(func.count()).select_from(Product)).one()

    def find_window(self, offset: int, limit: int, order_by: ProductOrder) -> Sequence[Product]:
        query = (
            select(Product)
            .order_by(*_ORDERINGS[order_by])
            .offset(offset)
            .limit(limit)
        )
        return self.session.exec(query).all()

    def add(self, product: Product) -> Product:
        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)
        return product

    def add_all(self, products: Iterable[Product]) -> int:
        products = list(products)
        self.session.add_all(products)
        self.session.commit()
        return len(products)
