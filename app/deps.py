from fastapi import Depends
from sqlmodel import Session

from app.config import Settings, get_settings
from app.db import get_session
from app.repository import ProductRepository, SQLModelProductRepository
from app.services import ProductService


def get_product_repository(session: Session = Depends(get_session)) -> ProductRepository:
    return SQLModelProductRepository(session)


def get_product_service(
    repository: ProductRepository = Depends(get_product_repository),
    settings: Settings = Depends(get_settings),
) -> ProductService:
    return ProductService(repository, sort_by=settings.product_sort)
