from typing import Optional

from sqlmodel import SQLModel, Field


class ProductBase(SQLModel):
    name: str = Field(nullable=False)
    price: float = Field(nullable=False, index=True)


class Product(ProductBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)


class ProductCreate(ProductBase):
    """Request body for creating a product."""
