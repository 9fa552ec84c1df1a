from pydantic import BaseModel, ConfigDict, Field
from typing import List
from app.models import Product


class PaginatedResponse(BaseModel):
    """Model for the list endpoint response."""
    model_config = ConfigDict(populate_by_name=True)

    data: List[Product]
    page: int
    limit: int
    total_count: int = Field(alias="totalCount")


class BulkImportResult(BaseModel):
    status: str
    imported_count: int
    time_taken_ms: float
