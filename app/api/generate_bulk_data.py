import random

import pandas as pd

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse, Response
from typing import Literal
from faker import Faker
from io import BytesIO, StringIO

from app.config import Settings, get_settings
from app.exceptions import BadRequestError
from app.log import get_logger

router = APIRouter(prefix="/products", tags=["products"])
fake = Faker()
log = get_logger(__name__)

CATEGORIES = ["Shirt", "Jeans", "Footwear", "Jacket", "Hat"]
MIN_PRICE = 10.99
MAX_PRICE = 499.99


@router.get(
    "/dummy-dataset",
    summary="Generate and download a dummy product dataset",
    response_description="A file download (CSV or Excel) containing the product data.",
)
def generate_dataset(
    rows: int = 100,
    format: Literal["csv", "excel"] = "csv",
    settings: Settings = Depends(get_settings),
):
    if rows <= 0 or rows > settings.max_generated_rows:
        raise BadRequestError(
            f"The 'rows' parameter must be a positive integer, max {settings.max_generated_rows}.",
            details={"rows": rows},
        )

    df = generate_product_data(rows)
    filename = f"dummy_products_{rows}"
    log.info("dummy_dataset_generated", rows=rows, format=format)

    if format == "csv":
        stream = StringIO()
        df.to_csv(stream, index=False, encoding="utf-8")

        return StreamingResponse(
            iter([stream.getvalue()]),
            media_type="text/csv",
            headers={
                "Content-Disposition": f"attachment; filename={filename}.csv",
                "Content-Type": "text/csv; charset=utf-8",
            },
        )

    stream = BytesIO()
    df.to_excel(stream, index=False, sheet_name="Products", engine="openpyxl")
    stream.seek(0)

    return Response(
        content=stream.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={
            "Content-Disposition": f"attachment; filename={filename}.xlsx",
        },
    )


def generate_product_data(num_rows: int) -> pd.DataFrame:
    """Generates a Pandas DataFrame of dummy products with ``name`` and ``price`` columns."""
    data = []

    for _ in range(num_rows):
        data.append(
            {
                "name": f"{fake.color_name()} {random.choice(CATEGORIES)}",
                "price": round(random.uniform(MIN_PRICE, MAX_PRICE), 2),
            }
        )

    return pd.DataFrame(data, columns=["name", "price"])
