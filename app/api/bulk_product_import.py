from fastapi import APIRouter, Depends, UploadFile, File, status
import time
import pandas as pd
from io import BytesIO

from app.deps import get_product_service
from app.exceptions import BadRequestError
from app.log import get_logger
from app.models import ProductCreate
from app.schemas import BulkImportResult
from app.services import ProductService

router = APIRouter(prefix="/products", tags=["products"])
log = get_logger(__name__)

REQUIRED_COLUMNS = ("name", "price")


def read_upload(file: UploadFile) -> pd.DataFrame:
    filename = (file.filename or "").lower()
    if not filename.endswith((".csv", ".xlsx")):
        raise BadRequestError(
            "Uploaded file can be of .csv or .xlsx type only!!",
            details={"filename": file.filename},
        )

    try:
        if filename.endswith(".xlsx"):
            # openpyxl needs a seekable buffer
            return pd.read_excel(BytesIO(file.file.read()), engine="openpyxl")
        return pd.read_csv(file.file)
    except (ValueError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise BadRequestError(f"Could not read uploaded file: {e}", details={"filename": file.filename})


def rows_to_products(df: pd.DataFrame) -> list[ProductCreate]:
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise BadRequestError("Uploaded file is missing required columns.", details={"missing": missing})

    df = df[list(REQUIRED_COLUMNS)].dropna(how="all").copy()
    if df.empty:
        raise BadRequestError("Uploaded file contains no products.")

    df["name"] = df["name"].fillna("").astype(str).str.strip()
    df["price"] = pd.to_numeric(df["price"], errors="coerce")
    invalid = df[df["name"].eq("") | df["price"].isna()]
    if not invalid.empty:
        # +2: header line and 1-based numbering
        raise BadRequestError(
            "Every row needs a name and a numeric price.",
            details={"rows": [int(i) + 2 for i in invalid.index]},
        )

    return [
        ProductCreate(name=name, price=float(price))
        for name, price in df.itertuples(index=False, name=None)
    ]


@router.post(
    "/bulk-import",
    response_model=BulkImportResult,
    status_code=status.HTTP_201_CREATED,
    summary="Bulk upload products from CSV or Excel",
)
def bulk_product_import(
    file: UploadFile = File(...),
    service: ProductService = Depends(get_product_service),
):
    start = time.perf_counter()

    products = rows_to_products(read_upload(file))
    process_end = time.perf_counter()

    imported_count = service.create_many(products)

    end = time.perf_counter()
    log.info(
        "bulk_import_finished",
        filename=file.filename,
        imported_count=imported_count,
        processing_ms=round((process_end - start) * 1000, 2),
    )
    return BulkImportResult(
        status="success",
        imported_count=imported_count,
        time_taken_ms=round((end - start) * 1000, 2),
    )
