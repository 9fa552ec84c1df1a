from io import BytesIO, StringIO

import pandas as pd

from app.api.generate_bulk_data import MAX_PRICE, MIN_PRICE, generate_product_data


def test_generate_product_data_shape():
    df = generate_product_data(20)

    assert list(df.columns) == ["name", "price"]
    assert len(df) == 20
    assert df["price"].between(MIN_PRICE, MAX_PRICE).all()
    assert df["name"].str.len().gt(0).all()


def test_download_csv_dataset(client):
    r = client.get("/products/dummy-dataset", params={"rows": 5})

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "dummy_products_5.csv" in r.headers["content-disposition"]
    df = pd.read_csv(StringIO(r.text))
    assert len(df) == 5


def test_download_excel_dataset(client):
    r = client.get("/products/dummy-dataset", params={"rows": 3, "format": "excel"})

    assert r.status_code == 200
    df = pd.read_excel(BytesIO(r.content), sheet_name="Products", engine="openpyxl")
    assert list(df.columns) == ["name", "price"]
    assert len(df) == 3


def test_dataset_rows_must_be_positive(client):
    r = client.get("/products/dummy-dataset", params={"rows": 0})

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "BAD_REQUEST"


def test_bulk_import_csv(client):
    content = b"name,price\nLamp,12.50\nDesk,199.00\nChair,49.99\n"

    r = client.post("/products/bulk-import", files={"file": ("products.csv", content, "text/csv")})

    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "success"
    assert body["imported_count"] == 3

    listing = client.get("/products?page=1&limit=10").json()
    assert listing["totalCount"] == 3
    assert [p["name"] for p in listing["data"]] == ["Desk", "Chair", "Lamp"]


def test_generated_excel_dataset_can_be_imported(client):
    dataset = client.get("/products/dummy-dataset", params={"rows": 12, "format": "excel"})

    r = client.post(
        "/products/bulk-import",
        files={"file": ("dummy_products_12.xlsx", dataset.content, "application/octet-stream")},
    )

    assert r.status_code == 201
    assert r.json()["imported_count"] == 12
    assert client.get("/products").json()["totalCount"] == 12


def test_bulk_import_rejects_other_file_types(client):
    r = client.post("/products/bulk-import", files={"file": ("products.json", b"[]", "application/json")})

    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Uploaded file can be of .csv or .xlsx type only!!"


def test_bulk_import_requires_columns(client):
    r = client.post("/products/bulk-import", files={"file": ("products.csv", b"name\nLamp\n", "text/csv")})

    assert r.status_code == 400
    assert r.json()["error"]["details"] == {"missing": ["price"]}


def test_bulk_import_reports_bad_rows_and_writes_nothing(client):
    content = b"name,price\nLamp,12.50\nDesk,free\n"

    r = client.post("/products/bulk-import", files={"file": ("products.csv", content, "text/csv")})

    assert r.status_code == 400
    assert r.json()["error"]["details"] == {"rows": [3]}
    assert client.get("/products").json()["totalCount"] == 0


def test_bulk_import_rejects_blank_names(client):
    content = b"name,price\nLamp,12.50\n   ,3.00\n"

    r = client.post("/products/bulk-import", files={"file": ("products.csv", content, "text/csv")})

    assert r.status_code == 400
    assert r.json()["error"]["details"] == {"rows": [3]}
    assert client.get("/products").json()["totalCount"] == 0
