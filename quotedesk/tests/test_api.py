"""
API endpoint tests for all routes.
Uses an in-memory collection store + dependency-overridden FastAPI test client.
"""
import base64
from datetime import date

from quotedesk.storage import Collection


async def _create_quotation(client, quotation_data, **overrides):
    r = await client.post("/api/quotations/", json=quotation_data(**overrides))
    assert r.status_code == 200
    return r.json()


# ===================== HEALTH / ROOT =====================


async def test_root(client):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "running"
    assert r.json()["app"] == "QuoteDesk"


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


# ===================== QUOTATIONS =====================


async def test_create_quotation(client, quotation_data):
    data = await _create_quotation(client, quotation_data)
    assert data["quotation_number"] == f"QT-{date.today().year}-0001"
    assert data["status"] == "draft"
    assert data["date"] == "2024-06-10"


async def test_create_quotation_registers_recipient(client, quotation_data):
    await _create_quotation(client, quotation_data, recipient="Network Dept")
    await _create_quotation(client, quotation_data, recipient="network dept")
    r = await client.get("/api/recipients/")
    assert [x["name"] for x in r.json()] == ["Network Dept"]


async def test_create_quotation_ignores_client_number(client, quotation_data):
    first = await _create_quotation(client, quotation_data)
    duplicate = await _create_quotation(client, quotation_data, quotation_number=first["quotation_number"])
    malformed = await _create_quotation(client, quotation_data, quotation_number="whatever")

    year = date.today().year
    assert duplicate["quotation_number"] == f"QT-{year}-0002"
    assert malformed["quotation_number"] == f"QT-{year}-0003"


async def test_create_quotation_unknown_vendor(client, quotation_data):
    r = await client.post("/api/quotations/", json=quotation_data(vendor_id="missing"))
    assert r.status_code == 404


async def test_create_quotation_rejects_negative_quantity(client, quotation_data):
    payload = quotation_data(items=[{"name": "Bad", "quantity": -1, "unit_price": 10}])
    r = await client.post("/api/quotations/", json=payload)
    assert r.status_code == 422


async def test_get_quotation_with_items(client, quotation_data):
    created = await _create_quotation(client, quotation_data)
    r = await client.get(f"/api/quotations/{created['id']}")
    assert r.status_code == 200
    data = r.json()
    assert len(data["quotation_items"]) == 3
    assert sum(i["total_price"] for i in data["quotation_items"]) == 310
    assert data["vendor_documents"] == []


async def test_get_quotation_not_found(client):
    r = await client.get("/api/quotations/missing")
    assert r.status_code == 404


async def test_list_quotations_filters(client, quotation_data):
    await _create_quotation(client, quotation_data, project_name="Tower Upgrade")
    await _create_quotation(client, quotation_data, project_name="Fiber Link", status="approved")

    r = await client.get("/api/quotations/")
    assert len(r.json()) == 2
    r = await client.get("/api/quotations/", params={"search": "fiber"})
    assert [q["project_name"] for q in r.json()] == ["Fiber Link"]
    r = await client.get("/api/quotations/", params={"status": "draft"})
    assert [q["project_name"] for q in r.json()] == ["Tower Upgrade"]


async def test_next_number(client, quotation_data):
    await _create_quotation(client, quotation_data)
    r = await client.get("/api/quotations/next-number")
    assert r.status_code == 200
    assert r.json()["quotation_number"] == f"QT-{date.today().year}-0002"


async def test_update_quotation_replaces_items(client, quotation_data):
    created = await _create_quotation(client, quotation_data)
    r = await client.put(
        f"/api/quotations/{created['id']}",
        json={"status": "invoiced", "items": [{"name": "Router", "quantity": 2, "unit_price": 40}]},
    )
    assert r.status_code == 200
    assert r.json()["status"] == "invoiced"

    r = await client.get(f"/api/quotations/{created['id']}")
    items = r.json()["quotation_items"]
    assert [(i["name"], i["total_price"]) for i in items] == [("Router", 80)]


async def test_update_quotation_rejects_null_required_field(client, quotation_data):
    created = await _create_quotation(client, quotation_data)
    for field in ("project_name", "date", "budget_type", "status"):
        r = await client.put(f"/api/quotations/{created['id']}", json={field: None})
        assert r.status_code == 422

    r = await client.get(f"/api/quotations/{created['id']}")
    assert r.json()["project_name"] == "Tower Upgrade"


async def test_update_quotation_clears_nullable_field(client, quotation_data):
    created = await _create_quotation(client, quotation_data, note="Draft note")
    r = await client.put(f"/api/quotations/{created['id']}", json={"note": None})
    assert r.status_code == 200
    assert r.json()["note"] is None


async def test_update_quotation_not_found(client):
    r = await client.put("/api/quotations/missing", json={"status": "approved"})
    assert r.status_code == 404


async def test_delete_quotation(client, store, quotation_data):
    created = await _create_quotation(client, quotation_data)
    r = await client.delete(f"/api/quotations/{created['id']}")
    assert r.status_code == 200
    assert await store.read(Collection.QUOTATION_ITEMS) == []

    r = await client.delete(f"/api/quotations/{created['id']}")
    assert r.status_code == 404


async def test_export_quotations_xlsx(client, quotation_data):
    await _create_quotation(client, quotation_data)
    r = await client.get("/api/quotations/export")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert r.content[:2] == b"PK"


async def test_export_quotations_empty(client):
    r = await client.get("/api/quotations/export")
    assert r.status_code == 404


async def test_quotation_pdf(client, quotation_data):
    created = await _create_quotation(client, quotation_data)
    r = await client.get(f"/api/quotations/{created['id']}/pdf")
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")


# ===================== LOOKUPS =====================


async def test_vendor_crud(client):
    r = await client.post("/api/vendors/", json={"name": "Acme"})
    assert r.status_code == 200
    vendor_id = r.json()["id"]

    r = await client.post("/api/vendors/", json={"name": "ACME "})
    assert r.json()["id"] == vendor_id

    r = await client.get("/api/vendors/")
    assert len(r.json()) == 1

    r = await client.delete(f"/api/vendors/{vendor_id}")
    assert r.status_code == 200
    r = await client.delete(f"/api/vendors/{vendor_id}")
    assert r.status_code == 404


async def test_lookup_blank_name_rejected(client):
    r = await client.post("/api/categories/", json={"name": "   "})
    assert r.status_code == 422


async def test_item_types_and_categories(client):
    await client.post("/api/item-types/", json={"name": "Hardware"})
    await client.post("/api/categories/", json={"name": "Network"})
    r = await client.get("/api/item-types/")
    assert [t["name"] for t in r.json()] == ["Hardware"]
    r = await client.get("/api/categories/")
    assert [c["name"] for c in r.json()] == ["Network"]


# ===================== EXCHANGE RATES =====================


async def test_exchange_rates(client):
    r = await client.get("/api/exchange-rates/latest")
    assert r.status_code == 200
    assert r.json() is None

    await client.post("/api/exchange-rates/", json={"rate": 1400, "date": "2024-01-01"})
    await client.post("/api/exchange-rates/", json={"rate": 1500, "date": "2024-03-01"})

    r = await client.get("/api/exchange-rates/latest")
    assert r.json()["rate"] == 1500
    r = await client.get("/api/exchange-rates/")
    assert [x["rate"] for x in r.json()] == [1500, 1400]


async def test_exchange_rate_must_be_positive(client):
    r = await client.post("/api/exchange-rates/", json={"rate": 0, "date": "2024-01-01"})
    assert r.status_code == 422


# ===================== SETTINGS =====================


async def test_settings_update(client):
    r = await client.get("/api/settings/")
    assert r.json() is None

    r = await client.put("/api/settings/", json={"company_address": "Erbil"})
    assert r.status_code == 200
    r = await client.get("/api/settings/")
    assert r.json()["company_address"] == "Erbil"


async def test_logo_upload_and_fetch(client, test_settings):
    data_url = "data:image/png;base64," + base64.b64encode(b"\x89PNGlogo").decode("ascii")
    r = await client.post("/api/settings/logo", json={"data_url": data_url, "filename": "logo.png"})
    assert r.status_code == 200
    assert r.json()["logo_url"] == str(test_settings.IMAGES_DIR / "logo.png")

    r = await client.get("/api/settings/logo")
    assert r.json()["data_url"] == data_url


async def test_logo_invalid(client):
    r = await client.post("/api/settings/logo", json={"data_url": "%%%", "filename": "logo.png"})
    assert r.status_code == 400


async def test_logo_missing(client):
    r = await client.get("/api/settings/logo")
    assert r.status_code == 404


# ===================== DOCUMENTS =====================


async def test_document_upload_download_delete(client, quotation_data, test_settings):
    created = await _create_quotation(client, quotation_data)

    r = await client.post(
        "/api/documents/upload",
        data={"quotation_id": created["id"], "document_type": "invoice"},
        files={"file": ("vendor_offer.pdf", b"%PDF-1.4 offer", "application/pdf")},
    )
    assert r.status_code == 200
    document = r.json()
    assert document["file_type"] == "pdf"
    assert document["document_type"] == "invoice"
    assert document["file_path"].startswith(str(test_settings.DOCUMENTS_DIR / created["id"]))

    r = await client.get("/api/documents/", params={"quotation_id": created["id"]})
    assert [d["id"] for d in r.json()] == [document["id"]]

    r = await client.get(f"/api/documents/{document['id']}/download")
    assert r.status_code == 200
    assert r.content == b"%PDF-1.4 offer"

    r = await client.delete(f"/api/documents/{document['id']}")
    assert r.status_code == 200
    r = await client.get(f"/api/documents/{document['id']}/download")
    assert r.status_code == 404


async def test_document_upload_rejects_extension(client, quotation_data):
    created = await _create_quotation(client, quotation_data)
    r = await client.post(
        "/api/documents/upload",
        data={"quotation_id": created["id"]},
        files={"file": ("script.exe", b"MZ", "application/octet-stream")},
    )
    assert r.status_code == 400


async def test_document_upload_too_large(client, quotation_data):
    created = await _create_quotation(client, quotation_data)
    r = await client.post(
        "/api/documents/upload",
        data={"quotation_id": created["id"]},
        files={"file": ("big.pdf", b"x" * 2048, "application/pdf")},
    )
    assert r.status_code == 413


async def test_document_upload_unknown_quotation(client):
    r = await client.post(
        "/api/documents/upload",
        data={"quotation_id": "missing"},
        files={"file": ("offer.pdf", b"%PDF", "application/pdf")},
    )
    assert r.status_code == 404


# ===================== REPORTS / DASHBOARD =====================


async def test_item_type_report(client, quotation_data):
    r = await client.post("/api/item-types/", json={"name": "Hardware"})
    type_id = r.json()["id"]
    items = [
        {"name": "Antenna", "quantity": 2, "unit_price": 100, "type_id": type_id},
        {"name": "Misc", "quantity": 1, "unit_price": 5},
    ]
    await _create_quotation(client, quotation_data, items=items)

    params = {"start_date": "2024-06-01", "end_date": "2024-06-30"}
    r = await client.get("/api/reports/item-types", params=params)
    assert r.status_code == 200
    rows = {row["type_name"]: row for row in r.json()["rows"]}
    assert rows["Hardware"]["total_amount"] == 200
    assert rows["No Type"]["quantity"] == 1

    r = await client.get(f"/api/reports/item-types/{type_id}", params=params)
    assert r.status_code == 200
    assert r.json()["by_project"][0]["project_name"] == "Tower Upgrade"

    r = await client.get("/api/reports/item-types/export", params=params)
    assert r.status_code == 200
    assert r.content[:2] == b"PK"


async def test_item_type_report_bad_range(client):
    r = await client.get(
        "/api/reports/item-types", params={"start_date": "2024-07-01", "end_date": "2024-06-01"}
    )
    assert r.status_code == 400


async def test_dashboard(client, quotation_data):
    await client.post("/api/vendors/", json={"name": "Acme"})
    await client.post("/api/exchange-rates/", json={"rate": 1500, "date": "2024-03-01"})
    await _create_quotation(client, quotation_data, status="invoiced")
    await _create_quotation(client, quotation_data, status="rejected")

    r = await client.get("/api/dashboard/")
    assert r.status_code == 200
    stats = r.json()
    assert stats["total_quotations"] == 2
    assert stats["active_vendors"] == 1
    assert stats["total_profit"] == 300000
    assert stats["approval_rate"] == 50.0
    assert stats["exchange_rate"] == 1500


# ===================== DATA TRANSFER =====================


async def test_data_export_import(client, store, quotation_data):
    await _create_quotation(client, quotation_data)
    r = await client.get("/api/data/export")
    assert r.status_code == 200
    bundle = r.json()
    assert bundle["version"] == "1.0.0"
    assert len(bundle["quotations"]) == 1

    await client.delete(f"/api/quotations/{bundle['quotations'][0]['id']}")
    r = await client.post("/api/data/import", json=bundle)
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert len(await store.read(Collection.QUOTATIONS)) == 1


async def test_data_import_invalid(client):
    r = await client.post("/api/data/import", json={"quotations": []})
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid data format"
