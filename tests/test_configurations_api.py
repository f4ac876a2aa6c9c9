"""
Saved configuration tests — upsert per (product, user), listing, PDF report.
"""

from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from packaging_app import models
from packaging_app.calculators import compute
from packaging_app.pdf_generator import _fmt, generate_configuration_pdf, generate_summary
from packaging_app.routers.calculations import build_report
from packaging_app.schemas import ProductData
from packaging_app.snapshots import apply_snapshot

SAMPLE_INPUT = {
    "productWidth": 100,
    "productLength": 150,
    "productHeight": 50,
    "productWeight": 0.5,
    "productCost": 12.5,
    "boxWidth": 300,
    "boxLength": 450,
    "boxHeight": 150,
    "boxWeight": 0.1,
    "boxCost": 1.2,
    "palletWidth": 1200,
    "palletLength": 800,
    "palletMaxHeight": 1800,
    "productionSpeed": 100,
    "workingDays": 5,
}


def _product_id(client, sku="SNK-CHIP-150"):
    products = client.get("/api/products/").json()
    return next(p["product_id"] for p in products if p["sku"] == sku)


def _save(client, product_id, name="Standard case", user_id="u1", **data_overrides):
    data = dict(SAMPLE_INPUT)
    data.update(data_overrides)
    return client.post("/api/configurations/", json={
        "product_id": product_id,
        "user_id": user_id,
        "configuration_name": name,
        "notes": "Export pallet",
        "data": data,
    })


def test_save_computes_results(seeded_client, db):
    product_id = _product_id(seeded_client)
    resp = _save(seeded_client, product_id)
    assert resp.status_code == 200
    body = resp.json()
    assert body["configuration_name"] == "Standard case"
    assert body["data"]["boxWidth"] == 300
    assert body["results"]["unitsPerBox"] == 27
    assert body["results"]["totalUnitsPerPallet"] == 1296

    row = db.query(models.PackagingConfiguration).filter(
        models.PackagingConfiguration.id == body["id"]
    ).first()
    assert row.units_per_box == 27
    assert row.notes == "Export pallet"


def test_save_again_overwrites_same_product_and_user(seeded_client):
    product_id = _product_id(seeded_client)
    first = _save(seeded_client, product_id).json()
    second = _save(seeded_client, product_id, name="Bigger order", targetPallets=5).json()
    assert second["id"] == first["id"]
    assert second["configuration_name"] == "Bigger order"
    assert second["results"]["totalBoxesNeeded"] == 240

    listed = seeded_client.get("/api/configurations/", params={"user_id": "u1"}).json()
    assert len(listed) == 1


def test_other_user_gets_own_configuration(seeded_client):
    product_id = _product_id(seeded_client)
    mine = _save(seeded_client, product_id, user_id="u1").json()
    theirs = _save(seeded_client, product_id, user_id="u2").json()
    assert mine["id"] != theirs["id"]
    assert len(seeded_client.get("/api/configurations/", params={"product_id": product_id}).json()) == 2


def test_anonymous_save_upserts_too(seeded_client):
    product_id = _product_id(seeded_client)
    first = _save(seeded_client, product_id, user_id=None).json()
    second = _save(seeded_client, product_id, user_id=None, name="Renamed").json()
    assert first["id"] == second["id"]


def test_blank_name_rejected(seeded_client):
    resp = _save(seeded_client, _product_id(seeded_client), name="   ")
    assert resp.status_code == 422


def test_unknown_product_rejected(client):
    assert _save(client, 9999).status_code == 404


def test_invalid_input_is_not_saved(seeded_client, db):
    resp = _save(seeded_client, _product_id(seeded_client), productWidth=0)
    assert resp.status_code == 422
    assert resp.json()["detail"]["errors"][0]["field"] == "productWidth"
    assert db.query(models.PackagingConfiguration).count() == 0


def test_target_when_nothing_fits_is_not_saved(seeded_client, db):
    product_id = _product_id(seeded_client)
    resp = _save(seeded_client, product_id, boxWidth=2000, targetProducts=100)
    assert resp.status_code == 422
    assert resp.json()["detail"]["errors"][0]["field"] == "palletWidth"
    assert db.query(models.PackagingConfiguration).count() == 0

    # Listing still works afterwards
    assert seeded_client.get("/api/configurations/").status_code == 200


def test_saved_configuration_seeds_the_product(seeded_client):
    product_id = _product_id(seeded_client)
    saved = _save(seeded_client, product_id, targetProducts=3000).json()

    seed = seeded_client.get(
        f"/api/products/{product_id}/configuration", params={"user_id": "u1"}
    ).json()
    assert seed["from_saved"] is True
    assert seed["configuration_id"] == saved["id"]
    assert seed["data"]["targetProducts"] == 3000
    assert seed["data"]["boxHeight"] == 150

    # Another user still starts from the defaults
    other = seeded_client.get(
        f"/api/products/{product_id}/configuration", params={"user_id": "u2"}
    ).json()
    assert other["from_saved"] is False


def test_product_list_flags_configured_products(seeded_client):
    product_id = _product_id(seeded_client)
    _save(seeded_client, product_id)
    products = seeded_client.get("/api/products/", params={"user_id": "u1"}).json()
    flagged = [p["product_id"] for p in products if p["has_configuration"]]
    assert flagged == [product_id]


def test_get_and_delete(seeded_client):
    saved = _save(seeded_client, _product_id(seeded_client)).json()
    resp = seeded_client.get(f"/api/configurations/{saved['id']}")
    assert resp.status_code == 200
    assert resp.json()["results"]["layersPerPallet"] == 12

    resp = seeded_client.delete(f"/api/configurations/{saved['id']}")
    assert resp.json() == {"ok": True, "deleted": saved["id"]}
    assert seeded_client.get(f"/api/configurations/{saved['id']}").status_code == 404


def test_download_pdf(seeded_client):
    saved = _save(seeded_client, _product_id(seeded_client), deadline="2026-03-05").json()
    resp = seeded_client.get(f"/api/configurations/{saved['id']}/pdf")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="Packaging-SNK-CHIP-150.pdf"' in resp.headers["content-disposition"]
    assert resp.content[:4] == b"%PDF"


def test_pdf_for_missing_configuration(client):
    assert client.get("/api/configurations/9999/pdf").status_code == 404


# ============================================================
# PDF generator
# ============================================================

def _sample_data():
    return ProductData.model_validate(SAMPLE_INPUT)


def test_generate_summary_with_box():
    data = _sample_data()
    results = compute(data).model_dump(by_alias=True)
    summary = generate_summary(data, results)
    assert summary.startswith("27 units per box, 4 boxes per layer, 12 layers per pallet.")
    assert "1,296 units per pallet, 1 pallet in total." in summary


def test_generate_summary_without_box():
    data = _sample_data().model_copy(update={"box_width": None, "box_length": None, "box_height": None})
    results = compute(data).model_dump(by_alias=True)
    assert generate_summary(data, results).startswith("60 units per layer (no secondary packaging)")


def test_generate_configuration_pdf():
    data = _sample_data()
    header = {
        "company_name": "Acme Foods",
        "configuration_name": "Standard case",
        "product_name": "Tortilla Chips 150 g",
        "sku": "SNK-CHIP-150",
        "notes": "Stretch wrap — two layers",
        "updated_at": datetime(2026, 3, 1, 9, 30),
    }
    pdf_bytes = bytes(generate_configuration_pdf(header, data, build_report(data)))
    assert pdf_bytes[:4] == b"%PDF"
    assert len(pdf_bytes) > 1000


def test_costs_have_no_currency_symbol_by_default():
    assert _fmt(16257.6) == "16,257.60"
    assert _fmt(None) == "0.00"
    assert _fmt(1.2, "EUR ") == "EUR 1.20"


def test_generate_configuration_pdf_with_currency_symbol():
    data = _sample_data()
    header = {"company_name": "Acme Foods", "currency_symbol": "$", "configuration_name": "Standard case"}
    pdf_bytes = bytes(generate_configuration_pdf(header, data, build_report(data)))
    assert pdf_bytes[:4] == b"%PDF"


# ============================================================
# Database constraints
# ============================================================

def _configuration_row(product_id, user_id):
    data = _sample_data()
    row = models.PackagingConfiguration(
        product_id=product_id, user_id=user_id, configuration_name="Direct insert",
    )
    apply_snapshot(row, data, compute(data))
    return row


def test_database_rejects_second_anonymous_configuration(seeded_client, db):
    product_id = _product_id(seeded_client)
    db.add(_configuration_row(product_id, None))
    db.commit()

    db.add(_configuration_row(product_id, None))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_database_allows_anonymous_and_named_side_by_side(seeded_client, db):
    product_id = _product_id(seeded_client)
    db.add(_configuration_row(product_id, None))
    db.add(_configuration_row(product_id, "u1"))
    db.commit()
    assert db.query(models.PackagingConfiguration).count() == 2
