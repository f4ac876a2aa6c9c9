"""
Calculation endpoint tests — POST /api/calculate and /api/calculate/report.
"""

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


def _input(**overrides):
    payload = dict(SAMPLE_INPUT)
    payload.update(overrides)
    return payload


def test_calculate_returns_camel_case_results(client):
    resp = client.post("/api/calculate", json=SAMPLE_INPUT)
    assert resp.status_code == 200
    body = resp.json()
    assert body["unitsPerBox"] == 27
    assert body["boxesPerPalletLayer"] == 4
    assert body["layersPerPallet"] == 12
    assert body["totalUnitsPerPallet"] == 1296
    assert abs(body["totalCost"] - 16257.6) < 1e-6
    assert abs(body["estimatedDays"] - 4.2) < 1e-9
    assert "units_per_box" not in body


def test_calculate_accepts_target_products(client):
    resp = client.post("/api/calculate", json=_input(targetProducts=3000))
    assert resp.status_code == 200
    assert resp.json()["totalPalletsNeeded"] == 3
    assert resp.json()["totalBoxesNeeded"] == 112


def test_calculate_rejects_invalid_input_with_all_fields(client):
    resp = client.post("/api/calculate", json=_input(productWidth=0, workingDays=0))
    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["message"] == "Invalid packaging input: productWidth, workingDays"
    assert [e["field"] for e in detail["errors"]] == ["productWidth", "workingDays"]


def test_calculate_missing_field_is_schema_error(client):
    payload = _input()
    del payload["productWidth"]
    resp = client.post("/api/calculate", json=payload)
    assert resp.status_code == 422


def test_report(client):
    resp = client.post("/api/calculate/report?start_date=2026-03-02", json=SAMPLE_INPUT)
    assert resp.status_code == 200
    report = resp.json()
    assert set(report) == {"results", "timeline", "truck", "analysis"}
    assert report["results"]["unitsPerBox"] == 27
    assert report["timeline"]["start_date"] == "2026-03-02"
    assert report["timeline"]["estimated_completion_date"] == "2026-03-07"
    assert len(report["timeline"]["phases"]) == 4
    assert report["truck"]["pallets_per_truck"] == 14
    assert report["analysis"]["pallet_rating"] == "poor"


def test_report_with_deadline(client):
    resp = client.post(
        "/api/calculate/report?start_date=2026-03-02",
        json=_input(deadline="2026-03-05"),
    )
    assert resp.status_code == 200
    deadline = resp.json()["timeline"]["deadline"]
    assert deadline["conflict"] is True
    assert deadline["recommended_speed"] == 605


def test_report_rejects_container_larger_than_pallet(client):
    payload = _input(productWidth=1300)
    for key in ("boxWidth", "boxLength", "boxHeight"):
        del payload[key]
    resp = client.post("/api/calculate/report", json=payload)
    assert resp.status_code == 422
    assert [e["field"] for e in resp.json()["detail"]["errors"]] == ["palletWidth"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_calculate_rejects_target_when_nothing_fits(client):
    resp = client.post("/api/calculate", json=_input(boxWidth=2000, targetProducts=100))
    assert resp.status_code == 422
    assert [e["field"] for e in resp.json()["detail"]["errors"]] == ["palletWidth"]
