from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(runtime_env):
    from app.main import create_app

    return TestClient(create_app())


def _risk_form(**overrides) -> dict:
    form = {
        "hazard_type": "Kjemikalier i oppvask",
        "hazard_description": "Etsende rengjøringsmidler",
        "likelihood": "2",
        "consequence": "4",
        "preventive_measures": "Vernebriller",
        "responsible_person": "Per",
        "deadline": "",
        "status": "Open",
        "notes": "",
    }
    form.update(overrides)
    return form


def test_app_health_smoke(client) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert client.get("/api/health").json()["status"] == "ok"


def test_risk_score_preview(client) -> None:
    response = client.get("/api/risk-score", params={"likelihood": 4, "consequence": 3})
    assert response.status_code == 200
    assert response.json() == {
        "likelihood": 4,
        "consequence": 3,
        "score": 12,
        "level": "High",
        "color": "#FF8C00",
    }


@pytest.mark.parametrize(
    "params,field",
    [
        ({"likelihood": 0, "consequence": 3}, "likelihood"),
        ({"likelihood": 6, "consequence": 1}, "likelihood"),
        ({"likelihood": "2.5", "consequence": 1}, "likelihood"),
        ({"likelihood": 2, "consequence": 9}, "consequence"),
    ],
)
def test_risk_score_preview_rejects_invalid(client, params, field) -> None:
    response = client.get("/api/risk-score", params=params)
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "invalid_argument"
    assert body["field"] == field


def test_api_crud(client) -> None:
    created = client.post("/api/risks", json={"hazard_type": "Fall fra stige", "likelihood": 3, "consequence": 5})
    assert created.status_code == 201
    risk = created.json()
    assert (risk["risk_score"], risk["risk_level"], risk["status"]) == (15, "High", "Open")

    fetched = client.get(f"/api/risks/{risk['id']}")
    assert fetched.json()["hazard_type"] == "Fall fra stige"

    updated = client.put(
        f"/api/risks/{risk['id']}",
        json={"hazard_type": "Fall fra stige", "likelihood": 4, "consequence": 5, "status": "In Progress"},
    )
    assert updated.status_code == 200
    assert (updated.json()["risk_score"], updated.json()["risk_level"]) == (20, "Critical")

    listing = client.get("/api/risks").json()
    assert [item["id"] for item in listing["items"]] == [risk["id"]]
    assert listing["summary"]["levels"]["Critical"] == 1

    assert client.delete(f"/api/risks/{risk['id']}").json() == {"deleted": risk["id"]}
    assert client.get(f"/api/risks/{risk['id']}").status_code == 404
    assert client.delete(f"/api/risks/{risk['id']}").json() == {"error": "not_found"}


def test_api_rejects_invalid_payload(client) -> None:
    response = client.post("/api/risks", json={"hazard_type": "Fall", "likelihood": 2.5, "consequence": 1})
    assert response.status_code == 400
    assert response.json()["field"] == "likelihood"
    assert client.get("/api/risks").json()["items"] == []


def test_api_matrix(client) -> None:
    client.post("/api/risks", json={"hazard_type": "Brann", "likelihood": 5, "consequence": 5})
    matrix = client.get("/api/risk-matrix").json()
    assert matrix["rows"][0][4]["count"] == 1
    assert [item["range"] for item in matrix["legend"]] == ["1-4", "5-9", "10-15", "16-25"]


def test_form_submit_creates_and_lists(client) -> None:
    response = client.post("/risks", data=_risk_form(), follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/risks"

    page = client.get("/risks")
    assert page.status_code == 200
    assert "Kjemikalier i oppvask" in page.text
    assert "Medium (8)" in page.text


def test_form_submit_invalid_rating_highlights_field(client) -> None:
    response = client.post("/risks", data=_risk_form(consequence="7"), follow_redirects=False)
    assert response.status_code == 400
    assert "consequence must be between 1 and 5" in response.text
    assert 'class="invalid"' in response.text
    assert client.get("/api/risks").json()["items"] == []


def test_edit_and_delete_via_forms(client) -> None:
    risk = client.post("/api/risks", json={"hazard_type": "Skåldning", "likelihood": 2, "consequence": 2}).json()

    edit_page = client.get(f"/risks/{risk['id']}/edit")
    assert edit_page.status_code == 200
    assert "Skåldning" in edit_page.text

    response = client.post(
        f"/risks/{risk['id']}",
        data=_risk_form(hazard_type="Skåldning", likelihood="5", consequence="4", status="Done"),
        follow_redirects=False,
    )
    assert response.status_code == 302
    stored = client.get(f"/api/risks/{risk['id']}").json()
    assert (stored["risk_score"], stored["risk_level"], stored["status"]) == (20, "Critical", "Done")

    response = client.post(f"/risks/{risk['id']}/delete", follow_redirects=False)
    assert response.status_code == 302
    assert client.get(f"/api/risks/{risk['id']}").status_code == 404


def test_new_form_and_matrix_pages_render(client) -> None:
    new_page = client.get("/risks/new")
    assert new_page.status_code == 200
    assert "9 - Medium" in new_page.text

    matrix_page = client.get("/risks/matrix")
    assert matrix_page.status_code == 200
    assert "Catastrophic" in matrix_page.text
    assert "Critical (16-25)" in matrix_page.text


def test_export_and_download_report(client) -> None:
    client.post("/api/risks", json={"hazard_type": "Brann", "likelihood": 5, "consequence": 5})

    response = client.post("/reports/export", follow_redirects=False)
    assert response.status_code == 302

    history = client.get("/reports")
    assert history.status_code == 200
    assert "/reports/download/pdf/1" in history.text

    download = client.get("/reports/download/pdf/1")
    assert download.status_code == 200
    assert download.headers["content-type"] == "application/pdf"
    assert download.content.startswith(b"%PDF")

    assert client.get("/reports/download/pdf/999").status_code == 404


def test_risk_score_preview_missing_param_is_invalid_argument(client) -> None:
    response = client.get("/api/risk-score", params={"likelihood": 2})
    assert response.status_code == 400
    assert response.json()["field"] == "consequence"


def test_api_partial_update_keeps_ratings(client) -> None:
    risk = client.post(
        "/api/risks",
        json={"hazard_type": "Brann", "hazard_description": "Frityr", "likelihood": 5, "consequence": 5},
    ).json()

    response = client.put(f"/api/risks/{risk['id']}", json={"hazard_type": "Brann", "status": "Done"})

    assert response.status_code == 200
    body = response.json()
    assert (body["likelihood"], body["consequence"], body["risk_score"], body["risk_level"]) == (5, 5, 25, "Critical")
    assert body["hazard_description"] == "Frityr"
    assert body["status"] == "Done"


def test_list_filters_by_norwegian_status(client) -> None:
    client.post("/api/risks", json={"hazard_type": "Kutt", "likelihood": 2, "consequence": 2})

    assert len(client.get("/api/risks", params={"status": "Åpen"}).json()["items"]) == 1
    assert client.get("/api/risks", params={"status": "Lukket"}).status_code == 400

    page = client.get("/risks", params={"status": "Åpen"})
    assert page.status_code == 200
    assert "Kutt" in page.text


def test_pages_render_with_context(client) -> None:
    for path in ("/risks", "/risks/new", "/risks/matrix", "/reports"):
        response = client.get(path)
        assert response.status_code == 200, path
        assert "Risikomatrise" in response.text

    client.post("/reports/export", follow_redirects=False)
    assert "Risikovurdering / Risk Assessment" in client.get("/reports").text


def test_static_assets_and_version_come_from_project_root(client) -> None:
    from hms_risk import __version__

    assert client.get("/static/js/risk_form.js").status_code == 200
    assert client.get("/api/health").json()["version"] == __version__
