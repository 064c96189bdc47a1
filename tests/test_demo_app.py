import csv
import io

import pytest
from fastapi.testclient import TestClient

import main


@pytest.fixture
def client():
    with TestClient(main.app) as c:
        yield c


def test_browser_gets_html_drug_list(client):
    resp = client.get(
        "/drugs",
        headers={
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
        },
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "text/html; charset=utf-8"
    assert resp.headers["vary"] == "Accept"
    assert "<li>DrugX: 50 mg</li>" in resp.text


@pytest.mark.parametrize("accept", ["application/json", "*/*"])
def test_drug_list_as_json(client, accept):
    resp = client.get("/drugs", headers={"Accept": accept})
    assert resp.headers["content-type"] == "application/json; charset=utf-8"
    assert resp.json()["drugs"][0] == {"name": "DrugX", "dose_mg": 50}


def test_drug_list_as_csv(client):
    resp = client.get("/drugs", headers={"Accept": "text/csv"})
    assert resp.headers["content-type"] == "text/csv; charset=utf-8"
    assert resp.headers["content-disposition"] == 'attachment; filename="drugs.csv"'
    rows = list(csv.DictReader(io.StringIO(resp.text)))
    assert rows[1] == {"name": "DrugY", "dose_mg": "200"}


def test_drug_list_not_acceptable(client):
    resp = client.get("/drugs", headers={"Accept": "application/xml"})
    assert resp.status_code == 406


def test_single_drug_as_html(client):
    resp = client.get("/drugs/DrugY", headers={"Accept": "text/html"})
    assert resp.text == "<h1>DrugY</h1><p>200 mg</p>"
