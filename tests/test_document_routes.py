"""Tests for the per-user editor document."""


def test_no_document_yet(client, auth_headers):
    resp = client.get("/documents", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["document"] is None


def test_create_then_update(client, auth_headers):
    pdfs = [{"fileId": "f-1", "name": "turing1952.pdf"}]
    resp = client.post("/documents", json={"title": "Thesis", "content": "<p>Intro</p>", "openPdfIds": pdfs},
                       headers=auth_headers)
    assert resp.status_code == 201
    assert resp.get_json()["document"]["openPdfIds"] == pdfs

    resp = client.post("/documents", json={"content": "<p>Intro and more</p>"}, headers=auth_headers)
    assert resp.status_code == 200
    document = client.get("/documents", headers=auth_headers).get_json()["document"]
    assert document["title"] == "Thesis"
    assert document["content"] == "<p>Intro and more</p>"
    assert document["openPdfIds"] == pdfs


def test_default_title(client, auth_headers):
    resp = client.post("/documents", json={"content": ""}, headers=auth_headers)
    assert resp.get_json()["document"]["title"] == "Untitled document"


def test_documents_are_per_user(client, auth_headers, other_headers):
    client.post("/documents", json={"title": "Mine"}, headers=auth_headers)
    assert client.get("/documents", headers=other_headers).get_json()["document"] is None


def test_invalid_open_pdfs(client, auth_headers):
    resp = client.post("/documents", json={"openPdfIds": [{"fileId": "f-1"}]}, headers=auth_headers)
    assert resp.status_code == 400
    resp = client.post("/documents", json={"openPdfIds": "f-1"}, headers=auth_headers)
    assert resp.status_code == 400


def test_invalid_title(client, auth_headers):
    assert client.post("/documents", json={"title": 3}, headers=auth_headers).status_code == 400
