"""Tests for the Zotero client and lookup route."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from refcite.exceptions import UpstreamError
from refcite.models import Author
from refcite.zotero import ZoteroAPI, item_from_zotero

ZOTERO_ITEM = {
    "key": "ABCD2345",
    "data": {
        "key": "ABCD2345",
        "itemType": "journalArticle",
        "title": "The Chemical Basis of Morphogenesis",
        "creators": [
            {"creatorType": "author", "firstName": "Alan", "lastName": "Turing"},
            {"creatorType": "editor", "firstName": "Some", "lastName": "Editor"},
        ],
        "publicationTitle": "Philosophical Transactions of the Royal Society B",
        "date": "August 14, 1952",
        "pages": "37-72",
        "url": "",
    },
}


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return response


def test_item_from_zotero():
    item = item_from_zotero(ZOTERO_ITEM)
    assert item.type == "article-journal"
    assert item.authors == (Author(family="Turing", given="Alan"),)
    assert item.issued_year == 1952
    assert item.container_title == "Philosophical Transactions of the Royal Society B"
    assert item.pages == "37-72"
    assert item.url is None


def test_item_from_zotero_single_field_names_and_book():
    item = item_from_zotero({
        "itemType": "book",
        "title": "Collected Works",
        "creators": [{"creatorType": "editor", "name": "Royal Society"}],
        "publisher": "Elsevier",
        "date": "n.d.",
    })
    assert item.type == "book"
    assert item.authors == (Author(family="Royal Society"),)
    assert item.issued_year is None
    assert item.publisher == "Elsevier"


def test_unknown_item_type_defaults():
    assert item_from_zotero({"itemType": "artwork", "title": "T"}).type == "article-journal"


class TestZoteroAPI:
    """Tests for the HTTP client."""

    @patch("refcite.zotero.requests.get")
    def test_get_item(self, mock_get):
        mock_get.return_value = _response(payload=ZOTERO_ITEM)
        api = ZoteroAPI("https://zotero.test/", timeout=3)

        assert api.get_item("ABCD2345", library="users/42") == ZOTERO_ITEM
        mock_get.assert_called_once_with(
            "https://zotero.test/users/42/items/ABCD2345", params={"format": "json"}, timeout=3
        )

    @patch("refcite.zotero.requests.get")
    def test_not_found(self, mock_get):
        mock_get.return_value = _response(status_code=404)
        assert ZoteroAPI().get_item("MISSING") is None

    @patch("refcite.zotero.requests.get")
    def test_server_error(self, mock_get):
        mock_get.return_value = _response(status_code=503)
        with pytest.raises(UpstreamError):
            ZoteroAPI().get_item("ABCD2345")

    @patch("refcite.zotero.requests.get", side_effect=requests.ConnectionError("down"))
    def test_connection_error(self, mock_get):
        with pytest.raises(UpstreamError) as exc_info:
            ZoteroAPI().get_item("ABCD2345")
        assert exc_info.value.status_code == 502


class TestZoteroRoute:
    """Tests for GET /zotero/citation/<key>."""

    @patch("refcite.zotero.requests.get")
    def test_formats_item(self, mock_get, client):
        mock_get.return_value = _response(payload=ZOTERO_ITEM)
        resp = client.get("/zotero/citation/ABCD2345?style=apa&output=text")
        assert resp.status_code == 200
        assert "Turing" in resp.get_json()["citationText"]

    @patch("refcite.zotero.requests.get")
    def test_default_style_and_output(self, mock_get, client):
        mock_get.return_value = _response(payload=ZOTERO_ITEM)
        resp = client.get("/zotero/citation/ABCD2345")
        assert "citationHtml" in resp.get_json()

    @patch("refcite.zotero.requests.get")
    def test_not_found(self, mock_get, client):
        mock_get.return_value = _response(status_code=404)
        resp = client.get("/zotero/citation/MISSING")
        assert resp.status_code == 404
        assert "MISSING" in resp.get_json()["error"]

    @patch("refcite.zotero.requests.get", side_effect=requests.Timeout("slow"))
    def test_upstream_failure(self, mock_get, client):
        resp = client.get("/zotero/citation/ABCD2345")
        assert resp.status_code == 502

    @patch("refcite.zotero.requests.get")
    def test_unknown_style(self, mock_get, client):
        mock_get.return_value = _response(payload=ZOTERO_ITEM)
        assert client.get("/zotero/citation/ABCD2345?style=nope").status_code == 400
