"""Tests for reference form validation at the HTTP boundary."""
import pytest

from refcite.exceptions import ValidationError
from ui.forms import item_from_metadata


def test_form_fields(turing_fields, turing_item):
    assert item_from_metadata(turing_fields) == turing_item


def test_csl_payload(turing_item):
    assert item_from_metadata(turing_item.to_dict()) == turing_item


def test_numeric_year_accepted():
    assert item_from_metadata({"title": "T", "year": 1952}).issued_year == 1952


def test_lowercase_url_is_validated():
    item = item_from_metadata({"title": "T", "url": "https://example.com/paper"})
    assert item.url == "https://example.com/paper"
    with pytest.raises(ValidationError, match="URL"):
        item_from_metadata({"title": "T", "url": "not a url"})


@pytest.mark.parametrize("metadata", [
    {"title": "T", "type": "graphic"},
    {"title": "T", "pages": "12<b>"},
    {"title": "T", "URL": "example"},
    {"title": "x" * 1001},
])
def test_invalid_fields(metadata):
    with pytest.raises(ValidationError):
        item_from_metadata(metadata)


def test_unknown_field():
    with pytest.raises(ValidationError, match="isbn"):
        item_from_metadata({"title": "T", "isbn": "978-0"})


@pytest.mark.parametrize("value", [True, ["Turing"], {"family": "Turing"}])
def test_non_text_values(value):
    with pytest.raises(ValidationError):
        item_from_metadata({"title": value})


@pytest.mark.parametrize("metadata", ["Turing 1952", ["Turing"], 42])
def test_not_an_object(metadata):
    with pytest.raises(ValidationError):
        item_from_metadata(metadata)


def test_csl_payload_identified_by_id():
    item = item_from_metadata({"id": "ITEM-1", "type": "book", "title": "On Growth and Form"})
    assert item.type == "book"
    assert item.title == "On Growth and Form"
