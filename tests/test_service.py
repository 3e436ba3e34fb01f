"""Tests for the citation service operations."""
import pytest

from refcite.catalog import StyleRegistry
from refcite.exceptions import StyleNotFoundError, ValidationError
from refcite.formatter import CitationFormatter
from refcite.service import CitationService, FormattedCitation


@pytest.fixture
def service(styles_dir):
    registry = StyleRegistry(str(styles_dir))
    return CitationService(registry, CitationFormatter(registry))


def test_list_styles(service):
    values = [s.id for s in service.list_styles()]
    assert "apa" in values
    assert values == sorted(values)


def test_preferred_styles_keep_order_and_skip_unknown(service):
    styles = service.preferred_styles(["mla", "retired-style", "apa"])
    assert [s.id for s in styles] == ["mla", "apa"]


def test_validate_styles_deduplicates_in_order(service):
    assert service.validate_styles(["ieee", "apa", "ieee"]) == ["ieee", "apa"]


def test_validate_styles_rejects_unknown(service):
    with pytest.raises(StyleNotFoundError):
        service.validate_styles(["apa", "Apa"])


def test_validate_styles_rejects_non_strings(service):
    with pytest.raises(ValidationError):
        service.validate_styles(["apa", 7])


def test_format_citation(service, turing_item):
    citation = service.format_citation(turing_item, "apa", "text")
    assert citation.style == "apa"
    assert "Turing" in citation.formatted
    assert list(citation.to_response()) == ["citationText"]


def test_response_keys():
    assert FormattedCitation("apa", "html", "<b>x</b>").to_response() == {"citationHtml": "<b>x</b>"}
    assert FormattedCitation("apa", "text", "x").to_response() == {"citationText": "x"}
