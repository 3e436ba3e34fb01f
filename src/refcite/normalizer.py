"""
Metadata normalization.

Turns loosely structured user input into ``BibliographicItem`` records. Two
input shapes reach this module:

- raw form fields as typed into the reference form (``author`` is a
  ``"Family,Given;Family,Given"`` string, ``year`` is free text), handled by
  ``build_item``;
- CSL-JSON items as stored with a reference or produced by other clients,
  handled by ``item_from_csl`` which validates the closed structure and
  rejects anything it does not know.
"""
from typing import Any, Iterable, List, Mapping, Optional

from .config import DEFAULT_REFERENCE_TYPE, REFERENCE_TYPES
from .exceptions import ValidationError
from .models import PAGES_PATTERN, Author, BibliographicItem

CSL_FIELDS = frozenset({
    "id", "type", "title", "author", "issued",
    "container-title", "page", "publisher", "URL",
})
CSL_ONLY_FIELDS = frozenset({"id", "issued", "container-title", "page"})
FORM_FIELDS = frozenset({
    "type", "title", "author", "year", "containerTitle",
    "pages", "publisher", "URL", "url", "notes",
})


def parse_author_list(raw: Optional[str]) -> List[Author]:
    """Parse ``"Smith,John;Doe,Jane"`` into an ordered author list.

    Best effort and lossy: an entry without a comma becomes the family name
    with an empty given name, text after a second comma is ignored, and
    entries that are empty after trimming are dropped. Never raises.
    """
    if not raw:
        return []
    authors = []
    for entry in str(raw).split(";"):
        parts = entry.strip().split(",")
        family = parts[0].strip()
        given = parts[1].strip() if len(parts) > 1 else ""
        if family or given:
            authors.append(Author(family=family, given=given))
    return authors


def author_string(authors: Iterable[Author]) -> str:
    """Inverse of ``parse_author_list``, used to pre-fill edit forms."""
    return ";".join(f"{a.family},{a.given}" for a in authors)


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_year(value: Any) -> Optional[int]:
    text = _clean(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def build_item(form_fields: Mapping[str, Any]) -> BibliographicItem:
    """Map raw form fields 1:1 onto a canonical item.

    Blank fields become ``None``; the year only becomes ``issued_year`` when it
    parses as an integer.
    """
    url = form_fields.get("URL")
    if _clean(url) is None:
        url = form_fields.get("url")
    return BibliographicItem(
        type=_clean(form_fields.get("type")) or DEFAULT_REFERENCE_TYPE,
        title=_clean(form_fields.get("title")),
        authors=tuple(parse_author_list(form_fields.get("author"))),
        issued_year=_parse_year(form_fields.get("year")),
        container_title=_clean(form_fields.get("containerTitle")),
        pages=_clean(form_fields.get("pages")),
        publisher=_clean(form_fields.get("publisher")),
        url=_clean(url),
    )


def is_csl_shaped(metadata: Mapping[str, Any]) -> bool:
    """Tell a CSL-JSON item apart from raw form fields."""
    if isinstance(metadata.get("author"), list):
        return True
    return any(key in metadata for key in CSL_ONLY_FIELDS)


def _csl_string(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError(f"Field '{key}' must be a string")
    return _clean(value)


def _csl_authors(value: Any) -> List[Author]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError("Field 'author' must be a list of names")
    authors = []
    for entry in value:
        if not isinstance(entry, Mapping):
            raise ValidationError("Each author must be an object with 'family' and 'given'")
        unknown = set(entry) - {"family", "given"}
        if unknown:
            raise ValidationError(f"Unsupported author fields: {', '.join(sorted(unknown))}")
        family = _csl_string(entry, "family") or ""
        given = _csl_string(entry, "given") or ""
        if family or given:
            authors.append(Author(family=family, given=given))
    return authors


def _csl_year(value: Any) -> Optional[int]:
    if value is None:
        return None
    if not isinstance(value, Mapping) or "date-parts" not in value:
        raise ValidationError("Field 'issued' must contain 'date-parts'")
    parts = value["date-parts"]
    try:
        year = parts[0][0]
    except (TypeError, IndexError, KeyError):
        raise ValidationError("Field 'issued' has malformed 'date-parts'")
    if isinstance(year, bool):
        raise ValidationError("Field 'issued' has malformed 'date-parts'")
    try:
        return int(year)
    except (TypeError, ValueError):
        raise ValidationError("Field 'issued' has malformed 'date-parts'")


def validate_reference_type(value: Optional[str]) -> str:
    ref_type = value or DEFAULT_REFERENCE_TYPE
    if ref_type not in REFERENCE_TYPES:
        raise ValidationError(f"Unsupported reference type '{ref_type}'")
    return ref_type


def validate_pages(value: Optional[str]) -> Optional[str]:
    if value is not None and not PAGES_PATTERN.match(value):
        raise ValidationError(
            "Pages may only contain digits, letters, dashes, commas, periods and spaces"
        )
    return value


def item_from_csl(data: Mapping[str, Any]) -> BibliographicItem:
    """Validate a CSL-JSON item and convert it to a canonical item."""
    if not isinstance(data, Mapping):
        raise ValidationError("Citation metadata must be an object")
    unknown = set(data) - CSL_FIELDS
    if unknown:
        raise ValidationError(f"Unsupported metadata fields: {', '.join(sorted(unknown))}")

    return BibliographicItem(
        type=validate_reference_type(_csl_string(data, "type")),
        title=_csl_string(data, "title"),
        authors=tuple(_csl_authors(data.get("author"))),
        issued_year=_csl_year(data.get("issued")),
        container_title=_csl_string(data, "container-title"),
        pages=validate_pages(_csl_string(data, "page")),
        publisher=_csl_string(data, "publisher"),
        url=_csl_string(data, "URL"),
    )
