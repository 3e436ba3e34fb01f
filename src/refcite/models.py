"""Data models for the citation pipeline."""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .config import DEFAULT_REFERENCE_TYPE

# Free-form page ranges: digits, letters, dashes, commas, periods and spaces
PAGES_PATTERN = re.compile(r"^[0-9A-Za-z\-–—,.\s]+$")


@dataclass(frozen=True)
class Author:
    """One name in an author list."""
    family: str
    given: str = ""

    def __str__(self):
        return f"{self.family}, {self.given}" if self.given else self.family

    def to_csl(self) -> Dict[str, str]:
        data = {"family": self.family}
        if self.given:
            data["given"] = self.given
        return data


@dataclass(frozen=True)
class BibliographicItem:
    """Canonical reference record, CSL-JSON like.

    Optional fields hold ``None`` when unset so that the formatter can tell an
    absent value from an intentionally empty one. Author order is significant.
    """
    type: str = DEFAULT_REFERENCE_TYPE
    title: Optional[str] = None
    authors: Tuple[Author, ...] = field(default_factory=tuple)
    issued_year: Optional[int] = None
    container_title: Optional[str] = None
    pages: Optional[str] = None
    publisher: Optional[str] = None
    url: Optional[str] = None

    def is_citable(self) -> bool:
        """An item needs a title or at least one author to be formatted."""
        return bool(self.title) or len(self.authors) > 0

    def to_csl_json(self, item_id: str = "item-1") -> Dict[str, Any]:
        """Convert to a CSL-JSON item holding only the fields that are set."""
        data: Dict[str, Any] = {"id": item_id, "type": self.type}
        if self.title is not None:
            data["title"] = self.title
        if self.authors:
            data["author"] = [a.to_csl() for a in self.authors]
        if self.issued_year is not None:
            data["issued"] = {"date-parts": [[self.issued_year]]}
        if self.container_title is not None:
            data["container-title"] = self.container_title
        if self.pages is not None:
            data["page"] = self.pages
        if self.publisher is not None:
            data["publisher"] = self.publisher
        if self.url is not None:
            data["URL"] = self.url
        return data

    def to_dict(self) -> Dict[str, Any]:
        """CSL-JSON without the local item id, as stored with a reference."""
        data = self.to_csl_json()
        data.pop("id")
        return data


@dataclass(frozen=True)
class StyleDescriptor:
    """A citation style offered to users."""
    id: str
    label: str

    def to_option(self) -> Dict[str, str]:
        return {"label": self.label, "value": self.id}
