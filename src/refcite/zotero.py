"""Zotero web API client."""
import logging
import re
from typing import Any, Dict, List, Optional

import requests

from .config import DEFAULT_REFERENCE_TYPE
from .models import Author, BibliographicItem
from .utils.error_handling import upstream_error_handler

logger = logging.getLogger(__name__)

# Zotero itemType -> CSL type
ITEM_TYPES = {
    "journalArticle": "article-journal",
    "magazineArticle": "article-journal",
    "book": "book",
    "bookSection": "chapter",
    "report": "report",
    "thesis": "thesis",
    "webpage": "webpage",
    "blogPost": "webpage",
    "conferencePaper": "paper-conference",
    "patent": "patent",
    "letter": "personal-communication",
    "email": "personal-communication",
}

YEAR_PATTERN = re.compile(r"\b(\d{4})\b")


class ZoteroAPI:
    """Fetch single items from the Zotero web API."""

    def __init__(self, base_url: str = "https://api.zotero.org", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @upstream_error_handler("Zotero")
    def get_item(self, item_key: str, library: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Return the raw item JSON, or ``None`` when Zotero does not know it.

        ``library`` is the optional ``users/<id>`` or ``groups/<id>`` prefix.
        """
        prefix = f"{library.strip('/')}/" if library else ""
        url = f"{self.base_url}/{prefix}items/{item_key}"
        response = requests.get(url, params={"format": "json"}, timeout=self.timeout)
        if response.status_code == 404:
            logger.info(f"Zotero item {item_key} not found")
            return None
        response.raise_for_status()
        return response.json()


def _parse_creators(creators: List[Dict[str, Any]]) -> List[Author]:
    authors = [c for c in creators if c.get("creatorType", "author") == "author"] or creators
    parsed = []
    for creator in authors:
        if creator.get("name"):
            parsed.append(Author(family=creator["name"].strip()))
            continue
        family = (creator.get("lastName") or "").strip()
        given = (creator.get("firstName") or "").strip()
        if family or given:
            parsed.append(Author(family=family, given=given))
    return parsed


def _extract_year(date: Optional[str]) -> Optional[int]:
    match = YEAR_PATTERN.search(date or "")
    return int(match.group(1)) if match else None


def item_from_zotero(item: Dict[str, Any]) -> BibliographicItem:
    """Convert a Zotero item into a canonical item."""
    data = item.get("data", item)

    def text(key: str) -> Optional[str]:
        value = (data.get(key) or "").strip()
        return value or None

    return BibliographicItem(
        type=ITEM_TYPES.get(data.get("itemType", ""), DEFAULT_REFERENCE_TYPE),
        title=text("title"),
        authors=tuple(_parse_creators(data.get("creators") or [])),
        issued_year=_extract_year(data.get("date")),
        container_title=text("publicationTitle") or text("bookTitle") or text("websiteTitle"),
        pages=text("pages"),
        publisher=text("publisher"),
        url=text("url"),
    )
