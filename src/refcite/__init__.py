"""Citation formatting for the reference manager."""
from .catalog import StyleCatalog, StyleRegistry
from .config import Config
from .formatter import CitationFormatter
from .models import Author, BibliographicItem, StyleDescriptor
from .normalizer import build_item, item_from_csl, parse_author_list
from .service import CitationService

__version__ = "1.0.0"
__all__ = [
    "Author",
    "BibliographicItem",
    "CitationFormatter",
    "CitationService",
    "Config",
    "StyleCatalog",
    "StyleDescriptor",
    "StyleRegistry",
    "build_item",
    "item_from_csl",
    "parse_author_list",
]
