"""Bibliography entry rendering through citeproc-py."""
import io
import logging
from functools import lru_cache

from citeproc import (
    Citation,
    CitationItem,
    CitationStylesBibliography,
    CitationStylesStyle,
    formatter,
)
from citeproc.source.json import CiteProcJSON
from markupsafe import escape

from .catalog import StyleDefinition, StyleRegistry
from .config import OUTPUT_HTML, OUTPUT_TEXT
from .exceptions import IncompleteItemError, RenderingFailure, ValidationError
from .models import BibliographicItem

logger = logging.getLogger(__name__)

OUTPUT_FORMATTERS = {
    OUTPUT_HTML: formatter.html,
    OUTPUT_TEXT: formatter.plain,
}

# Key of the single item submitted per render
ITEM_KEY = "item-1"


def escape_csl(value):
    """HTML-escape every string in a CSL-JSON value; the html formatter writes variable text as is."""
    if isinstance(value, str):
        return str(escape(value))
    if isinstance(value, dict):
        return {k: v if k == "id" else escape_csl(v) for k, v in value.items()}
    if isinstance(value, list):
        return [escape_csl(v) for v in value]
    return value


class CitationFormatter:
    """Render one bibliography entry for one item in one style."""

    def __init__(self, registry: StyleRegistry, locale: str = "en-US", cache_size: int = 256):
        self.registry = registry
        self.locale = locale
        self._render_cached = lru_cache(maxsize=cache_size)(self._render)

    def format(self, item: BibliographicItem, style_id: str, output: str = OUTPUT_HTML) -> str:
        """Format ``item`` as a bibliography entry in ``style_id``.

        Raises:
            ValidationError: unknown output kind
            IncompleteItemError: the item has neither title nor authors
            StyleNotFoundError: the style id is not in the catalog
            RenderingFailure: the CSL engine rejected the item
        """
        if output not in OUTPUT_FORMATTERS:
            raise ValidationError(f"Unsupported output '{output}', expected 'html' or 'text'")
        if not item.is_citable():
            raise IncompleteItemError()
        definition = self.registry.current.resolve_style(style_id)
        return self._render_cached(item, definition, output)

    def cache_info(self):
        return self._render_cached.cache_info()

    def clear_cache(self) -> None:
        self._render_cached.cache_clear()

    def _render(self, item: BibliographicItem, definition: StyleDefinition, output: str) -> str:
        try:
            style = CitationStylesStyle(io.BytesIO(definition.content), locale=self.locale, validate=False)
            data = item.to_csl_json(ITEM_KEY)
            if output == OUTPUT_HTML:
                data = escape_csl(data)
            source = CiteProcJSON([data])
            bibliography = CitationStylesBibliography(style, source, OUTPUT_FORMATTERS[output])
            bibliography.register(Citation([CitationItem(ITEM_KEY)]))
            entries = bibliography.bibliography()
        except Exception as e:
            logger.error(
                f"CSL rendering failed for style '{definition.id}' ({output}): {e}",
                exc_info=True,
            )
            raise RenderingFailure(f"Could not format citation in style '{definition.id}'") from e

        if len(entries) != 1:
            logger.error(f"Style '{definition.id}' produced {len(entries)} entries for one item")
            raise RenderingFailure(f"Could not format citation in style '{definition.id}'")
        return str(entries[0])
