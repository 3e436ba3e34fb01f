"""Citation service: the operations exposed to the web layer."""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List

from .catalog import StyleRegistry
from .config import OUTPUT_HTML, OUTPUT_TEXT
from .exceptions import StyleNotFoundError, ValidationError
from .formatter import CitationFormatter
from .models import BibliographicItem, StyleDescriptor
from .utils.logging_setup import log_operation


@dataclass(frozen=True)
class FormattedCitation:
    style: str
    output: str
    formatted: str

    def to_response(self) -> Dict[str, str]:
        key = "citationText" if self.output == OUTPUT_TEXT else "citationHtml"
        return {key: self.formatted}


class CitationService:
    """List styles and format citations."""

    def __init__(self, registry: StyleRegistry, formatter: CitationFormatter):
        self.registry = registry
        self.formatter = formatter

    def list_styles(self) -> List[StyleDescriptor]:
        return self.registry.current.list_styles()

    def preferred_styles(self, style_ids: Iterable[str]) -> List[StyleDescriptor]:
        """Catalog descriptors for ``style_ids`` in the given order; unknown ids are skipped."""
        catalog = self.registry.current
        return [catalog.resolve_style(s).descriptor() for s in style_ids if s in catalog]

    def validate_styles(self, style_ids: Iterable[str]) -> List[str]:
        """Return ``style_ids`` deduplicated in order, or raise for an unknown id."""
        catalog = self.registry.current
        seen: List[str] = []
        for style_id in style_ids:
            if not isinstance(style_id, str):
                raise ValidationError("Style ids must be strings")
            if style_id not in catalog:
                raise StyleNotFoundError(style_id)
            if style_id not in seen:
                seen.append(style_id)
        return seen

    def format_citation(self, item: BibliographicItem, style_id: str,
                        output: str = OUTPUT_HTML) -> FormattedCitation:
        formatted = self.formatter.format(item, style_id, output)
        log_operation("Format citation", f"style={style_id} output={output}", logging.DEBUG)
        return FormattedCitation(style=style_id, output=output, formatted=formatted)

