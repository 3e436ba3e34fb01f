"""Style catalog: file-backed lookup of citation style definitions."""
import hashlib
import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from lxml import etree

from .exceptions import CatalogUnavailable, StyleNotFoundError
from .models import StyleDescriptor

logger = logging.getLogger(__name__)

CSL_NS = "http://purl.org/net/xbiblio/csl"


@dataclass(frozen=True)
class StyleDefinition:
    """One style definition file, held in memory."""
    id: str
    label: str
    path: str
    digest: str
    content: bytes = field(repr=False, compare=False)

    def descriptor(self) -> StyleDescriptor:
        return StyleDescriptor(id=self.id, label=self.label)


def read_style_title(content: bytes) -> Optional[str]:
    """Return the ``<info><title>`` of a CSL document, if it can be read."""
    try:
        root = etree.fromstring(content)
    except etree.XMLSyntaxError:
        return None
    title = root.find(f"{{{CSL_NS}}}info/{{{CSL_NS}}}title")
    if title is None or not (title.text or "").strip():
        return None
    return title.text.strip()


class StyleCatalog:
    """Immutable snapshot of the style definitions found in one directory."""

    def __init__(self, definitions: Mapping[str, StyleDefinition], directory: str = ""):
        self._definitions: Dict[str, StyleDefinition] = dict(definitions)
        self.directory = directory

    @classmethod
    def load(cls, directory: str, extension: str = ".csl") -> "StyleCatalog":
        """Scan ``directory`` and build a snapshot of every ``*<extension>`` file."""
        root = Path(directory)
        definitions = {}
        try:
            paths = sorted(p for p in root.iterdir() if p.is_file() and p.suffix == extension)
            for path in paths:
                content = path.read_bytes()
                style_id = path.stem
                definitions[style_id] = StyleDefinition(
                    id=style_id,
                    label=read_style_title(content) or style_id,
                    path=str(path),
                    digest=hashlib.sha1(content).hexdigest(),
                    content=content,
                )
        except OSError as e:
            logger.error(f"Cannot read style directory {directory}: {e}")
            raise CatalogUnavailable("Citation styles could not be loaded") from e

        logger.info(f"Loaded {len(definitions)} citation styles from {directory}")
        return cls(definitions, directory=str(root))

    def list_styles(self) -> List[StyleDescriptor]:
        return [self._definitions[k].descriptor() for k in sorted(self._definitions)]

    def resolve_style(self, style_id: str) -> StyleDefinition:
        """Exact, case-sensitive lookup; near misses are rejected."""
        try:
            return self._definitions[style_id]
        except (KeyError, TypeError):
            raise StyleNotFoundError(str(style_id))

    def __contains__(self, style_id: object) -> bool:
        return style_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)


class StyleRegistry:
    """Holds the current catalog snapshot and replaces it wholesale on reload."""

    def __init__(self, directory: str, extension: str = ".csl", auto_reload: bool = False):
        self.directory = directory
        self.extension = extension
        self.auto_reload = auto_reload
        self._catalog: Optional[StyleCatalog] = None
        self._stamp: Optional[Tuple] = None
        self._lock = threading.Lock()

    def _directory_stamp(self) -> Optional[Tuple]:
        """Directory mtime plus name, mtime and size of every style file."""
        try:
            files = tuple(sorted(
                (entry.name, entry.stat().st_mtime_ns, entry.stat().st_size)
                for entry in os.scandir(self.directory)
                if entry.is_file() and entry.name.endswith(self.extension)
            ))
            return os.stat(self.directory).st_mtime_ns, files
        except OSError:
            return None

    @property
    def current(self) -> StyleCatalog:
        catalog = self._catalog
        if catalog is None:
            return self.reload()
        if self.auto_reload and self._directory_stamp() != self._stamp:
            return self.reload()
        return catalog

    def reload(self) -> StyleCatalog:
        """Build a complete new snapshot, then swap it in."""
        with self._lock:
            stamp = self._directory_stamp()
            catalog = StyleCatalog.load(self.directory, self.extension)
            self._catalog = catalog
            self._stamp = stamp
        return catalog
