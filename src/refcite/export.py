"""Word export of formatted bibliographies."""
import io
from typing import Iterable

from docx import Document
from docx.shared import Pt


def bibliography_docx(entries: Iterable[str], heading: str = "References") -> io.BytesIO:
    """Write plain-text bibliography entries into an in-memory .docx file."""
    doc = Document()
    doc.add_heading(heading, 0)

    for entry in entries:
        p = doc.add_paragraph(entry)
        p.paragraph_format.space_after = Pt(12)

    f = io.BytesIO()
    doc.save(f)
    f.seek(0)
    return f
