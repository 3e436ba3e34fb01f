"""Tests for Word bibliography export."""
from docx import Document

from refcite.export import bibliography_docx


def test_bibliography_docx():
    entries = ["Turing, A. (1952). The Chemical Basis of Morphogenesis.",
               "Turing, A. (1950). Computing Machinery and Intelligence."]
    doc = Document(bibliography_docx(entries, heading="Works Cited"))
    texts = [p.text for p in doc.paragraphs]
    assert texts[0] == "Works Cited"
    assert texts[1:] == entries


def test_empty_bibliography_is_valid_docx():
    doc = Document(bibliography_docx([]))
    assert [p.text for p in doc.paragraphs] == ["References"]
