"""Plain-text extraction from uploaded job description documents."""

from __future__ import annotations

import re
from pathlib import Path

SUPPORTED_SUFFIXES = (".pdf", ".docx", ".txt", ".md")


def extract_text(file_path: str | Path) -> str:
    """Read a job description file (PDF, DOCX, TXT, MD) and return clean plain text."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        raw = _read_pdf(path)
    elif suffix == ".docx":
        raw = _read_docx(path)
    elif suffix in (".txt", ".md"):
        try:
            raw = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"{path.name} is not UTF-8 text") from exc
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")
    return clean_text(raw)


def clean_text(text: str) -> str:
    """Normalize extracted document text.

    Removes BOM and zero-width characters, turns decorative bullets into
    "- ", collapses runs of spaces and tabs, and squeezes blank lines.
    """
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]", "", text)
    text = re.sub(r"^(\s*)[●•◦◆■▪★○]\s*", r"\1- ", text, flags=re.MULTILINE)
    lines = [re.sub(r"[ \t]+", " ", line).strip() for line in text.splitlines()]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _read_pdf(path: Path) -> str:
    import fitz  # pymupdf

    doc = fitz.open(str(path))
    try:
        return "\n".join(page.get_text() for page in doc)
    finally:
        doc.close()


def _read_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    paragraphs = [p.text for p in doc.paragraphs if p.text.strip()]
    # Job postings often keep salary/location in tables
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                paragraphs.append(" | ".join(cells))
    return "\n".join(paragraphs)
