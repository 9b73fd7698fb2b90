from __future__ import annotations

import base64
import binascii
import hashlib
import io
import logging
import re
from pathlib import Path
from typing import BinaryIO

from docx import Document
from pypdf import PdfReader

from .models import ParsedBlock, ParsedDoc

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"
ZIP_MAGIC = b"PK\x03\x04"
_DATA_URL_PREFIX_RE = re.compile(r"^data:application/pdf;base64,")
_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
_MIN_BASE64_CHARS = 100
_MAX_PATH_CHARS = 500
_SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")


class ResumeExtractionError(ValueError):
    """Raised when a resume payload is neither a PDF payload nor a usable file path."""


def _compute_doc_id(text: str, seed_name: str) -> str:
    seed = text if text.strip() else seed_name
    digest = hashlib.sha256(seed.encode("utf-8", errors="ignore")).hexdigest()
    return digest[:16]


def _parse_txt(file_path: Path) -> tuple[str, list[ParsedBlock], list[str]]:
    text = file_path.read_text(encoding="utf-8", errors="replace")
    return text, [], []


def _parse_pdf(source: str | BinaryIO) -> tuple[str, list[ParsedBlock], list[str]]:
    warnings: list[str] = []
    blocks: list[ParsedBlock] = []

    try:
        reader = PdfReader(source)
        text_parts: list[str] = []
        for index, page in enumerate(reader.pages, start=1):
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
                blocks.append(ParsedBlock(page=index, text=page_text))
        if not text_parts:
            warnings.append("No extractable text found in PDF.")
        return "\n".join(text_parts), blocks, warnings
    except Exception as exc:  # malformed PDFs raise far more than PyPdfError
        logger.warning("pdf_parse_failed: %s", exc)
        warnings.append(f"PDF parsing failed: {exc}")
        return "", blocks, warnings


def _parse_docx(source: str | BinaryIO) -> tuple[str, list[ParsedBlock], list[str]]:
    warnings: list[str] = []
    blocks: list[ParsedBlock] = []

    try:
        document = Document(source)
    except Exception as exc:  # python-docx surfaces zip/xml errors of several types
        logger.warning("docx_parse_failed: %s", exc)
        warnings.append(f"DOCX parsing failed: {exc}")
        return "", blocks, warnings

    paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    for paragraph_text in paragraphs:
        blocks.append(ParsedBlock(page=None, text=paragraph_text))
    if not paragraphs:
        warnings.append("No extractable text found in DOCX.")
    return "\n".join(paragraphs), blocks, warnings


def parse_document(file_path: str) -> ParsedDoc:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input document not found: '{path}'")

    extension = path.suffix.lower()
    if extension == ".txt":
        source_type = "txt"
        text, blocks, warnings = _parse_txt(path)
    elif extension == ".pdf":
        source_type = "pdf"
        text, blocks, warnings = _parse_pdf(str(path))
    elif extension == ".docx":
        source_type = "docx"
        text, blocks, warnings = _parse_docx(str(path))
    else:
        raise NotImplementedError(
            f"Unsupported file type '{extension}'. Supported types: .txt, .pdf, .docx"
        )

    return ParsedDoc(
        doc_id=_compute_doc_id(text=text, seed_name=path.name),
        source_type=source_type,
        file_name=path.name,
        text=text,
        blocks=blocks,
        parsing_warnings=warnings,
    )


def is_base64_payload(value: str, *, allow_file_paths: bool = True) -> bool:
    """Data URLs always qualify. Bare base64 must be long and well formed.

    ``/`` belongs to the base64 alphabet, so path-like characters only
    disqualify a payload while file paths are accepted as input.
    """
    if _DATA_URL_PREFIX_RE.match(value):
        return True
    if len(value) <= _MIN_BASE64_CHARS or len(value) % 4 != 0 or not _BASE64_RE.match(value):
        return False
    if allow_file_paths:
        return "/" not in value and "\\" not in value and "." not in value
    return True


def is_file_path(value: str) -> bool:
    if _DATA_URL_PREFIX_RE.match(value):
        return False
    looks_like_path = "/" in value or "\\" in value or "." in value
    return looks_like_path and len(value) < _MAX_PATH_CHARS


def parse_base64_payload(payload: str, *, file_name: str | None = None) -> ParsedDoc:
    clean = _DATA_URL_PREFIX_RE.sub("", payload, count=1).strip()
    if not clean:
        raise ResumeExtractionError("Empty base64 data provided")

    try:
        raw = base64.b64decode(clean, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ResumeExtractionError(f"Failed to decode base64 resume payload: {exc}") from exc

    if raw.startswith(PDF_MAGIC):
        source_type = "pdf"
        text, blocks, warnings = _parse_pdf(io.BytesIO(raw))
    elif raw.startswith(ZIP_MAGIC):
        source_type = "docx"
        text, blocks, warnings = _parse_docx(io.BytesIO(raw))
    else:
        # Plain-text uploads arrive base64-encoded as well.
        source_type = "txt"
        text, blocks, warnings = raw.decode("utf-8", errors="replace"), [], []

    return ParsedDoc(
        doc_id=_compute_doc_id(text=text, seed_name=file_name or clean[:64]),
        source_type=source_type,
        file_name=file_name,
        text=text,
        blocks=blocks,
        parsing_warnings=warnings,
    )


def extract_resume_text(
    resume_file: str,
    *,
    file_name: str | None = None,
    allow_file_paths: bool = True,
) -> ParsedDoc:
    """Turn a resume payload (data URL, bare base64 or file path) into plain text.

    HTTP callers pass ``allow_file_paths=False`` so a request can never read
    files from the server's disk.
    """
    value = (resume_file or "").strip()
    if is_base64_payload(value, allow_file_paths=allow_file_paths):
        return parse_base64_payload(value, file_name=file_name)
    if allow_file_paths and is_file_path(value):
        if Path(value).suffix.lower() not in _SUPPORTED_EXTENSIONS:
            raise ResumeExtractionError(
                f"Unsupported resume file '{value}'. Supported types: {', '.join(_SUPPORTED_EXTENSIONS)}"
            )
        return parse_document(value)
    raise ResumeExtractionError("Invalid input format. Expected base64 PDF data or file path")
