from __future__ import annotations

import base64
import binascii
import logging
import re
from io import BytesIO
from zipfile import BadZipFile, ZipFile

import defusedxml.ElementTree as ET

from resume_ai.core.errors import (
    FileTooLargeError,
    ResumeParseError,
    UnsupportedFileTypeError,
    UploadRejectedError,
)

logger = logging.getLogger(__name__)

SUPPORTED_FILE_TYPES = ("pdf", "docx")
PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


def file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def validate_resume_filename(filename: str) -> str:
    ext = file_extension((filename or "").strip())
    if ext not in SUPPORTED_FILE_TYPES:
        raise UploadRejectedError("Only PDF or DOCX files are allowed")
    return ext


def resolve_file_type(filename: str, declared: str | None) -> str:
    file_type = (declared or "").strip().lower().lstrip(".") or file_extension(filename)
    if file_type not in SUPPORTED_FILE_TYPES:
        raise UnsupportedFileTypeError("Unsupported file type. Please use PDF or DOCX.")
    return file_type


def decode_file_content(content: str | list[int], max_bytes: int) -> bytes:
    if isinstance(content, list):
        try:
            payload = bytes(content)
        except ValueError as exc:
            raise UploadRejectedError("File content must be a list of byte values (0-255).") from exc
    else:
        raw = content
        if content.startswith("data:"):
            _, sep, raw = content.partition(",")
            if not sep:
                raise UploadRejectedError("File content data URL has no payload.")
        try:
            payload = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise UploadRejectedError("File content is not valid base64.") from exc

    if len(payload) > max_bytes:
        raise FileTooLargeError(
            f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB."
        )
    if not payload:
        raise UploadRejectedError("Uploaded file is empty.")
    return payload


def _is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(prefix) for prefix in ZIP_MAGICS)


def _zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            names = archive.namelist()
        return any(any(name.startswith(prefix) for prefix in prefixes) for name in names)
    except BadZipFile:
        return False


def validate_upload_signature(*, file_type: str, content: bytes) -> None:
    if file_type == "pdf":
        if not content.startswith(PDF_MAGIC):
            raise ResumeParseError("File signature does not match .pdf content.")
        return

    if file_type == "docx":
        if not _is_zip_payload(content) or not _zip_has_paths(content, ("word/",)):
            raise ResumeParseError("File signature does not match .docx content.")
        return

    raise UnsupportedFileTypeError("Unsupported file type. Please use PDF or DOCX.")


def _normalize_extracted_text(text: str) -> str:
    lines = [re.sub(r"[ \t]+", " ", line).strip() for line in text.replace("\r\n", "\n").split("\n")]
    normalized = "\n".join(lines)
    return re.sub(r"\n{3,}", "\n\n", normalized).strip()


def _extract_pdf_text(content: bytes) -> str:
    from pypdf import PdfReader

    reader = PdfReader(BytesIO(content))
    page_chunks: list[str] = []
    for page in reader.pages:
        page_text = page.extract_text() or ""
        if page_text.strip():
            page_chunks.append(page_text)
    return "\n\n".join(page_chunks)


def _extract_docx_text_fallback(content: bytes) -> str:
    with ZipFile(BytesIO(content)) as archive:
        raw = archive.read("word/document.xml")
    root = ET.fromstring(raw)
    paragraphs: list[str] = []
    for paragraph in root.iter():
        if not paragraph.tag.endswith("}p"):
            continue
        texts: list[str] = []
        for node in paragraph.iter():
            if node.tag.endswith("}t") and node.text:
                value = node.text.strip()
                if value:
                    texts.append(value)
        if texts:
            paragraphs.append(" ".join(texts))
    return "\n".join(paragraphs)


def _extract_docx_text(content: bytes) -> str:
    try:
        from docx import Document

        doc = Document(BytesIO(content))
        return "\n".join(paragraph.text for paragraph in doc.paragraphs if paragraph.text.strip())
    except Exception as exc:  # noqa: BLE001 - fall back to raw document.xml
        logger.info("docx_parser_fallback reason=%s", exc)
        return _extract_docx_text_fallback(content)


def extract_resume_text(content: bytes, file_type: str) -> str:
    """Extract plain text from PDF or DOCX bytes. Failures are fatal: there is no fallback text."""
    file_type = (file_type or "").strip().lower()
    if file_type not in SUPPORTED_FILE_TYPES:
        raise UnsupportedFileTypeError("Unsupported file type. Please use PDF or DOCX.")

    validate_upload_signature(file_type=file_type, content=content)
    try:
        text = _extract_pdf_text(content) if file_type == "pdf" else _extract_docx_text(content)
    except Exception as exc:
        logger.warning("resume_parse_failed file_type=%s bytes=%s: %s", file_type, len(content), exc)
        raise ResumeParseError(f"Failed to parse {file_type} file: {exc}") from exc

    normalized = _normalize_extracted_text(text)
    if not normalized:
        raise ResumeParseError(f"Failed to parse {file_type} file: no extractable text found.")
    return normalized
