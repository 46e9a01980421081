from __future__ import annotations

from io import BytesIO
from zipfile import BadZipFile, ZipFile

from resume_reviewer.core.errors import UnsupportedFileTypeError

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIME = "text/plain"

MIME_KINDS = {
    PDF_MIME: "pdf",
    DOCX_MIME: "docx",
    TEXT_MIME: "txt",
}

EXTENSION_KINDS = {
    "pdf": "pdf",
    "docx": "docx",
    "txt": "txt",
}

# Browsers and HTTP clients send these when they do not know better.
GENERIC_MIME_TYPES = {
    "",
    "application/octet-stream",
    "binary/octet-stream",
    "application/zip",
    "application/x-zip-compressed",
}

PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


def normalize_mime(mime: str | None) -> str:
    return (mime or "").split(";")[0].strip().lower()


def extension_from_filename(filename: str) -> str:
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].strip().lower()[:20]


def detect_kind(*, mime: str, filename: str) -> str:
    """Resolve the document kind from the declared MIME type, then the extension."""
    ext = extension_from_filename(filename)
    if ext == "doc":
        raise UnsupportedFileTypeError("Legacy .doc is not supported. Convert to .docx.")

    normalized = normalize_mime(mime)
    kind = MIME_KINDS.get(normalized)
    if kind:
        return kind
    if normalized in GENERIC_MIME_TYPES:
        kind = EXTENSION_KINDS.get(ext)
        if kind:
            return kind
    raise UnsupportedFileTypeError("Unsupported file type")


def _is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(prefix) for prefix in ZIP_MAGICS)


def _zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            names = archive.namelist()
    except BadZipFile:
        return False
    return any(any(name.startswith(prefix) for prefix in prefixes) for name in names)


def _is_probably_text_payload(content: bytes) -> bool:
    if not content:
        return True
    sample = content[:4096]
    try:
        sample.decode("utf-8")
        return True
    except UnicodeDecodeError as exc:
        # A multi-byte sequence cut off by the sample window is still text.
        if exc.start >= len(sample) - 3 and exc.reason == "unexpected end of data":
            return True
    printable = 0
    for byte in sample:
        if byte in (9, 10, 13) or 32 <= byte <= 126:
            printable += 1
    return (printable / len(sample)) >= 0.75


def validate_upload_signature(*, kind: str, content: bytes) -> None:
    if kind == "pdf":
        if not content.startswith(PDF_MAGIC):
            raise UnsupportedFileTypeError("File signature does not match .pdf content.")
        return

    if kind == "docx":
        if not _is_zip_payload(content) or not _zip_has_paths(content, ("word/",)):
            raise UnsupportedFileTypeError("File signature does not match .docx content.")
        return

    if kind == "txt":
        if not _is_probably_text_payload(content):
            raise UnsupportedFileTypeError("File signature does not match .txt text content.")
