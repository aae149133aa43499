"""Extension-based MIME type fallback."""

from typing import Optional

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES: dict[str, str] = {
    "pdf": "application/pdf",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "xls": "application/vnd.ms-excel",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "doc": "application/msword",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "ppt": "application/vnd.ms-powerpoint",
    "txt": "text/plain",
    "csv": "text/csv",
}


def file_extension(name: str) -> str:
    """Lowercased text after the last dot, or "" when there is none."""
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def guess_mime_type(name: str, content_type: Optional[str] = None) -> str:
    """Prefer the host-reported type; otherwise look the extension up."""
    if content_type:
        return content_type
    return MIME_TYPES.get(file_extension(name), DEFAULT_MIME_TYPE)
