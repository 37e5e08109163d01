"""Content-type helpers for deciding how a response payload is transported."""

from __future__ import annotations

from urllib.parse import urlsplit

DEFAULT_CONTENT_TYPE = "application/octet-stream"

BINARY_CONTENT_TYPE_PREFIXES = (
    "image/",
    "video/",
    "audio/",
    "application/pdf",
    "application/zip",
    "application/octet-stream",
    "application/x-",
)

EXTENSIONS_BY_MIME_TYPE = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "application/pdf": ".pdf",
    "application/json": ".json",
    "text/plain": ".txt",
    "text/html": ".html",
}


def parse_mime_type(content_type: str | None) -> str:
    """Return the media type of a ``Content-Type`` value, without parameters."""
    if not content_type:
        return DEFAULT_CONTENT_TYPE
    mime_type = content_type.split(";", 1)[0].strip()
    return mime_type.lower() or DEFAULT_CONTENT_TYPE


def is_binary_content_type(content_type: str | None) -> bool:
    """Check whether a response of this content type is transported as binary."""
    mime_type = parse_mime_type(content_type)
    return mime_type.startswith(BINARY_CONTENT_TYPE_PREFIXES)


def suggest_filename(url: str, content_type: str | None = None) -> str:
    """Derive a download filename from a URL and its content type.

    Parameters
    ----------
    url : str
        Source URL of the payload.
    content_type : str | None, default=None
        ``Content-Type`` of the payload. Used to add an extension when the URL
        path has none.

    Returns
    -------
    str
        Last path segment (``"download"`` when empty), with an extension.
    """
    base_name = urlsplit(url).path.rsplit("/", 1)[-1] or "download"
    if "." in base_name:
        return base_name
    mime_type = parse_mime_type(content_type)
    return base_name + EXTENSIONS_BY_MIME_TYPE.get(mime_type, ".bin")
