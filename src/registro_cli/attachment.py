import asyncio
import base64
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path

from registro_cli.errors import FileReadError

logger = logging.getLogger(__name__)

FALLBACK_MIME = "application/octet-stream"


@dataclass
class Attachment:
    content: str
    mime_type: str
    file_name: str

    def as_fields(self) -> dict:
        return {
            "archivo": self.content,
            "mimeType": self.mime_type,
            "nombreArchivo": self.file_name,
        }


def guess_mime_type(path: Path) -> str:
    # Empty when unknown, the way browsers report File.type.
    mime, _ = mimetypes.guess_type(path.name)
    return mime or ""


def strip_data_url_header(data_url: str) -> str:
    """Return the base64 body of ``data:<mime>;base64,<body>``."""
    header, sep, body = data_url.partition(",")
    if not sep or not header.startswith("data:"):
        raise ValueError("Not a data URL")
    return body


async def read_as_data_url(path: Path, mime_type: str = "") -> str:
    raw = await asyncio.to_thread(path.read_bytes)
    encoded = base64.b64encode(raw).decode("ascii")
    return f"data:{mime_type or FALLBACK_MIME};base64,{encoded}"


async def read_attachment(path) -> Attachment:
    path = Path(path)
    mime_type = guess_mime_type(path)
    try:
        data_url = await read_as_data_url(path, mime_type)
        content = strip_data_url_header(data_url)
    except (OSError, ValueError) as e:
        logger.debug("Reading %s failed: %r", path, e)
        raise FileReadError(cause=e) from e
    logger.debug("Read %s (%s, %d base64 chars)", path.name, mime_type or "unknown", len(content))
    return Attachment(content=content, mime_type=mime_type, file_name=path.name)
