import base64
import binascii
import mimetypes
from pathlib import Path

from app.triage.exceptions import ExtractionError
from app.triage.models import DocumentFormat, DocumentSubmission

_PDF_MIME_TYPE = "application/pdf"


def to_data_uri(data: bytes, mime_type: str = _PDF_MIME_TYPE) -> str:
    """Encode bytes as a base64 data URI: data:<mime>;base64,<payload>"""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(data_uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into its MIME type and decoded bytes.

    Raises:
        ExtractionError: if the value is not a base64 data URI.
    """
    header, sep, payload = data_uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ExtractionError("Document is not a base64 data URI")
    mime_type = header[len("data:") : -len(";base64")] or "text/plain"
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ExtractionError(f"Invalid base64 payload in data URI: {exc}") from exc


class FileLoader:
    """Turns CLI input (inline text or a file path) into a DocumentSubmission."""

    def load(
        self,
        input_type: DocumentFormat,
        text: str = "",
        path: Path | None = None,
    ) -> DocumentSubmission:
        """Build a submission for the given input type.

        PDF files are read as bytes and embedded as a data URI; other files
        are read as UTF-8 text and take precedence over inline text.

        Raises:
            FileNotFoundError: if path is given but does not exist.
        """
        if path is None:
            return DocumentSubmission(input_type=input_type, content=text)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if input_type is DocumentFormat.PDF:
            mime_type = mimetypes.guess_type(path.name)[0] or _PDF_MIME_TYPE
            return DocumentSubmission(
                input_type=input_type,
                content=text,
                file_name=path.name,
                file_data_uri=to_data_uri(path.read_bytes(), mime_type),
            )
        return DocumentSubmission(
            input_type=input_type,
            content=path.read_text(encoding="utf-8"),
            file_name=path.name,
        )
