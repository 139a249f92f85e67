from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from app.schema.schemas import INTENTS

GENERIC_INTENT = "Other"
DEFAULT_PDF_NAME = "document.pdf"


class DocumentFormat(str, Enum):
    EMAIL = "Email"
    JSON = "JSON"
    PDF = "PDF"

    @classmethod
    def parse(cls, value: str | None) -> "DocumentFormat | None":
        """Case-insensitive lookup; None when value names no known format."""
        if not value:
            return None
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


class RouteAction(str, Enum):
    CREATE_TICKET = "create_ticket"
    ESCALATE_ISSUE = "escalate_issue"
    FLAG_COMPLIANCE_RISK = "flag_compliance_risk"
    NO_ACTION_TAKEN = "no_action_taken"
    UNKNOWN = "unknown"


class PipelineState(str, Enum):
    IDLE = "idle"
    CLASSIFYING = "classifying"
    EXTRACTING = "extracting"
    ROUTING = "routing"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class DocumentSubmission:
    """A single user request: declared input type plus its content."""

    input_type: DocumentFormat
    content: str = ""
    file_name: str | None = None
    file_data_uri: str | None = None  # base64 data URI, PDF submissions only

    @property
    def display_name(self) -> str:
        return self.file_name or DEFAULT_PDF_NAME


@dataclass(frozen=True)
class ClassificationResult:
    """Detected format and business intent of a document."""

    format: str
    intent: str

    @classmethod
    def from_output(cls, output: dict[str, Any]) -> "ClassificationResult":
        """Normalize validated model output.

        Known formats get their canonical spelling; unknown ones are kept
        verbatim. Intents outside the fixed set fall back to the generic one.
        """
        raw_format = str(output["format"]).strip()
        detected = DocumentFormat.parse(raw_format)
        return cls(
            format=detected.value if detected else raw_format,
            intent=_normalize_intent(str(output["intent"])),
        )

    @property
    def document_format(self) -> DocumentFormat | None:
        return DocumentFormat.parse(self.format)

    def to_dict(self) -> dict[str, str]:
        return {"format": self.format, "intent": self.intent}


def _normalize_intent(raw: str) -> str:
    wanted = raw.strip().lower()
    for intent in INTENTS:
        if intent.lower() == wanted:
            return intent
    return GENERIC_INTENT


@dataclass(frozen=True)
class EmailExtraction:
    """Fields extracted from email correspondence."""

    format: ClassVar[DocumentFormat] = DocumentFormat.EMAIL

    fields: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return dict(self.fields)


@dataclass(frozen=True)
class JsonExtraction:
    """Outcome of validating a JSON webhook payload."""

    format: ClassVar[DocumentFormat] = DocumentFormat.JSON

    is_valid: bool
    anomalies: list[str] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {"isValid": self.is_valid, "anomalies": list(self.anomalies)}


@dataclass(frozen=True)
class PdfExtraction:
    """Fields extracted from a PDF document."""

    format: ClassVar[DocumentFormat] = DocumentFormat.PDF

    fields: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return dict(self.fields)


ExtractionResult = EmailExtraction | JsonExtraction | PdfExtraction


@dataclass(frozen=True)
class RoutingDecision:
    """Terminal artifact of the pipeline: the follow-up action taken."""

    action_taken: str
    details: str

    def to_dict(self) -> dict[str, str]:
        return {"actionTaken": self.action_taken, "details": self.details}
