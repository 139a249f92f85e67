"""Format-specific extraction agents, one per DocumentFormat."""

import json
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from app.llm.client_base import Attachment
from app.llm.invoker import ModelInvoker
from app.logging.logger import Log
from app.pdf.base import BasePdfExtractor
from app.pdf.exceptions import PdfExtractionError
from app.schema.exceptions import SchemaValidationError
from app.schema.schemas import BUSINESS_PAYLOAD, EMAIL_EXTRACTION, PDF_EXTRACTION
from app.schema.validator import validate
from app.triage.documents import decode_data_uri
from app.triage.exceptions import ExtractionError
from app.triage.models import (
    DocumentFormat,
    DocumentSubmission,
    EmailExtraction,
    ExtractionResult,
    JsonExtraction,
    PdfExtraction,
)

NO_TEXT_LAYER = "(no text layer found; read the attached document)"


class BaseExtractor(ABC):
    """Contract for the specialized extraction agents."""

    name: ClassVar[str]
    format: ClassVar[DocumentFormat]

    @abstractmethod
    def build_input(self, submission: DocumentSubmission) -> dict[str, str]:
        """Map the user submission onto this agent's input record."""

    def describe_input(self, submission: DocumentSubmission) -> dict[str, Any]:
        """Input snapshot recorded in the audit log."""
        return dict(self.build_input(submission))

    @abstractmethod
    def extract(self, agent_input: dict[str, str]) -> ExtractionResult:
        """Produce the format-specific extraction result.

        Raises:
            ModelInvocationError, SchemaValidationError, ExtractionError.
        """


class EmailExtractor(BaseExtractor):
    name = "Email Agent"
    format = DocumentFormat.EMAIL

    TEMPLATE = "extract_email"

    def __init__(self, invoker: ModelInvoker) -> None:
        self._invoker = invoker

    def build_input(self, submission: DocumentSubmission) -> dict[str, str]:
        return {"emailContent": submission.content}

    def extract(self, agent_input: dict[str, str]) -> EmailExtraction:
        fields = self._invoker.invoke(
            self.TEMPLATE,
            {"email_content": agent_input["emailContent"]},
            EMAIL_EXTRACTION,
        )
        return EmailExtraction(fields=fields)


class JsonWebhookExtractor(BaseExtractor):
    """Validates webhook payloads locally; never calls the model."""

    name = "JSON Agent"
    format = DocumentFormat.JSON

    def build_input(self, submission: DocumentSubmission) -> dict[str, str]:
        return {"webhookData": submission.content}

    def extract(self, agent_input: dict[str, str]) -> JsonExtraction:
        # JSONDecodeError is a ValueError, as is an over-long integer literal
        try:
            payload = json.loads(agent_input["webhookData"])
        except (ValueError, RecursionError) as exc:
            return JsonExtraction(is_valid=False, anomalies=[f"Invalid JSON: {exc}"])

        try:
            validate(payload, BUSINESS_PAYLOAD)
        except SchemaValidationError as exc:
            return JsonExtraction(is_valid=False, anomalies=[str(exc)])

        return JsonExtraction(is_valid=True, anomalies=[])


class PdfExtractor(BaseExtractor):
    name = "PDF Agent"
    format = DocumentFormat.PDF

    TEMPLATE = "extract_pdf"

    def __init__(self, invoker: ModelInvoker, pdf_extractor: BasePdfExtractor) -> None:
        self._invoker = invoker
        self._pdf_extractor = pdf_extractor

    def build_input(self, submission: DocumentSubmission) -> dict[str, str]:
        # Mirrors the other agents: a submission declared as text but
        # classified as PDF hands its text over and fails to decode.
        return {
            "pdfDataUri": submission.file_data_uri or submission.content,
            "pdfFileName": submission.display_name,
        }

    def describe_input(self, submission: DocumentSubmission) -> dict[str, Any]:
        return {"pdfFileName": submission.file_name}

    def extract(self, agent_input: dict[str, str]) -> PdfExtraction:
        """Send the PDF itself to the model, with its text layer as a reading aid.

        Image-only PDFs have no text layer; the model then works from the
        attached document alone.
        """
        data_uri = agent_input["pdfDataUri"]
        file_name = agent_input["pdfFileName"]
        _, pdf_bytes = decode_data_uri(data_uri)
        try:
            text = self._pdf_extractor.extract(pdf_bytes)
        except PdfExtractionError as exc:
            raise ExtractionError(str(exc)) from exc
        if text:
            Log.info(f"Extracted {len(text)} chars from {file_name}")
        else:
            Log.warning(f"No text layer in {file_name}, relying on the attached document")
            text = NO_TEXT_LAYER

        fields = self._invoker.invoke(
            self.TEMPLATE,
            {"pdf_text": text, "file_name": file_name},
            PDF_EXTRACTION,
            attachment=Attachment(file_name=file_name, data_uri=data_uri),
        )
        return PdfExtraction(fields=fields)
