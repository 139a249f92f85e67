from app.llm.invoker import ModelInvoker
from app.logging.logger import Log
from app.schema.schemas import CLASSIFICATION
from app.triage.models import ClassificationResult


class DocumentClassifier:
    """Determines a document's format and business intent."""

    TEMPLATE = "classify_document"

    def __init__(self, invoker: ModelInvoker) -> None:
        self._invoker = invoker

    def classify(self, document_content: str, document_format: str) -> ClassificationResult:
        output = self._invoker.invoke(
            self.TEMPLATE,
            {"document_content": document_content, "document_format": document_format},
            CLASSIFICATION,
        )
        result = ClassificationResult.from_output(output)
        Log.info(f"Document classified as {result.format} - {result.intent}")
        return result
