from collections.abc import Callable

import pytest

from app.config.settings import Settings
from app.llm.example_client_adapter import ExampleClientAdapter
from app.llm.invoker import ModelInvoker
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.triage.classifier import DocumentClassifier
from app.triage.extractors import EmailExtractor, JsonWebhookExtractor, PdfExtractor
from app.triage.orchestrator import TriagePipeline
from app.triage.router import ActionRouter
from app.triage.steps import ClassifyStep, ExtractStep, RouteStep


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(llm_provider="example", pdf_engine="pdfplumber")


def _build_example_pipeline(
    responses: dict[str, dict[str, object]] | None = None,
    client: ExampleClientAdapter | None = None,
) -> TriagePipeline:
    invoker = ModelInvoker(client=client or ExampleClientAdapter(responses), model="example")
    return TriagePipeline(
        classify_step=ClassifyStep(DocumentClassifier(invoker)),
        extract_steps=[
            ExtractStep(EmailExtractor(invoker)),
            ExtractStep(JsonWebhookExtractor()),
            ExtractStep(PdfExtractor(invoker, PdfPlumberAdapter())),
        ],
        route_step=RouteStep(ActionRouter(invoker)),
    )


@pytest.fixture()
def example_pipeline() -> Callable[..., TriagePipeline]:
    """Factory for a pipeline over the offline model adapter with real prompts and PDF parsing."""
    return _build_example_pipeline
