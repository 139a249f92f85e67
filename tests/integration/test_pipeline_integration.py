import pytest

from app.config.settings import Settings
from app.llm.client_base import Attachment
from app.llm.example_client_adapter import ExampleClientAdapter
from app.triage.audit import EntryStatus
from app.triage.documents import to_data_uri
from app.triage.models import DocumentFormat, DocumentSubmission, PipelineState
from app.triage.orchestrator import build_pipeline
from app.triage.session import TriageSession

_VALID_WEBHOOK = '{"event_type":"order.created","timestamp":"2024-01-01T00:00:00Z","data":{"id":1}}'


@pytest.mark.integration
class TestTriagePipeline:
    def test_email_complaint_creates_ticket(self, test_settings: Settings) -> None:
        pipeline = build_pipeline(test_settings)

        run = pipeline.run(
            DocumentSubmission(input_type=DocumentFormat.EMAIL, content="My order arrived broken.")
        )

        assert run.state is PipelineState.DONE
        assert run.classification is not None
        assert run.classification.intent == "Complaint"
        assert run.extraction is not None
        assert run.extraction.to_payload()["sender"] == "customer@example.com"
        assert run.routing is not None
        assert run.routing.action_taken == "create_ticket"
        assert run.routing.details.startswith("Simulated /crm/create_ticket call with data:")
        assert run.audit_log.errors() == []

    def test_valid_webhook_is_routed(self, example_pipeline) -> None:
        pipeline = example_pipeline(
            {
                "classification": {"format": "JSON", "intent": "Invoice"},
                "routing": {"actionTaken": "escalate_issue", "details": "Large invoice"},
            }
        )

        run = pipeline.run(DocumentSubmission(input_type=DocumentFormat.JSON, content=_VALID_WEBHOOK))

        assert run.state is PipelineState.DONE
        assert run.extraction is not None
        assert run.extraction.to_payload() == {"isValid": True, "anomalies": []}
        assert run.routing is not None
        assert run.routing.details.startswith("Simulated /crm/escalate call")

    def test_malformed_webhook_reports_anomalies(self, example_pipeline) -> None:
        pipeline = example_pipeline(
            {
                "classification": {"format": "JSON", "intent": "Other"},
                "routing": {"actionTaken": "none", "details": ""},
            }
        )

        run = pipeline.run(DocumentSubmission(input_type=DocumentFormat.JSON, content="{not json"))

        assert run.state is PipelineState.DONE
        payload = run.extraction.to_payload()  # type: ignore[union-attr]
        assert payload["isValid"] is False
        assert payload["anomalies"][0].startswith("Invalid JSON")
        assert run.routing is not None
        assert run.routing.action_taken == "no_action_taken"
        assert run.routing.details == "No action was taken as no route matched."

    def test_webhook_with_oversized_number_completes(self, example_pipeline) -> None:
        pipeline = example_pipeline({"classification": {"format": "JSON", "intent": "Other"}})
        content = '{"event_type":"x","timestamp":"t","data":{"n":' + "9" * 5000 + "}}"

        run = pipeline.run(DocumentSubmission(input_type=DocumentFormat.JSON, content=content))

        assert run.state is PipelineState.DONE
        assert run.errors == {}
        payload = run.extraction.to_payload()  # type: ignore[union-attr]
        assert payload["isValid"] is False
        assert len(payload["anomalies"]) == 1

    def test_pdf_invoice_is_extracted_from_real_pdf(
        self, example_pipeline, sample_pdf_data_uri: str
    ) -> None:
        pipeline = example_pipeline(
            {
                "classification": {"format": "PDF", "intent": "Invoice"},
                "routing": {"actionTaken": "flag_compliance_risk", "details": "Check issuer"},
            }
        )
        submission = DocumentSubmission(
            input_type=DocumentFormat.PDF,
            file_name="invoice.pdf",
            file_data_uri=sample_pdf_data_uri,
        )

        run = pipeline.run(submission)

        assert run.state is PipelineState.DONE
        assert run.extraction is not None
        assert run.extraction.to_payload()["issuer"] == "Example Supplies Ltd"
        assert run.routing is not None
        assert run.routing.details.startswith("Simulated /risk_alert call")
        classifier_entry = run.audit_log.resolved()[0]
        assert classifier_entry.input == {
            "documentContent": "PDF File: invoice.pdf",
            "documentFormat": "PDF",
        }

    def test_image_only_pdf_is_read_by_the_model(
        self, example_pipeline, empty_pdf_bytes: bytes
    ) -> None:
        client = ExampleClientAdapter({"classification": {"format": "PDF", "intent": "Invoice"}})
        pipeline = example_pipeline(client=client)
        data_uri = to_data_uri(empty_pdf_bytes)
        submission = DocumentSubmission(
            input_type=DocumentFormat.PDF,
            file_name="scan.pdf",
            file_data_uri=data_uri,
        )

        run = pipeline.run(submission)

        assert run.state is PipelineState.DONE
        assert run.errors == {}
        assert run.extraction is not None
        assert run.extraction.to_payload()["document_title"] == "Invoice"
        assert client.received_attachments == [
            Attachment(file_name="scan.pdf", data_uri=data_uri)
        ]

    def test_corrupt_pdf_fails_extraction(self, example_pipeline) -> None:
        pipeline = example_pipeline({"classification": {"format": "PDF", "intent": "Other"}})
        submission = DocumentSubmission(
            input_type=DocumentFormat.PDF,
            file_name="broken.pdf",
            file_data_uri=to_data_uri(b"not a pdf"),
        )

        run = pipeline.run(submission)

        assert run.state is PipelineState.ERROR
        assert run.errors["PDF Agent"].startswith("pdfplumber extraction failed")
        assert run.routing is None
        assert run.audit_log.resolved()[-1].status is EntryStatus.FAILED

    def test_session_keeps_runs_apart(self, example_pipeline) -> None:
        session = TriageSession(example_pipeline())

        first = session.submit(DocumentSubmission(input_type=DocumentFormat.EMAIL, content="one"))
        second = session.submit(DocumentSubmission(input_type=DocumentFormat.EMAIL, content="two"))

        assert len(first.audit_log) == len(second.audit_log) == 6
        assert len(session.history()) == 12
        assert session.latest is second
