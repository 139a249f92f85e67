"""Sequences classify -> extract -> route for one submission."""

from collections.abc import Iterable
from uuid import uuid4

from app.config.settings import Settings
from app.llm.exceptions import ModelInvocationError
from app.llm.factory import ModelInvokerFactory
from app.logging.logger import Log
from app.pdf.factory import PdfExtractorFactory
from app.schema.exceptions import SchemaValidationError
from app.triage.audit import AuditLog, AuditLogEntry
from app.triage.classifier import DocumentClassifier
from app.triage.exceptions import TriageError, ValidationError
from app.triage.extractors import EmailExtractor, JsonWebhookExtractor, PdfExtractor
from app.triage.models import DocumentFormat, DocumentSubmission, PipelineState
from app.triage.pipeline import PipelineContext, PipelineStep, TriageRun
from app.triage.router import ActionRouter
from app.triage.steps import ClassifyStep, ExtractStep, RouteStep

# Failures a stage may legitimately end with; anything else is a bug and propagates.
STAGE_ERRORS = (ModelInvocationError, SchemaValidationError, TriageError)


def validate_submission(submission: DocumentSubmission) -> None:
    """Reject submissions that lack the content their input type needs.

    Raises:
        ValidationError: before any stage runs or any log entry is written.
    """
    if submission.input_type is DocumentFormat.PDF:
        if not submission.file_data_uri:
            raise ValidationError("Please select a PDF file to process.")
    elif not submission.content.strip():
        raise ValidationError(
            f"Please provide content for {submission.input_type.value}."
        )


class TriagePipeline:
    """Runs the stages in order and stops at the first fatal failure.

    Pipeline: Classifier -> (Email | JSON | PDF) Agent -> Action Router.
    Classifier and extraction failures end the run in ERROR; a router
    failure is recorded but the run still reaches DONE.
    """

    def __init__(
        self,
        classify_step: PipelineStep,
        extract_steps: Iterable[ExtractStep],
        route_step: PipelineStep,
    ) -> None:
        self._classify_step = classify_step
        self._extract_steps = {step.format: step for step in extract_steps}
        self._route_step = route_step

    def run(
        self,
        submission: DocumentSubmission,
        audit_log: AuditLog | None = None,
    ) -> TriageRun:
        """Process one submission and return everything the run produced."""
        validate_submission(submission)
        context = PipelineContext(
            run_id=uuid4().hex,
            submission=submission,
            audit_log=audit_log if audit_log is not None else AuditLog(),
        )
        with Log.run_scope(context.run_id):
            Log.info(f"Processing {submission.input_type.value} submission")
            self._run_stages(context)
            Log.info(f"Run finished in state {context.state.value}")
        return context.to_run()

    def _run_stages(self, context: PipelineContext) -> None:
        if not self._execute(self._classify_step, context):
            return

        if context.classification is None:
            raise ValueError("PipelineContext.classification must be set before extraction")
        extract_step = self._extract_steps.get(context.classification.document_format)
        if extract_step is None:
            Log.warning(
                f"No extraction agent for format {context.classification.format!r}, "
                "stopping before routing"
            )
            context.state = PipelineState.ERROR
            return

        if not self._execute(extract_step, context):
            return

        self._execute(self._route_step, context, fatal=False)
        context.state = PipelineState.DONE

    def _execute(self, step: PipelineStep, context: PipelineContext, fatal: bool = True) -> bool:
        context.state = step.state
        snapshot = step.describe_input(context)
        context.audit_log.append(AuditLogEntry.processing(step.name, snapshot))
        try:
            step.run(context)
        except STAGE_ERRORS as exc:
            message = str(exc) or f"Error in {step.name}"
            context.errors[step.name] = message
            context.audit_log.append(AuditLogEntry.failed(step.name, snapshot, message))
            Log.error(f"{step.name} failed: {message}")
            if fatal:
                context.state = PipelineState.ERROR
            return False

        context.audit_log.append(
            AuditLogEntry.succeeded(
                step.name,
                snapshot,
                step.describe_output(context),
                action=step.action_label(context),
            )
        )
        return True


def build_pipeline(settings: Settings) -> TriagePipeline:
    """Build a TriagePipeline with all required adapters."""
    invoker = ModelInvokerFactory.create(settings)
    pdf_extractor = PdfExtractorFactory.create(settings)
    return TriagePipeline(
        classify_step=ClassifyStep(DocumentClassifier(invoker)),
        extract_steps=[
            ExtractStep(EmailExtractor(invoker)),
            ExtractStep(JsonWebhookExtractor()),
            ExtractStep(PdfExtractor(invoker, pdf_extractor)),
        ],
        route_step=RouteStep(ActionRouter(invoker)),
    )
