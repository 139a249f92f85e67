from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from app.triage.audit import AuditLog
from app.triage.models import (
    ClassificationResult,
    DocumentSubmission,
    ExtractionResult,
    PipelineState,
    RoutingDecision,
)


@dataclass(slots=True)
class PipelineContext:
    run_id: str
    submission: DocumentSubmission
    audit_log: AuditLog = field(default_factory=AuditLog)
    state: PipelineState = PipelineState.IDLE
    classification: ClassificationResult | None = None
    extraction: ExtractionResult | None = None
    routing: RoutingDecision | None = None
    errors: dict[str, str] = field(default_factory=dict)

    def to_run(self) -> "TriageRun":
        return TriageRun(
            run_id=self.run_id,
            state=self.state,
            classification=self.classification,
            extraction=self.extraction,
            routing=self.routing,
            errors=dict(self.errors),
            audit_log=self.audit_log,
        )


@dataclass(frozen=True)
class TriageRun:
    """Everything one pipeline run produced, including its audit trail."""

    run_id: str
    state: PipelineState
    classification: ClassificationResult | None
    extraction: ExtractionResult | None
    routing: RoutingDecision | None
    errors: dict[str, str]
    audit_log: AuditLog

    def to_dict(self) -> dict[str, Any]:
        return {
            "runId": self.run_id,
            "state": self.state.value,
            "classification": self.classification.to_dict() if self.classification else None,
            "extraction": self.extraction.to_payload() if self.extraction else None,
            "routing": self.routing.to_dict() if self.routing else None,
            "errors": dict(self.errors),
            "auditLog": self.audit_log.to_list(),
        }


class PipelineStep(ABC):
    """One stage of the triage pipeline.

    The orchestrator records ``describe_input`` before running the step and
    ``describe_output`` after it succeeds.
    """

    name: str
    state: PipelineState

    @abstractmethod
    def describe_input(self, context: PipelineContext) -> dict[str, Any] | None:
        raise NotImplementedError

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

    @abstractmethod
    def describe_output(self, context: PipelineContext) -> Any:
        raise NotImplementedError

    def action_label(self, context: PipelineContext) -> str | None:
        return None
