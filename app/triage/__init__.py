from app.triage.models import DocumentFormat, DocumentSubmission
from app.triage.orchestrator import TriagePipeline, build_pipeline
from app.triage.pipeline import TriageRun
from app.triage.session import TriageSession

__all__ = [
    "DocumentFormat",
    "DocumentSubmission",
    "TriagePipeline",
    "TriageRun",
    "TriageSession",
    "build_pipeline",
]
