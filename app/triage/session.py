import threading

from app.triage.audit import AuditLogEntry
from app.triage.models import DocumentSubmission
from app.triage.orchestrator import TriagePipeline
from app.triage.pipeline import TriageRun


class TriageSession:
    """Runs of one user session.

    Submissions are serialized: a new run starts only after the previous one
    finished, and every run writes to its own audit log. Earlier runs stay
    available through ``history``.
    """

    def __init__(self, pipeline: TriagePipeline) -> None:
        self._pipeline = pipeline
        self._runs: list[TriageRun] = []
        self._lock = threading.Lock()

    def submit(self, submission: DocumentSubmission) -> TriageRun:
        with self._lock:
            run = self._pipeline.run(submission)
            self._runs.append(run)
        return run

    @property
    def runs(self) -> tuple[TriageRun, ...]:
        with self._lock:
            return tuple(self._runs)

    @property
    def latest(self) -> TriageRun | None:
        runs = self.runs
        return runs[-1] if runs else None

    def history(self) -> list[AuditLogEntry]:
        """Audit entries of every run in submission order."""
        return [entry for run in self.runs for entry in run.audit_log]
