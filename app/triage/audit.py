"""Append-only audit trail of one pipeline run."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

PROCESSING_PLACEHOLDER = "Processing..."


class EntryStatus(str, Enum):
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class AuditLogEntry:
    """One stage event: an in-flight placeholder or a resolved outcome."""

    timestamp: datetime
    stage: str
    status: EntryStatus
    output: Any
    input: dict[str, Any] | None = None
    error: str | None = None
    action: str | None = None

    @classmethod
    def processing(cls, stage: str, input: dict[str, Any] | None) -> "AuditLogEntry":
        return cls(
            timestamp=_now(),
            stage=stage,
            status=EntryStatus.PROCESSING,
            input=input,
            output=PROCESSING_PLACEHOLDER,
        )

    @classmethod
    def succeeded(
        cls,
        stage: str,
        input: dict[str, Any] | None,
        output: Any,
        action: str | None = None,
    ) -> "AuditLogEntry":
        return cls(
            timestamp=_now(),
            stage=stage,
            status=EntryStatus.SUCCEEDED,
            input=input,
            output=output,
            action=action,
        )

    @classmethod
    def failed(cls, stage: str, input: dict[str, Any] | None, error: str) -> "AuditLogEntry":
        return cls(
            timestamp=_now(),
            stage=stage,
            status=EntryStatus.FAILED,
            input=input,
            output={"error": error},
            error=error,
        )

    @property
    def is_resolved(self) -> bool:
        return self.status is not EntryStatus.PROCESSING

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "agent": self.stage,
            "status": self.status.value,
            "output": self.output,
        }
        if self.input is not None:
            data["input"] = self.input
        if self.action is not None:
            data["action"] = self.action
        return data


class AuditLog:
    """Append-only sequence of audit entries owned by a single run."""

    def __init__(self) -> None:
        self._entries: list[AuditLogEntry] = []

    def append(self, entry: AuditLogEntry) -> None:
        self._entries.append(entry)

    @property
    def entries(self) -> tuple[AuditLogEntry, ...]:
        return tuple(self._entries)

    def resolved(self) -> list[AuditLogEntry]:
        """One entry per stage attempt: its succeeded or failed outcome."""
        return [entry for entry in self._entries if entry.is_resolved]

    def errors(self) -> list[AuditLogEntry]:
        return [entry for entry in self._entries if entry.status is EntryStatus.FAILED]

    def to_list(self) -> list[dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]

    def __iter__(self) -> Iterator[AuditLogEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


def _now() -> datetime:
    return datetime.now(timezone.utc)
