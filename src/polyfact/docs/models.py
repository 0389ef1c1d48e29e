"""Data models for the documentation-generation API."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Stage(Enum):
    """Documentation generation stages, in pipeline order."""

    REFERENCES = "references"
    FOLDERS = "folders"
    STRUCTURE = "structure"
    OVERVIEW = "overview"
    GETTING_STARTED = "getting-started"


# Stages that report total/progress counters instead of a status flag
PROGRESS_STAGES = (Stage.REFERENCES, Stage.FOLDERS)


@dataclass
class ProgressSnapshot:
    """Point-in-time counters for a fractional stage."""

    total: int
    progress: int
    percentage: float = 0.0
    last_updated: float = 0
    status: str = ""

    @property
    def is_complete(self) -> bool:
        return self.progress >= self.total

    @classmethod
    def waiting(cls) -> "ProgressSnapshot":
        """Placeholder used when the progress call fails; never complete."""
        return cls(total=0, progress=-1, percentage=0.0, last_updated=0, status="waiting")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProgressSnapshot":
        """Parse an API payload.

        Raises:
            KeyError, TypeError, ValueError: If the payload lacks valid counters
        """
        return cls(
            total=int(data["total"]),
            progress=int(data["progress"]),
            percentage=float(data.get("percentage") or 0.0),
            last_updated=data.get("last_updated") or 0,
            status=str(data.get("status") or ""),
        )


@dataclass
class GetResult:
    """Payload of a status-stage getter (structure, overview, getting-started)."""

    status: str | None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return self.status == "ok"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GetResult":
        return cls(status=data.get("status"), data=data)


@dataclass
class DeployResult:
    """Result of a deploy request."""

    domain: str


@dataclass
class DocsResult:
    """Outcome of a complete `polyfact docs` run."""

    doc_id: str
    name: str
    stages: list[Stage] = field(default_factory=list)
    results: dict[Stage, GetResult] = field(default_factory=dict)
    domain: str | None = None
