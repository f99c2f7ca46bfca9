"""
Artifact sync data models for internal use.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ArtifactStatus(str, Enum):
    """Outcome of syncing one remote artifact."""
    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ArtifactOutcome:
    """Result for a single object under the artifact prefix."""

    key: str
    filename: str
    status: ArtifactStatus
    error: Optional[str] = None


@dataclass
class SyncReport:
    """Aggregated result of one sync run."""

    outcomes: List[ArtifactOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def downloaded(self) -> int:
        return self._count(ArtifactStatus.DOWNLOADED)

    @property
    def skipped(self) -> int:
        return self._count(ArtifactStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(ArtifactStatus.FAILED)

    @property
    def failures(self) -> List[ArtifactOutcome]:
        return [o for o in self.outcomes if o.status == ArtifactStatus.FAILED]

    def _count(self, status: ArtifactStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)
