"""
Result types for override transfers and whole install runs.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FetchStatus(str, Enum):
    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    FAILED = "failed"


class InstallState(str, Enum):
    """Lifecycle of a single install operation."""

    IDLE = "idle"
    RESOLVING = "resolving"
    PREPARING = "preparing"
    FETCHING_OVERRIDES = "fetching_overrides"
    COMPLETE = "complete"


@dataclass(frozen=True)
class FetchOutcome:
    """What happened to one file of a version."""

    name: str
    status: FetchStatus
    target: Path | None = None
    url: str | None = None
    size: int = 0
    error: str | None = None


@dataclass
class InstallReport:
    """
    Summary of a client install.

    ``succeeded`` stays True even when some overrides failed: a package with a
    few missing files is still usable, so callers inspect ``failures`` instead.
    """

    work_dir: Path
    manifest_path: Path
    outcomes: list[FetchOutcome] = field(default_factory=list)
    succeeded: bool = True

    def _count(self, status: FetchStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def downloaded(self) -> int:
        return self._count(FetchStatus.DOWNLOADED)

    @property
    def skipped(self) -> int:
        return self._count(FetchStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(FetchStatus.FAILED)

    @property
    def failures(self) -> list[FetchOutcome]:
        return [o for o in self.outcomes if o.status is FetchStatus.FAILED]

    @property
    def total_size(self) -> int:
        return sum(outcome.size for outcome in self.outcomes)
