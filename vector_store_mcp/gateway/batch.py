"""File batch lifecycle.

A file batch attaches many files to one vector store in a single
submission. Ingestion runs upstream; this module only describes what a
caller may observe when it polls the batch:

    queued -> in_progress -> completed | cancelled | failed

``cancelling`` may show up between ``in_progress`` and ``cancelled``
after a cancel request. Nothing here drives the state machine or polls.
Cancel requests are forwarded without checking the current status.
"""

from enum import Enum

from pydantic import Field

from .schemas import FileCounts, Snapshot


class BatchStatus(str, Enum):
    """Status of a file batch as reported by the upstream API."""

    queued = "queued"
    in_progress = "in_progress"
    cancelling = "cancelling"
    completed = "completed"
    cancelled = "cancelled"
    failed = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({BatchStatus.completed, BatchStatus.cancelled, BatchStatus.failed})

# Statuses observable on a later poll, given the status seen on an earlier one.
# Polling can skip intermediate states, so every forward jump is allowed.
_REACHABLE: dict[BatchStatus, frozenset[BatchStatus]] = {
    BatchStatus.queued: frozenset(BatchStatus),
    BatchStatus.in_progress: frozenset(BatchStatus) - {BatchStatus.queued},
    BatchStatus.cancelling: frozenset({BatchStatus.cancelling, *TERMINAL_STATUSES}),
    BatchStatus.completed: frozenset({BatchStatus.completed}),
    BatchStatus.cancelled: frozenset({BatchStatus.cancelled}),
    BatchStatus.failed: frozenset({BatchStatus.failed}),
}


def is_valid_transition(previous: BatchStatus, current: BatchStatus) -> bool:
    """Check that two successive snapshots are consistent with the lifecycle.

    Args:
        previous: Status seen on the earlier poll.
        current: Status seen on the later poll.

    Returns:
        True when ``current`` can follow ``previous``. Terminal statuses
        only ever follow themselves.
    """
    return current in _REACHABLE[previous]


class FileBatchSnapshot(Snapshot):
    """Point-in-time view of a file batch returned by create, get or cancel.

    Attributes:
        id: Batch ID.
        vector_store_id: Store the batch attaches files to.
        status: Aggregate status of the batch.
        file_counts: Per-status file tallies.
        created_at: Unix timestamp of submission.
    """

    id: str
    object: str = "vector_store.files_batch"
    vector_store_id: str | None = None
    status: BatchStatus
    file_counts: FileCounts = Field(default_factory=FileCounts)
    created_at: int | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def is_cancellable(self) -> bool:
        """Whether a cancel request can still have an effect."""
        return self.status in {BatchStatus.queued, BatchStatus.in_progress}

    def can_follow(self, previous: "FileBatchSnapshot") -> bool:
        """Whether this snapshot is a valid successor of ``previous``."""
        return self.id == previous.id and is_valid_transition(previous.status, self.status)
