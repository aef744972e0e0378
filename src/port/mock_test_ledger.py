from typing import Protocol

from domain.model.mock_test import LedgerEntry


class MockTestLedger(Protocol):
    """Protocol for the append-only, cross-user log of test submissions."""
    def append(self, entry: LedgerEntry) -> None:
        """Append a submission to the ledger."""
        ...

    def count(self) -> int:
        """Total number of submissions recorded."""
        ...

    def recent(self, limit: int) -> list[LedgerEntry]:
        """Return the last `limit` submissions, newest first."""
        ...
