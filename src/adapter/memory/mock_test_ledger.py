"""Process-memory implementation of MockTestLedger."""

from domain.model.mock_test import LedgerEntry


class InMemoryMockTestLedger:
    def __init__(self):
        self.entries: list[LedgerEntry] = []

    def append(self, entry: LedgerEntry) -> None:
        self.entries.append(entry)

    def count(self) -> int:
        return len(self.entries)

    def recent(self, limit: int) -> list[LedgerEntry]:
        if limit <= 0:
            return []
        return list(reversed(self.entries[-limit:]))
