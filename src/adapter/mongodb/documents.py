"""Conversions between MockTest and its MongoDB document form."""

from dataclasses import asdict
from datetime import datetime, timezone

from domain.model.mock_test import MockTest


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; BSON dates are always stored in UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def mock_test_to_doc(test: MockTest) -> dict:
    return asdict(test)


def doc_to_mock_test(doc: dict) -> MockTest:
    return MockTest(
        id=doc['id'],
        test_name=doc['test_name'],
        score=doc['score'],
        attempted=doc['attempted'],
        correct=doc['correct'],
        incorrect=doc['incorrect'],
        accuracy=doc['accuracy'],
        date=as_utc(doc['date']),
    )
