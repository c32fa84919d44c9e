"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: In-memory repository used by every module in place of a
             database. Records are dataclasses seeded from static mock
             arrays; relationships are resolved by linear scan.
             Mutations live only for the lifetime of the process.
-------------------------------------------------------------------------
"""
import copy
import dataclasses
from datetime import datetime, timezone as dt_timezone
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from apps.core.exceptions import RecordNotFoundException

RecordT = TypeVar('RecordT')


def stamp(value: str) -> datetime:
    """
    Parse an ISO timestamp from mock data into an aware datetime.

    Naive values are treated as UTC, matching the ``Z`` suffix used by
    most of the seed data.
    """
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(f"Invalid timestamp in mock data: {value!r}")
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def day(value: Optional[str]):
    """Parse an ISO date (``YYYY-MM-DD``) from mock data; ``None`` passes through."""
    if value is None:
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"Invalid date in mock data: {value!r}")
    return parsed


class MockRepository(Generic[RecordT]):
    """
    Process-local table of dataclass records.

    Attributes:
        name: Human readable entity name used in error messages.
        record_class: Dataclass type stored by this repository.
    """

    def __init__(self, name: str, record_class: Type[RecordT], seed: Callable[[], List[RecordT]]) -> None:
        """
        Initialize the repository.

        Args:
            name: Entity name (e.g. ``"Client"``).
            record_class: The dataclass stored in this repository.
            seed: Callable returning the static mock records. It is called
                  lazily and again on every ``reset()``.
        """
        self.name = name
        self.record_class = record_class
        self._seed = seed
        self._records: Optional[List[RecordT]] = None

    @property
    def records(self) -> List[RecordT]:
        if self._records is None:
            self._records = copy.deepcopy(self._seed())
        return self._records

    def reset(self) -> None:
        """Discard all in-memory changes and reload the seed data."""
        self._records = None

    def all(self) -> List[RecordT]:
        return list(self.records)

    def count(self) -> int:
        return len(self.records)

    def get_by_id(self, pk: int) -> Optional[RecordT]:
        for record in self.records:
            if record.id == pk:
                return record
        return None

    def get_or_raise(self, pk: int) -> RecordT:
        """
        Get a record by ID.

        Raises:
            RecordNotFoundException: If no record has the given ID.
        """
        record = self.get_by_id(pk)
        if record is None:
            raise RecordNotFoundException(
                f"{self.name} #{pk} not found.",
                details={'entity': self.name, 'id': pk}
            )
        return record

    def filter(self, **criteria: Any) -> List[RecordT]:
        """Return records whose attributes equal every given criterion."""
        return [
            record for record in self.records
            if all(getattr(record, key) == value for key, value in criteria.items())
        ]

    def next_id(self) -> int:
        return max((record.id for record in self.records), default=0) + 1

    def create(self, **values: Any) -> RecordT:
        """
        Create a new record with the next free ID.

        ``created_at``/``updated_at`` are filled in when the record class
        declares them and the caller did not supply them.
        """
        field_names = {f.name for f in dataclasses.fields(self.record_class)}
        now = timezone.now()
        for stamp_field in ('created_at', 'updated_at'):
            if stamp_field in field_names:
                values.setdefault(stamp_field, now)

        record = self.record_class(id=self.next_id(), **values)
        # Newest first, as the console lists show freshly added rows on top
        self.records.insert(0, record)
        return record

    def update(self, pk: int, **values: Any) -> RecordT:
        """Apply ``values`` to an existing record and bump ``updated_at``."""
        record = self.get_or_raise(pk)
        field_names = {f.name for f in dataclasses.fields(self.record_class)}
        unknown = set(values) - field_names
        if unknown:
            raise AttributeError(f"{self.name} has no field(s): {', '.join(sorted(unknown))}")

        for key, value in values.items():
            setattr(record, key, value)
        if 'updated_at' in field_names and 'updated_at' not in values:
            record.updated_at = timezone.now()
        return record

    def delete(self, pk: int) -> RecordT:
        record = self.get_or_raise(pk)
        self.records.remove(record)
        return record


def as_dict(record: Any) -> Dict[str, Any]:
    """Shallow dict of a dataclass record, suitable as form ``initial`` data."""
    return {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}
