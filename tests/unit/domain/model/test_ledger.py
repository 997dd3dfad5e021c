"""Unit tests for ledger entries and views."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from tide.domain.model import LedgerEntry, LedgerView
from tide.domain.value import CommunityId, LedgerEntryId, UserId


def _entry(sequence: int, community: str = "reef", **overrides) -> LedgerEntry:
    fields = {
        "id": LedgerEntryId(uuid4()),
        "sequence": sequence,
        "from_user_id": UserId("bruno"),
        "to_user_id": UserId("ana"),
        "tokens": 3,
        "community_id": CommunityId(community),
    }
    fields.update(overrides)
    return LedgerEntry(**fields)


class TestLedgerEntry:
    """Tests for LedgerEntry."""

    def test_parties_must_differ(self):
        with pytest.raises(ValidationError):
            _entry(1, to_user_id=UserId("bruno"))

    def test_sequence_starts_at_one(self):
        with pytest.raises(ValidationError):
            _entry(0)

    def test_export(self):
        assert _entry(4).to_export() == {
            "sequence": 4,
            "from": "bruno",
            "to": "ana",
            "tokens": 3,
        }


class TestLedgerView:
    """Tests for LedgerView."""

    def test_view_ignores_later_appends(self):
        """A view only covers entries that existed when it was created."""
        # Arrange
        entries = [_entry(1), _entry(2)]
        view = LedgerView(entries)

        # Act
        entries.append(_entry(3))

        # Assert
        assert [e.sequence for e in view] == [1, 2]
        assert [e.sequence for e in view] == [1, 2]
        assert len(view) == 2

    def test_community_filter(self):
        entries = [_entry(1), _entry(2, "harbor"), _entry(3)]

        view = LedgerView(entries, community_id=CommunityId("reef"))

        assert [e.sequence for e in view] == [1, 3]
        assert len(view) == 2
