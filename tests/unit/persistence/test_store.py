"""Unit tests for the in-memory EngineStore."""

from uuid import uuid4

import pytest

from tide.domain.error import ValidationError
from tide.domain.model import LedgerEntry, User
from tide.domain.service import catalog_from_seed
from tide.domain.value import CommunityId, LedgerEntryId, SeedDocument, UserId
from tide.persistence.store import EngineStore
from tests.di import make_seed_document


def _user(user_id: str, balance: int) -> User:
    return User(
        id=UserId(user_id),
        name=user_id.title(),
        community_id=CommunityId("reef"),
        token_balance=balance,
    )


def _entry(sequence: int, tokens: int = 3) -> LedgerEntry:
    return LedgerEntry(
        id=LedgerEntryId(uuid4()),
        sequence=sequence,
        from_user_id=UserId("bruno"),
        to_user_id=UserId("ana"),
        tokens=tokens,
        community_id=CommunityId("reef"),
    )


class TestRecordTransfer:
    """Tests for record_transfer."""

    def test_applies_balances_entry_and_counters(self):
        # Arrange
        store = EngineStore()

        # Act
        store.record_transfer(_entry(1), _user("bruno", 2), _user("ana", 13))

        # Assert
        assert store.users[UserId("bruno")].token_balance == 2
        assert store.users[UserId("ana")].token_balance == 13
        assert store.last_sequence == 1
        assert store.total_exchanges == 1
        assert store.total_circulated == 3
        assert store.exchanges_by_community[CommunityId("reef")] == 1
        assert store.circulated_by_community[CommunityId("reef")] == 3

    def test_out_of_order_sequence_rejected(self):
        """Gaps in the sequence leave the store untouched."""
        # Arrange
        store = EngineStore()

        # Act & Assert
        with pytest.raises(ValueError):
            store.record_transfer(_entry(2), _user("bruno", 2), _user("ana", 13))
        assert store.ledger == []
        assert store.users == {}
        assert store.total_exchanges == 0

    def test_empty_store_sequence_is_zero(self):
        assert EngineStore().last_sequence == 0


class TestLoadCatalog:
    """Tests for load_catalog."""

    def test_seed_order_kept(self):
        # Arrange
        store = EngineStore()
        communities, users = catalog_from_seed(make_seed_document())

        # Act
        store.load_catalog(communities, users)

        # Assert
        assert list(store.communities) == ["reef", "harbor"]
        assert store.communities[CommunityId("harbor")].user_ids == ("diego", "elena")
        assert store.users[UserId("elena")].community_id == "harbor"

    def test_second_catalog_rejected(self):
        """A seeded store never has its balances replaced."""
        # Arrange
        store = EngineStore()
        communities, users = catalog_from_seed(make_seed_document())
        store.load_catalog(communities, users)

        # Act & Assert
        with pytest.raises(ValueError):
            store.load_catalog(communities, users)

    def test_duplicate_ids_rejected_before_storing(self):
        """Duplicate seed IDs fail validation."""
        document = SeedDocument.model_validate(
            {
                "communities": [
                    {"id": "a", "name": "A", "users": [{"id": "u", "name": "U"}]},
                    {"id": "b", "name": "B", "users": [{"id": "u", "name": "U"}]},
                ]
            }
        )

        with pytest.raises(ValidationError):
            catalog_from_seed(document)
