"""Offer board domain service.

Owns Trueque records and their state machine. Mutations of one Trueque are
serialized by a per-offer lock, so at most one accept can settle an offer;
concurrent losers find it already terminal and fail with
IllegalTransitionError.
"""

import asyncio
from datetime import datetime
from uuid import uuid4

import logfire

from tide.domain.error import (
    IllegalTransitionError,
    InsufficientBalanceError,
    NotFoundError,
    SelectionError,
    SelfActionError,
    ValidationError,
)
from tide.domain.model import Accepted, Active, Countered, Rejected, Trueque, User
from tide.domain.repository import TruequeRepository
from tide.domain.value import CommunityId, OfferAction, TruequeId, UserId

from .base import Service
from .identity_registry import IdentityRegistry
from .ledger_service import LedgerService


class OfferBoard(Service):
    """Domain service for the Trueque lifecycle."""

    def __init__(
        self,
        trueque_repository: TruequeRepository,
        identity_registry: IdentityRegistry,
        ledger_service: LedgerService,
    ) -> None:
        """Initialize offer board.

        Args:
            trueque_repository: Trueque repository
            identity_registry: Identity registry (owner and actor lookups)
            ledger_service: Ledger service used to settle accepted offers
        """
        self.trueque_repository = trueque_repository
        self.identity_registry = identity_registry
        self.ledger_service = ledger_service
        self._locks: dict[TruequeId, asyncio.Lock] = {}

    async def create(
        self, title: str, description: str, tokens: int, owner_id: UserId
    ) -> Trueque:
        """Create a new active Trueque.

        Args:
            title: Offer title
            description: Offer description
            tokens: Offer value in Trust Tokens
            owner_id: Offering user

        Returns:
            Created trueque

        Raises:
            ValidationError: If title/description is blank or tokens < 0
            NotFoundError: If owner not found
        """
        with logfire.span(
            "offer_board.create", owner_id=str(owner_id), tokens=tokens
        ):
            title = title.strip()
            description = description.strip()
            if not title:
                raise ValidationError("Title must not be empty")
            if not description:
                raise ValidationError("Description must not be empty")
            if tokens < 0:
                raise ValidationError("Tokens must be non-negative")

            owner = await self.identity_registry.get_user(owner_id)

            trueque = Trueque(
                id=TruequeId(uuid4()),
                title=title,
                description=description,
                owner_id=owner.id,
                community_id=owner.community_id,
                state=Active(tokens=tokens),
                created_at=datetime.now(),
                updated_at=datetime.now(),
            )
            saved = await self.trueque_repository.save(trueque)
            logfire.info(
                "Trueque created",
                trueque_id=str(saved.id),
                owner_id=str(owner.id),
                tokens=tokens,
            )
            return saved

    async def get(self, trueque_id: TruequeId) -> Trueque:
        """Get trueque by ID.

        Raises:
            NotFoundError: If trueque not found
        """
        trueque = await self.trueque_repository.find_by_id(trueque_id)
        if not trueque:
            raise NotFoundError("Trueque", str(trueque_id))
        return trueque

    async def list_for_community(self, community_id: CommunityId) -> list[Trueque]:
        """List a community's trueques in creation order."""
        return await self.trueque_repository.find_by_community(community_id)

    async def counter(
        self, trueque_id: TruequeId, proposed_tokens: int, by_user_id: UserId
    ) -> Trueque:
        """Propose a new value for an active Trueque.

        No value moves; the offer's tokens become the proposed amount.

        Raises:
            NotFoundError: If trueque or user not found
            IllegalTransitionError: If the offer is not active
            SelfActionError: If the owner counters their own offer
            SelectionError: If the user is outside the offer's community
            ValidationError: If proposed_tokens < 0
        """
        with logfire.span(
            "offer_board.counter",
            trueque_id=str(trueque_id),
            by_user_id=str(by_user_id),
            proposed_tokens=proposed_tokens,
        ):
            async with await self._lock_for(trueque_id):
                trueque = await self.get(trueque_id)
                await self._check_action(trueque, OfferAction.COUNTER, by_user_id)
                if proposed_tokens < 0:
                    raise ValidationError("Tokens must be non-negative")

                countered = trueque.transition(
                    Countered(
                        tokens=proposed_tokens,
                        countered_by=by_user_id,
                        previous_tokens=trueque.tokens,
                    )
                )
                saved = await self.trueque_repository.save(countered)

            logfire.info(
                "Trueque countered",
                trueque_id=str(trueque_id),
                previous_tokens=trueque.tokens,
                tokens=proposed_tokens,
            )
            return saved

    async def accept(self, trueque_id: TruequeId, by_user_id: UserId) -> Trueque:
        """Accept a Trueque: the acceptor pays its current value to the owner.

        The offer only becomes accepted if the transfer succeeds.

        Raises:
            NotFoundError: If trueque or user not found
            IllegalTransitionError: If the offer is already terminal
            SelfActionError: If the owner accepts their own offer
            SelectionError: If the user is outside the offer's community
            InsufficientBalanceError: If the acceptor cannot pay
        """
        with logfire.span(
            "offer_board.accept",
            trueque_id=str(trueque_id),
            by_user_id=str(by_user_id),
        ):
            async with await self._lock_for(trueque_id):
                trueque = await self.get(trueque_id)
                acceptor = await self._check_action(
                    trueque, OfferAction.ACCEPT, by_user_id
                )
                if not acceptor.can_afford(trueque.tokens):
                    logfire.warn(
                        "Acceptor cannot afford trueque",
                        trueque_id=str(trueque_id),
                        balance=acceptor.token_balance,
                        tokens=trueque.tokens,
                    )
                    raise InsufficientBalanceError(
                        str(acceptor.id), acceptor.token_balance, trueque.tokens
                    )

                entry = await self.ledger_service.transfer(
                    from_user_id=acceptor.id,
                    to_user_id=trueque.owner_id,
                    tokens=trueque.tokens,
                    trueque_id=trueque.id,
                )
                accepted = trueque.transition(
                    Accepted(
                        tokens=trueque.tokens,
                        accepted_by=acceptor.id,
                        ledger_sequence=entry.sequence,
                    )
                )
                saved = await self.trueque_repository.save(accepted)
                self._release_lock(trueque_id)

            logfire.info(
                "Trueque accepted",
                trueque_id=str(trueque_id),
                accepted_by=str(acceptor.id),
                tokens=saved.tokens,
                sequence=entry.sequence,
            )
            return saved

    async def reject(self, trueque_id: TruequeId, by_user_id: UserId) -> Trueque:
        """Reject a Trueque. No value moves.

        Raises:
            NotFoundError: If trueque or user not found
            IllegalTransitionError: If the offer is already terminal
            SelfActionError: If the owner rejects their own offer
            SelectionError: If the user is outside the offer's community
        """
        with logfire.span(
            "offer_board.reject",
            trueque_id=str(trueque_id),
            by_user_id=str(by_user_id),
        ):
            async with await self._lock_for(trueque_id):
                trueque = await self.get(trueque_id)
                await self._check_action(trueque, OfferAction.REJECT, by_user_id)

                rejected = trueque.transition(
                    Rejected(tokens=trueque.tokens, rejected_by=by_user_id)
                )
                saved = await self.trueque_repository.save(rejected)
                self._release_lock(trueque_id)

            logfire.info(
                "Trueque rejected",
                trueque_id=str(trueque_id),
                rejected_by=str(by_user_id),
            )
            return saved

    async def _check_action(
        self, trueque: Trueque, action: OfferAction, by_user_id: UserId
    ) -> User:
        """Validate that a user may apply an action to a Trueque.

        Returns:
            The acting user
        """
        if not trueque.allows(action):
            if trueque.is_terminal:
                self._release_lock(trueque.id)
            logfire.warn(
                "Illegal trueque transition",
                trueque_id=str(trueque.id),
                status=trueque.status.value,
                action=action.value,
            )
            raise IllegalTransitionError(str(trueque.id), trueque.status, action)

        if trueque.is_owned_by(by_user_id):
            logfire.warn(
                "Owner acting on own trueque",
                trueque_id=str(trueque.id),
                action=action.value,
            )
            raise SelfActionError(str(trueque.id), str(by_user_id), action)

        actor = await self.identity_registry.get_user(by_user_id)
        if actor.community_id != trueque.community_id:
            raise SelectionError(
                f"User {by_user_id} is not a member of community "
                f"{trueque.community_id}"
            )
        return actor

    async def _lock_for(self, trueque_id: TruequeId) -> asyncio.Lock:
        """Get the lock guarding an existing Trueque.

        Only non-terminal offers keep a lock in the table; a terminal offer
        gets a private lock since every action on it is refused.

        Raises:
            NotFoundError: If trueque not found
        """
        trueque = await self.get(trueque_id)
        if trueque.is_terminal:
            return asyncio.Lock()
        return self._locks.setdefault(trueque_id, asyncio.Lock())

    def _release_lock(self, trueque_id: TruequeId) -> None:
        # Terminal offers refuse every action before mutating, so a later
        # caller may safely start from a fresh lock
        self._locks.pop(trueque_id, None)
