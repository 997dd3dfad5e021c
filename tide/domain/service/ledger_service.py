"""Ledger domain service."""

import asyncio
from typing import Optional
from uuid import uuid4

import logfire

from tide.domain.error import InsufficientBalanceError, NotFoundError, ValidationError
from tide.domain.model import LedgerEntry, LedgerView, User
from tide.domain.repository import LedgerRepository, UserRepository
from tide.domain.value import CommunityId, LedgerEntryId, TruequeId, UserId

from .base import Service
from .trust_engine import TrustEngine


class LedgerService(Service):
    """Domain service for settlement and the exchange ledger.

    All transfers are serialized through one lock, which also makes it the
    single allocator of sequence numbers.
    """

    def __init__(
        self,
        ledger_repository: LedgerRepository,
        user_repository: UserRepository,
        trust_engine: TrustEngine,
    ) -> None:
        """Initialize ledger service.

        Args:
            ledger_repository: Ledger repository
            user_repository: User repository
            trust_engine: Trust engine notified after each settlement
        """
        self.ledger_repository = ledger_repository
        self.user_repository = user_repository
        self.trust_engine = trust_engine
        self._lock = asyncio.Lock()

    async def transfer(
        self,
        from_user_id: UserId,
        to_user_id: UserId,
        tokens: int,
        trueque_id: Optional[TruequeId] = None,
    ) -> LedgerEntry:
        """Move tokens between two members of one community.

        Debit, credit, ledger append and counter updates are applied as one
        unit. The payer's balance is checked here even when the caller has
        already checked it.

        Args:
            from_user_id: Paying user
            to_user_id: Receiving user
            tokens: Amount to move
            trueque_id: Offer being settled, if any

        Returns:
            Appended ledger entry

        Raises:
            ValidationError: If the amount is negative, the parties are the
                same user, or they belong to different communities
            NotFoundError: If either user is unknown
            InsufficientBalanceError: If the payer cannot cover the amount
        """
        with logfire.span(
            "ledger_service.transfer",
            from_user_id=str(from_user_id),
            to_user_id=str(to_user_id),
            tokens=tokens,
        ):
            if tokens < 0:
                raise ValidationError("Transfer amount must be non-negative")
            if from_user_id == to_user_id:
                raise ValidationError("Cannot transfer tokens to the same user")

            async with self._lock:
                payer = await self._get_user(from_user_id)
                payee = await self._get_user(to_user_id)

                if payer.community_id != payee.community_id:
                    logfire.warn(
                        "Cross-community transfer refused",
                        from_community=str(payer.community_id),
                        to_community=str(payee.community_id),
                    )
                    raise ValidationError(
                        "Transfers are only allowed within one community"
                    )

                if not payer.can_afford(tokens):
                    logfire.warn(
                        "Insufficient balance for transfer",
                        user_id=str(payer.id),
                        balance=payer.token_balance,
                        required=tokens,
                    )
                    raise InsufficientBalanceError(
                        str(payer.id), payer.token_balance, tokens
                    )

                entry = LedgerEntry(
                    id=LedgerEntryId(uuid4()),
                    sequence=await self.ledger_repository.last_sequence() + 1,
                    from_user_id=payer.id,
                    to_user_id=payee.id,
                    tokens=tokens,
                    community_id=payer.community_id,
                    trueque_id=trueque_id,
                )
                debited = payer.model_copy(
                    update={"token_balance": payer.token_balance - tokens}
                )
                credited = payee.model_copy(
                    update={"token_balance": payee.token_balance + tokens}
                )
                saved = await self.ledger_repository.append(entry, debited, credited)

            logfire.info(
                "Transfer settled",
                sequence=saved.sequence,
                from_user_id=str(saved.from_user_id),
                to_user_id=str(saved.to_user_id),
                tokens=saved.tokens,
            )

            await self.trust_engine.recompute(saved.community_id)
            return saved

    async def entries(self, community_id: Optional[CommunityId] = None) -> LedgerView:
        """Get a lazy, restartable view of the ledger in append order.

        Args:
            community_id: Restrict to one community

        Returns:
            Ledger view
        """
        return await self.ledger_repository.view(community_id)

    async def export(self, community_id: Optional[CommunityId] = None) -> list[dict]:
        """Export ledger entries as `{sequence, from, to, tokens}` dicts."""
        view = await self.entries(community_id)
        return view.export()

    async def total_exchanges(self) -> int:
        """Number of settled exchanges."""
        return await self.ledger_repository.total_exchanges()

    async def total_circulated(self) -> int:
        """Total tokens moved by settlement."""
        return await self.ledger_repository.total_circulated()

    async def exchange_count(self, community_id: CommunityId) -> int:
        """Number of settled exchanges within a community."""
        return await self.ledger_repository.count_by_community(community_id)

    async def circulated(self, community_id: CommunityId) -> int:
        """Tokens moved within a community."""
        return await self.ledger_repository.circulated_by_community(community_id)

    async def _get_user(self, user_id: UserId) -> User:
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            logfire.warn("Transfer party not found", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))
        return user
