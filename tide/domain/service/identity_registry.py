"""Identity registry domain service.

Owns the community/user catalog and the current selection.
"""

from abc import ABC, abstractmethod
from typing import Optional

import logfire

from tide.domain.error import NotFoundError, SelectionError, ValidationError
from tide.domain.model import Community, User
from tide.domain.repository import CommunityRepository, UserRepository
from tide.domain.value import CommunityId, SeedDocument, Selection, UserId

from .base import Service


class SeedSource(ABC):
    """Port for the external provider of the community catalog."""

    @abstractmethod
    async def load(self) -> SeedDocument:
        """Load the seed catalog.

        Returns:
            Seed document with communities and their users
        """
        pass


def catalog_from_seed(
    document: SeedDocument,
) -> tuple[list[Community], list[User]]:
    """Build catalog records from a seed document, keeping seed order.

    Args:
        document: Seed catalog

    Returns:
        Communities and users ready to be stored

    Raises:
        ValidationError: If a community or user ID appears twice
    """
    communities: list[Community] = []
    users: list[User] = []
    community_ids: set[str] = set()
    user_ids: set[str] = set()

    for seed_community in document.communities:
        if seed_community.id in community_ids:
            raise ValidationError(
                f"Duplicate community id in seed: {seed_community.id}"
            )
        community_ids.add(seed_community.id)

        for seed_user in seed_community.users:
            if seed_user.id in user_ids:
                raise ValidationError(f"Duplicate user id in seed: {seed_user.id}")
            user_ids.add(seed_user.id)
            users.append(
                User(
                    id=seed_user.id,
                    name=seed_user.name,
                    community_id=seed_community.id,
                    token_balance=seed_user.token_balance,
                )
            )

        communities.append(
            Community(
                id=seed_community.id,
                name=seed_community.name,
                user_ids=tuple(u.id for u in seed_community.users),
            )
        )

    return communities, users


class IdentityRegistry(Service):
    """Domain service for the community catalog and navigation selection."""

    def __init__(
        self,
        community_repository: CommunityRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize identity registry.

        Args:
            community_repository: Community repository
            user_repository: User repository
        """
        self.community_repository = community_repository
        self.user_repository = user_repository
        self._selection = Selection()

    async def load(self, document: SeedDocument) -> None:
        """Populate an empty catalog from a seed document.

        A catalog that already holds communities is left untouched.

        Args:
            document: Seed catalog

        Raises:
            ValidationError: If a community or user ID appears twice
        """
        with logfire.span(
            "identity_registry.load", communities=len(document.communities)
        ):
            if await self.community_repository.find_all():
                logfire.warn("Catalog already loaded, ignoring seed")
                return

            communities, users = catalog_from_seed(document)
            for user in users:
                await self.user_repository.save(user)
            for community in communities:
                await self.community_repository.save(community)

            logfire.info(
                "Catalog loaded",
                communities=len(communities),
                users=len(users),
            )

    async def list_communities(self) -> list[Community]:
        """List communities in catalog order."""
        return await self.community_repository.find_all()

    async def get_community(self, community_id: CommunityId) -> Community:
        """Get community by ID.

        Raises:
            NotFoundError: If community not found
        """
        community = await self.community_repository.find_by_id(community_id)
        if not community:
            raise NotFoundError("Community", str(community_id))
        return community

    async def get_user(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user

    async def members_of(self, community_id: CommunityId) -> list[User]:
        """Get the members of a community in catalog order.

        Raises:
            NotFoundError: If community not found
        """
        community = await self.get_community(community_id)
        return await self.user_repository.find_by_ids(community.user_ids)

    async def community_of(self, user_id: UserId) -> Community:
        """Get the community a user belongs to.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.get_user(user_id)
        return await self.get_community(user.community_id)

    async def select_community(self, community_id: CommunityId) -> Community:
        """Select the current community.

        Switching to a different community clears the selected user.

        Args:
            community_id: Community to select

        Returns:
            Selected community

        Raises:
            NotFoundError: If community not found
        """
        with logfire.span(
            "identity_registry.select_community", community_id=str(community_id)
        ):
            community = await self.get_community(community_id)
            if self._selection.community_id != community.id:
                self._selection = Selection(community_id=community.id)
            logfire.info("Community selected", community_id=str(community.id))
            return community

    async def select_user(self, user_id: UserId) -> User:
        """Select the current user within the selected community.

        Args:
            user_id: User to select

        Returns:
            Selected user

        Raises:
            SelectionError: If no community is selected or the user is not a
                member of it
        """
        with logfire.span("identity_registry.select_user", user_id=str(user_id)):
            community_id = self._selection.community_id
            if community_id is None:
                logfire.warn("User selected before community", user_id=str(user_id))
                raise SelectionError("Select a community before selecting a user")

            community = await self.get_community(community_id)
            if not community.has_member(user_id):
                logfire.warn(
                    "User outside selected community",
                    user_id=str(user_id),
                    community_id=str(community_id),
                )
                raise SelectionError(
                    f"User {user_id} is not a member of community {community_id}"
                )

            user = await self.get_user(user_id)
            self._selection = Selection(community_id=community_id, user_id=user.id)
            logfire.info("User selected", user_id=str(user.id))
            return user

    def reset(self) -> None:
        """Clear the current community and user.

        Only navigation state is touched; balances and the ledger persist.
        """
        self._selection = Selection()
        logfire.info("Selection reset")

    @property
    def selection(self) -> Selection:
        """Current selection."""
        return self._selection

    async def current_community(self) -> Optional[Community]:
        """Currently selected community, if any."""
        if self._selection.community_id is None:
            return None
        return await self.community_repository.find_by_id(self._selection.community_id)

    async def current_user(self) -> Optional[User]:
        """Currently selected user, if any."""
        if self._selection.user_id is None:
            return None
        return await self.user_repository.find_by_id(self._selection.user_id)

    async def require_selection(self) -> tuple[Community, User]:
        """Return the selected community and user.

        Raises:
            SelectionError: If either is missing
        """
        selection = self._selection
        if not selection.is_complete:
            raise SelectionError("Select a community and a user first")
        community = await self.current_community()
        user = await self.current_user()
        if community is None or user is None:
            raise SelectionError("Select a community and a user first")
        return community, user
