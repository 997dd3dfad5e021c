"""Trust score entity."""

from datetime import datetime

from pydantic import Field

from tide.domain.model.common import DomainModel
from tide.domain.value import CommunityId


class TrustScore(DomainModel):
    """Community trust derived from exchange activity per member."""

    community_id: CommunityId
    value: float = Field(ge=0.0, lt=1.0)
    exchanges: int = Field(ge=0)
    users: int = Field(ge=0)
    computed_at: datetime = Field(default_factory=datetime.now)
