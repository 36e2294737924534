"""
Board space definitions and types for both loops.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class SpaceType(Enum):
    """Types of spaces on the Rat Race board."""

    DEAL = "deal"
    MARKET = "market"
    DOODAD = "doodad"
    PAY_DAY = "pay_day"
    CHARITY = "charity"
    BABY = "baby"
    DOWNSIZED = "downsized"


class FastTrackSpaceType(Enum):
    """Types of spaces on the Fast Track board."""

    CASH_FLOW_DAY = "cash_flow_day"
    BUSINESS_DEAL = "business_deal"
    CHARITY = "charity"
    TAX = "tax"
    LAWSUIT = "lawsuit"
    DIVORCE = "divorce"
    DREAM = "dream"


@dataclass(frozen=True)
class Space:
    """A Rat Race space."""

    position: int
    space_type: SpaceType
    name: str

    def __repr__(self) -> str:
        return f"Space(name='{self.name}', position={self.position})"


@dataclass(frozen=True)
class FastTrackSpace:
    """A Fast Track space. Dream spaces carry the dream they grant."""

    position: int
    space_type: FastTrackSpaceType
    name: str
    dream: Optional[str] = None


def _rat_race(position: int, space_type: SpaceType) -> Space:
    names = {
        SpaceType.DEAL: "Deal",
        SpaceType.MARKET: "Market",
        SpaceType.DOODAD: "Doodad",
        SpaceType.PAY_DAY: "Pay Day",
        SpaceType.CHARITY: "Charity",
        SpaceType.BABY: "Baby",
        SpaceType.DOWNSIZED: "Downsized",
    }
    return Space(position, space_type, names[space_type])


def _dream(position: int, dream: str) -> FastTrackSpace:
    return FastTrackSpace(position, FastTrackSpaceType.DREAM, dream, dream=dream)


RAT_RACE_SPACES: Tuple[Space, ...] = tuple(
    _rat_race(i, t)
    for i, t in enumerate(
        [
            SpaceType.DEAL,
            SpaceType.DOODAD,
            SpaceType.MARKET,
            SpaceType.DEAL,
            SpaceType.PAY_DAY,
            SpaceType.DEAL,
            SpaceType.BABY,
            SpaceType.DEAL,
            SpaceType.MARKET,
            SpaceType.DEAL,
            SpaceType.PAY_DAY,
            SpaceType.DOODAD,
            SpaceType.DEAL,
            SpaceType.CHARITY,
            SpaceType.DEAL,
            SpaceType.MARKET,
            SpaceType.PAY_DAY,
            SpaceType.DEAL,
            SpaceType.DOWNSIZED,
            SpaceType.DEAL,
            SpaceType.DOODAD,
            SpaceType.DEAL,
            SpaceType.PAY_DAY,
            SpaceType.MARKET,
        ]
    )
)

FAST_TRACK_SPACES: Tuple[FastTrackSpace, ...] = (
    FastTrackSpace(0, FastTrackSpaceType.CASH_FLOW_DAY, "Cash Flow Day"),
    _dream(1, "World Travel"),
    FastTrackSpace(2, FastTrackSpaceType.BUSINESS_DEAL, "Business Deal"),
    FastTrackSpace(3, FastTrackSpaceType.CHARITY, "Charity"),
    FastTrackSpace(4, FastTrackSpaceType.CASH_FLOW_DAY, "Cash Flow Day"),
    _dream(5, "Private Jet"),
    FastTrackSpace(6, FastTrackSpaceType.TAX, "Tax Audit"),
    FastTrackSpace(7, FastTrackSpaceType.BUSINESS_DEAL, "Business Deal"),
    FastTrackSpace(8, FastTrackSpaceType.CASH_FLOW_DAY, "Cash Flow Day"),
    _dream(9, "Amazon Rainforest Adventure"),
    FastTrackSpace(10, FastTrackSpaceType.LAWSUIT, "Lawsuit"),
    FastTrackSpace(11, FastTrackSpaceType.BUSINESS_DEAL, "Business Deal"),
    FastTrackSpace(12, FastTrackSpaceType.CASH_FLOW_DAY, "Cash Flow Day"),
    _dream(13, "African Safari"),
    FastTrackSpace(14, FastTrackSpaceType.DIVORCE, "Divorce"),
    FastTrackSpace(15, FastTrackSpaceType.BUSINESS_DEAL, "Business Deal"),
    FastTrackSpace(16, FastTrackSpaceType.CASH_FLOW_DAY, "Cash Flow Day"),
    _dream(17, "Education Foundation"),
)

RAT_RACE_SIZE = len(RAT_RACE_SPACES)
FAST_TRACK_SIZE = len(FAST_TRACK_SPACES)

PAY_DAY_POSITIONS: Tuple[int, ...] = tuple(
    s.position for s in RAT_RACE_SPACES if s.space_type == SpaceType.PAY_DAY
)

DREAMS: Tuple[str, ...] = tuple(s.dream for s in FAST_TRACK_SPACES if s.dream)

DREAM_POSITIONS: Dict[str, int] = {s.dream: s.position for s in FAST_TRACK_SPACES if s.dream}
