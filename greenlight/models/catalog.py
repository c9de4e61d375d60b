"""Read-only catalog records: genre statistics, buyers, producers, titles."""
from enum import Enum
from typing import Dict, Tuple
from pydantic import BaseModel, ConfigDict, Field


class Saturation(str, Enum):
    """Genre saturation tiers."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BuyerType(str, Enum):
    """Buyer categories used by the matching rules."""
    STREAMER = "Streamer"
    MAJOR_STUDIO = "Major Studio"
    MINI_MAJOR = "Mini-Major"
    INDIE = "Indie"
    PRODUCTION_COMPANY = "Production Company"


class GenreMarketData(BaseModel):
    """Box office and streaming statistics for one genre."""

    model_config = ConfigDict(frozen=True)

    genre: str = Field(description="Genre label")
    box_office_revenue: float = Field(description="Annual box office, billions USD")
    market_share: float = Field(description="Share of total box office, percent")
    growth_rate: float = Field(description="Year-over-year growth, percent")
    is_growing: bool = Field(description="Whether the genre is growing")
    saturation_level: Saturation = Field(description="Market saturation")
    streaming_demand: float = Field(ge=0, le=100, description="Streaming demand index")
    market_outlook: str = Field(description="bullish, stable or bearish")
    hot_trends: Tuple[str, ...] = Field(default=(), description="Current trends")
    average_budget: int = Field(description="Average budget, millions USD")
    avg_roi: float = Field(description="Average return multiplier")


class BuyerProfile(BaseModel):
    """A studio, streamer or financier that acquires projects."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: BuyerType
    preferred_genres: Tuple[str, ...] = ()
    content_strategy: str = ""
    recent_acquisitions: Tuple[str, ...] = ()
    budget_range: str = ""
    submission_tip: str = ""
    base_match_score: int = Field(ge=0, le=100)
    accepts_unsolicited: bool = False
    territory_focus: str = ""


class ProducerProfile(BaseModel):
    """A producer or production company with a genre track record."""

    model_config = ConfigDict(frozen=True)

    name: str
    company: str
    specialties: Tuple[str, ...] = ()
    notable_credits: Tuple[str, ...] = ()
    typical_budget: str = ""
    looking_for: str = ""
    accepts_submissions: bool = False
    base_match_score: int = Field(ge=0, le=100)


class ComparableTitleRecord(BaseModel):
    """A recent released title used for comparison."""

    model_config = ConfigDict(frozen=True)

    title: str
    year: int
    platform: str
    genre: str
    box_office_millions: int = 0
    rt_score: float = 0
    logline_style: str = ""
    key_elements: Tuple[str, ...] = ()


class MarketReference(BaseModel):
    """Free-text market context shared by every analysis."""

    model_config = ConfigDict(frozen=True)

    timing_advice: Dict[str, str] = Field(default_factory=dict)
    audience_profiles: Dict[str, str] = Field(default_factory=dict)
    streaming_context: str = ""
    script_sale_ranges: Dict[str, str] = Field(default_factory=dict)

    def timing_for(self, genre: str) -> str:
        """Timing advice for a genre, with a generic fallback."""
        return self.timing_advice.get(
            genre,
            'Monitor genre cycle and competitive release slate before finalizing timing.'
        )

    def audience_for(self, genre: str) -> str:
        """Target demographic for a genre, with a generic fallback."""
        return self.audience_profiles.get(genre, 'General audience 18-49')
