"""Concept input model and the closed genre/format vocabularies."""
from enum import Enum
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Genre(str, Enum):
    """Genres known to the scoring tables."""
    ACTION = "Action"
    ADVENTURE = "Adventure"
    ANIMATION = "Animation"
    BIOGRAPHY = "Biography"
    COMEDY = "Comedy"
    DOCUMENTARY = "Documentary"
    DRAMA = "Drama"
    FANTASY = "Fantasy"
    HORROR = "Horror"
    MYSTERY = "Mystery"
    ROMANCE = "Romance"
    SCI_FI = "Sci-Fi"
    THRILLER = "Thriller"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["Genre"]:
        """
        Resolve a free-form genre label.

        Args:
            label: Genre as typed by the writer ("sci-fi", "Thriller", ...)

        Returns:
            Matching Genre, or None when the label is not a known genre.
            Callers apply their own documented default.
        """
        if not label:
            return None
        key = _normalize(label)
        for genre in cls:
            if _normalize(genre.value) == key:
                return genre
        return _GENRE_ALIASES.get(key)


class FormatKind(str, Enum):
    """Delivery formats with distinct genre synergies."""
    FEATURE_FILM = "Feature Film"
    LIMITED_SERIES = "Limited Series"
    ONGOING_SERIES = "Ongoing Series"
    SHORT_FILM = "Short Film"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["FormatKind"]:
        """Resolve a format label such as 'Limited Series (6-8 episodes)'."""
        if not label:
            return None
        lowered = label.lower()
        for kind in cls:
            if kind.value.lower() in lowered:
                return kind
        return None


def _normalize(label: str) -> str:
    return ''.join(ch for ch in label.lower() if ch.isalnum())


def canonical_genre(label: Optional[str]) -> Optional[str]:
    """Canonical label for a known genre, or the label unchanged."""
    genre = Genre.from_label(label)
    return genre.value if genre else label


_GENRE_ALIASES = {
    'scifi': Genre.SCI_FI,
    'sciencefiction': Genre.SCI_FI,
    'biopic': Genre.BIOGRAPHY,
    'doc': Genre.DOCUMENTARY,
    'animated': Genre.ANIMATION,
}

# Words skipped when deriving a working title from the logline
COMMON_WORDS = {
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for',
    'of', 'with', 'by', 'from', 'as', 'is', 'was', 'are', 'were', 'been',
    'being', 'have', 'has', 'had', 'do', 'does', 'did', 'will', 'would',
    'could', 'should', 'may', 'might', 'must', 'when', 'who', 'which',
    'that', 'this', 'these', 'those', 'their', 'there', 'where', 'what',
}

# Concept field -> JSON key
_JSON_KEYS = {
    'logline': 'logline',
    'synopsis': 'synopsis',
    'genre': 'genre',
    'format': 'format',
    'secondary_genre': 'secondaryGenre',
    'tone': 'tone',
    'series_structure': 'seriesStructure',
    'target_audience': 'targetAudience',
    'budget_tier': 'budgetTier',
    'comparable1': 'comparable1',
    'comparable2': 'comparable2',
    'comparable3': 'comparable3',
    'setting_period': 'settingPeriod',
    'protagonist_type': 'protagonistType',
}


class Concept(BaseModel):
    """A screenwriting pitch submitted for analysis. Frozen once built."""

    model_config = ConfigDict(frozen=True)

    logline: str = Field(default="", description="One-sentence premise")
    synopsis: str = Field(default="", description="Longer story summary")
    genre: str = Field(default="Drama", description="Primary genre label")
    format: str = Field(default="Feature Film", description="Delivery format label")

    secondary_genre: Optional[str] = Field(None, description="Secondary genre label")
    tone: Optional[str] = Field(None, description="Declared tone")
    series_structure: Optional[str] = Field(None, description="Serialized, Episodic, ...")
    target_audience: Optional[str] = Field(None, description="Target audience label")
    budget_tier: Optional[str] = Field(None, description="Budget tier label")
    comparable1: Optional[str] = Field(None, description="First comparable title")
    comparable2: Optional[str] = Field(None, description="Second comparable title")
    comparable3: Optional[str] = Field(None, description="Third comparable title")
    setting_period: Optional[str] = Field(None, description="Contemporary, Period, Future")
    protagonist_type: Optional[str] = Field(None, description="Anti-hero, Ensemble, ...")

    @field_validator(
        'secondary_genre', 'tone', 'series_structure', 'target_audience', 'budget_tier',
        'comparable1', 'comparable2', 'comparable3', 'setting_period', 'protagonist_type'
    )
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty optional strings as not declared."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def genre_kind(self) -> Optional[Genre]:
        """Primary genre resolved against the closed vocabulary."""
        return Genre.from_label(self.genre)

    @property
    def secondary_genre_kind(self) -> Optional[Genre]:
        """Secondary genre resolved against the closed vocabulary."""
        return Genre.from_label(self.secondary_genre)

    @property
    def genre_label(self) -> str:
        """Primary genre in its canonical spelling ('scifi' -> 'Sci-Fi')."""
        return canonical_genre(self.genre)

    @property
    def secondary_genre_label(self) -> Optional[str]:
        """Secondary genre in its canonical spelling."""
        return canonical_genre(self.secondary_genre)

    @property
    def format_kind(self) -> Optional[FormatKind]:
        """Format resolved against the closed vocabulary."""
        return FormatKind.from_label(self.format)

    @property
    def is_series(self) -> bool:
        """Check whether the format is episodic."""
        return 'Series' in self.format

    @property
    def full_genre(self) -> str:
        """Primary and secondary genre for display."""
        if self.secondary_genre:
            return f"{self.genre} / {self.secondary_genre}"
        return self.genre

    @property
    def comparables(self) -> List[str]:
        """Declared comparable titles, in order."""
        return [c for c in (self.comparable1, self.comparable2, self.comparable3) if c]

    @property
    def comparables_description(self) -> str:
        """Comparables in pitch shorthand ('X meets Y')."""
        comps = self.comparables
        if not comps:
            return 'No comparables specified'
        return ' meets '.join(comps)

    @property
    def project_title(self) -> str:
        """Working title derived from the logline's distinctive words."""
        if not self.logline:
            return 'Untitled Project'
        words = [
            w for w in self.logline.split(' ')
            if len(w) > 4 and w.lower() not in COMMON_WORDS
        ][:3]
        if len(words) >= 2:
            return f"{words[0][:1].upper()}{words[0][1:]} {words[1][:1].upper()}{words[1][1:]}"
        return f"Untitled {self.genre}"

    def with_changes(self, **changes: Any) -> "Concept":
        """Return a copy with the given fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return Concept(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dict with camelCase keys."""
        return {json_key: getattr(self, field) for field, json_key in _JSON_KEYS.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Concept":
        """
        Create a concept from a dict.

        Accepts both the camelCase JSON keys and the snake_case field names.

        Args:
            data: Concept data

        Returns:
            Concept instance
        """
        values = {}
        for field, json_key in _JSON_KEYS.items():
            if json_key in data:
                values[field] = data[json_key]
            elif field in data:
                values[field] = data[field]
        return cls(**values)
