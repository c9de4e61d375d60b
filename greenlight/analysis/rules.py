"""
Scoring rule tables.

Every keyword family, weight and threshold used by the analyzers lives
here so the rules can be reviewed and tested on their own. Patterns run
against the lower-cased logline or synopsis.
"""

import math
import re
from dataclasses import dataclass
from typing import Dict, Pattern, Tuple

from ..models import Genre, FormatKind, Saturation
from .base import RiskTier


@dataclass(frozen=True)
class PatternRule:
    """A named keyword family and the points a match awards."""
    name: str
    pattern: Pattern[str]
    points: float

    def matches(self, text: str) -> bool:
        """Check whether the family occurs in text."""
        return self.pattern.search(text) is not None


def _rule(name: str, regex: str, points: float) -> PatternRule:
    return PatternRule(name, re.compile(regex, re.IGNORECASE), points)


def clamp(value, low, high):
    """Bound value to [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def word_count(text: str) -> int:
    """Count space-separated tokens ('' counts as one token)."""
    return len(text.split(' '))


# Logline dimension maximums
DIMENSION_MAXIMUMS: Dict[str, int] = {
    'protagonist': 15,
    'conflict': 20,
    'stakes': 15,
    'unique_hook': 20,
    'genre_clarity': 10,
    'concision': 10,
    'emotional_resonance': 10,
}

# Protagonist: first matching descriptor family scores once
PROTAGONIST_DESCRIPTORS: Tuple[PatternRule, ...] = (
    _rule(
        'role',
        r'\b(detective|agent|cop|officer|soldier|veteran|doctor|nurse|lawyer|professor|scientist|'
        r'journalist|writer|artist|musician|chef|teacher|coach|pilot|astronaut|spy|assassin|mercenary|'
        r'bounty hunter|thief|con artist|criminal|gangster|mobster|politician|mayor|president|ceo|'
        r'billionaire|entrepreneur|inventor|hacker|programmer|priest|nun|prophet|witch|wizard|'
        r'superhero|vigilante|survivor|orphan|widow|widower)\b',
        5
    ),
    _rule(
        'trait',
        r'\b(young|old|aging|retired|single|married|divorced|pregnant|desperate|haunted|tormented|'
        r'troubled|ambitious|ruthless|brilliant|genius|prodigy)\b',
        5
    ),
)
ACTIVE_VOICE = _rule(
    'active_voice',
    r'\b(must|has to|needs to|fights to|struggles to|races to|tries to|attempts to)\b',
    5
)
DEFINING_CHARACTERISTIC = _rule(
    'defining_characteristic',
    r'\b(haunted by|struggling with|determined to|obsessed with|driven by)\b',
    5
)

# Conflict: each family scores independently
CONFLICT_FAMILIES: Tuple[PatternRule, ...] = (
    _rule(
        'opposition',
        r'\b(against|versus|battles?|fights?|confronts?|faces?|challenges?|threatens?|hunts?|chases?|pursues?)\b',
        7
    ),
    _rule(
        'antagonist',
        r'\b(enemy|enemies|villain|antagonist|killer|monster|threat|danger|evil|corrupt|dark)\b',
        7
    ),
    _rule(
        'crime_war',
        r'\b(war|invasion|conspiracy|plot|scheme|murder|crime|heist|rescue|escape)\b',
        7
    ),
)
GOAL_MARKER = _rule(
    'goal',
    r'\b(to save|to stop|to find|to discover|to uncover|to expose|to protect|to avenge|to escape|'
    r'to survive|to solve|to prevent)\b',
    6
)

# Stakes
LIFE_DEATH_STAKES = _rule(
    'life_death',
    r'\b(death|die|dying|kill|killed|murder|survival|survive|life|lives|deadly|fatal|lethal)\b',
    8
)
WORLD_STAKES = _rule(
    'world',
    r'\b(world|humanity|mankind|civilization|city|country|nation|everyone|all|apocalypse|extinction)\b',
    5
)
PERSONAL_STAKES = _rule(
    'personal',
    r'\b(family|child|children|daughter|son|wife|husband|loved ones|home|everything they know)\b',
    5
)
TIME_PRESSURE = _rule(
    'time_pressure',
    r'\b(before|race against|running out|deadline|hours|days|countdown)\b',
    4
)

# Unique hook
WHAT_IF_FRAMING = _rule('what_if', r'\b(what if|imagine|in a world where|when)\b', 5)
FRESH_FAMILIES: Tuple[PatternRule, ...] = (
    _rule('unusual', r'\b(unexpected|unlikely|unusual|unconventional|never before|first|only)\b', 5),
    _rule('revelation', r'\b(twist|secret|hidden|discovers?|reveals?|uncovers?)\b', 5),
    _rule('reluctance', r'\b(forced to|reluctantly|unwillingly|accidentally)\b', 5),
)
SECONDARY_GENRE_HOOK_POINTS = 5
HOOK_STRONG = 15
HOOK_PRESENT = 10

# Genre clarity: substring keywords, 3 points each
GENRE_KEYWORDS: Dict[Genre, Tuple[str, ...]] = {
    Genre.HORROR: ('terror', 'horror', 'nightmare', 'haunted', 'possessed', 'demonic', 'cursed'),
    Genre.THRILLER: ('thriller', 'suspense', 'tense', 'paranoid', 'conspiracy', 'chase'),
    Genre.ACTION: ('action', 'explosive', 'high-octane', 'adrenaline', 'combat', 'battle'),
    Genre.COMEDY: ('comedy', 'hilarious', 'funny', 'absurd', 'misfit', 'bumbling'),
    Genre.DRAMA: ('emotional', 'powerful', 'intimate', 'personal', 'journey', 'struggle'),
    Genre.SCI_FI: ('future', 'space', 'alien', 'technology', 'robot', 'ai', 'dystopia'),
    Genre.ROMANCE: ('love', 'romance', 'heart', 'relationship', 'falling for', 'chemistry'),
    Genre.FANTASY: ('magic', 'magical', 'mythical', 'kingdom', 'quest', 'prophecy'),
    Genre.MYSTERY: ('mystery', 'detective', 'investigation', 'clues', 'whodunit', 'solve'),
}
GENRE_KEYWORD_POINTS = 3
TONE_DECLARED_POINTS = 3
GENRE_CLEAR = 7

# Concision: (min words, max words, points), first band wins
CONCISION_BANDS: Tuple[Tuple[int, int, int], ...] = (
    (25, 50, 10),
    (20, 60, 7),
    (15, 70, 5),
)
CONCISION_TOO_SHORT = (15, 3)  # under 15 words -> 3
CONCISION_TOO_LONG_POINTS = 2

# Emotional resonance
EMOTIONAL_FAMILIES: Tuple[PatternRule, ...] = (
    _rule(
        'universal_theme',
        r'\b(love|loss|grief|hope|fear|redemption|forgiveness|justice|revenge|freedom|identity|'
        r'belonging|betrayal|sacrifice|courage)\b',
        4
    ),
    _rule('relationship', r'\b(family|home|father|mother|parent|child|friend|lover|partner)\b', 4),
    _rule('fate', r'\b(dream|nightmare|destiny|fate|choice|consequence|truth|lie|secret)\b', 4),
)
EMOTION_STRONG = 7

# Market bonus
GROWTH_DIVISOR = 3
GROWTH_BONUS_RANGE = (0, 10)
SHRINKING_PENALTY = -3
SATURATION_BONUS: Dict[Saturation, int] = {
    Saturation.LOW: 5,
    Saturation.MEDIUM: 0,
    Saturation.HIGH: -3,
}
DEMAND_BASELINE = 75
DEMAND_DIVISOR = 5
DEMAND_BONUS_RANGE = (-3, 5)
ROI_BONUSES: Tuple[Tuple[float, int], ...] = ((4, 3), (3, 1))  # (ROI above, bonus)

# Synopsis quality
SYNOPSIS_MAX = 10
SYNOPSIS_LENGTH_BANDS: Tuple[Tuple[int, int], ...] = ((200, 5), (100, 4), (50, 2))
SYNOPSIS_MIN_LENGTH_POINTS = 1
SYNOPSIS_RULES: Tuple[PatternRule, ...] = (
    _rule('structure', r'\b(act (one|two|three|1|2|3)|beginning|middle|end|climax|resolution)\b', 2),
    _rule('character', r'\b(protagonist|antagonist|character arc|internal conflict|backstory)\b', 2),
    _rule('theme', r'\b(theme|message|explores|examines|questions)\b', 1),
)

# Format fit
FORMAT_MAX = 8
FORMAT_BASE_POINTS = 4
FORMAT_SYNERGY_POINTS = 4
FORMAT_GENRE_SYNERGIES: Dict[FormatKind, frozenset] = {
    FormatKind.LIMITED_SERIES: frozenset({Genre.MYSTERY, Genre.THRILLER, Genre.DRAMA, Genre.HORROR}),
    FormatKind.FEATURE_FILM: frozenset({Genre.ACTION, Genre.HORROR, Genre.COMEDY, Genre.ROMANCE, Genre.ADVENTURE}),
    FormatKind.ONGOING_SERIES: frozenset({Genre.FANTASY, Genre.SCI_FI, Genre.DRAMA}),
    FormatKind.SHORT_FILM: frozenset({Genre.HORROR, Genre.DRAMA, Genre.COMEDY}),
}
SERIES_STRUCTURE_POINTS = 2
SERIALIZED_BONUS_POINTS = 1
SERIALIZED_GENRES = frozenset({Genre.DRAMA, Genre.THRILLER, Genre.MYSTERY})

# Advanced options
ADVANCED_MAX = 10
ADVANCED_OPTION_POINTS: Dict[str, float] = {
    'secondary_genre': 2,
    'tone': 1.5,
    'target_audience': 1.5,
    'budget_tier': 1.5,
    'setting_period': 1,
    'protagonist_type': 1,
}
PRESTIGE_MARKER = 'Prestige'
PRESTIGE_BONUS = 1.5

# Comparables: points for comparable1..3
COMPARABLE_POINTS: Tuple[int, ...] = (2, 2, 1)

# Similarity risk
OVERUSED_TROPES: Dict[str, int] = {
    'chosen one': 3,
    'must save the world': 2,
    'zombie apocalypse': 3,
    'vampire romance': 3,
    'serial killer': 2,
    'alien invasion': 2,
    'superhero origin': 3,
    'dystopian future': 2,
    'time travel': 2,
}
SATURATION_RISK: Dict[Saturation, int] = {
    Saturation.LOW: 0,
    Saturation.MEDIUM: 2,
    Saturation.HIGH: 4,
}
HIGH_RISK_THRESHOLD = 6
MODERATE_RISK_THRESHOLD = 3
RISK_TIER_DETAILS: Dict[RiskTier, Tuple[str, str]] = {
    RiskTier.HIGH: (
        '#E63946',
        'Crowded market with similar concepts. Strong differentiation essential. '
        'Focus on unique angle, casting, or execution.'
    ),
    RiskTier.MODERATE: (
        '#FFB800',
        'Some comparable titles exist. Your unique selling point will be key to standing out. '
        'Emphasize what makes your take different.'
    ),
    RiskTier.LOW: (
        '#00E676',
        'Distinct concept in undersaturated space. Good opportunity for first-mover advantage. '
        'Maintain originality through development.'
    ),
}

# Buyer matching
BUYER_PRIMARY_GENRE_POINTS = 8
BUYER_SECONDARY_GENRE_POINTS = 4
BUYER_GENRE_MISMATCH_POINTS = -10
STREAMER_SERIES_POINTS = 5
STUDIO_FEATURE_POINTS = 4
INDIE_PRESTIGE_POINTS = 6
STRONG_SCORE = 80
STRONG_SCORE_POINTS = 5
WEAK_SCORE = 60
WEAK_SCORE_POINTS = -8

# Producer matching
PRODUCER_PRIMARY_GENRE_POINTS = 10
PRODUCER_SECONDARY_GENRE_POINTS = 5
PRODUCER_GENRE_MISMATCH_POINTS = -15
MICRO_BUDGET_MARKER = '3M'
MICRO_BUDGET_POINTS = 8

# Comparable titles
KEY_ELEMENT_POINTS = 12
STYLE_WORD_POINTS = 5
STYLE_WORD_MIN_LENGTH = 5  # only words longer than 4 characters count
HIGH_SIMILARITY = 60
SOME_SIMILARITY = 40
