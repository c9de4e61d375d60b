"""Application constants and defaults."""
from pathlib import Path

# Directory Structure
DEFAULT_HOME_DIR = Path.home() / ".greenlight"
DEFAULT_HISTORY_DIR = DEFAULT_HOME_DIR / "history"
DEFAULT_LOG_DIR = DEFAULT_HOME_DIR / "logs"
BUNDLED_CATALOG_DIR = Path(__file__).parent.parent / "catalog" / "data"

# Catalog file names
CATALOG_FILES = {
    'genres': 'genres.yaml',
    'buyers': 'buyers.yaml',
    'producers': 'producers.yaml',
    'titles': 'titles.yaml',
    'market': 'market.yaml',
}

# Version history
HISTORY_FILE_SUFFIX = ".versions.json"
DEFAULT_HISTORY_TIMEOUT = 5.0  # seconds

# Settings a user may set in config.yaml or with `greenlight config`
CONFIG_KEYS = (
    'catalog_dir',
    'history_dir',
    'random_seed',
    'analysis_delay',
    'history_timeout',
    'log_level',
)

# Async display wrapper
DEFAULT_ANALYSIS_DELAY = 0.1  # seconds

# Final score bounds
MIN_SCORE = 25
MAX_SCORE = 98
SCORE_JITTER = (-2, 2)

# Genre bonus bounds
MIN_GENRE_BONUS = -10
MAX_GENRE_BONUS = 15

# Buyer/producer matching
MIN_MATCH = 50
MAX_MATCH = 98
MATCH_THRESHOLD = 60
BUYER_JITTER = (-3, 2)
PRODUCER_JITTER = (-4, 3)

# Comparable titles
BASE_TITLE_SIMILARITY = 30
MIN_TITLE_SIMILARITY = 25
MAX_TITLE_SIMILARITY = 85

# List limits
MAX_MATCHES = 10
MAX_DIFFERENTIATION_TIPS = 5
MAX_WEAKNESS_FIXES = 6

# A/B comparison
TIE_THRESHOLD = 3

# What-if
SIGNIFICANT_DELTA = 5

# Fallbacks for unknown genres
MARKET_FALLBACK_GENRE = "Drama"
TITLES_FALLBACK_GENRE = "Thriller"

# Valid log levels
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']

# Budget tiers: label prefix -> (low, high) in millions USD, None = open ended
BUDGET_TIERS = {
    'Micro': (1, 5),
    'Low': (5, 20),
    'Mid': (20, 50),
    'High': (50, 100),
    'Tentpole': (100, None),
}
