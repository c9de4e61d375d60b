"""Pytest configuration and fixtures."""
import pytest
import tempfile
import shutil
from pathlib import Path
from dotenv import load_dotenv

from greenlight.config import Settings
from greenlight.catalog import CatalogProvider
from greenlight.analysis import ConceptAnalyzer
from greenlight.models import Concept

# Load .env file for tests
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture(scope="session")
def catalog():
    """Bundled catalog, loaded once per session."""
    return CatalogProvider()


@pytest.fixture
def settings(temp_dir):
    """Settings isolated to a temporary history directory."""
    return Settings(history_dir=temp_dir / "history", random_seed=None, analysis_delay=0)


@pytest.fixture
def analyzer(catalog, settings):
    """Analyzer over the bundled catalog."""
    return ConceptAnalyzer(catalog=catalog, settings=settings)


@pytest.fixture
def thriller_concept():
    """A short, moderately weak thriller pitch."""
    return Concept(
        logline="A disgraced FBI agent must stop a bomber before the city burns",
        genre="Thriller",
        format="Feature Film",
    )


@pytest.fixture
def full_concept():
    """A pitch with every optional field declared."""
    return Concept(
        logline=(
            "When a haunted detective discovers a secret conspiracy inside her own precinct, "
            "she must expose the corrupt officers who murdered her partner before they kill "
            "her daughter and bury the truth forever."
        ),
        synopsis=(
            "The protagonist, a veteran detective, explores the cost of loyalty. "
            "In act one she finds the first clue; the middle escalates as allies betray her; "
            "the climax forces a choice between justice and family."
        ),
        genre="Thriller",
        format="Limited Series (6-8 episodes)",
        secondary_genre="Mystery",
        tone="Dark and tense",
        series_structure="Serialized",
        target_audience="Adult (35-54)",
        budget_tier="Mid ($20-50M)",
        comparable1="Mare of Easttown",
        comparable2="True Detective",
        comparable3="Zodiac",
        setting_period="Contemporary",
        protagonist_type="Anti-hero",
    )
