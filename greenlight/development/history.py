"""Version history: numbered, append-only concept revisions per project."""

import asyncio
from typing import Dict, Any, List, Optional

from ..analysis import AnalysisResult
from ..config import constants
from ..errors import VersionSequenceError
from ..models import Concept, ConceptVersion
from ..utils.logging import get_logger
from .store import VersionStore

logger = get_logger('development.history')

# (field, change note); genre gets a note naming both values
TRACKED_FIELDS = [
    ('logline', 'Logline modified'),
    ('synopsis', 'Synopsis updated'),
    ('genre', None),
    ('format', 'Format changed'),
    ('tone', 'Tone adjusted'),
    ('target_audience', 'Target audience refined'),
    ('budget_tier', 'Budget tier changed'),
]

# Failures that make history unavailable; anything else propagates
STORE_ERRORS = (OSError, ValueError, KeyError, asyncio.TimeoutError)


def detect_changes(previous: Concept, current: Concept) -> List[str]:
    """
    Describe which tracked fields differ between two concepts.

    Args:
        previous: Concept from the prior version
        current: Concept being saved

    Returns:
        One note per changed field, in field order; empty if nothing changed
    """
    changes = []
    for field_name, note in TRACKED_FIELDS:
        before = getattr(previous, field_name)
        after = getattr(current, field_name)
        if before == after:
            continue
        if field_name == 'genre':
            note = f"Genre changed from {before} to {after}"
        changes.append(note)
    return changes


def check_sequence(project_id: str, versions: List[ConceptVersion]) -> None:
    """
    Verify version numbers run 1..N with no gaps.

    Raises:
        VersionSequenceError: If any version is out of place
    """
    for expected, version in enumerate(versions, 1):
        if version.version_number != expected:
            raise VersionSequenceError(
                f"Project '{project_id}': expected version {expected}, found {version.version_number}"
            )
        if version.project_id != project_id:
            raise VersionSequenceError(
                f"Version {version.version_id} belongs to '{version.project_id}', not '{project_id}'"
            )


class VersionHistory:
    """
    Guarded read-modify-write over a VersionStore.

    Saving loads the project's versions, numbers the new one, and appends
    it while holding a per-project lock, so concurrent saves for the same
    project are serialized and never reuse a version number. Store I/O is
    bounded by a timeout. An append that times out is not cancelled: the
    next save for that project waits for it before reading.

    Store failures fail soft: loads return [], saves return None, and a
    warning is logged. Sequence violations raise VersionSequenceError.
    """

    def __init__(self, store: VersionStore, timeout: float = constants.DEFAULT_HISTORY_TIMEOUT):
        """
        Initialize version history.

        Args:
            store: Backend holding the versions
            timeout: Seconds allowed for each store operation
        """
        self.store = store
        self.timeout = timeout
        self._locks: Dict[str, asyncio.Lock] = {}
        self._pending: Dict[str, asyncio.Future] = {}

    def _lock_for(self, project_id: str) -> asyncio.Lock:
        lock = self._locks.get(project_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[project_id] = lock
        return lock

    async def _settle_pending(self, project_id: str) -> None:
        # A timed-out append keeps running; it must land before the next read
        pending = self._pending.pop(project_id, None)
        if pending is None:
            return
        try:
            await pending
        except STORE_ERRORS as e:
            logger.warning(f"Earlier write for '{project_id}' failed: {e}")

    async def _load_checked(self, project_id: str) -> List[ConceptVersion]:
        versions = await asyncio.wait_for(self.store.load_versions(project_id), self.timeout)
        check_sequence(project_id, versions)
        return versions

    async def load(self, project_id: str) -> List[ConceptVersion]:
        """
        Load a project's versions in version order.

        Returns:
            Versions 1..N, or [] when the store is unavailable
        """
        try:
            return await self._load_checked(project_id)
        except STORE_ERRORS as e:
            logger.warning(f"Could not load version history for '{project_id}': {e}")
            return []

    async def save(
        self,
        project_id: str,
        concept: Concept,
        result: AnalysisResult,
        change_description: str = ""
    ) -> Optional[ConceptVersion]:
        """
        Append a new version for a project.

        Args:
            project_id: Project to save under
            concept: Concept snapshot
            result: Analysis of that concept
            change_description: Writer's note for this revision

        Returns:
            The saved ConceptVersion, or None when the store failed

        Raises:
            VersionSequenceError: If stored versions are not numbered 1..N
        """
        async with self._lock_for(project_id):
            await self._settle_pending(project_id)
            try:
                existing = await self._load_checked(project_id)
            except STORE_ERRORS as e:
                logger.warning(f"Not saving '{project_id}': history unavailable ({e})")
                return None

            version = self._build_version(project_id, existing, concept, result, change_description)
            check_sequence(project_id, existing + [version])

            append = asyncio.ensure_future(self.store.append_version(project_id, version))
            try:
                await asyncio.wait_for(asyncio.shield(append), self.timeout)
            except asyncio.TimeoutError:
                self._pending[project_id] = append
                logger.warning(f"Timed out saving {version.version_id}; the write finishes before the next save")
                return None
            except STORE_ERRORS as e:
                logger.warning(f"Failed to save {version.version_id}: {e}")
                return None

        logger.info(
            f"Saved {version.version_id} (score {version.greenlight_score}, "
            f"delta {version.score_delta})"
        )
        return version

    def _build_version(
        self,
        project_id: str,
        existing: List[ConceptVersion],
        concept: Concept,
        result: AnalysisResult,
        change_description: str
    ) -> ConceptVersion:
        version_number = len(existing) + 1
        score_delta = None
        changes: List[str] = []

        if existing:
            previous = existing[-1]
            score_delta = result.greenlight_score - previous.greenlight_score
            changes = detect_changes(previous.concept, concept)

        return ConceptVersion(
            version_id=f"{project_id}_v{version_number}",
            project_id=project_id,
            version_number=version_number,
            concept=concept,
            greenlight_score=result.greenlight_score,
            verdict=result.verdict.value,
            change_description=change_description,
            changes_from_previous=changes,
            score_delta=score_delta,
        )

    async def score_progression(self, project_id: str) -> List[Dict[str, Any]]:
        """Score per version, for charting: version, score, date (ISO-8601), delta."""
        return [
            {
                'version': v.version_number,
                'score': v.greenlight_score,
                'date': v.timestamp.isoformat(),
                'delta': v.score_delta,
            }
            for v in await self.load(project_id)
        ]
