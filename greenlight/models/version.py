"""Concept version history records."""
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict, Field

from .concept import Concept


class ConceptVersion(BaseModel):
    """One saved revision of a project's concept and the score it earned."""

    model_config = ConfigDict(frozen=True)

    version_id: str = Field(description="'{project_id}_v{n}'")
    project_id: str = Field(description="Owning project")
    version_number: int = Field(ge=1, description="1-based, gapless per project")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    concept: Concept = Field(description="Concept snapshot")
    greenlight_score: int = Field(description="Final score for this revision")
    verdict: str = Field(description="Verdict label for this revision")
    change_description: str = Field(default="", description="Writer's note")
    changes_from_previous: List[str] = Field(default_factory=list)
    score_delta: Optional[int] = Field(None, description="Score change vs. previous version")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted JSON shape."""
        return {
            'versionId': self.version_id,
            'projectId': self.project_id,
            'versionNumber': self.version_number,
            'timestamp': self.timestamp.isoformat(),
            **self.concept.to_dict(),
            'greenlightScore': self.greenlight_score,
            'verdict': self.verdict,
            'changeDescription': self.change_description,
            'changesFromPrevious': list(self.changes_from_previous),
            'scoreDelta': self.score_delta,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConceptVersion":
        """
        Create a version from its persisted JSON shape.

        Args:
            data: Dict as produced by to_dict()

        Returns:
            ConceptVersion instance

        Raises:
            KeyError: If a required key is missing
            ValueError: If a value fails validation
        """
        return cls(
            version_id=data['versionId'],
            project_id=data['projectId'],
            version_number=data['versionNumber'],
            timestamp=datetime.fromisoformat(data['timestamp']),
            concept=Concept.from_dict(data),
            greenlight_score=data['greenlightScore'],
            verdict=data['verdict'],
            change_description=data.get('changeDescription', ''),
            changes_from_previous=list(data.get('changesFromPrevious') or []),
            score_delta=data.get('scoreDelta'),
        )
