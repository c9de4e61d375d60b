"""Persistence backends for concept version history."""

import asyncio
import copy
import json
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Any, List

from ..config import constants
from ..errors import VersionSequenceError
from ..models import ConceptVersion
from ..utils.logging import get_logger

logger = get_logger('development.store')


def check_next(project_id: str, records: List[Dict[str, Any]], record: Dict[str, Any]) -> None:
    """
    Refuse an append that would not be the next version number.

    Raises:
        VersionSequenceError: If the record does not follow the stored ones
    """
    expected = len(records) + 1
    if record['versionNumber'] != expected:
        raise VersionSequenceError(
            f"Project '{project_id}': cannot append version {record['versionNumber']}, "
            f"next is {expected}"
        )


class VersionStore(ABC):
    """
    Append-only store of concept versions, keyed by project id.

    Implementations raise on I/O or decoding failure; VersionHistory
    decides how failures surface to callers.
    """

    @abstractmethod
    async def load_versions(self, project_id: str) -> List[ConceptVersion]:
        """Return every stored version for a project, in stored order."""

    @abstractmethod
    async def append_version(self, project_id: str, version: ConceptVersion) -> None:
        """Append one version to a project's history."""


class InMemoryVersionStore(VersionStore):
    """
    Process-local store.

    Versions are kept in their serialized form so reads go through the
    same from_dict path as the JSON store.
    """

    def __init__(self):
        self._records: Dict[str, List[Dict[str, Any]]] = {}

    async def load_versions(self, project_id: str) -> List[ConceptVersion]:
        records = self._records.get(project_id, [])
        return [ConceptVersion.from_dict(copy.deepcopy(r)) for r in records]

    async def append_version(self, project_id: str, version: ConceptVersion) -> None:
        records = self._records.setdefault(project_id, [])
        record = version.to_dict()
        check_next(project_id, records, record)
        records.append(record)

    def project_ids(self) -> List[str]:
        """Projects with at least one stored version."""
        return sorted(self._records)


class JsonVersionStore(VersionStore):
    """
    One JSON file per project under a history directory.

    File layout: {"projectId": "...", "versions": [<ConceptVersion.to_dict()>, ...]}.
    Blocking file I/O runs in a worker thread; writes go to a temporary file
    that replaces the original, so a crash never leaves a half-written history.
    """

    def __init__(self, history_dir: Path):
        """
        Initialize JSON store.

        Args:
            history_dir: Directory holding '{project}.versions.json' files
        """
        self.history_dir = Path(history_dir)

    def path_for(self, project_id: str) -> Path:
        """History file for a project id (unsafe characters replaced)."""
        safe = re.sub(r'[^A-Za-z0-9_.-]+', '_', project_id).strip('.') or '_'
        return self.history_dir / f"{safe}{constants.HISTORY_FILE_SUFFIX}"

    async def load_versions(self, project_id: str) -> List[ConceptVersion]:
        path = self.path_for(project_id)
        records = await asyncio.to_thread(self._read_records, path)
        return [ConceptVersion.from_dict(r) for r in records]

    async def append_version(self, project_id: str, version: ConceptVersion) -> None:
        path = self.path_for(project_id)
        await asyncio.to_thread(self._append_record, path, project_id, version.to_dict())
        logger.debug(f"Wrote {version.version_id} to {path}")

    def _read_records(self, path: Path) -> List[Dict[str, Any]]:
        if not path.exists():
            return []

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict) or not isinstance(data.get('versions'), list):
            raise ValueError(f"Malformed version history file: {path}")
        return data['versions']

    def _append_record(self, path: Path, project_id: str, record: Dict[str, Any]) -> None:
        records = self._read_records(path)
        check_next(project_id, records, record)
        records.append(record)

        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump({'projectId': project_id, 'versions': records}, f, indent=2)
        tmp_path.replace(path)
