"""Project persistence: the load/save contract and two stores.

Projects are keyed by an opaque id. The calculation code never touches a
store; the UI loads a snapshot, edits it through the update functions and
saves it back.
"""

import itertools
import json
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Tuple

from .models.project import ProjectState

logger = logging.getLogger(__name__)


class ProjectNotFoundError(KeyError):
    """Raised when a project id is not in the store."""


class ProjectStore(ABC):
    """Load/save contract for project snapshots."""

    @abstractmethod
    def load(self, project_id: str) -> ProjectState:
        """Load a project.

        Raises:
            ProjectNotFoundError: If the id is unknown.
        """

    @abstractmethod
    def save(
        self,
        state: ProjectState,
        project_id: Optional[str] = None,
        name: str = "New Project",
    ) -> str:
        """Insert (no id) or update (id given) a project and return its id."""

    @abstractmethod
    def latest(self) -> Optional[Tuple[str, ProjectState]]:
        """Most recently saved project, or None for an empty store."""

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex


class InMemoryProjectStore(ProjectStore):
    """Store for tests and single-session use."""

    def __init__(self):
        self._records: Dict[str, Tuple[int, Dict]] = {}
        self._sequence = itertools.count()

    def load(self, project_id: str) -> ProjectState:
        if project_id not in self._records:
            raise ProjectNotFoundError(project_id)
        _, data = self._records[project_id]
        return ProjectState.from_dict(data)

    def save(
        self,
        state: ProjectState,
        project_id: Optional[str] = None,
        name: str = "New Project",
    ) -> str:
        project_id = project_id or self.new_id()
        self._records[project_id] = (next(self._sequence), state.to_dict())
        logger.debug("Saved project %s in memory", project_id)
        return project_id

    def latest(self) -> Optional[Tuple[str, ProjectState]]:
        if not self._records:
            return None
        project_id = max(self._records, key=lambda pid: self._records[pid][0])
        return project_id, self.load(project_id)


class JsonFileProjectStore(ProjectStore):
    """One JSON document per project in a directory.

    Each file holds ``{"id", "name", "updated_at", "data"}`` where ``data`` is
    ``ProjectState.to_dict()``.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, project_id: str) -> Path:
        return self.directory / f"{project_id}.json"

    def _read(self, path: Path) -> Dict:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def load(self, project_id: str) -> ProjectState:
        path = self._path(project_id)
        if not path.exists():
            raise ProjectNotFoundError(project_id)
        return ProjectState.from_dict(self._read(path)["data"])

    def save(
        self,
        state: ProjectState,
        project_id: Optional[str] = None,
        name: str = "New Project",
    ) -> str:
        project_id = project_id or self.new_id()
        self.directory.mkdir(parents=True, exist_ok=True)

        record = {
            "id": project_id,
            "name": name,
            "updated_at": datetime.now().isoformat(),
            "data": state.to_dict(),
        }
        with self._path(project_id).open("w", encoding="utf-8") as f:
            json.dump(record, f, indent=2)

        logger.debug("Saved project %s to %s", project_id, self.directory)
        return project_id

    def latest(self) -> Optional[Tuple[str, ProjectState]]:
        if not self.directory.exists():
            return None

        newest: Optional[Tuple[str, str]] = None
        for path in self.directory.glob("*.json"):
            try:
                record = self._read(path)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Skipping unreadable project file %s: %s", path, e)
                continue
            if newest is None or record.get("updated_at", "") > newest[1]:
                newest = (record.get("id", path.stem), record.get("updated_at", ""))

        if newest is None:
            return None
        return newest[0], self.load(newest[0])
