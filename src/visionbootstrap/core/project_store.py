"""File-backed project history.

The history is a single JSON file holding a list of projects, newest first.
It is read once when the store is created and rewritten in full on every
mutation, so the file always reflects exactly one consistent history.

Loading is forgiving:

- if the file is missing, unreadable, or not valid JSON, the history is empty
- if the payload is not a list, the history is empty
- entries that fail validation are dropped

None of these cases raise; they are logged at warning level only.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

import pydantic

from visionbootstrap.core.models import GeneratedProject

logger = logging.getLogger(__name__)


def load_history(history_path: Path) -> list[GeneratedProject]:
    """Load the persisted history, returning an empty list on any failure.

    Args:
        history_path: Path to the history JSON file.

    Returns:
        Projects in persisted order, without duplicate ids.
    """
    if not history_path.exists():
        return []

    try:
        with open(history_path, encoding="utf-8") as handle:
            raw_entries = json.load(handle)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable history file {history_path}: {e}")
        return []

    if not isinstance(raw_entries, list):
        logger.warning(f"Ignoring history file {history_path}: expected a list")
        return []

    projects: list[GeneratedProject] = []
    seen_ids: set[str] = set()
    for entry in raw_entries:
        try:
            project = GeneratedProject.model_validate(entry)
        except pydantic.ValidationError as e:
            logger.warning(f"Dropping invalid history entry: {e.error_count()} error(s)")
            continue
        if project.id in seen_ids:
            continue
        seen_ids.add(project.id)
        projects.append(project)

    return projects


def save_history(history_path: Path, projects: list[GeneratedProject]) -> None:
    """Write the full history to disk, replacing the previous file atomically.

    Args:
        history_path: Path to the history JSON file.
        projects: Projects to persist, in display order.
    """
    history_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [project.model_dump(mode="json", by_alias=True) for project in projects]

    fd, tmp_name = tempfile.mkstemp(dir=history_path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        os.replace(tmp_name, history_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class ProjectStore:
    """Ordered, persisted collection of generated projects.

    Args:
        history_path: Path to the history JSON file.
    """

    def __init__(self, history_path: Path):
        self.history_path = Path(history_path)
        self._lock = threading.Lock()
        self._projects = load_history(self.history_path)
        logger.info(f"Loaded {len(self._projects)} projects from {self.history_path}")

    def list(self) -> list[GeneratedProject]:
        """Return the history, newest first."""
        with self._lock:
            return list(self._projects)

    def get(self, project_id: str) -> GeneratedProject | None:
        """Return the project with ``project_id`` or None."""
        with self._lock:
            return next((p for p in self._projects if p.id == project_id), None)

    def save(self, project: GeneratedProject) -> None:
        """Prepend ``project`` and persist.

        An existing entry with the same id is replaced, keeping ids unique.
        """
        with self._lock:
            remaining = [p for p in self._projects if p.id != project.id]
            updated = [project, *remaining]
            save_history(self.history_path, updated)
            self._projects = updated
        logger.info(f"Saved project {project.name!r} ({project.id})")

    def delete(self, project_id: str) -> bool:
        """Remove the project with ``project_id`` and persist.

        Returns:
            True if an entry was removed.
        """
        with self._lock:
            updated = [p for p in self._projects if p.id != project_id]
            if len(updated) == len(self._projects):
                return False
            save_history(self.history_path, updated)
            self._projects = updated
        logger.info(f"Deleted project {project_id}")
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._projects)
