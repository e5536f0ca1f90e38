"""Read-only access to the sticky skills recorded for the current session."""
import hashlib
import json
from pathlib import Path
from typing import Mapping, Protocol

from skill_activation.logging_utils import get_logger

logger = get_logger(__name__)


class SessionStore(Protocol):
    """Key-value view of session state: context key -> sticky skill names."""

    def get(self, context_key: str) -> list[str]:
        ...


def session_key(project_dir: Path | str) -> str:
    """Stable file key for a project root."""
    path = str(Path(project_dir).absolute())
    return hashlib.sha256(path.encode("utf-8")).hexdigest()[:16]


def _skill_names(data: object) -> list[str]:
    if isinstance(data, dict):
        data = data.get("activeSkills")
    if not isinstance(data, list):
        return []
    return [name for name in data if isinstance(name, str) and name]


class FileSessionStore:
    """Session files written by the file-edit tracker, one JSON file per project root.

    A file holds either a list of skill names or {"activeSkills": [...]}.
    Anything missing or unparsable reads as no sticky skills.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, context_key: str) -> Path:
        return self.directory / f"{session_key(context_key)}.json"

    def get(self, context_key: str) -> list[str]:
        path = self.path_for(context_key)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.debug("session_state_unreadable", path=str(path), error=str(e))
            return []
        return _skill_names(data)


class InMemorySessionStore:
    def __init__(self, entries: Mapping[str, list[str]] | None = None) -> None:
        self._entries = dict(entries or {})

    def get(self, context_key: str) -> list[str]:
        return list(self._entries.get(context_key, []))
