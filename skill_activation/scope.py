"""Detect which repository the hook is running in."""
import json
from pathlib import Path

from skill_activation.config import REPO_CONFIG_RELATIVE_PATH
from skill_activation.logging_utils import get_logger

logger = get_logger(__name__)

ORCHESTRATOR = "orchestrator"


def _repo_name_from_config(config_path: Path) -> str | None:
    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("repo_config_unreadable", path=str(config_path), error=str(e))
        return None
    if not isinstance(config, dict):
        return None
    name = config.get("repoName")
    if isinstance(name, str) and name.strip():
        return name
    return None


def resolve_context_identity(project_dir: Path, config_path: Path | None = None) -> str:
    """Return the repository name used for scope filtering.

    A repoName in the repo config wins. Otherwise any path segment containing
    "orchestrator" makes this the orchestrator; else the last segment is used.
    """
    # Relative roots such as "." have no usable name until resolved
    project_dir = Path(project_dir).resolve()
    name = _repo_name_from_config(config_path or project_dir / REPO_CONFIG_RELATIVE_PATH)
    if name:
        return name
    if any(ORCHESTRATOR in part for part in project_dir.parts):
        return ORCHESTRATOR
    return project_dir.name
