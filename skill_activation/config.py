"""Load configuration from environment and fixed project-relative paths."""
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Layout under the project root
CLAUDE_DIR_NAME = ".claude"
SKILLS_RELATIVE_DIR = Path(CLAUDE_DIR_NAME) / "skills"
RULES_RELATIVE_PATH = SKILLS_RELATIVE_DIR / "skill-rules.json"
REPO_CONFIG_RELATIVE_PATH = Path(CLAUDE_DIR_NAME) / "repo-config.json"

# Logging goes to stderr; stdout is reserved for the activation report.
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

# Where the session tracker writes sticky skill lists (this hook only reads them)
SKILL_SESSION_DIR = Path(
    os.getenv("SKILL_SESSION_DIR") or Path(tempfile.gettempdir()) / "claude-skill-sessions"
)

# Intent patterns longer than this are not compiled
MAX_INTENT_PATTERN_LENGTH = int(os.getenv("MAX_INTENT_PATTERN_LENGTH", "512"))


def get_project_dir(event_cwd: str | None = None) -> Path:
    """Project root: CLAUDE_PROJECT_DIR, else the event's cwd, else the process cwd."""
    env_dir = os.getenv("CLAUDE_PROJECT_DIR")
    if env_dir:
        return Path(env_dir).resolve()
    if event_cwd:
        return Path(event_cwd).resolve()
    return Path.cwd()


@dataclass(frozen=True)
class Settings:
    """Resolved paths for one project root."""

    project_dir: Path
    rules_path: Path
    repo_config_path: Path
    skills_dir: Path
    session_dir: Path

    @classmethod
    def for_project(cls, project_dir: Path, session_dir: Path | None = None) -> "Settings":
        root = Path(project_dir).resolve()
        return cls(
            project_dir=root,
            rules_path=root / RULES_RELATIVE_PATH,
            repo_config_path=root / REPO_CONFIG_RELATIVE_PATH,
            skills_dir=root / SKILLS_RELATIVE_DIR,
            session_dir=session_dir or SKILL_SESSION_DIR,
        )
