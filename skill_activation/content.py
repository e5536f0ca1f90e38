"""Look up skill bodies: <skills>/<name>/SKILL.md, then <skills>/<name>.md."""
from pathlib import Path
from typing import Iterable

import yaml

from skill_activation.logging_utils import get_logger
from skill_activation.matcher import MatchedSkill

logger = get_logger(__name__)

SKILL_FILE_NAME = "SKILL.md"


def _strip_frontmatter(content: str) -> str:
    """Drop a leading YAML frontmatter block. Returns content unchanged if it has none or it is invalid."""
    if not content.startswith("---"):
        return content
    parts = content.split("\n", 1)
    if len(parts) < 2:
        return content
    rest = parts[1]
    if rest.startswith("---"):
        # Empty frontmatter: closing fence right after the opening one
        yaml_block, body = "", rest[3:]
    else:
        idx = rest.find("\n---")
        if idx == -1:
            return content
        yaml_block, body = rest[:idx], rest[idx + 4 :]
    try:
        yaml.safe_load(yaml_block)
    except yaml.YAMLError as e:
        logger.warning("skill_frontmatter_parse_error", error=str(e))
        return content
    # Skip the remainder of the closing fence line
    newline = body.find("\n")
    return body[newline + 1 :] if newline != -1 else ""


def candidate_paths(name: str, skills_dir: Path) -> list[Path]:
    return [skills_dir / name / SKILL_FILE_NAME, skills_dir / f"{name}.md"]


def resolve_skill_content(name: str, skills_dir: Path) -> str | None:
    """Return the skill's Markdown body, or None when no candidate file has one."""
    if not name or "/" in name or "\\" in name or name in (".", ".."):
        return None
    for path in candidate_paths(name, skills_dir):
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            continue
        except (OSError, UnicodeDecodeError) as e:
            # Directories and over-long names land here too
            logger.debug("skill_file_read_error", path=str(path), error=str(e))
            continue
        body = _strip_frontmatter(text).strip()
        if body:
            return body
    return None


def attach_content(matches: Iterable[MatchedSkill], skills_dir: Path) -> list[MatchedSkill]:
    return [m.with_content(resolve_skill_content(m.name, skills_dir)) for m in matches]
