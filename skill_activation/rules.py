"""Skill rules: the declarative rule set read from skill-rules.json."""
import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from skill_activation.logging_utils import get_logger

logger = get_logger(__name__)

SCOPE_ALL = "all"
BASE_TYPE = "base"
# Highest first; unknown priorities rank below "low"
PRIORITY_ORDER: dict[str, int] = {"critical": 0, "high": 1, "medium": 2, "low": 3}


@dataclass(frozen=True)
class Rule:
    """When and how one skill activates."""

    name: str
    type: str = "domain"
    enforcement: str = "suggest"
    priority: str = "medium"
    scope: str = SCOPE_ALL
    always_activate: bool = False
    keywords: tuple[str, ...] = ()
    intent_patterns: tuple[str, ...] = ()
    # Consumed by the file-edit tracker, not by prompt matching
    file_patterns: tuple[str, ...] = ()

    @property
    def has_prompt_triggers(self) -> bool:
        return bool(self.keywords or self.intent_patterns)

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "Rule":
        triggers = data.get("promptTriggers") or {}
        if not isinstance(triggers, Mapping):
            triggers = {}
        file_triggers = data.get("fileTriggers") or {}
        if not isinstance(file_triggers, Mapping):
            file_triggers = {}
        return cls(
            name=name,
            type=str(data.get("type") or "domain"),
            enforcement=str(data.get("enforcement") or "suggest"),
            priority=str(data.get("priority") or "medium"),
            scope=str(data.get("scope") or SCOPE_ALL),
            always_activate=data.get("alwaysActivate") is True,
            keywords=_string_tuple(triggers.get("keywords")),
            intent_patterns=_string_tuple(triggers.get("intentPatterns")),
            file_patterns=_string_tuple(file_triggers.get("pathPatterns")),
        )


@dataclass(frozen=True)
class RuleSet:
    """Named rules in file order plus the version tag."""

    version: str
    rules: Mapping[str, Rule] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))

    def get(self, name: str) -> Rule | None:
        return self.rules.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.rules

    def __iter__(self):
        return iter(self.rules.values())

    def __len__(self) -> int:
        return len(self.rules)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuleSet":
        """Build from a parsed rules document. Raises ValueError if `skills` is not an object."""
        skills = data.get("skills") or {}
        if not isinstance(skills, Mapping):
            raise ValueError("'skills' must be an object mapping skill names to rules")
        rules: dict[str, Rule] = {}
        for name, entry in skills.items():
            if not isinstance(entry, Mapping):
                logger.warning("skill_rule_invalid", skill=name, reason="rule is not an object")
                continue
            rules[str(name)] = Rule.from_dict(str(name), entry)
        return cls(version=str(data.get("version") or ""), rules=rules)


def _string_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        value = [value]
    return tuple(str(v) for v in value if v is not None and str(v) != "")


def load_rule_set(path: Path) -> RuleSet | None:
    """Read the rules file. Returns None if it is missing, unreadable or malformed."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("skill_rules_read_error", path=str(path), error=str(e))
        return None
    except json.JSONDecodeError as e:
        logger.warning("skill_rules_parse_error", path=str(path), error=str(e))
        return None
    if not isinstance(data, dict):
        logger.warning("skill_rules_parse_error", path=str(path), error="document is not an object")
        return None
    try:
        return RuleSet.from_dict(data)
    except ValueError as e:
        logger.warning("skill_rules_parse_error", path=str(path), error=str(e))
        return None
