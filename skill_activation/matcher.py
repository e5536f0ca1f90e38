"""Match a prompt against the rule set: session carry-over, auto-activation, keywords, intents."""
import re
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Iterable, Literal

from skill_activation.config import MAX_INTENT_PATTERN_LENGTH
from skill_activation.logging_utils import get_logger, log_skill_matched
from skill_activation.rules import SCOPE_ALL, Rule, RuleSet

logger = get_logger(__name__)

MatchType = Literal["session", "auto", "keyword", "intent"]


@dataclass(frozen=True)
class MatchedSkill:
    """A skill selected for this prompt and why."""

    name: str
    rule: Rule
    match_type: MatchType
    content: str | None = None

    def with_content(self, content: str | None) -> "MatchedSkill":
        return replace(self, content=content)


def rule_in_scope(rule: Rule, context_identity: str) -> bool:
    return rule.scope == SCOPE_ALL or rule.scope == context_identity


@lru_cache(maxsize=512)
def _compile_intent(pattern: str) -> re.Pattern[str]:
    if len(pattern) > MAX_INTENT_PATTERN_LENGTH:
        raise re.error(f"pattern longer than {MAX_INTENT_PATTERN_LENGTH} characters")
    return re.compile(pattern, re.IGNORECASE)


def _compile_intents(rule: Rule) -> list[re.Pattern[str]] | None:
    """Compile a rule's intent patterns. None means the intent check is skipped for this rule."""
    compiled = []
    for pattern in rule.intent_patterns:
        try:
            compiled.append(_compile_intent(pattern))
        except re.error as e:
            logger.warning("intent_pattern_invalid", skill=rule.name, pattern=pattern, error=str(e))
            return None
    return compiled


def keyword_matches(rule: Rule, prompt: str) -> bool:
    folded = prompt.casefold()
    return any(keyword.casefold() in folded for keyword in rule.keywords)


def intent_matches(rule: Rule, prompt: str) -> bool:
    patterns = _compile_intents(rule)
    if not patterns:
        return False
    return any(p.search(prompt) for p in patterns)


def match_skills(
    prompt: str,
    rule_set: RuleSet,
    context_identity: str,
    sticky_names: Iterable[str] = (),
) -> list[MatchedSkill]:
    """Return the skills that apply to this prompt, each at most once.

    Sticky session skills come first and are not scope-filtered. Remaining rules
    are visited in file order: out-of-scope rules are skipped, alwaysActivate
    rules fire only on an exact scope match, then keywords are tried before
    intent patterns.
    """
    matched: list[MatchedSkill] = []
    added: set[str] = set()

    def emit(rule: Rule, match_type: MatchType) -> None:
        matched.append(MatchedSkill(name=rule.name, rule=rule, match_type=match_type))
        added.add(rule.name)
        log_skill_matched(logger, rule.name, match_type, rule.priority)

    for name in sticky_names:
        rule = rule_set.get(name)
        if rule is None or name in added:
            continue
        emit(rule, "session")

    for rule in rule_set:
        if not rule_in_scope(rule, context_identity):
            continue
        if rule.name in added:
            continue
        if rule.always_activate and rule.scope != SCOPE_ALL and rule.scope == context_identity:
            emit(rule, "auto")
            continue
        if not prompt or not rule.has_prompt_triggers:
            continue
        if keyword_matches(rule, prompt):
            emit(rule, "keyword")
            continue
        if intent_matches(rule, prompt):
            emit(rule, "intent")

    return matched
