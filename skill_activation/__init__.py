"""Skill activation: match a prompt to skill rules and inject or suggest skills."""
from skill_activation.hook import HookEvent, HookInputError, activate, run_hook
from skill_activation.matcher import MatchedSkill, match_skills
from skill_activation.rules import Rule, RuleSet, load_rule_set

__all__ = [
    "HookEvent",
    "HookInputError",
    "MatchedSkill",
    "Rule",
    "RuleSet",
    "activate",
    "load_rule_set",
    "match_skills",
    "run_hook",
]
