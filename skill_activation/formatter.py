"""Render matched skills: inline high-priority bodies, list the rest as available."""
from typing import Sequence

from skill_activation.matcher import MatchedSkill
from skill_activation.rules import BASE_TYPE, PRIORITY_ORDER

RULE = "━" * 40
SUMMARY_PREFIX = "[skill-activation] loaded:"


def is_high_priority(skill: MatchedSkill) -> bool:
    """Base skills and critical/high skills are inlined, but only when they have a body."""
    if not skill.content:
        return False
    if skill.rule.type == BASE_TYPE:
        return True
    rank = PRIORITY_ORDER.get(skill.rule.priority, len(PRIORITY_ORDER))
    return rank <= PRIORITY_ORDER["high"]


def partition_skills(
    matches: Sequence[MatchedSkill],
) -> tuple[list[MatchedSkill], list[MatchedSkill]]:
    high: list[MatchedSkill] = []
    optional: list[MatchedSkill] = []
    for skill in matches:
        (high if is_high_priority(skill) else optional).append(skill)
    return high, optional


def render_skill_block(skill: MatchedSkill) -> str:
    return f'<skill name="{skill.name}">\n{skill.content}\n</skill>'


def render_report(matches: Sequence[MatchedSkill], context_identity: str) -> str:
    """Full report for the host, or an empty string when nothing matched."""
    if not matches:
        return ""
    high, optional = partition_skills(matches)
    lines = [
        RULE,
        "🎯 SKILL ACTIVATION",
        f"📍 Repository: {context_identity}",
        RULE,
        "",
    ]
    if high:
        lines.append("📚 LOADED SKILLS (follow these guidelines):")
        lines.extend(f"  → {s.name} ({s.match_type})" for s in high)
        lines.append("")
        for skill in high:
            lines.append(render_skill_block(skill))
            lines.append("")
    if optional:
        names = ", ".join(s.name for s in optional)
        lines.append(f"💡 Available skills (load with the Skill tool if relevant): {names}")
        lines.append("")
    lines.append(RULE)
    return "\n".join(lines) + "\n"


def render_activation_summary(matches: Sequence[MatchedSkill]) -> str:
    high, _ = partition_skills(matches)
    names = ", ".join(s.name for s in high) if high else "none"
    return f"{SUMMARY_PREFIX} {names}"
