"""Hook pipeline: event -> repository -> matches -> content -> report."""
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

from skill_activation.config import Settings, get_project_dir
from skill_activation.content import attach_content
from skill_activation.formatter import (
    partition_skills,
    render_activation_summary,
    render_report,
)
from skill_activation.logging_utils import bind_session, get_logger, log_hook_end, log_hook_start
from skill_activation.matcher import MatchedSkill, match_skills
from skill_activation.rules import load_rule_set
from skill_activation.scope import resolve_context_identity
from skill_activation.session import FileSessionStore, SessionStore

logger = get_logger(__name__)

_EVENT_FIELDS = ("session_id", "transcript_path", "cwd", "permission_mode", "prompt")


class HookInputError(ValueError):
    """The event on stdin could not be used."""


@dataclass
class HookEvent:
    """The prompt-submit event. Only prompt and cwd are used; the rest is carried through."""

    prompt: str = ""
    session_id: str | None = None
    transcript_path: str | None = None
    cwd: str | None = None
    permission_mode: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def parse(cls, raw: str) -> "HookEvent":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise HookInputError(f"event is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise HookInputError("event must be a JSON object")
        prompt = data.get("prompt")
        if prompt is None:
            prompt = ""
        if not isinstance(prompt, str):
            raise HookInputError("event 'prompt' must be a string")
        return cls(
            prompt=prompt,
            session_id=_optional_str(data.get("session_id")),
            transcript_path=_optional_str(data.get("transcript_path")),
            cwd=_optional_str(data.get("cwd")),
            permission_mode=_optional_str(data.get("permission_mode")),
            extra={k: v for k, v in data.items() if k not in _EVENT_FIELDS},
        )


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


@dataclass
class HookResult:
    context_identity: str
    matches: list[MatchedSkill]
    report: str
    summary: str


def activate(
    event: HookEvent,
    settings: Settings,
    session_store: SessionStore | None = None,
) -> HookResult | None:
    """Run matching for one event. Returns None when the project has no rules file."""
    rule_set = load_rule_set(settings.rules_path)
    if rule_set is None:
        logger.debug("skill_rules_absent", path=str(settings.rules_path))
        return None

    context_identity = resolve_context_identity(settings.project_dir, settings.repo_config_path)
    store = session_store or FileSessionStore(settings.session_dir)
    sticky = store.get(str(settings.project_dir))

    matches = match_skills(event.prompt, rule_set, context_identity, sticky)
    matches = attach_content(matches, settings.skills_dir)
    return HookResult(
        context_identity=context_identity,
        matches=matches,
        report=render_report(matches, context_identity),
        summary=render_activation_summary(matches),
    )


def run_hook(
    raw_event: str,
    *,
    project_dir: Path | None = None,
    settings: Settings | None = None,
    session_store: SessionStore | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Handle one raw stdin event and write the report and summary. Returns the exit status.

    Raises HookInputError when the event itself is unusable.
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    event = HookEvent.parse(raw_event)
    bind_session(event.session_id)
    if settings is None:
        settings = Settings.for_project(project_dir or get_project_dir(event.cwd))
    log_hook_start(logger, str(settings.project_dir), event.prompt)

    result = activate(event, settings, session_store)
    if result is None:
        return 0

    if result.report:
        stdout.write(result.report)
        stdout.flush()
    print(result.summary, file=stderr)

    loaded, _ = partition_skills(result.matches)
    log_hook_end(
        logger,
        result.context_identity,
        matched=[m.name for m in result.matches],
        loaded=[m.name for m in loaded],
    )
    return 0
