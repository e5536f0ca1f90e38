from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import pytest
import structlog

from skill_activation.config import Settings


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging() -> None:
    # Keep log lines off the streams the hook writes to
    structlog.configure(
        processors=[structlog.processors.add_log_level, structlog.processors.JSONRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.__stderr__),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CLAUDE_PROJECT_DIR", raising=False)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    root = tmp_path / "backend"
    (root / ".claude" / "skills").mkdir(parents=True)
    return root


@pytest.fixture
def settings(project_dir: Path, tmp_path: Path) -> Settings:
    return Settings.for_project(project_dir, session_dir=tmp_path / "sessions")


@pytest.fixture
def write_rules(settings: Settings):
    def _write(skills: dict[str, dict[str, Any]], version: str = "1.0") -> Path:
        settings.rules_path.write_text(
            json.dumps({"version": version, "skills": skills}), encoding="utf-8"
        )
        return settings.rules_path

    return _write


@pytest.fixture
def write_skill(settings: Settings):
    def _write(name: str, body: str, *, flat: bool = False) -> Path:
        if flat:
            path = settings.skills_dir / f"{name}.md"
        else:
            path = settings.skills_dir / name / "SKILL.md"
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        return path

    return _write
