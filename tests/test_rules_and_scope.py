from __future__ import annotations

import json
from pathlib import Path

import pytest

from skill_activation.rules import Rule, RuleSet, load_rule_set
from skill_activation.scope import resolve_context_identity

pytestmark = pytest.mark.unit


def test_rule_defaults_scope_to_all() -> None:
    rule = Rule.from_dict("x", {"type": "domain", "priority": "high"})

    assert rule.scope == "all"
    assert rule.always_activate is False
    assert rule.has_prompt_triggers is False


def test_rule_reads_prompt_and_file_triggers() -> None:
    rule = Rule.from_dict(
        "api",
        {
            "type": "base",
            "enforcement": "block",
            "priority": "critical",
            "scope": "backend",
            "alwaysActivate": True,
            "promptTriggers": {"keywords": ["route"], "intentPatterns": ["add.*endpoint"]},
            "fileTriggers": {"pathPatterns": ["src/api/**/*.py"]},
        },
    )

    assert rule.keywords == ("route",)
    assert rule.intent_patterns == ("add.*endpoint",)
    assert rule.file_patterns == ("src/api/**/*.py",)
    assert rule.enforcement == "block"
    assert rule.always_activate is True


def test_rule_set_skips_non_object_entries_and_keeps_order() -> None:
    rule_set = RuleSet.from_dict(
        {"version": "2.0", "skills": {"b": {}, "broken": "nope", "a": {}}}
    )

    assert rule_set.version == "2.0"
    assert [r.name for r in rule_set] == ["b", "a"]
    assert "broken" not in rule_set


def test_load_rule_set_missing_file(tmp_path: Path) -> None:
    assert load_rule_set(tmp_path / "skill-rules.json") is None


def test_load_rule_set_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "skill-rules.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_rule_set(path) is None


def test_load_rule_set_rejects_non_object_skills(tmp_path: Path) -> None:
    path = tmp_path / "skill-rules.json"
    path.write_text(json.dumps({"version": "1", "skills": ["a"]}), encoding="utf-8")

    assert load_rule_set(path) is None


def test_repo_config_name_wins(tmp_path: Path) -> None:
    root = tmp_path / "my-orchestrator-app"
    (root / ".claude").mkdir(parents=True)
    (root / ".claude" / "repo-config.json").write_text(
        json.dumps({"repoName": "frontend", "repoType": "web"}), encoding="utf-8"
    )

    assert resolve_context_identity(root) == "frontend"


def test_orchestrator_in_any_segment(tmp_path: Path) -> None:
    root = tmp_path / "orchestrator" / "packages" / "core"
    root.mkdir(parents=True)

    assert resolve_context_identity(root) == "orchestrator"


def test_falls_back_to_directory_name(tmp_path: Path) -> None:
    root = tmp_path / "backend"
    root.mkdir()

    assert resolve_context_identity(root) == "backend"


def test_malformed_repo_config_is_ignored(tmp_path: Path) -> None:
    root = tmp_path / "backend"
    (root / ".claude").mkdir(parents=True)
    (root / ".claude" / "repo-config.json").write_text("{oops", encoding="utf-8")

    assert resolve_context_identity(root) == "backend"


def test_repo_config_without_name_is_ignored(tmp_path: Path) -> None:
    root = tmp_path / "backend"
    (root / ".claude").mkdir(parents=True)
    (root / ".claude" / "repo-config.json").write_text(json.dumps({"repoType": "api"}), encoding="utf-8")

    assert resolve_context_identity(root) == "backend"


def test_relative_project_dir_uses_resolved_name(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = tmp_path / "backend"
    root.mkdir()
    monkeypatch.chdir(root)

    assert resolve_context_identity(Path(".")) == "backend"
