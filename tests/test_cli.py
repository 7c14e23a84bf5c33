"""Tests for the thoughttrace command-line interface."""

import io
import json

import pytest

from thoughttrace.cli.__main__ import build_parser, config_from_args, main
from thoughttrace.cli.commands.trace import replay_lines
from thoughttrace.core import TraceStore


def _run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def _write_jsonl(path, rows):
    path.write_text("\n".join(r if isinstance(r, str) else json.dumps(r) for r in rows) + "\n")
    return str(path)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "THOUGHTTRACE_MAX_THOUGHT_HISTORY",
        "THOUGHTTRACE_MAX_BRANCHES",
        "THOUGHTTRACE_MAX_THOUGHTS_PER_BRANCH",
        "THOUGHTTRACE_ENABLE_AUTO_CLEANUP",
        "THOUGHTTRACE_CLEANUP_ON_COMPLETE",
        "THOUGHTTRACE_RETAIN_CHAIN_SUMMARIES",
        "THOUGHTTRACE_MAX_CHAIN_SUMMARIES",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigCommand:
    def test_prints_defaults(self, capsys):
        assert _run(["config"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["max_thought_history"] == 1000
        assert data["enable_auto_cleanup"] is True

    def test_flags_override(self, capsys):
        code = _run(["--max-branches", "3", "--max-thought-history", "20",
                     "--no-auto-cleanup", "config"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["max_branches"] == 3
        assert data["max_thought_history"] == 20
        assert data["enable_auto_cleanup"] is False

    def test_environment_used(self, capsys, monkeypatch):
        monkeypatch.setenv("THOUGHTTRACE_MAX_THOUGHTS_PER_BRANCH", "7")
        assert _run(["config"]) == 0
        assert json.loads(capsys.readouterr().out)["max_thoughts_per_branch"] == 7

    def test_flags_beat_environment(self, monkeypatch):
        monkeypatch.setenv("THOUGHTTRACE_MAX_BRANCHES", "9")
        args = build_parser().parse_args(["--max-branches", "2", "config"])
        assert config_from_args(args).max_branches == 2

    def test_invalid_environment_exits(self, monkeypatch, capsys):
        monkeypatch.setenv("THOUGHTTRACE_MAX_BRANCHES", "lots")
        assert _run(["config"]) == 1
        assert capsys.readouterr().out == ""

    def test_negative_flag_exits(self):
        assert _run(["--max-branches", "-1", "config"]) == 1

    def test_command_required(self):
        assert _run([]) == 2


class TestReplayCommand:
    def test_replay_prints_thoughts(self, tmp_path, capsys, thought):
        path = _write_jsonl(tmp_path / "trace.jsonl", [
            thought(1, 2, True, "Look at the inputs"),
            thought(2, 2, False, "Conclude"),
        ])

        assert _run(["replay", path]) == 0
        out = capsys.readouterr().out
        assert "Thought 1/2:" in out
        assert "Look at the inputs" in out
        assert "Thinking process complete." in out
        assert "Replayed: 2 thought(s) in history, 0 branch(es), 0 branch thought(s)" in out

    def test_replay_json_stats(self, tmp_path, capsys, thought, branch_thought):
        path = _write_jsonl(tmp_path / "trace.jsonl", [
            thought(1, 2, True),
            branch_thought(1, 1, True, "alt"),
        ])

        assert _run(["replay", path, "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["thoughtHistoryCount"] == 1
        assert data["branchThoughtCounts"] == {"alt": 1}

    def test_replay_honours_limits(self, tmp_path, capsys, thought):
        path = _write_jsonl(tmp_path / "trace.jsonl", [thought(i, 10, True) for i in range(1, 6)])

        assert _run(["--max-thought-history", "3", "replay", path, "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["thoughtHistoryCount"] == 3

    def test_bad_lines_reported_and_skipped(self, tmp_path, capsys, thought):
        path = _write_jsonl(tmp_path / "trace.jsonl", [
            thought(1, 2, True, "Good"),
            "{not json",
            {"text": "", "sequenceNumber": 1, "estimatedTotal": 1, "continuesNext": True},
            thought(2, 2, False, "Also good"),
        ])

        assert _run(["replay", path]) == 1
        captured = capsys.readouterr()
        assert "line 2: invalid JSON" in captured.err
        assert "line 3: Invalid text" in captured.err
        assert "Replayed: 2 thought(s) in history" in captured.out

    def test_blank_lines_ignored(self, tmp_path, capsys, thought):
        path = tmp_path / "trace.jsonl"
        path.write_text("\n" + json.dumps(thought(1, 1, False)) + "\n\n")

        assert _run(["replay", str(path)]) == 0
        assert "Replayed: 1 thought(s)" in capsys.readouterr().out

    def test_missing_file_exits(self, tmp_path):
        assert _run(["replay", str(tmp_path / "missing.jsonl")]) == 1


class TestReplayLines:
    def test_quiet_prints_nothing(self, thought):
        out = io.StringIO()
        store = TraceStore()
        lines = enumerate([json.dumps(thought(1, 1, True))], 1)

        assert replay_lines(lines, store, out, quiet=True) == 0
        assert out.getvalue() == ""
        assert store.get_thought_count() == 1

    def test_counts_failures(self, capsys):
        lines = enumerate(["[]", "null", "{}"], 1)
        assert replay_lines(lines, TraceStore(), io.StringIO()) == 3
        assert capsys.readouterr().err.count("Invalid text") == 3
