"""Tests for the command-line entry point."""

import logging

import pytest

import main


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestMain:
    def test_requires_streaming_tier(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["main.py", "--tier", "none"])
        assert main.main() == 2
        assert "Upgrade to Elite plan" in capsys.readouterr().out

    def test_unknown_tier_is_gated(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["main.py", "--tier", "platinum"])
        assert main.main() == 2

    def test_tier_from_env(self, monkeypatch):
        monkeypatch.setenv("SIGNALSTREAM_SUBSCRIPTION_TIER", "none")
        monkeypatch.setattr("sys.argv", ["main.py"])
        assert main.main() == 2

    def test_invalid_endpoint_exits_nonzero(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", [
            "main.py", "--tier", "elite", "--url", "ftp://files.example.com", "--duration", "0",
        ])
        assert main.main() == 1
        out = capsys.readouterr().out
        assert "Connection Failed" in out
        assert "No live signals received" in out
