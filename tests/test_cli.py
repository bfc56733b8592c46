"""Tests for the command-line entry point."""

import io

import pytest

from coretext_server import __main__ as cli
from coretext_server.summarizers.base import GenerationResult, GuardrailViolation
from coretext_server.summarizers.tones import Tone


@pytest.fixture
def patched_backend(monkeypatch, mock_backend):
    monkeypatch.setattr(cli, "create_backend", lambda config: mock_backend)
    monkeypatch.setenv("FEEDBACK_ENABLED", "false")
    return mock_backend


class TestParser:
    def test_tone_option(self):
        args = cli.build_parser().parse_args(["summarize", "--tone", "bullet_points", "hi"])
        assert args.tone is Tone.BULLET_POINTS
        assert args.text == "hi"

    def test_default_tone_and_stdin(self):
        args = cli.build_parser().parse_args(["summarize"])
        assert args.tone is Tone.BALANCED
        assert args.text == "-"

    def test_bad_tone(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["summarize", "--tone", "sarcastic", "hi"])


class TestSummarizeCommand:
    def test_success(self, patched_backend, capsys):
        patched_backend.generate.return_value = GenerationResult(text="Short summary.", model_used="m")

        code = cli.main(["--log-level", "WARNING", "summarize", "--tone", "concise", "Hello world"])

        assert code == 0
        assert capsys.readouterr().out.strip() == "Short summary."
        patched_backend.close.assert_awaited_once()

    def test_failure(self, patched_backend, capsys):
        patched_backend.generate.side_effect = GuardrailViolation("blocked")

        code = cli.main(["--log-level", "WARNING", "summarize", "Hello"])

        assert code == 1
        assert "safety rules" in capsys.readouterr().err

    def test_empty_stdin(self, patched_backend, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("   \n"))

        code = cli.main(["--log-level", "WARNING", "summarize", "-"])

        assert code == 2
        patched_backend.generate.assert_not_awaited()
