"""
Tests for the command-line analysis script
"""

import importlib.util
from pathlib import Path

import pytest

from commentsense.app.config import reset_config
from commentsense.infrastructure.exporter import EXPORT_HEADERS

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "analyze_files.py"


@pytest.fixture
def cli():
    """Load scripts/analyze_files.py as a module"""
    spec = importlib.util.spec_from_file_location("analyze_files", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    reset_config()
    yield module
    reset_config()


@pytest.fixture
def comments_file(tmp_path):
    path = tmp_path / "comments.csv"
    path.write_text(
        "commentId;textOriginal;authorId;videoId;likeCount;publishedAt\n"
        "c1;Great serum for dry skin, I love it;a1;v1;4;2024-01-15T10:30:00\n",
        encoding="utf-8",
    )
    return path


class TestAnalyzeFilesScript:
    """Test the CLI entry point"""

    def test_analyze_export_and_ask(self, cli, comments_file, tmp_path, capsys):
        export_path = tmp_path / "out.csv"
        missing_config = str(tmp_path / "missing.yaml")

        code = cli.main(
            [
                str(comments_file),
                "--export", str(export_path),
                "--ask", "How's my sentiment?",
                "--config", missing_config,
            ]
        )

        assert code == 0
        assert export_path.read_text(encoding="utf-8").startswith(",".join(EXPORT_HEADERS))

        output = capsys.readouterr().out
        assert "Parsed 1 comments using semicolon separator" in output
        assert "Your sentiment breakdown: 100.0% positive" in output

    def test_no_usable_file(self, cli, tmp_path):
        bad = tmp_path / "bad.csv"
        bad.write_text("a,b\n1,2\n", encoding="utf-8")

        assert cli.main([str(bad), "--config", str(tmp_path / "missing.yaml")]) == 1

    def test_missing_file(self, cli, tmp_path):
        assert cli.main([str(tmp_path / "nope.csv")]) == 1
