# scripts/analyze_files.py
"""
Command-line analysis of local comment / video files

Run: python scripts/analyze_files.py data/comments.csv data/videos.csv \
        --export results.csv --ask "How's my sentiment?"
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Add src to path
ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT_DIR / "src"))

from dotenv import load_dotenv

dotenv_path = ROOT_DIR / ".env"
if dotenv_path.exists():
    load_dotenv(dotenv_path)

from commentsense.app.config import get_config, setup_logging
from commentsense.domain.models import AnalysisReport, CommentFilter, FileStatus
from commentsense.services import (
    CommentAnalysisService,
    IngestionService,
    ScriptedAssistant,
    ServiceError,
)
from commentsense.services.assistant import WELCOME_MESSAGE


def print_section(title: str):
    """Print formatted section header"""
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


def print_metrics(report: AnalysisReport) -> None:
    """Print a metrics summary"""
    m = report.metrics
    print_section("📊 Metrics")
    print(f"   Comments: {m.total_comments}")
    print(f"   Videos: {m.total_videos}")
    print(f"   Quality ratio: {m.quality_ratio:.1f}%")
    print(f"   Spam ratio: {m.spam_ratio:.1f}%")
    print(f"   Avg likes: {m.average_engagement:.2f}")
    print(
        "   Sentiment: "
        f"{m.sentiment_distribution.positive:.1f}% positive, "
        f"{m.sentiment_distribution.neutral:.1f}% neutral, "
        f"{m.sentiment_distribution.negative:.1f}% negative"
    )
    if m.category_distribution:
        categories = ", ".join(f"{k}={v}" for k, v in m.category_distribution.items())
        print(f"   Categories: {categories}")
    if m.top_keywords:
        keywords = ", ".join(f"{k.keyword} ({k.count})" for k in m.top_keywords[:10])
        print(f"   Top keywords: {keywords}")

    if m.video_metrics is not None:
        vm = m.video_metrics
        print(f"   Total views: {vm.total_views:,}")
        print(f"   Avg engagement rate: {vm.avg_engagement_rate:.2f}%")
        for i, video in enumerate(vm.top_performing_videos, start=1):
            print(f"   {i}. {video.title[:50]} ({video.engagement_rate:.2f}%)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze comment and/or video files (comma, semicolon, pipe or tab separated)."
    )
    parser.add_argument("files", nargs="+", type=Path, help="Input files")
    parser.add_argument("--export", type=Path, help="Write analyzed comments to this CSV")
    parser.add_argument("--ask", action="append", default=[], help="Question for the assistant")
    parser.add_argument("--config", help="YAML config path")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = get_config(args.config)
    setup_logging(config)

    ingestion = IngestionService(config=config)
    analysis = CommentAnalysisService(config=config)

    print_section("📥 Files")
    payload = []
    for path in args.files:
        try:
            payload.append((path.name, path.read_bytes()))
        except OSError as e:
            print(f"   ❌ {path}: {e}")

    batch = ingestion.process_files(payload)
    for result in batch.results:
        icon = "✅" if result.status == FileStatus.SUCCESS else "❌"
        print(f"   {icon} {result.filename} [{result.file_type.value}] {result.message}")
        if result.stats is not None:
            print(
                f"      kept {result.stats.cleaned_count}/{result.stats.original_count}, "
                f"dropped {result.stats.drop_reasons}, repaired {result.stats.repairs}"
            )

    if not batch.succeeded:
        print("\n   ⚠️  No file could be processed.")
        return 1

    try:
        report = analysis.analyze(batch.comments, batch.videos)
    except ServiceError as e:
        print(f"\n   ❌ Analysis failed: {e.message}")
        return 1

    print_metrics(report)

    if args.export:
        args.export.write_text(analysis.export(report.comments, CommentFilter()), encoding="utf-8")
        print(f"\n   📤 Exported {len(report.comments)} comments to {args.export}")

    if args.ask:
        assistant = ScriptedAssistant(report)
        print_section("💬 Assistant")
        print(f"   {WELCOME_MESSAGE}\n")
        for question in args.ask:
            print(f"   Q: {question}")
            print(f"   A: {assistant.respond(question)}\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
