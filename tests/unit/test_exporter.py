"""
Unit Tests for CSV export
"""

import pytest

from commentsense.domain.models import RawComment
from commentsense.infrastructure.csv_parser import split_line, split_records
from commentsense.infrastructure.exporter import (
    EXPORT_HEADERS,
    escape,
    export_comments_csv,
    export_row,
    quote,
)
from commentsense.services.analyzer import analyze_comment

TRICKY_TEXTS = [
    "Plain text",
    'She said "wow", then left',
    "Line one\nline two, with comma",
    '""double""',
    "semi; pipe | tab\there",
]


@pytest.fixture
def analyzed_comments():
    return [
        analyze_comment(
            RawComment(
                comment_id=f"c{i}",
                video_id="v1",
                text_original=text,
                like_count=i,
                published_at="2024-01-15T10:30:00Z",
            )
        )
        for i, text in enumerate(TRICKY_TEXTS)
    ]


class TestQuoting:
    """Test field quoting"""

    def test_quote_doubles_inner_quotes(self):
        assert quote('a "b"') == '"a ""b"""'

    def test_escape_only_when_needed(self):
        assert escape("plain") == "plain"
        assert escape("a,b") == '"a,b"'
        assert escape("line\nbreak") == '"line\nbreak"'


class TestExport:
    """Test the export document"""

    def test_header_line(self):
        assert export_comments_csv([]) == ",".join(EXPORT_HEADERS)

    def test_row_shape(self, analyzed_comments):
        row = export_row(analyzed_comments[0])
        fields = split_line(row, ",")

        assert len(fields) == len(EXPORT_HEADERS)
        assert fields[0] == "c0"
        assert fields[3] == f"{analyzed_comments[0].sentiment_score:.3f}"
        assert fields[8] in ("Yes", "No")
        assert fields[12] == "0"

    def test_precision(self, analyzed_comments):
        fields = split_line(export_row(analyzed_comments[0], precision=1), ",")
        assert fields[5] == f"{analyzed_comments[0].quality_score:.1f}"

    def test_round_trip_through_parser(self, analyzed_comments):
        document = export_comments_csv(analyzed_comments)
        records = split_records(document)

        assert len(records) == len(analyzed_comments) + 1
        for record, comment in zip(records[1:], analyzed_comments):
            fields = split_line(record, ",")
            assert len(fields) == len(EXPORT_HEADERS)
            assert fields[1] == comment.text_original
            assert fields[13] == ", ".join(comment.keywords)

        print(f"\n✅ Round-tripped {len(analyzed_comments)} tricky texts")
