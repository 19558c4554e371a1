"""
Unit Tests for IngestionService
"""

import io

import pytest
from unittest.mock import Mock

from commentsense.domain.models import FileStatus, FileType
from commentsense.infrastructure.normalizer import UNKNOWN_SCHEMA_MESSAGE
from commentsense.services.ingestion_service import (
    PARSE_FAILURE_MESSAGE,
    IngestionService,
)

COMMENTS_CSV = (
    "commentId,textOriginal,authorId,videoId,channelId,likeCount,publishedAt\n"
    'c1,"Love this serum, truly amazing",a1,v1,ch1,15,2024-01-15T10:30:00Z\n'
    "c2,dm me for free money now,a2,v1,ch1,0,2024-01-15T11:00:00Z\n"
    ",orphan comment,a3,v1,ch1,0,2024-01-15T11:00:00Z\n"
)

VIDEOS_SSV = (
    "videoId;title;description;viewCount;likeCount;commentCount;channelId;tags\n"
    "v1;Skincare Routine;My morning routine;1000;50;2;ch1;skin|care\n"
)


@pytest.fixture
def service():
    """Service with default limits"""
    return IngestionService()


@pytest.fixture
def small_service():
    """Service with a tiny size limit and CSV-only uploads"""
    config = Mock()
    config.ingestion.max_file_size_mb = 0.0001
    config.ingestion.allowed_extensions_list = [".csv"]
    config.ingestion.encoding = "utf-8"
    return IngestionService(config=config)


class TestProcessFile:
    """Test single file processing"""

    def test_comment_file(self, service):
        result = service.process_file("comments.csv", COMMENTS_CSV.encode("utf-8"))

        assert result.status == FileStatus.SUCCESS
        assert result.file_type == FileType.COMMENTS
        assert result.delimiter == ","
        assert result.message == "Parsed 2 comments using comma separator"
        assert result.rows_parsed == 3
        assert [c.comment_id for c in result.comments] == ["c1", "c2"]
        assert result.comments[0].text_original == "Love this serum, truly amazing"
        assert result.stats.drop_reasons["null_comment_ids"] == 1
        assert result.videos == []

        print(f"\n✅ {result.message}")

    def test_semicolon_video_file(self, service):
        result = service.process_file("videos.txt", VIDEOS_SSV)

        assert result.status == FileStatus.SUCCESS
        assert result.file_type == FileType.VIDEOS
        assert result.delimiter == ";"
        assert result.message == "Parsed 1 videos using semicolon separator"
        video = result.videos[0]
        assert video.view_count == 1000
        assert video.tags == ["skin", "care"]

    def test_bom_prefixed_bytes(self, service):
        content = "\ufeff".encode("utf-8") + COMMENTS_CSV.encode("utf-8")
        result = service.process_file("comments.csv", content)
        assert result.status == FileStatus.SUCCESS

    def test_unsupported_extension(self, service):
        result = service.process_file("data.json", COMMENTS_CSV)

        assert result.status == FileStatus.ERROR
        assert result.message.startswith("Unsupported file type '.json'")

    def test_header_only(self, service):
        result = service.process_file("empty.csv", "commentId,textOriginal,authorId,videoId\n")

        assert result.status == FileStatus.ERROR
        assert result.message == "File appears to be empty or has no data rows."

    def test_unknown_schema(self, service):
        result = service.process_file("people.csv", "name,age\nalice,30\n")

        assert result.status == FileStatus.ERROR
        assert result.file_type == FileType.UNKNOWN
        assert result.message == UNKNOWN_SCHEMA_MESSAGE

    def test_no_valid_rows(self, service):
        content = "commentId,textOriginal,authorId,videoId\n,,a1,\n"
        result = service.process_file("comments.csv", content)

        assert result.status == FileStatus.ERROR
        assert result.file_type == FileType.COMMENTS
        assert result.message == "No valid data rows found after parsing."

    def test_undecodable_bytes(self, service):
        result = service.process_file("comments.csv", b"\xff\xfe\xfa broken")

        assert result.status == FileStatus.ERROR
        assert result.message == "Failed to read file."

    def test_too_large(self, small_service):
        result = small_service.process_file("comments.csv", COMMENTS_CSV * 5)

        assert result.status == FileStatus.ERROR
        assert result.message.startswith("File too large")

    def test_read_upload_stops_past_limit(self, small_service):
        content = small_service.read_upload(io.BytesIO(b"x" * 500), chunk_size=16)

        assert len(content) == small_service.max_bytes + 1
        result = small_service.process_file("comments.csv", content)
        assert result.message.startswith("File too large")

    def test_read_upload_small_file(self, service):
        content = service.read_upload(io.BytesIO(COMMENTS_CSV.encode("utf-8")))
        assert content == COMMENTS_CSV.encode("utf-8")

    def test_tsv_empty_last_column(self, service):
        content = (
            "videoId\ttitle\tdescription\tviewCount\tchannelId\ttopicCategories\n"
            "v1\tTitle\tdesc\t100\tch1\t\n"
        )
        result = service.process_file("videos.tsv", content)

        assert result.status == FileStatus.SUCCESS
        assert result.delimiter == "\t"
        assert [v.video_id for v in result.videos] == ["v1"]

    def test_configured_extensions(self, small_service):
        result = small_service.process_file("videos.txt", VIDEOS_SSV)
        assert result.status == FileStatus.ERROR

    def test_unexpected_parse_failure(self, service, monkeypatch):
        def broken(*args, **kwargs):
            raise ValueError("boom")

        monkeypatch.setattr(
            "commentsense.services.ingestion_service.parse_table", broken
        )
        result = service.process_file("comments.csv", COMMENTS_CSV)

        assert result.status == FileStatus.ERROR
        assert result.message == PARSE_FAILURE_MESSAGE


class TestProcessFiles:
    """Test multi-file uploads"""

    def test_failures_do_not_abort_siblings(self, service):
        batch = service.process_files(
            [
                ("comments.csv", COMMENTS_CSV),
                ("broken.csv", "nope"),
                ("videos.csv", VIDEOS_SSV),
            ]
        )

        assert [r.status for r in batch.results] == [
            FileStatus.SUCCESS,
            FileStatus.ERROR,
            FileStatus.SUCCESS,
        ]
        assert batch.succeeded is True
        assert len(batch.comments) == 2
        assert len(batch.videos) == 1

    def test_nothing_succeeded(self, service):
        batch = service.process_files([("a.csv", ""), ("b.csv", "x,y\n1,2\n")])

        assert batch.succeeded is False
        assert batch.comments == []
        assert batch.videos == []
