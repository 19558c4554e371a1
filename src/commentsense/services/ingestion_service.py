# src/commentsense/services/ingestion_service.py
"""
Ingestion Service
Turns uploaded files into cleaned comment / video records.

Each file is handled independently: a failure is reported as an error
result for that file and never aborts its siblings.
"""

from pathlib import PurePath
from typing import BinaryIO, Iterable, List, Tuple, Union

from commentsense.domain.exceptions import (
    EmptyInputError,
    IngestionError,
    NoValidRowsError,
    SchemaDetectionError,
    UnsupportedFileError,
)
from commentsense.domain.models import (
    FileProcessingResult,
    FileStatus,
    FileType,
    IngestionBatch,
    RawComment,
    RawVideo,
)
from commentsense.infrastructure.csv_parser import (
    DELIMITER_NAMES,
    parse_table,
    split_records,
)
from commentsense.infrastructure.normalizer import (
    EXPECTED_COLUMNS,
    UNKNOWN_SCHEMA_MESSAGE,
    detect_file_type_from_header,
    normalize_comment,
    normalize_video,
)
from commentsense.services.base_service import BaseService
from commentsense.services.cleaner import clean_comments, clean_videos

FileContent = Union[bytes, str]

PARSE_FAILURE_MESSAGE = (
    "Failed to parse CSV file. Please check the format and ensure it uses "
    "proper CSV structure with quotes around fields containing commas."
)


class IngestionService(BaseService):
    """
    File ingestion service

    Handles:
    - Extension / size checks
    - Decoding (BOM tolerant)
    - Schema and delimiter detection
    - Parsing, normalization and cleaning
    """

    DEFAULT_EXTENSIONS = (".csv", ".tsv", ".txt")

    def __init__(self, config=None):
        super().__init__(config=config)
        ingestion = getattr(config, "ingestion", None)
        if ingestion is not None:
            self.max_bytes = int(ingestion.max_file_size_mb * 1024 * 1024)
            self.allowed_extensions = tuple(ingestion.allowed_extensions_list)
            self.encoding = ingestion.encoding
        else:
            self.max_bytes = 50 * 1024 * 1024
            self.allowed_extensions = self.DEFAULT_EXTENSIONS
            self.encoding = "utf-8"

    def get_service_name(self) -> str:
        return "ingestion"

    # ========================================================================
    # Public API
    # ========================================================================

    def process_file(self, filename: str, content: FileContent) -> FileProcessingResult:
        """
        Process one uploaded file

        Args:
            filename: Original file name (used for the extension check)
            content: Raw bytes or already-decoded text

        Returns:
            FileProcessingResult with status SUCCESS or ERROR; never raises
            for file-level problems
        """
        self.log_info(f"Processing file: {filename}")
        file_type = FileType.UNKNOWN

        try:
            self._check_extension(filename)
            text = self._decode(content)

            records = split_records(text)
            if len(records) < 2:
                raise EmptyInputError("File appears to be empty or has no data rows.")

            file_type, delimiter = detect_file_type_from_header(records[0])
            if file_type == FileType.UNKNOWN:
                raise SchemaDetectionError(UNKNOWN_SCHEMA_MESSAGE, {"header": records[0]})
            self.log_debug(
                f"Detected {file_type.value} header with {DELIMITER_NAMES[delimiter]} separator"
            )

            table = parse_table(text, EXPECTED_COLUMNS[file_type])

            if file_type == FileType.COMMENTS:
                comments, stats = clean_comments(normalize_comment(row) for row in table.rows)
                videos: List[RawVideo] = []
                kept = len(comments)
            else:
                videos, stats = clean_videos(normalize_video(row) for row in table.rows)
                comments = []
                kept = len(videos)

            if kept == 0:
                raise NoValidRowsError(
                    "No valid data rows found after parsing.",
                    {"rows_parsed": len(table.rows), "skipped_lines": table.skipped_lines},
                )

        except IngestionError as e:
            self.log_warning(f"❌ {filename}: {e.message}")
            return FileProcessingResult(
                filename=filename,
                file_type=file_type,
                status=FileStatus.ERROR,
                message=e.message,
            )
        except ValueError as e:
            self.log_error(f"Failed to parse {filename}", error=e)
            return FileProcessingResult(
                filename=filename,
                file_type=FileType.UNKNOWN,
                status=FileStatus.ERROR,
                message=PARSE_FAILURE_MESSAGE,
            )

        message = (
            f"Parsed {kept} {file_type.value} using "
            f"{DELIMITER_NAMES[table.delimiter]} separator"
        )
        self.log_info(f"✅ {filename}: {message}")

        return FileProcessingResult(
            filename=filename,
            file_type=file_type,
            status=FileStatus.SUCCESS,
            message=message,
            delimiter=table.delimiter,
            rows_parsed=len(table.rows),
            skipped_lines=table.skipped_lines,
            stats=stats,
            comments=comments,
            videos=videos,
        )

    def read_upload(self, stream: BinaryIO, chunk_size: int = 64 * 1024) -> bytes:
        """
        Read an upload stream in chunks, stopping one byte past the size limit

        The result is at most ``max_bytes + 1`` long, which is enough for
        process_file to reject it as too large.
        """
        limit = self.max_bytes + 1
        chunks: List[bytes] = []
        size = 0

        while size < limit:
            chunk = stream.read(min(chunk_size, limit - size))
            if not chunk:
                break
            chunks.append(chunk)
            size += len(chunk)

        return b"".join(chunks)

    def process_files(self, files: Iterable[Tuple[str, FileContent]]) -> IngestionBatch:
        """
        Process several files independently

        Returns:
            IngestionBatch with every per-file result and the merged records
            of the successful files (in upload order)
        """
        results: List[FileProcessingResult] = []
        comments: List[RawComment] = []
        videos: List[RawVideo] = []

        for filename, content in files:
            result = self.process_file(filename, content)
            results.append(result)
            if result.status == FileStatus.SUCCESS:
                comments.extend(result.comments)
                videos.extend(result.videos)

        succeeded = sum(1 for r in results if r.status == FileStatus.SUCCESS)
        self.log_info(
            f"Batch complete: {succeeded}/{len(results)} files succeeded, "
            f"{len(comments)} comments, {len(videos)} videos"
        )
        return IngestionBatch(results=results, comments=comments, videos=videos)

    # ========================================================================
    # Helper Methods
    # ========================================================================

    def _check_extension(self, filename: str) -> None:
        suffix = PurePath(filename or "").suffix.lower()
        if self.allowed_extensions and suffix not in self.allowed_extensions:
            raise UnsupportedFileError(
                f"Unsupported file type '{suffix or filename}'. "
                f"Allowed: {', '.join(self.allowed_extensions)}",
                {"filename": filename},
            )

    def _decode(self, content: FileContent) -> str:
        if isinstance(content, str):
            raw_size = len(content.encode(self.encoding, errors="replace"))
        else:
            raw_size = len(content)

        if raw_size > self.max_bytes:
            raise UnsupportedFileError(
                f"File too large (limit {self.max_bytes} bytes)",
                {"size": raw_size},
            )

        if isinstance(content, str):
            text = content
        else:
            try:
                text = content.decode(self.encoding)
            except UnicodeDecodeError as e:
                raise UnsupportedFileError(
                    "Failed to read file.", {"reason": str(e)}
                ) from e

        return text.lstrip("\ufeff")
