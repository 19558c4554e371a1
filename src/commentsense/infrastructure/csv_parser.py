# src/commentsense/infrastructure/csv_parser.py
"""
Delimited Text Parser
Quote-aware splitting with automatic delimiter selection.

Features:
- Four candidate delimiters tried in a fixed order (comma, semicolon, pipe, tab)
- Delimiter chosen by how many expected columns the header exposes
- RFC 4180 style quoting: quoted delimiters/newlines, "" escapes
- Lenient rows: records with the wrong field count are dropped and counted;
  a quote that never closes costs only its own line
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from commentsense.domain.exceptions import EmptyInputError

logger = logging.getLogger(__name__)

DELIMITERS = (",", ";", "|", "\t")

DELIMITER_NAMES = {
    ",": "comma",
    ";": "semicolon",
    "|": "pipe",
    "\t": "tab",
}


@dataclass
class ParsedTable:
    """Result of parsing one delimited document"""

    delimiter: str
    score: int
    headers: List[str]
    rows: List[Dict[str, str]] = field(default_factory=list)
    skipped_lines: int = 0


# ============================================================================
# Low-level splitting
# ============================================================================


def split_line(line: str, delimiter: str) -> List[str]:
    """
    Split one record into raw (untrimmed) fields

    Two states: inside / outside quotes. A delimiter inside quotes is
    literal; a doubled quote inside quotes emits one quote; any other quote
    toggles the state.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))
    return fields


def split_records(text: str) -> List[str]:
    """
    Split text into records on newlines that are not inside quotes

    A quote opens a quoted section only at the start of a field (start of
    a record or right after a delimiter); anywhere else it is literal, so a
    stray quote such as ``5" brush`` cannot swallow the following lines.
    Inside a quoted section a doubled quote is an escaped quote.

    Blank records are dropped. Only a trailing ``\\r`` is removed, so
    trailing delimiters (empty last fields) survive.
    """
    records: List[str] = []
    current: List[str] = []
    in_quotes = False
    previous = "\n"
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if char == '"':
            if in_quotes:
                if i + 1 < length and text[i + 1] == '"':
                    current.append('""')
                    previous = '"'
                    i += 2
                    continue
                in_quotes = False
            elif previous == "\n" or previous in DELIMITERS:
                in_quotes = True
        elif char == "\n" and not in_quotes:
            records.append("".join(current))
            current = []
            previous = char
            i += 1
            continue
        current.append(char)
        previous = char
        i += 1
    records.append("".join(current))

    records = [record.rstrip("\r") for record in records]
    return [record for record in records if record.strip()]


def count_column_matches(headers: Sequence[str], columns: Sequence[str]) -> int:
    """
    Count columns that case-insensitively appear inside a header token

    Each header token credits at most one column, so an unsplit header
    line (one long token) cannot score as though it had been split.
    """
    lowered = [header.strip().lower() for header in headers]
    used = set()
    score = 0

    for column in columns:
        needle = column.lower()
        for index, header in enumerate(lowered):
            if index in used or not header:
                continue
            if needle in header:
                used.add(index)
                score += 1
                break

    return score


# ============================================================================
# Table parsing
# ============================================================================


def choose_delimiter(header_line: str, expected_columns: Sequence[str]):
    """Pick the delimiter whose header split matches the most columns"""
    best_delimiter = DELIMITERS[0]
    best_score = 0

    for delimiter in DELIMITERS:
        headers = split_line(header_line, delimiter)
        score = count_column_matches(headers, expected_columns)
        # Strictly greater: earlier delimiters win ties
        if score > best_score:
            best_score = score
            best_delimiter = delimiter

    return best_delimiter, best_score


def parse_table(text: str, expected_columns: Sequence[str]) -> ParsedTable:
    """
    Parse delimited text into header-keyed rows

    Args:
        text: Full document text (header line first)
        expected_columns: Column names used to score candidate delimiters

    Returns:
        ParsedTable with the chosen delimiter, rows and dropped-line count

    Raises:
        EmptyInputError: Fewer than two non-empty records
    """
    records = split_records((text or "").lstrip("\ufeff"))
    if len(records) < 2:
        raise EmptyInputError(
            "File appears to be empty or has no data rows.",
            {"records": len(records)},
        )

    header_line = records[0]
    delimiter, score = choose_delimiter(header_line, expected_columns)
    headers = [header.strip() for header in split_line(header_line, delimiter)]

    logger.info(
        f"Using {DELIMITER_NAMES[delimiter]} delimiter "
        f"(score: {score}/{len(expected_columns)})"
    )

    table = ParsedTable(delimiter=delimiter, score=score, headers=headers)

    for record_number, record in enumerate(records[1:], start=2):
        candidates = [record]
        if "\n" in record and len(split_line(record, delimiter)) != len(headers):
            # Unterminated quote: judge each physical line on its own
            candidates = [line.rstrip("\r") for line in record.split("\n") if line.strip()]

        for candidate in candidates:
            values = split_line(candidate, delimiter)
            if len(values) != len(headers):
                logger.debug(
                    f"Skipping malformed record {record_number}: "
                    f"expected {len(headers)} columns, got {len(values)}"
                )
                table.skipped_lines += 1
                continue

            table.rows.append(
                {header: (value or "").strip() for header, value in zip(headers, values)}
            )

    logger.info(
        f"Parsed {len(table.rows)} rows "
        f"({table.skipped_lines} skipped) with headers: {headers}"
    )
    return table


def parse_delimited(text: str, expected_columns: Sequence[str]) -> List[Dict[str, str]]:
    """Parse delimited text and return only the accepted rows"""
    return parse_table(text, expected_columns).rows
