"""
Unit Tests for the delimited text parser
"""

import pytest

from commentsense.domain.exceptions import EmptyInputError
from commentsense.infrastructure.csv_parser import (
    choose_delimiter,
    count_column_matches,
    parse_delimited,
    parse_table,
    split_line,
    split_records,
)
from commentsense.infrastructure.normalizer import COMMENT_COLUMNS, VIDEO_COLUMNS


class TestSplitLine:
    """Test quote-aware field splitting"""

    def test_plain_fields(self):
        assert split_line("a,b,c", ",") == ["a", "b", "c"]

    def test_quoted_delimiter_is_literal(self):
        assert split_line('x,"hello, world",y', ",") == ["x", "hello, world", "y"]

    def test_doubled_quote_inside_quotes(self):
        assert split_line('"say ""hi""",2', ",") == ['say "hi"', "2"]

    def test_fields_are_not_trimmed(self):
        assert split_line(" a ; b ", ";") == [" a ", " b "]

    def test_trailing_delimiter_yields_empty_field(self):
        assert split_line("a|b|", "|") == ["a", "b", ""]

    def test_tab_delimiter(self):
        assert split_line("a\tb", "\t") == ["a", "b"]


class TestSplitRecords:
    """Test record splitting"""

    def test_newline_inside_quotes_stays_in_record(self):
        text = 'id,text\n1,"line one\nline two"\n2,plain\n'
        records = split_records(text)

        assert len(records) == 3
        assert records[1] == '1,"line one\nline two"'

    def test_blank_records_dropped(self):
        assert split_records("a,b\n\n   \n1,2\n") == ["a,b", "1,2"]

    def test_crlf_stripped(self):
        assert split_records("a,b\r\n1,2\r\n") == ["a,b", "1,2"]

    def test_mid_field_quote_is_literal(self):
        text = 'id,text\n1,love the 5" brush\n2,plain\n'
        assert split_records(text) == ["id,text", '1,love the 5" brush', "2,plain"]

    def test_escaped_quote_keeps_section_open(self):
        text = 'id,text\n1,"say ""hi""\nthere"\n2,plain\n'
        records = split_records(text)

        assert records[1] == '1,"say ""hi""\nthere"'
        assert records[2] == "2,plain"

    def test_trailing_tab_kept(self):
        assert split_records("a\tb\tc\nx\ty\t\n") == ["a\tb\tc", "x\ty\t"]


class TestColumnMatching:
    """Test header scoring"""

    def test_case_insensitive_substring(self):
        headers = ["CommentId", "textoriginal", "video_id_x"]
        assert count_column_matches(headers, ["commentId", "textOriginal"]) == 2

    # Deliberately stricter than plain substring counting: each header token
    # credits at most one column, otherwise an unsplit semicolon header would
    # tie with the real delimiter and comma would win.
    def test_unsplit_header_credits_one_column(self):
        header = ["videoId;title;description;viewCount;channelId"]
        assert count_column_matches(header, VIDEO_COLUMNS) == 1

    def test_semicolon_video_header_selects_semicolon(self):
        delimiter, score = choose_delimiter(
            "videoId;title;description;viewCount;channelId", VIDEO_COLUMNS
        )
        assert delimiter == ";"
        assert score == 5

    def test_tie_keeps_earlier_delimiter(self):
        delimiter, score = choose_delimiter("nothing here", COMMENT_COLUMNS)
        assert delimiter == ","
        assert score == 0

        print("\n✅ Delimiter ties resolve to comma")


class TestParseTable:
    """Test table parsing"""

    def test_rows_keyed_by_trimmed_headers(self):
        text = " commentId | textOriginal \nc1| hello \n"
        table = parse_table(text, COMMENT_COLUMNS)

        assert table.delimiter == "|"
        assert table.headers == ["commentId", "textOriginal"]
        assert table.rows == [{"commentId": "c1", "textOriginal": "hello"}]

    def test_malformed_lines_skipped(self):
        text = "commentId,textOriginal\nc1,ok\nc2,too,many\nc3,fine\n"
        table = parse_table(text, COMMENT_COLUMNS)

        assert [row["commentId"] for row in table.rows] == ["c1", "c3"]
        assert table.skipped_lines == 1

    def test_stray_quote_drops_only_its_row(self):
        text = (
            "commentId,videoId,textOriginal,authorId\n"
            "c1,v1,great,a1\n"
            'c2,v1,love the 5" brush,a2\n'
            "c3,v1,nice,a3\n"
            "c4,v1,ok,a4\n"
        )
        table = parse_table(text, COMMENT_COLUMNS)

        assert [row["commentId"] for row in table.rows] == ["c1", "c3", "c4"]
        assert table.skipped_lines == 1

    def test_unterminated_quote_falls_back_to_lines(self):
        text = (
            "commentId,textOriginal,authorId\n"
            'c1,"never closed,a1\n'
            "c2,fine,a2\n"
            "c3,ok,a3\n"
        )
        table = parse_table(text, COMMENT_COLUMNS)

        assert [row["commentId"] for row in table.rows] == ["c2", "c3"]
        assert table.skipped_lines == 1

        print("\n✅ Unbalanced quotes cost a single line")

    def test_tsv_empty_last_column(self):
        text = "videoId\ttitle\ttopicCategories\nv1\tTitle\t\n"
        table = parse_table(text, VIDEO_COLUMNS)

        assert table.delimiter == "\t"
        assert table.rows == [{"videoId": "v1", "title": "Title", "topicCategories": ""}]

    def test_bom_is_ignored(self):
        rows = parse_delimited("\ufeffvideoId,title\nv1,Hello\n", VIDEO_COLUMNS)
        assert rows == [{"videoId": "v1", "title": "Hello"}]

    @pytest.mark.parametrize("text", ["", "   \n\n", "commentId,textOriginal\n"])
    def test_header_only_or_empty_raises(self, text):
        with pytest.raises(EmptyInputError):
            parse_table(text, COMMENT_COLUMNS)
