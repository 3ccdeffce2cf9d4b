"""Tests for SSE frame field parsing."""

from sseframe.parser import format_message, parse_frame, parse_line


class TestParseLine:
    def test_key_value(self):
        assert parse_line("event: update") == ("event", "update")

    def test_no_colon(self):
        assert parse_line("just some text") is None

    def test_first_colon_splits(self):
        assert parse_line("data: https://host:8080/p") == ("data", "https://host:8080/p")

    def test_empty_key(self):
        assert parse_line(": keepalive") == ("", "keepalive")

    def test_empty_value(self):
        assert parse_line("data:") == ("data", "")


class TestParseFrame:
    def test_data_lines_concatenated(self):
        assert parse_frame("data: a\ndata: b") == {"data": "ab"}

    def test_data_lines_joined_with_newline(self):
        assert parse_frame("data: a\ndata: b\ndata: c", join_data_with_newline=True) == {
            "data": "a\nb\nc"
        }

    def test_whitespace_trimmed(self):
        assert parse_frame("  event  :  custom\n  data  :  v") == {
            "event": "custom",
            "data": "v",
        }

    def test_last_write_wins_for_other_keys(self):
        assert parse_frame("id: 1\nid: 2\ndata: x") == {"id": "2", "data": "x"}

    def test_lines_without_colon_ignored(self):
        assert parse_frame("hello\nworld") == {}

    def test_record_without_data(self):
        assert parse_frame("event: ping") == {"event": "ping"}

    def test_comment_line_kept_under_empty_key(self):
        assert parse_frame(": heartbeat\ndata: x") == {"": "heartbeat", "data": "x"}

    def test_empty_first_data_line(self):
        assert parse_frame("data:\ndata: x") == {"data": "x"}
        assert parse_frame("data:\ndata: x", join_data_with_newline=True) == {"data": "\nx"}

    def test_retry_not_validated(self):
        assert parse_frame("retry: soon") == {"retry": "soon"}

    def test_crlf_lines(self):
        assert parse_frame("event: x\r\ndata: y\r") == {"event": "x", "data": "y"}


class TestFormatMessage:
    def test_basic(self):
        result = format_message({"event": "message_start", "data": '{"type":"message_start"}'})
        assert result == b'event: message_start\ndata: {"type":"message_start"}\n\n'

    def test_multiline_data(self):
        result = format_message({"data": "line1\nline2"})
        assert b"data: line1\n" in result
        assert b"data: line2\n" in result
        assert result.endswith(b"\n\n")

    def test_parses_back(self):
        original = {"event": "test", "id": "42", "data": "hello\nworld"}
        frame = format_message(original).decode().strip()
        assert parse_frame(frame, join_data_with_newline=True) == original
