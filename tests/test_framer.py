"""Tests for blank-line framing."""

from sseframe.framer import SSEFramer


class TestSSEFramer:
    def test_single_frame(self):
        framer = SSEFramer()
        assert framer.feed("event: test\ndata: hello\n\n") == ["event: test\ndata: hello"]
        assert framer.buffered == ""

    def test_partial_frame_stays_buffered(self):
        framer = SSEFramer()
        assert framer.feed("data: a\n") == []
        assert framer.buffered == "data: a\n"
        assert framer.feed("\n") == ["data: a"]
        assert framer.buffered == ""

    def test_multiple_frames_in_order(self):
        framer = SSEFramer()
        frames = framer.feed("id: 1\n\nid: 2\n\nid: 3")
        assert frames == ["id: 1", "id: 2"]
        assert framer.buffered == "id: 3"

    def test_frame_is_trimmed(self):
        framer = SSEFramer()
        assert framer.feed("\n  data: x  \n\n") == ["data: x"]

    def test_consecutive_blank_lines_yield_empty_frames(self):
        framer = SSEFramer()
        assert framer.feed("\n\n\n\n") == ["", ""]

    def test_crlf_blank_line_is_not_a_delimiter(self):
        framer = SSEFramer()
        assert framer.feed("data: a\r\n\r\n") == []
        assert framer.buffered == "data: a\r\n\r\n"

    def test_take_remainder(self):
        framer = SSEFramer()
        framer.feed("data: x\n\ndata: y\n")
        assert framer.take_remainder() == "data: y"
        assert framer.buffered == ""

    def test_clear(self):
        framer = SSEFramer()
        framer.feed("data: partial")
        framer.clear()
        assert framer.buffered == ""
