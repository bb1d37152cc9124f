"""Tests for scanner error messages and positions."""

from __future__ import annotations

import pytest

from jsxtpl.errors import ScanError
from jsxtpl.scanner import scan


class TestUnterminatedTags:
    def test_open_without_gt(self):
        with pytest.raises(ScanError, match="unterminated component tag <Hello"):
            scan("<Hello name")

    def test_open_without_gt_after_text(self):
        with pytest.raises(ScanError, match="unterminated"):
            scan("text before\n<Hello")

    def test_gt_only_after_next_tag(self):
        with pytest.raises(ScanError, match="before next tag"):
            scan("<Hello name <World />")

    def test_gt_only_after_directive(self):
        with pytest.raises(ScanError, match="before next tag"):
            scan("<Hello {#def x #} >")

    def test_close_with_trailing_space(self):
        with pytest.raises(ScanError, match="expected '>' to close </Hello"):
            scan("</Hello >")

    def test_close_without_gt(self):
        with pytest.raises(ScanError, match="expected '>'"):
            scan("</Hello")


class TestDirectiveErrors:
    def test_unterminated_directive(self):
        with pytest.raises(ScanError, match="unterminated \\{#def"):
            scan("{#def name")

    def test_directive_without_params(self):
        with pytest.raises(ScanError, match="malformed"):
            scan("{#def #}")

    def test_directive_without_space_before_end(self):
        with pytest.raises(ScanError, match="malformed"):
            scan("{#def name#}")

    def test_directive_with_non_alphabetic_param(self):
        with pytest.raises(ScanError, match="malformed"):
            scan("{#def user_name #}")

    def test_directive_prefix_of_longer_comment(self):
        with pytest.raises(ScanError, match="malformed"):
            scan("{#default layout #}")


class TestAllOrNothing:
    def test_error_after_valid_nodes(self):
        with pytest.raises(ScanError):
            scan("<A />text</A>\n<B unterminated")

    def test_error_carries_source_and_filename(self):
        with pytest.raises(ScanError) as exc_info:
            scan("<Hello", "pages/index.html")
        err = exc_info.value
        assert err.source == "<Hello"
        assert err.filename == "pages/index.html"


class TestErrorPosition:
    def test_points_at_marker_start(self):
        with pytest.raises(ScanError) as exc_info:
            scan("ok\n  <Broken")
        pos = exc_info.value.position
        assert (pos.line, pos.column, pos.offset) == (2, 3, 5)

    def test_directive_error_position(self):
        with pytest.raises(ScanError) as exc_info:
            scan("abc{#def")
        assert exc_info.value.position.column == 4
