"""Tests for the interactive prompts."""

import io

import pytest

from svcdeps.console import confirm, select_one
from svcdeps.errors import PromptError


class TestSelectOne:
    def test_numbered_choice(self):
        out = io.StringIO()
        index = select_one("Select a service", ["api", "web"], stdin=io.StringIO("2\n"), stdout=out)
        assert index == 1
        assert "1) api" in out.getvalue()
        assert "2) web" in out.getvalue()

    def test_option_name(self):
        index = select_one("Pick", ["api", "web"], stdin=io.StringIO("web\n"), stdout=io.StringIO())
        assert index == 1

    def test_reprompts_on_invalid(self):
        out = io.StringIO()
        index = select_one("Pick", ["api", "web"], stdin=io.StringIO("9\nx\n1\n"), stdout=out)
        assert index == 0
        assert out.getvalue().count("Invalid choice") == 2

    def test_no_options(self):
        with pytest.raises(PromptError, match="no options"):
            select_one("Pick", [], stdin=io.StringIO("1\n"), stdout=io.StringIO())

    def test_end_of_input(self):
        with pytest.raises(PromptError):
            select_one("Pick", ["api"], stdin=io.StringIO(""), stdout=io.StringIO())


class TestConfirm:
    @pytest.mark.parametrize("answer,expected", [
        ("y\n", True),
        ("YES\n", True),
        ("n\n", False),
        ("no\n", False),
    ])
    def test_answers(self, answer, expected):
        assert confirm("Sure?", stdin=io.StringIO(answer), stdout=io.StringIO()) is expected

    def test_empty_answer_uses_default(self):
        assert confirm("Sure?", default=False, stdin=io.StringIO("\n"), stdout=io.StringIO()) is False
        assert confirm("Sure?", default=True, stdin=io.StringIO("\n"), stdout=io.StringIO()) is True

    def test_reprompts_on_unrecognized(self):
        out = io.StringIO()
        assert confirm("Sure?", stdin=io.StringIO("maybe\ny\n"), stdout=out) is True
        assert "Please answer" in out.getvalue()
