import os
import sys
import random
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../backend")))
from services.response_table import BUILTIN_TABLE, Category, ResponseTable
from services.responder import ResponseSelector


def replies(name):
    return BUILTIN_TABLE.get(name).responses


@pytest.fixture
def selector():
    return ResponseSelector(BUILTIN_TABLE, random.Random(42))


def test_builtin_category_order():
    assert BUILTIN_TABLE.category_names() == ("greeting", "farewell", "about", "help", "weather")


def test_greeting_for_hello_there(selector):
    for _ in range(20):
        assert selector.select_response("hello there") in replies("greeting")


def test_unmatched_input_uses_default(selector):
    for _ in range(20):
        assert selector.select_response("xyzzy plugh") in BUILTIN_TABLE.default
    assert selector.match_category("xyzzy plugh") is None


@pytest.mark.parametrize("text,category", [
    ("Hello, can you help me?", "greeting"),   # greeting before help
    ("thanks for the help", "farewell"),       # farewell before help
    ("Who are you", "about"),
    ("I need support", "help"),
    ("Any forecast for tomorrow?", "weather"),
    ("GOODBYE", "farewell"),
])
def test_earlier_category_wins(selector, text, category):
    assert selector.match_category(text).name == category
    assert selector.select_response(text) in replies(category)


def test_patterns_match_as_substrings(selector):
    # "hi" sits inside "this"
    assert selector.match_category("this is odd").name == "greeting"


def test_same_seed_same_picks():
    a = ResponseSelector(BUILTIN_TABLE, random.Random(3))
    b = ResponseSelector(BUILTIN_TABLE, random.Random(3))
    inputs = ["hello", "bye", "xyzzy", "who are you", "hey"] * 4
    assert [a.select_response(t) for t in inputs] == [b.select_response(t) for t in inputs]


def test_category_without_replies_falls_through():
    table = ResponseTable(
        categories=(
            Category("silent", ("hello",), ()),
            Category("greeting", ("hello",), ("Hi!",)),
        ),
        default=("Default.",),
    )
    selector = ResponseSelector(table, random.Random(0))
    assert selector.select_response("hello") == "Hi!"

    only_silent = ResponseTable(categories=(Category("silent", ("hello",), ()),), default=("Default.",))
    assert ResponseSelector(only_silent).select_response("hello") == "Default."


def test_always_returns_non_empty(selector):
    for text in ["", "   ", "hello", "?", "weather"]:
        assert selector.select_response(text)
