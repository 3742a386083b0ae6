"""Tests for the favorites text codec used by the contact forms."""

from kinship.domain import format_favorites, parse_favorites


def test_round_trip():
    favorites = {"food": "pizza", "color": "blue"}
    text = format_favorites(favorites)
    assert text == "food: pizza\ncolor: blue"
    assert parse_favorites(text) == favorites


def test_malformed_line_dropped_anywhere():
    for text in (
        "nocolonhere\nfood: pizza\ncolor: blue",
        "food: pizza\nnocolonhere\ncolor: blue",
        "food: pizza\ncolor: blue\nnocolonhere",
    ):
        assert parse_favorites(text) == {"food": "pizza", "color": "blue"}


def test_splits_on_first_colon_only():
    assert parse_favorites("movie: Star Wars: A New Hope") == {
        "movie": "Star Wars: A New Hope"
    }
    assert parse_favorites("time: 10:30") == {"time": "10:30"}


def test_empty_key_or_value_dropped():
    assert parse_favorites(": pizza\nfood:   \n  :  ") == {}


def test_sides_trimmed_and_blank_lines_ignored():
    assert parse_favorites("  food  :  sushi  \n\n\r\nband:Queen\r") == {
        "food": "sushi",
        "band": "Queen",
    }


def test_later_duplicate_key_wins():
    assert parse_favorites("food: pizza\nfood: tacos") == {"food": "tacos"}


def test_empty_input():
    assert parse_favorites("") == {}
    assert parse_favorites(None) == {}
    assert format_favorites({}) == ""
    assert format_favorites(None) == ""
