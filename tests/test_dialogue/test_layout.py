import pytest
from magicwords.dialogue.layout import TokenLayoutEngine

LINE_HEIGHT = 44


@pytest.fixture
def engine(text_metrics):
    return TokenLayoutEngine(text_metrics)


def test_tokenize_isolates_placeholders(engine):
    assert engine.tokenize("Hi {happy} there") == ["Hi ", "{happy}", " there"]


def test_tokenize_discards_empty_segments(engine):
    # Adjacent placeholders and placeholders at the edges leave empty splits
    assert engine.tokenize("{a}{b}") == ["{a}", "{b}"]
    assert engine.tokenize("") == []


def test_single_row_text_and_emoji(engine):
    layout = engine.layout("Hi {happy}", {"happy": object()}, max_width=500, line_height=LINE_HEIGHT)

    contents = [item.token.content for item in layout.tokens]
    assert contents == ["Hi ", "{happy}"]

    text, emoji = layout.tokens
    assert not text.token.is_emoji
    assert emoji.token.is_emoji
    assert emoji.token.emoji_name == "happy"

    # Both on row 0
    assert text.y == 0 and emoji.y == 0
    assert text.x == 0
    assert emoji.x == 30
    assert layout.total_height == LINE_HEIGHT
    assert layout.total_width == 30 + 48


def test_emoji_has_fixed_size(engine):
    layout = engine.layout("{wave}", {}, max_width=500, line_height=LINE_HEIGHT)
    token = layout.tokens[0].token
    assert (token.width, token.height) == (48, 48)


def test_exact_fit_does_not_wrap(engine):
    # "aaaaa" = 50 wide, emoji 48 -> exactly 98
    layout = engine.layout("aaaaa{x}", {}, max_width=98, line_height=LINE_HEIGHT)

    assert [item.y for item in layout.tokens] == [0, 0]
    assert layout.total_height == LINE_HEIGHT
    assert layout.total_width == 98


def test_any_excess_wraps(engine):
    layout = engine.layout("aaaaa{x}", {}, max_width=97.5, line_height=LINE_HEIGHT)

    first, second = layout.tokens
    assert (first.x, first.y) == (0, 0)
    assert (second.x, second.y) == (0, LINE_HEIGHT)
    assert layout.total_height == LINE_HEIGHT * 2
    assert layout.total_width == 50
    assert layout.row_count == 2


def test_text_width_is_capped(engine):
    layout = engine.layout("x" * 100, {}, max_width=300, line_height=LINE_HEIGHT)

    token = layout.tokens[0].token
    assert token.width == 300
    assert layout.tokens[0].y == 0
    assert layout.total_width == 300


def test_token_wider_than_row_still_gets_its_own_row(engine):
    # An emoji slot is 48 wide; a 40 wide row can never hold it
    layout = engine.layout("{big}", {}, max_width=40, line_height=LINE_HEIGHT)

    assert layout.tokens[0].y == LINE_HEIGHT
    assert layout.total_height == LINE_HEIGHT * 2


def test_wrapped_rows_restart_at_left_edge(engine):
    layout = engine.layout("aaaa{x}bbbb{y}", {}, max_width=100, line_height=LINE_HEIGHT)

    positions = [(item.token.content, item.x, item.y) for item in layout.tokens]
    assert positions == [
        ("aaaa", 0, 0),
        ("{x}", 40, 0),
        ("bbbb", 0, LINE_HEIGHT),
        ("{y}", 40, LINE_HEIGHT),
    ]
    assert layout.total_width == 88


def test_empty_text_is_one_line_tall(engine):
    layout = engine.layout("", {}, max_width=500, line_height=LINE_HEIGHT)
    assert layout.tokens == ()
    assert layout.total_width == 0
    assert layout.total_height == LINE_HEIGHT


def test_layout_is_deterministic(engine):
    args = ("Hey {satisfied} what's up {intrigued} ok", {"satisfied": 1}, 120, LINE_HEIGHT)

    assert engine.layout(*args) == engine.layout(*args)
