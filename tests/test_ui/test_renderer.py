import pytest
import pygame
from unittest.mock import MagicMock, patch
# Bound before the autouse fixture swaps pygame.Surface for a mock
from pygame import Surface as RealSurface
from magicwords.ui.primitives import DrawText, FillRoundedRect, PlaceSprite
from magicwords.ui.renderer import FontConfig, UIRenderer


class FakeFont:
    """10 pixels per character, 20 pixels per line."""

    def size(self, text):
        return len(text) * 10, 20

    def get_height(self):
        return 20

    def render(self, text, antialias, color):
        surface = MagicMock()
        surface.get_rect.return_value = pygame.Rect(0, 0, len(text) * 10, 20)
        return surface

    def set_bold(self, value):
        pass

    def set_italic(self, value):
        pass


@pytest.fixture
def sys_font():
    with patch('pygame.font.SysFont', return_value=FakeFont()) as sys_font:
        yield sys_font


@pytest.fixture
def renderer(sys_font):
    return UIRenderer(MagicMock())


def test_fonts_are_cached(renderer, sys_font):
    config = FontConfig(size=20)

    assert renderer.get_font(config) is renderer.get_font(config)
    sys_font.assert_called_once_with(None, 20)


def test_measure_text_unwrapped(renderer):
    assert renderer.measure_text("hello world foo") == (150, 20)


def test_measure_text_wraps_on_spaces(renderer):
    assert renderer.measure_text("hello world foo", max_width=110) == (110, 40)


def test_measure_text_empty(renderer):
    assert renderer.measure_text("", max_width=110) == (0, 20)


def test_line_height(renderer):
    assert renderer.get_line_height() == 20


def test_draw_rounded_rect_with_alpha(renderer):
    with patch('pygame.draw.rect') as draw_rect:
        renderer.draw_primitives([
            FillRoundedRect(
                x=10, y=20, width=200, height=64, radius=10,
                color=(0, 0, 0), alpha=0.6,
                border_color=(255, 255, 255), border_alpha=0.8, border_width=2,
            )
        ])

    fill, border = draw_rect.call_args_list
    assert fill.args[1] == (0, 0, 0, 153)
    assert fill.kwargs["border_radius"] == 10
    assert border.args[1] == (255, 255, 255, 204)
    assert border.args[3] == 2
    assert renderer.surface.blit.call_count == 2


def test_opaque_rect_draws_directly(renderer):
    with patch('pygame.draw.rect') as draw_rect:
        renderer.draw_rounded_rect(0, 0, 50, 20, (10, 20, 30))

    target, color, rect = draw_rect.call_args.args
    assert target is renderer.surface
    assert color == (10, 20, 30)
    assert rect == pygame.Rect(0, 0, 50, 20)


def test_draw_sprite_scales(renderer):
    image = MagicMock()

    with patch('pygame.transform.scale') as scale:
        renderer.draw_primitives([PlaceSprite(image, 4.6, 8.2, 64, 64)])

    scale.assert_called_once_with(image, (64, 64))
    renderer.surface.blit.assert_called_once_with(scale.return_value, (4, 8))


def test_scaled_sprites_are_cached(renderer):
    image = MagicMock()
    sprite = PlaceSprite(image, 0, 0, 64, 64)

    with patch('pygame.transform.scale') as scale:
        renderer.draw_primitives([sprite])
        renderer.draw_primitives([sprite])
        assert scale.call_count == 1

        renderer.set_surface(MagicMock())
        renderer.draw_primitives([sprite])
        assert scale.call_count == 2


def test_paletted_sprite_is_drawn(renderer):
    image = RealSurface((10, 10), depth=8)

    renderer.draw_primitives([PlaceSprite(image, 0, 0, 64, 64)])

    scaled, position = renderer.surface.blit.call_args.args
    assert scaled.get_size() == (64, 64)
    assert position == (0, 0)


def test_draw_text_wraps(renderer):
    renderer.draw_primitives([
        DrawText("hello world foo", 0, 100, FontConfig(size=20), wrap_width=110)
    ])

    positions = [c.args[1].top for c in renderer.surface.blit.call_args_list]
    assert positions == [100, 120]


def test_draw_text_returns_bounds(renderer):
    rect = renderer.draw_text("abc", 5, 5)
    assert rect == pygame.Rect(5, 5, 30, 20)
