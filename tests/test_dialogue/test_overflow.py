from magicwords.dialogue.overflow import OverflowController


def test_room_left_does_not_page():
    controller = OverflowController()
    assert not controller.should_page(680, 0)
    assert not controller.should_page(680, 580)


def test_close_to_top_pages():
    controller = OverflowController()
    assert controller.should_page(680, 581)
    assert controller.should_page(50, 0)


def test_custom_threshold():
    controller = OverflowController(threshold=10)
    assert not controller.should_page(100, 90)
    assert controller.should_page(100, 91)
