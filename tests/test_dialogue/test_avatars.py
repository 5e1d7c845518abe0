import pytest
from unittest.mock import MagicMock
from magicwords.dialogue.avatars import AvatarRegistry, UnknownSpeaker, augment_avatars
from magicwords.dialogue.models import Avatar, Side


def test_resolve_listed_speaker(avatars):
    registry = AvatarRegistry.build(avatars)

    penny = registry.resolve("Penny")
    assert penny is avatars[1]
    assert penny.side is Side.RIGHT


def test_fallback_avatar_borrows_first_image():
    image = MagicMock(name="a.png")
    registry = AvatarRegistry.build([Avatar(name="A", image=image, side=Side.RIGHT)])

    neighbour = registry.resolve("Neighbour")
    assert neighbour.name == "Neighbour"
    assert neighbour.side is Side.LEFT
    assert neighbour.image is image


def test_build_does_not_mutate_input(avatars):
    original = list(avatars)
    augmented = augment_avatars(avatars, ["Neighbour"])

    assert avatars == original
    assert len(augmented) == len(avatars) + 1


def test_listed_fallback_name_is_not_replaced():
    listed = Avatar(name="Neighbour", image=MagicMock(), side=Side.RIGHT)
    registry = AvatarRegistry.build([Avatar(name="A", image=MagicMock()), listed])

    assert registry.resolve("Neighbour") is listed
    assert len(registry) == 2


def test_unknown_speaker_raises(avatars):
    registry = AvatarRegistry.build(avatars)

    with pytest.raises(UnknownSpeaker) as exc_info:
        registry.resolve("Leonard")

    assert exc_info.value.name == "Leonard"
    assert "Leonard" in str(exc_info.value)


def test_no_fallback_without_any_avatar():
    registry = AvatarRegistry.build([])

    with pytest.raises(UnknownSpeaker):
        registry.resolve("Neighbour")


def test_lazy_synthesis_for_unlisted_speakers(avatars):
    registry = AvatarRegistry.build(avatars, fallback_names=(), synthesize_unknown=True)

    leonard = registry.resolve("Leonard")
    assert leonard.side is Side.LEFT
    assert leonard.image is avatars[0].image
    # Cached after the first lookup
    assert registry.resolve("Leonard") is leonard
    assert "Leonard" in registry


def test_duplicate_names_keep_last(avatars):
    duplicate = Avatar(name="Sheldon", image=MagicMock(), side=Side.RIGHT)
    registry = AvatarRegistry.build([*avatars, duplicate])

    assert registry.resolve("Sheldon") is duplicate
    assert len(registry) == 3


def test_synthesized_speakers_borrow_first_listed_image(avatars):
    duplicate = Avatar(name="Sheldon", image=MagicMock(), side=Side.RIGHT)
    registry = AvatarRegistry.build([*avatars, duplicate], synthesize_unknown=True)

    assert registry.resolve("Neighbour").image is avatars[0].image
    assert registry.resolve("Leonard").image is avatars[0].image
