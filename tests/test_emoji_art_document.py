"""
Tests for EmojiArtDocument.

Covers:
- Emoji add / remove / move / scale and id-based lookup
- Identity semantics of Emoji
- Background kinds and fetch status transitions
- Stale fetch results
- Listener notifications
"""
import pytest

from models.emoji_art import Emoji, Background, BackgroundFetchStatus
from models.transform import Vec2, Size


URL = "https://example.com/bg.png"


# ══════════════════════════════════════════════════════════════════════════
# Emoji operations
# ══════════════════════════════════════════════════════════════════════════

class TestEmojiOperations:

    def test_add_returns_id(self, document):
        emoji_id = document.add_emoji("🚀", (3, -4), 40)
        emoji = document.get_emoji(emoji_id)
        assert emoji.text == "🚀"
        assert emoji.position == (3, -4)
        assert emoji.size == 40

    def test_add_truncates_floats(self, document):
        emoji_id = document.add_emoji("🚀", (3.9, -4.9), 26.7)
        emoji = document.get_emoji(emoji_id)
        assert emoji.position == (3, -4)
        assert emoji.size == 26

    def test_ids_are_unique(self, document):
        ids = {document.add_emoji("🚀", (0, 0), 40) for _ in range(20)}
        assert len(ids) == 20

    def test_z_order_is_insertion_order(self, document):
        a = document.add_emoji("🐶", (0, 0), 40)
        b = document.add_emoji("🐱", (0, 0), 40)
        assert document.emoji_ids == [a, b]

    def test_emojis_returns_copy(self, document, rocket):
        document.emojis.clear()
        assert document.emoji_ids == [rocket]

    def test_remove(self, document, rocket):
        document.remove_emoji(rocket)
        assert not document.has_emoji(rocket)

    def test_move_truncates_each_axis(self, document, rocket):
        document.move_emoji(rocket, Vec2(2.9, -2.9))
        assert document.get_emoji(rocket).position == (2, -2)

    def test_scale(self, document, rocket):
        document.scale_emoji(rocket, 0.5)
        assert document.get_emoji(rocket).size == 20

    @pytest.mark.parametrize("operation", [
        lambda d: d.get_emoji("missing"),
        lambda d: d.remove_emoji("missing"),
        lambda d: d.move_emoji("missing", Vec2(1, 1)),
        lambda d: d.scale_emoji("missing", 2.0),
    ])
    def test_unknown_id_raises(self, document, operation):
        with pytest.raises(ValueError):
            operation(document)


class TestEmojiIdentity:

    def test_equality_by_id(self):
        a = Emoji("🚀", 0, 0, 40, id="same")
        b = Emoji("🐶", 5, 5, 10, id="same")
        assert a == b
        assert hash(a) == hash(b)

    def test_same_value_different_id(self):
        assert Emoji("🚀", 0, 0, 40) != Emoji("🚀", 0, 0, 40)


# ══════════════════════════════════════════════════════════════════════════
# Background
# ══════════════════════════════════════════════════════════════════════════

class TestBackground:

    def test_starts_blank(self, document):
        assert document.background.is_blank
        assert document.background_fetch_status == BackgroundFetchStatus.IDLE
        assert document.background_image_size is None

    def test_image_data_decoded(self, document, make_png):
        document.set_background(Background.image_data(make_png(64, 32)))
        assert document.background_image_size == Size(64, 32)
        assert document.background_fetch_status == BackgroundFetchStatus.LOADED
        assert document.background_image_data is not None

    def test_undecodable_data_fails(self, document):
        document.set_background(Background.image_data(b"not an image"))
        assert document.background_fetch_status == BackgroundFetchStatus.FAILED
        assert document.background_image_size is None

    def test_url_starts_fetching(self, document):
        events = []
        document.add_listener(events.append)
        document.set_background(Background.url(URL))
        assert document.background_fetch_status == BackgroundFetchStatus.FETCHING
        assert "fetch_requested" in events

    def test_finish_fetch(self, document, make_png):
        document.set_background(Background.url(URL))
        document.finish_background_fetch(URL, make_png(10, 20))
        assert document.background_fetch_status == BackgroundFetchStatus.LOADED
        assert document.background_image_size == Size(10, 20)

    def test_fail_fetch(self, document):
        document.set_background(Background.url(URL))
        document.fail_background_fetch(URL, "404")
        assert document.background_fetch_status == BackgroundFetchStatus.FAILED

    def test_stale_result_ignored(self, document, make_png):
        document.set_background(Background.url(URL))
        document.set_background(Background.url("https://example.com/other.png"))
        document.finish_background_fetch(URL, make_png(10, 20))
        assert document.background_fetch_status == BackgroundFetchStatus.FETCHING
        assert document.background_image_size is None

    def test_blank_resets(self, document, make_png):
        document.set_background(Background.image_data(make_png(8, 8)))
        document.set_background(Background.blank())
        assert document.background_fetch_status == BackgroundFetchStatus.IDLE
        assert document.background_image_data is None


# ══════════════════════════════════════════════════════════════════════════
# Listeners
# ══════════════════════════════════════════════════════════════════════════

class TestListeners:

    def test_emoji_events(self, document):
        events = []
        document.add_listener(events.append)
        emoji_id = document.add_emoji("🚀", (0, 0), 40)
        document.move_emoji(emoji_id, Vec2(1, 1))
        document.remove_emoji(emoji_id)
        assert events == ["emojis", "emojis", "emojis"]

    def test_remove_listener(self, document):
        events = []
        document.add_listener(events.append)
        document.remove_listener(events.append)
        document.add_emoji("🚀", (0, 0), 40)
        assert events == []

    def test_listener_registered_once(self, document):
        events = []
        listener = events.append
        document.add_listener(listener)
        document.add_listener(listener)
        document.add_emoji("🚀", (0, 0), 40)
        assert events == ["emojis"]
