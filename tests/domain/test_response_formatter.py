"""Tests for domain/formatter.py — provider text to text/embeds."""

import pytest

from shapebridge.domain.formatter import ResponseFormatter, strip_urls
from shapebridge.domain.media import MediaUrlExtractor, find_candidates
from shapebridge.domain.models import EmbedsOnly, ImageEmbed, TextOnly, TextWithEmbeds


class FakeProbe:
    """ImageProbePort that accepts a fixed set of URLs and records calls."""

    def __init__(self, valid=()):
        self.valid = set(valid)
        self.calls = []

    async def is_image(self, url):
        self.calls.append(url)
        return url in self.valid


def _formatter(valid=()):
    probe = FakeProbe(valid)
    return ResponseFormatter(MediaUrlExtractor(probe=probe)), probe


CAT = "https://cdn.example.com/cat.png"


class TestFormat:
    @pytest.mark.asyncio
    async def test_text_then_image(self):
        formatter, _ = _formatter([CAT])
        result = await formatter.format(f"Here you go\n{CAT}")
        assert result == TextWithEmbeds("Here you go", [ImageEmbed(CAT)])

    @pytest.mark.asyncio
    async def test_image_only(self):
        formatter, _ = _formatter([CAT])
        assert await formatter.format(CAT) == EmbedsOnly([ImageEmbed(CAT)])

    @pytest.mark.asyncio
    async def test_video_left_inline(self):
        formatter, probe = _formatter()
        text = "watch this\nhttps://example.com/clip.mp4"
        assert await formatter.format(text) == TextOnly(text)
        # Only images are probed
        assert probe.calls == []

    @pytest.mark.asyncio
    async def test_audio_left_inline(self):
        formatter, _ = _formatter()
        text = "listen https://example.com/song.ogg"
        assert await formatter.format(text) == TextOnly(text)

    @pytest.mark.asyncio
    async def test_two_valid_one_invalid(self):
        a = "https://cdn.example.com/a.png"
        b = "https://cdn.example.com/b.jpg"
        broken = "https://cdn.example.com/broken.png"
        formatter, probe = _formatter([a, b])
        text = f"Two cats:\n{a}\n{b}\n{broken}"

        result = await formatter.format(text)

        assert isinstance(result, TextWithEmbeds)
        assert result.embeds == [ImageEmbed(a), ImageEmbed(b)]
        assert result.text == f"Two cats:\n{broken}"
        assert probe.calls == [a, b, broken]

    @pytest.mark.asyncio
    async def test_invalid_image_on_subdomain_stays_intact(self):
        good = "https://img.example.com/cat.png"
        bad = "https://cdn.img.example.com/cat.png"
        formatter, _ = _formatter([good])

        result = await formatter.format(f"a <{good}>\nb <{bad}>")

        assert result == TextWithEmbeds(f"a\nb <{bad}>", [ImageEmbed(good)])

    @pytest.mark.asyncio
    async def test_unrelated_url_containing_image_path_stays_intact(self):
        good = "https://a.example.com/cat.png"
        mirror = "https://mirror.example.org/a.example.com/cat.png"
        formatter, _ = _formatter([good])

        result = await formatter.format(f"{good}\nsee {mirror}")

        assert result == TextWithEmbeds(f"see {mirror}", [ImageEmbed(good)])

    @pytest.mark.asyncio
    async def test_all_images_invalid(self):
        formatter, _ = _formatter()
        text = f"maybe {CAT}"
        assert await formatter.format(text) == TextOnly(text)

    @pytest.mark.asyncio
    async def test_plain_text(self):
        formatter, _ = _formatter()
        assert await formatter.format("hello there") == TextOnly("hello there")

    @pytest.mark.asyncio
    async def test_empty_and_whitespace_unchanged(self):
        formatter, probe = _formatter()
        assert await formatter.format("") == TextOnly("")
        assert await formatter.format("   \n") == TextOnly("   \n")
        assert probe.calls == []

    @pytest.mark.asyncio
    async def test_angle_bracket_wrapping_removed(self):
        formatter, _ = _formatter([CAT])
        result = await formatter.format(f"Look\n<{CAT}>")
        assert result == TextWithEmbeds("Look", [ImageEmbed(CAT)])

    @pytest.mark.asyncio
    async def test_inline_image_removed_from_sentence(self):
        formatter, _ = _formatter([CAT])
        result = await formatter.format(f"Look at {CAT} right now")
        assert result == TextWithEmbeds("Look at right now", [ImageEmbed(CAT)])

    @pytest.mark.asyncio
    async def test_repeated_image_embedded_once(self):
        formatter, probe = _formatter([CAT])
        result = await formatter.format(f"{CAT}\nsame again:\n{CAT}")
        assert result == TextWithEmbeds("same again:", [ImageEmbed(CAT)])
        assert probe.calls == [CAT]

    @pytest.mark.asyncio
    async def test_image_with_video_embeds_image_keeps_video(self):
        clip = "https://example.com/clip.webm"
        formatter, _ = _formatter([CAT])
        result = await formatter.format(f"{CAT}\n{clip}")
        assert result == TextWithEmbeds(clip, [ImageEmbed(CAT)])

    @pytest.mark.asyncio
    async def test_known_host_without_extension(self):
        url = "https://i.redd.it/abc123"
        formatter, _ = _formatter([url])
        assert await formatter.format(url) == EmbedsOnly([ImageEmbed(url)])


class TestStripUrls:
    def test_collapses_blank_lines(self):
        text = f"Top\n\n{CAT}\n\n\nBottom"
        assert strip_urls(text, find_candidates(text)) == "Top\n\nBottom"

    def test_does_not_touch_longer_urls(self):
        text = f"{CAT}\n{CAT}?size=large"
        confirmed = [c for c in find_candidates(text) if c.url == CAT]
        assert strip_urls(text, confirmed) == f"{CAT}?size=large"

    def test_does_not_touch_urls_ending_in_candidate(self):
        good = "https://img.example.com/cat.png"
        other = "https://cdn.img.example.com/cat.png"
        mirror = "https://mirror.example.org/img.example.com/cat.png"
        text = f"a <{good}>\nb <{other}>\nsee {mirror}"
        confirmed = [c for c in find_candidates(text) if c.url == good]
        assert strip_urls(text, confirmed) == f"a\nb <{other}>\nsee {mirror}"

    def test_does_not_touch_url_with_extra_suffix(self):
        text = f"{CAT} and {CAT}.bak"
        confirmed = [c for c in find_candidates(text) if c.url == CAT]
        assert strip_urls(text, confirmed) == f"and {CAT}.bak"

    def test_scheme_less_occurrence_removed(self):
        text = "pic: cdn.example.com/cat.png"
        assert strip_urls(text, find_candidates(text)) == "pic:"
