from bs4 import BeautifulSoup

from galleryscraper.config import PLACEHOLDER_URL
from galleryscraper.extraction import (
    MEDIA_SELECTORS,
    PLACEHOLDER_MEDIA,
    extract_media,
    is_placeholder,
    media_from_url,
)
from galleryscraper.models import Media


def parse(html):
    return BeautifulSoup(html, "html.parser")


def test_image_selector_builds_media():
    media = extract_media(parse('<img id="image" src="https://example.com/a/b.png">'))

    assert media == Media(
        title="https:--example.com-a-b.png",
        url="https://example.com/a/b.png",
        file_type=".png",
    )


def test_video_source_is_used_when_no_image():
    html = """
    <video>
      <source type="video/webm" src="https://cdn.example.com/v/clip.webm">
    </video>
    """
    media = extract_media(parse(html))

    assert media.url == "https://cdn.example.com/v/clip.webm"
    assert media.file_type == ".webm"


def test_image_wins_over_video():
    html = """
    <source type="video/mp4" src="https://cdn.example.com/clip.mp4">
    <img id="image" src="https://cdn.example.com/still.gif">
    """
    assert extract_media(parse(html)).url == "https://cdn.example.com/still.gif"


def test_mp4_is_preferred_over_later_video_types():
    html = """
    <source type="video/avi" src="https://cdn.example.com/clip.avi">
    <source type="video/mp4" src="https://cdn.example.com/clip.mp4">
    """
    assert extract_media(parse(html)).file_type == ".mp4"


def test_no_match_returns_placeholder():
    media = extract_media(parse('<img id="thumbnail" src="https://cdn.example.com/t.png">'))

    assert media is PLACEHOLDER_MEDIA
    assert media.url == PLACEHOLDER_URL
    assert media.title == "placeholder"
    assert media.file_type == ".jpg"
    assert is_placeholder(media)


def test_element_without_src_falls_through_to_next_selector():
    html = """
    <img id="image">
    <source type="video/mpeg" src="https://cdn.example.com/clip.mpeg">
    """
    media = extract_media(parse(html))

    assert media.url == "https://cdn.example.com/clip.mpeg"
    assert media.file_type == ".mpeg"


def test_unknown_extension_uses_default_file_type():
    assert media_from_url("https://cdn.example.com/file.bmp").file_type == ".jpg"


def test_cascade_order():
    assert [s.css for s in MEDIA_SELECTORS] == [
        'img[id="image"]',
        'source[type="video/mp4"]',
        'source[type="video/mpeg"]',
        'source[type="video/mpg"]',
        'source[type="video/webm"]',
        'source[type="video/avi"]',
    ]
    assert [s.kind for s in MEDIA_SELECTORS] == ["image"] + ["video"] * 5
