import pytest

from galleryscraper.formats import KNOWN_FORMATS, get_format


@pytest.mark.parametrize("token", KNOWN_FORMATS)
def test_single_token_resolves_to_its_extension(token):
    assert get_format(f"https://cdn.example.com/images/1234/file.{token}") == f".{token}"


def test_url_without_known_token_has_no_format():
    assert get_format("https://cdn.example.com/images/1234/file.bmp") is None


def test_first_listed_token_wins_over_trailing_suffix():
    # "jpeg" is tested before "mpg", whatever the file suffix says
    assert get_format("https://cdn.example.com/mpg/picture.jpeg") == ".jpeg"
    assert get_format("https://cdn.example.com/png/clip.mp4") == ".png"


def test_jpeg_is_not_reported_as_jpg():
    assert get_format("https://cdn.example.com/a.jpeg") == ".jpeg"
