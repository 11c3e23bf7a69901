"""
File extension resolution from media URLs
"""

from typing import Optional


# Order matters: the first token contained in the URL wins
KNOWN_FORMATS = ("jpeg", "jpg", "png", "gif", "webm", "avi", "mp4", "mpg", "mpeg")


def get_format(url: str) -> Optional[str]:
    """Return the extension (with leading dot) of the first known token found in url"""
    for token in KNOWN_FORMATS:
        if token in url:
            return f".{token}"
    return None
