"""Markdown text helpers."""

import re

# ![alt text](target) - alt text and target are matched lazily, so the alt
# text may itself contain brackets.
_IMAGE_PATTERN = re.compile(r"!\[(?P<alt>.*?)\]\((?P<target>.*?)\)")


def _image_url(target: str) -> str:
    """URL part of an image target, without its ``<...>`` wrapper or title."""
    target = target.strip()
    if target.startswith("<") and ">" in target:
        return target[1 : target.index(">")]
    return target.split(maxsplit=1)[0] if target else ""


def extract_embedded_images(text: str | None) -> list[dict[str, str]]:
    """Extract markdown image links from text, in source order.

    Args:
        text: Markdown text, typically an issue description

    Returns:
        A list of ``{"url": ..., "altText": ...}`` dicts; empty when the text
        is empty or contains no images.
    """
    if not text:
        return []
    return [
        {"url": _image_url(match.group("target")), "altText": match.group("alt")}
        for match in _IMAGE_PATTERN.finditer(text)
    ]
