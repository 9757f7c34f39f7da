"""
announcements/rendering.py

Plain text → safe HTML for the feed: urlize escapes and links, then line breaks.
"""
from django.template.defaultfilters import linebreaksbr
from django.utils.html import urlize


def render_text(text) -> str:
    return linebreaksbr(urlize(text or "", nofollow=True, autoescape=True), autoescape=False)
