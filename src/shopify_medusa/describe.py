from __future__ import annotations
import logging
import re

from bs4 import BeautifulSoup
from bs4.element import Comment
from markdownify import ATX, MarkdownConverter


log = logging.getLogger(__name__)

DROP_TAGS = ["script", "style", "head", "noscript"]

_converter = MarkdownConverter(heading_style=ATX, bullets="*")


def _fallback_text(html: str) -> str:
    text = re.sub(r"(?s)<[^>]*>", " ", html)
    return re.sub(r"[ \t]+", " ", text).strip()


def html_to_markdown(html: str) -> str:
    """Render an HTML fragment as Markdown.

    Headings become ATX (``#`` .. ``######``), emphasis, links, images and
    lists map to their Markdown forms, and script/style content is dropped.
    Malformed markup is parsed on a best effort basis and never raises.
    """
    if not html or not html.strip():
        return ""
    try:
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup.find_all(DROP_TAGS):
            tag.decompose()
        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()
        text = _converter.convert_soup(soup)
    except Exception as e:
        log.warning("html_to_markdown: falling back to tag stripping: %s", e)
        return _fallback_text(html)
    return re.sub(r"\n{3,}", "\n\n", text).strip()
