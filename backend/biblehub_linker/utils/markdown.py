from bleach import clean
from markdown_it import MarkdownIt

from .document import LinkedDocument, link_document

md = MarkdownIt("commonmark")

ALLOWED_TAGS = [
    "p",
    "ul",
    "ol",
    "li",
    "strong",
    "em",
    "blockquote",
    "code",
    "pre",
    "a",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "span",
    "br",
]
ALLOWED_ATTRIBUTES = {"a": ["href", "title", "rel", "target"]}


def sanitize_html(html: str) -> str:
    return clean(html, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, strip=True)


def render_markdown_document(text: str) -> LinkedDocument:
    """Render markdown, sanitize it, then link scripture citations.

    Linking runs after sanitizing so the generated no-wrap span keeps its
    style attribute; code spans and blocks are never linked.
    """
    html = sanitize_html(md.render(text or ""))
    return link_document(html)


def render_markdown(text: str) -> str:
    return render_markdown_document(text).content
