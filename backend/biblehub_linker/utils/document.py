import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, NavigableString
from bs4.builder import ParserRejectedMarkup
from bs4.element import PreformattedString

from ..config import get_settings
from .link_builder import LinkResult
from .rewriter import FragmentRewriter, get_default_rewriter

logger = logging.getLogger(__name__)

# Browsers render the content of these as literal text, never as markup.
RAW_TEXT_TAGS = frozenset({"title", "textarea"})


@dataclass(frozen=True)
class LinkedDocument:
    content: str
    changed: bool
    links: Tuple[LinkResult, ...] = ()


def iter_eligible_text_nodes(soup: BeautifulSoup, excluded_tags: Iterable[str]) -> List[NavigableString]:
    """Text nodes that are not inside any of ``excluded_tags``.

    Text inside raw-text elements (``title``, ``textarea``) and comments,
    CDATA, doctypes and the like are always skipped. The result is a list
    so callers can replace nodes while walking it.
    """
    excluded = {tag.lower() for tag in excluded_tags} | RAW_TEXT_TAGS
    nodes: List[NavigableString] = []
    for node in soup.find_all(string=True):
        if isinstance(node, PreformattedString):
            continue
        if any(parent.name in excluded for parent in node.parents):
            continue
        nodes.append(node)
    return nodes


def splice_fragment(node: NavigableString, markup: str) -> bool:
    """Swap ``node`` for the parsed ``markup``; keep the node if parsing fails."""
    try:
        fragment = BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup:
        logger.warning("Could not parse replacement markup; keeping original text %r", str(node)[:80])
        return False
    node.replace_with(*list(fragment.contents))
    return True


def link_document(
    content: str,
    rewriter: Optional[FragmentRewriter] = None,
    excluded_tags: Optional[Iterable[str]] = None,
) -> LinkedDocument:
    if not content or not content.strip():
        return LinkedDocument(content=content, changed=False)

    rewriter = rewriter or get_default_rewriter()
    if excluded_tags is None:
        excluded_tags = get_settings().excluded_tags

    soup = BeautifulSoup(content, "html.parser")
    links: List[LinkResult] = []
    for node in iter_eligible_text_nodes(soup, excluded_tags):
        result = rewriter.rewrite(str(node))
        if not result.changed:
            continue
        if splice_fragment(node, result.new_markup):
            links.extend(result.links)

    if not links:
        return LinkedDocument(content=content, changed=False)

    logger.debug("Linked %s reference(s)", len(links))
    return LinkedDocument(content=str(soup), changed=True, links=tuple(links))


def link_bible_references(content: str, rewriter: Optional[FragmentRewriter] = None) -> str:
    """Link every scripture citation in an HTML string to biblehub.com.

    Text inside ``a``, ``pre``, ``code``, ``script`` and ``style`` is left
    alone, so running the output through again changes nothing.
    """
    return link_document(content, rewriter=rewriter).content
