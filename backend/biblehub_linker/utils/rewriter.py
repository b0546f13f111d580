import html
import logging
from dataclasses import dataclass
from functools import lru_cache
from re import Pattern
from typing import Iterator, Optional, Tuple

from ..config import Settings, get_settings
from .books import ALIAS_TABLE, AliasTable
from .link_builder import LinkBuilder, LinkResult
from .reference_parser import CITATION_PATTERN, Citation, RawMatch, resolve_match, scan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkedCitation:
    match: RawMatch
    citation: Citation
    link: LinkResult


@dataclass(frozen=True)
class RewriteResult:
    changed: bool
    new_markup: str
    links: Tuple[LinkResult, ...] = ()


class FragmentRewriter:
    """Replaces citations in one plain-text fragment with anchor markup."""

    def __init__(
        self,
        pattern: Pattern[str] = CITATION_PATTERN,
        table: AliasTable = ALIAS_TABLE,
        builder: Optional[LinkBuilder] = None,
    ):
        self.pattern = pattern
        self.table = table
        self.builder = builder or LinkBuilder()

    @classmethod
    def from_settings(cls, settings: Settings) -> "FragmentRewriter":
        builder = LinkBuilder(
            base_url=settings.base_url,
            default_version=settings.default_version,
            target=settings.link_target,
            rel=settings.link_rel,
        )
        return cls(builder=builder)

    def has_citations(self, text: str) -> bool:
        return bool(text) and self.pattern.search(text) is not None

    def iter_links(self, text: str) -> Iterator[LinkedCitation]:
        for raw in scan(text, self.pattern):
            try:
                citation = resolve_match(raw, self.table)
                if citation is None:
                    continue
                link = self.builder.build(citation)
            except ValueError:
                logger.warning("Leaving '%s' unlinked", raw.text, exc_info=True)
                continue
            yield LinkedCitation(match=raw, citation=citation, link=link)

    def rewrite(self, text: str) -> RewriteResult:
        if not self.has_citations(text):
            return RewriteResult(changed=False, new_markup=text)

        pieces = []
        links = []
        last = 0
        for linked in self.iter_links(text):
            pieces.append(html.escape(text[last : linked.match.start], quote=False))
            pieces.append(self.builder.anchor(linked.link))
            links.append(linked.link)
            last = linked.match.end

        if not links:
            return RewriteResult(changed=False, new_markup=text)

        pieces.append(html.escape(text[last:], quote=False))
        return RewriteResult(changed=True, new_markup="".join(pieces), links=tuple(links))


@lru_cache()
def get_default_rewriter() -> FragmentRewriter:
    return FragmentRewriter.from_settings(get_settings())


def rewrite(text: str) -> RewriteResult:
    return get_default_rewriter().rewrite(text)
