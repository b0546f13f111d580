import html
from dataclasses import dataclass

from .books import display_book_name
from .reference_parser import BIBLE_VERSIONS, Citation

DEFAULT_BASE_URL = "https://biblehub.com"
DEFAULT_VERSION = "nlt"
LINK_TARGET = "_blank"
LINK_REL = "noopener noreferrer"


@dataclass(frozen=True)
class LinkResult:
    href: str
    display_text: str


def book_path(book: str) -> str:
    """Path segment for a canonical id: 1 john -> 1_john."""
    return "_".join(book.lower().split())


class LinkBuilder:
    """Builds biblehub.com URLs and anchor markup for citations.

    URL shape, first rule that applies wins:

    * a single verse: the parallel view ``/{book}/{chapter}-{verse}.htm``,
      whatever version was asked for;
    * an explicit version: ``/{version}/{book}/{chapter}.htm`` (a verse range
      is not carried into the URL);
    * otherwise the default version's chapter page.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        default_version: str = DEFAULT_VERSION,
        target: str = LINK_TARGET,
        rel: str = LINK_REL,
    ):
        if default_version.upper() not in BIBLE_VERSIONS:
            raise ValueError(f"Unsupported default version '{default_version}'")
        self.base_url = base_url.rstrip("/")
        self.default_version = default_version.lower()
        self.target = target
        self.rel = rel

    def href(self, citation: Citation) -> str:
        path = book_path(citation.book)
        if citation.is_single_verse:
            return f"{self.base_url}/{path}/{citation.chapter}-{citation.verse}.htm"
        if citation.version:
            return f"{self.base_url}/{citation.version.lower()}/{path}/{citation.chapter}.htm"
        return f"{self.base_url}/{self.default_version}/{path}/{citation.chapter}.htm"

    def display_text(self, citation: Citation) -> str:
        text = f"{display_book_name(citation.book)} {citation.chapter}"
        if citation.verse_label:
            text += f":{citation.verse_label}"
        if citation.version:
            text += f" {citation.version}"
        return text

    def build(self, citation: Citation) -> LinkResult:
        return LinkResult(href=self.href(citation), display_text=self.display_text(citation))

    def anchor(self, link: LinkResult) -> str:
        return (
            f'<a href="{html.escape(link.href)}" target="{html.escape(self.target)}" '
            f'rel="{html.escape(self.rel)}">'
            f'<span style="white-space: nowrap">{html.escape(link.display_text, quote=False)}</span></a>'
        )
