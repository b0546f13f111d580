import logging
import re
from dataclasses import dataclass
from re import Pattern
from typing import Iterator, List, Optional, Sequence, Tuple

from .books import ALIAS_TABLE, AliasTable, is_numbered, normalize_spelling

logger = logging.getLogger(__name__)

BIBLE_VERSIONS: Sequence[str] = ("KJV", "NIV", "NLT", "ESV", "NASB", "CSB", "NET", "WEB")

VERSE_EXPR_REGEX = re.compile(r"^(?P<verse>\d+)(?:-(?P<endverse>\d+))?$")


def _spelling_regex(spelling: str) -> str:
    # "song of solomon" also matches "Song  of\nSolomon"
    return r"\s+".join(re.escape(word) for word in spelling.split())


def build_citation_pattern(
    table: AliasTable = ALIAS_TABLE, versions: Sequence[str] = BIBLE_VERSIONS
) -> Pattern[str]:
    """Compile the single pattern that finds citation-shaped spans.

    Groups: ``prefix`` (separate numeral), ``book``, ``chapter``, ``verse``
    (``16`` or ``4-7``) and ``version``.
    """
    book_regex = "|".join(_spelling_regex(s) for s in table.spellings_longest_first())
    version_regex = "|".join(re.escape(v) for v in versions)
    return re.compile(
        r"\b(?:(?P<prefix>[123])\s)?"
        rf"(?P<book>{book_regex})"
        r"[\s.]+"
        r"(?P<chapter>\d+)"
        r"(?::(?P<verse>\d+(?:-\d+)?))?"
        rf"(?:[\s\-\[(]*(?P<version>{version_regex})\b[\])]*)?",
        re.IGNORECASE,
    )


CITATION_PATTERN = build_citation_pattern()


@dataclass(frozen=True)
class RawMatch:
    book_token: str
    chapter: str
    numeric_prefix: Optional[str] = None
    verse_expr: Optional[str] = None
    version_token: Optional[str] = None
    start: int = 0
    end: int = 0
    text: str = ""

    @classmethod
    def from_match(cls, match: "re.Match[str]") -> "RawMatch":
        return cls(
            book_token=match.group("book"),
            chapter=match.group("chapter"),
            numeric_prefix=match.group("prefix"),
            verse_expr=match.group("verse"),
            version_token=match.group("version"),
            start=match.start(),
            end=match.end(),
            text=match.group(0),
        )


@dataclass(frozen=True)
class Citation:
    book: str
    chapter: int
    verse: Optional[int] = None
    verse_range_end: Optional[int] = None
    version: Optional[str] = None

    def __post_init__(self) -> None:
        if self.chapter < 1:
            raise ValueError(f"Chapter must be positive, got {self.chapter}")
        if self.verse_range_end is not None and self.verse is None:
            raise ValueError("A verse range end requires a starting verse")
        if self.version is not None and self.version not in BIBLE_VERSIONS:
            raise ValueError(f"Unsupported Bible version '{self.version}'")

    @property
    def is_single_verse(self) -> bool:
        return self.verse is not None and self.verse_range_end is None

    @property
    def verse_label(self) -> Optional[str]:
        if self.verse is None:
            return None
        if self.verse_range_end is None:
            return str(self.verse)
        return f"{self.verse}-{self.verse_range_end}"


def scan(text: str, pattern: Pattern[str] = CITATION_PATTERN) -> Iterator[RawMatch]:
    """Yield every non-overlapping citation-shaped span, left to right."""
    if not text:
        return
    for match in pattern.finditer(text):
        yield RawMatch.from_match(match)


def resolve_book(
    book_token: str, numeric_prefix: Optional[str] = None, table: AliasTable = ALIAS_TABLE
) -> Optional[str]:
    token = normalize_spelling(book_token)
    book = table.resolve(token)
    if book is None:
        logger.warning("Book spelling '%s' is not in the alias table; using it verbatim", token)
        book = token

    # A numeral that belongs to the book itself beats one typed before it,
    # otherwise "2 1 Thess" would become "2 1 thessalonians".
    if is_numbered(book):
        return book
    if numeric_prefix:
        return f"{numeric_prefix} {book}"
    if table.is_prefix_base(book):
        return None
    return book


def parse_verse_expr(verse_expr: str) -> Tuple[int, Optional[int]]:
    match = VERSE_EXPR_REGEX.match(verse_expr.strip())
    if not match:
        raise ValueError(f"Malformed verse expression '{verse_expr}'")
    verse = int(match.group("verse"))
    endverse = match.group("endverse")
    return verse, int(endverse) if endverse else None


def resolve_match(raw: RawMatch, table: AliasTable = ALIAS_TABLE) -> Optional[Citation]:
    """Turn one raw match into a Citation.

    Returns None when the match should stay plain text: a numbered-book base
    name with no numeral in front of it ("Samuel 3"), or chapter 0.
    """
    book = resolve_book(raw.book_token, raw.numeric_prefix, table)
    if book is None:
        logger.debug("Skipping '%s': numbered book without a numeral", raw.text)
        return None

    chapter = int(raw.chapter)
    if chapter < 1:
        logger.debug("Skipping '%s': chapter %s", raw.text, chapter)
        return None

    verse: Optional[int] = None
    verse_range_end: Optional[int] = None
    if raw.verse_expr:
        verse, verse_range_end = parse_verse_expr(raw.verse_expr)

    version = raw.version_token.upper() if raw.version_token else None

    return Citation(
        book=book,
        chapter=chapter,
        verse=verse,
        verse_range_end=verse_range_end,
        version=version,
    )


def parse_citations(
    text: str, pattern: Pattern[str] = CITATION_PATTERN, table: AliasTable = ALIAS_TABLE
) -> List[Tuple[RawMatch, Citation]]:
    citations: List[Tuple[RawMatch, Citation]] = []
    for raw in scan(text, pattern):
        try:
            citation = resolve_match(raw, table)
        except ValueError:
            logger.warning("Could not resolve '%s'", raw.text[:80], exc_info=True)
            continue
        if citation:
            citations.append((raw, citation))
    return citations
