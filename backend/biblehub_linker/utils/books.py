import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

# Canonical id -> abbreviations. Ids double as biblehub.com path segments once
# spaces become underscores, so they follow the site's naming ("songs", "psalms").
BOOK_TABLE: Sequence[Tuple[str, Sequence[str]]] = (
    ("genesis", ("gen", "gn")),
    ("exodus", ("ex", "exo", "exod")),
    ("leviticus", ("lev",)),
    ("numbers", ("num",)),
    ("deuteronomy", ("deut", "dt")),
    ("joshua", ("josh", "jos")),
    ("judges", ("judg", "jdg")),
    ("ruth", ("rut",)),
    ("1 samuel", ("1 sam", "1sam", "1 sa")),
    ("2 samuel", ("2 sam", "2sam", "2 sa")),
    ("1 kings", ("1 kgs", "1kgs", "1 ki")),
    ("2 kings", ("2 kgs", "2kgs", "2 ki")),
    ("1 chronicles", ("1 chron", "1 chr", "1chr")),
    ("2 chronicles", ("2 chron", "2 chr", "2chr")),
    ("ezra", ("ezr",)),
    ("nehemiah", ("neh",)),
    ("esther", ("esth", "est")),
    ("job", ("jb",)),
    ("psalms", ("psalm", "psa", "pss", "ps")),
    ("proverbs", ("prov", "pro", "pr")),
    ("ecclesiastes", ("eccles", "eccl", "ecc", "qoh")),
    ("songs", ("song of solomon", "song of songs", "canticles", "song", "sos")),
    ("isaiah", ("isa",)),
    ("jeremiah", ("jer",)),
    ("lamentations", ("lam",)),
    ("ezekiel", ("ezek", "eze")),
    ("daniel", ("dan", "dn")),
    ("hosea", ("hos",)),
    ("joel", ("jl",)),
    ("amos", ()),
    ("obadiah", ("obad",)),
    ("jonah", ("jon", "jnh")),
    ("micah", ("mic",)),
    ("nahum", ("nah",)),
    ("habakkuk", ("hab",)),
    ("zephaniah", ("zeph", "zep")),
    ("haggai", ("hag",)),
    ("zechariah", ("zech", "zec")),
    ("malachi", ("mal",)),
    ("matthew", ("matt", "mat", "mt")),
    ("mark", ("mrk", "mk", "mr")),
    ("luke", ("lk",)),
    ("john", ("joh", "jhn", "jn")),
    ("acts", ()),
    ("romans", ("rom",)),
    ("1 corinthians", ("1 cor", "1cor", "1 co", "1co")),
    ("2 corinthians", ("2 cor", "2cor", "2 co", "2co")),
    ("galatians", ("gal",)),
    ("ephesians", ("eph",)),
    ("philippians", ("phil", "php")),
    ("colossians", ("col",)),
    ("1 thessalonians", ("1 thess", "1 thes", "1thess", "1 th", "1th")),
    ("2 thessalonians", ("2 thess", "2 thes", "2thess", "2 th", "2th")),
    ("1 timothy", ("1 tim", "1tim", "1 ti")),
    ("2 timothy", ("2 tim", "2tim", "2 ti")),
    ("titus", ("tit",)),
    ("philemon", ("philem", "phm")),
    ("hebrews", ("heb",)),
    ("james", ("jas", "jam")),
    ("1 peter", ("1 pet", "1pet", "1 pe", "1pe")),
    ("2 peter", ("2 pet", "2pet", "2 pe", "2pe")),
    ("1 john", ("1 jn", "1jn", "1 jo", "1jo")),
    ("2 john", ("2 jn", "2jn", "2 jo", "2jo")),
    ("3 john", ("3 jn", "3jn", "3 jo", "3jo")),
    ("jude", ("jud",)),
    ("revelation", ("revelations", "rev")),
)

# Book families typed as "<numeral> <base>", e.g. "2 Sam". A base is only a
# book once the numeral is attached; the Johannine letters reuse "john".
PREFIX_BASES: Sequence[Tuple[str, Sequence[str]]] = (
    ("samuel", ("sam",)),
    ("kings", ("kgs",)),
    ("chronicles", ("chron", "chr")),
    ("corinthians", ("cor",)),
    ("thessalonians", ("thess", "thes")),
    ("timothy", ("tim",)),
    ("peter", ("pet",)),
)

NUMBERED_ID = re.compile(r"^[123]\s")


def normalize_spelling(spelling: str) -> str:
    return " ".join(spelling.lower().split())


class AliasTable:
    """Case-insensitive lookup from any known spelling to a canonical book id.

    The table is built once and never mutated. Construction fails loudly if a
    spelling would map to two different ids.
    """

    def __init__(
        self,
        books: Iterable[Tuple[str, Iterable[str]]] = BOOK_TABLE,
        prefix_bases: Iterable[Tuple[str, Iterable[str]]] = PREFIX_BASES,
    ):
        self._aliases: Dict[str, str] = {}
        self._spellings: Dict[str, Tuple[str, ...]] = {}
        self._books: List[str] = []
        self._bases: List[str] = []

        for canonical_id, abbreviations in books:
            self._add(canonical_id, abbreviations)
            self._books.append(normalize_spelling(canonical_id))
        for canonical_id, abbreviations in prefix_bases:
            self._add(canonical_id, abbreviations)
            self._bases.append(normalize_spelling(canonical_id))

    def _add(self, canonical_id: str, abbreviations: Iterable[str]) -> None:
        key = normalize_spelling(canonical_id)
        spellings = [key]
        spellings.extend(normalize_spelling(abbr) for abbr in abbreviations)
        for spelling in spellings:
            existing = self._aliases.get(spelling)
            if existing is not None and existing != key:
                raise ValueError(f"Spelling '{spelling}' maps to both '{existing}' and '{key}'")
            self._aliases[spelling] = key
        self._spellings[key] = tuple(dict.fromkeys(spellings))

    def resolve(self, spelling: str) -> Optional[str]:
        if not spelling:
            return None
        return self._aliases.get(normalize_spelling(spelling))

    def __contains__(self, spelling: object) -> bool:
        return isinstance(spelling, str) and self.resolve(spelling) is not None

    def books(self) -> List[str]:
        """The canonical books in canonical order (prefix bases excluded)."""
        return list(self._books)

    def is_prefix_base(self, canonical_id: str) -> bool:
        return normalize_spelling(canonical_id) in self._bases

    def spellings_for(self, canonical_id: str) -> Tuple[str, ...]:
        return self._spellings.get(normalize_spelling(canonical_id), ())

    def spellings_longest_first(self) -> List[str]:
        # Regex alternation takes the first branch that matches, so the most
        # specific spelling has to come first ("jonah" before "jon").
        return sorted(self._aliases, key=lambda s: (-len(s), s))


def is_numbered(canonical_id: str) -> bool:
    return bool(NUMBERED_ID.match(canonical_id))


def display_book_name(canonical_id: str) -> str:
    """Title-case a canonical id, leaving numerals bare: 1 corinthians -> 1 Corinthians."""
    return " ".join(word if word.isdigit() else word.capitalize() for word in canonical_id.split())


ALIAS_TABLE = AliasTable()
