from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_alias_table, get_rewriter
from ..schemas import BookRead, CitationRead, ParseResponse
from ..utils.books import AliasTable, display_book_name
from ..utils.rewriter import FragmentRewriter

router = APIRouter(prefix="/references", tags=["references"])


def serialize_book(table: AliasTable, book: str) -> BookRead:
    return BookRead(
        id=book,
        display_name=display_book_name(book),
        spellings=list(table.spellings_for(book)),
        prefix_base=table.is_prefix_base(book),
    )


@router.get("/books", response_model=List[BookRead])
def list_books(table: AliasTable = Depends(get_alias_table)) -> List[BookRead]:
    return [serialize_book(table, book) for book in table.books()]


@router.get("/books/{spelling}", response_model=BookRead)
def read_book(spelling: str, table: AliasTable = Depends(get_alias_table)) -> BookRead:
    book = table.resolve(spelling)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return serialize_book(table, book)


@router.get("/parse", response_model=ParseResponse)
def parse_text(text: str = "", rewriter: FragmentRewriter = Depends(get_rewriter)) -> ParseResponse:
    citations = [
        CitationRead(
            matched_text=linked.match.text,
            book=linked.citation.book,
            chapter=linked.citation.chapter,
            verse=linked.citation.verse,
            verse_range_end=linked.citation.verse_range_end,
            version=linked.citation.version,
            href=linked.link.href,
            display_text=linked.link.display_text,
        )
        for linked in rewriter.iter_links(text)
    ]
    return ParseResponse(text=text, citations=citations)
