from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BookRead(BaseModel):
    id: str
    display_name: str
    spellings: List[str] = Field(default_factory=list)
    prefix_base: bool = False


class LinkRead(BaseModel):
    href: str
    display_text: str

    model_config = ConfigDict(from_attributes=True)


class CitationRead(LinkRead):
    matched_text: str
    book: str
    chapter: int
    verse: Optional[int] = None
    verse_range_end: Optional[int] = None
    version: Optional[str] = None


class ParseResponse(BaseModel):
    text: str
    citations: List[CitationRead] = Field(default_factory=list)


class ContentRequest(BaseModel):
    content: str = ""


class MarkdownRequest(BaseModel):
    content_markdown: str = ""


class LinkedContentResponse(BaseModel):
    content: str
    changed: bool
    links: List[LinkRead] = Field(default_factory=list)


class TextRewriteResponse(BaseModel):
    changed: bool
    new_markup: str
    links: List[LinkRead] = Field(default_factory=list)


class MarkdownResponse(BaseModel):
    content_html: str
    changed: bool
    links: List[LinkRead] = Field(default_factory=list)
