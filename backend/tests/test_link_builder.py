import pytest

from backend.biblehub_linker.utils.link_builder import LinkBuilder, LinkResult, book_path
from backend.biblehub_linker.utils.reference_parser import Citation

builder = LinkBuilder()


def test_single_verse_uses_parallel_view():
    link = builder.build(Citation(book="john", chapter=3, verse=16))
    assert link == LinkResult(href="https://biblehub.com/john/3-16.htm", display_text="John 3:16")


def test_single_verse_ignores_version_in_url():
    link = builder.build(Citation(book="john", chapter=3, verse=16, version="NIV"))
    assert link.href == "https://biblehub.com/john/3-16.htm"
    assert link.display_text == "John 3:16 NIV"


def test_range_with_version_links_version_chapter():
    link = builder.build(Citation(book="1 corinthians", chapter=13, verse=4, verse_range_end=7, version="NIV"))
    assert link.href == "https://biblehub.com/niv/1_corinthians/13.htm"
    assert link.display_text == "1 Corinthians 13:4-7 NIV"


def test_chapter_with_version():
    link = builder.build(Citation(book="psalms", chapter=23, version="ESV"))
    assert link.href == "https://biblehub.com/esv/psalms/23.htm"
    assert link.display_text == "Psalms 23 ESV"


def test_chapter_only_uses_default_version():
    link = builder.build(Citation(book="psalms", chapter=23))
    assert link.href == "https://biblehub.com/nlt/psalms/23.htm"
    assert link.display_text == "Psalms 23"


def test_range_without_version_uses_default_version():
    link = builder.build(Citation(book="john", chapter=3, verse=16, verse_range_end=18))
    assert link.href == "https://biblehub.com/nlt/john/3.htm"
    assert link.display_text == "John 3:16-18"


def test_numbered_book_path():
    link = builder.build(Citation(book="2 thessalonians", chapter=3))
    assert link.href == "https://biblehub.com/nlt/2_thessalonians/3.htm"
    assert book_path("1 John") == "1_john"


def test_custom_base_url_and_default_version():
    custom = LinkBuilder(base_url="https://example.org/", default_version="KJV")
    link = custom.build(Citation(book="genesis", chapter=1))
    assert link.href == "https://example.org/kjv/genesis/1.htm"


def test_unknown_default_version():
    with pytest.raises(ValueError):
        LinkBuilder(default_version="msg")


def test_anchor_markup():
    link = LinkResult(href="https://biblehub.com/john/3-16.htm", display_text="John 3:16")
    assert builder.anchor(link) == (
        '<a href="https://biblehub.com/john/3-16.htm" target="_blank" rel="noopener noreferrer">'
        '<span style="white-space: nowrap">John 3:16</span></a>'
    )


def test_anchor_escapes_values():
    link = LinkResult(href='https://biblehub.com/"x"', display_text="<b>")
    markup = builder.anchor(link)
    assert 'href="https://biblehub.com/&quot;x&quot;"' in markup
    assert "&lt;b&gt;" in markup
