from backend.biblehub_linker.utils.link_builder import LinkBuilder, LinkResult
from backend.biblehub_linker.utils.rewriter import FragmentRewriter, RewriteResult, rewrite

JOHN_ANCHOR = (
    '<a href="https://biblehub.com/john/3-16.htm" target="_blank" rel="noopener noreferrer">'
    '<span style="white-space: nowrap">John 3:16</span></a>'
)


def test_text_without_citations_is_unchanged():
    text = "Nothing here but <plain> prose & numbers like 3:16."
    result = rewrite(text)
    assert result == RewriteResult(changed=False, new_markup=text)
    assert result.new_markup is text


def test_empty_text():
    assert rewrite("") == RewriteResult(changed=False, new_markup="")


def test_citation_is_replaced_with_anchor():
    result = rewrite("See John 3:16.")
    assert result.changed
    assert result.new_markup == f"See {JOHN_ANCHOR}."
    assert result.links == (LinkResult(href="https://biblehub.com/john/3-16.htm", display_text="John 3:16"),)


def test_surrounding_text_is_escaped():
    result = rewrite("a < b & John 3:16")
    assert result.new_markup == f"a &lt; b &amp; {JOHN_ANCHOR}"


def test_display_text_replaces_matched_text():
    result = rewrite("Read Ps 23 (NIV) tonight")
    assert result.links[0].display_text == "Psalms 23 NIV"
    assert result.links[0].href == "https://biblehub.com/niv/psalms/23.htm"
    assert result.new_markup.endswith("</a> tonight")
    assert "(NIV)" not in result.new_markup


def test_multiple_citations():
    result = rewrite("Gen 1:1; 2 Thess 3 and 1 Cor 13:4-7 NIV")
    assert [link.href for link in result.links] == [
        "https://biblehub.com/genesis/1-1.htm",
        "https://biblehub.com/nlt/2_thessalonians/3.htm",
        "https://biblehub.com/niv/1_corinthians/13.htm",
    ]
    assert result.new_markup.count("<a ") == 3


def test_skipped_match_stays_plain_text():
    text = "Samuel 3 is not linked"
    assert rewrite(text) == RewriteResult(changed=False, new_markup=text)

    result = rewrite("Samuel 3 and John 3:16")
    assert result.new_markup == f"Samuel 3 and {JOHN_ANCHOR}"


class FailingBuilder(LinkBuilder):
    def build(self, citation):
        if citation.book == "genesis":
            raise ValueError("boom")
        return super().build(citation)


def test_failing_match_does_not_affect_others():
    rewriter = FragmentRewriter(builder=FailingBuilder())
    result = rewriter.rewrite("Gen 1:1 then John 3:16")
    assert result.changed
    assert result.new_markup == f"Gen 1:1 then {JOHN_ANCHOR}"


def test_has_citations():
    rewriter = FragmentRewriter()
    assert rewriter.has_citations("Ps 23")
    assert not rewriter.has_citations("psalms")
    assert not rewriter.has_citations("")


def test_iter_links():
    linked = list(FragmentRewriter().iter_links("John 3:16 and Ps 23"))
    assert [item.match.text for item in linked] == ["John 3:16", "Ps 23"]
    assert linked[1].citation.book == "psalms"
