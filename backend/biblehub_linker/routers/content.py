from fastapi import APIRouter, Depends

from ..dependencies import get_rewriter
from ..schemas import (
    ContentRequest,
    LinkedContentResponse,
    LinkRead,
    MarkdownRequest,
    MarkdownResponse,
    TextRewriteResponse,
)
from ..utils.document import link_document
from ..utils.markdown import render_markdown_document
from ..utils.rewriter import FragmentRewriter

router = APIRouter(prefix="/content", tags=["content"])


@router.post("/html", response_model=LinkedContentResponse)
def link_html(payload: ContentRequest, rewriter: FragmentRewriter = Depends(get_rewriter)) -> LinkedContentResponse:
    result = link_document(payload.content, rewriter=rewriter)
    return LinkedContentResponse(
        content=result.content,
        changed=result.changed,
        links=[LinkRead.model_validate(link) for link in result.links],
    )


@router.post("/text", response_model=TextRewriteResponse)
def link_text(payload: ContentRequest, rewriter: FragmentRewriter = Depends(get_rewriter)) -> TextRewriteResponse:
    result = rewriter.rewrite(payload.content)
    return TextRewriteResponse(
        changed=result.changed,
        new_markup=result.new_markup,
        links=[LinkRead.model_validate(link) for link in result.links],
    )


@router.post("/markdown", response_model=MarkdownResponse)
def link_markdown(payload: MarkdownRequest) -> MarkdownResponse:
    result = render_markdown_document(payload.content_markdown)
    return MarkdownResponse(
        content_html=result.content,
        changed=result.changed,
        links=[LinkRead.model_validate(link) for link in result.links],
    )
