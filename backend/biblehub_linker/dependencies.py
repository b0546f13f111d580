from .utils.books import ALIAS_TABLE, AliasTable
from .utils.rewriter import FragmentRewriter, get_default_rewriter


def get_alias_table() -> AliasTable:
    return ALIAS_TABLE


def get_rewriter() -> FragmentRewriter:
    return get_default_rewriter()
