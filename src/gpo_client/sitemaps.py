"""
Pull session tokens and bill ids out of GPO BILLSTATUS sitemaps.

The sitemap index lists one ``<loc>`` per session and bill type, e.g.
``https://www.gpo.gov/smap/bulkdata/BILLSTATUS/115hr/sitemap.xml``; a per-type
sitemap lists one ``<loc>`` per bill, e.g.
``https://www.gpo.gov/fdsys/bulkdata/BILLSTATUS/115/hr/BILLSTATUS-115hr1.xml``.
"""
import re
from typing import List, Literal, Sequence

from .documents import Node, find
from .models import BILL_TYPES

Mode = Literal["index", "leaf"]

INDEX_MARKER = "BILLSTATUS/"
LEAF_MARKER = "BILLSTATUS-"


def _locations(tree: Node) -> List[str]:
    return [loc.first_scalar() for loc in find(tree, "loc")]


def _type_splitter(bill_types: Sequence[str]) -> "re.Pattern[str]":
    return re.compile("|".join(re.escape(t) for t in bill_types))


def session_from_location(url: str, bill_types: Sequence[str] = BILL_TYPES) -> str:
    tail = url.rsplit(INDEX_MARKER, 1)[-1]
    return _type_splitter(bill_types).split(tail, maxsplit=1)[0]


def bill_id_from_location(url: str) -> str:
    tail = url.rsplit(LEAF_MARKER, 1)[-1]
    return tail.partition(".xml")[0]


def extract(tree: Node, mode: Mode, bill_types: Sequence[str] = BILL_TYPES) -> List[str]:
    """
    Extract session tokens (``mode="index"``) or bare bill ids (``mode="leaf"``)
    from a parsed sitemap, in document order. Duplicates are kept.
    """
    if mode == "index":
        return [session_from_location(url, bill_types) for url in _locations(tree)]
    if mode == "leaf":
        return [bill_id_from_location(url) for url in _locations(tree)]
    raise ValueError(f"Unknown sitemap mode {mode!r}; expected 'index' or 'leaf'.")
