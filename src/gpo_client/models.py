from dataclasses import dataclass
from typing import Sequence, Tuple

from .errors import ParseError

# Longer tokens must come before any shorter token they contain
# ("hres" before "hr", "sres" before "s", ...); parse_bill_id takes the first hit.
BILL_TYPES: Tuple[str, ...] = ("hjres", "sjres", "hconres", "sconres", "hres", "sres", "hr", "s")


@dataclass(frozen=True)
class BillIdentifier:
    session: str   # congress number, e.g. "113"
    type: str      # one of BILL_TYPES
    number: str

    @property
    def id(self) -> str:
        return f"{self.session}{self.type}{self.number}"

    @classmethod
    def parse(cls, bill_id: str, bill_types: Sequence[str] = BILL_TYPES) -> "BillIdentifier":
        return parse_bill_id(bill_id, bill_types)


@dataclass(frozen=True)
class ActionRecord:
    date: str           # actionDate as published, e.g. "2013-03-13"
    text: str
    bill: BillIdentifier
    bill_id: str        # composite id the record was requested with


def parse_bill_id(bill_id: str, bill_types: Sequence[str] = BILL_TYPES) -> BillIdentifier:
    """
    Split a composite bill id such as "113sjres11" into session, type and number.

    The first token in ``bill_types`` that occurs with something on both sides
    of it wins; no longest-match search is done.

    Raises:
        ParseError: no token splits the id, or the split is not digits/type/digits.
    """
    for bill_type in bill_types:
        session, sep, number = bill_id.partition(bill_type)
        if not sep or not session or not number:
            continue
        if not (session.isdigit() and number.isdigit()):
            raise ParseError(f"Bill id {bill_id!r} split as {session!r}/{bill_type!r}/{number!r}")
        return BillIdentifier(session=session, type=bill_type, number=number)
    raise ParseError(f"Bill id {bill_id!r} does not contain a known bill type")
