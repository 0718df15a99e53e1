#%%
from __future__ import annotations

import logging
import re
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Optional, Pattern, Sequence, Union

from tqdm import tqdm

from . import sitemaps
from .documents import Node, find_first, parse
from .errors import NoSessionFound
from .http import DEFAULT_BASE_URL, GPOHttp
from .models import BILL_TYPES, ActionRecord, BillIdentifier, parse_bill_id
from .results import Ok, Result, collect, returns_result
from .utils import logger_setup

SESSION_INDEX_PATH = "/smap/bulkdata/BILLSTATUS/sitemapindex.xml"
TYPE_SITEMAP_PATH = "/smap/bulkdata/BILLSTATUS/{session}{type}/sitemap.xml"
BILL_STATUS_PATH = "/fdsys/bulkdata/BILLSTATUS/{session}/{type}/BILLSTATUS-{session}{type}{number}.xml"


class GPOClient:
    """
    Read-only client for the GPO BILLSTATUS bulk-data sitemaps.

    Every public method returns ``Ok(value)`` or ``Err(error)`` (see gpo_client.results);
    call ``.unwrap()`` on the result to get the value or raise the error.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60,
        max_workers: int = 8,
        log_level: int = logging.INFO,
        http: Optional[GPOHttp] = None,
    ):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1. Got {max_workers}.")
        self.http = http or GPOHttp(base_url=base_url, timeout=timeout, log_level=log_level)
        self.max_workers = int(max_workers)
        self.bill_types = BILL_TYPES
        self.logger = logger_setup(logger_name="GPO Client", log_level=log_level)

    # ------------- helpers -------------
    def _fetch_tree(self, path: str) -> Node:
        return parse(self.http.get(path).unwrap())

    def _fan_out(
        self,
        fn: Callable[[Any], Result],
        items: Sequence[Any],
        *,
        continue_on_error: bool,
        show_progress: bool = False,
        desc: Optional[str] = None,
    ) -> List[Optional[Result]]:
        """
        Run ``fn`` for every item on the thread pool and wait for all of them.

        Results land in the slot of their input index, so the returned list is in
        input order whatever order the branches finish in. In fail-fast mode the
        first Err cancels branches that have not started; their slots stay None.
        """
        results: List[Optional[Result]] = [None] * len(items)
        if not items:
            return results

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as pool:
            futures: Dict[Future, int] = {pool.submit(fn, item): i for i, item in enumerate(items)}
            for fut in tqdm(as_completed(futures), total=len(futures), desc=desc, disable=not show_progress):
                if fut.cancelled():
                    continue
                res = fut.result()
                results[futures[fut]] = res
                if not res.ok and not continue_on_error:
                    cancelled = sum(f.cancel() for f in futures)
                    if cancelled:
                        self.logger.info(f"Cancelled {cancelled} pending request(s) after {res.error}")
        return results

    # ------------- bill ids -------------
    @returns_result
    def parse_bill_id(self, bill_id: str) -> BillIdentifier:
        """Split a composite id such as "113sjres11" into session, type and number."""
        return parse_bill_id(bill_id, self.bill_types)

    # ------------- sessions -------------
    @returns_result
    def current_session(self) -> str:
        """
        Determine the current congressional session from the sitemap index.

        Session tokens are compared as integers, so "100" is newer than "99".
        """
        tree = self._fetch_tree(SESSION_INDEX_PATH)
        tokens = sitemaps.extract(tree, "index", self.bill_types)
        sessions = [t for t in tokens if t.isdigit()]
        if len(sessions) != len(tokens):
            self.logger.debug(f"Ignoring non-numeric session tokens: {sorted(set(tokens) - set(sessions))}")
        if not sessions:
            raise NoSessionFound(f"No session tokens in {SESSION_INDEX_PATH}")
        return max(sessions, key=int)

    # ------------- bill lists -------------
    @returns_result
    def list_bills(self, session: str, bill_type: str) -> List[str]:
        """
        List the ids of every bill of ``bill_type`` in ``session``, in sitemap order.

        Example: ``list_bills("114", "hjres").unwrap()[0] == "114hjres75"``
        """
        path = TYPE_SITEMAP_PATH.format(session=session, type=bill_type.lower())
        bills = sitemaps.extract(self._fetch_tree(path), "leaf", self.bill_types)
        self.logger.debug(f"{session}{bill_type}: {len(bills)} bills")
        return bills

    def list_all_bills(
        self,
        session: str,
        *,
        continue_on_error: bool = False,
        show_progress: bool = False,
    ) -> Result[List[str]]:
        """
        List every bill in ``session`` across all bill types.

        One request per bill type runs concurrently; results are concatenated in
        BILL_TYPES order.

        Args:
            session: Congress number as a string (e.g. "115")
            continue_on_error: If False (default), the first failing type fails the whole call
                and cancels requests not yet started. If True, failing types are logged and dropped.
            show_progress: Display a tqdm progress bar while requests complete.
        """
        results = self._fan_out(
            lambda t: self.list_bills(session, t),
            self.bill_types,
            continue_on_error=continue_on_error,
            show_progress=show_progress,
            desc=f"{session} sitemaps",
        )
        merged = collect(results, continue_on_error=continue_on_error,
                         labels=self.bill_types, logger=self.logger)
        if not merged.ok:
            return merged
        bills = [bill for per_type in merged.value for bill in per_type]
        self.logger.info(f"Listed {len(bills)} bills for session {session}")
        return Ok(bills)

    # ------------- bill status -------------
    @returns_result
    def bill_status(self, session_or_id: str, bill_type: Optional[str] = None,
                    number: Optional[Union[str, int]] = None) -> Node:
        """
        Fetch a bill's status document and return its <billStatus> node.

        Accepts either (session, bill_type, number) or one composite id ("113sjres11").
        """
        if bill_type is None and number is None:
            bill = parse_bill_id(session_or_id, self.bill_types)
            session, bill_type, number = bill.session, bill.type, bill.number
        elif bill_type is None or number is None:
            raise TypeError("bill_status takes a composite id or session, bill_type and number")
        else:
            session = session_or_id
        path = BILL_STATUS_PATH.format(session=session, type=bill_type.lower(), number=number)
        return find_first(self._fetch_tree(path), "billStatus")

    @returns_result
    def bill_latest_action(self, bill_id: str) -> ActionRecord:
        """
        Get the latest action (conventionally, the status) of a bill.

        Raises MalformedDocument (as an Err) when any of bill/latestAction/actionDate/text
        is missing; that means the document changed shape, not that the bill has no action.
        """
        bill = parse_bill_id(bill_id, self.bill_types)
        status = self.bill_status(bill.session, bill.type, bill.number).unwrap()

        action = find_first(status, "bill").child("latestAction").children

        return ActionRecord(
            date=find_first(action, "actionDate").first_scalar(),
            text=find_first(action, "text").first_scalar(),
            bill=bill,
            bill_id=bill_id,
        )

    # ------------- filtering -------------
    def filter_by_action(
        self,
        session: str,
        bill_type: str,
        pattern: Union[str, Pattern[str]],
        *,
        continue_on_error: bool = False,
        show_progress: bool = False,
    ) -> Result[List[ActionRecord]]:
        """
        Latest actions of every bill of ``bill_type`` in ``session`` whose text matches ``pattern``.

        ``pattern`` is searched (not full-matched); pass ``re.compile("law", re.I)`` for a
        case-insensitive match. Output follows sitemap order.

        Args:
            session: Congress number as a string (e.g. "114")
            bill_type: One of BILL_TYPES
            pattern: Regular expression (string or compiled)
            continue_on_error: If False (default), the first bill that fails fails the whole call.
                If True, failing bills are logged and skipped.
            show_progress: Display a tqdm progress bar while status documents are fetched.
        """
        listed = self.list_bills(session, bill_type)
        if not listed.ok:
            return listed

        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        results = self._fan_out(
            self.bill_latest_action,
            listed.value,
            continue_on_error=continue_on_error,
            show_progress=show_progress,
            desc=f"{session}{bill_type} status",
        )
        merged = collect(results, continue_on_error=continue_on_error,
                         labels=listed.value, logger=self.logger)
        if not merged.ok:
            return merged
        matching = [rec for rec in merged.value if regex.search(rec.text)]
        self.logger.info(f"{len(matching)}/{len(merged.value)} {session}{bill_type} bills match {regex.pattern!r}")
        return Ok(matching)
