"""
Smoke tests against www.gpo.gov. Opt in with GPO_LIVE_TESTS=1 (a .env file works too).
"""
import os
import re

import pytest
from dotenv import load_dotenv

from gpo_client import GPOClient

load_dotenv()

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(os.getenv("GPO_LIVE_TESTS") != "1", reason="GPO_LIVE_TESTS not set"),
]


@pytest.fixture(scope="module")
def client():
    """Create a single client instance for all tests."""
    return GPOClient(timeout=30, max_workers=8, log_level=20)


@pytest.mark.timeout(30)
def test_current_session(client):
    session = client.current_session().unwrap()
    assert session.isdigit()
    assert int(session) >= 115


@pytest.mark.timeout(30)
def test_list_bills(client):
    bills = client.list_bills("114", "hjres").unwrap()
    assert bills, "Should list at least one joint resolution"
    assert all(b.startswith("114hjres") for b in bills)


@pytest.mark.timeout(30)
def test_bill_latest_action(client):
    record = client.bill_latest_action("113sjres11").unwrap()
    assert record.bill.session == "113"
    assert record.date
    assert record.text


@pytest.mark.timeout(300)
def test_filter_by_action(client):
    records = client.filter_by_action("114", "hjres", re.compile("law", re.I),
                                      continue_on_error=True).unwrap()
    assert all(re.search("law", r.text, re.I) for r in records)
