from .documents import Node, find, parse
from .errors import (FetchError, GPOClientError, MalformedDocument,
                     NoSessionFound, ParseError)
from .gpo_client import GPOClient  # re-export public class
from .http import GPOHttp
from .models import BILL_TYPES, ActionRecord, BillIdentifier, parse_bill_id
from .results import Err, Ok, Result

__all__ = [
    "GPOClient",
    "GPOHttp",
    "ActionRecord",
    "BillIdentifier",
    "BILL_TYPES",
    "parse_bill_id",
    "Node",
    "find",
    "parse",
    "Ok",
    "Err",
    "Result",
    "GPOClientError",
    "FetchError",
    "MalformedDocument",
    "NoSessionFound",
    "ParseError",
]
