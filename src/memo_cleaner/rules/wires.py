"""Wire transfer memos (outgoing WT, Fedwire, book transfers, international)."""

import re

from memo_cleaner.rules.base import MemoRule, matches_pattern, starts_with
from memo_cleaner.utils.text import normalize_spaces, word_count

_WT_BENEFICIARY_RE = re.compile(r"/Bnf=(.+?)\s+Srf#", re.IGNORECASE)
_WT_SUFFIXES = [
    re.compile(r"\s+CO$", re.IGNORECASE),
    re.compile(r"\s+CA$", re.IGNORECASE),
    re.compile(r"\s+Inc\.?$", re.IGNORECASE),
]

_FEDWIRE_BO_RE = re.compile(r"B/O:\s*\d+/(.+?)\s*\d/US/", re.IGNORECASE)
_FEDWIRE_BNF_RE = re.compile(r"Bnf=([^/]+)", re.IGNORECASE)
_FEDWIRE_MIRAMAR_RE = re.compile(r"\s+Miramar\s+FL.*$", re.IGNORECASE)

# Book transfer originators, tried in order
_BOOK_TRANSFER_PATTERNS = [
    re.compile(r"Org:/\d+\s+(.+?)\s+Ref:", re.IGNORECASE),
    re.compile(r"B/O:\s*(.+?)(?:\s+(?:Ocala|Columbus|Miramar)\s)", re.IGNORECASE),
    re.compile(r"B/O:\s*(.+?)(?:\s+\w+\s+\w{2}\s+\d{5})", re.IGNORECASE),
]

_INTL_WIRE_PATTERNS = [
    re.compile(r"Ben:/\d+\s+(.+?)\s+Ref:", re.IGNORECASE),
    re.compile(r"A/C:\s*(.+?)\s+Medellin", re.IGNORECASE),
]


def clean_outgoing_wt_wire(memo: str) -> str:
    """Beneficiary of an outgoing ``WT <digits>`` wire."""
    match = _WT_BENEFICIARY_RE.search(memo)
    if not match:
        return ""

    name = normalize_spaces(match.group(1))
    name = re.sub(r"^G\s+", "", name, flags=re.IGNORECASE)
    for suffix in _WT_SUFFIXES:
        name = suffix.sub("", name)
    return normalize_spaces(name)


def clean_fedwire_credit(memo: str) -> str:
    """
    Sender of an incoming Fedwire credit.

    The ``B/O:`` originator is only trusted when it looks like a full name
    (more than three words); otherwise the ``Bnf=`` field is used.
    """
    match = _FEDWIRE_BO_RE.search(memo)
    sender = normalize_spaces(match.group(1)) if match else ""
    if sender and word_count(sender) > 3:
        return sender

    match = _FEDWIRE_BNF_RE.search(memo)
    if match:
        beneficiary = _FEDWIRE_MIRAMAR_RE.sub("", normalize_spaces(match.group(1)))
        beneficiary = normalize_spaces(beneficiary)
        if beneficiary:
            return beneficiary

    return "Fedwire Credit"


def clean_book_transfer_credit(memo: str) -> str:
    """Originator of a book transfer credit."""
    for pattern in _BOOK_TRANSFER_PATTERNS:
        match = pattern.search(memo)
        if match:
            return normalize_spaces(match.group(1))
    return "Book Transfer Credit"


def clean_online_international_wire(memo: str) -> str:
    """Beneficiary of an outgoing international wire."""
    for pattern in _INTL_WIRE_PATTERNS:
        match = pattern.search(memo)
        if match:
            return normalize_spaces(match.group(1))
    return "Online International Wire Transfer"


OUTGOING_WT_WIRE = MemoRule(
    name="outgoing_wt_wire",
    predicate=matches_pattern(r"WT\s+\d+", re.IGNORECASE),
    extract=clean_outgoing_wt_wire,
)

FEDWIRE_CREDIT = MemoRule(
    name="fedwire_credit",
    predicate=starts_with("Fedwire Credit"),
    extract=clean_fedwire_credit,
)

BOOK_TRANSFER_CREDIT = MemoRule(
    name="book_transfer_credit",
    predicate=starts_with("Book Transfer Credit"),
    extract=clean_book_transfer_credit,
)

ONLINE_INTERNATIONAL_WIRE = MemoRule(
    name="online_international_wire",
    predicate=starts_with("Online International Wire Transfer"),
    extract=clean_online_international_wire,
)
