"""Zelle and account-to-account transfer memos."""

import re

from memo_cleaner.rules.base import MemoRule, matches_pattern, starts_with
from memo_cleaner.utils.text import normalize_spaces

# Reference tokens banks append to incoming Zelle memos
ZELLE_REFERENCE_PREFIXES = ("Bac", "Wfct", "Cof", "Cti", "Mac", "Hna", "H50", "Bbt", "0Ou")

_ZELLE_TO_PREFIX_RE = re.compile(r"^Zelle to\s+", re.IGNORECASE)
_ZELLE_DATED_REF_RE = re.compile(r"\s+on\s+\d{1,2}/\d{1,2}\s+Ref\s*#.*$", re.IGNORECASE)
_REF_SUFFIX_RE = re.compile(r"\s+Ref\s*#.*$", re.IGNORECASE)

_ZELLE_PAYMENT_TO_RE = re.compile(r"^Zelle payment to\s+", re.IGNORECASE)
_ZELLE_PAYMENT_FOR_RE = re.compile(r"^Zelle payment to\s+(.+?)\s+for\s+", re.IGNORECASE)

_ZELLE_FROM_PREFIX_RE = re.compile(r"^Zelle Payment From\s+", re.IGNORECASE)
_ZELLE_REFERENCE_RE = re.compile(
    r"\s+(?:(?:{})\S*|\d{{8,}})$".format("|".join(ZELLE_REFERENCE_PREFIXES)),
    re.IGNORECASE,
)
_CA_SUFFIX_RE = re.compile(r"\s+CA$", re.IGNORECASE)

_ACCOUNT_TYPE_RE = re.compile(
    r"\s+(?:Everyday Checking|Business Checking|Savings|Personal Checking)\b.*$",
    re.IGNORECASE,
)
_MASKED_ACCOUNT_RE = re.compile(r"\s+xxxxxx.*$", re.IGNORECASE)

_MOBILE_CHK_RE = re.compile(r"^Mobile transfer to CHK\s*(\d+)", re.IGNORECASE)
_BANKING_CRD_RE = re.compile(r"^Online Banking payment to CRD\s*(\d+)", re.IGNORECASE)


def clean_outgoing_zelle(memo: str) -> str:
    """Recipient of a ``Zelle to`` payment."""
    name = normalize_spaces(_ZELLE_TO_PREFIX_RE.sub("", memo))
    name = _ZELLE_DATED_REF_RE.sub("", name)
    name = _REF_SUFFIX_RE.sub("", name)
    return normalize_spaces(name)


def clean_outgoing_zelle_with_memo(memo: str) -> str:
    """Recipient of a ``Zelle payment to`` payment, dropping its ``for`` note."""
    match = _ZELLE_PAYMENT_FOR_RE.match(memo)
    if match:
        return normalize_spaces(match.group(1))
    return normalize_spaces(_ZELLE_PAYMENT_TO_RE.sub("", memo))


def clean_incoming_zelle(memo: str) -> str:
    """
    Sender of an incoming Zelle payment.

    Reference tokens can be stacked (``Bac1234 0Ou9876 12345678``), so they
    are stripped from the end until the name stops changing.
    """
    name = normalize_spaces(_ZELLE_FROM_PREFIX_RE.sub("", memo))

    previous = None
    while name != previous:
        previous = name
        name = _ZELLE_REFERENCE_RE.sub("", name).strip()

    name = _CA_SUFFIX_RE.sub("", name).strip()
    return normalize_spaces(name)


def clean_transfer_to_named_account(memo: str) -> str:
    """Nickname of the destination account of an online transfer."""
    name = normalize_spaces(re.sub(r"^Online Transfer to\s+", "", memo))
    name = _ACCOUNT_TYPE_RE.sub("", name)
    name = _MASKED_ACCOUNT_RE.sub("", name)
    name = _REF_SUFFIX_RE.sub("", name)
    name = normalize_spaces(name)
    return f"Transfer to {name}" if name else "Transfer to"


def clean_transfer_to_checking(memo: str) -> str:
    """Fixed label for transfers to the known checking account."""
    return "Transfer To Chk 7590"


def clean_mobile_transfer_to_checking(memo: str) -> str:
    """Keep the destination checking account number of a mobile transfer."""
    match = _MOBILE_CHK_RE.match(memo)
    return f"transfer to CHK {match.group(1)}" if match else "transfer to CHK"


def clean_card_payment(memo: str) -> str:
    """Keep the card number of an online banking card payment."""
    match = _BANKING_CRD_RE.match(memo)
    if match:
        return f"Online Banking payment to CRD {match.group(1)}"
    return "Online Banking payment to CRD"


OUTGOING_ZELLE = MemoRule(
    name="outgoing_zelle",
    predicate=matches_pattern(r"Zelle to\s+", re.IGNORECASE),
    extract=clean_outgoing_zelle,
)

OUTGOING_ZELLE_WITH_MEMO = MemoRule(
    name="outgoing_zelle_with_memo",
    predicate=matches_pattern(r"Zelle payment to\s+", re.IGNORECASE),
    extract=clean_outgoing_zelle_with_memo,
)

INCOMING_ZELLE = MemoRule(
    name="incoming_zelle",
    predicate=matches_pattern(r"Zelle Payment From\s+", re.IGNORECASE),
    extract=clean_incoming_zelle,
)

# Case-sensitive so "Online Transfer To Chk" falls through to the next rule
TRANSFER_TO_NAMED_ACCOUNT = MemoRule(
    name="transfer_to_named_account",
    predicate=matches_pattern(r"Online Transfer to\s+"),
    extract=clean_transfer_to_named_account,
)

TRANSFER_TO_CHECKING = MemoRule(
    name="transfer_to_checking",
    predicate=starts_with("Online Transfer To Chk"),
    extract=clean_transfer_to_checking,
)

MOBILE_TRANSFER_TO_CHECKING = MemoRule(
    name="mobile_transfer_to_checking",
    predicate=starts_with("Mobile transfer to CHK", ignore_case=True),
    extract=clean_mobile_transfer_to_checking,
)

CARD_PAYMENT = MemoRule(
    name="card_payment",
    predicate=starts_with("Online Banking payment to CRD", ignore_case=True),
    extract=clean_card_payment,
)
