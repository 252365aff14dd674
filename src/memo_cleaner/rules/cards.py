"""Debit card purchase memos."""

import re

from memo_cleaner.rules.base import MemoRule, matches_pattern, starts_with
from memo_cleaner.utils.text import normalize_spaces, word_count

_AUTHORIZED_PREFIX = (
    r"(?:Purchase authorized on|Recurring Payment authorized on|Purchase Intl authorized on)\s+"
)
_AUTHORIZED_PREFIX_RE = re.compile("^" + _AUTHORIZED_PREFIX, re.IGNORECASE)
_LEADING_DATE_RE = re.compile(r"^\d{1,2}/\d{1,2}\s+")
_CARD_SUFFIX_RE = re.compile(r"\s+S\d{10,}\s+Card\s+\S+.*$", re.IGNORECASE)

# Applied once each, in order, to the end of the merchant text
_AUTHORIZED_TRAILERS = [
    re.compile(r"\s+[A-Za-z]{3}$"),
    re.compile(r"\s+[A-Z]{2}$"),
    re.compile(r"\s+[\w.+-]+@[\w.-]+\.[A-Za-z]{2,}$"),
    re.compile(r"\s+https?://\S+$", re.IGNORECASE),
    re.compile(r"\s+T\d+$", re.IGNORECASE),
]
_TRAILING_CITY_RE = re.compile(r"\s+[A-Z][a-z]+$")

_PURCHASE_TRAILERS = [
    re.compile(r"^PURCHASE\s+\d{4}\s+", re.IGNORECASE),
    re.compile(r"\s+\d{10,}.*$"),
    re.compile(r"\s+[A-Z]{2}$"),
    re.compile(r"\s+\*[A-Za-z0-9]+$"),
]

_CHECKCARD_TRAILERS = [
    re.compile(r"^CHECKCARD\s+\d{4}\s+", re.IGNORECASE),
    re.compile(r"\s+\d{15,}.*$"),
    re.compile(r"\s+RECURRING\b.*$", re.IGNORECASE),
    re.compile(r"\s+CKCD\b.*$", re.IGNORECASE),
    re.compile(r"\s+\d{10}\b.*$"),
    re.compile(r"\s+[A-Z]{2}$"),
    re.compile(r"/[A-Za-z0-9._-]+$"),
]


def clean_authorized_card_purchase(memo: str) -> str:
    """
    Merchant of a ``Purchase authorized on <m/d> ...`` memo.

    After the card/reference block is removed, one trailing token of each
    kind (state, day, email, URL, terminal id) is stripped. If more than one
    word is left, a trailing capitalized word is assumed to be a city and is
    dropped too; this also drops the last word of merchants such as
    ``Blue Bottle Coffee``.
    """
    merchant = _AUTHORIZED_PREFIX_RE.sub("", memo)
    merchant = _LEADING_DATE_RE.sub("", merchant)
    merchant = normalize_spaces(_CARD_SUFFIX_RE.sub("", merchant))

    for pattern in _AUTHORIZED_TRAILERS:
        merchant = pattern.sub("", merchant)

    if word_count(merchant) > 1:
        merchant = _TRAILING_CITY_RE.sub("", merchant)

    return normalize_spaces(merchant)


def _strip_all(memo: str, patterns: list[re.Pattern[str]]) -> str:
    for pattern in patterns:
        memo = pattern.sub("", memo)
    return normalize_spaces(memo)


def clean_purchase_legacy(memo: str) -> str:
    """Merchant of a ``PURCHASE <mmdd> ...`` memo."""
    return _strip_all(memo, _PURCHASE_TRAILERS)


def clean_checkcard_legacy(memo: str) -> str:
    """Merchant of a ``CHECKCARD <mmdd> ...`` memo."""
    return _strip_all(memo, _CHECKCARD_TRAILERS)


AUTHORIZED_CARD_PURCHASE = MemoRule(
    name="authorized_card_purchase",
    predicate=matches_pattern(_AUTHORIZED_PREFIX, re.IGNORECASE),
    extract=clean_authorized_card_purchase,
)

PURCHASE_LEGACY = MemoRule(
    name="purchase_legacy",
    predicate=starts_with("PURCHASE "),
    extract=clean_purchase_legacy,
)

CHECKCARD_LEGACY = MemoRule(
    name="checkcard_legacy",
    predicate=starts_with("CHECKCARD "),
    extract=clean_checkcard_legacy,
)
