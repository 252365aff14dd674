"""ACH memos: originator blocks, ``DES:`` descriptors and B2B debits."""

import re

from memo_cleaner.rules.base import MemoRule, contains, starts_with
from memo_cleaner.utils.text import normalize_spaces

# Entry descriptors too generic to identify the originator
GENERIC_ACH_DESCRIPTORS = frozenset({"ach", "pmt", "achpmt"})

_ENTRY_DESCR_RE = re.compile(r"CO Entry Descr:\s*([A-Za-z0-9]+)", re.IGNORECASE)
_ORIG_CO_NAME_RE = re.compile(r"Orig CO Name:(.+?)\s+Orig\s+ID:", re.IGNORECASE)

_CLICKPAY_DES_RE = re.compile(r"DES:\s*(\S+)", re.IGNORECASE)
_DES_SPLIT_RE = re.compile(r"\sDES:", re.IGNORECASE)
_DEBIT_DIRECT_RE = re.compile(r"\s+(?:DEBIT|DIRECT)$", re.IGNORECASE)

_B2B_NAME_RE = re.compile(r"^\s*(.+?)(?:\s+ACH\b|\s+Retry\b|\s+\d)", re.IGNORECASE)


def clean_ach_orig_co_name(memo: str) -> str:
    """
    Originator of an ACH entry.

    The entry descriptor usually names the payee (``CO Entry Descr:Payroll``);
    when it is a generic token the company name block is used instead.
    """
    match = _ENTRY_DESCR_RE.search(memo)
    if match:
        descriptor = normalize_spaces(match.group(1))
        if descriptor.lower() not in GENERIC_ACH_DESCRIPTORS:
            return descriptor

    match = _ORIG_CO_NAME_RE.search(memo)
    if match:
        return normalize_spaces(match.group(1))

    return memo


def clean_des_formatted_payment(memo: str) -> str:
    """Payee of a ``<payee> DES:<descriptor> ...`` memo."""
    if memo.startswith("ClickPay"):
        match = _CLICKPAY_DES_RE.search(memo)
        return normalize_spaces(match.group(1)) if match else memo

    before_des = _DES_SPLIT_RE.split(memo, maxsplit=1)[0] or memo
    cleaned = _DEBIT_DIRECT_RE.sub("", normalize_spaces(before_des))
    return normalize_spaces(cleaned)


def clean_business_to_business_debit(memo: str) -> str:
    """Company name after the last dash of a B2B ACH debit, tagged ``ACH``."""
    if "-" not in memo:
        return ""

    tail = memo.rsplit("-", 1)[1]
    match = _B2B_NAME_RE.match(tail)
    name = normalize_spaces(match.group(1) if match else tail)
    return f"{name} ACH" if name else ""


ACH_ORIG_CO_NAME = MemoRule(
    name="ach_orig_co_name",
    predicate=starts_with("Orig CO Name:"),
    extract=clean_ach_orig_co_name,
)

DES_FORMATTED_PAYMENT = MemoRule(
    name="des_formatted_payment",
    predicate=contains(" DES:"),
    extract=clean_des_formatted_payment,
)

BUSINESS_TO_BUSINESS_DEBIT = MemoRule(
    name="business_to_business_debit",
    predicate=contains("Business to Business ACH Debit"),
    extract=clean_business_to_business_debit,
)
