"""Bank fee and service charge memos."""

from memo_cleaner.rules.base import (
    MemoRule,
    Predicate,
    contains,
    equals,
    passthrough,
    starts_with,
)

# (matcher, label); a label of None keeps the memo as-is
FEE_TAXONOMY: tuple[tuple[Predicate, str | None], ...] = (
    (equals("Domestic Incoming Wire Fee"), "Domestic Wire Fee"),
    (equals("Online Fx International Wire Fee"), "Online Fx International Wire Fee"),
    (equals("Online US Dollar Intl Wire Fee"), "Intl Wire Fee"),
    (starts_with("Wire Trans Svc Charge"), "Wire Trans Svc Charge"),
    (equals("Wire Transfer Fee"), "Wire Transfer Fee"),
    (starts_with("OVERDRAFT ITEM FEE"), "Overdraft Fee"),
    (contains("FINANCE CHARGE"), "FINANCE CHARGE"),
    (starts_with("Monthly Fee Business"), "Monthly Fee Business"),
    (equals("RETURN ITEM CHARGEBACK"), "RETURN ITEM CHARGEBACK"),
    (starts_with("LATE PAYMENT FEE"), None),
)


def clean_fee_line(memo: str) -> str:
    """
    Canonical label for a bank fee memo.

    Args:
        memo: Whitespace-normalized memo

    Returns:
        Fee label, or ``""`` if the memo is not a known fee
    """
    for matcher, label in FEE_TAXONOMY:
        if matcher(memo):
            return memo if label is None else label
    return ""


def is_fee_line(memo: str) -> bool:
    """Check if the memo is a known fee."""
    return bool(clean_fee_line(memo))


FEE_LINE = MemoRule(name="fee_line", predicate=is_fee_line, extract=clean_fee_line)

SERVICE_CHARGE = MemoRule(
    name="service_charge",
    predicate=starts_with("SERVICE CHARGE ACCT"),
    extract=passthrough,
)
