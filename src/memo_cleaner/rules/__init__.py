"""Memo extraction rules and the default catalog."""

from memo_cleaner.rules.ach import (
    ACH_ORIG_CO_NAME,
    BUSINESS_TO_BUSINESS_DEBIT,
    DES_FORMATTED_PAYMENT,
)
from memo_cleaner.rules.base import MemoRule, RuleCatalog, passthrough
from memo_cleaner.rules.cards import AUTHORIZED_CARD_PURCHASE, CHECKCARD_LEGACY, PURCHASE_LEGACY
from memo_cleaner.rules.fees import FEE_LINE, SERVICE_CHARGE
from memo_cleaner.rules.transfers import (
    CARD_PAYMENT,
    INCOMING_ZELLE,
    MOBILE_TRANSFER_TO_CHECKING,
    OUTGOING_ZELLE,
    OUTGOING_ZELLE_WITH_MEMO,
    TRANSFER_TO_CHECKING,
    TRANSFER_TO_NAMED_ACCOUNT,
)
from memo_cleaner.rules.wires import (
    BOOK_TRANSFER_CREDIT,
    FEDWIRE_CREDIT,
    ONLINE_INTERNATIONAL_WIRE,
    OUTGOING_WT_WIRE,
)

DEFAULT_RULE = MemoRule(name="default", predicate=lambda memo: True, extract=passthrough)

# Priority order: first match wins
RULE_CATALOG = RuleCatalog([
    OUTGOING_WT_WIRE,
    OUTGOING_ZELLE,
    OUTGOING_ZELLE_WITH_MEMO,
    INCOMING_ZELLE,
    TRANSFER_TO_NAMED_ACCOUNT,
    TRANSFER_TO_CHECKING,
    MOBILE_TRANSFER_TO_CHECKING,
    CARD_PAYMENT,
    FEDWIRE_CREDIT,
    BOOK_TRANSFER_CREDIT,
    FEE_LINE,
    ONLINE_INTERNATIONAL_WIRE,
    ACH_ORIG_CO_NAME,
    DES_FORMATTED_PAYMENT,
    AUTHORIZED_CARD_PURCHASE,
    PURCHASE_LEGACY,
    CHECKCARD_LEGACY,
    BUSINESS_TO_BUSINESS_DEBIT,
    SERVICE_CHARGE,
    DEFAULT_RULE,
])


def dispatch(memo: str, catalog: RuleCatalog = RULE_CATALOG) -> str:
    """Extract a name from a memo using the first matching rule."""
    return catalog.dispatch(memo)


__all__ = ["DEFAULT_RULE", "RULE_CATALOG", "MemoRule", "RuleCatalog", "dispatch"]
