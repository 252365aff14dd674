"""Memo cleaning pipeline: normalize, extract, rename."""

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from memo_cleaner.overrides import Mappings, apply_name_normalization
from memo_cleaner.rules import RULE_CATALOG, RuleCatalog
from memo_cleaner.utils.text import normalize_spaces


def _snapshot(mappings: Mappings) -> Mappings:
    if mappings is None:
        return None
    if isinstance(mappings, Mapping):
        return dict(mappings)
    return tuple(mappings)


def clean_memo(
    memo: Any,
    mappings: Mappings = None,
    catalog: RuleCatalog = RULE_CATALOG,
) -> str:
    """
    Turn a raw statement memo into a counterparty/merchant name.

    Args:
        memo: Raw memo text
        mappings: User mapping list applied after the built-in table
        catalog: Extraction rules (defaults to the built-in catalog)

    Returns:
        Cleaned name; never empty for a non-blank memo
    """
    return apply_name_normalization(catalog.dispatch(normalize_spaces(memo)), mappings)


def clean_memos(
    memos: Iterable[Any],
    mappings: Mappings = None,
    workers: int | None = None,
) -> list[str]:
    """
    Clean many memos, keeping input order.

    Args:
        memos: Raw memo texts
        mappings: User mapping list, read once for the whole batch
        workers: Thread count; ``None`` or 1 cleans sequentially

    Returns:
        Cleaned names in the same order as ``memos``
    """
    snapshot = _snapshot(mappings)

    if not workers or workers <= 1:
        return [clean_memo(memo, snapshot) for memo in memos]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda memo: clean_memo(memo, snapshot), memos))
