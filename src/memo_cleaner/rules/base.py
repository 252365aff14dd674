"""Rule type and ordered catalog used to pick an extractor for a memo."""

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from memo_cleaner.utils.text import normalize_spaces

Predicate = Callable[[str], bool]
Extractor = Callable[[str], str]


@dataclass(frozen=True)
class MemoRule:
    """A memo shape and the function that pulls a name out of it."""

    name: str
    predicate: Predicate
    extract: Extractor

    def matches(self, memo: str) -> bool:
        """Check if this rule handles the given memo."""
        return bool(self.predicate(memo))


def starts_with(prefix: str, ignore_case: bool = False) -> Predicate:
    """Build a predicate matching memos that begin with ``prefix``."""
    if ignore_case:
        pattern = re.compile(re.escape(prefix), re.IGNORECASE)
        return lambda memo: pattern.match(memo) is not None
    return lambda memo: memo.startswith(prefix)


def matches_pattern(pattern: str, flags: int = 0) -> Predicate:
    """Build a predicate from a regex anchored at the start of the memo."""
    compiled = re.compile(pattern, flags)
    return lambda memo: compiled.match(memo) is not None


def equals(text: str) -> Predicate:
    """Build a predicate matching one exact memo."""
    return lambda memo: memo == text


def contains(fragment: str) -> Predicate:
    """Build a predicate matching memos that contain ``fragment``."""
    return lambda memo: fragment in memo


def passthrough(memo: str) -> str:
    """Return the memo unchanged."""
    return memo


class RuleCatalog:
    """
    Immutable, ordered collection of memo rules.

    Rules are tried in order and the first whose predicate matches handles
    the memo. Later rules are never consulted once a rule has matched, even
    when its extractor comes back empty.
    """

    def __init__(self, rules: Iterable[MemoRule]) -> None:
        """Initialize catalog with rules in priority order."""
        self._rules: tuple[MemoRule, ...] = tuple(rules)

    def __iter__(self) -> Iterator[MemoRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def find_rule(self, memo: str) -> MemoRule | None:
        """Return the first rule whose predicate matches, if any."""
        for rule in self._rules:
            if rule.matches(memo):
                return rule
        return None

    def dispatch(self, memo: str) -> str:
        """
        Run the first matching rule against a memo.

        Args:
            memo: Raw memo text (whitespace is normalized here)

        Returns:
            The extracted name, or the normalized memo when no rule matches
            or the matching rule extracts nothing
        """
        raw_memo = normalize_spaces(memo)
        rule = self.find_rule(raw_memo)
        if rule is None:
            return raw_memo

        return normalize_spaces(rule.extract(raw_memo)) or raw_memo
