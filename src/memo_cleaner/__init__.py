"""memo-cleaner - Turn bank statement memos into consistent payee names."""

from memo_cleaner.cleaner import clean_memo, clean_memos
from memo_cleaner.models import MappingEntry, TransactionRow
from memo_cleaner.normalizer import StatementNormalizer
from memo_cleaner.utils import format_amount, parse_amount

__version__ = "0.1.0"
__all__ = [
    "MappingEntry",
    "StatementNormalizer",
    "TransactionRow",
    "clean_memo",
    "clean_memos",
    "format_amount",
    "parse_amount",
]
