"""Explanation history: storage protocol, stores and record construction."""

from .records import build_history_record, input_summary, record_title
from .store import (
    HistoryStore,
    InMemoryHistoryStore,
    JSONHistoryStore,
    record_from_dict,
    record_to_dict,
)

__all__ = [
    "HistoryStore",
    "InMemoryHistoryStore",
    "JSONHistoryStore",
    "build_history_record",
    "input_summary",
    "record_from_dict",
    "record_title",
    "record_to_dict",
]
