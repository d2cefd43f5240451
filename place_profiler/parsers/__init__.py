"""CSV loader for activity history exports."""

from .history_parser import HistoryParser, load_history

__all__ = [
    'HistoryParser',
    'load_history',
]
