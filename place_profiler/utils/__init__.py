"""Shared constants and helpers."""

from .date_parser import parse_date, format_hour, parse_hour

__all__ = [
    'parse_date',
    'format_hour',
    'parse_hour',
]
