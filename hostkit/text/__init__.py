"""Text analysis module."""

from .analysis import (
    TextMatch,
    tokenize,
    find_dates,
    find_links,
    find_phone_numbers,
    find_addresses,
    analyze
)

__all__ = [
    'TextMatch',
    'tokenize',
    'find_dates',
    'find_links',
    'find_phone_numbers',
    'find_addresses',
    'analyze'
]
