"""Parsing of si reports."""

from mks_sync.parsing.history_parser import MksHistoryParser, parse_timestamp

__all__ = ["MksHistoryParser", "parse_timestamp"]
