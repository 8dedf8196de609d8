"""Shared utilities (datetime helpers)."""

from question_bank.shared.utils.datetime import ensure_utc, parse_timestamp, utc_now

__all__ = ["ensure_utc", "parse_timestamp", "utc_now"]
