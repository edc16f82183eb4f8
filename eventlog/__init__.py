"""Append-only card event logging (stdout, JSONL or Parquet)."""

from .card_event_logger import CardEvent, CardEventLogger, create_logger

__all__ = ["CardEvent", "CardEventLogger", "create_logger"]
