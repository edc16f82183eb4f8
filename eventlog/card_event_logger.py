"""Structured event logging for generated decks and random draws."""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pyarrow as pa
import pyarrow.parquet as pq

from deck import Card

EVENT_SCHEMA = pa.schema(
    [
        ("timestamp", pa.string()),
        ("session_id", pa.string()),
        ("event", pa.string()),
        ("position", pa.int64()),
        ("card", pa.string()),
        ("suit", pa.string()),
        ("rank", pa.string()),
        ("swap_count", pa.int64()),
    ]
)


@dataclass
class CardEvent:
    """Single card emitted by a deck build or a random draw."""

    timestamp: str
    session_id: str
    event: str
    position: int
    card: str
    suit: str
    rank: str
    swap_count: Optional[int] = None

    def as_dict(self) -> Dict:
        return {
            "timestamp": self.timestamp,
            "session_id": self.session_id,
            "event": self.event,
            "position": self.position,
            "card": self.card,
            "suit": self.suit,
            "rank": self.rank,
            "swap_count": self.swap_count,
        }


class _BaseWriter:
    def append(self, event: Dict[str, Any]) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def close(self) -> None:  # pragma: no cover - interface
        return None


class StdoutWriter(_BaseWriter):
    def append(self, event: Dict[str, Any]) -> None:
        print(json.dumps(event, separators=(",", ":")))


class JSONLWriter(_BaseWriter):
    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("a", encoding="utf-8")

    def append(self, event: Dict[str, Any]) -> None:
        self._handle.write(json.dumps(event) + "\n")
        self._handle.flush()

    def close(self) -> None:
        self._handle.close()


class ParquetWriter(_BaseWriter):
    """Buffer rows and write them as a single row group on ``close``.

    Parquet files cannot be appended to, so each writer owns its file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._rows: List[Dict[str, Any]] = []
        self._closed = False

    def append(self, event: Dict[str, Any]) -> None:
        self._rows.append(event)

    def close(self) -> None:
        if self._closed:
            return
        table = pa.Table.from_pylist(self._rows, schema=EVENT_SCHEMA)
        pq.write_table(table, self.path)
        self._rows = []
        self._closed = True


class CardEventLogger:
    """Facade that turns cards into append-only event rows."""

    def __init__(self, writer: _BaseWriter, session_id: str) -> None:
        self._writer = writer
        self.session_id = session_id

    def _emit(self, event: str, position: int, card: Card, swap_count: Optional[int]) -> None:
        record = CardEvent(
            timestamp=datetime.now(timezone.utc).isoformat(),
            session_id=self.session_id,
            event=event,
            position=position,
            card=str(card),
            suit=card.suit.name,
            rank=card.rank.name,
            swap_count=swap_count,
        )
        self._writer.append(record.as_dict())

    def log_deck(self, cards: Iterable[Card], *, swap_count: Optional[int] = None) -> None:
        """Emit one ``deck`` event per card; ``swap_count`` is None for ordered decks."""
        for position, card in enumerate(cards):
            self._emit("deck", position, card, swap_count)

    def log_draw(self, position: int, card: Card) -> None:
        self._emit("draw", position, card, None)

    def close(self) -> None:
        self._writer.close()


def create_logger(mode: str, *, destination: Optional[Path], session_id: str) -> CardEventLogger:
    """Factory that builds a logger for the requested mode."""

    normalized = mode.lower()
    if normalized == "stdout":
        writer: _BaseWriter = StdoutWriter()
    elif normalized == "jsonl":
        if not destination:
            raise ValueError("JSONL logging requires a destination path")
        writer = JSONLWriter(Path(destination))
    elif normalized == "parquet":
        if not destination:
            raise ValueError("Parquet logging requires a destination path")
        writer = ParquetWriter(Path(destination))
    else:
        raise ValueError(f"Unknown event log mode: {mode}")

    return CardEventLogger(writer, session_id=session_id)
