"""Batch card-draw experiment harness with CLI support."""
from __future__ import annotations

import argparse
import json
import random
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from drawer import draw_many
from eventlog import CardEventLogger, create_logger
from metrics import DrawFrequencyAccumulator


# ---------------------------------------------------------------------------
# Configuration structures
# ---------------------------------------------------------------------------


@dataclass
class SimulationConfig:
    num_batches: int = 1
    draws_per_batch: int = 10_000
    concurrency: int = 1
    seed: Optional[int] = None
    checkpoint_interval: Optional[int] = None
    checkpoint_path: Optional[Path] = None
    event_log_mode: Optional[str] = None
    event_log_path: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "SimulationConfig":
        checkpoint_path = data.get("checkpoint_path")
        event_log = data.get("event_log", {})
        event_log_path = event_log.get("path")
        return cls(
            num_batches=data.get("num_batches", 1),
            draws_per_batch=data.get("draws_per_batch", 10_000),
            concurrency=max(1, data.get("concurrency", 1)),
            seed=data.get("seed"),
            checkpoint_interval=data.get("checkpoint_interval"),
            checkpoint_path=Path(checkpoint_path) if checkpoint_path else None,
            event_log_mode=event_log.get("mode"),
            event_log_path=Path(event_log_path) if event_log_path else None,
        )


@dataclass
class BatchTask:
    batch_index: int
    draws: int
    seed: Optional[int]
    event_log_mode: Optional[str]
    event_log_path: Optional[Path]


# ---------------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------------


class BatchEventPublisher:
    def __init__(self) -> None:
        self._subscribers: List[Callable[[Dict], None]] = []

    def subscribe(self, callback: Callable[[Dict], None]) -> None:
        self._subscribers.append(callback)

    def publish(self, payload: Dict) -> None:
        for callback in list(self._subscribers):
            callback(payload)


# ---------------------------------------------------------------------------
# Core simulation logic
# ---------------------------------------------------------------------------


def batch_log_path(path: Path, mode: str, batch_index: int) -> Path:
    """Return where a batch writes its events.

    JSONL batches share ``path``. Parquet cannot be appended to, so each
    batch gets ``<stem>-<batch_index><suffix>`` beside it.
    """

    if mode.lower() != "parquet":
        return path
    return path.with_name(f"{path.stem}-{batch_index}{path.suffix}")


def _run_single_batch(task: BatchTask) -> Dict:
    rng = random.Random(task.seed)
    cards = draw_many(rng, task.draws)

    logger: Optional[CardEventLogger] = None
    if task.event_log_mode:
        destination = task.event_log_path
        if destination:
            destination = batch_log_path(
                destination.expanduser(), task.event_log_mode, task.batch_index
            )
        logger = create_logger(
            task.event_log_mode,
            destination=destination,
            session_id=str(task.batch_index),
        )

    try:
        if logger is not None:
            for position, card in enumerate(cards):
                logger.log_draw(position, card)
    finally:
        if logger is not None:
            logger.close()

    # Only the count matrix crosses the process boundary.
    metrics = DrawFrequencyAccumulator()
    metrics.record_many(cards)
    return {
        "batch_index": task.batch_index,
        "draws": len(cards),
        "seed": task.seed,
        "counts": metrics.counts.tolist(),
    }


class SimulationRunner:
    def __init__(self, config: SimulationConfig):
        self.config = config
        self.publisher = BatchEventPublisher()
        self.metrics = DrawFrequencyAccumulator()
        self.batches_completed = 0

    def subscribe(self, callback: Callable[[Dict], None]) -> None:
        self.publisher.subscribe(callback)

    def _tasks(self) -> List[BatchTask]:
        tasks: List[BatchTask] = []
        for batch_index in range(self.config.num_batches):
            if self.config.seed is not None:
                seed = self.config.seed + batch_index
            else:
                seed = None
            tasks.append(
                BatchTask(
                    batch_index=batch_index,
                    draws=self.config.draws_per_batch,
                    seed=seed,
                    event_log_mode=self.config.event_log_mode,
                    event_log_path=self.config.event_log_path,
                )
            )
        return tasks

    def _handle_summary(self, summary: Dict) -> None:
        self.metrics.merge_counts(summary["counts"])
        self.batches_completed += 1
        self.publisher.publish(summary)
        self._maybe_checkpoint()

    def _maybe_checkpoint(self) -> None:
        if not self.config.checkpoint_interval:
            return
        if self.batches_completed % self.config.checkpoint_interval != 0:
            return

        checkpoint_path = Path(self.config.checkpoint_path or Path("draw_checkpoint.json"))
        data = {"batches_completed": self.batches_completed, "metrics": self.metrics.as_dict()}
        checkpoint_path.parent.mkdir(parents=True, exist_ok=True)
        checkpoint_path.write_text(json.dumps(data, indent=2))

    def run(self) -> DrawFrequencyAccumulator:
        tasks = self._tasks()
        if self.config.concurrency > 1:
            with ProcessPoolExecutor(max_workers=self.config.concurrency) as pool:
                for summary in pool.map(_run_single_batch, tasks):
                    self._handle_summary(summary)
        else:
            for task in tasks:
                self._handle_summary(_run_single_batch(task))

        return self.metrics


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Random card draw experiment harness")
    parser.add_argument("--config", type=Path, help="Optional JSON config file", default=None)
    parser.add_argument("--batches", type=int, help="Number of draw batches", default=None)
    parser.add_argument("--draws", type=int, help="Draws per batch", default=None)
    parser.add_argument("--concurrency", type=int, help="Process pool size", default=None)
    parser.add_argument("--seed", type=int, help="Base RNG seed", default=None)
    parser.add_argument("--checkpoint-interval", type=int, help="Batches between checkpoints", default=None)
    parser.add_argument("--checkpoint-path", type=Path, help="Where to write checkpoint metrics", default=None)
    parser.add_argument("--verbose", action="store_true", help="Stream per-batch results")
    parser.add_argument(
        "--event-log-mode",
        choices=["stdout", "jsonl", "parquet"],
        help="Where to stream structured draw events",
        default=None,
    )
    parser.add_argument(
        "--event-log-path",
        type=Path,
        help="Destination file for JSONL logs; Parquet writes one <stem>-<batch><suffix> file per batch",
        default=None,
    )
    return parser.parse_args(argv)


def _load_config_from_file(config_path: Optional[Path]) -> Dict:
    if not config_path:
        return {}
    return json.loads(config_path.read_text())


def _build_simulation_config(args: argparse.Namespace) -> SimulationConfig:
    config = SimulationConfig.from_dict(_load_config_from_file(args.config))

    if args.batches is not None:
        config.num_batches = args.batches
    if args.draws is not None:
        config.draws_per_batch = args.draws
    if args.concurrency is not None:
        config.concurrency = max(1, args.concurrency)
    if args.seed is not None:
        config.seed = args.seed
    if args.checkpoint_interval is not None:
        config.checkpoint_interval = args.checkpoint_interval
    if args.checkpoint_path is not None:
        config.checkpoint_path = args.checkpoint_path
    if args.event_log_mode is not None:
        config.event_log_mode = args.event_log_mode
    if args.event_log_path is not None:
        config.event_log_path = args.event_log_path
    return config


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    config = _build_simulation_config(args)
    runner = SimulationRunner(config)

    if args.verbose:
        runner.subscribe(
            lambda summary: print(
                f"batch={summary['batch_index']} draws={summary['draws']} seed={summary['seed']}"
            )
        )

    metrics = runner.run()
    print(json.dumps(metrics.as_dict(), indent=2))


if __name__ == "__main__":
    main()
