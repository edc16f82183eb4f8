import json
import random

import numpy as np
import pyarrow.parquet as pq

from drawer import draw_many
from metrics import DrawFrequencyAccumulator
from simulation.runner import SimulationConfig, SimulationRunner, batch_log_path, main


def test_runner_merges_every_batch():
    runner = SimulationRunner(SimulationConfig(num_batches=3, draws_per_batch=200, seed=10))
    summaries = []
    runner.subscribe(summaries.append)

    metrics = runner.run()

    assert metrics.total == 600
    assert runner.batches_completed == 3
    assert [s["batch_index"] for s in summaries] == [0, 1, 2]
    assert [s["seed"] for s in summaries] == [10, 11, 12]


def test_seeded_batches_reproduce_direct_draws():
    runner = SimulationRunner(SimulationConfig(num_batches=2, draws_per_batch=50, seed=4))
    metrics = runner.run()

    expected = DrawFrequencyAccumulator()
    expected.record_many(draw_many(random.Random(4), 50))
    expected.record_many(draw_many(random.Random(5), 50))
    assert np.array_equal(metrics.counts, expected.counts)


def test_checkpoint_is_written(tmp_path):
    checkpoint = tmp_path / "out" / "checkpoint.json"
    config = SimulationConfig(
        num_batches=4,
        draws_per_batch=10,
        seed=1,
        checkpoint_interval=2,
        checkpoint_path=checkpoint,
    )

    SimulationRunner(config).run()

    data = json.loads(checkpoint.read_text())
    assert data["batches_completed"] == 4
    assert data["metrics"]["draws"] == 40


def test_batches_stream_draw_events(tmp_path):
    path = tmp_path / "draws.jsonl"
    config = SimulationConfig(
        num_batches=2,
        draws_per_batch=3,
        seed=0,
        event_log_mode="jsonl",
        event_log_path=path,
    )

    SimulationRunner(config).run()

    rows = [json.loads(line) for line in path.read_text().splitlines()]
    assert len(rows) == 6
    assert [row["session_id"] for row in rows] == ["0", "0", "0", "1", "1", "1"]


def test_parquet_batches_each_keep_their_rows(tmp_path):
    path = tmp_path / "draws.parquet"
    config = SimulationConfig(
        num_batches=3,
        draws_per_batch=4,
        seed=0,
        event_log_mode="parquet",
        event_log_path=path,
    )

    SimulationRunner(config).run()

    rows = []
    for batch_index in range(3):
        batch_path = batch_log_path(path, "parquet", batch_index)
        assert batch_path == tmp_path / f"draws-{batch_index}.parquet"
        rows.extend(pq.read_table(batch_path).to_pylist())
    assert len(rows) == 12
    assert [row["session_id"] for row in rows] == ["0"] * 4 + ["1"] * 4 + ["2"] * 4
    assert batch_log_path(path, "jsonl", 2) == path


def test_process_pool_matches_serial_run():
    serial = SimulationRunner(SimulationConfig(num_batches=3, draws_per_batch=100, seed=7))
    pooled = SimulationRunner(
        SimulationConfig(num_batches=3, draws_per_batch=100, seed=7, concurrency=2)
    )
    order = []
    pooled.subscribe(lambda summary: order.append(summary["batch_index"]))

    serial_metrics = serial.run()
    pooled_metrics = pooled.run()

    assert order == [0, 1, 2]
    assert np.array_equal(pooled_metrics.counts, serial_metrics.counts)
    assert pooled_metrics.total == 300


def test_config_from_dict_defaults_and_overrides():
    config = SimulationConfig.from_dict(
        {"num_batches": 5, "concurrency": 0, "event_log": {"mode": "stdout"}}
    )

    assert config.num_batches == 5
    assert config.draws_per_batch == 10_000
    assert config.concurrency == 1
    assert config.event_log_mode == "stdout"
    assert config.event_log_path is None


def test_cli_flags_override_config_file(tmp_path, capsys):
    config_path = tmp_path / "sim.json"
    config_path.write_text(json.dumps({"num_batches": 9, "draws_per_batch": 5, "seed": 3}))

    main(["--config", str(config_path), "--batches", "2"])

    data = json.loads(capsys.readouterr().out)
    assert data["draws"] == 10
