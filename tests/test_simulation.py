from __future__ import annotations

from mars_rover.commands import Command, parse_commands
from mars_rover.grid import Grid
from mars_rover.orientation import Orientation
from mars_rover.rover import Rover
from mars_rover.simulation import Simulation
from telemetry.logger import TelemetryLogger, load_records


def test_full_sequence_scenario() -> None:
    sim = Simulation(Rover(0, 0, Orientation.NORTH, Grid(5, 5)))
    sim.extend(parse_commands("MMRMM"))
    records = sim.run()

    positions = [(r.after.x, r.after.y, r.after.orientation) for r in records]
    assert positions == [
        (0, 1, Orientation.NORTH),
        (0, 2, Orientation.NORTH),
        (0, 2, Orientation.EAST),
        (1, 2, Orientation.EAST),
        (2, 2, Orientation.EAST),
    ]
    assert sim.status() == "Rover is at (2, 2) facing East."


def test_blocked_move_is_skipped_not_failed() -> None:
    sim = Simulation(Rover(0, 0, Orientation.EAST, Grid(3, 3, [(1, 0)])))
    sim.extend(parse_commands("MLM"))
    records = sim.run()
    assert [r.moved for r in records] == [False, False, True]
    assert sim.status() == "Rover is at (0, 1) facing North."


def test_off_grid_move_with_default_policy() -> None:
    sim = Simulation(Rover(0, 0, Orientation.SOUTH, Grid(2, 2)))
    sim.enqueue(Command.MOVE_FORWARD)
    sim.run()
    assert sim.status() == "Rover is at (0, -1) facing South."


def test_incremental_runs_match_batch_run() -> None:
    grid = Grid(6, 6, [(2, 2), (3, 4)])
    commands = parse_commands("MMRMMLMRRMLM")

    batch = Simulation(Rover(1, 1, Orientation.NORTH, grid))
    batch.extend(commands)
    batch.run()

    incremental = Simulation(Rover(1, 1, Orientation.NORTH, grid))
    for cmd in commands:
        incremental.enqueue(cmd)
        incremental.run()

    assert incremental.rover.get_state() == batch.rover.get_state()
    assert incremental.status() == batch.status()
    assert len(incremental.history) == len(batch.history) == len(commands)


def test_run_consumes_queue() -> None:
    sim = Simulation(Rover(0, 0, Orientation.NORTH, Grid(5, 5)))
    sim.extend([Command.MOVE_FORWARD, Command.MOVE_FORWARD])
    assert sim.pending == 2
    assert len(sim.run()) == 2
    assert sim.pending == 0
    assert sim.run() == []
    assert sim.status() == "Rover is at (0, 2) facing North."


def test_status_is_idempotent() -> None:
    sim = Simulation(Rover(3, 1, Orientation.WEST, Grid(5, 5)))
    first = sim.status()
    assert sim.status() == first
    assert sim.status() == first


def test_grid_shared_between_simulations() -> None:
    grid = Grid(4, 4, [(1, 1)])
    a = Simulation(Rover(0, 1, Orientation.EAST, grid))
    b = Simulation(Rover(1, 0, Orientation.NORTH, grid))
    a.enqueue(Command.MOVE_FORWARD)
    b.enqueue(Command.MOVE_FORWARD)
    a.run()
    b.run()
    assert a.rover.position == (0, 1)
    assert b.rover.position == (1, 0)
    assert grid.obstacles == frozenset({(1, 1)})


def test_telemetry_records_each_step(tmp_path) -> None:
    path = str(tmp_path / "logs" / "steps.jsonl")
    with TelemetryLogger(path) as logger:
        sim = Simulation(Rover(0, 0, Orientation.EAST, Grid(3, 3, [(1, 0)])), telemetry=logger)
        sim.extend(parse_commands("MLM"))
        sim.run()
        assert logger.records_written == 3

    records = load_records(path)
    assert [r["command"] for r in records] == ["M", "L", "M"]
    assert records[0] == {"step": 0, "command": "M", "x": 0, "y": 0, "orientation": "East", "moved": False}
    assert records[-1]["y"] == 1
    assert records[-1]["moved"] is True
