from __future__ import annotations

import json

import pytest

from mars_rover.commands import Command
from mars_rover.grid import Grid
from mars_rover.mission import (
    MissionError,
    MissionInput,
    parse_grid_size,
    parse_obstacles,
    parse_start,
)
from mars_rover.orientation import Orientation


def test_parse_prompt_answers() -> None:
    assert parse_grid_size("5, 5") == (5, 5)
    assert parse_start("0,0,n") == (0, 0, Orientation.NORTH)
    assert parse_start("3, 1, W") == (3, 1, Orientation.WEST)
    assert parse_obstacles("2,2;3,5") == [(2, 2), (3, 5)]
    assert parse_obstacles("") == []
    assert parse_obstacles("1,1;") == [(1, 1)]


def test_unknown_or_missing_direction_means_north() -> None:
    assert parse_start("1,2,Q") == (1, 2, Orientation.NORTH)
    assert parse_start("1,2") == (1, 2, Orientation.NORTH)


@pytest.mark.parametrize("text", ["5", "a,5", "0,5", "5,-1", "5,5,5"])
def test_bad_grid_size(text: str) -> None:
    with pytest.raises(MissionError):
        parse_grid_size(text)


@pytest.mark.parametrize("text", ["1", "x,2,N", "1,2,N,4"])
def test_bad_start(text: str) -> None:
    with pytest.raises(MissionError):
        parse_start(text)


def test_bad_obstacle() -> None:
    with pytest.raises(MissionError, match="obstacle"):
        parse_obstacles("1,1;2")
    with pytest.raises(MissionError):
        parse_obstacles("1,a")


def test_mission_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_grid_size("nope")


def test_from_strings_builds_runnable_simulation() -> None:
    mission = MissionInput.from_strings("5,5", "0,0,N", "", "MMRMM")
    assert mission.commands[2] is Command.TURN_RIGHT
    sim = mission.build()
    assert sim.pending == 5
    sim.run()
    assert sim.status() == "Rover is at (2, 2) facing East."


def test_from_dict_list_form() -> None:
    mission = MissionInput.from_dict(
        {
            "grid": [3, 3],
            "start": [0, 0, "E"],
            "obstacles": [[1, 0], {"x": 2, "y": 2}],
            "commands": "M",
        }
    )
    assert mission.obstacles == [(1, 0), (2, 2)]
    sim = mission.build()
    sim.run()
    assert sim.status() == "Rover is at (0, 0) facing East."


def test_from_dict_requires_start_and_grid() -> None:
    with pytest.raises(MissionError, match="start"):
        MissionInput.from_dict({"grid": [3, 3]})
    with pytest.raises(MissionError, match="grid"):
        MissionInput.from_dict({"start": "0,0,N"})
    with pytest.raises(MissionError):
        MissionInput.from_dict({"grid": [0, 3], "start": "0,0,N"})


def test_from_dict_with_map_file(tmp_path) -> None:
    path = tmp_path / "map.json"
    path.write_text(json.dumps({"width": 4, "height": 4, "obstacles": [{"x": 0, "y": 2}]}), encoding="utf-8")
    mission = MissionInput.from_dict(
        {"map": str(path), "start": "0,0,N", "obstacles": "3,3", "commands": "MMM"}
    )
    assert (mission.width, mission.height) == (4, 4)
    assert sorted(mission.obstacles) == [(0, 2), (3, 3)]
    sim = mission.build()
    sim.run()
    assert sim.status() == "Rover is at (0, 1) facing North."


def test_missing_map_file_is_mission_error(tmp_path) -> None:
    with pytest.raises(MissionError, match="map"):
        MissionInput.from_dict({"map": str(tmp_path / "nope.json"), "start": "0,0,N"})


def test_to_dict_round_trip() -> None:
    mission = MissionInput.from_strings("4,3", "1,1,S", "2,2", "mlrx")
    again = MissionInput.from_dict(mission.to_dict())
    assert again == mission


def test_build_with_shared_grid_and_bounds() -> None:
    grid = Grid(2, 2)
    mission = MissionInput.from_strings("2,2", "0,0,S", "", "M")
    sim = mission.build(enforce_bounds=True, grid=grid)
    assert sim.rover.grid is grid
    sim.run()
    assert sim.status() == "Rover is at (0, 0) facing South."


@pytest.mark.parametrize(
    "data",
    [
        {"grid": 5, "start": "0,0,N"},
        {"grid": [5, 5], "start": 7},
        {"grid": [5, 5], "start": "0,0,N", "obstacles": [3]},
        {"grid": [5, 5], "start": "0,0,N", "obstacles": 4},
        {"grid": [5, 5], "start": "0,0,N", "commands": 5},
        {"grid": [5, 5], "start": "0,0,N", "commands": {"M": 1}},
        {"grid": [5, 5, 5], "start": "0,0,N"},
        {"grid": [5, 5], "start": [0, 0, "N", 1]},
    ],
)
def test_from_dict_wrong_shapes_are_mission_errors(data) -> None:
    with pytest.raises(MissionError):
        MissionInput.from_dict(data)


def test_from_dict_rejects_non_mapping() -> None:
    with pytest.raises(MissionError, match="mapping"):
        MissionInput.from_dict([5, 5])  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "content",
    ["[1, 2]", '{"width": 3}', '{"width": 3, "height": 3, "obstacles": [7]}', "not json"],
)
def test_malformed_map_file_is_mission_error(tmp_path, content: str) -> None:
    path = tmp_path / "map.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(MissionError, match="map"):
        MissionInput.from_dict({"map": str(path), "start": "0,0,N"})


def test_full_direction_names_start_facing_north() -> None:
    assert parse_start("0,0,EAST") == (0, 0, Orientation.NORTH)
    mission = MissionInput.from_dict({"grid": [3, 3], "start": [1, 1, "West"]})
    assert mission.orientation is Orientation.NORTH
