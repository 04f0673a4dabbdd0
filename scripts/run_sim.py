from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import yaml

from mars_rover.mission import MissionError, MissionInput
from mars_rover.rover import RoverState
from mars_rover.simulation import Simulation
from telemetry.logger import TelemetryLogger


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a grid rover mission and print its final status.")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to mission YAML config (e.g. configs/sim.yaml).",
    )
    parser.add_argument("--grid", type=str, default=None, help="Grid size as 'width,height'.")
    parser.add_argument("--map", type=str, default=None, help="JSON map file giving grid size and obstacles.")
    parser.add_argument("--start", type=str, default=None, help="Start pose as 'x,y,direction'.")
    parser.add_argument("--obstacles", type=str, default=None, help="Obstacles as 'x,y;x,y'.")
    parser.add_argument("--commands", type=str, default=None, help="Command string of M, L and R.")
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for each mission field on stdin.",
    )
    parser.add_argument(
        "--enforce-bounds",
        dest="enforce_bounds",
        action="store_true",
        default=None,
        help="Block moves that would leave the grid.",
    )
    parser.add_argument(
        "--no-enforce-bounds",
        dest="enforce_bounds",
        action="store_false",
        help="Allow moves off the grid even if the config enforces bounds.",
    )
    parser.add_argument("--telemetry", type=str, default=None, help="Append step records to this JSONL file.")
    parser.add_argument("--render", action="store_true", help="Replay the run in a pygame window.")
    return parser.parse_args(argv)


def prompt_mission() -> MissionInput:
    """Ask for each mission field on the console, one prompt per field."""
    grid = input("Enter grid size (width, height): ")
    start = input("Enter starting position (x, y, direction[N, S, E, W]): ")
    obstacles = input("Enter obstacles as x,y pairs separated by semicolons (e.g., 2,2;3,5): ")
    commands = input("Enter commands (M = Move, L = Left, R = Right): ")
    return MissionInput.from_strings(grid, start, obstacles, commands)


def resolve_mission(args: argparse.Namespace, cfg: Dict[str, Any]) -> MissionInput:
    """Merge config mission values with command-line overrides."""
    data = cfg.get("mission") or {}
    if not isinstance(data, dict):
        raise MissionError(f"Mission must be a mapping, got {data!r}")
    data = dict(data)
    if args.grid is not None:
        data.pop("map", None)
    for key in ("map", "grid", "start", "obstacles", "commands"):
        value = getattr(args, key)
        if value is not None:
            data[key] = value
    return MissionInput.from_dict(data)


def replay(sim: Simulation, start_state: RoverState, render_cfg: Dict[str, Any]) -> None:
    """Show the recorded run step by step in a pygame window."""
    import pygame

    from mars_rover.render import PygameRenderer

    renderer = PygameRenderer(
        grid=sim.rover.grid,
        cell_size=int(render_cfg.get("cell_size", 64)),
        show_trail=bool(render_cfg.get("show_trail", True)),
        trail_max_length=int(render_cfg.get("trail_max_length", 500)),
    )
    fps = int(render_cfg.get("fps", 4))
    frames = [start_state] + [record.after for record in sim.history]

    running = True
    idx = 0
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
        renderer.draw(frames[idx], step=idx)
        renderer.tick(fps)
        if idx < len(frames) - 1:
            idx += 1
    renderer.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = load_yaml(args.config) if args.config else {}
    if not isinstance(cfg, dict):
        print(f"Invalid config: {args.config} is not a mapping", file=sys.stderr)
        return 2
    sim_cfg = cfg.get("sim") or {}
    render_cfg = cfg.get("render") or {}
    logging_cfg = cfg.get("logging") or {}

    try:
        mission = prompt_mission() if args.interactive else resolve_mission(args, cfg)
    except MissionError as exc:
        print(f"Invalid mission: {exc}", file=sys.stderr)
        return 2

    enforce_bounds = args.enforce_bounds
    if enforce_bounds is None:
        enforce_bounds = bool(sim_cfg.get("enforce_bounds", False))

    telemetry_path = args.telemetry or logging_cfg.get("telemetry_path")
    telemetry = TelemetryLogger(telemetry_path) if telemetry_path else None

    sim = mission.build(enforce_bounds=enforce_bounds, telemetry=telemetry)
    start_state = sim.rover.get_state()
    try:
        sim.run()
    finally:
        if telemetry is not None:
            telemetry.close()

    print(sim.status())

    if args.render:
        replay(sim, start_state, render_cfg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
