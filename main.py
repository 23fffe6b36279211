"""
Entry point for Spark Plug.

Commands:
  - tasks:     List open tasks ranked by priority score.
  - add:       Add a task.
  - edit:      Change a task's ratings or title.
  - done:      Toggle a task's completion (completing grants game pieces).
  - remove:    Delete a task.
  - weights:   Show or set the scoring weights.
  - inventory: Show the piece inventory.
  - focus:     Run the focus timer in the terminal.
  - timer:     Show or set the focus timer lengths.
  - play:      Spend pieces in the reward game (pygame window).

Usage:
    python main.py add "Write report" --impact 5 --effort 3
    python main.py tasks
    python main.py done 1a2b3c4d
    python main.py play
"""

from __future__ import annotations

import argparse
import pathlib
import random
import sys
import time

from sparkplug.config import load_config
from sparkplug.focus import SETTING_RANGES, FocusTimer, Phase, TimerSettings, format_clock
from sparkplug.game.pieces import PIECE_KINDS
from sparkplug.storage import AppData, Storage, StorageError
from sparkplug.tasks.model import ATTRIBUTE_RANGES, Weights
from sparkplug.tasks.scoring import best_next_task, rank_tasks

DEFAULT_CONFIG_PATH = pathlib.Path(__file__).resolve().parent / "config" / "settings.yaml"

PHASE_LABELS = {Phase.FOCUS: "Focus", Phase.BREAK: "Short break", Phase.LONG_BREAK: "Long break"}


def _add_attribute_args(parser: argparse.ArgumentParser) -> None:
    for name, (lo, hi) in ATTRIBUTE_RANGES.items():
        parser.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            type=float,
            default=None,
            help=f"{name} rating ({lo}-{hi}).",
        )
    parser.add_argument("--tag", dest="tags", action="append", default=None, help="Tag (repeatable).")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Spark Plug: prioritize tasks, focus, earn falling-block pieces.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Path to the JSON data file (overrides data_path in the config).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (for reproducible draws).")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("tasks", help="List tasks ranked by score.")
    p.add_argument("--all", action="store_true", help="Include completed tasks.")

    p = sub.add_parser("add", help="Add a task.")
    p.add_argument("title")
    _add_attribute_args(p)

    p = sub.add_parser("edit", help="Edit a task.")
    p.add_argument("task_id")
    p.add_argument("--title", default=None)
    _add_attribute_args(p)

    p = sub.add_parser("done", help="Toggle a task's completion.")
    p.add_argument("task_id")

    p = sub.add_parser("remove", help="Delete a task.")
    p.add_argument("task_id")

    p = sub.add_parser("weights", help="Show or set scoring weights.")
    p.add_argument("--impact", type=float, default=None)
    p.add_argument("--urgency", type=float, default=None)
    p.add_argument("--energy-fit", dest="energy_fit", type=float, default=None)
    p.add_argument("--complexity", type=float, default=None)

    sub.add_parser("inventory", help="Show the piece inventory.")

    p = sub.add_parser("focus", help="Run the focus timer.")
    p.add_argument("--task", dest="task_id", default=None,
                   help="Task to log the session against (default: recommended task).")
    p.add_argument("--phases", type=int, default=1,
                   help="Number of phases to run before exiting (default: 1).")

    p = sub.add_parser("timer", help="Show or set focus timer lengths.")
    for name, (lo, hi) in SETTING_RANGES.items():
        p.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            type=int,
            default=None,
            help=f"{name} ({lo}-{hi}).",
        )

    sub.add_parser("play", help="Play the reward game.")
    return parser.parse_args(argv)


def _patch_from_args(args: argparse.Namespace) -> dict:
    patch = {name: getattr(args, name) for name in ATTRIBUTE_RANGES if getattr(args, name) is not None}
    if args.tags is not None:
        patch["tags"] = tuple(args.tags)
    return patch


def cmd_tasks(data: AppData, args: argparse.Namespace) -> None:
    tasks = list(data.tasks) if args.all else data.tasks.open_tasks()
    ranked = rank_tasks(tasks, data.weights)
    best = best_next_task(data.tasks, data.weights)
    w = data.weights
    print(f"Open tasks: {len(data.tasks.open_tasks())} | Planned sessions: {data.tasks.total_effort():g}")
    print(f"Weights: impact {w.impact:.2f} | urgency {w.urgency:.2f} | "
          f"fit {w.energy_fit:.2f} | complexity {w.complexity:.2f}")
    if not ranked:
        print("No tasks yet. Add one with: main.py add \"title\"")
        return
    for task, score in ranked:
        marker = "*" if best is not None and task.id == best.id else " "
        status = "x" if task.done else " "
        tags = f" [{', '.join(task.tags)}]" if task.tags else ""
        print(
            f"{marker} [{status}] {score * 100:5.0f}  {task.id}  {task.title}{tags}  "
            f"(I{task.impact:g} U{task.urgency:g} F{task.energy_fit:g} C{task.complexity:g} E{task.effort:g})"
        )


def cmd_done(data: AppData, args: argparse.Namespace, config: dict, rng: random.Random) -> None:
    data.inventory, granted = data.tasks.toggle_done(
        args.task_id,
        data.inventory,
        rng,
        grant_min=config["grant_min"],
        grant_max=config["grant_max"],
    )
    task = data.tasks.get(args.task_id)
    if task.done:
        print(f"Completed: {task.title}")
        print(f"Pieces earned: {' '.join(granted)}")
    else:
        print(f"Reopened: {task.title}")


def cmd_weights(data: AppData, args: argparse.Namespace) -> None:
    patch = {
        name: getattr(args, name)
        for name in ("impact", "urgency", "energy_fit", "complexity")
        if getattr(args, name) is not None
    }
    if patch:
        current = data.weights.to_dict()
        current.update(patch)
        data.weights = Weights(**current)
    for name, value in data.weights.to_dict().items():
        print(f"{name:>10}: {value:.2f}")


def cmd_inventory(data: AppData) -> None:
    for kind in PIECE_KINDS:
        print(f"{kind}: {data.inventory.count(kind)}")
    print(f"Total: {data.inventory.total()}")


def cmd_focus(data: AppData, args: argparse.Namespace) -> None:
    task_id = args.task_id
    if task_id is None:
        best = best_next_task(data.tasks, data.weights)
        task_id = best.id if best is not None else None
    if task_id is not None:
        print(f"Working on: {data.tasks.get(task_id).title}")

    timer = FocusTimer(settings=data.timer, rewards=data.rewards, logs=data.logs)
    timer.current_task_id = task_id
    timer.start()
    phases_done = 0
    try:
        while phases_done < args.phases:
            print(f"\r{PHASE_LABELS[timer.phase]:<12} {format_clock(timer.seconds_left)}", end="", flush=True)
            time.sleep(1)
            if timer.tick():
                phases_done += 1
                print(f"\nPhase complete. Cycles: {timer.cycles} | "
                      f"Coins: {timer.rewards.coins} | Streak: {timer.rewards.streak}")
    except KeyboardInterrupt:
        print("\nTimer stopped.")
    data.rewards = timer.rewards
    data.logs = timer.logs


def cmd_timer(data: AppData, args: argparse.Namespace) -> None:
    patch = {name: getattr(args, name) for name in SETTING_RANGES if getattr(args, name) is not None}
    if patch:
        current = data.timer.to_dict()
        current.update(patch)
        data.timer = TimerSettings(**current)
    for name, value in data.timer.to_dict().items():
        print(f"{name:>21}: {value}")


def main(argv: list[str] | None = None) -> None:
    """Parse args, load config and data, dispatch, and save."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
        storage = Storage(args.data or config["data_path"])
        data = storage.load(
            default_weights=Weights.from_dict(config.get("weights")),
            default_timer=TimerSettings.from_dict(config),
        )
        rng = random.Random(args.seed)

        if args.command == "tasks":
            cmd_tasks(data, args)
            return
        elif args.command == "add":
            task = data.tasks.quick_add(args.title, **_patch_from_args(args))
            print(f"Added {task.id}: {task.title}")
        elif args.command == "edit":
            patch = _patch_from_args(args)
            if args.title is not None:
                patch["title"] = args.title
            task = data.tasks.update(args.task_id, **patch)
            print(f"Updated {task.id}: {task.title}")
        elif args.command == "done":
            cmd_done(data, args, config, rng)
        elif args.command == "remove":
            task = data.tasks.remove(args.task_id)
            print(f"Removed {task.id}: {task.title}")
        elif args.command == "weights":
            cmd_weights(data, args)
        elif args.command == "inventory":
            cmd_inventory(data)
            return
        elif args.command == "timer":
            cmd_timer(data, args)
        elif args.command == "focus":
            cmd_focus(data, args)
        elif args.command == "play":
            from sparkplug.play import play_reward
            data.inventory, best_score = play_reward(config, data.inventory, rng)
            print(f"Best score: {best_score}")

        storage.save(data)
    except (KeyError, ValueError, FileNotFoundError, StorageError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
