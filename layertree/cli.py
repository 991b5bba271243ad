"""Command-line front door for layertree.

Replays a JSON list of edit steps against a fresh snapshot.
Then prints the resulting forest as tree rows or as a JSON export.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from . import config
from .errors import LayerNotFoundError
from .highlight import highlight_json
from .render import render_layer_forest
from .state import LayerState, build_initial_state, check_state_invariants, transition
from .state.export import StepFormatError, action_from_step, snapshot_to_dict

logger = logging.getLogger(__name__)


def load_script(path: Path) -> list[object]:
    """Read a replay script, rejecting anything but a top-level JSON list."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SystemExit(f"Cannot read script: {path} ({exc.strerror or exc})") from exc
    except ValueError as exc:
        raise SystemExit(f"Invalid JSON in script {path}: {exc}") from exc
    if not isinstance(data, list):
        raise SystemExit(f"Script must be a JSON list of steps: {path}")
    return data


def replay_steps(state: LayerState, steps: Iterable[object], *, purge_subtrees: bool = True) -> LayerState:
    """Apply each step in order, checking invariants after every transition.

    Failures raise ``SystemExit`` naming the 1-based step number.
    """
    for number, step in enumerate(steps, start=1):
        try:
            action = action_from_step(step)
            state = transition(state, action, purge_subtrees=purge_subtrees)
            check_state_invariants(state)
        except StepFormatError as exc:
            raise SystemExit(f"step {number}: {exc}") from exc
        except LayerNotFoundError as exc:
            raise SystemExit(f"step {number}: {exc.args[0]}") from exc
        except ValueError as exc:
            raise SystemExit(f"step {number}: invalid state: {exc}") from exc
        logger.debug("step %d: %s -> %d root(s)", number, type(action).__name__, len(state.roots))
    return state


def save_cli_defaults(args: argparse.Namespace) -> None:
    """Persist explicitly given options so later runs use them by default."""
    if args.style:
        config.save_highlight_style(args.style)
    if args.root_name:
        config.save_default_root_name(args.root_name)
    config.save_purge_deleted_subtrees(not args.keep_dangling_flags)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, replay the script, and print the final snapshot."""
    parser = argparse.ArgumentParser(description="Replay layer-tree edit steps and print the resulting forest.")
    parser.add_argument("script", help="Path to a JSON list of edit steps.")
    parser.add_argument("--json", action="store_true", help="Print the final snapshot as JSON instead of tree rows.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--style", default=None, help="Pygments style name for --json output.")
    parser.add_argument("--root-id", default=None, help="Fixed id for the initial root layer.")
    parser.add_argument("--root-name", default=None, help="Name for the initial root layer.")
    parser.add_argument(
        "--keep-dangling-flags",
        action="store_true",
        help="Only purge the deleted id itself from collapsed/hidden flags, not its descendants.",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist --style, --root-name, and the deletion cleanup policy as defaults.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log each applied step to stderr.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.save_defaults:
        save_cli_defaults(args)

    script_path = Path(args.script)
    if not script_path.exists():
        raise SystemExit(f"Path not found: {script_path}")
    steps = load_script(script_path)

    root_name = args.root_name or config.load_default_root_name()
    purge_subtrees = config.load_purge_deleted_subtrees() and not args.keep_dangling_flags
    state = replay_steps(build_initial_state(root_name, args.root_id), steps, purge_subtrees=purge_subtrees)

    color = not args.no_color and sys.stdout.isatty()
    if args.json:
        text = json.dumps(snapshot_to_dict(state), indent=2) + "\n"
        if color:
            text = highlight_json(text, args.style or config.load_highlight_style())
        sys.stdout.write(text)
        return
    sys.stdout.write(render_layer_forest(state, color=color))


if __name__ == "__main__":
    main()
