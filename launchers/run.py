import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from engine.app.loop import run_game


def parse_screen(value: str):
    try:
        w, h = map(int, value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {value!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"screen size must be positive, got {value!r}")
    return w, h


def build_parser():
    parser = argparse.ArgumentParser(description="Reaction Time Game Launcher")
    parser.add_argument("--game", default="reaction_time", help="Game folder name under games/")
    parser.add_argument("--screen", type=parse_screen, default=(520, 600), help="Screen size WxH, e.g. 520x600")
    parser.add_argument("--fps", type=int, default=120, help="Frame rate cap (the display timer samples every 10 ms)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity")
    parser.add_argument("--debug", action="store_true", help="Show the measured fps in the window caption")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run_game(
            game_id=args.game,
            screen_size=args.screen,
            fps=args.fps,
            debug=args.debug,
        )
    except (FileNotFoundError, AttributeError, ValueError) as e:
        logging.getLogger("launcher").error("Could not start %s: %s", args.game, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
