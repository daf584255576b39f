# Birthday Game (catch the falling treats)
# Arrows = move   Space = start / play again   R = restart

import argparse
import logging
import os
import sys
from pathlib import Path

import catchkit
from catchgame import GameConfig, GameLoop, HighScoreStore, MemoryStore

logger = logging.getLogger(__name__)

SAVE_ENV     = "BIRTHDAY_GAME_SAVE"
DEFAULT_SAVE = Path("~/.birthday_game.json")


def save_path(cli_value=None):
    """--save-file beats $BIRTHDAY_GAME_SAVE beats ~/.birthday_game.json."""
    if cli_value:
        return Path(cli_value).expanduser()
    env = os.environ.get(SAVE_ENV)
    if env:
        return Path(env).expanduser()
    return DEFAULT_SAVE.expanduser()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Catch the falling birthday treats.")
    parser.add_argument("--save-file", help=f"high score file (default: ${SAVE_ENV} or {DEFAULT_SAVE})")
    parser.add_argument("--no-save", action="store_true", help="keep the high score in memory only")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--fps", type=int, default=60)
    return parser.parse_args(argv)


def setup_logging(level):
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_game(args):
    config = GameConfig()
    if args.no_save:
        store = MemoryStore()
    else:
        store = HighScoreStore(save_path(args.save_file), key=config.storage_key)
        logger.info("High score file: %s", store.path)
    return GameLoop(config=config, store=store)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)
    game = build_game(args)
    catchkit.start(game, title="Birthday Game", fps=args.fps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
