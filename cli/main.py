"""CLI entrypoint for playing Quarto against the AI in a terminal."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ai.profiles import profile_names
from engine.board import Board
from engine.pieces import PIECES
from engine.rules import BOARD_COLS, BOARD_ROWS, pos_to_index
from engine.turns import Actor
from game.config import GameConfig
from game.scheduler import ImmediateScheduler
from game.session import GameSession
from game.storage import ProfileStore, ScoreStore
from game.view import GameView, PresentationSink

HELP_TEXT = (
    "Commands: give <piece> | place <index> | place <row> <col> | pieces | score | "
    "mode <" + "|".join(profile_names()) + "> | new | reset-score | help | quit"
)


@dataclass(frozen=True)
class Command:
    """A parsed terminal command."""

    name: str
    args: Tuple[int, ...] = ()
    text: str = ""


def parse_user_command(command: str) -> Optional[Command]:
    parts = command.strip().split()
    if not parts:
        return None

    op = parts[0].lower()
    try:
        if op == "give" and len(parts) == 2:
            return Command(name="give", args=(int(parts[1]),))
        if op == "place" and len(parts) == 2:
            return Command(name="place", args=(int(parts[1]),))
        if op == "place" and len(parts) == 3:
            row, col = int(parts[1]), int(parts[2])
            if not (0 <= row < BOARD_ROWS and 0 <= col < BOARD_COLS):
                return None
            return Command(name="place", args=(pos_to_index((row, col)),))
    except ValueError:
        return None
    if op == "mode" and len(parts) == 2:
        return Command(name="mode", text=parts[1].lower())
    if op in {"pieces", "score", "new", "reset-score", "help", "quit", "exit"} and len(parts) == 1:
        return Command(name="quit" if op == "exit" else op)
    return None


def render_tray(view: GameView) -> str:
    """Unused pieces as ``id:symbol``, the piece in hand marked with ``*``."""
    entries: List[str] = []
    for piece in PIECES:
        if view.used[piece.id]:
            continue
        marker = "*" if piece.id == view.selected else " "
        entries.append(f"{marker}{piece.id:>2d}:{piece.symbol}")
    return " ".join(entries)


class TerminalSink(PresentationSink):
    """Prints the board on human turns and at game end; status lines otherwise."""

    def render(self, view: GameView) -> None:
        if view.game_over or view.phase.actor is Actor.HUMAN:
            print()
            print(Board.from_cells(view.cells).render_ascii())
            print(f"Pieces: {render_tray(view)}")
            if view.selected is not None:
                print(f"In hand: {PIECES[view.selected].symbol} ({PIECES[view.selected].describe()})")
        print(view.status_line())
        if view.game_over:
            print(f"Score: {view.score.describe()}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Quarto against the AI in the terminal.")
    parser.add_argument("--config", type=str, default=None, help="Path to game config JSON")
    parser.add_argument("--profile", choices=profile_names(), default=None, help="AI difficulty (default: last used)")
    parser.add_argument("--seed", type=int, default=None, help="Deterministic AI seed")
    parser.add_argument("--data-dir", type=str, default=None, help="Where score and profile files live")
    parser.add_argument("--no-pause", action="store_true", help="Apply AI moves without the thinking pause")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Python logging level")
    return parser.parse_args()


def load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.from_json(args.config) if args.config else GameConfig()
    if args.seed is not None:
        config.seed = args.seed
    if args.data_dir:
        config.data_dir = Path(args.data_dir)
    return config


def build_session(args: argparse.Namespace) -> GameSession:
    config = load_config(args)
    session = GameSession(
        config=config,
        score_store=ScoreStore(config.score_path),
        profile_store=ProfileStore(config.profile_path, default=config.default_profile),
        sink=TerminalSink(),
        scheduler=ImmediateScheduler(pause=not args.no_pause),
    )
    if args.profile:
        session.set_difficulty(args.profile)
        session.new_game()
    return session


def run_cli() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    logger = logging.getLogger("quarto.cli")

    print(HELP_TEXT)
    session = build_session(args)
    logger.info("Starting Quarto game. profile=%s", session.profile.name)

    while True:
        try:
            user_input = input("quarto> ")
        except EOFError:
            print()
            break

        command = parse_user_command(user_input)
        if command is None:
            print("Invalid command format. Type 'help'.")
            continue
        if command.name == "quit":
            print("Exiting game.")
            break
        if command.name == "help":
            print(HELP_TEXT)
        elif command.name == "pieces":
            for piece in PIECES:
                state = "used" if session.board.used[piece.id] else "free"
                print(f"{piece.id:>2d} {piece.symbol} {piece.describe():<28} {state}")
        elif command.name == "score":
            print(f"Score: {session.score.describe()}")
        elif command.name == "new":
            session.new_game()
        elif command.name == "reset-score":
            session.reset_score()
            print(f"Score: {session.score.describe()}")
        elif command.name == "mode":
            name = session.set_difficulty(command.text)
            print(f"Difficulty: {name}")
            session.new_game()
        elif command.name == "give":
            if not session.select_for_opponent(command.args[0]):
                print("That piece cannot be handed over right now.")
        elif command.name == "place":
            if session.place_for_human(command.args[0]) is None:
                print("You cannot place there right now.")


if __name__ == "__main__":
    run_cli()
