"""Tkinter desktop GUI for Quarto."""

from __future__ import annotations

import argparse
import logging
import tkinter as tk
from pathlib import Path
from tkinter import messagebox
from typing import Optional

from ai.profiles import profile_names
from engine.pieces import PIECES, Piece
from engine.rules import CELL_COUNT
from game.config import GameConfig
from game.scheduler import Callback, Scheduler
from game.session import GameSession
from game.timer import format_mmss
from game.view import GameView, PresentationSink, describe_outcome

PIECE_COLORS = {0: "#ff7ab6", 1: "#6bb7ff"}
WIN_BG = "#ffe08a"
LAST_MOVE_BG = "#d9f2d9"
SELECTED_BG = "#ffd966"
DEFAULT_BG = "#f4f4f4"


def piece_text(piece: Piece) -> str:
    """Compact glyph: square/round brackets for shape, upper case when tall, ring when hollow."""
    core = "o" if piece.hollow else "@"
    if piece.height:
        core = core.upper() if core.isalpha() else "#"
    return f"[{core}]" if piece.shape else f"({core})"


class TkScheduler(Scheduler):
    """Schedules AI steps on the Tk event loop."""

    def __init__(self, root: tk.Misc) -> None:
        self.root = root

    def schedule(self, delay_ms: int, callback: Callback) -> None:
        self.root.after(max(0, delay_ms), callback)


class QuartoGUI(tk.Tk, PresentationSink):
    """Simple Quarto desktop interface."""

    def __init__(self, config: GameConfig, profile_name: Optional[str] = None) -> None:
        super().__init__()
        self.title("Quarto vs AI")
        self.resizable(False, False)

        self.status_var = tk.StringVar(value="Welcome to Quarto.")
        self.score_var = tk.StringVar(value="")
        self.timer_var = tk.StringVar(value="00:00")
        self.mode_var = tk.StringVar(value="")
        self._view: Optional[GameView] = None
        self._announced = False

        self._build_layout()
        self.session = GameSession(
            config=config,
            sink=self,
            scheduler=TkScheduler(self),
            profile_name=profile_name,
        )
        self.mode_var.set(self.session.profile.name)
        self._tick_timer()

    def _build_layout(self) -> None:
        outer = tk.Frame(self, padx=10, pady=10)
        outer.pack()

        tk.Label(outer, text="Quarto", font=("Segoe UI", 12, "bold")).grid(row=0, column=0, columnspan=2, sticky="w")
        tk.Label(outer, textvariable=self.status_var, anchor="w").grid(row=1, column=0, columnspan=2, sticky="w")
        tk.Label(outer, textvariable=self.score_var, anchor="w").grid(row=2, column=0, sticky="w")
        tk.Label(outer, textvariable=self.timer_var, anchor="e").grid(row=2, column=1, sticky="e", pady=(0, 8))

        board_frame = tk.Frame(outer, bd=1, relief=tk.SOLID)
        board_frame.grid(row=3, column=0, padx=(0, 10))
        self.cell_buttons: list[tk.Button] = []
        for index in range(CELL_COUNT):
            btn = tk.Button(
                board_frame,
                text="",
                width=5,
                height=2,
                font=("Consolas", 12, "bold"),
                command=lambda i=index: self._on_cell_click(i),
            )
            btn.grid(row=index // 4, column=index % 4, padx=1, pady=1)
            self.cell_buttons.append(btn)

        tray_frame = tk.Frame(outer)
        tray_frame.grid(row=3, column=1, sticky="n")
        self.piece_buttons: list[tk.Button] = []
        for piece in PIECES:
            btn = tk.Button(
                tray_frame,
                text=piece_text(piece),
                fg=PIECE_COLORS[piece.color],
                width=4,
                font=("Consolas", 11, "bold"),
                command=lambda pid=piece.id: self._on_piece_click(pid),
            )
            btn.grid(row=piece.id // 4, column=piece.id % 4, padx=1, pady=1)
            self.piece_buttons.append(btn)

        controls = tk.Frame(outer)
        controls.grid(row=4, column=0, columnspan=2, sticky="w", pady=(8, 0))
        tk.Button(controls, text="New Game", command=self._new_game).pack(side=tk.LEFT)
        tk.Button(controls, text="Reset Score", command=self._reset_score).pack(side=tk.LEFT, padx=4)
        tk.OptionMenu(controls, self.mode_var, *profile_names(), command=self._on_mode_change).pack(side=tk.LEFT)
        tk.Button(controls, text="Quit", command=self.destroy).pack(side=tk.LEFT, padx=4)

    def render(self, view: GameView) -> None:
        self._view = view
        for index, btn in enumerate(self.cell_buttons):
            piece_id = view.cells[index]
            bg = DEFAULT_BG
            if index in view.winning_cells:
                bg = WIN_BG
            elif index == view.last_move_index:
                bg = LAST_MOVE_BG
            if piece_id is None:
                btn.configure(text="", bg=bg)
            else:
                piece = PIECES[piece_id]
                btn.configure(text=piece_text(piece), fg=PIECE_COLORS[piece.color], bg=bg)

        for piece_id, btn in enumerate(self.piece_buttons):
            if view.used[piece_id]:
                btn.configure(state=tk.DISABLED, bg=DEFAULT_BG)
            else:
                btn.configure(state=tk.NORMAL, bg=SELECTED_BG if piece_id == view.selected else DEFAULT_BG)

        self.status_var.set(view.status_line())
        self.score_var.set(view.score.describe())
        if view.game_over and not self._announced:
            self._announced = True
            self.after(50, lambda: messagebox.showinfo("Game Over", describe_outcome(view.outcome)))
        elif not view.game_over:
            self._announced = False

    def _tick_timer(self) -> None:
        self.timer_var.set(format_mmss(self.session.timer.elapsed_seconds))
        self.after(250, self._tick_timer)

    def _on_piece_click(self, piece_id: int) -> None:
        self.session.select_for_opponent(piece_id)

    def _on_cell_click(self, index: int) -> None:
        self.session.place_for_human(index)

    def _new_game(self) -> None:
        self.session.new_game()

    def _reset_score(self) -> None:
        self.session.reset_score()

    def _on_mode_change(self, name: str) -> None:
        self.mode_var.set(self.session.set_difficulty(name))
        self.session.new_game()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Quarto desktop GUI")
    parser.add_argument("--config", type=str, default=None, help="Path to game config JSON")
    parser.add_argument("--profile", choices=profile_names(), default=None, help="AI difficulty (default: last used)")
    parser.add_argument("--seed", type=int, default=None, help="Deterministic AI seed")
    parser.add_argument("--data-dir", type=str, default=None, help="Where score and profile files live")
    parser.add_argument("--log-level", default="INFO", help="Python logging level")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    config = GameConfig.from_json(args.config) if args.config else GameConfig()
    if args.seed is not None:
        config.seed = args.seed
    if args.data_dir:
        config.data_dir = Path(args.data_dir)
    app = QuartoGUI(config=config, profile_name=args.profile)
    app.mainloop()


if __name__ == "__main__":
    main()
