"""Tkinter-based graphical client for Tic-Tac-Toe with move history."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import tkinter as tk
from tkinter import ttk

from .config import load_config, sort_order_from_config
from .controller import GameController, GameSnapshot
from .game import BOARD_SIZE, EMPTY, X
from .utils import setup_logger

logger = logging.getLogger(__name__)


def point_to_cell(x: float, y: float, padding: float, cell_size: float) -> Optional[int]:
    """Map canvas coordinates to a cell index, or ``None`` outside the grid."""

    rel_x = x - padding
    rel_y = y - padding
    board_size = cell_size * BOARD_SIZE
    if rel_x < 0 or rel_y < 0 or rel_x >= board_size or rel_y >= board_size:
        return None
    col = int(rel_x // cell_size)
    row = int(rel_y // cell_size)
    return row * BOARD_SIZE + col


def cell_bbox(index: int, padding: float, cell_size: float) -> Tuple[float, float, float, float]:
    row, col = divmod(index, BOARD_SIZE)
    x0 = padding + col * cell_size
    y0 = padding + row * cell_size
    return x0, y0, x0 + cell_size, y0 + cell_size


class TicTacToeApp:
    def __init__(
        self,
        controller: Optional[GameController] = None,
        config: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        gui_cfg = self.config.get("gui", {})
        self.cell_size = int(gui_cfg.get("cell_size", 96))
        self.padding = int(gui_cfg.get("padding", 16))
        self.colors: Dict[str, str] = dict(gui_cfg.get("colors", {}))

        self.controller = controller or GameController(
            sort_order=sort_order_from_config(self.config)
        )

        self.root = tk.Tk()
        self.root.title(str(gui_cfg.get("title", "Tic-Tac-Toe")))
        self.root.resizable(False, False)

        self.status_var = tk.StringVar()
        self.sort_var = tk.StringVar()
        self.hover_cell: Optional[int] = None
        self._move_widgets: List[tk.Widget] = []
        self._snapshot: GameSnapshot = self.controller.snapshot()

        self._build_widgets()
        self._unsubscribe = self.controller.subscribe(self.render)
        self.render(self._snapshot)

    def _build_widgets(self) -> None:
        control_frame = ttk.Frame(self.root, padding=10)
        control_frame.pack(side=tk.TOP, fill=tk.X)

        ttk.Button(
            control_frame,
            text="New game",
            command=self.controller.reset,
        ).pack(side=tk.LEFT)

        ttk.Label(control_frame, textvariable=self.status_var).pack(side=tk.RIGHT)

        body = ttk.Frame(self.root, padding=10)
        body.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        canvas_size = self.cell_size * BOARD_SIZE + 2 * self.padding
        self.canvas = tk.Canvas(
            body,
            width=canvas_size,
            height=canvas_size,
            background=self.colors.get("background", "#f8f8f8"),
            highlightthickness=0,
        )
        self.canvas.pack(side=tk.LEFT)
        self.canvas.bind("<Button-1>", self.on_click)
        self.canvas.bind("<Motion>", self.on_motion)
        self.canvas.bind("<Leave>", self.on_leave_canvas)

        info = ttk.Frame(body, padding=(10, 0))
        info.pack(side=tk.LEFT, fill=tk.Y)
        ttk.Button(
            info,
            textvariable=self.sort_var,
            command=self.controller.toggle_sort,
        ).pack(side=tk.TOP, fill=tk.X, pady=(0, 6))

        self.moves_frame = ttk.Frame(info)
        self.moves_frame.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

    # ------------------------------------------------------------------
    # Intents
    def on_click(self, event: tk.Event) -> None:
        cell = point_to_cell(event.x, event.y, self.padding, self.cell_size)
        if cell is None:
            return
        self.controller.handle_cell_click(cell)

    def on_motion(self, event: tk.Event) -> None:
        cell = point_to_cell(event.x, event.y, self.padding, self.cell_size)
        legal = self.controller.legal_action_mask()
        if cell is not None and legal[cell]:
            if cell != self.hover_cell:
                self.hover_cell = cell
                self.draw_board()
            self.canvas.configure(cursor="hand2")
        else:
            if self.hover_cell is not None:
                self.hover_cell = None
                self.draw_board()
            self.canvas.configure(cursor="arrow")

    def on_leave_canvas(self, _event: tk.Event) -> None:
        if self.hover_cell is not None:
            self.hover_cell = None
            self.draw_board()
        self.canvas.configure(cursor="arrow")

    # ------------------------------------------------------------------
    # Rendering
    def render(self, snapshot: GameSnapshot) -> None:
        self._snapshot = snapshot
        self.hover_cell = None
        self.status_var.set(snapshot.status)
        self.sort_var.set(snapshot.sort_label)
        self.draw_board()
        self.draw_moves(snapshot)

    def draw_moves(self, snapshot: GameSnapshot) -> None:
        for widget in self._move_widgets:
            widget.destroy()
        self._move_widgets = []

        for entry in snapshot.moves:
            if entry.is_current:
                widget: tk.Widget = ttk.Label(self.moves_frame, text=entry.label)
            else:
                widget = ttk.Button(
                    self.moves_frame,
                    text=entry.label,
                    command=lambda move=entry.move: self.controller.handle_jump(move),
                )
            widget.pack(side=tk.TOP, anchor=tk.W, fill=tk.X)
            self._move_widgets.append(widget)

    def draw_board(self) -> None:
        snapshot = self._snapshot
        self.canvas.delete("all")
        cell = self.cell_size
        winning = set(snapshot.winning_line)

        for idx in winning:
            x0, y0, x1, y1 = cell_bbox(idx, self.padding, cell)
            self.canvas.create_rectangle(
                x0, y0, x1, y1, fill=self.colors.get("winning", "#ffe082"), outline=""
            )

        for idx, value in enumerate(snapshot.board):
            if value == EMPTY:
                continue
            self._draw_mark(idx, value)

        # Draw grid lines
        size = cell * BOARD_SIZE
        for i in range(1, BOARD_SIZE):
            start = self.padding + i * cell
            self.canvas.create_line(
                self.padding,
                start,
                self.padding + size,
                start,
                width=3,
                fill=self.colors.get("grid", "#444444"),
            )
            self.canvas.create_line(
                start,
                self.padding,
                start,
                self.padding + size,
                width=3,
                fill=self.colors.get("grid", "#444444"),
            )

        if self.hover_cell is not None:
            x0, y0, x1, y1 = cell_bbox(self.hover_cell, self.padding, cell)
            self.canvas.create_rectangle(
                x0 + 3,
                y0 + 3,
                x1 - 3,
                y1 - 3,
                outline=self.colors.get("hover", "#4caf50"),
                width=3,
            )

    def _draw_mark(self, index: int, value: str) -> None:
        x0, y0, x1, y1 = cell_bbox(index, self.padding, self.cell_size)
        cx = (x0 + x1) / 2
        cy = (y0 + y1) / 2
        if value == X:
            offset = self.cell_size * 0.3
            for dx in (-offset, offset):
                self.canvas.create_line(
                    cx - dx,
                    cy - offset,
                    cx + dx,
                    cy + offset,
                    width=4,
                    fill=self.colors.get("x", "#1a4b8c"),
                )
        else:
            radius = self.cell_size * 0.32
            self.canvas.create_oval(
                cx - radius,
                cy - radius,
                cx + radius,
                cy + radius,
                width=4,
                outline=self.colors.get("o", "#b53d00"),
            )

    def run(self) -> None:
        try:
            self.root.mainloop()
        finally:
            self._unsubscribe()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Tic-Tac-Toe with move history")
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--log-level", default=None, help="Overrides logging.level from the config")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    config = load_config(args.config)
    level = args.log_level or config.get("logging", {}).get("level", "INFO")
    setup_logger("tictactoe", level)
    logger.info("Starting Tic-Tac-Toe window")
    app = TicTacToeApp(config=config)
    app.run()


if __name__ == "__main__":
    main()
