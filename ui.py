"""
TicTacToe UI
A graphical interface using Tkinter.

Shows:
- Main menu (two players or versus AI, and which side you play)
- The 3x3 board, with the winning line highlighted
- Game status (whose turn, result)
- Reset and Back buttons
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import List, Optional

from logic.config import GameConfig
from logic.game_controller import GameController
from logic.game_state import GameResult, PlayerSetup, PlayerType, Symbol, WinLine
from scheduling.tk_scheduler import TkScheduler

logger = logging.getLogger(__name__)


class TicTacToeUI:
    """
    Main UI class for TicTacToe.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """Initialize the UI."""
        self.config = config or GameConfig()
        self.setup = PlayerSetup(self.config.DEFAULT_PLAYER_X, self.config.DEFAULT_PLAYER_O)

        # Create UI
        self._create_ui()

        self.scheduler = TkScheduler(self.root)
        self.controller = GameController(self.scheduler, self.config)
        self.controller.add_move_listener(self._on_move)
        self.controller.add_game_end_listener(self._on_game_end)

        self._show_menu()

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title(self.config.WINDOW_TITLE)
        self.root.configure(bg=self.config.BACKGROUND)
        self.root.minsize(360, 460)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background=self.config.BACKGROUND)
        style.configure('TLabel', background=self.config.BACKGROUND, foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 12), foreground='#ffd700')
        style.configure('TButton', font=('Segoe UI', 10, 'bold'))
        style.configure('TRadiobutton', background=self.config.BACKGROUND, foreground='white')

        # ---- Menu screen ----
        self.menu_frame = ttk.Frame(self.root)
        ttk.Label(self.menu_frame, text="TicTacToe", style='Title.TLabel').pack(pady=(20, 15))

        self.vs_ai_var = tk.BooleanVar(value=PlayerType.AUTOMATED in (self.setup.player_x, self.setup.player_o))
        ttk.Radiobutton(self.menu_frame, text="Two Players", variable=self.vs_ai_var, value=False).pack(anchor=tk.W, padx=40)
        ttk.Radiobutton(self.menu_frame, text="Versus AI", variable=self.vs_ai_var, value=True).pack(anchor=tk.W, padx=40)

        ttk.Label(self.menu_frame, text="Play as:").pack(pady=(15, 5))
        human_side = Symbol.O if self.setup.player_x == PlayerType.AUTOMATED else Symbol.X
        self.side_var = tk.StringVar(value=human_side.value)
        side_frame = ttk.Frame(self.menu_frame)
        side_frame.pack()
        for symbol in Symbol:
            ttk.Radiobutton(side_frame, text=symbol.value, variable=self.side_var, value=symbol.value).pack(side=tk.LEFT, padx=10)

        ttk.Button(self.menu_frame, text="▶ Start", command=self._start_game).pack(pady=20)
        ttk.Button(self.menu_frame, text="✕ Quit", command=self._quit).pack()

        # ---- Game screen ----
        self.game_frame = ttk.Frame(self.root)
        self.status_label = ttk.Label(self.game_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=(10, 10))

        grid_frame = ttk.Frame(self.game_frame)
        grid_frame.pack()
        self.cells: List[tk.Button] = []
        for index in range(9):
            button = tk.Button(
                grid_frame,
                text="",
                width=3,
                font=self.config.CELL_FONT,
                bg=self.config.CELL_BG,
                activebackground=self.config.CELL_BG,
                relief=tk.RAISED,
                command=lambda i=index: self._on_cell_clicked(i)
            )
            button.grid(row=index // 3, column=index % 3, padx=2, pady=2)
            self.cells.append(button)

        controls = ttk.Frame(self.game_frame)
        controls.pack(pady=10)
        ttk.Button(controls, text="🔄 Reset", command=self._reset_game).pack(side=tk.LEFT, padx=5)
        ttk.Button(controls, text="← Back", command=self._back_to_menu).pack(side=tk.LEFT, padx=5)

    # ==================== SCREENS ====================

    def _show_menu(self):
        self.game_frame.pack_forget()
        self.menu_frame.pack(fill=tk.BOTH, expand=True)

    def _start_game(self):
        """Read the menu choices and start a game."""
        self.setup = PlayerSetup.from_menu(self.vs_ai_var.get(), Symbol(self.side_var.get()))
        self.menu_frame.pack_forget()
        self.game_frame.pack(fill=tk.BOTH, expand=True)
        self._reset_game()

    def _back_to_menu(self):
        self.controller.on_back_navigation()
        self._show_menu()

    def _reset_game(self):
        """Clear the board display and start over."""
        for cell in self.cells:
            cell.configure(text="", bg=self.config.CELL_BG, state=tk.NORMAL)
        self.controller.reset(self.setup.player_x, self.setup.player_o)
        self._update_status()

    # ==================== EVENTS ====================

    def _on_cell_clicked(self, index: int):
        # Rejected clicks (occupied, AI's turn, game over) are ignored
        if not self.controller.apply_move(index):
            self.root.focus_set()
            return
        self._update_status()

    def _on_move(self, index: int, symbol: Symbol):
        self.cells[index].configure(
            text=symbol.value,
            fg=self.config.SYMBOL_COLORS[symbol.value],
            disabledforeground=self.config.SYMBOL_COLORS[symbol.value],
            state=tk.DISABLED
        )
        self._update_status()

    def _on_game_end(self, result: GameResult, line: Optional[WinLine]):
        for cell in self.cells:
            cell.configure(state=tk.DISABLED)
        if line is not None:
            for index in line:
                self.cells[index].configure(bg=self.config.WIN_BG)
        self._update_status()

    def _update_status(self):
        """Update the status label."""
        result = self.controller.current_result()
        if result.is_terminal:
            icon = "🏆" if result.winner else "🤝"
            self.status_label.configure(text=f"{icon} {result.describe()}")
            return

        symbol = self.controller.current_player
        who = "AI" if self.controller.is_ai_turn() else "Human"
        self.status_label.configure(text=f"Turn: {symbol.value} ({who})")

    def _quit(self):
        """Quit the application."""
        logger.info("Quitting...")
        self.controller.on_back_navigation()
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


def main():
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format=GameConfig.LOG_FORMAT)
    ui = TicTacToeUI()
    ui.run()


if __name__ == "__main__":
    main()
