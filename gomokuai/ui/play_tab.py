"""Play tab: Human vs AI (or two humans) with interactive SVG board."""

from __future__ import annotations

import logging
import random as _random
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from gomokuai.agent.base import Strategy
from gomokuai.agent.config import DEFAULT_DIFFICULTY, MAX_DIFFICULTY, MIN_DIFFICULTY, clamp_difficulty
from gomokuai.agent.factory import DEFAULT_STRATEGY, available_strategies, create_strategy
from gomokuai.game.board import GomokuGameState, format_point, parse_coordinate
from gomokuai.game.record import RecordError, SaveData, list_saved_games, load_game, restore_game, save_game
from gomokuai.game.types import Point, Stone
from gomokuai.ui.board_component import render_board_svg

logger = logging.getLogger(__name__)

DEFAULT_UNDO_LIMIT = 3


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: GomokuGameState = field(default_factory=GomokuGameState)
    ai_enabled: bool = True
    strategy_name: str = DEFAULT_STRATEGY
    difficulty: int = DEFAULT_DIFFICULTY
    undo_limit: int = DEFAULT_UNDO_LIMIT
    remaining_undos: int = DEFAULT_UNDO_LIMIT
    human_player: Stone = Stone.BLACK
    strategy: Optional[Strategy] = None

    def __post_init__(self) -> None:
        if self.strategy is None:
            self.strategy = create_strategy(self.strategy_name, self.difficulty)

    def reset(
        self,
        human_player: Optional[Stone] = None,
        ai_enabled: Optional[bool] = None,
        strategy_name: Optional[str] = None,
        difficulty: Optional[int] = None,
        undo_limit: Optional[int] = None,
    ) -> None:
        self.game = GomokuGameState()
        if human_player is not None:
            self.human_player = human_player
        if ai_enabled is not None:
            self.ai_enabled = ai_enabled
        if strategy_name is not None:
            self.strategy_name = strategy_name
        if difficulty is not None:
            self.difficulty = clamp_difficulty(difficulty)
        if undo_limit is not None:
            self.undo_limit = max(0, int(undo_limit))
        self.remaining_undos = self.undo_limit
        # A fresh strategy per game, difficulty pushed in right away
        self.strategy = create_strategy(self.strategy_name, self.difficulty)

    def set_difficulty(self, level: int) -> None:
        self.difficulty = clamp_difficulty(level)
        self.strategy.set_difficulty(self.difficulty)

    @property
    def ai_to_move(self) -> bool:
        return (
            self.ai_enabled
            and not self.game.is_over
            and self.game.current_player is not self.human_player
        )

    def play_ai_turn(self) -> Optional[Point]:
        """Let the AI move if it is its turn. Returns the point played, if any."""
        if not self.ai_to_move:
            return None
        point = self.strategy.select_move(self.game)
        if point is None:
            logger.info("%s found no move", self.strategy.name)
            return None
        self.game.apply_move(point)
        return point

    @property
    def has_undoable_move(self) -> bool:
        """Against the AI only a turn that holds one of our stones can be taken back."""
        if not self.ai_enabled:
            return bool(self.game.moves)
        return any(move.stone is self.human_player for move in self.game.moves)

    def undo(self) -> bool:
        """Take back the last turn. Against the AI that is its reply plus our move."""
        if self.remaining_undos <= 0 or not self.has_undoable_move:
            return False
        if self.ai_enabled:
            if self.game.moves[-1].stone is not self.human_player:
                self.game.undo_move()  # undo AI
            if self.game.moves:
                self.game.undo_move()  # undo human
        else:
            self.game.undo_move()
        self.remaining_undos -= 1
        return True

    def to_save_data(self) -> SaveData:
        return SaveData.from_game(
            self.game,
            ai_enabled=self.ai_enabled,
            ai_difficulty=self.difficulty,
            undo_limit=self.undo_limit,
            remaining_undos=self.remaining_undos,
            strategy=self.strategy_name,
        )

    def load(self, data: SaveData) -> None:
        self.game = restore_game(data)
        self.ai_enabled = data.ai_enabled
        if data.strategy in available_strategies():
            self.strategy_name = data.strategy
        self.difficulty = clamp_difficulty(data.ai_difficulty)
        self.undo_limit = data.undo_limit
        self.remaining_undos = data.remaining_undos
        # Saves are made on the human's turn
        self.human_player = data.current_player
        self.strategy = create_strategy(self.strategy_name, self.difficulty)

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is None:
            return "Draw!"
        if not self.ai_enabled:
            return f"{g.winner} wins!"
        return "You win!" if g.winner is self.human_player else "AI wins!"

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            if g.winner is not None:
                return f"Game over — {self.game_over_banner} ({g.winner} by 5-in-a-row)"
            return "Game over — Draw!"
        if self.ai_to_move:
            return f"AI is thinking... ({g.current_player})"
        return f"{g.current_player} to move — undos left: {self.remaining_undos}"

    @property
    def move_history_table(self) -> list[list[str]]:
        return [
            [str(i + 1), str(move.stone), format_point(move.point)]
            for i, move in enumerate(self.game.moves)
        ]


def _make_board_html(session: GameSession) -> str:
    clickable = not session.game.is_over and not session.ai_to_move
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
    )


def _outputs(session: GameSession, message: Optional[str] = None):
    return (
        _make_board_html(session),
        message if message is not None else session.status_text,
        session.move_history_table,
        session,
    )


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the AI respond."""
    if session.game.is_over:
        return _outputs(session) + ("",)

    if session.ai_to_move:
        return _outputs(session, "Wait — it's the AI's turn.") + ("",)

    point = parse_coordinate(coord_text, session.game.board.size)
    if point is None:
        return _outputs(session, f"Invalid coordinate: '{coord_text}'. Use format like H8.") + ("",)

    if not session.game.board.is_empty(point):
        return _outputs(session, f"{format_point(point)} is already occupied.") + ("",)

    session.game.apply_move(point)
    session.play_ai_turn()
    return _outputs(session) + ("",)


def _new_game(
    color_choice: str,
    ai_enabled: bool,
    strategy_name: str,
    difficulty: int,
    undo_limit: int,
    session: GameSession,
):
    """Start a new game. color_choice is 'Black', 'White', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Stone.BLACK, Stone.WHITE])
    elif color_choice == "White":
        human = Stone.WHITE
    else:
        human = Stone.BLACK

    session.reset(
        human_player=human,
        ai_enabled=ai_enabled,
        strategy_name=strategy_name,
        difficulty=int(difficulty),
        undo_limit=int(undo_limit),
    )
    # If human is White, AI (Black) plays first
    session.play_ai_turn()

    if not session.ai_enabled:
        info = "Two players, Black moves first."
    else:
        info = f"You are {human}."
    return _outputs(session) + (info,)


def _undo_move(session: GameSession):
    if not session.has_undoable_move:
        return _outputs(session, "Nothing to undo.")
    if not session.undo():
        return _outputs(session, "No undos left.")
    return _outputs(session)


def _change_difficulty(level: int, session: GameSession):
    session.set_difficulty(int(level))
    return _outputs(session, f"Difficulty set to {session.difficulty}.")


def _save_game(session: GameSession) -> str:
    """Save the current game to disk."""
    if not session.game.moves:
        return "No moves to save."
    filename = save_game(session.to_save_data())
    return f"Saved: {filename}"


def _load_game(filename: str, session: GameSession):
    if not filename:
        return _outputs(session, "Choose a saved game first.")
    try:
        session.load(load_game(filename))
    except (OSError, RecordError) as e:
        logger.warning("Could not load %s: %s", filename, e)
        return _outputs(session, f"Could not load {filename}: {e}")
    session.play_ai_turn()
    return _outputs(session, f"Loaded {filename}.")


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        # Left: board
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GomokuGameState()),
                label="Board",
            )
        # Right: controls
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Black to move",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(
                value="You are Black.",
                label="Color",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=["Random", "Black", "White"],
                value="Black",
                label="Play as",
            )
            ai_enabled = gr.Checkbox(value=True, label="Play against the AI")
            strategy_choice = gr.Dropdown(
                choices=available_strategies(),
                value=DEFAULT_STRATEGY,
                label="AI strategy",
            )
            difficulty = gr.Slider(
                minimum=MIN_DIFFICULTY,
                maximum=MAX_DIFFICULTY,
                step=1,
                value=DEFAULT_DIFFICULTY,
                label="Difficulty",
            )
            undo_limit = gr.Number(value=DEFAULT_UNDO_LIMIT, precision=0, label="Undo limit")
            new_game_btn = gr.Button("New Game", variant="primary")

            undo_btn = gr.Button("Undo")

            gr.Markdown("### Save / Load")
            save_btn = gr.Button("Save Game")
            save_status = gr.Textbox(label="Save", interactive=False, lines=1)
            saved_games = gr.Dropdown(choices=list_saved_games(), label="Saved games")
            load_btn = gr.Button("Load Game")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate (e.g. H8)",
                placeholder="H8",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button(
                "Submit Move",
                elem_id="coord-submit",
            )

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move"],
                datatype=["number", "str", "str"],
                interactive=False,
                column_count=3,
            )

    # Outputs shared by most callbacks
    board_outputs = [board_html, status_text, move_table, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )

    new_game_btn.click(
        fn=_new_game,
        inputs=[color_choice, ai_enabled, strategy_choice, difficulty, undo_limit, session_state],
        outputs=board_outputs + [color_info],
    )

    undo_btn.click(fn=_undo_move, inputs=[session_state], outputs=board_outputs)

    difficulty.release(
        fn=_change_difficulty,
        inputs=[difficulty, session_state],
        outputs=board_outputs,
    )

    save_btn.click(
        fn=_save_game,
        inputs=[session_state],
        outputs=[save_status],
    ).then(
        fn=lambda: gr.Dropdown(choices=list_saved_games()),
        outputs=[saved_games],
    )

    load_btn.click(
        fn=_load_game,
        inputs=[saved_games, session_state],
        outputs=board_outputs,
    )
