"""Play tab: Human vs AI with interactive SVG board."""

from __future__ import annotations

import random as _random
import time as _time

import gradio as gr

from slidetoe.agent.base import Agent
from slidetoe.agent.random_agent import RandomAgent
from slidetoe.agent.search import SearchAgent
from slidetoe.game.board import GameState, format_point, parse_coordinate
from slidetoe.game.types import Player
from slidetoe.ui.board_component import render_board_svg, render_scores_markdown
from slidetoe.ui.session import GameSession

AGENT_CHOICES: dict[str, Agent] = {
    "SearchAgent (d=3)": SearchAgent(depth=3),
    "SearchAgent (d=4)": SearchAgent(depth=4),
    "SearchAgent (d=5)": SearchAgent(depth=5),
    "SearchAgent (d=6)": SearchAgent(depth=6),
    "RandomAgent": RandomAgent(),
}
DEFAULT_AGENT = "SearchAgent (d=5)"

AI_MOVE_DELAY = 0.3  # seconds; pacing only, never affects the chosen move
WIN_BANNER_DELAY = 1.5  # seconds the finished board stays up after a win


def _status_text(session: GameSession) -> str:
    if session.last_winner is not None:
        who = "You win" if session.last_winner is session.human_player else "AI wins"
        return f"{who}!"
    if session.is_human_turn:
        return f"Your turn ({session.human_player})"
    return f"AI is thinking... ({session.ai_player})"


def _banner(session: GameSession) -> str:
    if session.last_winner is None:
        return ""
    return "You win!" if session.last_winner is session.human_player else "AI wins!"


def _make_board_html(session: GameSession) -> str:
    # Show the finished board until the win banner is cleared
    if session.finished_state is not None:
        return render_board_svg(
            session.finished_state, clickable=False, banner=_banner(session)
        )
    return render_board_svg(session.state, clickable=session.is_human_turn)


def _outputs(session: GameSession, status: str = ""):
    return (
        _make_board_html(session),
        status or _status_text(session),
        render_scores_markdown(session.scores, session.human_player),
        session,
    )


def _apply_human_move(coord_text: str, session: GameSession):
    """Validate and play the human's move. The AI replies in a chained step."""
    if session.finished_state is not None:
        # A click after a win plays on the cleared board
        session.finished_state = None
        session.last_winner = None

    if not session.is_human_turn:
        return _outputs(session, "Wait — it's the AI's turn.") + ("",)

    point = parse_coordinate(coord_text, session.state.size)
    if point is None:
        return _outputs(session, f"Invalid coordinate: '{coord_text}'. Use format like B2.") + ("",)

    if not session.can_play(point):
        return _outputs(session, f"{format_point(point)} is already occupied.") + ("",)

    session.initiate_move(point)
    return _outputs(session) + ("",)


def _ai_reply(session: GameSession, delay: float = AI_MOVE_DELAY):
    """Let the AI move if it is its turn."""
    # A win banner still up means the reset board has not been shown yet
    if session.is_human_turn or session.finished_state is not None:
        return _outputs(session)
    if delay > 0:
        _time.sleep(delay)
    session.request_automated_move()
    return _outputs(session)


def _clear_win_banner(session: GameSession, delay: float = WIN_BANNER_DELAY):
    """Hold the finished board for ``delay`` seconds, then show the reset one."""
    if session.finished_state is None:
        return _outputs(session)
    if delay > 0:
        _time.sleep(delay)
    session.finished_state = None
    session.last_winner = None
    return _outputs(session)


def _new_match(color_choice: str, agent_choice: str, session: GameSession):
    """Start a new match (scores reset). color_choice is 'X', 'O', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.X, Player.O])
    elif color_choice == "O":
        human = Player.O
    else:
        human = Player.X

    session.agent = AGENT_CHOICES.get(agent_choice, AGENT_CHOICES[DEFAULT_AGENT])
    session.new_match(human_player=human)

    # X always opens; if the AI is X it plays straight away
    if not session.is_human_turn:
        session.request_automated_move()

    return _outputs(session) + (f"You are {human}.",)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        # Left: board
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GameState()),
                label="Board",
            )
        # Right: controls
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (X)",
                label="Status",
                interactive=False,
                lines=2,
            )
            score_md = gr.Markdown(
                render_scores_markdown({p: 0 for p in Player}, Player.X)
            )
            color_info = gr.Textbox(
                value="You are X.",
                label="Side",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Match")
            color_choice = gr.Radio(
                choices=["X", "O", "Random"],
                value="X",
                label="Play as",
            )
            agent_choice = gr.Dropdown(
                choices=list(AGENT_CHOICES.keys()),
                value=DEFAULT_AGENT,
                label="Opponent",
            )
            new_match_btn = gr.Button("New Match", variant="primary")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate (e.g. B2)",
                placeholder="B2",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button(
                "Submit Move",
                elem_id="coord-submit",
            )

    # Outputs shared by most callbacks
    board_outputs = [board_html, status_text, score_md, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    ).then(
        fn=_ai_reply,
        inputs=[session_state],
        outputs=board_outputs,
    ).then(
        fn=_clear_win_banner,
        inputs=[session_state],
        outputs=board_outputs,
    ).then(
        # X opens the next board; the AI may be X
        fn=_ai_reply,
        inputs=[session_state],
        outputs=board_outputs,
    )

    new_match_btn.click(
        fn=_new_match,
        inputs=[color_choice, agent_choice, session_state],
        outputs=board_outputs + [color_info],
    )
