"""Arena tab: AI vs AI with live board updates."""

from __future__ import annotations

import time
from typing import Generator

import gradio as gr

from slidetoe.agent.base import Agent
from slidetoe.agent.random_agent import RandomAgent
from slidetoe.agent.search import SearchAgent
from slidetoe.game.board import GameState, format_point
from slidetoe.game.types import Player, Point
from slidetoe.ui.board_component import render_board_svg
from slidetoe.ui.session import GameSession

ARENA_AGENTS: dict[str, Agent] = {
    "SearchAgent (d=2)": SearchAgent(depth=2),
    "SearchAgent (d=3)": SearchAgent(depth=3),
    "SearchAgent (d=4)": SearchAgent(depth=4),
    "SearchAgent (d=5)": SearchAgent(depth=5),
    "RandomAgent": RandomAgent(),
}

MOVE_DELAY = 0.2  # seconds between moves
ARENA_MAX_PLIES = 60  # games can cycle forever, so cap each run


class _TwoAgents(Agent):
    """Routes each turn to the agent playing that side."""

    def __init__(self, x_agent: Agent, o_agent: Agent) -> None:
        self.agents = {Player.X: x_agent, Player.O: o_agent}

    def select_move(self, game_state: GameState) -> Point:
        return self.agents[game_state.current_player].select_move(game_state)


def _scores_text(session: GameSession, x_name: str, o_name: str) -> str:
    return (
        f"{x_name} (X) {session.scores[Player.X]} : "
        f"{session.scores[Player.O]} {o_name} (O)"
    )


def _render_arena_board(session: GameSession) -> str:
    if session.finished_state is not None:
        return render_board_svg(
            session.finished_state,
            clickable=False,
            banner=f"{session.last_winner} wins!",
        )
    return render_board_svg(session.state, clickable=False)


def _run_arena(
    x_name: str,
    o_name: str,
    plies: float,
    delay: float,
) -> Generator:
    """Generator that yields board updates after each move."""
    x_agent = ARENA_AGENTS.get(x_name, RandomAgent())
    o_agent = ARENA_AGENTS.get(o_name, RandomAgent())
    session = GameSession(agent=_TwoAgents(x_agent, o_agent))

    yield (
        _render_arena_board(session),
        f"Started: {x_name} (X) vs {o_name} (O)",
        _scores_text(session, x_name, o_name),
    )

    for ply in range(1, int(plies) + 1):
        mover = session.state.current_player
        session.request_automated_move()

        if session.last_winner is not None:
            status = f"Ply {ply}: {session.last_winner} completes a line"
        else:
            status = f"Ply {ply}: {mover} played {format_point(session.last_move.point)}"

        yield (
            _render_arena_board(session),
            status,
            _scores_text(session, x_name, o_name),
        )
        time.sleep(delay)

    yield (
        _render_arena_board(session),
        f"Finished after {int(plies)} plies",
        _scores_text(session, x_name, o_name),
    )


def build_arena_tab() -> None:
    """Construct the Arena tab UI inside a gr.Blocks context."""

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GameState(), clickable=False),
                label="Board",
            )
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Select two agents and click Start.",
                label="Status",
                interactive=False,
                lines=2,
            )
            score_text = gr.Textbox(label="Score", interactive=False, lines=1)

            gr.Markdown("### Setup")
            x_choice = gr.Dropdown(
                choices=list(ARENA_AGENTS.keys()),
                value="SearchAgent (d=4)",
                label="X Agent",
            )
            o_choice = gr.Dropdown(
                choices=list(ARENA_AGENTS.keys()),
                value="RandomAgent",
                label="O Agent",
            )
            plies_slider = gr.Slider(
                minimum=2,
                maximum=200,
                value=ARENA_MAX_PLIES,
                step=1,
                label="Plies to play",
            )
            delay_slider = gr.Slider(
                minimum=0.0,
                maximum=2.0,
                value=MOVE_DELAY,
                step=0.1,
                label="Delay between moves (sec)",
            )
            start_btn = gr.Button("Start", variant="primary")

    start_btn.click(
        fn=_run_arena,
        inputs=[x_choice, o_choice, plies_slider, delay_slider],
        outputs=[board_html, status_text, score_text],
    )
