"""SlideToe — Gradio web app entry point."""

import logging

import gradio as gr

from slidetoe.ui.arena_tab import build_arena_tab
from slidetoe.ui.board_component import BOARD_CLICK_JS
from slidetoe.ui.play_tab import build_play_tab

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

with gr.Blocks(title="SlideToe") as demo:
    gr.Markdown("# SlideToe")
    gr.Markdown(
        "Tic-tac-toe where each side keeps at most three marks: "
        "your fourth mark removes your oldest one (shown faded)."
    )

    with gr.Tab("Play"):
        build_play_tab()

    with gr.Tab("Arena"):
        build_arena_tab()

    # Bind board click handler JS on page load
    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    demo.launch(theme=gr.themes.Soft())
