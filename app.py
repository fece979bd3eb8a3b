"""Gomoku AI — Gradio web app entry point."""

import logging

import gradio as gr

from gomokuai.ui.board_component import BOARD_CLICK_JS
from gomokuai.ui.play_tab import build_play_tab

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

with gr.Blocks(title="Gomoku AI") as demo:
    gr.Markdown("# Gomoku AI")
    gr.Markdown("15x15 board, 5 in a row to win. Rule-based or alpha-beta opponent, difficulty 1-5.")

    with gr.Tab("Play"):
        build_play_tab()

    # Bind board click handler JS on page load
    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    demo.launch(theme=gr.themes.Soft())
