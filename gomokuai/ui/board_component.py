"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from gomokuai.game.board import COL_LABELS, GomokuGameState, format_point
from gomokuai.game.types import Point, Stone

# Layout constants
CELL_SIZE = 36
MARGIN = 36
STONE_RADIUS = 15
CLICK_RADIUS = 17  # Invisible click target radius

# Colors
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"
BLACK_STONE = "#1A1A1A"
WHITE_STONE = "#F5F5F5"
WHITE_STROKE = "#888"
WIN_LINE_COLOR = "#E74C3C"
BANNER_WIN = "#4ADE80"
BANNER_LOSS = "#F87171"
BANNER_NEUTRAL = "#FFFFFF"

# Standard star points on a 15x15 board (0-indexed)
STAR_POINTS = [Point(3, 3), Point(3, 11), Point(7, 7), Point(11, 3), Point(11, 11)]


def _coord(row: int, col: int) -> tuple[int, int]:
    """Convert 0-indexed board coordinates to SVG pixel coordinates (row 0 at top)."""
    return MARGIN + col * CELL_SIZE, MARGIN + row * CELL_SIZE


def _banner_color(message: str) -> str:
    if message == "You win!":
        return BANNER_WIN
    if message == "AI wins!":
        return BANNER_LOSS
    return BANNER_NEUTRAL


def render_board_svg(
    game_state: GomokuGameState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    size = game_state.board.size
    board_px = MARGIN * 2 + CELL_SIZE * (size - 1)
    parts: list[str] = []

    # SVG header
    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{board_px}" height="{board_px}" '
        f'viewBox="0 0 {board_px} {board_px}" '
        f'id="gomoku-board">'
    )
    parts.append(f'<rect width="{board_px}" height="{board_px}" fill="{BG_COLOR}" rx="4"/>')

    # Grid lines
    far = MARGIN + (size - 1) * CELL_SIZE
    for i in range(size):
        offset = MARGIN + i * CELL_SIZE
        parts.append(
            f'<line x1="{offset}" y1="{MARGIN}" x2="{offset}" y2="{far}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{offset}" x2="{far}" y2="{offset}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )

    for star in STAR_POINTS:
        if game_state.board.is_on_grid(star):
            cx, cy = _coord(star.row, star.col)
            parts.append(f'<circle cx="{cx}" cy="{cy}" r="3" fill="{LINE_COLOR}"/>')

    # Column labels on top, row labels on the left
    for c in range(size):
        x, _ = _coord(0, c)
        parts.append(
            f'<text x="{x}" y="{MARGIN - 14}" text-anchor="middle" '
            f'font-size="12" font-family="monospace" fill="{LINE_COLOR}">'
            f'{COL_LABELS[c]}</text>'
        )
    for r in range(size):
        _, y = _coord(r, 0)
        parts.append(
            f'<text x="{MARGIN - 20}" y="{y + 4}" text-anchor="middle" '
            f'font-size="12" font-family="monospace" fill="{LINE_COLOR}">'
            f'{r + 1}</text>'
        )

    # Stones
    last_point: Optional[Point] = None
    if game_state.moves:
        last_point = game_state.moves[-1].point

    for r in range(size):
        for c in range(size):
            stone = game_state.board.get_piece(r, c)
            if stone is Stone.EMPTY:
                continue
            x, y = _coord(r, c)
            fill = BLACK_STONE if stone is Stone.BLACK else WHITE_STONE
            stroke = "none" if stone is Stone.BLACK else WHITE_STROKE
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS}" '
                f'fill="{fill}" stroke="{stroke}" stroke-width="1.5"/>'
            )
            if highlight_last and Point(r, c) == last_point:
                marker_color = WHITE_STONE if stone is Stone.BLACK else BLACK_STONE
                parts.append(
                    f'<circle cx="{x}" cy="{y}" r="5" '
                    f'fill="{marker_color}" opacity="0.7"/>'
                )

    win_line = game_state.win_line
    if win_line is not None:
        x1, y1 = _coord(win_line.start.row, win_line.start.col)
        x2, y2 = _coord(win_line.end.row, win_line.end.col)
        parts.append(
            f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" class="win-line" '
            f'stroke="{WIN_LINE_COLOR}" stroke-width="4" stroke-linecap="round"/>'
        )

    # Clickable intersection targets (invisible circles)
    if clickable and not game_state.is_over:
        for point in game_state.board.empty_points():
            x, y = _coord(point.row, point.col)
            coord_str = format_point(point)
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{CLICK_RADIUS}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{coord_str}" style="cursor:pointer">'
                f'<title>{coord_str}</title></circle>'
            )

    if game_over_message:
        mid = board_px // 2
        parts.append(
            f'<rect x="0" y="{mid - 28}" width="{board_px}" height="56" '
            f'fill="rgba(0, 0, 0, 0.6)"/>'
        )
        parts.append(
            f'<text x="{mid}" y="{mid + 10}" text-anchor="middle" font-size="28" '
            f'font-weight="bold" fill="{_banner_color(game_over_message)}">'
            f'{game_over_message}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then triggers the submit button.
BOARD_CLICK_JS = """
() => {
    // Debounce to avoid double-fire
    if (window._gomokuClickBound) return;
    window._gomokuClickBound = true;

    document.addEventListener('click', function(e) {
        const circle = e.target.closest('.board-click');
        if (!circle) return;
        const coord = circle.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (container) {
            // Set value using native setter to trigger Gradio's change detection
            const proto = container.tagName === 'TEXTAREA'
                ? window.HTMLTextAreaElement.prototype
                : window.HTMLInputElement.prototype;
            const nativeSetter = Object.getOwnPropertyDescriptor(proto, 'value')?.set;
            if (nativeSetter) {
                nativeSetter.call(container, coord);
            } else {
                container.value = coord;
            }
            container.dispatchEvent(new Event('input', { bubbles: true }));
            const btn = document.querySelector('#coord-submit');
            if (btn) btn.click();
        }
    });
}
"""
