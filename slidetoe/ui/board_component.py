"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from slidetoe.game.board import GameState, format_point
from slidetoe.game.types import Player, Point
from slidetoe.game.win_checker import winning_line

# Layout constants
TILE_SIZE = 120
GAP = 6
BANNER_HEIGHT = 48

# Colors
GREY = "#DADFE1"
ORANGE = "#F39C12"
PURPLE = "#BF55EC"
LINE_COLOR = "#4A3728"
WIN_OUTLINE = "#2ECC71"
BANNER_BG = "rgba(0, 0, 0, 0.65)"

PLAYER_COLORS = {Player.X: ORANGE, Player.O: PURPLE}


def board_px(size: int) -> int:
    return GAP + size * (TILE_SIZE + GAP)


def _origin(point: Point) -> tuple[int, int]:
    """Top-left pixel of the tile at ``point``."""
    return GAP + point.x * (TILE_SIZE + GAP), GAP + point.y * (TILE_SIZE + GAP)


def render_board_svg(
    game_state: GameState,
    clickable: bool = True,
    banner: str = "",
    highlight: Optional[tuple[Point, ...]] = None,
) -> str:
    """Render the board as an SVG string.

    The oldest mark of a player holding a full queue is drawn faded: it is
    the one that disappears on that player's next placement.
    """
    size = game_state.size
    px = board_px(size)
    if highlight is None:
        highlight = winning_line(game_state.board) or ()
    fading = {p: game_state.oldest_mark(p) for p in Player}

    parts: list[str] = []
    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{px}" height="{px}" '
        f'viewBox="0 0 {px} {px}" '
        f'id="slidetoe-board">'
    )
    parts.append(f'<rect width="{px}" height="{px}" fill="{LINE_COLOR}" rx="6"/>')

    for y in range(size):
        for x in range(size):
            pt = Point(x, y)
            left, top = _origin(pt)
            owner = game_state.board.get(pt)
            fill = GREY if owner is None else PLAYER_COLORS[owner]
            opacity = "0.45" if owner is not None and fading.get(owner) == pt else "1"
            stroke = WIN_OUTLINE if pt in highlight else "none"
            parts.append(
                f'<rect x="{left}" y="{top}" width="{TILE_SIZE}" height="{TILE_SIZE}" '
                f'fill="{fill}" fill-opacity="{opacity}" '
                f'stroke="{stroke}" stroke-width="6" class="tile" '
                f'data-owner="{owner or ""}"/>'
            )

    if clickable:
        for pt in game_state.legal_moves():
            left, top = _origin(pt)
            coord_str = format_point(pt)
            parts.append(
                f'<rect x="{left}" y="{top}" width="{TILE_SIZE}" height="{TILE_SIZE}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{coord_str}" style="cursor:pointer">'
                f'<title>{coord_str}</title></rect>'
            )

    if banner:
        top = (px - BANNER_HEIGHT) // 2
        parts.append(
            f'<rect x="0" y="{top}" width="{px}" height="{BANNER_HEIGHT}" '
            f'fill="{BANNER_BG}"/>'
        )
        parts.append(
            f'<text x="{px // 2}" y="{top + BANNER_HEIGHT // 2 + 8}" '
            f'text-anchor="middle" font-size="24" font-family="sans-serif" '
            f'fill="#FFFFFF">{banner}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)


def render_scores_markdown(scores: dict[Player, int], human_player: Player) -> str:
    you, ai = human_player, human_player.other
    return (
        f"**You ({you})** {scores[you]} : {scores[ai]} **AI ({ai})**"
    )


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then triggers the submit button.
BOARD_CLICK_JS = """
() => {
    if (window._slidetoeClickBound) return;
    window._slidetoeClickBound = true;

    document.addEventListener('click', function(e) {
        const tile = e.target.closest('.board-click');
        if (!tile) return;
        const coord = tile.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (container) {
            // Native setter so Gradio notices the change
            const proto = container.tagName === "TEXTAREA"
                ? window.HTMLTextAreaElement.prototype
                : window.HTMLInputElement.prototype;
            const nativeSetter = Object.getOwnPropertyDescriptor(proto, "value")?.set;
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
