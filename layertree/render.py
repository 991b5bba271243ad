"""Text rows for inspecting a layer forest in a terminal.

Children of collapsed containers are omitted, mirroring a layer panel.
Selection, visibility, and the active root are shown as row decorations.
"""

from __future__ import annotations

from dataclasses import dataclass

from .layers import Layer
from .state import LayerState


@dataclass(frozen=True)
class RenderTheme:
    """ANSI palette used by the row formatter."""

    name: str
    reset: str
    marker: str
    container: str
    leaf: str
    hidden: str
    selected: str
    active_root: str


DEFAULT_THEME = RenderTheme(
    name="default",
    reset="\033[0m",
    marker="\033[38;5;44m",
    container="\033[1;34m",
    leaf="\033[38;5;252m",
    hidden="\033[2;38;5;250m",
    selected="\033[38;5;81m",
    active_root="\033[1;38;5;81m",
)

PLAIN_THEME = RenderTheme(
    name="plain",
    reset="",
    marker="",
    container="",
    leaf="",
    hidden="",
    selected="",
    active_root="",
)


def format_layer_row(
    layer: Layer,
    depth: int,
    state: LayerState,
    theme: RenderTheme | None = None,
) -> str:
    """Render one layer row as display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    selected = layer.id in state.selected_ids
    prefix = f"{active_theme.selected}*{reset}" if selected else " "
    indent = "  " * depth
    name = layer.name or layer.id
    if layer.is_container:
        marker = "▸ " if layer.id in state.collapsed_ids else "▾ "
        body = f"{active_theme.marker}{marker}{reset}{active_theme.container}{name}{reset}"
    else:
        body = f"  {active_theme.leaf}{name}{reset}"

    badges = ""
    if layer.id in state.hidden_ids:
        badges += f" {active_theme.hidden}(hidden){reset}"
    if layer.is_root and layer.id == state.active_root_id:
        badges += f" {active_theme.active_root}[active]{reset}"
    return f"{prefix}{indent}{body}{badges}"


def render_layer_rows(state: LayerState, theme: RenderTheme | None = None) -> list[str]:
    rows: list[str] = []

    def walk(layer: Layer, depth: int) -> None:
        rows.append(format_layer_row(layer, depth, state, theme))
        if layer.id in state.collapsed_ids:
            return
        for child in layer.children:
            walk(child, depth + 1)

    for root in state.roots:
        walk(root, 0)
    return rows


def render_layer_forest(state: LayerState, color: bool = True) -> str:
    theme = DEFAULT_THEME if color else PLAIN_THEME
    return "".join(f"{row}\n" for row in render_layer_rows(state, theme))


__all__ = [
    "RenderTheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "format_layer_row",
    "render_layer_rows",
    "render_layer_forest",
]
