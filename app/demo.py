"""
Minesweeper Agent - Interactive Demo

Run with: streamlit run app/demo.py
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Any, Dict, List, Optional, Tuple

from minesweeper_agent import COVERED, FLAGGED, MinesweeperWorld

logging.basicConfig(level=logging.INFO)

COLORS = {
    "1": "#0000ff",
    "2": "#008000",
    "3": "#ff0000",
    "4": "#000080",
    "5": "#800000",
    "6": "#008080",
    "7": "#000000",
    "8": "#808080",
}

PRESETS: Dict[str, Tuple[int, int, int]] = {
    "Beginner (9x9, 10)": (9, 9, 10),
    "Intermediate (16x16, 40)": (16, 16, 40),
    "Expert (30x16, 99)": (30, 16, 99),
}

METHOD_LABELS = {
    "first_move": "First Move",
    "single_point": "Single-Point Deduction",
    "enumeration": "Frontier Enumeration",
    "guess": "Lowest-Risk Guess",
}


def render_board_html(
    snapshot: List[List[int]],
    world: MinesweeperWorld,
    highlight_cell: Optional[Tuple[int, int]] = None,
    show_mines: bool = False,
) -> str:
    """Render an agent knowledge snapshot as an HTML table."""
    if world.width >= 30:
        cell_size, font_size = 14, "10px"
    elif world.width >= 16:
        cell_size, font_size = 20, "13px"
    else:
        cell_size, font_size = 26, "15px"

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for y in range(world.height):
        html += "<tr>"
        for x in range(world.width):
            v = snapshot[y][x]
            if (x, y) == highlight_cell and (x, y) in world.mines:
                cell, bg, text_color = "M", "#ff0000", "#ffffff"  # Hit mine
            elif v == FLAGGED:
                cell, bg, text_color = "F", "#ffa500", "#ffffff"
            elif v == COVERED and show_mines and (x, y) in world.mines:
                cell, bg, text_color = "M", "#ffcccc", "#ff0000"
            elif v == COVERED:
                cell, bg, text_color = ".", "#c0c0c0", "#666666"
            else:
                cell = str(v)
                bg = "#f0f0f0" if v == 0 else "#ffffff"
                text_color = COLORS.get(cell, "#cccccc")

            border = "3px solid #ff0000" if (x, y) == highlight_cell else "1px solid #999"
            display = cell if cell != "0" else " "

            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
                font-size: {font_size};
            ">{display}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html


def main():
    st.set_page_config(page_title="Minesweeper Agent", page_icon="💣", layout="wide")
    st.title("Minesweeper Agent")
    st.markdown("Watch the agent play one reveal per turn, using only guaranteed moves until it must guess.")

    st.sidebar.header("Game Configuration")
    preset = st.sidebar.selectbox("Difficulty", list(PRESETS) + ["Custom"])
    if preset == "Custom":
        width = st.sidebar.slider("Width", 5, 30, 16)
        height = st.sidebar.slider("Height", 5, 30, 16)
        max_mines = width * height - 9
        mines = st.sidebar.slider("Mines", 1, max_mines, min(40, max_mines))
    else:
        width, height, mines = PRESETS[preset]

    seed = int(st.sidebar.number_input("Seed", min_value=0, value=0, step=1))
    cap = int(st.sidebar.selectbox("Enumeration cap", [16, 24, 32, 39], index=1))

    if st.sidebar.button("Play", type="primary"):
        world = MinesweeperWorld(width, height, mines, seed=seed)
        agent = world.new_agent(full_enumeration_cap=cap, bounded_cap=cap)
        status, payload = world.run(agent, record_steps=True)
        st.session_state.world = world
        st.session_state.agent = agent
        st.session_state.status = status
        st.session_state.payload = payload

    if "world" not in st.session_state:
        st.info("Pick a board and press 'Play'.")
        return

    world: MinesweeperWorld = st.session_state.world
    status: int = st.session_state.status
    payload: Dict[str, Any] = st.session_state.payload
    steps_history: List[Dict[str, Any]] = payload.get("steps_history", [])

    col1, col2 = st.columns([3, 1])

    with col1:
        st.subheader("Game Board")
        if steps_history:
            total_steps = len(steps_history)
            step_display = st.slider("Step", 1, total_steps, total_steps) if total_steps > 1 else 1
            step = steps_history[step_display - 1]
            cell = step["cell"]
            method_label = METHOD_LABELS.get(step["method"], step["method"])
            st.info(f"**Step {step_display}/{total_steps}**: Reveal ({cell[0]}, {cell[1]}) via *{method_label}*")
            is_final_step = step_display == total_steps
            html = render_board_html(
                step["knowledge_snapshot"],
                world,
                highlight_cell=cell,
                show_mines=is_final_step,
            )
        else:
            html = render_board_html(st.session_state.agent.board.grid, world, show_mines=True)
        st.markdown(html, unsafe_allow_html=True)

        if status == 1:
            st.success("Solved! All safe cells revealed.")
        elif status == -1:
            st.error("Game Over! Hit a mine.")
        else:
            st.warning("The agent stopped before revealing every safe cell.")

    with col2:
        st.subheader("Agent Statistics")
        result = {1: "Win", -1: "Loss"}.get(status, "Stopped")
        metrics: List[Tuple[str, Any]] = [
            ("Result", result),
            ("Reveal Moves", payload["reveal_moves_count"]),
            ("Cells Revealed", payload["revealed_cells_count"]),
            ("Guesses", payload["guesses_count"]),
        ]
        for label, value in metrics:
            st.metric(label, value)

        st.markdown("---")
        st.text(f"Single-point: {payload['inferred_single_count']} cells")
        st.text(f"Enumeration: {payload['inferred_enumeration_count']} cells")
        st.text(
            "Passes: "
            f"{payload['full_enumerations_count']} full / "
            f"{payload['bounded_enumerations_count']} bounded / "
            f"{payload['skipped_enumerations_count']} skipped"
        )
        st.text(f"Largest frontier: {payload['max_frontier']}")


if __name__ == "__main__":
    main()
