"""
Logicsweeper - Generator Inspector

Run with: streamlit run app/demo.py
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import List, Optional

from logicsweeper import (
    Board,
    DeductionSolver,
    GenerateOptions,
    Position,
    generate_solvable_board_with_report,
    run_generation_many_tests,
)

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


def render_board_html(
    board: Board,
    knowledge: List[List[Optional[str]]],
    safe: Position,
) -> str:
    """Render the board with the solver's deductions overlaid."""
    # Scale cell size based on board width
    if board.cols >= 30:
        cell_size = 14
        font_size = "10px"
    elif board.cols >= 16:
        cell_size = 20
        font_size = "13px"
    else:
        cell_size = 26
        font_size = "15px"

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for row in range(board.rows):
        html += "<tr>"
        for col in range(board.cols):
            value = knowledge[row][col]
            cell = board.cells[row][col]

            if value == "F":
                display, bg, text_color = "F", "#ffa500", "#ffffff"
            elif value is not None:
                display = value if value != "0" else " "
                bg = "#f0f0f0" if value == "0" else "#ffffff"
                text_color = COLORS.get(value, "#000000")
            elif cell.is_bomb:
                display, bg, text_color = "M", "#ffcccc", "#ff0000"
            else:
                # Safe but never deduced
                display, bg, text_color = "?", "#c0c0c0", "#666666"

            border = "2px solid #ff0000" if (row, col) == safe else "1px solid #999"

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
    logging.basicConfig(level=logging.INFO)

    st.set_page_config(
        page_title="Logicsweeper",
        page_icon="💣",
        layout="wide",
    )

    st.title("Logicsweeper Generator Inspector")
    st.markdown("""
    Generates boards that can be cleared from the first click by deduction alone,
    using random sampling plus hill-climbing mutation within a time budget.
    """)

    # Sidebar configuration
    st.sidebar.header("Board Configuration")

    preset = st.sidebar.selectbox(
        "Difficulty Preset",
        ["Beginner (9x9, 10)", "Intermediate (16x16, 40)", "Expert (16x30, 99)", "Custom"],
    )

    if preset == "Beginner (9x9, 10)":
        rows, cols, bombs = 9, 9, 10
    elif preset == "Intermediate (16x16, 40)":
        rows, cols, bombs = 16, 16, 40
    elif preset == "Expert (16x30, 99)":
        rows, cols, bombs = 16, 30, 99
    else:
        rows = st.sidebar.slider("Rows", 5, 30, 16)
        cols = st.sidebar.slider("Columns", 5, 30, 16)
        max_bombs = rows * cols - 9
        bombs = st.sidebar.slider("Bombs", 1, max_bombs, min(40, max_bombs))

    st.sidebar.header("Search Tuning")
    time_budget_ms = st.sidebar.slider("Time budget (ms)", 0, 2000, 250, step=50)
    swap_percent = st.sidebar.slider("Mutation swap %", 1.0, 20.0, 4.0, step=0.5)
    patience = st.sidebar.slider("Mutation patience", 1, 500, 100)
    seed_text = st.sidebar.text_input("Seed (blank = random)", "")
    seed = int(seed_text) if seed_text.strip().lstrip("-").isdigit() else None

    options = GenerateOptions(
        time_budget_ms=time_budget_ms,
        mutation_swap_percent=swap_percent,
        mutation_patience=patience,
        seed=seed,
    )
    safe = Position(rows // 2, cols // 2)

    if "report" not in st.session_state:
        st.session_state.board = None
        st.session_state.report = None
        st.session_state.knowledge = None
        st.session_state.benchmark = None

    board_col, stats_col = st.columns([3, 1])

    with board_col:
        st.subheader("Generated Board")

        btn_col1, btn_col2 = st.columns(2)
        with btn_col1:
            if st.button("Generate", type="primary"):
                board, report = generate_solvable_board_with_report(
                    rows, cols, bombs, safe, options
                )
                solver = DeductionSolver(board, safe)
                solver.solve()
                st.session_state.board = board
                st.session_state.report = report
                st.session_state.knowledge = solver.knowledge_grid()
                st.rerun()

        with btn_col2:
            runs = st.number_input("Benchmark runs", 1, 200, 20)
            if st.button("Benchmark"):
                bench_options = GenerateOptions(
                    time_budget_ms=time_budget_ms,
                    mutation_swap_percent=swap_percent,
                    mutation_patience=patience,
                )
                with st.spinner("Generating boards..."):
                    st.session_state.benchmark = run_generation_many_tests(
                        rows, cols, bombs, int(runs), bench_options
                    )

        if st.session_state.board is not None:
            html = render_board_html(
                st.session_state.board, st.session_state.knowledge, safe
            )
            st.markdown(html, unsafe_allow_html=True)

            st.markdown("""
            <div style="font-size: 12px; margin-top: 10px;">
            <b>Legend:</b>
            <span style="background: #f0f0f0; padding: 2px 6px; margin: 0 4px;">&nbsp;</span> Deduced empty
            <span style="color: #0000ff; font-weight: bold; margin: 0 4px;">1-8</span> Deduced number
            <span style="background: #ffa500; color: white; padding: 2px 6px; margin: 0 4px; font-weight: bold;">F</span> Deduced bomb
            <span style="background: #ffcccc; color: #ff0000; padding: 2px 6px; margin: 0 4px; font-weight: bold;">M</span> Bomb not deduced
            <span style="background: #c0c0c0; color: #666666; padding: 2px 6px; margin: 0 4px; font-weight: bold;">?</span> Safe cell not deduced
            </div>
            """, unsafe_allow_html=True)
        else:
            st.info("Click 'Generate' to search for a guess-free board.")

    with stats_col:
        st.subheader("Search Report")

        report = st.session_state.report
        if report is not None:
            st.metric("Selection", report.selection)
            st.metric("Attempts", report.attempts)
            st.metric("Mutations", report.mutations)
            st.metric("Elapsed (ms)", f"{report.elapsed_ms:.1f}")
            if report.percent_solved is not None:
                st.metric("Deduced", f"{report.percent_solved * 100:.1f}%")
            st.json(report.to_dict())
        else:
            st.info("Generate a board to see the report.")

        bench = st.session_state.benchmark
        if bench is not None:
            st.markdown("---")
            st.markdown("**Benchmark**")
            st.text(f"Solved rate: {bench['solved_rate'] * 100:.1f}%")
            st.text(f"Avg attempts: {bench['avg_attempts']:.1f}")
            st.text(f"Avg elapsed: {bench['avg_elapsed_ms']:.1f} ms")
            st.text(f"p95 elapsed: {bench['p95_elapsed_ms']:.1f} ms")


if __name__ == "__main__":
    main()
