import io
import json
import logging
from decimal import Decimal

import streamlit as st

from exact_simplex.errors import IterationLimitExceeded
from exact_simplex.lp import LP, solve
from exact_simplex.lp_format import translate_to_lp
from exact_simplex.pivot import PivotRule
from exact_simplex.plot import plot_2d
from exact_simplex.rational import fmt_out

st.set_page_config(page_title="Exact Simplex", layout="wide")
st.title("Exact Two-Phase Simplex: Solve & Visualize")

with st.sidebar:
    st.header("Options")
    rule = st.selectbox("Pivot rule", [r.value for r in PivotRule], index=0)
    max_iterations = st.number_input("Max pivots", min_value=1, value=500, step=50)
    is_min = st.checkbox("Minimize (default: Maximize)", value=False)
    show_graph = st.checkbox("Show graph (2 variables only)", value=True)
    show_lp = st.checkbox("Show SoPlex LP file", value=False)

default_json = {
    "c": [800, 600],
    "A": [[250, 450], [250, 50]],
    "b": [9000, 5000],
    "senses": ["<=", "<="],
    "maximize": True
}

st.subheader("Model JSON")
json_text = st.text_area("Edit LP JSON here", json.dumps(default_json, indent=2), height=260)
run = st.button("Solve")


def solve_with_trace(lp: LP, rule: str, max_iterations: int):
    """Solve and return the DEBUG log of every pivot alongside the result."""
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("exact_simplex")
    previous = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    try:
        res = solve(lp, rule=PivotRule(rule), max_iterations=max_iterations)
    finally:
        root.removeHandler(handler)
        root.setLevel(previous)
    return res, buf.getvalue()


if run:
    try:
        cfg = json.loads(json_text, parse_float=Decimal)
        lp = LP.from_dict(cfg, maximize=False if is_min else None)
        objective, constraints = lp.to_problem()
    except ValueError as e:
        st.error(f"Invalid LP: {e}")
    else:
        try:
            res, trace = solve_with_trace(lp, rule, int(max_iterations))
        except IterationLimitExceeded as e:
            st.error(f"Stopped after {e.iterations} pivots without reaching an optimum. Try the bland rule.")
            st.stop()

        st.subheader("Pivots / Dictionaries")
        st.code(trace)
        st.subheader("Result")
        st.json({
            "status": res.status,
            "optimal_value": fmt_out(res.optimal_value) if res.optimal else None,
            "solution": [fmt_out(v) for v in (res.solution_for(lp.variables) or [])],
            "iterations": res.iterations,
            "phases": res.details.get("phases"),
        })
        if res.details.get('alternate_optimal'):
            st.info("Infinite many optimal solutions along an edge (alternate optimal).")

        if show_lp:
            st.subheader("SoPlex LP")
            st.code(translate_to_lp(objective, constraints))

        st.subheader("Graph")
        if show_graph and len(lp.c) == 2:
            fig = plot_2d(lp, res)
            if fig is not None:
                st.pyplot(fig)
            else:
                st.info("No feasible region to plot.")
        else:
            st.info("Graph available only for 2 variables.")
