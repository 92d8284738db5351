import streamlit as st
import matplotlib.pyplot as plt

from kmap_solver import (
    CellValue,
    DEFAULT_VARIABLE_NAMES,
    kmap_from_expression,
    kmap_from_minterms,
    kmap_minterms,
    parse_sop,
)
from kmap_solver.plot import COLOR_PALETTE, draw_kmap

# ------------------------------- page setup -------------------------------

st.set_page_config(page_title="K-Map Minimizer", layout="wide")
st.title("🧮 K-Map Minimizer")
st.markdown("---")

mode = st.radio("Input mode:", ["Algebraic expression", "Minterms"])
n = st.number_input("Number of variables:", min_value=2, max_value=6, value=4, step=1)
raw_names = st.text_input("Variable names (optional, one letter each):", value="")

names = raw_names.replace(" ", "") or DEFAULT_VARIABLE_NAMES[: int(n)]

if mode == "Algebraic expression":
    raw_expr = st.text_input("Expression (e.g. A'B + A'B'C):")
else:
    raw_mins = st.text_input("Minterms (e.g. 1,3,5,7):")
    raw_dcs = st.text_input("Don't cares (optional):")


def _parse_indices(raw: str):
    return [int(x.strip()) for x in raw.split(",") if x.strip()]


# ------------------------------- solve on click -------------------------------
if st.button("Minimize 🚀"):
    try:
        if len(names) != int(n):
            raise ValueError(f"Give exactly {int(n)} variable names, got {len(names)}.")

        if mode == "Algebraic expression":
            expr = parse_sop(raw_expr, list(names))
            kmap = kmap_from_expression(expr, list(names))
        else:
            kmap = kmap_from_minterms(
                int(n), _parse_indices(raw_mins), _parse_indices(raw_dcs), list(names)
            )

        solution = kmap.optimal_solution()
        mins, dcs = kmap_minterms(kmap)

        st.success(f"**SOP:**  \nF = {solution}")
        steps = (
            f"• variables: {''.join(kmap.variable_names)}\n"
            f"• minterms = {mins}\n"
            f"• don't cares = {dcs if dcs else '—'}\n"
            f"• terms: {len(solution)}\n"
            f"• gate count: {solution.gate_count}"
        )
        st.text_area("Details:", steps, height=160)

        with st.container():
            st.markdown("### 🗺️ Karnaugh map")
            fig = draw_kmap(kmap, solution)
            st.pyplot(fig)
            plt.close(fig)

            for i, term in enumerate(solution.terms):
                color = COLOR_PALETTE[i % len(COLOR_PALETTE)]
                label = solution.format_term(term) or "1"
                st.markdown(
                    f"<span style='color:{color}'>■</span> {label} "
                    f"({term.height}×{term.width}, {term.literal_count} literals)",
                    unsafe_allow_html=True,
                )

        if kmap.high_count() == 0 and CellValue.DONT_CARE in kmap.values():
            st.info("Only don't-care cells are set; the function is constant 0.")

    except Exception as e:
        st.error(f"Could not minimize:\n{e}")
