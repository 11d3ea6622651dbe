import logging

import streamlit as st

from plot_calculator import SIDES, PlotCalculator, Unit, format_side
from report import dimensions_table, to_excel_bytes

logger = logging.getLogger(__name__)

st.set_page_config(page_title="Plot Area Calculator", layout="centered")
st.title("📐 Plot Measurement")
st.caption("Enter the dimensions to calculate the plot area")


def queue_notice(message: str, category: str) -> None:
    st.session_state.notices.append((category, message))


# Session state lives until the page is reloaded
if "calculator" not in st.session_state:
    st.session_state.calculator = PlotCalculator(notify=queue_notice)
    st.session_state.notices = []

calculator = st.session_state.calculator


def on_side_change(side: str) -> None:
    calculator.set_side(side, st.session_state[f"side_{side}"])


def on_unit_change() -> None:
    calculator.set_unit(st.session_state.unit)


def on_calculate_area() -> None:
    calculator.calculate_area()


def on_find_missing_side() -> None:
    before = calculator.dimensions
    if calculator.calculate_missing_side():
        for side in SIDES:
            if calculator.dimensions.get(side) != before.get(side):
                st.session_state[f"side_{side}"] = format_side(calculator.dimensions.get(side))


# Input grid
cols = st.columns(2)
for i, side in enumerate(("back", "front", "left", "right")):
    with cols[i % 2]:
        st.text_input(
            f"{side.title()} Side",
            key=f"side_{side}",
            placeholder="Value",
            on_change=on_side_change,
            args=(side,),
        )

st.selectbox(
    "Unit",
    [unit.value for unit in Unit],
    key="unit",
    format_func=str.title,
    on_change=on_unit_change,
)

cols = st.columns(2)
with cols[0]:
    st.button("Calculate Area", key="calculate_area", on_click=on_calculate_area)
with cols[1]:
    st.button("Find Missing Side", key="find_missing_side", on_click=on_find_missing_side)

# Notifications
for category, message in st.session_state.notices:
    if category == "error":
        st.error(message)
    else:
        st.success(message)
st.session_state.notices = []

# Output section
if calculator.result:
    st.subheader("Result")
    st.markdown(f"**{calculator.result}**")
    st.dataframe(dimensions_table(calculator.dimensions, calculator.unit), hide_index=True)

    xlsx = to_excel_bytes(calculator.dimensions, calculator.unit, calculator.result)
    st.download_button("📥 Download Results (Excel)", data=xlsx, file_name="plot_area_results.xlsx")
