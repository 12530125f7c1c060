import streamlit as st

from pilite.analysis.fits import run_fit
from pilite.charts import make_pi_chart
from pilite.constants import DATA_FILENAME, MODEL_TIERS, PLOT_BASENAME
from pilite.core.capabilities import default_capabilities
from pilite.core.data_model import FitRequest, MeasurementTable, PlotFormat, PlotSpec
from pilite.logging_config import setup_logging
from pilite.themes import THEMES, set_theme
from pilite.viz.render import render_plot

st.set_page_config(page_title="Estimate π", layout="wide")

if 'startup_initialized' not in st.session_state:
    setup_logging()
    st.session_state['table'] = MeasurementTable()
    st.session_state['fit'] = None
    st.session_state['startup_initialized'] = True

set_theme(list(THEMES.keys())[0])
caps = default_capabilities()
table: MeasurementTable = st.session_state['table']

st.title("Estimate π from Circle Measurements")

with st.sidebar:
    with st.form("add_row_form", clear_on_submit=True):
        name = st.text_input("Name", placeholder="e.g., Alice")
        diameter = st.number_input("Diameter", min_value=0.0, step=0.01, value=None)
        circumference = st.number_input("Circumference", min_value=0.0, step=0.01, value=None)
        if st.form_submit_button("Add row"):
            try:
                table.add_row(name, diameter, circumference)
            except ValueError:
                st.warning("Please fill in all fields before adding.")
    if st.button("Clear data"):
        table.clear()
        st.session_state['fit'] = None
    st.divider()
    tier = st.selectbox(
        "Model type",
        list(MODEL_TIERS.keys()),
        format_func=MODEL_TIERS.get,
    )
    if not caps.mixed_effects_available:
        st.caption("Mixed-effects models are not available here; fixed effects are used.")
    fmt = st.radio("Download plot as", ["png", "svg"], horizontal=True)
    if st.button("Estimate π", type="primary"):
        request = FitRequest.from_ui(tier, caps.mixed_effects_available)
        report = run_fit(table, request, caps)
        st.session_state['fit'] = (report, table.df.copy())

st.subheader("Results")
fit_state = st.session_state.get('fit')
if fit_state is not None:
    report, fitted_df = fit_state
    result = report.result
    st.code(result.message)
    if report.mixed is not None:
        st.caption(f"Mixed-effects attempt: {report.mixed.message}")
    if result.ok:
        st.markdown(f"**Estimated π ≈ {round(result.slope, 5)}**")
        st.plotly_chart(
            make_pi_chart(fitted_df, result.slope, result.intercept),
            use_container_width=True,
        )
        spec = PlotSpec(fitted_df, result.slope, result.intercept, PlotFormat(fmt))
        st.sidebar.download_button(
            "Download Plot",
            data=render_plot(spec),
            file_name=f"{PLOT_BASENAME}.{fmt}",
            mime="image/svg+xml" if fmt == "svg" else "image/png",
        )

st.dataframe(table.df, use_container_width=True)
if len(table):
    remove_idx = st.number_input(
        "Row to remove", min_value=1, max_value=len(table), step=1, value=len(table)
    )
    if st.button("Remove row"):
        table.remove_row(int(remove_idx) - 1)
        st.rerun()
    st.sidebar.download_button(
        "Download Data",
        data=table.to_csv(),
        file_name=DATA_FILENAME,
        mime="text/csv",
    )
