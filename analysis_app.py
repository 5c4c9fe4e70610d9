# analysis_app.py: PolicyEngine automatic policy analysis (Streamlit)
from dotenv import load_dotenv
load_dotenv()

import streamlit as st
import streamlit.components.v1 as components
import pandas as pd

from analysis_core import (
    build_prompt,
    escape_dollars,
    generate_analysis,
    generate_button_label,
    prompt_lines,
    reform_provisions,
    split_analysis,
)
from audience_selector import render_audience_selector
from policyengine_api import COUNTRY_CURRENCY, load_analysis_inputs
from sample_analysis import SAMPLE_ANALYSIS, SAMPLE_INPUTS

BLOG_URL = "https://policyengine.org/uk/blog/2023-03-17-automate-policy-analysis-with-policy-engines-new-chatgpt-integration"

st.set_page_config(page_title="PolicyEngine Analysis", page_icon="📊", layout="wide")

# ---------------------------
# Session state (init)
# ---------------------------
if "analysis" not in st.session_state:
    st.session_state.analysis = SAMPLE_ANALYSIS
if "loading" not in st.session_state:
    st.session_state.loading = False
if "has_clicked_generate" not in st.session_state:
    st.session_state.has_clicked_generate = False
if "show_prompt" not in st.session_state:
    st.session_state.show_prompt = False
if "generation_error" not in st.session_state:
    st.session_state.generation_error = None

# ---------------------------
# Helpers
# ---------------------------
@st.cache_data(show_spinner=False)
def cached_inputs(country: str, reform: str, baseline: str, region: str, time_period: str, version: str):
    return load_analysis_inputs(country, reform, baseline, region, time_period, version or None)


def render_analysis(markdown: str):
    for kind, part in split_analysis(markdown):
        if kind == "iframe":
            components.iframe(part["src"], height=part["height"], scrolling=False)
        else:
            st.markdown(escape_dollars(part))


def start_generation():
    st.session_state.has_clicked_generate = True
    st.session_state.loading = True
    st.session_state.generation_error = None


def toggle_prompt():
    st.session_state.show_prompt = not st.session_state.show_prompt

# ---------------------------
# Inputs (query params, editable in sidebar)
# ---------------------------
qp = st.query_params
st.sidebar.header("Simulation")
use_sample = st.sidebar.checkbox("Use sample reform (offline)", value="reform" not in qp)
countries = list(COUNTRY_CURRENCY)
qp_country = qp.get("country", "uk")
country = st.sidebar.selectbox("Country", countries,
                               index=countries.index(qp_country) if qp_country in countries else 0,
                               disabled=use_sample)
reform_id = st.sidebar.text_input("Reform policy ID", value=qp.get("reform", ""), disabled=use_sample)
baseline_id = st.sidebar.text_input("Baseline policy ID", value=qp.get("baseline", "1"), disabled=use_sample)
region = st.sidebar.text_input("Region", value=qp.get("region", country), disabled=use_sample)
time_period = st.sidebar.text_input("Year", value=qp.get("timePeriod", "2023"), disabled=use_sample)
version = st.sidebar.text_input("Model version", value=qp.get("version", ""), disabled=use_sample,
                                help="Defaults to the latest PolicyEngine release")

if use_sample:
    inputs = SAMPLE_INPUTS
    region = SAMPLE_INPUTS["region"]
    time_period = SAMPLE_INPUTS["time_period"]
else:
    if not reform_id.strip():
        st.info("Enter a reform policy ID in the sidebar to load its impact.")
        st.stop()
    with st.spinner("Loading PolicyEngine simulation results…"):
        try:
            inputs = cached_inputs(country, reform_id.strip(), baseline_id.strip(), region.strip(), time_period.strip(), version)
        except Exception as e:
            st.error(f"Could not load simulation results: {e}")
            st.stop()

metadata = inputs["metadata"]
selected_version = version or metadata.get("version", "")

# ---------------------------
# Header + Blurb
# ---------------------------
st.header("Analysis")
st.markdown(
    f"[Read more about PolicyEngine's automatic GPT4-powered policy analysis.]({BLOG_URL}) "
    "Generation usually takes around 60 seconds. Please verify any results of this experimental feature against our charts."
)

provisions = reform_provisions(metadata, inputs["policy"], time_period)
if provisions:
    with st.expander("Reform provisions", expanded=False):
        st.dataframe(pd.DataFrame(provisions), hide_index=True, use_container_width=True)

# ---------------------------
# Audience + prompt
# ---------------------------
audience = render_audience_selector("audience")

prompt = build_prompt(
    inputs["impact"],
    inputs["policy_label"],
    metadata,
    inputs["policy"],
    region,
    time_period,
    audience=audience,
    version=selected_version,
)

# ---------------------------
# Generate action (LLM)
# ---------------------------
_, mid, _ = st.columns([1, 1, 1])
with mid:
    st.button(
        generate_button_label(st.session_state.has_clicked_generate, st.session_state.loading),
        type="primary",
        use_container_width=True,
        key="generate",
        on_click=start_generation,
        disabled=st.session_state.loading,
    )

if st.session_state.loading:
    with st.spinner("Generating"):
        try:
            st.session_state.analysis = generate_analysis(prompt)
        except Exception as e:
            # keep the previous analysis on screen
            st.session_state.generation_error = str(e)
        finally:
            st.session_state.loading = False
    st.rerun()  # repaint the button as "Regenerate analysis"

if st.session_state.generation_error:
    st.error(f"Analysis generation failed: {st.session_state.generation_error}")
render_analysis(st.session_state.analysis)

# ---------------------------
# Prompt viewer
# ---------------------------
_, mid, _ = st.columns([1, 1, 1])
with mid:
    st.button("Hide prompt" if st.session_state.show_prompt else "Show prompt",
              key="toggle_prompt", on_click=toggle_prompt, use_container_width=True)

if st.session_state.show_prompt:
    text = "\n".join(prompt_lines(prompt))
    st.download_button(
        "⬇️ Download prompt",
        data=text.encode("utf-8"),
        file_name=f"policyengine_prompt_{audience.lower()}.md",
        mime="text/markdown",
    )
    # st.code carries its own copy-to-clipboard button
    st.code(text, language="markdown")
