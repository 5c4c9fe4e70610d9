# audience_selector.py: ELI5 / Normal / Wonk segmented control
import streamlit as st

from prompts import AUDIENCE_DESCRIPTIONS, DEFAULT_AUDIENCE

AUDIENCES = list(AUDIENCE_DESCRIPTIONS)

DARK_GRAY = "#616161"
WHITE = "white"
BORDER = "1px solid #6c757d"
BUTTON_WIDTH = "80px"


def audience_button_style(audience: str, current: str) -> str:
    active = audience == current
    if audience == AUDIENCES[0]:
        radius = "5px 0 0 5px"
    elif audience == AUDIENCES[-1]:
        radius = "0 5px 5px 0"
    else:
        radius = "0"
    return (
        f"background-color:{DARK_GRAY if active else WHITE};"
        f"color:{WHITE if active else DARK_GRAY};"
        f"border-radius:{radius};"
        f"border:{BORDER};"
        f"border-right:{BORDER if audience == AUDIENCES[-1] else 'none'};"
        f"padding:5px 10px;margin:0;cursor:pointer;width:{BUTTON_WIDTH};"
    )


def _select(key: str, audience: str):
    st.session_state[key] = audience


def render_audience_selector(key: str = "audience") -> str:
    if key not in st.session_state:
        st.session_state[key] = DEFAULT_AUDIENCE
    current = st.session_state[key]

    # Keyed widgets get an .st-key-<key> container class
    rules = "\n".join(
        f".st-key-{key}_{a} button {{ {audience_button_style(a, current)} }}" for a in AUDIENCES
    )
    st.markdown(f"<style>{rules}</style>", unsafe_allow_html=True)

    _, *cols, _ = st.columns([3] + [1] * len(AUDIENCES) + [3], gap="small")
    for col, a in zip(cols, AUDIENCES):
        with col:
            st.button(a, key=f"{key}_{a}", on_click=_select, args=(key, a))
    return st.session_state[key]


# Example usage
if __name__ == "__main__":
    st.title("Audience selector")
    st.write(f"Selected: {render_audience_selector()}")
