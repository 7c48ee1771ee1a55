"""Assistant Page."""

import streamlit as st

from ui.api_client import get_client

ANSWER_KEY = "assistant_answer"

SUGGESTED_QUESTION = "How do I use the batch feature to export multiple items to Excel?"


def render():
    """Free-form questions to the fragrance assistant."""
    st.subheader("Fragrance Assistant")

    query = st.text_input("Ask about measurements, densities or pricing")
    col1, col2 = st.columns([1, 2])
    with col1:
        ask_clicked = st.button("Ask", disabled=not query)
    with col2:
        suggested_clicked = st.button(SUGGESTED_QUESTION)

    question = query if ask_clicked else SUGGESTED_QUESTION if suggested_clicked else None
    if question:
        with st.spinner("Thinking..."):
            result = get_client().ask(question)
        if result.success:
            st.session_state[ANSWER_KEY] = result.data["answer"]
        else:
            st.session_state[ANSWER_KEY] = (
                "I'm having trouble providing insights right now. Please try again later."
            )

    if st.session_state.get(ANSWER_KEY):
        st.markdown(st.session_state[ANSWER_KEY])
