"""
ScentValue Streamlit Application

Single-page valuation tool. This is a thin client that calls the API.

Run with: streamlit run ui/app.py
"""

import streamlit as st

from scentvalue.models.common import PricingConfig
from ui.api_client import get_client
from ui.config import get_settings
from ui.pages import assistant, calculator, scanner

# Page configuration
settings = get_settings()
st.set_page_config(
    page_title=settings.page_title,
    page_icon=settings.page_icon or None,
    layout="centered",
    initial_sidebar_state="collapsed",
)


def check_api_connection() -> bool:
    """Check if API is available."""
    client = get_client()
    result = client.health_check()
    return result.success


def show_connection_error():
    """Show API connection error."""
    st.error(
        "Cannot connect to the ScentValue API. "
        "Please ensure the API server is running."
    )
    st.info(
        f"Expected API URL: {get_settings().api_base_url}\n\n"
        "Start the API with: `uvicorn api.main:app --reload`"
    )


def load_pricing_config() -> dict:
    """Pricing in effect on the server, falling back to the defaults."""
    result = get_client().get_config()
    if result.success and result.data:
        return result.data
    return PricingConfig().model_dump()


def main():
    """Main application entry point."""
    if not check_api_connection():
        show_connection_error()
        return

    config = load_pricing_config()

    calculator.render(config)
    st.divider()
    scanner.render()
    st.divider()
    assistant.render()


if __name__ == "__main__":
    main()
