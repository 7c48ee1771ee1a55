"""
Calculator Page

Weight entry, the pending batch, and copy/download exports.
"""

import pandas as pd
import streamlit as st

from scentvalue.services.formatting import format_price
from ui.api_client import get_client

# Session state keys
WEIGHT_KEY = "weight_input"
LABEL_KEY = "label_input"
PENDING_WEIGHT_KEY = "pending_weight"  # set by a single-mode scan
RESET_KEY = "_reset_inputs"


def render(config: dict):
    """Render entry form, batch table and exports."""
    st.title("Perfume Valuation")
    st.caption(
        f"Bottle tare {config['tare_grams']:g}g · "
        f"{config['rate_per_gram']:g} {config['currency']} per net gram"
    )

    render_entry_form(config)
    st.divider()
    render_batch(config)


def render_entry_form(config: dict):
    """Weight + label input with live preview."""
    client = get_client()

    # Widget values can only be changed before the widgets are created
    if st.session_state.pop(RESET_KEY, False):
        st.session_state[WEIGHT_KEY] = ""
        st.session_state[LABEL_KEY] = ""

    # A scanned weight pre-fills the input; the user still confirms it
    if PENDING_WEIGHT_KEY in st.session_state:
        st.session_state[WEIGHT_KEY] = f"{st.session_state.pop(PENDING_WEIGHT_KEY):g}"

    col1, col2 = st.columns([2, 1])
    with col1:
        st.text_input(
            "Fragrance name",
            key=LABEL_KEY,
            placeholder="e.g. Sauvage Dior (optional)",
        )
    with col2:
        weight_text = st.text_input(
            "Gross weight",
            key=WEIGHT_KEY,
            placeholder="1kg136, 1.2kg, 950, 500g+20g",
        )

    resolved = None
    if weight_text and weight_text.strip():
        result = client.resolve_weight(weight_text)
        if result.success:
            resolved = result.data.get("resolved_weight")
            if not result.data.get("valid"):
                st.warning("Could not read that weight.")
        else:
            st.error(f"Weight check failed: {result.error}")

    can_add = resolved is not None and resolved > 0
    if can_add:
        quote = client.quote(resolved)
        if quote.success:
            st.info(
                f"{resolved:g}g gross → {quote.data['net_weight']:.2f}ml net → "
                f"**{format_price(quote.data['price'])} {config['currency']}**"
            )

    if st.button("Add to batch", type="primary", disabled=not can_add):
        result = client.add_entry(
            expression=weight_text,
            label=st.session_state.get(LABEL_KEY) or None,
        )
        if result.success:
            st.toast(f"Added {result.data['label']}")
            st.session_state[RESET_KEY] = True
            st.rerun()
        else:
            st.error(f"Could not add entry: {result.error}")


def render_batch(config: dict):
    """Pending batch table, totals and exports."""
    client = get_client()
    currency = config["currency"]

    result = client.get_ledger()
    if not result.success:
        st.error(f"Failed to load batch: {result.error}")
        return

    summary = result.data
    entries = summary.get("entries", [])

    col1, col2 = st.columns(2)
    col1.metric("Items", summary.get("count", 0))
    col2.metric("Total batch value", f"{format_price(summary.get('total_value', 0))} {currency}")

    if not entries:
        st.info("No bottles in the batch yet. Weigh one or scan a document to get started.")
        return

    df = pd.DataFrame(entries)
    df["created_at"] = pd.to_datetime(df["created_at"]).dt.strftime("%H:%M:%S")
    df["net_weight"] = df["net_weight"].map(lambda v: f"{v:.2f}")
    df["price"] = df["price"].map(format_price)
    st.dataframe(
        df[["label", "gross_weight", "net_weight", "price", "created_at"]].rename(columns={
            "label": "Fragrance",
            "gross_weight": "Gross (g)",
            "net_weight": "Net (ml)",
            "price": f"Price ({currency})",
            "created_at": "Added",
        }),
        use_container_width=True,
        hide_index=True,
    )

    render_exports(entries)


def render_exports(entries: list):
    """Copy panel and file downloads."""
    client = get_client()

    st.subheader("Export")
    tab_text, tab_csv, tab_item, tab_files = st.tabs(["Batch text", "CSV", "Single item", "Files"])

    texts = client.clipboard_texts()
    with tab_text:
        if texts.success:
            st.code(texts.data["summary_text"], language=None)
    with tab_csv:
        if texts.success:
            st.code(texts.data["csv_text"], language=None)

    with tab_item:
        selected = st.selectbox(
            "Entry",
            options=[e["id"] for e in entries],
            format_func=lambda x: next((e["label"] for e in entries if e["id"] == x), x),
        )
        if selected:
            item = client.entry_text(selected)
            if item.success:
                st.code(item.data, language=None)

    with tab_files:
        col1, col2 = st.columns(2)
        for col, kind, label, mime in (
            (col1, "xlsx", "Excel", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
            (col2, "pdf", "PDF", "application/pdf"),
        ):
            with col:
                if st.button(f"Prepare {label}", key=f"prepare_{kind}"):
                    export = client.download_export(kind)
                    if export.success:
                        st.session_state[f"export_{kind}"] = export
                    else:
                        st.error(f"{label} export failed: {export.error}")
                export = st.session_state.get(f"export_{kind}")
                if export is not None:
                    st.download_button(
                        f"Download {label}",
                        data=export.content,
                        file_name=export.filename or f"batch.{kind}",
                        mime=mime,
                        key=f"download_{kind}",
                    )

    st.divider()
    if st.button("Clear batch", type="secondary"):
        result = client.clear_ledger()
        if result.success:
            for kind in ("xlsx", "pdf"):
                st.session_state.pop(f"export_{kind}", None)
            st.rerun()
        else:
            st.error(f"Could not clear batch: {result.error}")
