"""
Streamlit Frontend for Spending Tracker

Two pages:
1. Journal - add a spending record, list saved records
2. Dashboard - totals, category breakdown and spending over time
   for a chosen day, week or month

The UI holds no business logic. It reads from and writes to one
SpendingSession and re-renders after every change.
"""

from datetime import date

import streamlit as st

from spending_tracker.config import ConfigurationError, get_settings, validate_all_settings
from spending_tracker.models.aggregation import Granularity
from spending_tracker.services.storage import StorageWriteError
from spending_tracker.session import SpendingSession, create_session
from spending_tracker.validation import ValidationError


# Page configuration
st.set_page_config(
    page_title="Spending Tracker",
    page_icon="💸",
    layout="centered",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_session() -> SpendingSession:
    """Get or create the application session (cached)."""
    return create_session()


def money(amount: float) -> str:
    symbol = get_settings().app.currency_symbol
    return f"{symbol}{amount:,.2f}"


def main():
    """Main application entry point."""
    try:
        session = get_session()
    except ConfigurationError as e:
        st.error(f"Failed to initialize: {e}")
        st.stop()

    st.sidebar.title("💸 Spending Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "📝 Journal", "⚙️ Settings"],
        index=0,
    )

    if page == "📝 Journal":
        render_journal_page(session)
    elif page == "⚙️ Settings":
        render_settings_page()
    else:
        render_dashboard_page(session)


def render_journal_page(session: SpendingSession):
    """Render the add-record form and the saved record list."""
    st.title("📝 Add Spending Record")

    options = [*session.categories, session.others_label]
    selected = st.selectbox("Category", options, index=None, placeholder="-- Select Category --")

    # Outside the form so the text box appears as soon as "Others" is picked
    other_text = ""
    if selected == session.others_label:
        other_text = st.text_input("New Category Name", placeholder="Enter custom category")

    with st.form("add_record", clear_on_submit=True):
        record_date = st.date_input("Date", value=date.today())
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")
        submitted = st.form_submit_button("Add Record", type="primary")

    if submitted:
        try:
            session.add_spending(record_date, selected or "", amount, other_text=other_text)
            st.success("Record saved")
        except ValidationError as e:
            for issue in e.issues:
                st.error(issue.message)
        except StorageWriteError as e:
            st.error(f"Failed to save: {e}")

    st.markdown("### Saved Spending Records")
    records = session.records
    if not records:
        st.caption("No spending records yet.")
        return

    for record in records:
        col1, col2 = st.columns([4, 1])
        col1.markdown(f"**{record.date}** - {record.category}")
        col2.markdown(money(record.amount))


def render_dashboard_page(session: SpendingSession):
    """Render totals and charts for the selected window."""
    st.title("📊 Analytics Dashboard")

    col1, col2 = st.columns(2)
    with col1:
        granularity = st.radio(
            "Filter",
            [g.value for g in Granularity],
            index=[g.value for g in Granularity].index(session.granularity.value),
            horizontal=True,
        )
    with col2:
        label = {
            Granularity.DAILY.value: "Select Date",
            Granularity.WEEKLY.value: "Select Week (any date within the week)",
            Granularity.MONTHLY.value: "Select Month (any date within the month)",
        }[granularity]
        reference = st.date_input(label, value=session.reference_date)

    if granularity != session.granularity.value:
        session.set_granularity(granularity)
    if reference != session.reference_date:
        session.set_reference_date(reference)

    summary = session.dashboard()

    col1, col2 = st.columns(2)
    col1.metric("Total Spending (All Time)", money(summary.total_all_time))
    col2.metric(
        f"Total Spending ({summary.granularity.value} - {summary.window_label})",
        money(summary.total_filtered),
    )

    st.markdown("### Spending by Category")
    if not summary.has_data:
        st.caption("No spending records for this period.")
        return

    for category, amount in summary.breakdown.as_dict().items():
        col1, col2 = st.columns([4, 1])
        col1.markdown(category)
        col2.markdown(money(amount))

    st.bar_chart(
        {"category": summary.breakdown.labels, "amount": summary.breakdown.amounts},
        x="category",
        y="amount",
    )

    st.markdown("### Spending Over Time")
    st.line_chart(
        {"date": summary.series.labels, "Spending": summary.series.totals},
        x="date",
        y="Spending",
    )


def render_settings_page():
    """Render configuration status."""
    st.title("⚙️ Settings")

    status = validate_all_settings()
    for name, key in [("Storage", "storage"), ("Application", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "Settings are read from environment variables or a `.env` file, "
        "e.g. `SPENDING_STORAGE_PATH` and `WEEK_START_DAY`."
    )


if __name__ == "__main__":
    main()
