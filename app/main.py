"""
Streamlit Frontend for the Finance Ledger

A thin page over LedgerSession. All rules live in the package; this file
only collects input and displays results.

Pages:
1. Record - add an income or expense
2. Summary - totals, category spending, spending graph
3. Transactions - sorted views of everything recorded
4. File - save to / load from the ledger file
"""

from datetime import date

import streamlit as st

from finance_ledger.config import get_settings
from finance_ledger.models.transaction import TransactionKind, format_currency
from finance_ledger.orchestrator import LedgerSession, create_app_components
from finance_ledger.services.storage import StorageError


# Page configuration
st.set_page_config(
    page_title="Finance Ledger",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_session() -> LedgerSession:
    """Get or create the ledger session (cached)."""
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"Failed to initialize storage: {e}")
        return create_app_components(use_storage=False)


def money(amount) -> str:
    return format_currency(amount, get_settings().currency_symbol)


def main():
    """Main application entry point."""
    session = get_session()

    st.sidebar.title("💰 Finance Ledger")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["➕ Record", "📊 Summary", "📋 Transactions", "💾 File"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(f"**Transactions recorded:** {len(session.ledger)}")

    if page == "➕ Record":
        render_record_page(session)
    elif page == "📊 Summary":
        render_summary_page(session)
    elif page == "📋 Transactions":
        render_transactions_page(session)
    elif page == "💾 File":
        render_file_page(session)


def render_record_page(session: LedgerSession):
    """Render the record form."""
    st.title("➕ Record a Transaction")

    with st.form("record_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            description = st.text_input("Description")
            amount = st.text_input("Amount", value="0.00")
            kind = st.selectbox(
                "Kind",
                options=[k.value for k in TransactionKind],
            )
        with col2:
            category = st.text_input("Category")
            when = st.date_input("Date", value=date.today())

        submitted = st.form_submit_button("Record")

    if not submitted:
        return

    result = session.record(
        description=description,
        amount=amount,
        kind=kind,
        category=category,
        date=when,
    )
    if result.success:
        st.success(f"Recorded: {result.transaction.format_line(get_settings().currency_symbol)}")
        if "," in description or "," in category:
            st.warning("Commas in description or category will not survive a save/load.")
    else:
        st.error("Transaction not recorded:")
        for issue in result.error.issues:
            st.markdown(f"- **{issue.field}**: {issue.message}")


def render_summary_page(session: LedgerSession):
    """Render totals, category spending and the text graph."""
    st.title("📊 Summary")

    summary = session.summary()

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Income", money(summary.total_income))
    col2.metric("Total Expenses", money(summary.total_expenses))
    col3.metric("Net Savings", money(summary.net_savings))

    st.markdown("### Spending by Category")
    if not summary.category_spending:
        st.info("No expenses recorded yet.")
        return

    st.table([
        {"Category": category, "Spent": money(amount)}
        for category, amount in summary.category_spending.items()
    ])
    st.markdown(f"**Most spent on:** {summary.most_spent_category}")

    st.markdown("### Spending Graph")
    bars = session.graph()
    width = max(len(bar.category) for bar in bars)
    st.code("\n".join(f"{bar.category.ljust(width)} | {bar.bar}" for bar in bars))


def render_transactions_page(session: LedgerSession):
    """Render the transaction list in the chosen order."""
    st.title("📋 Transactions")

    order = st.radio(
        "Sort by",
        ["Insertion order", "Date", "Amount", "Category"],
        horizontal=True,
    )

    ledger = session.ledger
    if order == "Date":
        transactions = ledger.sorted_by_date()
    elif order == "Amount":
        transactions = ledger.sorted_by_amount()
    elif order == "Category":
        transactions = ledger.sorted_by_category()
    else:
        transactions = list(ledger.transactions)

    if not transactions:
        st.info("Nothing recorded yet. Use the 'Record' page to add your first transaction.")
        return

    symbol = get_settings().currency_symbol
    st.code("\n".join(t.format_line(symbol) for t in transactions))


def render_file_page(session: LedgerSession):
    """Render save/load controls."""
    st.title("💾 Ledger File")
    st.markdown(f"File: `{get_settings().data_file}`")
    if session.storage is not None and not session.storage.exists():
        st.caption("The file does not exist yet. Save will create it.")

    col1, col2 = st.columns(2)

    with col1:
        if st.button("Save"):
            try:
                report = session.save()
            except StorageError as e:
                st.error(f"Save failed: {e}")
            else:
                st.success(f"Saved {report.written_count} transactions.")
                if report.has_unsafe_lines:
                    st.warning(
                        "These lines contain commas or line breaks and will not load back correctly: "
                        + ", ".join(str(n) for n in report.unsafe_line_numbers)
                    )

    with col2:
        if st.button("Load"):
            try:
                report = session.load()
            except StorageError as e:
                st.error(f"Load failed: {e}")
            else:
                if report.source_missing:
                    st.info("Nothing to load: the ledger file does not exist yet.")
                else:
                    st.success(f"Loaded {report.loaded_count} transactions.")
                if report.skipped:
                    st.warning(f"Skipped {report.skipped_count} malformed lines:")
                    for skipped in report.skipped:
                        st.markdown(f"- line {skipped.line_number}: {skipped.reason}")

    trail = session.audit_logger.trail
    if trail is not None and trail.events:
        st.markdown("### Recent Activity")
        for event in trail.recent(10):
            st.markdown(f"- {event.timestamp:%H:%M:%S} {event.description}")


if __name__ == "__main__":
    main()
