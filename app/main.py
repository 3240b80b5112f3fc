"""
Streamlit Frontend for Personal Finance Tracker

The user interface: log in or register, then a dashboard with
summary cards, charts and the transaction history.

DESIGN PRINCIPLES:
1. Thin view glue: every decision lives in the orchestrator
2. Form errors are shown inline, next to the field
3. Deletes and logouts ask for confirmation
4. No hidden actions

The session comes from the persisted session slot on every rerun and
is passed explicitly into each transaction operation.
"""

from datetime import date

import plotly.graph_objects as go
import streamlit as st

from src.audit import configure_logging
from src.config import get_settings
from src.models.transaction import (
    CATEGORIES_BY_TYPE,
    DashboardView,
    SortField,
    SortOrder,
    Transaction,
    TransactionFilter,
    TransactionSort,
    TransactionType,
)
from src.models.user import Session
from src.models.validation import ValidationResult
from src.orchestrator import AuthFlow, TransactionFlow, create_app_components
from src.queries import format_currency, format_date


# Page configuration
st.set_page_config(
    page_title="Personal Finance Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for the dashboard
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    div[data-testid="stMetricValue"] {
        font-size: 1.6em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    configure_logging(get_settings().app.log_level)
    return create_app_components()


def show_field_errors(validation: ValidationResult, fields: list[str]) -> None:
    for field in fields:
        message = validation.first_message(field)
        if message:
            st.error(message)


def main():
    """Main application entry point."""
    auth_flow, transaction_flow, _ = get_components()
    session = auth_flow.current_user()

    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.markdown("---")

    if session is None:
        page = st.sidebar.radio("Navigate to:", ["🔑 Login", "📝 Register"], index=0)
        if page == "🔑 Login":
            render_login_page(auth_flow)
        else:
            render_register_page(auth_flow)
        return

    st.sidebar.markdown(f"Signed in as **{session.name}**")
    render_logout(auth_flow, session)
    render_dashboard_page(transaction_flow, session)


def render_login_page(auth_flow: AuthFlow):
    st.title("🔑 Login")

    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", type="primary")

    if submitted:
        session, validation, message = auth_flow.login(email, password)
        if session:
            st.rerun()
        elif not validation.is_valid:
            show_field_errors(validation, ["email", "password"])
        else:
            st.error(message)


def render_register_page(auth_flow: AuthFlow):
    st.title("📝 Register")

    with st.form("register_form"):
        name = st.text_input("Name")
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        confirm_password = st.text_input("Confirm Password", type="password")
        submitted = st.form_submit_button("Register", type="primary")

    if submitted:
        result, validation = auth_flow.register(name, email, password, confirm_password)
        if result is None:
            show_field_errors(validation, ["name", "email", "password", "confirm_password"])
        elif result.success:
            st.success(f"✅ {result.message}. You can log in now.")
        else:
            st.error(result.message)


def render_logout(auth_flow: AuthFlow, session: Session):
    if "confirm_logout" not in st.session_state:
        st.session_state.confirm_logout = False

    if not st.session_state.confirm_logout:
        if st.sidebar.button("🚪 Logout"):
            st.session_state.confirm_logout = True
            st.rerun()
        return

    st.sidebar.warning("Are you sure you want to log out?")
    col1, col2 = st.sidebar.columns(2)
    if col1.button("Yes, log out"):
        auth_flow.logout(session)
        st.session_state.confirm_logout = False
        st.rerun()
    if col2.button("Cancel"):
        st.session_state.confirm_logout = False
        st.rerun()


def monthly_chart(view: DashboardView) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=view.monthly.labels,
        y=[float(v) for v in view.monthly.income],
        name="Income",
        marker_color="#22c55e",
    ))
    fig.add_trace(go.Bar(
        x=view.monthly.labels,
        y=[float(v) for v in view.monthly.expenses],
        name="Expenses",
        marker_color="#ef4444",
    ))
    fig.update_layout(title="Monthly Income vs Expenses", barmode="group", yaxis_title="Amount")
    return fig


def category_chart(view: DashboardView) -> go.Figure:
    fig = go.Figure(go.Pie(
        labels=view.categories.categories,
        values=[float(v) for v in view.categories.amounts],
    ))
    fig.update_layout(title="Expenses by Category")
    return fig


def render_summary(view: DashboardView, symbol: str):
    summary = view.summary
    cols = st.columns(5)
    cols[0].metric("Total Income", format_currency(summary.total_income, symbol))
    cols[1].metric("Total Expenses", format_currency(summary.total_expenses, symbol))
    cols[2].metric("Balance", format_currency(summary.current_balance, symbol))
    cols[3].metric("Avg Income / Month", format_currency(summary.average_income_per_month, symbol))
    cols[4].metric("Avg Expense / Month", format_currency(summary.average_expense_per_month, symbol))


def render_transaction_form(
    transaction_flow: TransactionFlow,
    session: Session,
    existing: Transaction = None,
):
    """Add form, or edit form when `existing` is given."""
    key = f"edit_{existing.id}" if existing else "add"

    # Type sits outside the form so the category options follow it
    types = [t.value for t in TransactionType]
    tx_type = st.radio(
        "Type",
        types,
        index=types.index(existing.type.value) if existing else 0,
        horizontal=True,
        key=f"{key}_type",
    )
    categories = list(CATEGORIES_BY_TYPE[TransactionType(tx_type)])

    with st.form(f"{key}_form"):
        amount = st.text_input("Amount", value=str(existing.amount) if existing else "")
        category = st.selectbox(
            "Category",
            options=categories,
            index=(
                categories.index(existing.category)
                if existing and existing.category in categories
                else 0
            ),
        )
        tx_date = st.date_input("Date", value=existing.date if existing else date.today())
        description = st.text_input("Description", value=existing.description if existing else "")
        submitted = st.form_submit_button("Save", type="primary")

    if submitted:
        saved, validation = transaction_flow.save_transaction(
            session,
            amount=amount,
            transaction_type=tx_type,
            category=category,
            date_value=tx_date,
            description=description,
            transaction_id=existing.id if existing else None,
        )
        if not validation.is_valid:
            show_field_errors(validation, ["amount", "type", "category", "date", "description"])
        elif saved is None:
            st.error("Nothing was saved. Please log in again.")
        else:
            st.session_state.editing_id = None
            st.rerun()


def render_history(
    transaction_flow: TransactionFlow,
    session: Session,
    view: DashboardView,
    symbol: str,
):
    st.subheader("Transaction History")
    st.caption(view.count_label)

    if "deleting_id" not in st.session_state:
        st.session_state.deleting_id = None
    if "editing_id" not in st.session_state:
        st.session_state.editing_id = None

    for tx in view.transactions:
        cols = st.columns([2, 2, 2, 2, 3, 1, 1])
        cols[0].write(format_date(tx.date))
        cols[1].write(tx.type.value)
        cols[2].write(tx.category)
        cols[3].write(format_currency(tx.amount, symbol))
        cols[4].write(tx.description or "—")
        if cols[5].button("✏️", key=f"edit_{tx.id}"):
            st.session_state.editing_id = tx.id
        if cols[6].button("🗑️", key=f"delete_{tx.id}"):
            st.session_state.deleting_id = tx.id

        if st.session_state.deleting_id == tx.id:
            st.warning("Delete this transaction?")
            c1, c2 = st.columns(2)
            if c1.button("Yes, delete", key=f"confirm_delete_{tx.id}"):
                transaction_flow.delete_transaction(session, tx.id)
                st.session_state.deleting_id = None
                st.rerun()
            if c2.button("Cancel", key=f"cancel_delete_{tx.id}"):
                st.session_state.deleting_id = None
                st.rerun()

        if st.session_state.editing_id == tx.id:
            with st.expander("Edit transaction", expanded=True):
                render_transaction_form(transaction_flow, session, existing=tx)


def render_dashboard_page(transaction_flow: TransactionFlow, session: Session):
    st.title("📊 Dashboard")
    symbol = get_settings().app.currency_symbol

    # Filters and sorting
    with st.sidebar:
        st.markdown("### Filters")
        all_categories = transaction_flow.filter_categories(session)
        filter_type = st.selectbox("Type", ["", *[t.value for t in TransactionType]],
                                   format_func=lambda x: x or "All Types")
        filter_category = st.selectbox("Category", ["", *all_categories],
                                       format_func=lambda x: x or "All Categories")
        start_date = st.date_input("From", value=None)
        end_date = st.date_input("To", value=None)
        sort_by = st.selectbox("Sort by", list(SortField), format_func=lambda x: x.value.title())
        sort_order = st.selectbox("Order", list(SortOrder),
                                  index=1, format_func=lambda x: x.value.upper())

    view = transaction_flow.build_dashboard(
        session,
        TransactionFilter(
            type=filter_type,
            category=filter_category,
            start_date=start_date,
            end_date=end_date,
        ),
        TransactionSort(sort_by=sort_by, sort_order=sort_order),
    )

    render_summary(view, symbol)

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(monthly_chart(view), use_container_width=True)
    with col2:
        st.plotly_chart(category_chart(view), use_container_width=True)

    with st.expander("➕ Add Transaction"):
        render_transaction_form(transaction_flow, session)

    render_history(transaction_flow, session, view, symbol)


if __name__ == "__main__":
    main()
