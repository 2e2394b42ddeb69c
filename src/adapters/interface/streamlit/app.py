"""Streamlit dashboard entry point."""

from collections.abc import Callable, Sequence
from datetime import date
from decimal import Decimal
import importlib

import streamlit as st
import altair as alt

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.use_cases.get_financial_summary import (
    GetFinancialSummaryUseCase,
)
from src.application.use_cases.get_loan_portfolio import (
    GetLoanPortfolioUseCase,
)
from src.application.use_cases.get_revenue_streams import (
    GetAvailableRevenueStreamsUseCase,
    GetRevenueStreamsUseCase,
)
from src.application.use_cases.manage_categories import SaveCategoryUseCase
from src.application.use_cases.manage_loans import (
    DeleteLoanUseCase,
    MakeLoanPaymentUseCase,
    SaveLoanUseCase,
)
from src.application.use_cases.manage_templates import (
    DeleteTemplateUseCase,
    SaveTemplateUseCase,
    UseTemplateUseCase,
)
from src.application.use_cases.manage_transactions import (
    DeleteTransactionUseCase,
    SaveTransactionUseCase,
)
from src.domain.constants import BORROWED, EXPENSE, INCOME, LENT
from src.domain.exceptions import FinanceError
from src.domain.models import (
    Category,
    FinanceSnapshot,
    FinancialSummary,
    Loan,
    LoanForm,
    LoanPortfolioView,
    RevenueStream,
    RevenueStreamsView,
    Transaction,
    TransactionForm,
    TransactionTemplate,
)
from src.infrastructure.container import build_finance_repository
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import FinanceSettings

PAGES = ["Overview", "Revenue Streams", "Transactions", "Loans"]


@st.cache_resource(show_spinner=False)
def _repository() -> FinanceRepositoryPort:
    """Build the repository selected by the environment, once per process."""
    return build_finance_repository(FinanceSettings.from_env())


def _fetch_revenue_streams() -> RevenueStreamsView:
    """Fetch revenue streams and their totals."""
    return GetRevenueStreamsUseCase(_repository()).execute()


@st.cache_data(show_spinner=False)
def _load_revenue_streams() -> RevenueStreamsView:
    """Cached wrapper around _fetch_revenue_streams."""
    return _fetch_revenue_streams()


def _fetch_available_streams() -> list[Category]:
    """Fetch income categories that can fund expenses."""
    return GetAvailableRevenueStreamsUseCase(_repository()).execute()


@st.cache_data(show_spinner=False)
def _load_available_streams() -> list[Category]:
    """Cached wrapper around _fetch_available_streams."""
    return _fetch_available_streams()


def _fetch_financial_summary(recent_limit: int) -> FinancialSummary:
    """Fetch the dashboard summary."""
    use_case = GetFinancialSummaryUseCase(_repository())
    return use_case.execute(recent_limit=recent_limit)


@st.cache_data(show_spinner=False)
def _load_financial_summary(recent_limit: int = 5) -> FinancialSummary:
    """Cached wrapper around _fetch_financial_summary."""
    return _fetch_financial_summary(recent_limit)


def _fetch_loan_portfolio() -> LoanPortfolioView:
    """Fetch loans grouped by direction."""
    return GetLoanPortfolioUseCase(_repository()).execute()


@st.cache_data(show_spinner=False)
def _load_loan_portfolio() -> LoanPortfolioView:
    """Cached wrapper around _fetch_loan_portfolio."""
    return _fetch_loan_portfolio()


def _fetch_snapshot() -> FinanceSnapshot:
    """Fetch every stored record."""
    return _repository().load_snapshot()


@st.cache_data(show_spinner=False)
def _load_snapshot() -> FinanceSnapshot:
    """Cached wrapper around _fetch_snapshot."""
    return _fetch_snapshot()


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that the numpy and pandas modules Altair relies on are usable.

    Returns:
        Tuple with a success flag and an error message when unusable.
    """
    numpy = importlib.import_module("numpy")
    if not hasattr(numpy, "ndarray"):
        return False, "numpy is installed but incomplete (no ndarray)."
    pandas = importlib.import_module("pandas")
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas is installed but incomplete (no Timestamp)."
    return True, None


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = "€" if currency_code == "EUR" else currency_code
    return f"{value:,.2f} {symbol}"


def _format_signed(value: Decimal, currency_code: str) -> str:
    """Format a balance that may be negative."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{_format_currency(value, currency_code)}"


def _prepare_stream_chart_data(
    streams: Sequence[RevenueStream],
    currency_code: str,
) -> list[dict[str, str | float]]:
    """Prepare grouped bar chart data, two bars per revenue stream.

    Args:
        streams: Revenue streams to chart.
        currency_code: Currency used for the labels.

    Returns:
        Altair-ready rows with stream, measure, amount and label.
    """
    data: list[dict[str, str | float]] = []
    for stream in streams:
        for measure, amount in (
            ("Income", stream.total_income),
            ("Allocated", stream.allocated_expenses),
        ):
            data.append(
                {
                    "stream": stream.name,
                    "measure": measure,
                    "amount": float(amount),
                    "amount_label": _format_currency(amount, currency_code),
                }
            )
    return data


def _transaction_rows(
    transactions: Sequence[Transaction],
    currency_code: str,
) -> list[dict[str, str]]:
    """Build table rows for transactions, newest first."""
    ordered = sorted(transactions, key=lambda t: t.date, reverse=True)
    return [
        {
            "Date": t.date.strftime("%Y-%m-%d"),
            "Type": t.kind.capitalize(),
            "Category": t.category_name,
            "Description": t.description,
            "Stream": t.revenue_stream or "—",
            "Amount": _format_signed(
                t.amount if t.kind == INCOME else -t.amount,
                currency_code,
            ),
        }
        for t in ordered
    ]


def _loan_rows(
    loans: Sequence[Loan],
    currency_code: str,
) -> list[dict[str, str]]:
    """Build table rows for loans."""
    return [
        {
            "Name": loan.name,
            "Balance": _format_currency(loan.current_balance, currency_code),
            "Principal": _format_currency(
                loan.principal_amount,
                currency_code,
            ),
            "Rate": f"{loan.interest_rate}%",
            "Monthly": _format_currency(loan.monthly_payment, currency_code),
            "Next Payment": loan.next_payment_date.strftime("%Y-%m-%d"),
            "Stream": loan.revenue_stream_allocation or "—",
        }
        for loan in loans
    ]


def _run_mutation(
    label: str,
    action: Callable[[FinanceRepositoryPort], object],
) -> bool:
    """Run a mutation use case and refresh cached views on success.

    Args:
        label: Action name shown to the user and written to the usage log.
        action: Callable receiving the repository.

    Returns:
        bool: True when the mutation was stored.
    """
    try:
        action(_repository())
    except FinanceError as exc:
        st.error(f"{label} failed: {exc}")
        return False
    st.cache_data.clear()
    get_usage_logger().info(f"action={label}")
    st.success(f"{label} done.")
    return True


def _render_overview(currency_code: str) -> None:
    """Render summary metric cards and recent transactions."""
    summary = _load_financial_summary(5)
    income_col, expense_col, remaining_col = st.columns(3)
    income_col.metric(
        "Income",
        _format_currency(summary.total_income, currency_code),
    )
    expense_col.metric(
        "Expenses",
        _format_currency(summary.total_expenses, currency_code),
    )
    remaining_col.metric(
        "Remaining",
        _format_signed(summary.total_remaining, currency_code),
    )
    borrowed_col, lent_col, monthly_col = st.columns(3)
    borrowed_col.metric(
        "Borrowed",
        _format_currency(summary.loan_totals.total_borrowed, currency_code),
        f"{summary.borrowed_count} loans",
        delta_color="off",
    )
    lent_col.metric(
        "Lent",
        _format_currency(summary.loan_totals.total_lent, currency_code),
        f"{summary.lent_count} loans",
        delta_color="off",
    )
    monthly_col.metric(
        "Monthly Payments",
        _format_currency(summary.loan_totals.monthly_payments, currency_code),
    )
    st.subheader("Recent Transactions")
    if not summary.recent_transactions:
        st.info("No transactions recorded yet.")
        return
    st.dataframe(
        _transaction_rows(summary.recent_transactions, currency_code),
        width="stretch",
        hide_index=True,
    )


def _render_stream_chart(
    streams: Sequence[RevenueStream],
    currency_code: str,
) -> None:
    """Render income against allocated expenses for each stream."""
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(f"Chart unavailable: {message}")
        return
    data = _prepare_stream_chart_data(streams, currency_code)
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
    ).encode(
        x=alt.X("stream:N", title=None),
        xOffset=alt.XOffset("measure:N"),
        y=alt.Y("amount:Q", title=currency_code),
        color=alt.Color(
            "measure:N",
            scale=alt.Scale(range=["#2e7d32", "#e76f51"]),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("stream:N"),
            alt.Tooltip("measure:N"),
            alt.Tooltip("amount_label:N"),
        ],
    ).properties(height=320)
    st.altair_chart(chart, width="stretch")


def _render_revenue_streams(currency_code: str) -> None:
    """Render per-stream income, allocations and remaining balance."""
    view = _load_revenue_streams()
    income_col, expense_col, remaining_col = st.columns(3)
    income_col.metric(
        "Total Income",
        _format_currency(view.totals.total_income, currency_code),
    )
    expense_col.metric(
        "Allocated Expenses",
        _format_currency(view.totals.total_expenses, currency_code),
    )
    remaining_col.metric(
        "Remaining",
        _format_signed(view.totals.total_remaining, currency_code),
    )
    if not view.streams:
        st.info("No revenue streams yet. Record some income first.")
        return
    _render_stream_chart(view.streams, currency_code)
    for stream in view.streams:
        with st.expander(
            f"{stream.name}: "
            f"{_format_signed(stream.remaining, currency_code)} remaining"
        ):
            if not stream.expenses:
                st.caption("No expenses allocated to this stream.")
                continue
            st.dataframe(
                _transaction_rows(stream.expenses, currency_code),
                width="stretch",
                hide_index=True,
            )


def _option_index(options: Sequence[str], value: str | None) -> int | None:
    """Return the position of value in options, or None when absent."""
    if value is None or value not in options:
        return None
    return list(options).index(value)


def _transaction_label(transaction: Transaction, currency_code: str) -> str:
    """Describe a transaction in a selector."""
    return " · ".join(
        part
        for part in (
            f"{transaction.date:%Y-%m-%d}",
            transaction.category_name,
            _format_currency(transaction.amount, currency_code),
            transaction.description,
        )
        if part
    )


def _template_label(template: TransactionTemplate, currency_code: str) -> str:
    """Describe a template in a button or selector."""
    return (
        f"{template.description or template.category_name} "
        f"({_format_currency(template.amount, currency_code)})"
    )


def _loan_label(loan: Loan, currency_code: str) -> str:
    """Describe a loan in a selector."""
    return (
        f"{loan.name} ({loan.direction}, "
        f"{_format_currency(loan.current_balance, currency_code)} left)"
    )


def _render_entry_form(
    key: str,
    categories: Sequence[Category],
    streams: Sequence[Category],
    submit_label: str,
    editing: Transaction | TransactionTemplate | None = None,
    with_date: bool = True,
) -> TransactionForm | None:
    """Render the fields shared by transactions and templates.

    Args:
        key: Form key; widget keys derive from it.
        categories: Categories offered for the selected type.
        streams: Income categories that can fund an expense.
        submit_label: Caption of the submit button.
        editing: Record whose values prefill the fields, if any.
        with_date: Whether to ask for a date.

    Returns:
        TransactionForm | None: Raw fields once submitted, else None.
    """
    kinds = [INCOME, EXPENSE]
    kind = st.radio(
        "Type",
        kinds,
        index=kinds.index(editing.kind) if editing else 0,
        horizontal=True,
        format_func=str.capitalize,
        key=f"{key}_kind",
    )
    category_names = [c.name for c in categories if c.kind == kind]
    stream_names = [stream.name for stream in streams]
    category_index = (
        _option_index(category_names, editing.category_name)
        if editing
        else None
    )
    with st.form(key, clear_on_submit=editing is None):
        amount_text = st.text_input(
            "Amount",
            value=str(editing.amount) if editing else "",
            placeholder="0.00",
            key=f"{key}_amount",
        )
        category_name = st.selectbox(
            "Category",
            category_names,
            index=category_index or 0,
            key=f"{key}_category",
        )
        revenue_stream = None
        if kind == EXPENSE:
            revenue_stream = st.selectbox(
                "Revenue Stream",
                stream_names,
                index=_option_index(
                    stream_names,
                    editing.revenue_stream if editing else None,
                ),
                placeholder="Choose the income funding this expense",
                key=f"{key}_stream",
            )
        description = st.text_input(
            "Description",
            value=editing.description if editing else "",
            key=f"{key}_description",
        )
        when = None
        if with_date:
            when = st.date_input(
                "Date",
                value=(
                    editing.date.date()
                    if isinstance(editing, Transaction)
                    else date.today()
                ),
                key=f"{key}_date",
            )
        submitted = st.form_submit_button(submit_label)
    if not submitted:
        return None
    return TransactionForm(
        kind=kind,
        amount_text=amount_text,
        category_name=category_name or "",
        description=description,
        revenue_stream=revenue_stream,
        date=when,
    )


def _render_transaction_form(
    categories: Sequence[Category],
    streams: Sequence[Category],
    editing: Transaction | None = None,
) -> None:
    """Render the add-transaction form, or the edit form of a record."""
    if editing is None:
        form = _render_entry_form(
            "add_transaction",
            categories,
            streams,
            "Add Transaction",
        )
        if form is not None:
            _run_mutation(
                "Add transaction",
                lambda repo: SaveTransactionUseCase(repo).execute(form),
            )
        return
    form = _render_entry_form(
        f"edit_transaction_{editing.id}",
        categories,
        streams,
        "Save Changes",
        editing=editing,
    )
    if form is not None:
        _run_mutation(
            "Edit transaction",
            lambda repo: SaveTransactionUseCase(repo).execute(
                form,
                transaction_id=editing.id,
            ),
        )


def _render_template_form(
    categories: Sequence[Category],
    streams: Sequence[Category],
    editing: TransactionTemplate | None = None,
) -> None:
    """Render the add-template form, or the edit form of a template."""
    key = f"edit_template_{editing.id}" if editing else "add_template"
    form = _render_entry_form(
        key,
        categories,
        streams,
        "Save Template" if editing else "Add Template",
        editing=editing,
        with_date=False,
    )
    if form is None:
        return
    template_id = editing.id if editing else None
    _run_mutation(
        "Edit template" if editing else "Add template",
        lambda repo: SaveTemplateUseCase(repo).execute(
            form,
            template_id=template_id,
        ),
    )


def _render_category_form() -> None:
    """Render the add-category form."""
    with st.form("add_category", clear_on_submit=True):
        name = st.text_input("Category Name")
        kind = st.selectbox(
            "Category Type",
            [INCOME, EXPENSE],
            format_func=str.capitalize,
        )
        submitted = st.form_submit_button("Add Category")
    if submitted:
        _run_mutation(
            "Add category",
            lambda repo: SaveCategoryUseCase(repo).execute(name, kind),
        )


def _render_templates(
    snapshot: FinanceSnapshot,
    streams: Sequence[Category],
    currency_code: str,
) -> None:
    """Render quick-add buttons and template management."""
    for template in snapshot.templates:
        label = _template_label(template, currency_code)
        if st.button(label, key=f"template_{template.id}"):
            _run_mutation(
                "Use template",
                lambda repo, template_id=template.id: UseTemplateUseCase(
                    repo
                ).execute(template_id),
            )
    with st.expander("Manage Templates"):
        _render_template_form(snapshot.categories, streams)
        selected = st.selectbox(
            "Template",
            snapshot.templates,
            index=None,
            format_func=lambda t: _template_label(t, currency_code),
            key="select_template",
        )
        if selected is None:
            return
        _render_template_form(snapshot.categories, streams, editing=selected)
        if st.button("Delete template", key=f"delete_template_{selected.id}"):
            _run_mutation(
                "Delete template",
                lambda repo: DeleteTemplateUseCase(repo).execute(selected.id),
            )


def _render_transactions(currency_code: str) -> None:
    """Render transaction entry, quick-add templates and history."""
    snapshot = _load_snapshot()
    streams = _load_available_streams()
    entry_col, side_col = st.columns(2)
    with entry_col:
        st.subheader("New Transaction")
        _render_transaction_form(snapshot.categories, streams)
    with side_col:
        st.subheader("Quick Add")
        _render_templates(snapshot, streams, currency_code)
        st.subheader("Categories")
        _render_category_form()

    st.subheader("History")
    if not snapshot.transactions:
        st.info("No transactions recorded yet.")
        return
    st.dataframe(
        _transaction_rows(snapshot.transactions, currency_code),
        width="stretch",
        hide_index=True,
    )
    selected = st.selectbox(
        "Transaction",
        sorted(snapshot.transactions, key=lambda t: t.date, reverse=True),
        index=None,
        format_func=lambda t: _transaction_label(t, currency_code),
        placeholder="Choose a transaction to edit or delete",
        key="select_transaction",
    )
    if selected is None:
        return
    _render_transaction_form(snapshot.categories, streams, editing=selected)
    if st.button("Delete transaction", key=f"delete_tx_{selected.id}"):
        _run_mutation(
            "Delete transaction",
            lambda repo: DeleteTransactionUseCase(repo).execute(selected.id),
        )


def _render_loan_form(
    streams: Sequence[Category],
    editing: Loan | None = None,
) -> None:
    """Render the add-loan form, or the edit form of a loan."""
    key = f"edit_loan_{editing.id}" if editing else "add_loan"
    directions = [BORROWED, LENT]
    direction = st.radio(
        "Direction",
        directions,
        index=directions.index(editing.direction) if editing else 0,
        horizontal=True,
        format_func=str.capitalize,
        key=f"{key}_direction",
    )
    stream_names = [stream.name for stream in streams]
    with st.form(key, clear_on_submit=editing is None):
        name = st.text_input(
            "Name",
            value=editing.name if editing else "",
            key=f"{key}_name",
        )
        principal_text = st.text_input(
            "Principal",
            value=str(editing.principal_amount) if editing else "",
            key=f"{key}_principal",
        )
        rate_text = st.text_input(
            "Annual Interest Rate (%)",
            value=str(editing.interest_rate) if editing else "0",
            key=f"{key}_rate",
        )
        term_text = st.text_input(
            "Term (months)",
            value=str(editing.term_months) if editing else "",
            key=f"{key}_term",
        )
        start = st.date_input(
            "Start Date",
            value=editing.start_date.date() if editing else date.today(),
            key=f"{key}_start",
        )
        revenue_stream = None
        if direction == BORROWED:
            revenue_stream = st.selectbox(
                "Funded by",
                stream_names,
                index=_option_index(
                    stream_names,
                    editing.revenue_stream_allocation if editing else None,
                ),
                key=f"{key}_stream",
            )
        description = st.text_input(
            "Description",
            value=editing.description if editing else "",
            key=f"{key}_description",
        )
        submitted = st.form_submit_button(
            "Save Changes" if editing else "Add Loan"
        )
    if not submitted:
        return
    form = LoanForm(
        direction=direction,
        name=name,
        principal_text=principal_text,
        interest_rate_text=rate_text,
        term_months_text=term_text,
        start_date=start,
        revenue_stream=revenue_stream,
        category_name=editing.category_name if editing else "",
        description=description,
    )
    loan_id = editing.id if editing else None
    _run_mutation(
        "Edit loan" if editing else "Add loan",
        lambda repo: SaveLoanUseCase(repo).execute(form, loan_id=loan_id),
    )


def _render_payment_form(
    loans: Sequence[Loan],
    streams: Sequence[Category],
    currency_code: str,
) -> None:
    """Render the payment form for borrowed loans."""
    if not loans:
        st.caption("No borrowed loans to pay.")
        return
    with st.form("make_payment", clear_on_submit=True):
        loan = st.selectbox(
            "Loan",
            loans,
            format_func=lambda item: _loan_label(item, currency_code),
        )
        amount_text = st.text_input(
            "Payment Amount",
            placeholder="Defaults to the monthly payment",
        )
        revenue_stream = st.selectbox(
            "Paid from",
            [stream.name for stream in streams],
            index=None,
            placeholder="Loan allocation",
        )
        submitted = st.form_submit_button("Make Payment")
    if submitted and loan is not None:
        amount = amount_text.strip() or f"{loan.monthly_payment:.2f}"
        _run_mutation(
            "Loan payment",
            lambda repo: MakeLoanPaymentUseCase(repo).execute(
                loan.id,
                amount,
                revenue_stream,
            ),
        )


def _render_loans(currency_code: str) -> None:
    """Render loan totals, the loan tables and loan forms."""
    portfolio = _load_loan_portfolio()
    streams = _load_available_streams()
    borrowed_col, lent_col, monthly_col = st.columns(3)
    borrowed_col.metric(
        "Total Borrowed",
        _format_currency(portfolio.totals.total_borrowed, currency_code),
    )
    lent_col.metric(
        "Total Lent",
        _format_currency(portfolio.totals.total_lent, currency_code),
    )
    monthly_col.metric(
        "Monthly Payments",
        _format_currency(portfolio.totals.monthly_payments, currency_code),
    )
    for title, loans in (
        ("Borrowed", portfolio.borrowed),
        ("Lent", portfolio.lent),
    ):
        st.subheader(title)
        if loans:
            st.dataframe(
                _loan_rows(loans, currency_code),
                width="stretch",
                hide_index=True,
            )
        else:
            st.caption(f"No {title.lower()} loans.")

    form_col, payment_col = st.columns(2)
    with form_col:
        st.subheader("New Loan")
        _render_loan_form(streams)
    with payment_col:
        st.subheader("Make a Payment")
        _render_payment_form(portfolio.borrowed, streams, currency_code)

    st.subheader("Edit or Delete")
    selected = st.selectbox(
        "Loan",
        [*portfolio.borrowed, *portfolio.lent],
        index=None,
        format_func=lambda loan: _loan_label(loan, currency_code),
        placeholder="Choose a loan to edit or delete",
        key="select_loan",
    )
    if selected is None:
        return
    _render_loan_form(streams, editing=selected)
    if st.button("Delete loan", key=f"delete_loan_{selected.id}"):
        _run_mutation(
            "Delete loan",
            lambda repo: DeleteLoanUseCase(repo).execute(selected.id),
        )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Finance Dashboard", layout="wide")
    st.title("Finance Dashboard")

    page = st.sidebar.selectbox("Page", PAGES)
    currency_code = FinanceSettings.from_env().currency_code
    get_usage_logger().info(f"page={page}")

    if page == "Overview":
        _render_overview(currency_code)
    elif page == "Revenue Streams":
        _render_revenue_streams(currency_code)
    elif page == "Transactions":
        _render_transactions(currency_code)
    else:
        _render_loans(currency_code)


if __name__ == "__main__":  # pragma: no cover
    main()
