"""Streamlit dashboard for evaluation problems, reviews and orders."""

from __future__ import annotations

from datetime import date

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from evals_dashboard.aggregation import (
    EXAMPLE_PROBLEMS,
    SORT_FIELDS,
    sort_contributors,
    split_by_review_state,
    top_contributor_names,
)
from evals_dashboard.auth import authenticate, is_authenticated, logout
from evals_dashboard.client import DataSourceClient, FetchError
from evals_dashboard.config import POLL_INTERVAL_FAST, SYNC_WORKFLOW_PAGE_URL, TOTAL_ORDERS
from evals_dashboard.models import ContributorRollup, Order, Problem, ProblemStatus
from evals_dashboard.orders import ORDERS, delivered_orders, summarize_orders
from evals_dashboard.polling import PollScheduler, describe_sync_age
from evals_dashboard.revenue import compute_revenue
from evals_dashboard.sync import SyncClient

SORT_LABELS = {
    "name": "Engineer",
    "accepted_count": "Accepted",
    "last_submitted_at": "Last submitted",
}


# ── Session objects ─────────────────────────────────────────────────────────

def _get_session() -> tuple[DataSourceClient, PollScheduler]:
    """One data client and one started scheduler per browser session."""
    if "scheduler" not in st.session_state:
        client = DataSourceClient()
        sync_client = SyncClient(client.fetch_csv, client.fetch_sync_status)
        scheduler = PollScheduler(sync_client)
        scheduler.start()
        st.session_state["data_client"] = client
        st.session_state["scheduler"] = scheduler
    return st.session_state["data_client"], st.session_state["scheduler"]


# ── Table builders ──────────────────────────────────────────────────────────

def _short_date(value: date) -> str:
    return value.strftime("%m/%d")


def _row_marker(problem: Problem, examples: bool) -> int | str:
    if not examples:
        return problem.id
    return "✓" if problem.status is ProblemStatus.ACCEPTED else "✗"


def _problems_df(problems: list[Problem], examples: bool = False) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "#": _row_marker(p, examples),
            "Submitted": "—" if examples else _short_date(p.submitted_at),
            "Engineer": p.contributor,
            "Problem": p.title,
            "Link": p.external_link,
            "Kit": p.kit.upper(),
            "Description": p.description,
        }
        for p in problems
    ])


def _leaderboard_df(contributors: list[ContributorRollup], top: list[str]) -> pd.DataFrame:
    df = pd.DataFrame([
        {
            "Engineer": f"{c.name} ★" if c.name in top else c.name,
            "Accepted": c.accepted_count,
            "Last Sub": _short_date(c.last_submitted_at),
        }
        for c in contributors
    ])
    df.index = df.index + 1
    return df


def _orders_df(orders: list[Order]) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "#": o.id,
            "Order": o.order_name,
            "Partner": o.display_code,
            "Size": o.problem_count,
            "Due": _short_date(o.due_date),
            "Delivered": _short_date(o.delivered_date) if o.delivered_date else "—",
        }
        for o in orders
    ])


# ── Sections ────────────────────────────────────────────────────────────────

def _password_gate() -> bool:
    """Render the password form unless the session flag is already set."""
    if is_authenticated(st.session_state):
        return True
    st.markdown("### 🔒 EVALS_BIO_2.0")
    with st.form("login"):
        password = st.text_input("Enter password to access dashboard", type="password")
        submitted = st.form_submit_button("Enter")
    if submitted:
        if authenticate(st.session_state, password):
            st.rerun()
        st.error("Incorrect password")
    return False


@st.fragment(run_every=POLL_INTERVAL_FAST)
def _sync_status() -> None:
    """Tick the scheduler; rerun the whole page only when the CSV changed."""
    client, scheduler = _get_session()
    if scheduler.tick():
        st.rerun()

    state = scheduler.state
    col_status, col_button = st.columns([4, 1])
    with col_status:
        if state.is_syncing:
            st.caption("🟡 syncing...")
        else:
            st.caption(f"🟢 synced {describe_sync_age(state.last_sync_timestamp)}")
    with col_button:
        if st.button("↻", disabled=state.is_syncing, help="Trigger manual sync"):
            scheduler.trigger_manual_sync()
            if client.authenticated:
                try:
                    client.dispatch_sync_workflow()
                except FetchError as exc:
                    st.warning(f"Failed to trigger sync: {exc}")
        # Without a token the workflow has to be started by hand.
        if state.is_syncing and not client.authenticated:
            st.markdown(f"[Run the sync workflow]({SYNC_WORKFLOW_PAGE_URL})")


def _problem_column(title: str, badge: str, problems: list[Problem], examples: bool = False) -> None:
    st.markdown(f"**{title}** · `{badge}`")
    st.metric("Problems", len(problems))
    shown = EXAMPLE_PROBLEMS if examples else problems
    if shown:
        st.dataframe(
            _problems_df(shown, examples=examples),
            column_config={"Link": st.column_config.LinkColumn("Link")},
            hide_index=True,
            use_container_width=True,
        )


# ── Dashboard ───────────────────────────────────────────────────────────────

def main() -> None:
    """Render the Streamlit dashboard."""
    st.set_page_config(page_title="Evaluations Dashboard", layout="wide")
    if not _password_gate():
        return

    _, scheduler = _get_session()
    snapshot = scheduler.snapshot
    stats = snapshot.stats

    # ── Header ───────────────────────────────────────────────────────────
    col_h1, col_h2 = st.columns([3, 2])
    with col_h1:
        st.markdown("## EVALS_BIO_2.0")
    with col_h2:
        _sync_status()

    # ── Sidebar ──────────────────────────────────────────────────────────
    with st.sidebar:
        st.header("Leaderboard")
        sort_field = st.selectbox(
            "Sort by",
            SORT_FIELDS,
            index=SORT_FIELDS.index("accepted_count"),
            format_func=SORT_LABELS.get,
        )
        descending = st.toggle("Descending", value=True)
        only_delivered = st.toggle("Delivered orders only", value=False)
        if st.button("Log out"):
            logout(st.session_state)
            st.rerun()

    # ── Problems + leaderboard ───────────────────────────────────────────
    under_review, reviewed = split_by_review_state(snapshot.problems)
    col_qc, col_reviewed, col_board = st.columns(3)

    with col_qc:
        _problem_column("UNDER REVIEW", "PENDING", under_review)

    with col_reviewed:
        _problem_column(
            "REVIEWED",
            f"{stats.acceptance_rate}% ACCEPTED",
            reviewed,
            examples=not reviewed,
        )

    with col_board:
        st.markdown(f"**★ LEADERBOARD** · `{stats.acceptance_rate}% RATE`")
        st.metric("Completed", stats.accepted_count, help=f"of {TOTAL_ORDERS} ordered")
        ranked = sort_contributors(snapshot.contributors, sort_field, descending)
        if ranked:
            st.dataframe(
                _leaderboard_df(ranked, top_contributor_names(snapshot.contributors)),
                use_container_width=True,
            )
            fig = go.Figure()
            fig.add_trace(go.Bar(
                x=[c.name for c in ranked],
                y=[c.accepted_count for c in ranked],
                name="Accepted",
                marker_color="#4ECDC4",
            ))
            fig.update_layout(
                xaxis_title="Engineer",
                yaxis_title="Accepted problems",
                margin=dict(t=10, b=40, l=50, r=10),
                height=215,
            )
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.warning("No contributors yet.")

    # ── Orders + revenue ─────────────────────────────────────────────────
    summary = summarize_orders(ORDERS)
    revenue = compute_revenue(snapshot.problems, date.today())
    col_orders, col_revenue = st.columns([3, 2])

    with col_orders:
        st.markdown("**ORDERS**")
        m1, m2, m3, m4 = st.columns(4)
        m1.metric("Orders", summary.order_count)
        m2.metric("Problems", summary.problem_count)
        m3.metric("Delivered orders", summary.delivered_order_count)
        m4.metric("Delivered problems", summary.delivered_problem_count)
        shown_orders = delivered_orders(ORDERS) if only_delivered else ORDERS
        if shown_orders:
            st.dataframe(_orders_df(shown_orders), hide_index=True, use_container_width=True)

    with col_revenue:
        st.markdown(f"**REVENUE** · week {revenue.current_week}")
        r1, r2 = st.columns(2)
        r1.metric(f"Revenue {revenue.window.label}", f"${revenue.weekly_revenue:,}")
        r2.metric("Annual run-rate", f"${revenue.annual_run_rate:,}")
        st.caption(
            f"{revenue.problem_count} reviewed problems between "
            f"{_short_date(revenue.window.start)} and {_short_date(revenue.window.end)}"
        )


if __name__ == "__main__":
    main()
