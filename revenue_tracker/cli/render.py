"""
Terminal rendering of the revenue ledger.

Pulls every figure from the tracker on each call and builds rich
renderables. Rounding happens here and nowhere else.
"""

import math

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from revenue_tracker.core.tracker import RevenueTracker

NO_TOP_CLIENT = "—"


def format_currency(amount: float, symbol: str = "$") -> str:
    """Format currency with symbol, thousands separator and cents."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_hours(hours: float) -> str:
    """Format hours rounded to the nearest whole number, halves up."""
    return str(math.floor(hours + 0.5))


def format_share(percent: float) -> str:
    """Format a share percentage with one decimal."""
    return f"{percent:.1f}%"


def format_client_count(count: int) -> str:
    return f"{count} client{'s' if count != 1 else ''}"


def build_summary(tracker: RevenueTracker, symbol: str = "$") -> Panel:
    """Build the summary panel (totals, averages, top client)."""
    metrics = tracker.metrics()
    top = escape(metrics.top_client.name) if metrics.top_client else NO_TOP_CLIENT

    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="dim")
    grid.add_column(justify="right")
    grid.add_row("Monthly revenue", f"[bold]{format_currency(metrics.total_revenue, symbol)}[/bold]")
    grid.add_row("Clients", str(metrics.client_count))
    grid.add_row("Weekly hours", format_hours(metrics.total_weekly_hours))
    grid.add_row("Avg. hourly rate", format_currency(metrics.average_rate, symbol))
    grid.add_row("Avg. revenue / client", format_currency(metrics.average_revenue_per_client, symbol))
    grid.add_row("Top client", top)

    return Panel(grid, title="Summary", expand=False)


def build_table(tracker: RevenueTracker, symbol: str = "$") -> Table:
    """Build the client table with a totals footer."""
    clients = tracker.snapshot()
    metrics = tracker.metrics()

    table = Table(
        title=f"Clients ({format_client_count(len(clients))})",
        show_footer=bool(clients),
    )
    table.add_column("#", justify="right", footer="")
    table.add_column("ID", justify="right", style="dim", footer="")
    table.add_column("Client", footer="Total")
    table.add_column("Wk hrs", justify="right", footer=format_hours(metrics.total_weekly_hours))
    table.add_column("Mo hrs", justify="right", footer=format_hours(metrics.total_monthly_hours))
    table.add_column("Rate", justify="right", footer="")
    table.add_column("Subtotal", justify="right", footer=format_currency(metrics.total_revenue, symbol))
    table.add_column("Share", justify="right", footer="")

    for index, client in enumerate(clients, start=1):
        table.add_row(
            str(index),
            str(client.id),
            escape(client.name),
            str(client.weekly_hours),
            format_hours(tracker.monthly_hours(client.id)),
            format_currency(client.rate, symbol),
            format_currency(tracker.subtotal(client.id), symbol),
            format_share(tracker.share_percent(client.id)),
        )

    if not clients:
        table.caption = "No clients yet. Add one to get started."

    return table


def build_view(tracker: RevenueTracker, symbol: str = "$") -> Group:
    """Summary panel followed by the client table."""
    return Group(build_summary(tracker, symbol), build_table(tracker, symbol))
