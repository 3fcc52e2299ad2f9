"""Rich rendering for health reports."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cf_practice.health import Report, Status

STATUS_ICONS = {
    Status.HEALTHY: "[green]OK[/green]",
    Status.DEGRADED: "[yellow]WARN[/yellow]",
    Status.CRITICAL: "[red]FAIL[/red]",
}

SUMMARY_STYLES = {
    Status.HEALTHY: ("[green bold]HEALTHY[/green bold]", "green"),
    Status.DEGRADED: ("[yellow bold]DEGRADED[/yellow bold]", "yellow"),
    Status.CRITICAL: ("[red bold]CRITICAL[/red bold]", "red"),
}


def _build_results_table(report: Report, verbose: bool) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Check", style="cyan", min_width=20)
    table.add_column("Status", justify="center", width=6)
    table.add_column("Details", min_width=20)

    for result in report.results:
        details = result.message
        if result.details and (verbose or result.status is not Status.HEALTHY):
            details += f"\n[dim]└─ {result.details}[/dim]"
        table.add_row(result.name, STATUS_ICONS[result.status], details)

    return table


def _build_summary(report: Report) -> Panel:
    summary, border_style = SUMMARY_STYLES[report.overall_status]
    stats = (
        f"Schema: {report.current_schema_version} | "
        f"Checks: {len(report.results)} | "
        f"Took: {report.duration * 1000:.0f}ms"
    )
    if report.auto_fixed:
        stats += f" | Auto-fixed: {len(report.auto_fixed)}"

    lines = [summary, stats]
    if not report.can_proceed:
        lines.append("[red]Cannot proceed due to critical errors. Please fix the issues above.[/red]")
    elif report.overall_status is Status.DEGRADED:
        lines.append("[yellow]Some features may be unavailable. See warnings above.[/yellow]")

    return Panel("\n".join(lines), title="Health Check", border_style=border_style)


def render_report(
    report: Report, verbose: bool = False, console: Console | None = None
) -> None:
    console = console or Console()
    console.print(_build_results_table(report, verbose))
    console.print()
    console.print(_build_summary(report))
