"""CLI interface using Typer."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fitstats.config import get_settings, reload_settings
from fitstats.db import get_db, set_db
from fitstats.errors import ReadError, ValidationError, WriteError
from fitstats.profiles.body_calc import compute_targets, targets_to_dict
from fitstats.profiles.models import (
    Profile,
    parse_activity_level,
    parse_goal,
    parse_sex,
)
from fitstats.tracking.dashboard import DailyTargets, StatsDashboard, load_dashboard
from fitstats.tracking.dates import local_today, parse_day
from fitstats.tracking.models import METRIC_UNITS, MetricKind
from fitstats.tracking.queries import ProfileQueries, StatsQueries
from fitstats.utils.logger import setup_logging

app = typer.Typer(
    help="Personal fitness stats: calorie goals, daily metrics, weekly view and streaks",
    no_args_is_help=True,
)
console = Console()

profile_app = typer.Typer(help="Set up and view the user profile")
app.add_typer(profile_app, name="profile")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def fail(
    command: str,
    errors: list[str],
    json_output: bool,
    suggestions: Optional[list[str]] = None,
) -> NoReturn:
    """Report errors and exit with status 1."""
    if json_output:
        response = {"success": False, "command": command, "errors": errors}
        if suggestions:
            response["suggestions"] = suggestions
        output_json(response)
    else:
        for error in errors:
            console.print(f"[red]{error}[/red]")
        for suggestion in suggestions or []:
            console.print(suggestion)
    raise typer.Exit(1)


def resolve_user(user_id: Optional[str]) -> str:
    return user_id or get_settings().user.id


def current_day(command: str, json_output: bool) -> date:
    """Today in the configured timezone."""
    try:
        return local_today(get_settings().tracking.timezone)
    except ValidationError as e:
        fail(command, e.errors, json_output)


def daily_targets() -> DailyTargets:
    targets = get_settings().targets
    return DailyTargets(
        water=targets.water,
        steps=targets.steps,
        workout_minutes=targets.workout_minutes,
    )


def format_number(value: float) -> str:
    """Whole numbers without decimals, others with one."""
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.1f}"


def progress_to_dict(dashboard: StatsDashboard) -> list[dict]:
    return [
        {
            "metric": item.metric.value,
            "value": item.value,
            "goal": item.goal,
            "percentage": round(item.percentage, 1),
        }
        for item in dashboard.progress
    ]


SETUP_HINT = "Set up a profile with: fitstats profile setup --weight 70 --height 175 --age 30"


# ============================================================================
# Main callback
# ============================================================================


@app.callback()
def main(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config.yaml (default: ~/.fitstats/config.yaml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Load settings and make sure the document store exists."""
    settings = reload_settings(config)
    setup_logging("DEBUG" if verbose else settings.logging.level)

    set_db(None)
    get_db()


# ============================================================================
# Profile commands
# ============================================================================


@profile_app.command("setup")
def profile_setup(
    weight: float = typer.Option(..., "--weight", help="Weight in kg (30-300)"),
    height: float = typer.Option(..., "--height", help="Height in cm (100-250)"),
    age: int = typer.Option(..., "--age", help="Age in years (10-120)"),
    sex: str = typer.Option("male", "--sex", help="Sex (male/female)"),
    activity: str = typer.Option(
        "moderate",
        "--activity",
        help="Activity level (sedentary/light/moderate/active/veryActive)",
    ),
    goal: str = typer.Option("maintain", "--goal", help="Goal (lose/maintain/gain)"),
    user_id: Optional[str] = typer.Option(None, "--user", help="User ID (default: from config)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Create or update the user profile."""
    user = resolve_user(user_id)
    try:
        profile = Profile(
            weight_kg=weight,
            height_cm=height,
            age_years=age,
            sex=parse_sex(sex),
            activity_level=parse_activity_level(activity),
            goal=parse_goal(goal),
        )
        with get_db().get_connection() as conn:
            saved = ProfileQueries.save_profile(conn, user, profile)
    except ValidationError as e:
        fail("profile setup", e.errors, json_output)
    except WriteError as e:
        fail("profile setup", ["Failed to save profile", str(e)], json_output)

    targets = compute_targets(saved)
    if json_output:
        output_json({
            "success": True,
            "command": "profile setup",
            "data": {
                "user_id": user,
                "profile": saved.to_document(),
                "targets": targets_to_dict(targets),
            },
            "human_summary": f"Profile saved, calorie goal {targets.goals.calorie_goal} kcal/day",
        })
    else:
        console.print(f"[green]Profile saved for {user}[/green]")
        console.print(Panel(targets.summary(), title="Daily targets"))


@profile_app.command("show")
def profile_show(
    user_id: Optional[str] = typer.Option(None, "--user", help="User ID (default: from config)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the user profile."""
    user = resolve_user(user_id)
    try:
        with get_db().get_connection() as conn:
            profile = ProfileQueries.get_profile(conn, user)
    except ReadError as e:
        fail("profile show", ["Failed to load profile", str(e)], json_output)

    if profile is None:
        fail("profile show", [f"No profile found for {user}"], json_output, [SETUP_HINT])

    if json_output:
        output_json({
            "success": True,
            "command": "profile show",
            "data": {"user_id": user, "profile": profile.to_document()},
        })
        return

    table = Table(title=f"Profile: {user}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Weight", f"{format_number(profile.weight_kg)} kg")
    table.add_row("Height", f"{format_number(profile.height_cm)} cm")
    table.add_row("Age", f"{profile.age_years} years")
    table.add_row("Sex", profile.sex.value)
    table.add_row("Activity", profile.activity_level.value)
    table.add_row("Goal", profile.goal.value)
    console.print(table)


# ============================================================================
# Goals and metrics
# ============================================================================


@app.command("goals")
def goals(
    user_id: Optional[str] = typer.Option(None, "--user", help="User ID (default: from config)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show BMR, TDEE, calorie goal and macro targets."""
    user = resolve_user(user_id)
    try:
        with get_db().get_connection() as conn:
            profile = ProfileQueries.get_profile(conn, user)
    except ReadError as e:
        fail("goals", ["Failed to load profile", str(e)], json_output)

    targets = compute_targets(profile or Profile())
    if json_output:
        output_json({
            "success": True,
            "command": "goals",
            "data": targets_to_dict(targets),
            "human_summary": f"Calorie goal {targets.goals.calorie_goal} kcal/day",
        })
        return

    if profile is None:
        console.print("[yellow]No profile yet, showing default goals[/yellow]")
        console.print(SETUP_HINT)
    console.print(Panel(targets.summary(), title="Daily targets"))


@app.command("log")
def log_metric(
    metric: str = typer.Argument(
        ..., help="Metric (calories/protein/carbs/fats/water/steps/workoutMinutes)"
    ),
    value: str = typer.Argument(..., help="Value for the day"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    user_id: Optional[str] = typer.Option(None, "--user", help="User ID (default: from config)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Set a metric on the day's record (other metrics are kept)."""
    user = resolve_user(user_id)
    try:
        day = parse_day(date_str) if date_str else current_day("log", json_output)
        with get_db().get_connection() as conn:
            record = StatsQueries.upsert_metric(conn, user, day, metric, value)
    except ValidationError as e:
        fail("log", e.errors, json_output)
    except WriteError as e:
        fail(
            "log",
            ["Failed to save stat", str(e)],
            json_output,
            [f"Not saved: {metric}={value} on {date_str or 'today'}. Run the command again to retry."],
        )
    except ReadError as e:
        fail("log", ["Saved, but the day's record could not be read back", str(e)], json_output)

    kind = MetricKind.parse(metric)
    logged = record.value(kind)
    if json_output:
        output_json({
            "success": True,
            "command": "log",
            "data": record.to_dict(),
            "human_summary": f"Set {kind.value} to {logged} on {record.date.isoformat()}",
        })
    else:
        unit = METRIC_UNITS[kind]
        console.print(
            f"[green]Saved:[/green] {kind.value} = {format_number(logged)}"
            f"{' ' + unit if unit else ''} on {record.date.isoformat()}"
        )


@app.command("today")
def today(
    user_id: Optional[str] = typer.Option(None, "--user", help="User ID (default: from config)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show today's nutrition and activity against goals."""
    user = resolve_user(user_id)
    day = current_day("today", json_output)
    with get_db().get_connection() as conn:
        dashboard = load_dashboard(conn, user, day, daily_targets())

    if json_output:
        output_json({
            "success": not dashboard.errors,
            "command": "today",
            "data": {
                "date": day.isoformat(),
                "needs_setup": dashboard.needs_setup,
                "streak": dashboard.streak,
                "progress": progress_to_dict(dashboard),
            },
            "errors": dashboard.errors,
        })
        return

    for error in dashboard.errors:
        console.print(f"[red]{error}[/red]")
    if dashboard.needs_setup:
        console.print("[yellow]No profile yet, goals use defaults[/yellow]")
        console.print(SETUP_HINT)

    console.print(f"[bold]Day streak:[/bold] {dashboard.streak}")
    table = Table(title=f"Today ({day.isoformat()})")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Goal", justify="right", style="dim")
    table.add_column("Progress", justify="right", style="green")
    for item in dashboard.progress:
        table.add_row(
            item.metric.value,
            f"{format_number(item.value)} {item.unit}".rstrip(),
            f"{format_number(item.goal)} {item.unit}".rstrip(),
            f"{item.percentage:.0f}%",
        )
    console.print(table)


@app.command("week")
def week(
    user_id: Optional[str] = typer.Option(None, "--user", help="User ID (default: from config)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the most recent seven logged days."""
    user = resolve_user(user_id)
    day = current_day("week", json_output)
    with get_db().get_connection() as conn:
        dashboard = load_dashboard(conn, user, day, daily_targets())

    calorie_goal = dashboard.targets.goals.calorie_goal
    if json_output:
        output_json({
            "success": not dashboard.errors,
            "command": "week",
            "data": {
                "calorie_goal": calorie_goal,
                "days": [
                    {
                        "date": record.date.isoformat(),
                        "label": bar.label,
                        "calories": bar.calories,
                        "scale": round(bar.scale, 3),
                    }
                    for record, bar in zip(dashboard.window, dashboard.chart)
                ],
                "summary": dashboard.week.to_dict(),
            },
            "errors": dashboard.errors,
        })
        return

    for error in dashboard.errors:
        console.print(f"[red]{error}[/red]")
    if not dashboard.window:
        console.print("No stats logged yet")
        return

    table = Table(title=f"Weekly calories (goal {calorie_goal} kcal)")
    table.add_column("Day", style="cyan")
    table.add_column("Date", style="dim")
    table.add_column("Calories", justify="right")
    table.add_column("", style="magenta")
    for record, bar in zip(dashboard.window, dashboard.chart):
        table.add_row(
            bar.label,
            record.date.isoformat(),
            format_number(bar.calories),
            "█" * max(1, round(bar.scale * 20)),
        )
    console.print(table)

    averages = dashboard.week.averages
    console.print(
        f"[dim]{dashboard.week.days_logged} days logged, {dashboard.week.active_days} active | "
        f"avg {format_number(round(averages[MetricKind.CALORIES]))} kcal, "
        f"{format_number(round(averages[MetricKind.STEPS]))} steps, "
        f"{format_number(round(averages[MetricKind.WORKOUT_MINUTES]))} min workout[/dim]"
    )


@app.command("streak")
def streak(
    user_id: Optional[str] = typer.Option(None, "--user", help="User ID (default: from config)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the current day streak."""
    user = resolve_user(user_id)
    day = current_day("streak", json_output)
    with get_db().get_connection() as conn:
        dashboard = load_dashboard(conn, user, day, daily_targets())

    if json_output:
        output_json({
            "success": not dashboard.errors,
            "command": "streak",
            "data": {"date": day.isoformat(), "streak": dashboard.streak},
            "errors": dashboard.errors,
        })
        return

    for error in dashboard.errors:
        console.print(f"[red]{error}[/red]")
    console.print(f"[bold]{dashboard.streak}[/bold] day streak")


if __name__ == "__main__":
    app()
