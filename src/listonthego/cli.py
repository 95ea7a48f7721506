"""Command-line entry points for ListOnTheGo."""

from __future__ import annotations

import json
from datetime import date, timedelta

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .logging_config import setup_logging
from .models.habit import Habit, HabitFrequency
from .services.analytics import calculate_analytics
from .services.dates import today_or
from .services.habit_calendar import generate_calendar_month, generate_heatmap_data
from .services.insights import generate_insights, get_overall_insights
from .services.reminders import suggest_reminder_times
from .services.templates import (
    DIFFICULTY_LEVELS,
    TEMPLATE_CATEGORIES,
    get_template_by_id,
    get_templates_by_category,
    get_templates_by_difficulty,
    get_templates_for_beginner,
    search_templates,
)

DATE_FORMAT = click.DateTime(formats=["%Y-%m-%d"])


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _require_habit(app: AppContext, habit_id: int) -> Habit:
    habit = app.habit_repo.get_by_id(habit_id)
    if habit is None:
        raise click.ClickException(f"Habit {habit_id} not found")
    return habit


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding the database and logs (defaults to LISTONTHEGO_DATA_DIR).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None) -> None:
    """Habit analytics, insights and calendar views."""

    config = BaseConfig(data_dir)
    setup_logging(config)
    ctx.obj = create_app_context(config)


@cli.command("init-db")
@click.pass_obj
def init_db(app: AppContext) -> None:
    """Create the database schema."""

    click.echo(f"Database ready: {app.config.DATABASE_URL}")


@cli.command("add-habit")
@click.argument("name")
@click.option("--category", default="General", show_default=True)
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in HabitFrequency]),
    default=HabitFrequency.DAILY.value,
    show_default=True,
)
@click.option("--description", default="")
@click.option("--goal", type=int, default=None)
@click.pass_obj
def add_habit(
    app: AppContext, name: str, category: str, frequency: str, description: str, goal: int | None
) -> None:
    """Create a habit."""

    habit = app.habit_repo.create(
        Habit(
            name=name,
            category=category,
            frequency=frequency,
            description=description,
            goal=goal,
        )
    )
    click.echo(f"Created habit {habit.id}: {habit.name}")


@cli.command()
@click.option("--category", type=click.Choice(TEMPLATE_CATEGORIES), default="all", show_default=True)
@click.option("--difficulty", type=click.Choice(DIFFICULTY_LEVELS), default=None)
@click.option("--search", "query", default=None, help="Match name, description or tags.")
@click.option("--beginner", is_flag=True, default=False, help="Only quick, easy templates.")
def templates(category: str, difficulty: str | None, query: str | None, beginner: bool) -> None:
    """List built-in habit templates; filters combine."""

    matches = get_templates_by_category(category)
    for subset in (
        get_templates_by_difficulty(difficulty) if difficulty else None,
        search_templates(query) if query else None,
        get_templates_for_beginner() if beginner else None,
    ):
        if subset is not None:
            allowed = {t.id for t in subset}
            matches = [t for t in matches if t.id in allowed]
    for template in matches:
        click.echo(f"{template.id}: {template.name} [{template.difficulty.value}, {template.estimated_minutes} min]")


@cli.command("use-template")
@click.argument("template_id")
@click.pass_obj
def use_template(app: AppContext, template_id: str) -> None:
    """Create a habit from a built-in template."""

    template = get_template_by_id(template_id)
    if template is None:
        raise click.ClickException(f"Template {template_id} not found")
    habit = app.habit_repo.create(template.to_habit())
    click.echo(f"Created habit {habit.id}: {habit.name}")


@cli.command("suggest-times")
@click.argument("habit_id", type=int)
@click.pass_obj
def suggest_times(app: AppContext, habit_id: int) -> None:
    """Suggest reminder times for a habit based on its category."""

    habit = _require_habit(app, habit_id)
    click.echo(", ".join(suggest_reminder_times(habit)))


@cli.command()
@click.argument("habit_id", type=int)
@click.option("--date", "day", type=DATE_FORMAT, default=None, help="Day to toggle (YYYY-MM-DD).")
@click.pass_obj
def toggle(app: AppContext, habit_id: int, day) -> None:
    """Flip a habit's completion for a day (today by default)."""

    _require_habit(app, habit_id)
    log = app.habit_repo.toggle_completion(habit_id, day.date() if day else None)
    habit = app.habit_repo.get_by_id(habit_id)
    state = "done" if log.completed else "not done"
    click.echo(f"{habit.name} on {log.occurred_on.isoformat()}: {state} (streak {habit.streak})")


@cli.command()
@click.argument("habit_id", type=int)
@click.option("--as-of", type=DATE_FORMAT, default=None, help="Evaluate as of this day.")
@click.pass_obj
def analytics(app: AppContext, habit_id: int, as_of) -> None:
    """Print the statistics bundle for one habit as JSON."""

    habit = _require_habit(app, habit_id)
    result = calculate_analytics(
        habit,
        app.habit_repo.list_logs(habit_id),
        today=as_of,
        window_days=app.config.ANALYTICS_WINDOW_DAYS,
    )
    _echo_json(result.as_dict())


@cli.command()
@click.argument("habit_id", type=int, required=False)
@click.option("--as-of", type=DATE_FORMAT, default=None, help="Evaluate as of this day.")
@click.pass_obj
def insights(app: AppContext, habit_id: int | None, as_of) -> None:
    """Print insights for one habit, or cross-habit insights when no id is given."""

    habits = app.habit_repo.list_all()
    logs = app.habit_repo.list_all_logs()
    if habit_id is None:
        items = get_overall_insights(habits, logs)
    else:
        habit = _require_habit(app, habit_id)
        stats = calculate_analytics(
            habit, logs, today=as_of, window_days=app.config.ANALYTICS_WINDOW_DAYS
        )
        items = generate_insights(
            habit,
            stats,
            habits,
            logs=logs,
            today=as_of,
            window_days=app.config.ANALYTICS_WINDOW_DAYS,
            sibling_rate_placeholder=app.config.SIBLING_RATE_PLACEHOLDER,
        )
    _echo_json([item.as_dict() for item in items])


@cli.command()
@click.option("--year", type=int, default=None)
@click.option("--month", type=click.IntRange(1, 12), default=None, help="Month number, 1-12.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit the full grid as JSON.")
@click.pass_obj
def calendar(app: AppContext, year: int | None, month: int | None, as_json: bool) -> None:
    """Show the completion calendar for a month."""

    today = date.today()
    grid = generate_calendar_month(
        year if year is not None else today.year,
        (month if month is not None else today.month) - 1,
        app.habit_repo.list_all(),
        app.habit_repo.list_all_logs(),
    )
    if as_json:
        _echo_json(grid.as_dict())
        return

    click.echo(f"{grid.month_name} {grid.year}: {grid.completed_days}/{grid.total_days} active days")
    click.echo(" Su  Mo  Tu  We  Th  Fr  Sa")
    for week in grid.weeks:
        cells = []
        for day in week.days:
            if not day.is_current_month:
                cells.append("   ")
            else:
                marker = "*" if day.completion_rate > 0 else " "
                cells.append(f"{day.date.day:>2}{marker}")
        click.echo(" ".join(cells))


@cli.command()
@click.option("--days", type=click.IntRange(1, 366), default=30, show_default=True)
@click.option("--as-of", type=DATE_FORMAT, default=None)
@click.pass_obj
def heatmap(app: AppContext, days: int, as_of) -> None:
    """Print heatmap cells for the trailing window as JSON."""

    end = today_or(as_of)
    cells = generate_heatmap_data(
        app.habit_repo.list_all(),
        app.habit_repo.list_all_logs(),
        end - timedelta(days=days - 1),
        end,
    )
    _echo_json([{"date": c.date, "count": c.count, "level": c.level} for c in cells])


def main() -> None:  # pragma: no cover - console script
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
