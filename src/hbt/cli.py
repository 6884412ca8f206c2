"""Command line interface for hbt."""

from __future__ import annotations

from pathlib import Path

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import CategoryNotFound, HabitNotFound, HabitTrackerError
from .logging_config import get_logger, setup_logging
from .models.category import DEFAULT_COLOR, Category
from .models.habit import FrequencyType
from .services import charts
from .services.frequency import describe_frequency
from .services.habits import FREQUENCY_CHOICES, create_habit, update_habit

logger = get_logger("cli")


class _HabitGroup(click.Group):
    """Click group that turns core errors into clean CLI failures."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except HabitTrackerError as exc:
            logger.warning("Command failed", extra={"error": type(exc).__name__})
            raise click.ClickException(str(exc)) from exc


pass_app = click.make_pass_decorator(AppContext)


@click.group(cls=_HabitGroup)
@click.pass_context
def main(ctx: click.Context) -> None:
    """Track habits, completions and streaks from the terminal."""

    config = BaseConfig()
    setup_logging(config)
    app = create_app_context(config)
    ctx.obj = app
    ctx.call_on_close(app.close)


@main.command()
@pass_app
def today(app: AppContext) -> None:
    """Show today's habits with due status and streaks."""

    statuses = app.stats.get_today_status()
    if not statuses:
        click.echo("No habits yet. Add one with: hbt habit add NAME")
        return

    done = sum(1 for s in statuses if s.completed_today)
    due = sum(1 for s in statuses if s.is_due)
    click.echo(f"{done}/{due} completed")
    for status in statuses:
        habit = status.habit
        mark = "x" if status.completed_today else " "
        label = f"{habit.emoji} {habit.name}".strip()
        if status.category is not None:
            label += f" [{status.category.name}]"
        progress = f"{status.completions_today}/{habit.target_per_day}"
        if habit.frequency_type != FrequencyType.DAILY.value:
            progress += f", {status.completions_this_week} this week"
        flag = "" if status.is_due else " (not due)"
        click.echo(
            f"[{mark}] {habit.id:>3} {label} ({progress}) {describe_frequency(habit)}{flag}"
            f"  streak {status.current_streak} / best {status.best_streak}"
        )


@main.command()
@click.argument("habit_id", type=int)
@pass_app
def toggle(app: AppContext, habit_id: int) -> None:
    """Mark HABIT_ID done for today, or undo one completion."""

    added = app.stats.toggle_completion(habit_id)
    click.echo("Completed" if added else "Completion removed")


@main.command()
@click.argument("habit_id", type=int)
@click.option("--note", default="", help="Free-text note stored with the completion")
@pass_app
def done(app: AppContext, habit_id: int, note: str) -> None:
    """Record one more completion of HABIT_ID for today."""

    app.stats.complete(habit_id, notes=note)
    click.echo("Completed")


@main.command()
@click.argument("habit_id", type=int)
@click.option("--days", default=30, show_default=True, type=click.IntRange(min=1))
@pass_app
def history(app: AppContext, habit_id: int, days: int) -> None:
    """List recent completions of HABIT_ID."""

    completions = app.stats.get_habit_history(habit_id, days=days)
    if not completions:
        click.echo(f"No completions in the last {days} days")
        return
    for completion in completions:
        suffix = f"  {completion.notes}" if completion.notes else ""
        click.echo(f"{completion.completed_on.isoformat()}{suffix}")


@main.command()
@click.option("--days", default=14, show_default=True, type=click.IntRange(min=1))
@click.option("--weeks", default=4, show_default=True, type=click.IntRange(min=1))
@pass_app
def stats(app: AppContext, days: int, weeks: int) -> None:
    """Show overall rates, trends and per-habit statistics."""

    overview = app.stats.get_overview(days=days, weeks=weeks)
    click.echo(f"Habits:            {overview.total_habits}")
    click.echo(f"Completions:       {overview.total_completions}/{overview.total_possible}")
    click.echo(f"Overall rate:      {overview.overall_rate:.0f}%")
    click.echo(f"Best current streak: {overview.current_best_streak}")
    click.echo(f"Best streak ever:    {overview.all_time_best_streak}")

    daily_rates = [s.rate for s in reversed(overview.daily_series)]
    click.echo("")
    click.echo(f"Last {days} days  {charts.sparkline(daily_rates, width=days)}")

    click.echo("")
    click.echo("Weekly")
    for week in reversed(overview.weekly_series):
        click.echo(charts.bar(week.rate, week.day.strftime("%m-%d")))

    habit_stats = app.stats.get_habit_stats()
    if habit_stats:
        click.echo("")
        click.echo("Habits")
        width = max(len(s.habit_name) for s in habit_stats)
        for stat in habit_stats:
            click.echo(
                f"{charts.bar(stat.completion_rate, stat.habit_name.ljust(width), width=width + 40)}"
                f"  streak {stat.current_streak} / best {stat.best_streak}"
            )


@main.command()
@click.option("--days", default=30, show_default=True, type=click.IntRange(min=1))
@click.option("--output", "output", required=True, type=click.Path(dir_okay=False, path_type=Path))
@pass_app
def chart(app: AppContext, days: int, output: Path) -> None:
    """Write a PNG chart of daily completion rates."""

    path = charts.trend_chart_png(app.stats.get_daily_stats(days), output)
    click.echo(f"Chart written: {path}")


@main.group()
def habit() -> None:
    """Create, list and archive habits."""


@habit.command("add")
@click.argument("name")
@click.option("--description", default="")
@click.option("--emoji", default="")
@click.option(
    "--frequency",
    "frequency_type",
    type=click.Choice(FREQUENCY_CHOICES),
    default="daily",
    show_default=True,
)
@click.option("--per-week", "per_week", type=int, default=None, help="Times per week (times_per_week only)")
@click.option("--target", "target_per_day", type=int, default=1, show_default=True)
@click.option("--category", "category_id", type=int, default=None)
@pass_app
def habit_add(
    app: AppContext,
    name: str,
    description: str,
    emoji: str,
    frequency_type: str,
    per_week: int | None,
    target_per_day: int,
    category_id: int | None,
) -> None:
    """Add a habit called NAME."""

    created = create_habit(
        app.habit_repo,
        name=name,
        description=description,
        emoji=emoji,
        frequency_type=frequency_type,
        frequency_value=per_week,
        target_per_day=target_per_day,
        category_id=category_id,
        category_repo=app.category_repo,
    )
    click.echo(f"Created habit {created.id}: {created.name}")


@habit.command("edit")
@click.argument("habit_id", type=int)
@click.option("--name", default=None)
@click.option("--description", default=None)
@click.option("--emoji", default=None)
@click.option("--frequency", "frequency_type", type=click.Choice(FREQUENCY_CHOICES), default=None)
@click.option("--per-week", "frequency_value", type=int, default=None)
@click.option("--target", "target_per_day", type=int, default=None)
@click.option("--category", "category_id", type=int, default=None)
@click.option("--no-category", is_flag=True, help="Remove the habit from its category")
@pass_app
def habit_edit(app: AppContext, habit_id: int, no_category: bool, **options) -> None:
    """Change fields of HABIT_ID; options left out stay as they are."""

    changes = {key: value for key, value in options.items() if value is not None}
    if no_category:
        if "category_id" in changes:
            raise click.UsageError("--category and --no-category are mutually exclusive")
        changes["category_id"] = None
    if not changes:
        raise click.UsageError("Nothing to change")

    updated = update_habit(app.habit_repo, habit_id, category_repo=app.category_repo, **changes)
    click.echo(f"Updated habit {updated.id}: {updated.name} {describe_frequency(updated)}")


@habit.command("list")
@click.option("--all", "include_archived", is_flag=True, help="Include archived habits")
@pass_app
def habit_list(app: AppContext, include_archived: bool) -> None:
    """List habits."""

    for item in app.habit_repo.list_all(include_archived=include_archived):
        suffix = " (archived)" if item.is_archived else ""
        click.echo(f"{item.id:>3} {item.name} {describe_frequency(item)}{suffix}")


@habit.command("archive")
@click.argument("habit_id", type=int)
@pass_app
def habit_archive(app: AppContext, habit_id: int) -> None:
    """Archive HABIT_ID, keeping its history."""

    if app.habit_repo.archive(habit_id) is None:
        raise HabitNotFound(habit_id)
    click.echo(f"Archived habit {habit_id}")


@habit.command("unarchive")
@click.argument("habit_id", type=int)
@pass_app
def habit_unarchive(app: AppContext, habit_id: int) -> None:
    """Restore an archived HABIT_ID."""

    if app.habit_repo.unarchive(habit_id) is None:
        raise HabitNotFound(habit_id)
    click.echo(f"Restored habit {habit_id}")


@habit.command("delete")
@click.argument("habit_id", type=int)
@click.confirmation_option(prompt="Delete the habit and all its completions?")
@pass_app
def habit_delete(app: AppContext, habit_id: int) -> None:
    """Permanently delete HABIT_ID and its completions."""

    if not app.habit_repo.delete(habit_id):
        raise HabitNotFound(habit_id)
    click.echo(f"Deleted habit {habit_id}")


@main.group()
def category() -> None:
    """Manage habit categories."""


@category.command("add")
@click.argument("name")
@click.option("--color", default="", help="Hex colour such as #4ECDC4")
@click.option("--emoji", default="")
@pass_app
def category_add(app: AppContext, name: str, color: str, emoji: str) -> None:
    """Add a category called NAME."""

    created = app.category_repo.create(Category(name=name, color=color, emoji=emoji))
    click.echo(f"Created category {created.id}: {created.name}")


@category.command("list")
@pass_app
def category_list(app: AppContext) -> None:
    """List categories."""

    for item in app.category_repo.list_all():
        click.echo(f"{item.id:>3} {item.emoji} {item.name} {item.color}".replace("  ", " "))


@category.command("edit")
@click.argument("category_id", type=int)
@click.option("--name", default=None)
@click.option("--color", default=None, help="Hex colour such as #4ECDC4")
@click.option("--emoji", default=None)
@pass_app
def category_edit(
    app: AppContext, category_id: int, name: str | None, color: str | None, emoji: str | None
) -> None:
    """Rename or recolour CATEGORY_ID."""

    item = app.category_repo.get_by_id(category_id)
    if item is None:
        raise CategoryNotFound(category_id)
    if name is None and color is None and emoji is None:
        raise click.UsageError("Nothing to change")

    if name is not None:
        item.name = name.strip()
    if color is not None:
        item.color = color or DEFAULT_COLOR
    if emoji is not None:
        item.emoji = emoji
    updated = app.category_repo.update(item)
    click.echo(f"Updated category {updated.id}: {updated.name} {updated.color}")


@category.command("delete")
@click.argument("category_id", type=int)
@pass_app
def category_delete(app: AppContext, category_id: int) -> None:
    """Delete CATEGORY_ID; its habits become uncategorized."""

    if not app.category_repo.delete(category_id):
        raise CategoryNotFound(category_id)
    click.echo(f"Deleted category {category_id}")


@main.group()
def settings() -> None:
    """Read and change stored settings."""


@settings.command("get")
@click.argument("key")
@pass_app
def settings_get(app: AppContext, key: str) -> None:
    value = app.settings_repo.get(key)
    if value is None:
        raise click.ClickException(f"Unknown setting: {key}")
    click.echo(value)


@settings.command("set")
@click.argument("key")
@click.argument("value")
@pass_app
def settings_set(app: AppContext, key: str, value: str) -> None:
    app.settings_repo.set(key, value)
    click.echo(f"{key} = {value}")


@settings.command("list")
@pass_app
def settings_list(app: AppContext) -> None:
    for key, value in sorted(app.settings_repo.get_all().items()):
        click.echo(f"{key} = {value}")


if __name__ == "__main__":  # pragma: no cover
    main()
