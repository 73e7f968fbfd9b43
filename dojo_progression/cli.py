"""
Dojo progression engine — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load the club grading config (where the command needs it).
  4. Run the engine on the student snapshot given as options.
  5. Print a formatted result to stdout.

Install and run::

    pip install -e .
    dojo-progression --help
    dojo-progression validate-config
    dojo-progression show-ladder
    dojo-progression status --belt yellow --points 128
    dojo-progression forecast --belt white --points 0 --join-date 2025-01-06 --attendance-count 80
    dojo-progression suggest-frequency --join-date 2025-01-06 --attendance-count 80
    dojo-progression preview-session --belt yellow --points 120 --session-points 10
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="dojo-progression",
    help="Belt progression and Time Machine forecasting for martial-arts clubs.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from dojo_progression.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from dojo_progression.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_club_or_exit(config, club_path: Optional[str] = None):
    """Load the club grading config, exiting with code 1 on any config error."""
    import tomllib

    from pydantic import ValidationError

    from dojo_progression.club.loader import load_club_config

    path = club_path or config.club.config_file
    try:
        return load_club_config(path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except tomllib.TOMLDecodeError as exc:
        typer.echo(f"[ERROR] Club config is not valid TOML: {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Club config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _parse_date_or_exit(value: str):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        typer.echo(f"[ERROR] Invalid date '{value}'. Expected YYYY-MM-DD.", err=True)
        raise typer.Exit(code=1)


def _student_or_exit(belt: str, points: int, attendance_count: int, join_date: Optional[str]):
    """Build a StudentProgression from CLI options."""
    from pydantic import ValidationError

    from dojo_progression.models.student import StudentProgression
    from dojo_progression.utils.time_utils import utcnow

    joined = _parse_date_or_exit(join_date) if join_date else utcnow().date()
    try:
        return StudentProgression(
            current_belt_id=belt,
            total_points=points,
            attendance_count=attendance_count,
            join_date=joined,
        )
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid student data: {exc}", err=True)
        raise typer.Exit(code=1)


_CONFIG_OPTION = typer.Option(None, "--config", help="Path to TOML config file.")
_CLUB_OPTION = typer.Option(
    None, "--club", help="Path to club TOML (default: [club] config_file)."
)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _CONFIG_OPTION,
    club_path: Optional[str] = _CLUB_OPTION,
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the engine config and the club grading config.

    Exits with code 1 if either fails validation.
    """
    from dojo_progression.progression.velocity import estimate_velocity

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    club = _load_club_or_exit(config, club_path)

    velocity = estimate_velocity(club.skills, club.bonuses, config.velocity)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Club file:        {club_path or config.club.config_file}")
    typer.echo(f"  Belts:            {len(club.ladder)} (terminal: {club.ladder.terminal.name})")
    typer.echo(f"  Points policy:    {club.policy.kind}")
    typer.echo(f"  Stripes per belt: {club.stripes.stripes_per_belt}")
    typer.echo(f"  Active skills:    {len(club.active_skills)}")
    typer.echo(f"  Velocity:         {velocity:.2f} pts/class")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        payload = {"app": config.model_dump(), "club": club.model_dump()}
        typer.echo(json.dumps(payload, indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("show-ladder")
def show_ladder(
    config_path: Optional[str] = _CONFIG_OPTION,
    club_path: Optional[str] = _CLUB_OPTION,
) -> None:
    """Print the belt ladder with resolved stripe costs."""
    from dojo_progression.reporting.formatters import format_ladder

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    club = _load_club_or_exit(config, club_path)
    typer.echo(format_ladder(club))


@app.command("status")
def status(
    belt: str = typer.Option(..., "--belt", help="Current belt id."),
    points: int = typer.Option(0, "--points", help="Points earned at the current belt."),
    config_path: Optional[str] = _CONFIG_OPTION,
    club_path: Optional[str] = _CLUB_OPTION,
) -> None:
    """Show stripes and belt progress for a student."""
    from dojo_progression.models.belt import UnknownBeltError
    from dojo_progression.progression.evaluator import evaluate_promotion
    from dojo_progression.reporting.formatters import format_promotion_status

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    club = _load_club_or_exit(config, club_path)
    student = _student_or_exit(belt, points, 0, None)

    try:
        result = evaluate_promotion(student, club.ladder, club.policy, club.stripes)
    except UnknownBeltError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_promotion_status(result))


@app.command("forecast")
def forecast_cmd(
    belt: str = typer.Option(..., "--belt", help="Current belt id."),
    points: int = typer.Option(0, "--points", help="Points earned at the current belt."),
    attendance_count: int = typer.Option(
        0, "--attendance-count", help="Lifetime classes attended."
    ),
    join_date: Optional[str] = typer.Option(
        None, "--join-date", help="Join date (YYYY-MM-DD). Default: today."
    ),
    per_week: Optional[float] = typer.Option(
        None,
        "--per-week",
        help="Classes per week to simulate. Default: suggested from attendance history.",
    ),
    velocity: Optional[float] = typer.Option(
        None, "--velocity", help="Override points per class (default: estimated)."
    ),
    table: bool = typer.Option(
        False, "--table", help="Also print a what-if table across the slider range."
    ),
    config_path: Optional[str] = _CONFIG_OPTION,
    club_path: Optional[str] = _CLUB_OPTION,
) -> None:
    """Project the date a student reaches the terminal belt."""
    from dojo_progression.models.belt import UnknownBeltError
    from dojo_progression.progression.attendance import suggest_frequency
    from dojo_progression.progression.forecast import forecast_schedule, forecast_terminal_rank
    from dojo_progression.reporting.formatters import format_forecast, format_forecast_table
    from dojo_progression.utils.time_utils import utcnow

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    club = _load_club_or_exit(config, club_path)
    student = _student_or_exit(belt, points, attendance_count, join_date)
    now = utcnow()

    if per_week is None:
        per_week = suggest_frequency(
            student.join_date, student.attendance_count, now=now, settings=config.forecast
        )
        typer.echo(f"Using suggested cadence: {per_week}x/week")

    try:
        result = forecast_terminal_rank(
            student, club, per_week,
            velocity_per_class=velocity,
            now=now,
            settings=config.forecast,
            velocity_model=config.velocity,
        )
        rows = (
            forecast_schedule(
                student, club,
                velocity_per_class=result.velocity_per_class,
                now=now,
                settings=config.forecast,
            )
            if table else []
        )
    except UnknownBeltError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_forecast(result))
    if table:
        typer.echo(format_forecast_table(rows))


@app.command("suggest-frequency")
def suggest_frequency_cmd(
    attendance_count: int = typer.Option(
        ..., "--attendance-count", help="Lifetime classes attended."
    ),
    join_date: str = typer.Option(..., "--join-date", help="Join date (YYYY-MM-DD)."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Suggest a default weekly cadence from attendance history."""
    from dojo_progression.progression.attendance import suggest_frequency

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    joined = _parse_date_or_exit(join_date)

    try:
        freq = suggest_frequency(joined, attendance_count, settings=config.forecast)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Suggested cadence: {freq}x/week")


@app.command("preview-session")
def preview_session_cmd(
    belt: str = typer.Option(..., "--belt", help="Current belt id."),
    points: int = typer.Option(0, "--points", help="Points earned at the current belt."),
    session_points: int = typer.Option(
        ..., "--session-points", help="Points the class would award."
    ),
    config_path: Optional[str] = _CONFIG_OPTION,
    club_path: Optional[str] = _CLUB_OPTION,
) -> None:
    """Preview how many stripes one class's points would award."""
    from dojo_progression.models.belt import UnknownBeltError
    from dojo_progression.progression.evaluator import preview_session
    from dojo_progression.reporting.formatters import format_session_preview

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    club = _load_club_or_exit(config, club_path)
    student = _student_or_exit(belt, points, 0, None)

    try:
        preview = preview_session(
            student, session_points, club.ladder, club.policy, club.stripes
        )
    except (UnknownBeltError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_session_preview(preview))


if __name__ == "__main__":
    app()
