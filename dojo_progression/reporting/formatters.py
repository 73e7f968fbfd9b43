"""
ASCII terminal formatters for CLI commands.

All formatters accept engine result models and return plain multi-line
strings suitable for ``typer.echo()``. No third-party dependencies.

Stripe bar
----------
Stripes are drawn as a fixed-width bar, one cell per stripe::

    [##--]  2/4 stripes  (50%)

Unreachable forecasts
---------------------
When the chosen cadence earns no points the engine returns a far-future
sentinel date. Formatters print ``no path at this cadence`` in place of that
date so nobody reads the sentinel as a real projection.
"""

from __future__ import annotations

from dojo_progression.models.belt import BeltLadder
from dojo_progression.models.club import ClubProgressionConfig
from dojo_progression.models.results import ForecastResult, PromotionStatus, SessionPreview

_NO_PATH = "no path at this cadence"


def format_stripe_bar(stripes: int, stripes_per_belt: int) -> str:
    """Return ``[##--]`` style bar for ``stripes`` of ``stripes_per_belt``."""
    filled = max(0, min(stripes, stripes_per_belt))
    return "[" + "#" * filled + "-" * (stripes_per_belt - filled) + "]"


def _date_str(result: ForecastResult) -> str:
    if not result.reachable:
        return _NO_PATH
    return result.estimated_date.strftime("%Y-%m-%d")


# ── Ladder ────────────────────────────────────────────────────────────────────


def format_ladder(club: ClubProgressionConfig) -> str:
    """Format the ladder with each belt's resolved stripe cost and belt total."""
    ladder: BeltLadder = club.ladder
    per_belt = club.stripes.stripes_per_belt

    lines: list[str] = []
    lines.append("")
    lines.append("=== Belt Ladder ===")
    lines.append(f"  Policy:           {club.policy.kind}")
    lines.append(f"  Stripes per belt: {per_belt}")
    lines.append("")
    header = f"    {'#':>3}  {'Belt':<16}  {'Id':<16}  {'Pts/stripe':>10}  {'Belt total':>10}"
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for i, belt in enumerate(ladder.belts):
        pps = club.policy.points_per_stripe_for(belt.id)
        marker = "  (terminal)" if i == ladder.terminal_index else ""
        lines.append(
            f"    {i:>3}  {belt.name[:16]:<16}  {belt.id[:16]:<16}  "
            f"{pps:>10}  {pps * per_belt:>10}{marker}"
        )
    return "\n".join(lines)


# ── Promotion status ─────────────────────────────────────────────────────────


def format_promotion_status(status: PromotionStatus) -> str:
    """Format a single student's rank display."""
    bar = format_stripe_bar(status.stripes, status.stripes_per_belt)
    lines: list[str] = []
    lines.append("")
    lines.append("=== Promotion Status ===")
    lines.append(f"  Belt:    {status.belt_name} ({status.belt_id})")
    lines.append(
        f"  Stripes: {bar}  {status.stripes}/{status.stripes_per_belt} stripes  "
        f"({status.progress_percent:.0f}%)"
    )
    if status.has_max_stripes:
        lines.append("  Next:    belt complete -- ready for promotion")
    else:
        lines.append(
            f"  Next:    {status.points_into_stripe}/{status.points_per_stripe} pts "
            f"toward next stripe ({status.stripe_progress_percent:.0f}%)"
        )
    return "\n".join(lines)


def format_session_preview(preview: SessionPreview) -> str:
    """Format the grading-screen preview of one class's points."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Session Preview ===")
    lines.append(f"  Session points:  {preview.session_points}")
    lines.append(f"  Pts per stripe:  {preview.points_required}")
    lines.append(f"  Stripes:         {preview.stripes_before} -> {preview.stripes_after}")
    if preview.new_stripes > 0:
        lines.append(f"  New stripes:     +{preview.new_stripes}")
    if preview.has_max_stripes:
        lines.append("  [MAX] Belt complete after this class")
    return "\n".join(lines)


# ── Forecast ──────────────────────────────────────────────────────────────────


def format_forecast(result: ForecastResult) -> str:
    """Format the Time Machine result for one cadence."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Time Machine: {result.target_belt_name} ===")
    lines.append(f"  Progress:         {result.percent_complete:.1f}%")
    lines.append(
        f"  Points remaining: {result.points_remaining} of {result.total_points_needed}"
    )
    lines.append(
        f"  Cadence:          {result.attendance_per_week:g}x/week "
        f"x {result.velocity_per_class:.2f} pts/class = {result.points_per_week:.2f} pts/week"
    )
    lines.append(f"  Estimated date:   {_date_str(result)}")
    if result.reachable and result.years_saved > 0:
        lines.append(
            f"  You save {result.years_saved:.1f} years by training "
            f"{result.attendance_per_week:g}x/week instead of "
            f"{result.baseline_frequency:g}x/week!"
        )
    return "\n".join(lines)


def format_forecast_table(results: list[ForecastResult]) -> str:
    """Format a what-if table: one row per weekly cadence."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Time Machine: what-if by cadence ===")
    if not results:
        lines.append("  (no cadences to show)")
        return "\n".join(lines)

    lines.append(f"  Target: {results[0].target_belt_name}")
    header = f"    {'x/week':>6}  {'Pts/week':>9}  {'Estimated':>23}  {'Saved (yrs)':>11}"
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for r in results:
        lines.append(
            f"    {r.attendance_per_week:>6g}  {r.points_per_week:>9.2f}  "
            f"{_date_str(r):>23}  {r.years_saved:>11.1f}"
        )
    return "\n".join(lines)
