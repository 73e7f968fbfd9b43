"""
Progression & forecasting engine.

Every function in this package is pure: it reads frozen input snapshots and
returns a new result model. Nothing is cached between calls, so a changed
ladder, policy, skill list or slider value is always reflected on the next
call.

Modules
-------
evaluator  : evaluate_promotion() — stripes and belt progress;
             preview_session() / session_total() — grading-screen preview.
velocity   : estimate_velocity() — points-per-class heuristic.
attendance : suggest_frequency() — default slider position from history.
forecast   : lifetime_distance(), project_date(), forecast(),
             forecast_terminal_rank(), forecast_schedule() — the Time Machine.
"""
