"""
dojo_progression.reporting — terminal output for CLI commands.

Modules:
  formatters — ASCII formatters for ladders, promotion status, session
               previews and Time Machine forecasts.
"""
