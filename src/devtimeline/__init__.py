"""devtimeline - day-by-day developer timelines from tasks, teams and calendars."""

__version__ = "0.1.0"
