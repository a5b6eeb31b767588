"""Plain-text rendering of fasting windows for the chat assistant."""

from datetime import date, time

from nutrition_analytics.domain.fasting import FastingWindow


def format_time_of_day(value: time) -> str:
    """Format a time of day as HH:MM."""
    return value.strftime("%H:%M")


def format_duration(minutes: int) -> str:
    """Format a duration, e.g. ``16 hours`` or ``15h 30m``."""
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours} hours"
    return f"{hours}h {mins}m"


def describe_window(day: date, window: FastingWindow | None) -> str:
    """Describe the fast ending on a single day."""
    if window is None:
        return (
            f"No fasting data available for {day.isoformat()} "
            "(no meals logged on the previous day)."
        )
    last_meal = format_time_of_day(window.last_meal_time)
    if window.first_meal_time is None:
        return (
            f"Fasting window for {day.isoformat()}:\n"
            f"Last meal: {last_meal} (previous day)\n"
            "Status: Currently fasting (no meals logged yet today)"
        )
    return (
        f"Fasting window for {day.isoformat()}:\n"
        f"Last meal: {last_meal} (previous day)\n"
        f"First meal: {format_time_of_day(window.first_meal_time)}\n"
        f"Duration: {_duration_text(window)}"
    )


def describe_windows(start: date, end: date, windows: list[FastingWindow]) -> str:
    """Describe the fasts for every day of a range that has data."""
    if not windows:
        return (
            f"No fasting data available between {start.isoformat()} "
            f"and {end.isoformat()}."
        )
    lines = [f"Fasting windows for {start.isoformat()} to {end.isoformat()}:"]
    for window in windows:
        last_meal = format_time_of_day(window.last_meal_time)
        if window.first_meal_time is None:
            lines.append(
                f"\n{window.date.isoformat()}: Currently fasting "
                f"(last meal: {last_meal} previous day)"
            )
        else:
            first_meal = format_time_of_day(window.first_meal_time)
            lines.append(
                f"\n{window.date.isoformat()}: {_duration_text(window)} "
                f"({last_meal} → {first_meal})"
            )
    return "\n".join(lines)


def _duration_text(window: FastingWindow) -> str:
    if window.duration_minutes is None:
        return "N/A"
    return format_duration(window.duration_minutes)
