from datetime import date, datetime, time, timedelta

_ANCHOR = date(2000, 1, 1)

def shift_time(t: time, delta: timedelta) -> time:
    """Adds a duration to a time of day, wrapping around midnight (23:30 + 1h == 00:30)."""
    return (datetime.combine(_ANCHOR, t) + delta).time()

def parse_date(s: str) -> date:
    """Parses a YYYY-MM-DD string."""
    return date.fromisoformat(s.strip())

def api_date(d: date) -> str:
    return d.isoformat()

def api_time(t: time) -> str:
    """Formats a time of day as HH:MM, keeping seconds only when they are set."""
    if t.second or t.microsecond:
        return t.replace(microsecond=0).isoformat()
    return t.strftime("%H:%M")
