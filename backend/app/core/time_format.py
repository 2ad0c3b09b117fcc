"""Relative Time — "N units ago" labels for reply timestamps."""


def format_relative_time(time: int, now: int) -> str:
    """Largest whole unit wins; never reports less than one second."""
    seconds = now - time
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    if days > 1:
        return f"{days} days ago"
    if days == 1:
        return "1 day ago"
    if hours > 1:
        return f"{hours} hours ago"
    if hours == 1:
        return "1 hour ago"
    if minutes > 1:
        return f"{minutes} minutes ago"
    if minutes == 1:
        return "1 minute ago"
    if seconds > 1:
        return f"{seconds} seconds ago"
    return "1 second ago"
