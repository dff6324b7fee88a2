"""Short human-readable strings for the CLI's stats and reports."""

TIME_UNITS = ((3600.0, "h"), (60.0, "m"), (1.0, "s"))
SIZE_UNITS = ((1024**3, "GB"), (1024**2, "MB"), (1024, "KB"))


def elapsedTime(t):
    """Seconds as "50 ms", "2.5 s", "2 m" or "2 h"."""
    for scale, unit in TIME_UNITS:
        if t >= scale:
            return "%.4g %s" % (t / scale, unit)
    return "%.4g ms" % (t * 1000.0)


def memorySize(sz):
    """Bytes as "512 B", "2 KB", "1 MB" or "3 GB"."""
    for scale, unit in SIZE_UNITS:
        if sz >= scale:
            return "%.4g %s" % (sz / scale, unit)
    return "%d B" % sz


def percent(part, whole):
    """Format part/whole as a percentage, "-" when whole is zero."""
    if not whole:
        return "-"
    return "%.1f%%" % (100.0 * part / whole)
