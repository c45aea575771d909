"""
Meeting-time arithmetic for the schedule-conflict check.

Times are zero-padded 24-hour ``HH:MM`` strings. They are compared as the
integer left after removing the colon (``"09:30" -> 930``), not as minutes
since midnight. Integer order matches clock order for well-formed values, so
only ordering comparisons are made, never differences.
"""

CLOCK_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def clock_value(hh_mm: str) -> int:
    return int(hh_mm.replace(":", "", 1))


def times_overlap(reg_start: str, reg_end: str, course_start: str, course_end: str) -> bool:
    """
    True when the target interval [course_start, course_end) overlaps the
    existing one [reg_start, reg_end).

    The target may start inside the existing interval, end inside it, or
    cover it entirely. Touching ends (one ends exactly when the other starts)
    do not overlap.
    """
    s1, e1 = clock_value(reg_start), clock_value(reg_end)
    s2, e2 = clock_value(course_start), clock_value(course_end)

    return (s2 >= s1 and s2 < e1) or (e2 > s1 and e2 <= e1) or (s2 <= s1 and e2 >= e1)
