"""Calendar arithmetic for ISO 8601 weeks.

All functions here are pure. Weeks run Monday to Sunday and week 1 is the
week containing the year's first Thursday, so the ISO year of a date can
differ from its calendar year around New Year (31 Dec 2024 is in week 1 of
2025). Year bounds are a caller policy (see ``policies``) and are not
enforced here.
"""

from datetime import date, timedelta

from weekplan.domain.errors import OutOfRange

MIN_WEEK = 1
MAX_WEEK = 53
DAYS_PER_WEEK = 7

# Abbreviations as rendered by the "dd MMM" pattern in each locale
MONTH_ABBREVIATIONS = {
    "fr": [
        "janv.", "févr.", "mars", "avr.", "mai", "juin",
        "juil.", "août", "sept.", "oct.", "nov.", "déc.",
    ],
    "en": [
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ],
}

WEEK_RANGE_ARROW = "→"


def iso_week_of(d: date) -> tuple[int, int]:
    """Return the (ISO year, ISO week number) a date belongs to."""
    iso_year, week_number, _ = d.isocalendar()
    return iso_year, week_number


def weeks_in_iso_year(iso_year: int) -> int:
    """Number of ISO weeks (52 or 53) in an ISO year.

    28 December always falls in the last ISO week of its year.
    """
    return date(iso_year, 12, 28).isocalendar()[1]


def check_week_number(iso_year: int, week_number: int) -> None:
    """Raise ``OutOfRange`` unless the week exists in the ISO year."""
    if not MIN_WEEK <= week_number <= MAX_WEEK:
        raise OutOfRange(
            f"Week number {week_number} is outside {MIN_WEEK}-{MAX_WEEK}"
        )
    if week_number > weeks_in_iso_year(iso_year):
        raise OutOfRange(f"ISO year {iso_year} has no week {week_number}")


def first_day_of_iso_week(iso_year: int, week_number: int) -> date:
    """Return the Monday of an ISO week.

    Exact inverse of ``iso_week_of``: for any date ``d``,
    ``first_day_of_iso_week(*iso_week_of(d))`` is the Monday of ``d``'s week.

    Raises:
        OutOfRange: If ``week_number`` is not a week of ``iso_year``.
    """
    check_week_number(iso_year, week_number)
    return date.fromisocalendar(iso_year, week_number, 1)


def dates_of_iso_week(iso_year: int, week_number: int) -> list[date]:
    """Return the seven dates of an ISO week, Monday first."""
    monday = first_day_of_iso_week(iso_year, week_number)
    return [monday + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def shift_iso_week(iso_year: int, week_number: int, weeks: int) -> tuple[int, int]:
    """Move an ISO week forward (or back, if negative) by a number of weeks."""
    monday = first_day_of_iso_week(iso_year, week_number)
    return iso_week_of(monday + timedelta(weeks=weeks))


def normalize_locale(locale: str) -> str:
    """Reduce "fr-FR" or "fr_FR" to "fr".

    Raises:
        ValueError: If the language is not supported.
    """
    language = locale.split("-")[0].split("_")[0].lower()
    if language not in MONTH_ABBREVIATIONS:
        raise ValueError(f"Unsupported locale: {locale}")
    return language


def format_week_range_label(
    iso_year: int,
    week_number: int,
    locale: str = "fr",
) -> str:
    """Format the Monday-Sunday span of a week, e.g. "22 avr. → 28 avr. 2024".

    Only the year of the Sunday is printed. This is a display convenience with
    no business meaning.

    Raises:
        ValueError: If the locale is not supported.
    """
    months = MONTH_ABBREVIATIONS[normalize_locale(locale)]

    start, end = dates_of_iso_week(iso_year, week_number)[::6]
    return (
        f"{start.day:02d} {months[start.month - 1]} {WEEK_RANGE_ARROW} "
        f"{end.day:02d} {months[end.month - 1]} {end.year}"
    )
