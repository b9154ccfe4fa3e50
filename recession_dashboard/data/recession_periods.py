"""Historical US recession periods (NBER official dates)."""

from datetime import date

from recession_dashboard.models import RecessionPeriod, date_to_ms


def _period(start: str, end: str, name: str) -> RecessionPeriod:
    return RecessionPeriod(
        start_date=date_to_ms(date.fromisoformat(start)),
        end_date=date_to_ms(date.fromisoformat(end)),
        name=name,
    )


# Read-only; shared by every chart
RECESSION_PERIODS: tuple[RecessionPeriod, ...] = (
    _period("1980-01-01", "1980-07-31", "1980 Recession"),
    _period("1981-07-01", "1982-11-30", "Early 1980s Recession"),
    _period("1990-07-01", "1991-03-31", "Early 1990s Recession"),
    _period("2001-03-01", "2001-11-30", "Dot-com Recession"),
    _period("2007-12-01", "2009-06-30", "Great Recession"),
    _period("2020-02-01", "2020-04-30", "COVID-19 Recession"),
)
