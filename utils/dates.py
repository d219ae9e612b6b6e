# utils/dates.py
from datetime import datetime, timezone

from dateutil.relativedelta import relativedelta


def utcnow() -> datetime:
     """Naive UTC timestamp, matching how DateTime columns are stored."""
     return datetime.now(timezone.utc).replace(tzinfo=None)


def one_year_after(start: datetime) -> datetime:
     return start + relativedelta(years=1)
