"""Time conversion wrappers around rms-julian: UTC strings to ephemeris time and back."""

from __future__ import annotations

import logging
import re

import julian

from spk_tools.config import get_leapsecs_path
from spk_tools.constants import (
    DEFAULT_MIN_INTERVAL_SECONDS,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)

logger = logging.getLogger(__name__)

# True once rms-julian has a leap second table for UTC conversions.
_leapsecs_loaded = False

# Forms rms-julian does not read directly, rewritten before parsing.
_ISO_ZULU = re.compile(r'(.*\d)[Zz]')
_YEAR_AND_TIME = re.compile(r'(\d{4})\s+(\d{1,2}:\d{2}:\d{2})')


def _ensure_leapsecs() -> None:
    """Prepare rms-julian for UTC/ET conversion on first use.

    UTC before 1972 follows the SPICE model so that epochs agree with kernels
    made by NAIF tools. Leap seconds come from the LSK chosen by
    get_leapsecs_path(); if that file cannot be read, rms-julian's own table
    is used instead.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    lsk = get_leapsecs_path()
    try:
        julian.load_lsk(lsk)
    except (OSError, KeyError, ValueError) as err:
        logger.info('Cannot use leap seconds kernel %r (%s); falling back to rms-julian table', lsk, err)
        julian.load_lsk()
    _leapsecs_loaded = True


def _time_string_forms(string: str) -> list[str]:
    """The string itself, then rewrites of forms rms-julian rejects."""
    text = string.strip()
    forms = [string]
    zulu = _ISO_ZULU.fullmatch(text)
    if zulu is not None:
        forms.append(zulu.group(1))
    year_time = _YEAR_AND_TIME.fullmatch(text)
    if year_time is not None:
        forms.append('{}-01-01 {}'.format(*year_time.groups()))
    return forms


def parse_datetime(string: str) -> tuple[int, float] | None:
    """Read a UTC time string as (day, sec).

    Any string rms-julian understands is accepted, plus ISO times ending in
    'Z' and 'YYYY HH:MM:SS' (that time on January 1 of the year).

    Returns:
        Days since 2000-01-01 and seconds into that day, or None if no form of
        the string parses.
    """
    _ensure_leapsecs()
    for form in _time_string_forms(string):
        try:
            day, sec = julian.day_sec_from_string(form)[:2]
        except (ValueError, TypeError, LookupError, OSError):
            logger.debug('rms-julian rejected time string %r', form)
            continue
        return int(day), float(sec)
    return None


def tai_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to TAI seconds."""
    _ensure_leapsecs()
    return float(julian.tai_from_day_sec(day, sec))


def tdb_from_tai(tai: float) -> float:
    """Convert TAI to TDB seconds (ephemeris time)."""
    return float(julian.tdb_from_tai(tai))


def tai_from_tdb(tdb: float) -> float:
    """Convert TDB seconds (ephemeris time) to TAI."""
    return float(julian.tai_from_tdb(tdb))


def day_sec_from_tai(tai: float) -> tuple[int, float]:
    """Convert TAI to UTC (day, sec), day counted from J2000."""
    _ensure_leapsecs()
    day, sec = julian.day_sec_from_tai(tai)
    return (int(day), float(sec))


def et_from_utc(string: str) -> float:
    """Convert a UTC date/time string to ephemeris time (TDB seconds past J2000).

    Raises:
        ValueError: If the string cannot be parsed.
    """
    parsed = parse_datetime(string)
    if parsed is None:
        raise ValueError(f'Invalid date/time {string!r}')
    day, sec = parsed
    return tdb_from_tai(tai_from_day_sec(day, sec))


def utc_from_et(et: float) -> str:
    """Format ephemeris time as a UTC string 'YYYY-MM-DD HH:MM:SS.sss'."""
    day, sec = day_sec_from_tai(tai_from_tdb(et))
    ms = int(round(sec * 1000.0))
    if ms >= int(SECONDS_PER_DAY) * 1000:
        # Leap second
        hour, minute, second_ms = 23, 59, ms - (int(SECONDS_PER_DAY) - 60) * 1000
    else:
        hour, rem = divmod(ms, 3600000)
        minute, second_ms = divmod(rem, 60000)
    year, month, mday = julian.ymd_from_day(day)
    return (
        f'{int(year):04d}-{int(month):02d}-{int(mday):02d} '
        f'{hour:02d}:{minute:02d}:{second_ms // 1000:02d}.{second_ms % 1000:03d}'
    )


def interval_seconds(
    interval: float,
    time_unit: str,
    *,
    min_seconds: float = DEFAULT_MIN_INTERVAL_SECONDS,
) -> float:
    """Convert interval and time_unit to seconds.

    Parameters:
        interval: Numeric interval value.
        time_unit: One of 'sec', 'min', 'hour', 'day' (case-insensitive, first 4 chars).
        min_seconds: Minimum returned value.

    Returns:
        Interval in seconds, at least min_seconds.
    """
    u = time_unit.strip().lower()[:4]
    if u in ('sec', 'seco', 's'):
        dsec = abs(interval)
    elif u in ('min', 'minu', 'm'):
        dsec = abs(interval) * SECONDS_PER_MINUTE
    elif u in ('hour', 'h'):
        dsec = abs(interval) * SECONDS_PER_HOUR
    elif u in ('day', 'days', 'd'):
        dsec = abs(interval) * SECONDS_PER_DAY
    else:
        raise ValueError(f'Invalid time_unit {time_unit!r}; expected one of sec, min, hour, day')
    return max(dsec, min_seconds)
