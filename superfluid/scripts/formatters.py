"""Human-readable rendering of token amounts, flow rates and timestamps."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from quantity import parse_nonnegative_int, parse_signed_int
from settings import DEFAULT_DECIMALS, DEFAULT_DISPLAY_DECIMALS

SECONDS_PER_MONTH = 2_592_000  # 30 days
MONTHLY_DECIMALS = 4
SECONDS_PER_DAY = 86_400
# Largest instant an ISO-8601 rendering is produced for (+275760-09-13).
MAX_ISO_SECONDS = 8_640_000_000_000


def scale_units(value: int, decimals: int, places: int) -> str:
    """Render ``value / 10**decimals`` with exactly ``places`` fractional digits (round half up)."""
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    if places >= decimals:
        scaled = magnitude * 10 ** (places - decimals)
    else:
        divisor = 10 ** (decimals - places)
        scaled, remainder = divmod(magnitude, divisor)
        if remainder * 2 >= divisor:
            scaled += 1
    if places == 0:
        return f"{sign}{scaled}"
    whole, frac = divmod(scaled, 10**places)
    return f"{sign}{whole}.{frac:0{places}d}"


def format_amount(
    raw: Any,
    decimals: int = DEFAULT_DECIMALS,
    *,
    display_decimals: int = DEFAULT_DISPLAY_DECIMALS,
) -> dict[str, Any] | None:
    if raw is None:
        return None
    value = parse_signed_int(raw, field="amount")
    return {
        "wei": raw,
        "formatted": scale_units(value, decimals, min(decimals, display_decimals)),
    }


def format_flow_rate(
    raw: Any,
    decimals: int = DEFAULT_DECIMALS,
    *,
    display_decimals: int = DEFAULT_DISPLAY_DECIMALS,
) -> dict[str, Any] | None:
    if raw is None or raw == "" or raw == "0" or raw == 0:
        return None
    value = parse_signed_int(raw, field="flow rate")
    if value == 0:
        return None
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    return {
        "wei_per_second": raw,
        "tokens_per_second": sign + scale_units(magnitude, decimals, min(decimals, display_decimals)),
        "tokens_per_month": sign + scale_units(magnitude * SECONDS_PER_MONTH, decimals, MONTHLY_DECIMALS),
    }


def format_timestamp(raw: Any) -> dict[str, Any] | None:
    if raw is None or raw == "":
        return None
    seconds = parse_nonnegative_int(raw, field="timestamp")
    if seconds == 0:
        return None
    return {"unix": raw, "iso": iso_utc(seconds)}


def _civil_from_days(days: int) -> tuple[int, int, int]:
    """Proleptic Gregorian (year, month, day) for a day count since 1970-01-01."""
    z = days + 719_468
    era = z // 146_097
    doe = z - era * 146_097
    yoe = (doe - doe // 1460 + doe // 36_524 - doe // 146_096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def iso_utc(seconds: int) -> str | None:
    """ISO-8601 UTC with milliseconds; years past 9999 use the expanded ``+YYYYYY`` form.

    Returns None beyond ``MAX_ISO_SECONDS``.
    """
    if seconds > MAX_ISO_SECONDS:
        return None
    try:
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        days, rem = divmod(seconds, SECONDS_PER_DAY)
        year, month, day = _civil_from_days(days)
        hours, rem = divmod(rem, 3600)
        minutes, secs = divmod(rem, 60)
        date = f"+{year:06d}" if year > 9999 else f"{year:04d}"
        return f"{date}-{month:02d}-{day:02d}T{hours:02d}:{minutes:02d}:{secs:02d}.000Z"
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
