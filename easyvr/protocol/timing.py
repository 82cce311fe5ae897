"""Conversions from milliseconds to the module's coarse time units."""
from __future__ import annotations

from ..errors import ValidationError

MAX_DELAY_MS = 1000
MAX_SONICNET_MS = 28090  # 10-bit tick count
NO_LIMIT = 0


def quantize_delay(millis: int) -> int:
    """Map a reply delay in milliseconds to the device-side unit.

    Up to 10 ms the value is sent as-is, up to 100 ms in 10 ms steps from a
    base of 9, up to 1000 ms in 100 ms steps from a base of 18.

    Examples:
        >>> quantize_delay(5)
        5
        >>> quantize_delay(23)
        11
        >>> quantize_delay(200)
        20

    Raises:
        ValidationError: If millis is negative or above 1000
    """
    if not 0 <= millis <= MAX_DELAY_MS:
        raise ValidationError(f"Delay {millis} ms out of range [0, {MAX_DELAY_MS}]")
    if millis <= 10:
        return millis
    if millis <= 100:
        return millis // 10 + 9
    return millis // 100 + 18


def sonicnet_ticks(millis: int) -> int:
    """Convert milliseconds to SonicNet ticks (about 27.46 ms each).

    Computed as ``round(millis * 2 / 55)``, which stays within 0.15% of the
    device granularity. Zero means no limit; any positive duration yields at
    least one tick.

    Raises:
        ValidationError: If millis is negative or above 28090
    """
    if not 0 <= millis <= MAX_SONICNET_MS:
        raise ValidationError(
            f"SonicNet time {millis} ms out of range [0, {MAX_SONICNET_MS}]"
        )
    if millis == 0:
        return NO_LIMIT
    return max((millis * 2 + 27) // 55, 1)
