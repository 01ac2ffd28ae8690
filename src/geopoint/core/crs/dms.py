"""
Conversion between decimal degrees and degrees/minutes/seconds text.
"""

import re
from typing import Optional

_DIRECTION_SUFFIX = re.compile(r"([ewsn])\s*$", re.IGNORECASE)
_DIRECTION_PREFIX = re.compile(r"^([ewsn])\s*", re.IGNORECASE)

_DMS_PATTERN = re.compile(
    r"""
    ( [+-]? \d+ (?: \.\d+ )? ) [°dD]?
    \s* (?: ( \d+ (?: \.\d+ )? ) [\'mM\u0092’′]? )?
    \s* (?: ( \d+ (?: \.\d+ )? ) [\"sS”″]? )?
    \s*
    """,
    re.VERBOSE,
)


def _wrap(degrees: float) -> float:
    # Loops keep +180 as +180 where modulo would turn it into -180
    while degrees > 180:
        degrees -= 360
    while degrees <= -180:
        degrees += 360
    return degrees


def degrees_to_dms(
    degrees: float,
    positive: str,
    negative: str,
    include_seconds: bool = True,
) -> str:
    """
    Translate decimal degrees into degrees/minutes/seconds notation.

    Floating point noise is absorbed, so 12.5 becomes ``12d30'`` and not
    ``12d29'59.999"``.

    Args:
        degrees: Angle in decimal degrees
        positive: Suffix for positive angles, like ``N`` or ``E``
        negative: Suffix for negative angles, like ``S`` or ``W``
        include_seconds: When False, the sub-minute remainder is dropped

    Returns:
        Text like ``12d20'24"W`` or ``52E``

    Examples:
        >>> degrees_to_dms(-12.34, "E", "W")
        '12d20\\'24"W'
    """
    degrees = _wrap(degrees)
    sign = positive
    if degrees < 0:
        sign = negative
        degrees = -degrees

    d = int(degrees)
    frac = (degrees - d) * 60
    m = int(frac + 0.00001)

    if not include_seconds:
        return f"{d}d{m:02d}'{sign}" if m else f"{d}{sign}"

    s = (frac - m) * 60
    if s < 0.001:
        s = 0
    g = int(s + 0.00001)
    h = int((s - g) * 1000 + 0.0001)

    if h:
        return f"{d}d{m:02d}'{g:02d}.{h:03d}\"{sign}"
    if s:
        return f"{d}d{m:02d}'{g:02d}\"{sign}"
    if m:
        return f"{d}d{m:02d}'{sign}"
    return f"{d}{sign}"


def degrees_to_dm(degrees: Optional[float], positive: str, negative: str) -> str:
    """Like ``degrees_to_dms`` without seconds; ``(null)`` for None."""
    if degrees is None:
        return "(null)"
    return degrees_to_dms(degrees, positive, negative, include_seconds=False)


def dms_to_degrees(dms: str) -> Optional[float]:
    """
    Parse degrees/minutes/seconds text into decimal degrees.

    Accepts for instance ``3d12'24.123``, ``3d12"E``, ``3.12314w``,
    ``n2.14``, ``s3d12"`` and ``-12d34``.  One direction letter may appear
    at the end or at the start; S and W make the result negative.

    Returns:
        Decimal degrees, or None when the text is not understood
    """
    if dms is None:
        return None

    text = dms.strip()
    direction = "E"

    match = _DIRECTION_SUFFIX.search(text)
    if match:
        direction = match.group(1).upper()
        text = text[: match.start()]
    else:
        match = _DIRECTION_PREFIX.match(text)
        if match:
            direction = match.group(1).upper()
            text = text[match.end():]

    match = _DMS_PATTERN.fullmatch(text)
    if not match:
        return None

    degrees = match.group(1)
    d = abs(float(degrees))
    m = float(match.group(2) or 0)
    s = float(match.group(3) or 0)

    # A leading minus covers the minutes and seconds too
    sign = -1 if degrees.startswith("-") else 1
    if direction in ("W", "S"):
        sign = -sign
    return sign * (d + m / 60 + s / 3600)
