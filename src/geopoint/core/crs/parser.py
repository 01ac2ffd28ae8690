"""
Coordinate string parser.

Turns loosely formatted text as typed by people into points and
bounding boxes.  The recognized formats are heuristic; the rules below
are applied literally, edge cases included.

Point text::

    [label:] [label] value value        e.g. "52.3213 5.53"
                                             "wgs84: 5d12'E, 52n"
                                             "utm 31n 12311.123 34242.12"

A leading ``word:`` or a first token starting with two letters names
the projection.  Without a label the registry default is used.
"""

import logging
import re
from typing import TYPE_CHECKING, List, Optional, Tuple

from geopoint.core.crs.dms import dms_to_degrees
from geopoint.core.crs.registry import ProjectionRegistry, get_default_registry
from geopoint.core.crs.utm import parse_utm_zone
from geopoint.core.errors import (
    CoordinateParseError,
    DMSParseFailure,
    IllegalCoordinateCharacter,
    InvalidUTMZone,
    LatLongRequired,
    MissingUTMZone,
    TooFewValues,
    TooManyValues,
    UnknownProjection,
)
from geopoint.models.crs import ReferenceSystem

if TYPE_CHECKING:
    from geopoint.core.geometry.line import LineString
    from geopoint.core.geometry.point import Point

logger = logging.getLogger(__name__)

BBoxResult = Tuple[float, float, float, float, str]

_LABEL = re.compile(r"^(\w+)\s*:\s*")
_COMMA = re.compile(r"\s*,\s*")
_NICK_TOKEN = re.compile(r"^[a-z_]{2}", re.IGNORECASE)
_PLANAR = re.compile(r"^\d+(?:\.\d+)?$")

_LONG_SUFFIX = re.compile(r"[ewEW]$")
_LONG_PREFIX = re.compile(r"^[ewEW]")
_LAT_SUFFIX = re.compile(r"[nsNS]$")
_LAT_PREFIX = re.compile(r"^[nsNS]")

# Ranges like "n12-14", "12n-14" and "12-14n"
_RANGE_PATTERNS = (
    (re.compile(r"^([nesw])(\d.*?)\s*-\s*(\d.*?)\s*$", re.IGNORECASE), (1, 2, 3)),
    (re.compile(r"^(\d.*?)([nesw])\s*-\s*(\d.*?)\s*$", re.IGNORECASE), (2, 1, 3)),
    (re.compile(r"^(\d.*?)\s*-\s*(\d.*?)\s*([nesw])\s*$", re.IGNORECASE), (3, 1, 2)),
)

UTM_LABEL = "utm"


def _split(text: str) -> List[str]:
    if "," in text:
        return _COMMA.split(text)
    return text.split()


def _strip_label(text: str, nickname: Optional[str]) -> Tuple[str, Optional[str]]:
    match = _LABEL.match(text)
    if match:
        return text[match.end():], match.group(1)
    return text, nickname


def _is_longitude(token: str) -> bool:
    return bool(_LONG_SUFFIX.search(token) or _LONG_PREFIX.search(token))


def _is_latitude(token: str) -> bool:
    return bool(_LAT_SUFFIX.search(token) or _LAT_PREFIX.search(token))


def _utm_system(
    text: str,
    parts: List[str],
    registry: ProjectionRegistry,
) -> Tuple[ReferenceSystem, List[str]]:
    if len(parts) != 3:
        raise MissingUTMZone(text, len(parts))

    zone = parse_utm_zone(parts[0])
    if zone is not None:
        parts = parts[1:]
    else:
        zone = parse_utm_zone(parts[2])
        if zone is not None:
            parts = parts[:2]

    if zone is None:
        raise InvalidUTMZone(text)

    number, _band = zone
    if number == 0 or number > 60:
        raise InvalidUTMZone(text, zone=number)

    return registry.synthesize_utm(None, number), parts


def point_from_string(
    text: Optional[str],
    nickname: Optional[str] = None,
    registry: Optional[ProjectionRegistry] = None,
) -> Optional["Point"]:
    """
    Parse a point from a string.

    Geographic coordinates are read latitude first, unless direction
    letters show the first value is the longitude: ``5E 52N`` and
    ``5.2, n52`` are swapped.  Values may be decimal or degrees, minutes
    and seconds.  Planar coordinates must be plain unsigned decimals.

    Args:
        text: Text to parse
        nickname: Projection to use when the text carries no label
        registry: Registry to resolve labels in

    Returns:
        The Point, or None for empty text

    Raises:
        UnknownProjection: If the label is not registered
        MissingUTMZone: If a UTM coordinate does not have 3 values
        InvalidUTMZone: If the UTM zone is absent, zero or above 60
        TooFewValues: If fewer than 2 values remain
        TooManyValues: If more than 2 values remain
        DMSParseFailure: If a geographic value is not understood
        IllegalCoordinateCharacter: If a planar value is not a decimal

    Example:
        >>> point_from_string("52.3213 5.53").latlong()
        (52.3213, 5.53)
    """
    from geopoint.core.geometry.point import Point

    if text is None:
        return None
    text = text.strip()
    if not text:
        return None

    registry = registry or get_default_registry()
    body, nickname = _strip_label(text, nickname)
    parts = _split(body)

    if parts and _NICK_TOKEN.match(parts[0]):
        nickname = parts.pop(0)

    if nickname is None:
        system = registry.default()
        if system is None:
            raise UnknownProjection(None)
    elif nickname == UTM_LABEL:
        system, parts = _utm_system(text, parts, registry)
    else:
        system = registry.get(nickname)

    if len(parts) < 2:
        raise TooFewValues(text, len(parts), 2)
    if len(parts) > 2:
        raise TooManyValues(text, len(parts), 2)

    if system.is_geographic:
        first, second = parts
        if _is_longitude(first) or _is_latitude(second):
            first, second = second, first

        lat = dms_to_degrees(first)
        if lat is None:
            raise DMSParseFailure("latitude", first)

        long = dms_to_degrees(second)
        if long is None:
            raise DMSParseFailure("longitude", second)

        logger.debug(f"Parsed '{text}' as lat={lat} long={long} in {system.nickname}")
        return Point(long, lat, system.nickname)

    x, y = parts
    if not _PLANAR.match(x):
        raise IllegalCoordinateCharacter("x", x)
    if not _PLANAR.match(y):
        raise IllegalCoordinateCharacter("y", y)

    logger.debug(f"Parsed '{text}' as x={x} y={y} in {system.nickname}")
    return Point(float(x), float(y), system.nickname)


def _expand_range(token: str) -> List[str]:
    for pattern, (letter, low, high) in _RANGE_PATTERNS:
        match = pattern.match(token)
        if match:
            direction = match.group(letter)
            return [direction + match.group(low), direction + match.group(high)]
    return [token]


def bbox_from_string(
    text: Optional[str],
    nickname: Optional[str] = None,
    registry: Optional[ProjectionRegistry] = None,
) -> Optional[BBoxResult]:
    """
    Parse a bounding box from a string.

    Four values are expected, two latitudes and two longitudes, in any
    order.  Values with an E or W letter are longitudes, the others are
    latitudes.  Ranges combine two values with one direction letter.

    Examples of accepted text::

        5n 2n 3e e12
        5-2n 3-12e
        wgs84: 5-2n, 3e-12

    Returns:
        Tuple (min_lat, min_long, max_lat, max_long, nickname), or None
        for empty text

    Raises:
        TooFewValues: If fewer than 4 values remain
        TooManyValues: If more than 4 values remain
        UnknownProjection: If the label is not registered
        LatLongRequired: If the projection is not geographic
        DMSParseFailure: If a value is not understood
        CoordinateParseError: If there are not exactly two of each
    """
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None

    registry = registry or get_default_registry()
    body, nickname = _strip_label(text, nickname)

    # Blanks separate values unless commas do; ranges are expanded in between
    pieces = _COMMA.split(body) if "," in body else body.split()
    parts = [
        value
        for piece in pieces
        for expanded in _expand_range(piece)
        for value in expanded.split()
    ]

    if parts and _NICK_TOKEN.match(parts[0]):
        nickname = parts.pop(0).lower()

    if len(parts) < 4:
        raise TooFewValues(text, len(parts), 4)
    if len(parts) > 4:
        raise TooManyValues(text, len(parts), 4)

    if nickname is None:
        system = registry.default()
        if system is None:
            raise UnknownProjection(None)
    else:
        system = registry.get(nickname)

    if not system.is_geographic:
        raise LatLongRequired(text, system.nickname)

    lats: List[float] = []
    longs: List[float] = []
    for part in parts:
        is_long = _is_longitude(part)
        value = dms_to_degrees(part)
        if value is None:
            raise DMSParseFailure("longitude" if is_long else "latitude", part)
        (longs if is_long else lats).append(value)

    if len(lats) != 2:
        raise CoordinateParseError(
            f"expect two lats and two longs, but got {len(lats)}/{len(longs)}",
            text=text,
            error_code="BBOX_PARTITION",
            details={"latitudes": len(lats), "longitudes": len(longs)},
        )

    logger.debug(f"Parsed bbox '{text}' in {system.nickname}")
    return min(lats), min(longs), max(lats), max(longs), system.nickname


def ring_from_string(
    text: Optional[str],
    nickname: Optional[str] = None,
    registry: Optional[ProjectionRegistry] = None,
) -> Optional["LineString"]:
    """
    Like ``bbox_from_string``, returning the box as a ring in long/lat.
    """
    from geopoint.core.geometry.line import LineString

    box = bbox_from_string(text, nickname=nickname, registry=registry)
    if box is None:
        return None

    min_lat, min_long, max_lat, max_long, nick = box
    return LineString.from_bbox(min_long, min_lat, max_long, max_lat, nick)
