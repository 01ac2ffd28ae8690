"""
Geodetic engine backed by pyproj.

This module wraps ``pyproj`` behind the few calls the rest of the package
needs: parse a definition, tell geographic from planar systems, report the
datum and transform coordinate sequences.
"""

import logging
import re
import warnings
from functools import lru_cache
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from geopoint.core.errors import InvalidDefinition, ProjectionError

logger = logging.getLogger(__name__)

Coordinate = Tuple[float, float]

_DATUM_PATTERN = re.compile(r"\+datum=([\w-]+)", re.IGNORECASE)


@lru_cache(maxsize=256)
def _transformer(source: CRS, target: CRS) -> Transformer:
    # Transformer construction dominates the cost of small transforms
    return Transformer.from_crs(source, target, always_xy=True)


class GeodeticEngine:
    """
    Adapter between reference system definitions and pyproj.

    Coordinates are always exchanged in x,y order, which is
    longitude,latitude for geographic systems.
    """

    def parse(self, definition: Any) -> CRS:
        """
        Create a pyproj CRS from a definition.

        Args:
            definition: PROJ string, EPSG code, WKT, mapping of PROJ
                parameters, sequence of (key, value) pairs, or a CRS

        Returns:
            pyproj CRS

        Raises:
            InvalidDefinition: If pyproj rejects the definition
        """
        if isinstance(definition, CRS):
            return definition
        if definition is None or definition == "":
            raise InvalidDefinition("definition parameter required")

        if isinstance(definition, (list, tuple)):
            definition = dict(definition)

        try:
            return CRS.from_user_input(definition)
        except (CRSError, TypeError, ValueError) as e:
            raise InvalidDefinition(
                f"cannot create projection: {e}",
                details={"definition": str(definition)},
            )

    def is_geographic(self, crs: CRS) -> bool:
        """True when the system uses angular latitude/longitude coordinates."""
        return bool(crs.is_geographic)

    def datum(self, crs: CRS, definition: Any = None) -> Optional[str]:
        """
        Report the PROJ datum label of a system, like ``WGS84``.

        Args:
            crs: Parsed system
            definition: Original definition, searched first for ``+datum=``

        Returns:
            Datum label or None when the system has no PROJ datum
        """
        if isinstance(definition, str):
            match = _DATUM_PATTERN.search(definition)
            if match:
                return match.group(1)

        # to_dict() goes through PROJ strings, which warns about lost detail
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            try:
                params = crs.to_dict()
            except CRSError:
                return None
        datum = params.get("datum")
        return str(datum) if datum else None

    def transform(
        self,
        source: CRS,
        target: CRS,
        coordinates: Sequence[Coordinate],
    ) -> List[Coordinate]:
        """
        Transform a sequence of (x, y) pairs.

        Args:
            source: System the coordinates are expressed in
            target: System to transform into

        Returns:
            Transformed (x, y) pairs, in the same order

        Raises:
            ProjectionError: If the transformation fails
        """
        if not coordinates:
            return []

        try:
            xs = np.asarray([c[0] for c in coordinates], dtype=float)
            ys = np.asarray([c[1] for c in coordinates], dtype=float)
            xx, yy = _transformer(source, target).transform(xs, ys, errcheck=True)
        except (ProjError, CRSError) as e:
            raise ProjectionError(
                f"Transformation failed: {e}",
                source=source.name,
                target=target.name,
            )

        xx = np.atleast_1d(xx)
        yy = np.atleast_1d(yy)
        if not (np.all(np.isfinite(xx)) and np.all(np.isfinite(yy))):
            raise ProjectionError(
                "Transformation produced non-finite coordinates",
                source=source.name,
                target=target.name,
            )

        logger.debug(f"Transformed {len(coordinates)} coordinates {source.name} -> {target.name}")
        return list(zip(xx.tolist(), yy.tolist()))
