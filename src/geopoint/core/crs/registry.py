"""
Projection registry.

A registry maps short nicknames to reference systems.  Geometries only
carry the nickname; everything that needs the real projection parameters
looks the nickname up here.

Two behaviours are part of the contract, not accidents:

* registering a nickname twice returns the first system and ignores the
  new parameters (first registration wins);
* the first system ever registered becomes the default until
  ``set_default`` says otherwise.
"""

import logging
import sys
import threading
from typing import Any, Dict, Iterator, List, Optional, Sequence, TextIO, Tuple, Union

from geopoint.core.config import settings
from geopoint.core.crs.engine import GeodeticEngine
from geopoint.core.errors import InvalidDefinition, InvalidUTMZone, UnknownProjection
from geopoint.models.crs import ReferenceSystem

logger = logging.getLogger(__name__)

ProjectionLike = Union[str, ReferenceSystem]


class ProjectionRegistry:
    """
    Registry of reference systems keyed by nickname.

    Lookups read an immutable snapshot and take no lock; ``register``,
    ``set_default`` and ``synthesize_utm`` replace the snapshot under a
    single lock.
    """

    def __init__(self, engine: Optional[GeodeticEngine] = None):
        """
        Initialize an empty registry.

        Args:
            engine: Geodetic engine used to parse definitions
        """
        self.engine = engine or GeodeticEngine()
        self._systems: Dict[str, ReferenceSystem] = {}
        self._default: Optional[str] = None
        self._lock = threading.RLock()

    def register(
        self,
        nickname: str,
        definition: Any,
        srid: Optional[int] = None,
        display_name: Optional[str] = None,
    ) -> ReferenceSystem:
        """
        Register a reference system under a nickname.

        When the nickname is already known the existing system is returned
        and the other arguments are ignored.

        Args:
            nickname: Unique label for the projection
            definition: PROJ string, EPSG code, WKT or mapping
            srid: Optional positive Spatial Reference System ID
            display_name: Optional human readable name

        Returns:
            The registered ReferenceSystem

        Raises:
            InvalidDefinition: If the nickname is empty, the SRID is not a
                positive integer or the engine rejects the definition
        """
        if not nickname:
            raise InvalidDefinition("nick required")

        existing = self._systems.get(nickname)
        if existing is not None:
            return self._keep_first(existing, definition)

        if srid is not None and (isinstance(srid, bool) or not isinstance(srid, int) or srid <= 0):
            raise InvalidDefinition(
                f"srid must be a positive integer, got {srid!r}", nickname=nickname
            )

        with self._lock:
            existing = self._systems.get(nickname)
            if existing is not None:
                return self._keep_first(existing, definition)

            crs = self.engine.parse(definition)
            system = ReferenceSystem(
                nickname=nickname,
                definition=definition,
                srid=srid,
                display_name=display_name,
                crs=crs,
            )

            systems = dict(self._systems)
            systems[nickname] = system
            self._systems = systems

            if self._default is None:
                self._default = nickname

        logger.info(f"Registered projection {nickname}: {system.name}")
        return system

    def _keep_first(self, existing: ReferenceSystem, definition: Any) -> ReferenceSystem:
        if definition != existing.definition:
            logger.warning(
                f"Projection {existing.nickname} already registered, "
                f"ignoring new definition {definition!r}"
            )
        return existing

    def resolve(self, which: Optional[ProjectionLike]) -> Optional[ReferenceSystem]:
        """
        Find a reference system without raising.

        Args:
            which: Nickname or ReferenceSystem

        Returns:
            The system itself when a ReferenceSystem is passed, the
            registered system for a nickname, or None when unknown
        """
        if isinstance(which, ReferenceSystem):
            return which
        if which is None:
            return None
        return self._systems.get(which)

    def get(self, which: Optional[ProjectionLike]) -> ReferenceSystem:
        """
        Find a reference system.

        Raises:
            UnknownProjection: If the nickname is not registered
        """
        system = self.resolve(which)
        if system is None:
            raise UnknownProjection(which)
        return system

    def __contains__(self, nickname: object) -> bool:
        return nickname in self._systems

    def __len__(self) -> int:
        return len(self._systems)

    def __iter__(self) -> Iterator[ReferenceSystem]:
        systems = self._systems
        return iter([systems[nick] for nick in sorted(systems)])

    def default(self) -> Optional[ReferenceSystem]:
        """The default reference system, None before anything is registered."""
        if self._default is None:
            return None
        return self._systems.get(self._default)

    def set_default(self, which: ProjectionLike) -> ReferenceSystem:
        """
        Change the default reference system.

        Raises:
            UnknownProjection: If the nickname is not registered
        """
        nickname = which.nickname if isinstance(which, ReferenceSystem) else which
        with self._lock:
            system = self._systems.get(nickname)
            if system is None:
                raise UnknownProjection(nickname)
            self._default = nickname

        logger.debug(f"Default projection set to {nickname}")
        return system

    def list_projections(self) -> List[str]:
        """Returns a sorted list of projection nicknames."""
        return sorted(self._systems)

    def dump(self, stream: Optional[TextIO] = None) -> None:
        """
        Print details about the defined projections, for debugging.

        Args:
            stream: Where to write, defaults to stdout
        """
        stream = stream or sys.stdout
        default = self.default()
        default_nick = default.nickname if default else ""

        for system in self:
            marker = " (default)" if system.nickname == default_nick else ""
            stream.write(f"{system.nickname}: {system.name}{marker}\n")
            normalized = system.crs.to_string() if system.crs is not None else ""
            if normalized and normalized != system.name:
                stream.write(f"    {normalized}\n")

    def is_geographic(self, which: ProjectionLike) -> bool:
        return self.get(which).is_geographic

    def geographic(self, preferred: Optional[str] = None) -> ReferenceSystem:
        """
        Find a geographic system to express latitudes and longitudes in.

        The ``preferred`` nickname is tried first, then the default system,
        then the registered geographic systems in nickname order.

        Raises:
            UnknownProjection: If no geographic system is registered
        """
        candidates = [self._systems.get(preferred) if preferred else None, self.default()]
        candidates.extend(self)
        for system in candidates:
            if system is not None and system.is_geographic:
                return system
        raise UnknownProjection(preferred or settings.default_nickname)

    def datum(self, which: ProjectionLike) -> Optional[str]:
        """The datum label of a registered system, like ``WGS84``."""
        system = self.get(which)
        return self.engine.datum(system.crs, system.definition)

    def transform(
        self,
        source: ProjectionLike,
        target: ProjectionLike,
        points: Sequence[Tuple[float, float]],
    ) -> List[Tuple[float, float]]:
        """
        Transform (x, y) pairs from one registered system to another.

        Raises:
            UnknownProjection: If either nickname is not registered
            ProjectionError: If the engine fails
        """
        src = self.get(source)
        dst = self.get(target)
        if src.nickname == dst.nickname:
            return list(points)
        return self.engine.transform(src.crs, dst.crs, points)

    def synthesize_utm(self, base: Optional[ProjectionLike], zone: int) -> ReferenceSystem:
        """
        Return the UTM projection for a zone, registering it on first use.

        The nickname is ``utm-<datum>-<zone>`` with the datum lower cased.

        Args:
            base: A datum name (like ``WGS84``), a nickname or
                ReferenceSystem to take the datum from, or None for the
                datum of the default projection
            zone: UTM zone number, 1 to 60

        Raises:
            InvalidUTMZone: If the zone is outside 1..60
        """
        if isinstance(zone, bool) or not isinstance(zone, int) or not 1 <= zone <= 60:
            raise InvalidUTMZone(str(zone), zone=zone)

        datum = self._datum_for(base) or settings.fallback_datum
        nickname = f"utm-{datum.lower()}-{zone}"

        with self._lock:
            return self.register(
                nickname,
                f"+proj=utm +zone={zone} +datum={datum.upper()} +units=m +no_defs",
            )

    def _datum_for(self, base: Optional[ProjectionLike]) -> Optional[str]:
        if base is None:
            base = self.default()
            if base is None:
                return None

        if isinstance(base, ReferenceSystem):
            return self.engine.datum(base.crs, base.definition)

        system = self._systems.get(base)
        if system is not None:
            return self.engine.datum(system.crs, system.definition)

        # Not a nickname: a datum name as known by PROJ
        return base


_default_registry: Optional[ProjectionRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> ProjectionRegistry:
    """
    Process-wide registry used when no registry is passed explicitly.

    Created on first use with the configured default projection
    (``wgs84`` unless overridden) already registered.
    """
    global _default_registry
    registry = _default_registry
    if registry is not None:
        return registry

    with _default_registry_lock:
        if _default_registry is None:
            registry = ProjectionRegistry()
            registry.register(
                settings.default_nickname,
                settings.default_definition,
                srid=settings.default_srid,
            )
            _default_registry = registry
        return _default_registry


def set_default_registry(registry: Optional[ProjectionRegistry]) -> None:
    """
    Replace the process-wide registry; None recreates it on next use.
    """
    global _default_registry
    with _default_registry_lock:
        _default_registry = registry
