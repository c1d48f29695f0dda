"""IP geolocation backed by a MaxMind GeoLite2-City database."""

import logging
from pathlib import Path
from typing import Protocol

import geoip2.database
import geoip2.errors

logger = logging.getLogger(__name__)


class GeoLocator(Protocol):
    def lookup_city(self, ip: str) -> str | None:
        """Return the English city name for an IP, or None if unknown."""
        ...


class GeoIPLocator:
    """Looks up cities in a local .mmdb file.

    A missing database is not an error: every lookup returns None and the
    resolver falls back to its default city.
    """

    def __init__(self, database_path: str | Path):
        self.database_path = Path(database_path)
        self._reader: geoip2.database.Reader | None = None
        if self.database_path.is_file():
            self._reader = geoip2.database.Reader(str(self.database_path))
        else:
            logger.warning(
                "GeoIP database %s not found, IP lookups will use the default city",
                self.database_path,
            )

    @property
    def available(self) -> bool:
        return self._reader is not None

    def lookup_city(self, ip: str) -> str | None:
        if self._reader is None or not ip:
            return None
        try:
            response = self._reader.city(ip)
        except geoip2.errors.AddressNotFoundError:
            # Loopback and private ranges land here
            return None
        except ValueError:
            logger.debug("Not a valid IP address: %r", ip)
            return None
        return response.city.name or None

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None
