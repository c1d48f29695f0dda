"""City resolver: client IP -> CWA location name."""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from weatherproxy.config.defaults import DEFAULT_CITY, DEFAULT_CITY_TRANSLATIONS
from weatherproxy.geo.locator import GeoLocator

logger = logging.getLogger(__name__)


class CityResolver:
    def __init__(
        self,
        locator: GeoLocator,
        translations: Mapping[str, str] = DEFAULT_CITY_TRANSLATIONS,
        default_city: str = DEFAULT_CITY,
    ):
        if not default_city:
            raise ValueError("default_city must be non-empty")
        self.locator = locator
        self.translations = MappingProxyType(
            {k.lower(): v for k, v in translations.items()}
        )
        self.default_city = default_city

    def resolve(self, ip: str) -> str:
        """Best-guess city for an IP. Never raises; unknowns map to the default."""
        try:
            english = self.locator.lookup_city(ip)
        except Exception:
            logger.exception("Geolocation lookup failed for %r", ip)
            english = None
        if not english:
            logger.debug("No geolocation for %r, using %s", ip, self.default_city)
            return self.default_city

        city = self.translations.get(english.lower())
        if city is None:
            logger.info(
                "No translation for %r (ip=%s), using %s",
                english, ip, self.default_city,
            )
            return self.default_city
        return city


def client_ip(forwarded_for: str | None, peer: str | None) -> str:
    """Pick the caller's IP: left-most X-Forwarded-For entry, else the peer."""
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    return peer or ""
