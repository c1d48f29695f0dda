"""CWA open-data datastore client."""

import logging

import httpx

from weatherproxy.config.schema import CWA_API_BASE_URL, CWA_DATASET_ID

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "weatherproxy/0.1.0"


class CwaClient:
    def __init__(
        self,
        api_key: str = "",
        base_url: str = CWA_API_BASE_URL,
        dataset_id: str = CWA_DATASET_ID,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.dataset_id = dataset_id
        self.timeout = timeout
        self.user_agent = user_agent

    @property
    def forecast_url(self) -> str:
        return f"{self.base_url}/v1/rest/datastore/{self.dataset_id}"

    def get_forecast(self, location_name: str) -> dict:
        """Fetch the 36-hour forecast document for one location.

        Single attempt, no retry. Raises httpx.HTTPStatusError on an error
        response and httpx.RequestError on transport failures.
        """
        params = {"Authorization": self.api_key, "locationName": location_name}
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        logger.debug("GET %s locationName=%s", self.forecast_url, location_name)
        resp = httpx.get(
            self.forecast_url, params=params, headers=headers, timeout=self.timeout
        )
        resp.raise_for_status()
        return resp.json()
