"""
cocktail_browser/catalog_client.py
==================================
Thin wrapper around TheCocktailDB public JSON API, used by the screen
controllers to browse categories, drinks per category and drink details.

Endpoints
---------
All three are read-only ``GET`` calls returning ``{"drinks": [...] | null}``::

    {base}/list.php?c=list         # categories
    {base}/filter.php?c=<category> # drinks in a category (id, name, thumbnail)
    {base}/lookup.php?i=<id>       # one drink with full details

No API key is needed for the public ``v1/1`` tier.

Usage
-----
::

    from cocktail_browser.catalog_client import CocktailDBClient

    client = CocktailDBClient()
    client.list_categories()
    # ["Ordinary Drink", "Cocktail", "Shake", ...]

    drink = client.get_drink("11007")
    drink.name if drink else None
    # "Margarita"
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .models import Drink

logger = logging.getLogger('cocktails.catalog')

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_BASE_URL = "https://www.thecocktaildb.com/api/json/v1/1"
_DEFAULT_TIMEOUT = 10  # seconds


class NetworkError(Exception):
    """Raised when the catalog API cannot be reached or returns an unusable body."""


class CocktailDBClient:
    """Stateless client for the three catalog endpoints.

    Every call hits the network; nothing is cached, so each screen visit sees
    fresh data.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = _DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Args:
            base_url: API root, without a trailing slash.
            timeout:  HTTP request timeout in seconds.
            session:  Optional pre-configured ``requests.Session``.
        """
        self._base_url = base_url.rstrip('/')
        self._timeout  = timeout
        self._session  = session or requests.Session()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_categories(self) -> List[str]:
        """Return every category name, in API order.

        Returns an empty list when the API reports no ``drinks`` field.

        Raises:
            NetworkError: Transport failure, HTTP error or non-JSON body.
        """
        rows = self._drinks('/list.php', {'c': 'list'})
        return [row['strCategory'] for row in rows if row.get('strCategory')]

    def list_drinks_by_category(self, category: str) -> List[Drink]:
        """Return the drinks filed under *category*.

        The filter endpoint only carries ``idDrink``, ``strDrink`` and
        ``strDrinkThumb``; use :meth:`get_drink` for the full record.

        Raises:
            NetworkError: Transport failure, HTTP error or non-JSON body.
        """
        return [Drink(row) for row in self._drinks('/filter.php', {'c': category})]

    def get_drink(self, drink_id: str) -> Optional[Drink]:
        """Look up one drink by id.

        Returns:
            The drink, or ``None`` when the lookup payload holds no drink.

        Raises:
            NetworkError: Transport failure, HTTP error or non-JSON body.
        """
        rows = self._drinks('/lookup.php', {'i': drink_id})
        if not rows:
            logger.info("Drink %s not found", drink_id)
            return None
        return Drink(rows[0])

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _drinks(self, path: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """GET *path* and return the ``drinks`` array (``[]`` when absent or null)."""
        data = self._get(path, params)
        rows = data.get('drinks') if isinstance(data, dict) else None
        if not isinstance(rows, list):
            return []
        return [row for row in rows if isinstance(row, dict)]

    def _get(self, path: str, params: Dict[str, str]) -> Any:
        """Perform a GET request against the catalog and return parsed JSON."""
        url = self._base_url + path
        logger.debug("GET %s %s", url, params)
        try:
            resp = self._session.get(url, params=params, timeout=self._timeout)
            resp.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else 'unknown'
            logger.warning("Catalog API error %s for %s", status, path)
            raise NetworkError(
                f"Catalog API error {status} for {path}"
            ) from exc
        except requests.RequestException as exc:
            logger.warning("Catalog request to %s failed: %s", path, exc)
            raise NetworkError(f"Network error calling catalog API: {exc}") from exc

        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("Catalog response for %s is not JSON: %s", path, exc)
            raise NetworkError(f"Catalog API returned a non-JSON body for {path}") from exc
