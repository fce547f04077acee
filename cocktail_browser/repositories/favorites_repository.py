"""Repository for the persisted favourites collection ([drink, ...])."""
import json
import logging
from typing import Any, Dict, List

from .storage import KeyValueStorage

FAVORITES_KEY = 'favoriteCocktails'


class StorageCorrupt(Exception):
    """Raised when the stored favourites blob is not a list of drink records."""


class FavoritesRepository:
    """Reads and writes the whole favourites collection as one JSON blob.

    Schema (value under ``"favoriteCocktails"``)::

        [{"idDrink": "11007", "strDrink": "Margarita", ...}, ...]

    The array is the unit of read and write; there are no partial updates.
    """

    def __init__(self, storage: KeyValueStorage, key: str = FAVORITES_KEY) -> None:
        self._storage = storage
        self._key = key
        self._log = logging.getLogger(f'cocktails.repository.{type(self).__name__}')

    def read_all(self) -> List[Dict[str, Any]]:
        """Return the stored records, or ``[]`` when nothing was ever saved.

        Raises:
            StorageCorrupt: The blob is not JSON or not a list of objects
                that each carry an ``idDrink``.
        """
        blob = self._storage.get_item(self._key)
        if blob is None:
            return []
        try:
            records = json.loads(blob)
        except ValueError as exc:
            self._log.error("Favourites blob is not valid JSON: %s", exc)
            raise StorageCorrupt(f"Stored favourites are not valid JSON: {exc}") from exc
        if not isinstance(records, list) or not all(
            isinstance(r, dict) and r.get('idDrink') for r in records
        ):
            self._log.error("Favourites blob has an unexpected shape")
            raise StorageCorrupt("Stored favourites are not a list of drinks")
        return records

    def write_all(self, records: List[Dict[str, Any]]) -> None:
        """Overwrite the stored collection with *records*."""
        self._storage.set_item(self._key, json.dumps(records))
        self._log.debug("Saved %d favourite(s)", len(records))

    def clear(self) -> None:
        """Store an empty collection without reading the old one first.

        Unlike :meth:`write_all`, this also replaces a backing store whose
        content cannot be parsed at all.
        """
        self._storage.replace_item(self._key, json.dumps([]))
        self._log.debug("Cleared favourites")
