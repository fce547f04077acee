"""Business logic for the favourites collection."""
import enum
import logging
import threading
from typing import List

from ..models import Drink
from ..repositories.favorites_repository import FavoritesRepository


class AddOutcome(enum.Enum):
    ADDED = 'added'
    ALREADY_EXISTS = 'already_exists'


class RemoveOutcome(enum.Enum):
    REMOVED = 'removed'
    NOT_PRESENT = 'not_present'


class FavoritesService:
    """Manages the user's favourite drinks, delegating persistence to
    :class:`~cocktail_browser.repositories.favorites_repository.FavoritesRepository`.

    Every operation re-reads the stored collection, so a change made through
    another instance is picked up by the next call.  Mutations are
    read-modify-write cycles over the whole collection.  The lock is per
    instance: it serializes actions going through this service, but two
    instances writing the same storage at the same moment can still lose
    one of the updates.

    Favourites are full drink snapshots taken when added, not references:
    they stay viewable if the catalog later changes, and may go stale.
    """

    def __init__(self, repository: FavoritesRepository) -> None:
        self._repo = repository
        self._lock = threading.Lock()
        self._log = logging.getLogger('cocktails.favorites')

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load_all(self) -> List[Drink]:
        """Return the full favourites collection, in insertion order.

        Raises:
            StorageCorrupt: The stored collection cannot be parsed.
        """
        with self._lock:
            return [Drink.from_dict(r) for r in self._repo.read_all()]

    def add(self, drink: Drink) -> AddOutcome:
        """Append a snapshot of *drink* unless its id is already saved.

        Returns:
            ``AddOutcome.ADDED`` when stored; ``AddOutcome.ALREADY_EXISTS``
            (storage untouched) when the id was present.
        """
        if not drink.id:
            raise ValueError("Cannot favourite a drink without an id")
        with self._lock:
            records = self._repo.read_all()
            if any(str(r.get('idDrink')) == drink.id for r in records):
                self._log.info("Drink %s is already a favourite", drink.id)
                return AddOutcome.ALREADY_EXISTS
            records.append(drink.to_dict())
            self._repo.write_all(records)
            self._log.info("Added drink %s (%s) to favourites", drink.id, drink.name)
            return AddOutcome.ADDED

    def remove(self, drink_id: str) -> RemoveOutcome:
        """Remove the favourite whose id is *drink_id*.

        Returns:
            ``RemoveOutcome.REMOVED`` if a record was dropped;
            ``RemoveOutcome.NOT_PRESENT`` (storage untouched) otherwise.
        """
        drink_id = str(drink_id)
        with self._lock:
            records = self._repo.read_all()
            kept = [r for r in records if str(r.get('idDrink')) != drink_id]
            if len(kept) == len(records):
                return RemoveOutcome.NOT_PRESENT
            self._repo.write_all(kept)
            self._log.info("Removed drink %s from favourites", drink_id)
            return RemoveOutcome.REMOVED

    def contains(self, drink_id: str) -> bool:
        """Return ``True`` if *drink_id* is in the favourites collection."""
        drink_id = str(drink_id)
        with self._lock:
            return any(str(r.get('idDrink')) == drink_id for r in self._repo.read_all())

    def reset(self) -> None:
        """Overwrite the collection with an empty one.

        This is the recovery path for a corrupt stored collection, so it never
        reads the old value.  A storage file too damaged to parse is replaced.

        Raises:
            StorageError: The empty collection could not be written.
        """
        with self._lock:
            self._repo.clear()
            self._log.warning("Favourites collection reset")
