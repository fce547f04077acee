"""The four screens of the browser: Home, Category, Detail and Favorites."""
from typing import List, Optional

from ..catalog_client import CocktailDBClient
from ..models import Drink
from ..repositories.favorites_repository import StorageCorrupt
from ..repositories.storage import StorageError
from ..services.favorites_service import AddOutcome, FavoritesService, RemoveOutcome
from .base import Notice, ScreenController, ViewState


class HomeController(ScreenController):
    """Lists the drink categories."""

    loading_message = 'Loading categories...'
    error_message = 'Could not fetch categories'

    def __init__(self, client: CocktailDBClient) -> None:
        super().__init__()
        self._client = client

    def _fetch(self) -> List[str]:
        return self._client.list_categories()


class CategoryController(ScreenController):
    """Lists the drinks of one category."""

    loading_message = 'Loading cocktails...'
    error_message = 'Could not fetch cocktails'

    def __init__(self, client: CocktailDBClient, category: str) -> None:
        super().__init__()
        self._client = client
        self.category = category

    def _fetch(self) -> List[Drink]:
        return self._client.list_drinks_by_category(self.category)


class DetailController(ScreenController):
    """Shows one drink and lets the user save it as a favourite.

    A lookup that finds nothing loads ``None``, rendered as an empty detail
    view rather than an error.
    """

    loading_message = 'Loading details...'
    error_message = 'Could not fetch cocktail details'

    def __init__(self, client: CocktailDBClient, favorites: FavoritesService,
                 drink_id: str) -> None:
        super().__init__()
        self._client = client
        self._favorites = favorites
        self.drink_id = str(drink_id)

    def _fetch(self) -> Optional[Drink]:
        return self._client.get_drink(self.drink_id)

    @property
    def drink(self) -> Optional[Drink]:
        return self.state.data if self.state.is_loaded else None

    def is_favorite(self) -> bool:
        return self._favorites.contains(self.drink_id)

    def add_to_favorites(self) -> Notice:
        drink = self.drink
        if drink is None:
            return Notice('Nothing to add', 'No cocktail is loaded.', kind='error')
        try:
            outcome = self._favorites.add(drink)
        except (StorageCorrupt, StorageError) as exc:
            self._log.error("Could not add %s to favourites: %s", drink.id, exc)
            return Notice('Error', 'Could not add the cocktail to your favorites.',
                          kind='error')
        if outcome is AddOutcome.ALREADY_EXISTS:
            return Notice('Already in favorites',
                          'This cocktail is already in your favorites list.')
        return Notice('Favorite added', 'The cocktail was added to your favorites.',
                      offer_favorites=True)

    def remove_from_favorites(self) -> Notice:
        return _remove_notice(self._favorites, self.drink_id, self._log)


class FavoritesController(ScreenController):
    """Lists the saved favourites.

    Unlike the other screens it reloads every time it regains focus, so
    changes made from a Detail screen show up on return.
    """

    loading_message = 'Loading favorites...'
    error_message = 'Could not load favorites'
    empty_message = 'You have no favorite cocktails yet'

    def __init__(self, favorites: FavoritesService) -> None:
        super().__init__()
        self._favorites = favorites

    def _fetch(self) -> List[Drink]:
        return self._favorites.load_all()

    def on_focus(self):
        """Reload when the screen becomes visible again."""
        if not self.is_active:
            return self.activate()
        return self.refresh()

    @property
    def is_empty(self) -> bool:
        return self.state.is_loaded and not self.state.data

    def remove(self, drink_id: str) -> Notice:
        notice = _remove_notice(self._favorites, drink_id, self._log)
        self.refresh()
        return notice

    def reset(self):
        """Drop a corrupt collection and start over with an empty one.

        If the empty collection cannot be written the screen stays in its
        error state and still offers the reset.
        """
        try:
            self._favorites.reset()
        except StorageError as exc:
            self._log.error("Could not reset favourites: %s", exc)
            self._apply(self._begin(), ViewState.error(
                'Could not reset your favorites.', can_reset=True))
            return self.state
        return self.refresh()


def _remove_notice(favorites: FavoritesService, drink_id: str, log) -> Notice:
    try:
        outcome = favorites.remove(drink_id)
    except (StorageCorrupt, StorageError) as exc:
        log.error("Could not remove %s from favourites: %s", drink_id, exc)
        return Notice('Error', 'Could not remove the cocktail from your favorites.',
                      kind='error')
    if outcome is RemoveOutcome.NOT_PRESENT:
        return Notice('Not a favorite', 'This cocktail is not in your favorites.')
    return Notice('Cocktail removed', 'The cocktail was removed from your favorites.')
