"""Services package: expose all concrete services from one import."""
from .favorites_service import FavoritesService, AddOutcome, RemoveOutcome

__all__ = [
    'FavoritesService',
    'AddOutcome',
    'RemoveOutcome',
]
