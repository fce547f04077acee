"""Controllers package: one controller per screen."""
from .base import Notice, ScreenController, Status, ViewState
from .screens import (
    CategoryController, DetailController, FavoritesController, HomeController,
)

__all__ = [
    'Notice',
    'ScreenController',
    'Status',
    'ViewState',
    'HomeController',
    'CategoryController',
    'DetailController',
    'FavoritesController',
]
