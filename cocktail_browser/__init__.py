"""
Cocktail browser application package.

Layered architecture:

  catalog_client.py  HTTP client for TheCocktailDB.
  models.py          the ``Drink`` record.
  repositories/      pure I/O: key-value blob storage and the persisted
                     favourites collection.
  services/          business logic: the favourites store and its
                     add/remove rules.
  controllers/       one controller per screen (Home, Category, Detail,
                     Favorites) holding a view state.

``CocktailBrowser`` (in ``cocktails.py``) is the integration point: it builds
the catalog client, the storage, the favourites store and hands them to the
controllers it creates while the user navigates.
"""
