"""Domain records shared by the catalog client and the favourites store."""
from typing import Any, Dict, Iterator


class Drink:
    """A cocktail record from the remote catalog.

    Wraps the raw API dict so the well-known fields have names, while every
    other field (ingredients, glass, tags, ...) is passed through unchanged by
    :meth:`to_dict`.  Drinks are never mutated locally.
    """

    __slots__ = ('_data',)

    def __init__(self, data: Dict[str, Any]) -> None:
        self._data = dict(data)

    @property
    def id(self) -> str:
        return str(self._data.get('idDrink') or '')

    @property
    def name(self) -> str:
        return self._data.get('strDrink') or ''

    @property
    def thumbnail(self) -> str:
        return self._data.get('strDrinkThumb') or ''

    @property
    def instructions(self) -> str:
        return self._data.get('strInstructions') or ''

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def ingredients(self) -> Iterator[str]:
        """Yield ``"<measure> <ingredient>"`` lines for the filled strIngredientN slots."""
        for n in range(1, 16):
            ingredient = (self._data.get(f'strIngredient{n}') or '').strip()
            if not ingredient:
                continue
            measure = (self._data.get(f'strMeasure{n}') or '').strip()
            yield f"{measure} {ingredient}".strip()

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Drink':
        return cls(data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Drink):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Drink(id={self.id!r}, name={self.name!r})"

