"""View state and the controller base class shared by every screen."""
import enum
import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future
from typing import Any

from ..catalog_client import NetworkError
from ..repositories.favorites_repository import StorageCorrupt
from ..repositories.storage import StorageError, StorageUnreadable


class Status(enum.Enum):
    LOADING = 'loading'
    ERROR = 'error'
    LOADED = 'loaded'


class ViewState:
    """What a screen currently shows: a spinner, an error, or its data."""

    def __init__(self, status: Status, data: Any = None, message: str = '',
                 can_reset: bool = False) -> None:
        self.status = status
        self.data = data
        self.message = message
        self.can_reset = can_reset

    @classmethod
    def loading(cls, message: str = '') -> 'ViewState':
        return cls(Status.LOADING, message=message)

    @classmethod
    def error(cls, message: str, can_reset: bool = False) -> 'ViewState':
        return cls(Status.ERROR, message=message, can_reset=can_reset)

    @classmethod
    def loaded(cls, data: Any) -> 'ViewState':
        return cls(Status.LOADED, data=data)

    @property
    def is_loading(self) -> bool:
        return self.status is Status.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is Status.ERROR

    @property
    def is_loaded(self) -> bool:
        return self.status is Status.LOADED

    def __repr__(self) -> str:
        return f"ViewState({self.status.value}, message={self.message!r})"


class Notice:
    """A dismissible message shown after a user action."""

    def __init__(self, title: str, message: str, kind: str = 'info',
                 offer_favorites: bool = False) -> None:
        self.title = title
        self.message = message
        self.kind = kind
        # "See favorites" shortcut offered after a successful add
        self.offer_favorites = offer_favorites

    @property
    def is_error(self) -> bool:
        return self.kind == 'error'

    def __repr__(self) -> str:
        return f"Notice({self.kind}, {self.title!r})"


class ScreenController(ABC):
    """Runs one read operation and keeps the resulting :class:`ViewState`.

    Sub-classes implement :meth:`_fetch`.  A result is applied only if the
    controller is still active and no newer load has started since; anything
    else is discarded, so a screen left while its fetch was in flight is never
    updated.
    """

    loading_message = 'Loading...'
    error_message = 'Something went wrong'

    def __init__(self) -> None:
        self.state = ViewState.loading(self.loading_message)
        self._active = False
        self._generation = 0
        self._lock = threading.Lock()
        self._log = logging.getLogger(f'cocktails.screen.{type(self).__name__}')

    @property
    def is_active(self) -> bool:
        return self._active

    @abstractmethod
    def _fetch(self) -> Any:
        """Perform the screen's read and return its data."""
        pass

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def activate(self) -> ViewState:
        """Mount the screen and load its data."""
        self._active = True
        return self.refresh()

    def deactivate(self) -> None:
        """Unmount the screen; pending results will be dropped."""
        with self._lock:
            self._active = False
            self._generation += 1

    def retry(self) -> ViewState:
        """Re-issue the screen's read after an error."""
        return self.refresh()

    def refresh(self) -> ViewState:
        """Load synchronously and return the resulting state."""
        self._run(self._begin())
        return self.state

    def load_in_background(self, executor: Executor) -> Future:
        """Submit the load to *executor*; the future resolves to ``True`` if applied."""
        return executor.submit(self._run, self._begin())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            self.state = ViewState.loading(self.loading_message)
            return self._generation

    def _run(self, token: int) -> bool:
        try:
            data = self._fetch()
        except NetworkError as exc:
            self._log.warning("%s: %s", self.error_message, exc)
            return self._apply(token, ViewState.error(self.error_message))
        except (StorageCorrupt, StorageUnreadable) as exc:
            self._log.error("Stored data is corrupt: %s", exc)
            return self._apply(token, ViewState.error(
                'Your saved favorites could not be read.', can_reset=True))
        except StorageError as exc:
            self._log.error("Storage failure: %s", exc)
            return self._apply(token, ViewState.error(self.error_message))
        return self._apply(token, ViewState.loaded(data))

    def _apply(self, token: int, state: ViewState) -> bool:
        with self._lock:
            if not self._active or token != self._generation:
                self._log.debug("Discarding stale result %r", state)
                return False
            self.state = state
            return True
