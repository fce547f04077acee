#!/usr/bin/env python3
"""
Cocktails - a terminal browser for TheCocktailDB
Browse drink categories, read recipes and keep a local list of favorite cocktails.
"""

import argparse
import json
import logging
import os
import sys
from typing import Dict, List, Optional

from colorama import init, Fore, Style
from dotenv import load_dotenv

from cocktail_browser.catalog_client import CocktailDBClient, DEFAULT_BASE_URL, NetworkError
from cocktail_browser.controllers import (
    CategoryController, DetailController, FavoritesController, HomeController,
    Notice, ScreenController,
)
from cocktail_browser.models import Drink
from cocktail_browser.repositories import (
    FavoritesRepository, JsonFileStorage, KeyValueStorage, StorageCorrupt, StorageError,
)
from cocktail_browser.services import AddOutcome, FavoritesService, RemoveOutcome

# Initialize colorama for cross-platform colored terminal output
init(autoreset=True)

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the root cocktails logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to WARNING so normal use is quiet.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, str(level).upper(), logging.WARNING)
    logger = logging.getLogger('cocktails')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


logger = setup_logging()

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_CONFIG: Dict = {
    'api_base_url': DEFAULT_BASE_URL,
    'api_timeout_seconds': 10,
    'storage_path': '.cocktails_storage.json',
    'log_level': 'WARNING',
}

# Environment variable -> config key; environment wins over the config file
ENV_OVERRIDES = {
    'COCKTAILDB_BASE_URL': 'api_base_url',
    'COCKTAILS_API_TIMEOUT': 'api_timeout_seconds',
    'COCKTAILS_STORAGE_PATH': 'storage_path',
    'COCKTAILS_LOG_LEVEL': 'log_level',
}


def load_config(config_path: str = 'config.json') -> Dict:
    """Load configuration from an optional JSON file with environment variable support.

    A missing file is fine; defaults apply.  Environment variables take
    precedence over config file values:
    - COCKTAILDB_BASE_URL overrides api_base_url
    - COCKTAILS_API_TIMEOUT overrides api_timeout_seconds
    - COCKTAILS_STORAGE_PATH overrides storage_path
    - COCKTAILS_LOG_LEVEL overrides log_level
    """
    config = dict(DEFAULT_CONFIG)

    if os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            print(f"{Fore.RED}Error parsing config file: {e}")
            sys.exit(1)
        if not isinstance(loaded, dict):
            print(f"{Fore.RED}Error: Config file '{config_path}' must hold a JSON object")
            sys.exit(1)
        config.update(loaded)

    for env_name, key in ENV_OVERRIDES.items():
        if os.getenv(env_name):
            config[key] = os.getenv(env_name)

    try:
        config['api_timeout_seconds'] = int(config['api_timeout_seconds'])
    except (TypeError, ValueError):
        logger.warning("Invalid api_timeout_seconds %r, using %s",
                       config['api_timeout_seconds'], DEFAULT_CONFIG['api_timeout_seconds'])
        config['api_timeout_seconds'] = DEFAULT_CONFIG['api_timeout_seconds']

    return config


class CocktailBrowser:
    """Wires the catalog client and favorites store to the four screens."""

    def __init__(self, config: Optional[Dict] = None,
                 client: Optional[CocktailDBClient] = None,
                 storage: Optional[KeyValueStorage] = None):
        self._log = logging.getLogger('cocktails.browser')
        self.config = dict(DEFAULT_CONFIG, **(config or {}))
        setup_logging(self.config.get('log_level', 'WARNING'))

        self.client = client or CocktailDBClient(
            base_url=self.config['api_base_url'],
            timeout=self.config['api_timeout_seconds'],
        )
        self.storage = storage or JsonFileStorage(self.config['storage_path'])
        self.favorites = FavoritesService(FavoritesRepository(self.storage))
        self._log.debug("Using storage %s", self.config['storage_path'])

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    def _show_notice(self, notice: Notice):
        color = Fore.RED if notice.is_error else Fore.GREEN
        print(f"{color}{Style.BRIGHT}{notice.title}: {Style.NORMAL}{notice.message}")

    def _handle_error(self, screen: ScreenController) -> bool:
        """Show the error view; return ``True`` if the user asked to retry."""
        print(f"\n{Fore.RED}{screen.state.message}")
        options = f"{Fore.YELLOW}r. {Fore.WHITE}Retry  {Fore.YELLOW}b. {Fore.WHITE}Back"
        if screen.state.can_reset:
            options += f"  {Fore.YELLOW}x. {Fore.WHITE}Reset favorites"
        print(options)
        choice = input(f"\n{Fore.GREEN}Enter your choice: {Fore.WHITE}").strip().lower()
        if choice == 'r':
            print(f"{Fore.CYAN}{screen.loading_message}")
            screen.retry()
            return True
        if choice == 'x' and screen.state.can_reset:
            confirm = input(f"{Fore.RED}Delete all saved favorites? (y/n): {Fore.WHITE}").strip().lower()
            if confirm == 'y':
                try:
                    self.favorites.reset()
                except StorageError as e:
                    self._log.error("Could not reset favorites: %s", e)
                    print(f"{Fore.RED}Could not reset favorites: {e}")
                    return True
                print(f"{Fore.GREEN}Favorites reset.")
                screen.retry()
                return True
        return False

    def display_drink(self, drink: Drink, is_favorite: bool = False):
        """Display the details of a drink"""
        print(f"\n{Fore.GREEN}{'='*60}")
        print(f"{Fore.CYAN}{Style.BRIGHT}🍸 {drink.name}")
        if is_favorite:
            print(f"{Fore.YELLOW}⭐ FAVORITE")
        print(f"{Fore.GREEN}{'='*60}")
        print(f"{Fore.YELLOW}Drink ID: {Fore.WHITE}{drink.id}")
        if drink.get('strCategory'):
            print(f"{Fore.YELLOW}Category: {Fore.WHITE}{drink.get('strCategory')}")
        if drink.get('strGlass'):
            print(f"{Fore.YELLOW}Glass: {Fore.WHITE}{drink.get('strGlass')}")
        if drink.thumbnail:
            print(f"{Fore.YELLOW}Image: {Fore.WHITE}{drink.thumbnail}")

        ingredients = list(drink.ingredients())
        if ingredients:
            print(f"\n{Fore.YELLOW}Ingredients:")
            for line in ingredients:
                print(f"{Fore.WHITE}  - {line}")
        if drink.instructions:
            print(f"\n{Fore.YELLOW}Instructions:")
            print(f"{Fore.WHITE}{drink.instructions}")
        print(f"{Fore.GREEN}{'='*60}\n")

    def _print_drink_list(self, drinks: List[Drink]):
        for i, drink in enumerate(drinks, start=1):
            print(f"{Fore.YELLOW}{i:>3}. {Fore.WHITE}{drink.name} {Fore.MAGENTA}[{drink.id}]")

    @staticmethod
    def _pick(choice: str, items: List):
        """Return the item numbered *choice* (1-based) or ``None``."""
        if not choice.isdigit():
            return None
        index = int(choice) - 1
        if 0 <= index < len(items):
            return items[index]
        return None

    # ------------------------------------------------------------------
    # Interactive screens
    # ------------------------------------------------------------------

    def interactive_mode(self):
        """Run in interactive mode, starting on the Home screen"""
        self.home_screen()
        print(f"\n{Fore.CYAN}Thanks for using Cocktails! Cheers! 🍹")

    def home_screen(self):
        """Category list; the root of the navigation stack"""
        screen = HomeController(self.client)
        print(f"{Fore.CYAN}{screen.loading_message}")
        screen.activate()
        try:
            while True:
                if screen.state.is_error:
                    if not self._handle_error(screen):
                        return
                    continue

                categories = screen.state.data
                print(f"\n{Fore.CYAN}{Style.BRIGHT}Cocktail Categories")
                print(f"{Fore.WHITE}{'='*40}")
                for i, name in enumerate(categories, start=1):
                    print(f"{Fore.YELLOW}{i:>3}. {Fore.WHITE}{name}")
                print(f"{Fore.YELLOW}  f. {Fore.WHITE}My favorites")
                print(f"{Fore.YELLOW}  q. {Fore.WHITE}Quit")
                print(f"{Fore.WHITE}{'='*40}")

                choice = input(f"\n{Fore.GREEN}Enter your choice: {Fore.WHITE}").strip().lower()
                if choice == 'q':
                    return
                if choice == 'f':
                    self.favorites_screen()
                    continue
                category = self._pick(choice, categories)
                if category is None:
                    print(f"{Fore.RED}Invalid choice. Please try again.")
                    continue
                self.category_screen(category)
        finally:
            screen.deactivate()

    def category_screen(self, category: str):
        """Drinks of one category"""
        screen = CategoryController(self.client, category)
        print(f"{Fore.CYAN}{screen.loading_message}")
        screen.activate()
        try:
            while True:
                if screen.state.is_error:
                    if not self._handle_error(screen):
                        return
                    continue

                drinks = screen.state.data
                print(f"\n{Fore.CYAN}{Style.BRIGHT}{category} ({len(drinks)})")
                print(f"{Fore.WHITE}{'='*40}")
                self._print_drink_list(drinks)
                print(f"{Fore.YELLOW}  b. {Fore.WHITE}Back")
                print(f"{Fore.WHITE}{'='*40}")

                choice = input(f"\n{Fore.GREEN}Pick a cocktail: {Fore.WHITE}").strip().lower()
                if choice == 'b':
                    return
                drink = self._pick(choice, drinks)
                if drink is None:
                    print(f"{Fore.RED}Invalid choice. Please try again.")
                    continue
                if self.detail_screen(drink.id) == 'favorites':
                    self.favorites_screen()
        finally:
            screen.deactivate()

    def detail_screen(self, drink_id: str) -> Optional[str]:
        """One drink with favorite actions.

        Returns ``'favorites'`` when the user asked to jump to the Favorites
        screen after adding the drink.
        """
        screen = DetailController(self.client, self.favorites, drink_id)
        print(f"{Fore.CYAN}{screen.loading_message}")
        screen.activate()
        try:
            while True:
                if screen.state.is_error:
                    if not self._handle_error(screen):
                        return None
                    continue

                drink = screen.drink
                if drink is None:
                    print(f"\n{Fore.YELLOW}No details found for cocktail {drink_id}.")
                    return None

                try:
                    is_favorite = screen.is_favorite()
                except (StorageCorrupt, StorageError):
                    print(f"{Fore.RED}Your saved favorites could not be read.")
                    is_favorite = False
                self.display_drink(drink, is_favorite)

                if is_favorite:
                    print(f"{Fore.YELLOW}d. {Fore.WHITE}Remove from favorites  {Fore.YELLOW}b. {Fore.WHITE}Back")
                else:
                    print(f"{Fore.YELLOW}a. {Fore.WHITE}Add to favorites  {Fore.YELLOW}b. {Fore.WHITE}Back")
                choice = input(f"\n{Fore.GREEN}Enter your choice: {Fore.WHITE}").strip().lower()

                if choice == 'b':
                    return None
                elif choice == 'a':
                    notice = screen.add_to_favorites()
                    self._show_notice(notice)
                    if notice.offer_favorites:
                        see = input(f"{Fore.YELLOW}See your favorites? (y/n): {Fore.WHITE}").strip().lower()
                        if see == 'y':
                            return 'favorites'
                elif choice == 'd':
                    self._show_notice(screen.remove_from_favorites())
                else:
                    print(f"{Fore.RED}Invalid choice.")
        finally:
            screen.deactivate()

    def favorites_screen(self):
        """Saved favorites; reloaded every time the screen comes back into view"""
        screen = FavoritesController(self.favorites)
        screen.on_focus()
        try:
            while True:
                if screen.state.is_error:
                    if not self._handle_error(screen):
                        return
                    continue

                if screen.is_empty:
                    print(f"\n{Fore.YELLOW}{screen.empty_message}")
                    return

                drinks = screen.state.data
                print(f"\n{Fore.CYAN}{Style.BRIGHT}⭐ Your Favorite Cocktails ({len(drinks)})")
                print(f"{Fore.GREEN}{'='*60}")
                self._print_drink_list(drinks)
                print(f"{Fore.YELLOW}d <n>. {Fore.WHITE}Remove a favorite   {Fore.YELLOW}b. {Fore.WHITE}Back")
                print(f"{Fore.GREEN}{'='*60}")

                choice = input(f"\n{Fore.GREEN}Enter your choice: {Fore.WHITE}").strip().lower()
                if choice == 'b':
                    return
                if choice.startswith('d'):
                    drink = self._pick(choice[1:].strip(), drinks)
                    if drink is None:
                        print(f"{Fore.RED}Invalid choice.")
                        continue
                    confirm = input(
                        f"{Fore.RED}Remove {drink.name} from your favorites? (y/n): {Fore.WHITE}"
                    ).strip().lower()
                    if confirm == 'y':
                        self._show_notice(screen.remove(drink.id))
                    continue
                drink = self._pick(choice, drinks)
                if drink is None:
                    print(f"{Fore.RED}Invalid choice.")
                    continue
                self.detail_screen(drink.id)
                screen.on_focus()
        finally:
            screen.deactivate()

    # ------------------------------------------------------------------
    # One-shot commands (return a process exit status)
    # ------------------------------------------------------------------

    def print_categories(self) -> int:
        try:
            categories = self.client.list_categories()
        except NetworkError as e:
            print(f"{Fore.RED}Could not fetch categories: {e}")
            return 1
        for name in categories:
            print(name)
        return 0

    def print_category(self, category: str) -> int:
        try:
            drinks = self.client.list_drinks_by_category(category)
        except NetworkError as e:
            print(f"{Fore.RED}Could not fetch cocktails: {e}")
            return 1
        if not drinks:
            print(f"{Fore.YELLOW}No cocktails found in category '{category}'.")
        self._print_drink_list(drinks)
        return 0

    def print_drink(self, drink_id: str) -> int:
        try:
            drink = self.client.get_drink(drink_id)
            if drink is None:
                print(f"{Fore.YELLOW}No cocktail found with ID {drink_id}.")
                return 0
            self.display_drink(drink, self.favorites.contains(drink.id))
        except NetworkError as e:
            print(f"{Fore.RED}Could not fetch cocktail details: {e}")
            return 1
        except (StorageCorrupt, StorageError) as e:
            print(f"{Fore.RED}Your saved favorites could not be read: {e}")
            return 1
        return 0

    def print_favorites(self) -> int:
        try:
            drinks = self.favorites.load_all()
        except (StorageCorrupt, StorageError) as e:
            print(f"{Fore.RED}Your saved favorites could not be read: {e}")
            return 1
        if not drinks:
            print(f"{Fore.YELLOW}{FavoritesController.empty_message}")
            return 0
        print(f"\n{Fore.CYAN}{Style.BRIGHT}⭐ Your Favorite Cocktails ({len(drinks)})")
        self._print_drink_list(drinks)
        return 0

    def add_favorite(self, drink_id: str) -> int:
        """Fetch the drink by id and save a snapshot of it."""
        try:
            drink = self.client.get_drink(drink_id)
            if drink is None:
                print(f"{Fore.YELLOW}No cocktail found with ID {drink_id}.")
                return 1
            outcome = self.favorites.add(drink)
        except NetworkError as e:
            print(f"{Fore.RED}Could not fetch cocktail details: {e}")
            return 1
        except (StorageCorrupt, StorageError) as e:
            print(f"{Fore.RED}Could not add the cocktail to your favorites: {e}")
            return 1
        if outcome is AddOutcome.ALREADY_EXISTS:
            print(f"{Fore.YELLOW}{drink.name} is already in your favorites.")
        else:
            print(f"{Fore.GREEN}Added {drink.name} to your favorites!")
        return 0

    def remove_favorite(self, drink_id: str) -> int:
        try:
            outcome = self.favorites.remove(drink_id)
        except (StorageCorrupt, StorageError) as e:
            print(f"{Fore.RED}Could not remove the cocktail from your favorites: {e}")
            return 1
        if outcome is RemoveOutcome.NOT_PRESENT:
            print(f"{Fore.YELLOW}Cocktail {drink_id} is not in your favorites.")
        else:
            print(f"{Fore.GREEN}Removed from favorites!")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Cocktails - browse TheCocktailDB and keep your favorite recipes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 cocktails.py                          # Run in interactive mode
  python3 cocktails.py --categories             # List categories and exit
  python3 cocktails.py --category "Cocktail"    # List cocktails in a category
  python3 cocktails.py --drink 11007            # Show one cocktail
  python3 cocktails.py --add 11007              # Save a cocktail to favorites
  python3 cocktails.py --favorites              # List favorites
        """
    )

    parser.add_argument(
        '--config', '-c',
        default='config.json',
        help='Path to config file (default: config.json)'
    )
    parser.add_argument(
        '--storage',
        metavar='FILE',
        help='Path to the favorites storage file (overrides config)'
    )
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        help='Log level: DEBUG, INFO, WARNING, ERROR (overrides config)'
    )
    commands = parser.add_mutually_exclusive_group()
    commands.add_argument(
        '--categories',
        action='store_true',
        help='List drink categories and exit'
    )
    commands.add_argument(
        '--category',
        metavar='NAME',
        help='List the cocktails in a category and exit'
    )
    commands.add_argument(
        '--drink',
        metavar='ID',
        help='Show one cocktail and exit'
    )
    commands.add_argument(
        '--favorites',
        action='store_true',
        help='List favorite cocktails and exit'
    )
    commands.add_argument(
        '--add',
        metavar='ID',
        help='Add a cocktail to favorites and exit'
    )
    commands.add_argument(
        '--remove',
        metavar='ID',
        help='Remove a cocktail from favorites and exit'
    )

    args = parser.parse_args(argv)

    load_dotenv()
    config = load_config(args.config)
    if args.storage:
        config['storage_path'] = args.storage
    if args.log_level:
        config['log_level'] = args.log_level

    browser = CocktailBrowser(config)

    if args.categories:
        return browser.print_categories()
    if args.category:
        return browser.print_category(args.category)
    if args.drink:
        return browser.print_drink(args.drink)
    if args.favorites:
        return browser.print_favorites()
    if args.add:
        return browser.add_favorite(args.add)
    if args.remove:
        return browser.remove_favorite(args.remove)

    print(f"{Fore.CYAN}{Style.BRIGHT}🍸 Cocktails{Style.RESET_ALL}")
    print(f"{Fore.WHITE}Recipes from TheCocktailDB\n")
    try:
        browser.interactive_mode()
    except KeyboardInterrupt:
        print(f"\n{Fore.CYAN}Goodbye!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
