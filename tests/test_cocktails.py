#!/usr/bin/env python3
"""
Tests for cocktails.py: configuration, logging, one-shot commands and the
interactive screens (input() is patched, the catalog client is mocked).

Run with:
    python -m pytest tests/test_cocktails.py
"""
import json
import logging
import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import MagicMock, patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import cocktails
from cocktails import CocktailBrowser, load_config, setup_logging
from cocktail_browser.catalog_client import NetworkError
from cocktail_browser.models import Drink
from cocktail_browser.repositories import FAVORITES_KEY, MemoryStorage, StorageError


MARGARITA = Drink({
    'idDrink': '11007',
    'strDrink': 'Margarita',
    'strDrinkThumb': 'https://example.com/margarita.jpg',
    'strInstructions': 'Shake with ice.',
    'strIngredient1': 'Tequila',
    'strMeasure1': '1 1/2 oz',
})
MOJITO = Drink({'idDrink': '11000', 'strDrink': 'Mojito'})

_ENV_KEYS = list(cocktails.ENV_OVERRIDES)


def _browser(storage=None):
    client = MagicMock()
    client.list_categories.return_value = ['Cocktail', 'Shot']
    client.list_drinks_by_category.return_value = [MARGARITA, MOJITO]
    client.get_drink.return_value = MARGARITA
    storage = storage if storage is not None else MemoryStorage()
    return CocktailBrowser({'log_level': 'CRITICAL'}, client=client, storage=storage), client


# ===========================================================================
# Logging
# ===========================================================================

class TestSetupLogging(unittest.TestCase):

    def test_sets_level(self):
        logger = setup_logging('DEBUG')
        self.assertEqual(logger.level, logging.DEBUG)
        setup_logging('WARNING')

    def test_unknown_level_falls_back_to_warning(self):
        self.assertEqual(setup_logging('chatty').level, logging.WARNING)

    def test_single_handler(self):
        setup_logging('INFO')
        logger = setup_logging('WARNING')
        self.assertEqual(len(logger.handlers), 1)


# ===========================================================================
# Configuration
# ===========================================================================

class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self._env = patch.dict(os.environ, {}, clear=False)
        self._env.start()
        for key in _ENV_KEYS:
            os.environ.pop(key, None)

    def tearDown(self):
        self._env.stop()
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _write(self, content):
        path = os.path.join(self.tmp, 'config.json')
        with open(path, 'w') as f:
            f.write(content)
        return path

    def test_missing_file_uses_defaults(self):
        config = load_config(os.path.join(self.tmp, 'absent.json'))
        self.assertEqual(config, cocktails.DEFAULT_CONFIG)

    def test_file_values_override_defaults(self):
        path = self._write(json.dumps({'storage_path': 'favs.json', 'api_timeout_seconds': 3}))
        config = load_config(path)
        self.assertEqual(config['storage_path'], 'favs.json')
        self.assertEqual(config['api_timeout_seconds'], 3)
        self.assertEqual(config['api_base_url'], cocktails.DEFAULT_CONFIG['api_base_url'])

    def test_environment_wins_over_file(self):
        path = self._write(json.dumps({'storage_path': 'favs.json'}))
        os.environ['COCKTAILS_STORAGE_PATH'] = 'env.json'
        os.environ['COCKTAILS_API_TIMEOUT'] = '7'
        os.environ['COCKTAILDB_BASE_URL'] = 'http://localhost:9000'
        config = load_config(path)
        self.assertEqual(config['storage_path'], 'env.json')
        self.assertEqual(config['api_timeout_seconds'], 7)
        self.assertEqual(config['api_base_url'], 'http://localhost:9000')

    def test_invalid_timeout_falls_back(self):
        path = self._write(json.dumps({'api_timeout_seconds': 'soon'}))
        self.assertEqual(load_config(path)['api_timeout_seconds'], 10)

    def test_malformed_file_exits(self):
        path = self._write('{not json')
        with patch('builtins.print'), self.assertRaises(SystemExit) as ctx:
            load_config(path)
        self.assertEqual(ctx.exception.code, 1)

    def test_non_object_file_exits(self):
        path = self._write('[1, 2]')
        with patch('builtins.print'), self.assertRaises(SystemExit):
            load_config(path)


# ===========================================================================
# One-shot commands
# ===========================================================================

@patch('builtins.print')
class TestOneShotCommands(unittest.TestCase):

    def test_print_categories(self, mock_print):
        browser, _ = _browser()
        self.assertEqual(browser.print_categories(), 0)
        printed = [c.args[0] for c in mock_print.call_args_list]
        self.assertIn('Cocktail', printed)

    def test_print_categories_network_error(self, _):
        browser, client = _browser()
        client.list_categories.side_effect = NetworkError('offline')
        self.assertEqual(browser.print_categories(), 1)

    def test_print_category(self, _):
        browser, client = _browser()
        self.assertEqual(browser.print_category('Cocktail'), 0)
        client.list_drinks_by_category.assert_called_once_with('Cocktail')

    def test_print_drink_not_found(self, _):
        browser, client = _browser()
        client.get_drink.return_value = None
        self.assertEqual(browser.print_drink('doesnotexist'), 0)

    def test_add_and_remove_favorite(self, _):
        storage = MemoryStorage()
        browser, _ = _browser(storage)
        self.assertEqual(browser.add_favorite('11007'), 0)
        self.assertEqual(browser.add_favorite('11007'), 0)
        self.assertEqual([d.id for d in browser.favorites.load_all()], ['11007'])
        self.assertEqual(browser.remove_favorite('11007'), 0)
        self.assertEqual(browser.favorites.load_all(), [])

    def test_add_unknown_drink_fails(self, _):
        browser, client = _browser()
        client.get_drink.return_value = None
        self.assertEqual(browser.add_favorite('nope'), 1)

    def test_print_favorites_corrupt(self, _):
        browser, _ = _browser(MemoryStorage({FAVORITES_KEY: 'garbage'}))
        self.assertEqual(browser.print_favorites(), 1)

    def test_print_favorites_empty(self, _):
        browser, _ = _browser()
        self.assertEqual(browser.print_favorites(), 0)


# ===========================================================================
# Interactive screens
# ===========================================================================

@patch('builtins.print')
class TestInteractiveScreens(unittest.TestCase):

    def test_quit_from_home(self, _):
        browser, client = _browser()
        with patch('builtins.input', side_effect=['q']):
            browser.interactive_mode()
        client.list_categories.assert_called_once_with()

    def test_browse_and_add_favorite(self, _):
        browser, client = _browser()
        # category 1 -> drink 1 -> add -> decline jump -> back -> back -> quit
        inputs = ['1', '1', 'a', 'n', 'b', 'b', 'q']
        with patch('builtins.input', side_effect=inputs):
            browser.interactive_mode()
        client.list_drinks_by_category.assert_called_once_with('Cocktail')
        client.get_drink.assert_called_once_with('11007')
        self.assertEqual(browser.favorites.load_all(), [MARGARITA])

    def test_add_then_jump_to_favorites(self, _):
        browser, _ = _browser()
        # add -> yes, see favorites -> favorites list -> back -> back -> quit
        inputs = ['1', '1', 'a', 'y', 'b', 'b', 'q']
        with patch('builtins.input', side_effect=inputs):
            browser.interactive_mode()
        self.assertEqual(len(browser.favorites.load_all()), 1)

    def test_retry_after_network_error(self, _):
        browser, client = _browser()
        client.list_categories.side_effect = [NetworkError('offline'), ['Cocktail']]
        with patch('builtins.input', side_effect=['r', 'q']):
            browser.interactive_mode()
        self.assertEqual(client.list_categories.call_count, 2)

    def test_remove_from_favorites_with_confirmation(self, _):
        browser, _ = _browser()
        browser.favorites.add(MARGARITA)
        browser.favorites.add(MOJITO)
        with patch('builtins.input', side_effect=['d 1', 'y', 'b']):
            browser.favorites_screen()
        self.assertEqual(browser.favorites.load_all(), [MOJITO])

    def test_declined_confirmation_keeps_favorite(self, _):
        browser, _ = _browser()
        browser.favorites.add(MARGARITA)
        with patch('builtins.input', side_effect=['d 1', 'n', 'b']):
            browser.favorites_screen()
        self.assertEqual(browser.favorites.load_all(), [MARGARITA])

    def test_corrupt_favorites_can_be_reset(self, _):
        storage = MemoryStorage({FAVORITES_KEY: '[oops'})
        browser, _ = _browser(storage)
        # error view -> reset -> confirm -> empty list returns to caller
        with patch('builtins.input', side_effect=['x', 'y']):
            browser.favorites_screen()
        self.assertEqual(json.loads(storage.items[FAVORITES_KEY]), [])

    def test_failed_reset_shows_error(self, mock_print):
        storage = MemoryStorage({FAVORITES_KEY: '[oops'})
        browser, _ = _browser(storage)
        browser.favorites.reset = MagicMock(side_effect=StorageError('read-only directory'))
        # error view -> reset -> confirm -> failure shown -> back
        with patch('builtins.input', side_effect=['x', 'y', 'b']):
            browser.favorites_screen()
        printed = ' '.join(str(c.args[0]) for c in mock_print.call_args_list if c.args)
        self.assertIn('Could not reset favorites', printed)
        self.assertEqual(storage.items[FAVORITES_KEY], '[oops')

    def test_detail_not_found(self, _):
        browser, client = _browser()
        client.get_drink.return_value = None
        with patch('builtins.input') as mock_input:
            self.assertIsNone(browser.detail_screen('doesnotexist'))
        mock_input.assert_not_called()


# ===========================================================================
# main()
# ===========================================================================

class TestMain(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    @patch('builtins.print')
    @patch('cocktails.load_dotenv')
    @patch('cocktails.CocktailDBClient')
    def test_favorites_command_uses_storage_flag(self, mock_client_cls, _, __):
        storage_path = os.path.join(self.tmp, 'store.json')
        code = cocktails.main([
            '--config', os.path.join(self.tmp, 'none.json'),
            '--storage', storage_path,
            '--log-level', 'CRITICAL',
            '--favorites',
        ])
        self.assertEqual(code, 0)
        mock_client_cls.assert_called_once()

    @patch('builtins.print')
    @patch('cocktails.load_dotenv')
    @patch('cocktails.CocktailDBClient')
    def test_add_command(self, mock_client_cls, _, __):
        mock_client_cls.return_value.get_drink.return_value = MARGARITA
        storage_path = os.path.join(self.tmp, 'store.json')
        code = cocktails.main([
            '--config', os.path.join(self.tmp, 'none.json'),
            '--storage', storage_path,
            '--add', '11007',
        ])
        self.assertEqual(code, 0)
        with open(storage_path) as f:
            stored = json.loads(json.load(f)[FAVORITES_KEY])
        self.assertEqual(stored[0]['idDrink'], '11007')

    def test_commands_are_mutually_exclusive(self):
        with patch('sys.stderr'), self.assertRaises(SystemExit):
            cocktails.main(['--categories', '--favorites'])


if __name__ == '__main__':
    unittest.main()
