# Copyright (c) 2026 NASK. All rights reserved.

import os
import os.path
import shutil
import tempfile
import unittest
from unittest.mock import patch

from unittest_expander import (
    expand,
    foreach,
    param,
)

from reprspec import config as config_module
from reprspec.config import (
    CONFIG_SPEC,
    Config,
    ConfigError,
    ConfigMixin,
    ConfigSection,
)


@expand
class TestConfig(unittest.TestCase):

    def test_defaults(self):
        config = Config(settings={})
        self.assertEqual(config, {
            'reprspec': {
                'max_depth': 64,
                'default_wrap_key_style': 'snake_case',
            },
            'reprspec.json': {
                'indent': None,
                'ensure_ascii': False,
            },
            'reprspec.yaml': {
                'allow_unicode': True,
            },
            'reprspec.xml': {
                'default_root_tag': 'document',
                'item_tag': 'item',
                'pretty_print': False,
            },
        })
        self.assertIsInstance(config['reprspec'], ConfigSection)

    def test_settings(self):
        config = Config(settings={
            'reprspec.max_depth': '10',
            'reprspec.json.indent': '2',
            'reprspec.xml.pretty_print': 'yes',
        })
        self.assertEqual(config['reprspec']['max_depth'], 10)
        self.assertEqual(config['reprspec.json']['indent'], 2)
        self.assertIs(config['reprspec.xml']['pretty_print'], True)

    def test_non_str_setting_values_are_taken_as_they_are(self):
        config = Config(settings={'reprspec.max_depth': 7})
        self.assertEqual(config['reprspec']['max_depth'], 7)

    def test_custom_converters(self):
        config = Config('''
            [foo]
            bar = a,b :: list
        ''', settings={}, custom_converters={'list': lambda s: s.split(',')})
        self.assertEqual(config['foo']['bar'], ['a', 'b'])

    @foreach(
        param(settings={'reprspec.max_depth': 'deep'}).label('invalid int'),
        param(settings={'reprspec.default_wrap_key_style': 'kebab-case'})
        .label('invalid wrap key style'),
        param(settings={'reprspec.json.ensure_ascii': 'maybe'}).label('invalid bool'),
        param(settings={'reprspec.max_dept': '10'}).label('illegal option'),
    )
    def test_invalid_settings(self, settings):
        with self.assertRaises(ConfigError):
            Config(settings=settings)

    def test_unknown_converter(self):
        with self.assertRaises(ConfigError):
            Config('''
                [foo]
                bar = 1 :: complex
            ''', settings={})

    def test_missing_option(self):
        with self.assertRaises(ConfigError):
            Config(settings={})['reprspec']['max_width']


class TestConfig__config_files(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmp_dir)
        patcher = patch.object(Config, 'CONFIG_FILE_DIRS',
                               (self.tmp_dir, os.path.join(self.tmp_dir, 'nonexistent')))
        patcher.start()
        self.addCleanup(patcher.stop)

    def _write(self, filename, content):
        with open(os.path.join(self.tmp_dir, filename), 'w', encoding='utf-8') as f:
            f.write(content)

    def test_files_are_read_in_order(self):
        self._write('00_base.conf', '[reprspec]\nmax_depth = 10\n\n[reprspec.xml]\nitem_tag = entry\n')
        self._write('10_local.conf', '[reprspec]\nmax_depth = 20\n')
        self._write('.hidden.conf', '[reprspec]\nmax_depth = 30\n')
        self._write('ignored.txt', '[reprspec]\nmax_depth = 40\n')
        config = Config()
        self.assertEqual(config['reprspec']['max_depth'], 20)
        self.assertEqual(config['reprspec.xml']['item_tag'], 'entry')

    def test_no_files(self):
        config = Config()
        self.assertEqual(config['reprspec']['max_depth'], 64)

    def test_malformed_file(self):
        self._write('broken.conf', 'max_depth = 10\n')
        with self.assertRaises(ConfigError):
            Config()


class _Configured(ConfigMixin):

    config_section_name = 'reprspec.json'

    def __init__(self, settings=None):
        self.config = self.get_config_section(settings)


class TestConfigMixin(unittest.TestCase):

    def setUp(self):
        config_module._get_config_from_files.cache_clear()
        self.addCleanup(config_module._get_config_from_files.cache_clear)

    def test_with_settings(self):
        obj = _Configured({'reprspec.json.indent': '3'})
        self.assertEqual(obj.config['indent'], 3)
        self.assertEqual(obj.config.sect_name, 'reprspec.json')

    def test_other_section(self):
        section = _Configured({}).get_config_section({}, sect_name='reprspec.yaml')
        self.assertIs(section['allow_unicode'], True)

    def test_without_settings_config_files_are_read_once(self):
        with patch.object(Config, '_load_config_files',
                          return_value={'reprspec.json': {'indent': '1'}}) as load_mock:
            first = _Configured()
            second = _Configured()
        self.assertEqual(first.config['indent'], 1)
        self.assertIs(first.config, second.config)
        load_mock.assert_called_once_with()

    def test_config_spec_is_well_formed(self):
        self.assertEqual(sorted(Config(CONFIG_SPEC, settings={})),
                         ['reprspec', 'reprspec.json', 'reprspec.xml', 'reprspec.yaml'])
