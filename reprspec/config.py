# Copyright (c) 2026 NASK. All rights reserved.

"""
Configuration of the *reprspec* machinery.

The configuration is INI-like (based on the standard library's
:mod:`configparser`) and is driven by a *config spec*: a string that
declares the sections, the options, their defaults and the names of
the converters to be applied to the values, for example::

    [reprspec]
    max_depth = 64 :: int

The actual values are taken either from a `settings` mapping (whose
keys are `'<section name>.<option name>'` strings, e.g.
`'reprspec.max_depth'`) or -- if `settings` is not given -- from the
`*.conf` files placed in the directories listed in
:attr:`Config.CONFIG_FILE_DIRS` (in that order, so that the latter
ones override the former ones).
"""


import configparser
import functools
import os
import os.path
import re

from reprspec.encoding_helpers import ascii_str, str_to_bool
from reprspec.log_helpers import get_logger


LOGGER = get_logger(__name__)


CONFIG_SPEC = '''
    [reprspec]
    max_depth = 64 :: int
    default_wrap_key_style = snake_case :: wrap_key_style

    [reprspec.json]
    indent = :: int_or_none
    ensure_ascii = false :: bool

    [reprspec.yaml]
    allow_unicode = true :: bool

    [reprspec.xml]
    default_root_tag = document
    item_tag = item
    pretty_print = false :: bool
'''


class ConfigError(Exception):

    """
    A generic, `Config`-related, exception class.

    >>> print(ConfigError('Some Message'))
    [configuration-related error] Some Message
    """

    def __str__(self):
        return '[configuration-related error] ' + super().__str__()


def _int_or_none(s):
    s = s.strip()
    return int(s) if s else None


def _wrap_key_style(s):
    s = s.strip()
    if s not in ('snake_case', 'as_is'):
        raise ValueError('{!a} is not one of: snake_case, as_is'.format(s))
    return s


class ConfigSection(dict):

    """
    A subclass of `dict`; its instances are values of `Config` mappings.

    >>> s = ConfigSection('some_sect', {'some_opt': 42})
    >>> s
    ConfigSection('some_sect', {'some_opt': 42})
    >>> s.sect_name
    'some_sect'
    >>> s['some_opt']
    42
    >>> s['another_opt']                # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ConfigError: ...
    """

    def __init__(self, sect_name, opt_name_to_value=None):
        super().__init__(opt_name_to_value or {})
        self.sect_name = sect_name

    def __missing__(self, opt_name):
        raise ConfigError('no option {!a} in section {!a}'.format(
            opt_name, self.sect_name))

    def __repr__(self):
        return '{}({!r}, {})'.format(
            self.__class__.__name__,
            self.sect_name,
            super().__repr__())


class Config(dict):

    r"""
    A `dict` that maps section names to `ConfigSection` instances.

    Constructor args/kwargs:
        `config_spec` (default: the value of the module's `CONFIG_SPEC`):
            The *config spec* string (see the module docs).
        `settings` (optional):
            A mapping of `'<section name>.<option name>'` keys to
            values; if given (even if empty), config files are not
            read at all.
        `custom_converters` (optional):
            A mapping of additional converter names to converter
            callables (overriding `Config.BASIC_CONVERTERS`).

    Raises:
        `ConfigError` -- if the config spec is malformed, if a value
        cannot be converted, if an option not declared in the config
        spec is given for a declared section, or if a required option
        (one without a default) is missing.

    >>> config = Config('''
    ...     [foo]
    ...     bar = 42 :: int
    ...     spam :: bool
    ...     ham = Ham!
    ... ''', settings={'foo.spam': 'yes', 'other.whatever': 'x'})
    >>> config == {'foo': {'bar': 42, 'spam': True, 'ham': 'Ham!'}}
    True
    >>> config['foo']
    ConfigSection('foo', {'bar': 42, 'spam': True, 'ham': 'Ham!'})

    >>> Config('''
    ...     [foo]
    ...     spam :: bool
    ... ''', settings={})                      # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ConfigError: ...

    >>> Config('''
    ...     [foo]
    ...     bar = 42 :: int
    ... ''', settings={'foo.bar': 'abc'})      # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ConfigError: ...

    >>> Config('''
    ...     [foo]
    ...     bar = 42 :: int
    ... ''', settings={'foo.baz': '1'})        # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ConfigError: ...
    """

    BASIC_CONVERTERS = {
        'str': str,
        'bool': str_to_bool,
        'int': int,
        'float': float,
        'int_or_none': _int_or_none,
        'wrap_key_style': _wrap_key_style,
    }
    DEFAULT_CONVERTER_SPEC = 'str'

    CONFIG_FILE_DIRS = ('/etc/reprspec', '~/.reprspec')
    CONFIG_FILENAME_REGEX = r'\A[^.].*\.conf\Z'

    def __init__(self, config_spec=CONFIG_SPEC, settings=None, custom_converters=None):
        super().__init__()
        self._converters = dict(self.BASIC_CONVERTERS, **(custom_converters or {}))
        spec = self._parse_config_spec(config_spec)
        if settings is None:
            raw = self._load_config_files()
        else:
            raw = self._settings_to_raw(settings)
        for sect_name, opt_specs in spec.items():
            self[sect_name] = self._make_section(sect_name, opt_specs,
                                                 raw.get(sect_name, {}))

    def _parse_config_spec(self, config_spec):
        parser = configparser.ConfigParser(
            delimiters=('=',),
            allow_no_value=True,
            interpolation=None)
        parser.optionxform = str
        try:
            parser.read_string(_dedent(config_spec))
        except configparser.Error as exc:
            raise ConfigError('malformed config spec ({})'.format(ascii_str(exc))) from exc
        spec = {}
        for sect_name in parser.sections():
            opt_specs = spec[sect_name] = {}
            for key, value in parser.items(sect_name):
                if value is None:
                    # option without a default, e.g. `spam :: bool`
                    opt_name, _, conv_name = key.partition('::')
                    default = None
                else:
                    opt_name = key
                    default, _, conv_name = value.partition('::')
                    default = default.strip()
                opt_name = opt_name.strip()
                conv_name = conv_name.strip() or self.DEFAULT_CONVERTER_SPEC
                if conv_name not in self._converters:
                    raise ConfigError('unknown converter {!a} (for option {!a} '
                                      'in section {!a})'.format(conv_name, opt_name,
                                                                sect_name))
                opt_specs[opt_name] = (default, self._converters[conv_name])
        return spec

    def _make_section(self, sect_name, opt_specs, raw_section):
        illegal_opts = set(raw_section).difference(opt_specs)
        if illegal_opts:
            raise ConfigError('illegal options in section {!a}: {}'.format(
                sect_name, ', '.join(sorted(map(ascii, illegal_opts)))))
        section = ConfigSection(sect_name)
        for opt_name, (default, converter) in opt_specs.items():
            value = raw_section.get(opt_name, default)
            if value is None:
                raise ConfigError('missing required option {!a} in section {!a}'.format(
                    opt_name, sect_name))
            if isinstance(value, str):
                try:
                    value = converter(value)
                except ValueError as exc:
                    raise ConfigError('invalid value of option {!a} in section {!a} '
                                      '({})'.format(opt_name, sect_name,
                                                    ascii_str(exc))) from exc
            section[opt_name] = value
        return section

    @staticmethod
    def _settings_to_raw(settings):
        raw = {}
        for key, value in settings.items():
            sect_name, _, opt_name = key.rpartition('.')
            raw.setdefault(sect_name, {})[opt_name] = value
        return raw

    def _load_config_files(self):
        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str
        filename_regex = re.compile(self.CONFIG_FILENAME_REGEX)
        paths = []
        for dir_path in self.CONFIG_FILE_DIRS:
            dir_path = os.path.expanduser(dir_path)
            if not os.path.isdir(dir_path):
                continue
            paths.extend(
                os.path.join(dir_path, filename)
                for filename in sorted(os.listdir(dir_path))
                if filename_regex.search(filename))
        if paths:
            LOGGER.debug('Reading config files: %s', ', '.join(map(ascii, paths)))
        try:
            parser.read(paths, encoding='utf-8')
        except configparser.Error as exc:
            raise ConfigError('cannot read config files ({})'.format(ascii_str(exc))) from exc
        return {sect_name: dict(parser.items(sect_name))
                for sect_name in parser.sections()}


class ConfigMixin(object):

    """
    A convenience mixin for classes that make use of `Config` stuff.

    Subclasses are expected to set the `config_section_name` attribute.
    Then, in the constructor, they can call:
    `self.config = self.get_config_section(settings)`.

    If `settings` is `None`, the configuration obtained from the config
    files is used (read once per process, then cached).

    >>> class MyClass(ConfigMixin):
    ...     config_section_name = 'reprspec.xml'
    ...     def __init__(self, settings=None):
    ...         self.config = self.get_config_section(settings)
    ...
    >>> MyClass({'reprspec.xml.item_tag': 'entry'}).config['item_tag']
    'entry'
    >>> MyClass({}).config['item_tag']
    'item'
    """

    config_section_name = None

    def get_config_section(self, settings=None, sect_name=None):
        if settings is None:
            config = _get_config_from_files()
        else:
            config = Config(CONFIG_SPEC, settings=settings)
        if sect_name is None:
            sect_name = self.config_section_name
        return config[sect_name]


@functools.lru_cache(maxsize=None)
def _get_config_from_files():
    return Config(CONFIG_SPEC)


def _dedent(config_spec):
    return '\n'.join(line.strip() for line in config_spec.splitlines())
