# Copyright (c) 2013-2025 NASK. All rights reserved.

import configparser
import os
import os.path as osp
import re
from typing import Optional

from mbcommon.const import (
    ETC_DIR,
    USER_DIR,
)
from mbcommon.encoding_helpers import (
    as_unicode,
    ascii_str,
    str_to_bool,
)
from mbcommon.log_helpers import get_logger


LOGGER = get_logger(__name__)



class ConfigError(Exception):

    """
    A generic, `Config`-related, exception class.

    >>> print(ConfigError('Some Message'))
    [configuration-related error] Some Message
    """

    def __str__(self):
        return '[configuration-related error] ' + super().__str__()



_KeyError_str = getattr(KeyError.__str__, '__func__', KeyError.__str__)

class _KeyErrorSubclassMixin(KeyError):  # a non-public helper

    def __str__(self):
        # (skipping `KeyError.__str__()` which would apply `repr()`
        # to the sole argument)
        method = super().__str__
        if getattr(method, '__objclass__', None) is KeyError or (
              _KeyError_str is not None and
              _KeyError_str is getattr(method, '__func__', None)):
            method = super(KeyError, self).__str__
        return method()



class NoConfigSectionError(_KeyErrorSubclassMixin, ConfigError):

    """
    Raised by `Config.__getitem__()` when the specified section is missing.

    >>> exc = NoConfigSectionError('some_sect')
    >>> isinstance(exc, ConfigError) and isinstance(exc, KeyError)
    True
    >>> print(exc)
    [configuration-related error] no config section `some_sect`
    >>> exc.sect_name
    'some_sect'
    """

    sect_name: Optional[str]

    def __init__(self, sect_name=None, *args):
        sect_ref = f'`{sect_name}`' if sect_name is not None else '<unspecified>'
        msg = f'no config section {sect_ref}'
        super().__init__(msg, *args)
        self.sect_name = sect_name



class NoConfigOptionError(_KeyErrorSubclassMixin, ConfigError):

    """
    Raised by `ConfigSection.__getitem__()` when the specified option is missing.

    >>> exc = NoConfigOptionError('mysect', 'myopt')
    >>> isinstance(exc, ConfigError) and isinstance(exc, KeyError)
    True
    >>> print(exc)
    [configuration-related error] no config option `myopt` in section `mysect`
    """

    sect_name: Optional[str]
    opt_name: Optional[str]

    def __init__(self, sect_name=None, opt_name=None, *args):
        sect_ref = f'`{sect_name}`' if sect_name is not None else '<unspecified>'
        opt_ref = f'`{opt_name}`' if opt_name is not None else '<unspecified>'
        msg = f'no config option {opt_ref} in section {sect_ref}'
        super().__init__(msg, *args)
        self.sect_name = sect_name
        self.opt_name = opt_name



def _list_of_str_converter(s):
    s = s.strip()
    if s.endswith(','):
        # remove trailing delimiter
        s = s[:-1].rstrip()
    if s:
        return [item.strip() for item in s.split(',')]
    return []



class Config(dict):

    r"""
    Parse the configuration and provide a `dict`-like access to it.

    A `Config` instance maps configuration section names (`str`) to
    `ConfigSection` instances. Lookup-by-key failures are signalled
    with `NoConfigSectionError` (a subclass of both `KeyError` and
    `ConfigError`).

    Args:
        `config_spec` (a `str`):
            The *configuration specification* (aka *config spec*), in
            the `*.ini`-like format: each section declared in it is
            to be included; each option is declared in one of the
            following forms:

                <option name> = <default value> :: <converter name>
                <option name> = <default value>
                <option name> :: <converter name>

            (an option without a default value is *required*; if the
            converter is not specified, `str` is used). The available
            converters are the keys of `Config.BASIC_CONVERTERS`.

    Kwargs (all optional):
        `settings` (a mapping or `None`; default: `None`):
            If `None`, the configuration is loaded from the files that
            reside in `config_dirs` (or any of their subdirectories)
            and have names matching `Config.CONFIG_FILENAME_REGEX`
            (i.e., starting with two digits followed by `_`, and ending
            with `.conf`) but not matching
            `Config.CONFIG_FILENAME_EXCLUDING_REGEX` (i.e., *not*
            starting with `logging`); the files are read in the order
            of their paths, so that, for the same option, a value read
            later wins.

            If not `None`, it must be a mapping of `'<section>.<option>'`
            keys to raw option value strings; then the configuration is
            taken from it, *not* from any files.
        `config_dirs` (a sequence of `str`, or `None`; default: `None`):
            The directories to search for configuration files in (`None`
            means: `mbcommon.const.ETC_DIR` and `mbcommon.const.USER_DIR`).
        `overrides` (a mapping or `None`; default: `None`):
            A `{<section>: {<option>: <raw value>}}` mapping (see:
            `mbcommon.argument_parser`) of values that are applied *after*
            those from the files (or from `settings`).

    Raises:
        `ConfigError` if any of the following is encountered: a missing
        required option, an illegal (not declared) option in a declared
        section, an unknown converter, a conversion error. All problems
        found are reported together. Sections not declared in the
        config spec are ignored.

    >>> config_spec = '''
    ... [url_normalizer]
    ... default_scheme = https :: str
    ... idn = yes :: bool
    ...
    ... [other]
    ... limit :: int
    ... names = foo, bar :: list_of_str
    ... '''
    >>> config = Config(config_spec, settings={
    ...     'url_normalizer.idn': 'off',
    ...     'other.limit': '42',
    ...     'ignored_section.whatever': 'x',
    ... })
    >>> config['url_normalizer']
    ConfigSection('url_normalizer', {'default_scheme': 'https', 'idn': False})
    >>> config['other']
    ConfigSection('other', {'limit': 42, 'names': ['foo', 'bar']})
    >>> sorted(config)
    ['other', 'url_normalizer']

    >>> config['ignored_section']          # doctest: +ELLIPSIS
    Traceback (most recent call last):
      ...
    mbcommon.config.NoConfigSectionError: [conf... no config section `ignored_section`

    >>> Config(config_spec, settings={
    ...     'url_normalizer.idn': 'maybe',
    ...     'url_normalizer.foo': 'bar',
    ... })                                 # doctest: +ELLIPSIS
    Traceback (most recent call last):
      ...
    mbcommon.config.ConfigError: [conf...] missing required config options: other.limit; illegal config options: url_normalizer.foo; error when applying config value converter...

    >>> Config(config_spec,
    ...        settings={'other.limit': '1'},
    ...        overrides={'other': {'limit': '2'}})['other']['limit']
    2
    """

    CONFIG_FILENAME_REGEX = re.compile(r'\A\d\d_.*\.conf\Z', re.ASCII)
    CONFIG_FILENAME_EXCLUDING_REGEX = re.compile(r'\Alogging[.\-]')

    BASIC_CONVERTERS = {
        'str': str,
        'bool': str_to_bool,
        'int': int,
        'float': float,
        'list_of_str': _list_of_str_converter,
    }

    def __init__(self, config_spec, *, settings=None, config_dirs=None, overrides=None):
        super().__init__()
        spec = self._parse_config_spec(config_spec)
        if settings is None:
            if config_dirs is None:
                config_dirs = (ETC_DIR, USER_DIR)
            sect_name_to_opt_dict = self._load_config_files(config_dirs)
        else:
            sect_name_to_opt_dict = self._convert_settings_mapping(settings)
        for sect_name, opt_name_to_value in (overrides or {}).items():
            sect_name_to_opt_dict.setdefault(sect_name, {}).update(opt_name_to_value)
        try:
            self.update(
                (config_sect.sect_name, config_sect)
                for config_sect in self._make_config_sections(sect_name_to_opt_dict, spec))
        except ConfigError as exc:
            LOGGER.error('%s', ascii_str(exc))
            raise

    def __missing__(self, key):
        raise NoConfigSectionError(key)

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, super().__repr__())

    @classmethod
    def section(cls, config_spec, **kwargs):
        """
        Create a `Config` and pick its sole section.

        >>> Config.section('[foo]\\nabc = 42 :: int', settings={'foo.abc': '123'})
        ConfigSection('foo', {'abc': 123})
        >>> Config.section('', settings={})     # doctest: +ELLIPSIS
        Traceback (most recent call last):
          ...
        mbcommon.config.ConfigError: ...but no sections found
        """
        config = cls(config_spec, **kwargs)
        try:
            [section] = config.values()
        except ValueError:
            all_sections = sorted(config)
            sections_descr = (
                'the following sections found: {0}'.format(
                    ', '.join(map(repr, map(ascii_str, all_sections))))
                if all_sections else 'no sections found')
            raise ConfigError(
                'expected config spec that defines '
                'exactly one section but ' + sections_descr) from None
        return section

    #
    # Internal helpers

    # internal sentinel object
    __NOT_CONVERTED = object()

    @staticmethod
    def _parse_config_spec(config_spec):
        # (returns a dict: {sect name -> {opt name -> (default or None, converter name)}})
        spec_parser = configparser.ConfigParser(
            delimiters=('=',),
            allow_no_value=True,
            interpolation=None)
        try:
            spec_parser.read_string(config_spec)
        except configparser.Error as exc:
            raise ConfigError('malformed config spec ({})'.format(ascii_str(exc))) from exc
        spec = {}
        for sect_name in spec_parser.sections():
            opt_specs = spec[sect_name] = {}
            for key, value in spec_parser.items(sect_name):
                if value is None:
                    opt_name, _, converter_name = key.partition('::')
                    default = None
                else:
                    opt_name = key
                    default, _, converter_name = value.partition('::')
                    default = default.strip()
                opt_specs[opt_name.strip()] = (default, converter_name.strip() or 'str')
        return spec

    def _load_config_files(self, config_dirs):
        sect_name_to_opt_dict = {}
        config_parser = configparser.ConfigParser(interpolation=None)
        config_files = []
        for config_dir in config_dirs:
            config_files.extend(self._get_config_file_paths(config_dir))
        if not config_files:
            LOGGER.warning('No config files to read')
            return sect_name_to_opt_dict
        ok_config_files = config_parser.read(config_files, encoding='utf-8')
        err_config_files = set(config_files).difference(ok_config_files)
        if err_config_files:
            LOGGER.warning(
                'Config files that could not be read '
                '(check their permission modes?): %s', ', '.join(
                    '"{0}"'.format(ascii_str(name))
                    for name in sorted(err_config_files, key=config_files.index)))
        if ok_config_files:
            LOGGER.info('Config files read properly: %s', ', '.join(
                '"{0}"'.format(ascii_str(name))
                for name in ok_config_files))
        for sect_name in config_parser.sections():
            sect_name_to_opt_dict[sect_name] = dict(config_parser.items(sect_name))
        return sect_name_to_opt_dict

    @classmethod
    def _get_config_file_paths(cls, path):
        config_files = []
        for directory, _, fnames in os.walk(path):
            for fname in fnames:
                if (cls.CONFIG_FILENAME_REGEX.search(fname)
                      and not cls.CONFIG_FILENAME_EXCLUDING_REGEX.search(fname)):
                    config_files.append(osp.join(directory, fname))
        return sorted(config_files)

    @staticmethod
    def _convert_settings_mapping(settings):
        sect_name_to_opt_dict = {}
        for key, value in settings.items():
            if not isinstance(value, str):
                LOGGER.warning('Coercing non-`str` value %a (of setting %s) '
                               'to `str` (before further conversion)',
                               value, ascii_str(key))
                value = as_unicode(value)
            sect_name, _, opt_name = key.partition('.')
            sect_name_to_opt_dict.setdefault(sect_name, {})[opt_name] = value
        return sect_name_to_opt_dict

    def _make_config_sections(self, sect_name_to_opt_dict, spec):
        resultant_config_sections = []
        conversion_errors = []
        missing_opt_locations = []
        illegal_opt_locations = []
        for sect_name, opt_specs in spec.items():
            input_opt_dict = sect_name_to_opt_dict.get(sect_name, {})
            resultant_config_sect = ConfigSection(sect_name)
            for opt_name, (default, converter_name) in opt_specs.items():
                opt_location = '{0}.{1}'.format(sect_name, opt_name)
                opt_value = input_opt_dict.get(opt_name, default)
                if opt_value is None:
                    missing_opt_locations.append(opt_location)
                    continue
                converter = self.BASIC_CONVERTERS.get(converter_name)
                if converter is None:
                    conversion_errors.append(
                        'unknown config value converter '
                        '`{0}` (for option {1})'.format(converter_name, opt_location))
                    continue
                opt_value = self._apply_value_converter(
                    opt_location,
                    opt_value,
                    converter,
                    conversion_errors)
                if opt_value is self.__NOT_CONVERTED:
                    continue
                resultant_config_sect[opt_name] = opt_value
            illegal_opt_locations.extend(
                '{0}.{1}'.format(sect_name, opt_name)
                for opt_name in sorted(input_opt_dict.keys() - opt_specs.keys()))
            resultant_config_sections.append(resultant_config_sect)
        if conversion_errors or missing_opt_locations or illegal_opt_locations:
            error_msg = '; '.join(filter(None, [
                    ("missing required config options: {0}".format(
                        ", ".join(map(ascii_str, missing_opt_locations)))
                     if missing_opt_locations else None),
                    ("illegal config options: {0}".format(
                        ", ".join(map(ascii_str, illegal_opt_locations)))
                     if illegal_opt_locations else None),
                ] + conversion_errors))
            raise ConfigError(error_msg)
        return resultant_config_sections

    def _apply_value_converter(self, opt_location, opt_value, converter, conversion_errors):
        try:
            return converter(opt_value)
        except (ValueError, TypeError) as exc:
            conversion_errors.append(
                'error when applying config value converter {0!a} '
                'to {1}={2!a} ({3}: {4})'.format(
                    getattr(converter, '__name__', converter),
                    opt_location,
                    opt_value,
                    type(exc).__name__,
                    ascii_str(exc)))
            # (`None` might be a valid value)
            return self.__NOT_CONVERTED



class ConfigSection(dict):

    """
    A subclass of `dict`; its instances are values of `Config` mappings.

    Lookup-by-key failures are signalled with `NoConfigOptionError`
    (a subclass of both `KeyError` and `ConfigError`).

    >>> s = ConfigSection('some_sect', {'some_opt': 'FOO_bar,spam'})
    >>> s
    ConfigSection('some_sect', {'some_opt': 'FOO_bar,spam'})
    >>> s.sect_name
    'some_sect'
    >>> s['some_opt']
    'FOO_bar,spam'
    >>> s == {'some_opt': 'FOO_bar,spam'}
    True
    >>> s == ConfigSection('another_sect', {'some_opt': 'FOO_bar,spam'})
    False
    >>> s['another_opt']     # doctest: +ELLIPSIS
    Traceback (most recent call last):
      ...
    mbcommon.config.NoConfigOptionError: [conf... `another_opt` in section `some_sect`
    """

    def __init__(self, sect_name, opt_name_to_value=None):
        self.sect_name = sect_name
        if opt_name_to_value is None:
            opt_name_to_value = {}
        super().__init__(opt_name_to_value)

    def __eq__(self, other):
        if isinstance(other, ConfigSection) and other.sect_name != self.sect_name:
            return False
        return super().__eq__(other)

    def __missing__(self, key):
        raise NoConfigOptionError(self.sect_name, key)

    def __repr__(self):
        return '{}({!r}, {})'.format(type(self).__name__, self.sect_name, super().__repr__())
