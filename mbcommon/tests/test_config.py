# Copyright (c) 2013-2025 NASK. All rights reserved.

import os
import os.path as osp
import tempfile
import unittest
from unittest.mock import patch

from unittest_expander import (
    expand,
    foreach,
    param,
    paramseq,
)

from mbcommon.config import (
    Config,
    ConfigError,
    ConfigSection,
    NoConfigOptionError,
    NoConfigSectionError,
)


# NOTE: the basics of ConfigError, NoConfigSectionError,
# NoConfigOptionError and ConfigSection are already covered
# by their doctests


CONFIG_SPEC = '''
[url_normalizer]
default_scheme = https :: str
idn = yes :: bool

[limits]
max_length :: int
ratio = 0.5 :: float
names = :: list_of_str
'''


@expand
class TestConfig__from_settings(unittest.TestCase):

    def test_defaults(self):
        config = Config(CONFIG_SPEC, settings={'limits.max_length': '100'})
        self.assertEqual(config, {
            'url_normalizer': {'default_scheme': 'https', 'idn': True},
            'limits': {'max_length': 100, 'ratio': 0.5, 'names': []},
        })
        self.assertIsInstance(config['limits'], ConfigSection)
        self.assertEqual(config['limits'].sect_name, 'limits')

    @foreach(
        param('limits.names', 'a, b ,c,', 'limits', 'names', ['a', 'b', 'c']),
        param('limits.names', ' , ', 'limits', 'names', []),
        param('limits.ratio', '2', 'limits', 'ratio', 2.0),
        param('url_normalizer.idn', 'Off', 'url_normalizer', 'idn', False),
        param('url_normalizer.default_scheme', 'ftp', 'url_normalizer', 'default_scheme', 'ftp'),
    )
    def test_conversion(self, key, raw_value, sect_name, opt_name, expected):
        config = Config(CONFIG_SPEC, settings={
            'limits.max_length': '1',
            key: raw_value,
        })
        self.assertEqual(config[sect_name][opt_name], expected)

    def test_non_str_setting_value_coerced(self):
        config = Config(CONFIG_SPEC, settings={'limits.max_length': 42})
        self.assertEqual(config['limits']['max_length'], 42)

    def test_overrides(self):
        config = Config(CONFIG_SPEC,
                        settings={'limits.max_length': '1'},
                        overrides={
                            'limits': {'max_length': '2'},
                            'url_normalizer': {'idn': 'no'},
                            'undeclared': {'whatever': 'x'},
                        })
        self.assertEqual(config['limits']['max_length'], 2)
        self.assertIs(config['url_normalizer']['idn'], False)
        self.assertNotIn('undeclared', config)

    @foreach(
        param(
            settings={},
            expected_msg_fragments=['missing required config options: limits.max_length'],
        ).label('missing'),
        param(
            settings={'limits.max_length': '1', 'limits.foo': 'x', 'limits.bar': 'y'},
            expected_msg_fragments=['illegal config options: limits.bar, limits.foo'],
        ).label('illegal'),
        param(
            settings={'limits.max_length': 'many'},
            expected_msg_fragments=["error when applying config value converter 'int' "
                                    "to limits.max_length='many'"],
        ).label('conversion'),
        param(
            settings={'limits.foo': 'x', 'url_normalizer.idn': 'perhaps'},
            expected_msg_fragments=[
                'missing required config options: limits.max_length; '
                'illegal config options: limits.foo; '
                "error when applying config value converter 'str_to_bool'",
            ],
        ).label('all together'),
    )
    def test_errors(self, settings, expected_msg_fragments):
        with patch('mbcommon.config.LOGGER') as LOGGER_mock, \
             self.assertRaises(ConfigError) as cm:
            Config(CONFIG_SPEC, settings=settings)
        msg = str(cm.exception)
        self.assertTrue(msg.startswith('[configuration-related error] '))
        for fragment in expected_msg_fragments:
            self.assertIn(fragment, msg)
        self.assertEqual(LOGGER_mock.error.call_count, 1)

    def test_unknown_converter(self):
        with self.assertRaisesRegex(ConfigError, r'unknown config value converter `decimal`'):
            Config('[sect]\nopt = 1 :: decimal', settings={})

    def test_malformed_spec(self):
        with self.assertRaisesRegex(ConfigError, r'malformed config spec'):
            Config('opt = without section', settings={})

    def test_missing_section_and_option(self):
        config = Config(CONFIG_SPEC, settings={'limits.max_length': '1'})
        with self.assertRaises(NoConfigSectionError) as cm:
            config['nonexistent']
        self.assertIsInstance(cm.exception, KeyError)
        self.assertEqual(cm.exception.sect_name, 'nonexistent')
        with self.assertRaises(NoConfigOptionError) as cm:
            config['limits']['nonexistent']
        self.assertEqual(cm.exception.opt_name, 'nonexistent')
        self.assertEqual(config.get('nonexistent', 'default'), 'default')


class TestConfig__section(unittest.TestCase):

    def test_sole_section(self):
        section = Config.section('[url_normalizer]\nidn = yes :: bool',
                                 settings={'url_normalizer.idn': 'no'})
        self.assertEqual(section, ConfigSection('url_normalizer', {'idn': False}))

    def test_more_sections(self):
        with self.assertRaisesRegex(ConfigError,
                                    r"exactly one section but the following sections "
                                    r"found: 'limits', 'url_normalizer'"):
            Config.section(CONFIG_SPEC, settings={'limits.max_length': '1'})


@expand
class TestConfig__from_files(unittest.TestCase):

    def setUp(self):
        tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(tmp_dir.cleanup)
        self.etc_dir = osp.join(tmp_dir.name, 'etc')
        self.user_dir = osp.join(tmp_dir.name, 'user')
        os.makedirs(osp.join(self.etc_dir, 'sub'))
        os.makedirs(self.user_dir)

    def _write(self, *path_segments, content):
        with open(osp.join(*path_segments), 'w', encoding='utf-8') as f:
            f.write(content)

    @paramseq
    def _ignored_file_names(cls):
        yield param(file_name='logging.conf')
        yield param(file_name='0_too_short_prefix.conf')
        yield param(file_name='00_wrong_suffix.cfg')
        yield param(file_name='README')

    def test_files_read_in_order(self):
        self._write(self.etc_dir, '00_base.conf', content=(
            '[url_normalizer]\n'
            'default_scheme = http\n'
            '[limits]\n'
            'max_length = 10\n'))
        self._write(self.etc_dir, 'sub', '10_more.conf', content=(
            '[url_normalizer]\n'
            'idn = no\n'
            '[some_unrelated_section]\n'
            'foo = bar\n'))
        self._write(self.user_dir, '00_user.conf', content=(
            '[url_normalizer]\n'
            'default_scheme = ftp\n'))
        config = Config(CONFIG_SPEC, config_dirs=[self.etc_dir, self.user_dir])
        self.assertEqual(config['url_normalizer'], {'default_scheme': 'ftp', 'idn': False})
        self.assertEqual(config['limits']['max_length'], 10)

    def test_overrides_win_over_files(self):
        self._write(self.etc_dir, '00_base.conf', content=(
            '[limits]\n'
            'max_length = 10\n'))
        config = Config(CONFIG_SPEC,
                        config_dirs=[self.etc_dir],
                        overrides={'limits': {'max_length': '20'}})
        self.assertEqual(config['limits']['max_length'], 20)

    @foreach(_ignored_file_names)
    def test_ignored_files(self, file_name):
        self._write(self.etc_dir, '00_base.conf', content=(
            '[limits]\n'
            'max_length = 10\n'))
        self._write(self.etc_dir, file_name, content=(
            '[limits]\n'
            'max_length = 999\n'))
        config = Config(CONFIG_SPEC, config_dirs=[self.etc_dir])
        self.assertEqual(config['limits']['max_length'], 10)

    def test_no_files(self):
        with patch('mbcommon.config.LOGGER') as LOGGER_mock:
            section = Config.section('[url_normalizer]\nidn = yes :: bool',
                                     config_dirs=[self.etc_dir, '/nonexistent/directory'])
        self.assertEqual(section, {'idn': True})
        self.assertEqual(LOGGER_mock.warning.call_count, 1)

    def test_default_config_dirs(self):
        with patch.object(Config, '_get_config_file_paths', return_value=[]) as mocked:
            Config.section('[url_normalizer]\nidn = yes :: bool')
        called_dirs = [c.args[0] for c in mocked.call_args_list]
        self.assertEqual(len(called_dirs), 2)
        self.assertEqual(called_dirs[0], '/etc/mbcommon')
