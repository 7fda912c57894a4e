# Copyright (c) 2013-2025 NASK. All rights reserved.

import unittest
from unittest.mock import patch

from unittest_expander import (
    expand,
    foreach,
    param,
)

from mbcommon.idna_helpers import (
    IdnToAsciiConverter,
    IdnaCodecConverter,
    NoopIdnConverter,
    get_idn_converter,
    is_idna_codec_available,
)


@expand
class TestIdnaCodecConverter(unittest.TestCase):

    @foreach(
        param('example.com', 'example.com'),
        param('Example.COM.', 'Example.COM.').label('ASCII labels intact'),
        param('bücher.example', 'xn--bcher-kva.example'),
        param('Bücher。example', 'xn--bcher-kva.example').label('ideographic full stop'),
        param('bücher．example', 'xn--bcher-kva.example').label('full-width full stop'),
        param('bücher｡example', 'xn--bcher-kva.example').label('half-width full stop'),
        param('münchen.bücher.de', 'xn--mnchen-3ya.xn--bcher-kva.de'),
        param('', ''),
        param('[::1]', '[::1]'),
        param('\udcdd.example', '\udcdd.example').label('unconvertible label intact'),
        param('bücher.' + 'ą' * 80, 'xn--bcher-kva.' + 'ą' * 80).label('too long label intact'),
    )
    def test(self, host, expected):
        self.assertEqual(IdnaCodecConverter().to_ascii(host), expected)

    def test_unconvertible_label_logged(self):
        with patch('mbcommon.idna_helpers.LOGGER') as LOGGER_mock:
            IdnaCodecConverter().to_ascii('\udcdd.example')
        self.assertEqual(LOGGER_mock.debug.call_count, 1)


class TestNoopIdnConverter(unittest.TestCase):

    def test(self):
        self.assertEqual(NoopIdnConverter().to_ascii('Bücher。example'), 'Bücher。example')


@expand
class TestIdnToAsciiConverter(unittest.TestCase):

    @foreach(
        param(IdnaCodecConverter(), True),
        param(NoopIdnConverter(), True),
        param('example.com', False),
        param(None, False),
    )
    def test_protocol(self, obj, expected):
        self.assertIs(isinstance(obj, IdnToAsciiConverter), expected)


class Test__get_idn_converter(unittest.TestCase):

    def test_enabled(self):
        self.assertIsInstance(get_idn_converter(), IdnaCodecConverter)
        self.assertIsInstance(get_idn_converter(enabled=True), IdnaCodecConverter)

    def test_disabled(self):
        self.assertIsInstance(get_idn_converter(enabled=False), NoopIdnConverter)

    def test_codec_unavailable(self):
        with patch('mbcommon.idna_helpers.codecs.lookup', side_effect=LookupError):
            self.assertIs(is_idna_codec_available(), False)
            self.assertIsInstance(get_idn_converter(), NoopIdnConverter)
        self.assertIs(is_idna_codec_available(), True)
