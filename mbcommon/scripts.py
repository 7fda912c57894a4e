# Copyright (c) 2013-2025 NASK. All rights reserved.

import json
import sys

from mbcommon.argument_parser import MbArgumentParser
from mbcommon.config import Config
from mbcommon.idna_helpers import get_idn_converter
from mbcommon.log_helpers import logging_configured
from mbcommon.url_helpers import (
    UrlComponent,
    UrlNormalizer,
    unparse_url,
)


URL_NORMALIZER_CONFIG_SPEC = '''
[url_normalizer]
default_scheme = https :: str
idn = yes :: bool
'''


def make_url_normalizer(config_section):
    """
    Create a `UrlNormalizer` configured according to the given
    `[url_normalizer]` config section.

    >>> section = Config.section(URL_NORMALIZER_CONFIG_SPEC, settings={
    ...     'url_normalizer.default_scheme': 'HTTP',
    ...     'url_normalizer.idn': 'no'})
    >>> make_url_normalizer(section).normalize('//Żółw.PL', 'all')
    {'scheme': 'http', 'host': 'żółw.pl'}
    """
    return UrlNormalizer(
        idn_converter=get_idn_converter(enabled=config_section['idn']),
        default_scheme=config_section['default_scheme'])


def _make_parse_url_arg_parser():
    arg_parser = MbArgumentParser(
        prog='mbcommon_parse_url',
        description=('Decompose the given URLs into their canonical components '
                     '(printing one JSON document per URL).'))
    arg_parser.add_argument(
        'urls',
        nargs='+',
        metavar='URL',
        help='the URL to be processed')
    output_mode = arg_parser.add_mutually_exclusive_group()
    output_mode.add_argument(
        '--component',
        choices=[component.value for component in UrlComponent],
        default=UrlComponent.ALL.value,
        help='the URL component to be printed (default: all)')
    output_mode.add_argument(
        '--normalized',
        action='store_true',
        help='print the reassembled (normalized) URL instead of its components')
    return arg_parser


def parse_url_main(argv=None):
    arg_parser = _make_parse_url_arg_parser()
    args = arg_parser.parse_args(argv)
    with logging_configured():
        config_section = Config.section(
            URL_NORMALIZER_CONFIG_SPEC,
            overrides=args.config_override)
        normalizer = make_url_normalizer(config_section)
        for url in args.urls:
            if args.normalized:
                print(unparse_url(normalizer.normalize(url)))
            else:
                print(json.dumps(normalizer.normalize(url, args.component)))
        sys.stdout.flush()


if __name__ == '__main__':
    parse_url_main()
