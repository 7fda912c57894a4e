# Copyright (c) 2013-2025 NASK. All rights reserved.

from argparse import Action, ArgumentParser


class MbConfigValuesAction(Action):

    """
    A custom implementation of the `argparser`'s `action` argument.

    Splits arguments provided by user into dictionary
    which holds dictionaries with values for various
    options of config sections.
    """

    def __init__(self, option_strings, dest, nargs='*', **kwargs):
        super().__init__(option_strings, dest, nargs, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        custom_config_values = {}
        for value in values:
            section_option, sep, section_option_value = value.partition('=')
            section, dot, option = section_option.partition('.')
            if not (sep and dot and section and option):
                parser.error('illegal config override {!a} (expected: '
                             '<section>.<option>=<value>)'.format(value))
            custom_config_values.setdefault(section, {})[option] = section_option_value
        setattr(namespace, self.dest, custom_config_values)


class MbArgumentParser(ArgumentParser):

    """
    Generic argument parser for *mbcommon* scripts.

    Command line arguments provided by this class::
        `--config-override`:
            makes it possible to override any configuration options
            for the particular script run.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        if not self.description:
            self.description = "mbcommon-specific options"
        self.add_argument('--config-override',
                          action=MbConfigValuesAction,
                          default={},
                          metavar='SECTION.OPTION=VALUE',
                          help=('override the script\'s config options '
                                'for the particular run. Provide options '
                                'in the format: <section>.<option>=<value> '
                                '(to provide several options, just separate '
                                'them with spaces, e.g.: sect_a.opt1=val1 '
                                'sect_a.opt2=val2 sect_b.opt3=val3)'))

    def get_config_overridden_dict(self, args=None):
        cmdline_args, _ = self.parse_known_args(args)
        return cmdline_args.config_override
