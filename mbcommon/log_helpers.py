# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
Logging-related helpers.

Importing *mbcommon* does not touch the global logging setup. Only
`configure_logging()` (or the `logging_configured()` context manager,
used by the console scripts) does that.
"""

import contextlib
import logging
import logging.config
import os.path
import sys
from pathlib import PurePath

from mbcommon.const import (
    ETC_DIR,
    TOPLEVEL_MBCOMMON_PACKAGES,
    USER_DIR,
)


BASIC_LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def get_logger(name=None):
    """
    Get a logger, just as `logging.getLogger()` does, except that the
    name `'__main__'` is replaced with the dotted name of the module
    actually being run.

    That name is taken from `__main__.__spec__` (if the module has been
    run with `python -m ...`); otherwise it is derived from the script
    path, starting from the last *mbcommon* package directory found in
    the path (e.g., `'/whatever/mbcommon/scripts.py'` gives the name
    `'mbcommon.scripts'`) or, if there is no such directory, from the
    whole path.
    """
    if name == '__main__':
        name = _get_main_module_name()
    return logging.getLogger(name)


def _get_main_module_name():
    main_module = sys.modules['__main__']
    main_spec = getattr(main_module, '__spec__', None)
    if main_spec is not None and main_spec.name:
        return main_spec.name
    script_path = getattr(main_module, '__file__', None) or sys.argv[0]
    segments = [
        segment
        for segment in PurePath(os.path.splitext(script_path)[0]).parts
        if segment.strip('./\\')]
    package_indexes = [
        i for i, segment in enumerate(segments)
        if segment in TOPLEVEL_MBCOMMON_PACKAGES]
    if package_indexes:
        segments = segments[package_indexes[-1]:]
    return '.'.join(segments)


_LOGGER = get_logger(__name__)

_loaded_configuration_paths = set()


def configure_logging(suffix=None, config_dirs=(ETC_DIR, USER_DIR)):
    """
    Load the logging configuration from the `logging.conf` files (or,
    if `suffix` is given, from `logging-<suffix>.conf` files) found in
    `config_dirs` (by default: the system-wide and the per-user config
    directories), using `logging.config.fileConfig()`.

    Each file is loaded at most once per process. If no file has been
    loaded at all, a basic *stderr* configuration is applied (and a
    warning is logged).

    Returns:
        A list of paths of the files loaded by this call.

    Raises:
        `RuntimeError` if any of the existing files could not be applied.
    """
    file_name = ('logging.conf' if suffix is None
                 else 'logging-{}.conf'.format(suffix))
    candidate_paths = [os.path.join(config_dir, file_name)
                       for config_dir in config_dirs]
    loaded_now = [path for path in candidate_paths
                  if _load_configuration_file(path)]
    if not _loaded_configuration_paths:
        logging.basicConfig(format=BASIC_LOG_FORMAT)
        _LOGGER.warning('no logging configuration file could be opened '
                        '(tried: %s), so the basic configuration is used '
                        '(logging to stderr)',
                        ', '.join(map(ascii, candidate_paths)))
    return loaded_now


def _load_configuration_file(path):
    if path in _loaded_configuration_paths:
        _LOGGER.warning('logging configuration file %a has '
                        'already been loaded (skipping it)', path)
        return False
    try:
        _try_reading(path)
    except OSError:
        return False
    try:
        logging.config.fileConfig(path, disable_existing_loggers=False)
    except Exception as exc:
        raise RuntimeError('could not configure logging using the '
                           'file {!a} ({})'.format(path, exc)) from exc
    _loaded_configuration_paths.add(path)
    _LOGGER.info('logging configuration loaded from %a', path)
    return True


def _try_reading(path):
    with open(path):
        pass


@contextlib.contextmanager
def logging_configured(suffix=None, **kwargs):
    """
    A context manager for a script's main body: it calls
    `configure_logging()` and then logs how the body finished.

    A `KeyboardInterrupt` is turned into `sys.exit(1)`; a `SystemExit`
    or any other exception is logged and re-raised.
    """
    configure_logging(suffix, **kwargs)
    try:
        yield
    except SystemExit as exc:
        if exc.code:
            _LOGGER.critical('exiting with status %a', exc.code, exc_info=True)
        else:
            _LOGGER.info('exiting (status %a)', exc.code)
        raise
    except KeyboardInterrupt:
        _LOGGER.warning('interrupted from the keyboard, exiting')
        sys.exit(1)
    except Exception:
        _LOGGER.critical('unrecoverable error, exiting', exc_info=True)
        raise
