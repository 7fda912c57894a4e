# Copyright (c) 2013-2025 NASK. All rights reserved.

import codecs
import re
from typing import (
    Protocol,
    runtime_checkable,
)

from mbcommon.log_helpers import get_logger


LOGGER = get_logger(__name__)


# (based on RFC 3490
# as well as https://www.unicode.org/reports/tr46/#TableDerivationStep1)
DOMAIN_LABEL_SEPARATOR_REGEX = re.compile('[.\u3002\uff0e\uff61]')



@runtime_checkable
class IdnToAsciiConverter(Protocol):

    r"""
    A [protocol](https://peps.python.org/pep-0544/) of objects that
    convert an internationalized domain name (IDN) to its ASCII form.

    Such an object can be passed as the `idn_converter` argument to
    `mbcommon.url_helpers.UrlNormalizer` (and `parse_url()`); typically,
    it is one of the two implementations provided by this module:
    `IdnaCodecConverter` or `NoopIdnConverter`.

    Note that this protocol is a runtime-checkable one.

    >>> isinstance(IdnaCodecConverter(), IdnToAsciiConverter)
    True
    >>> isinstance(NoopIdnConverter(), IdnToAsciiConverter)
    True
    >>> isinstance('example.com', IdnToAsciiConverter)
    False
    """

    def to_ascii(self, host: str) -> str:
        """
        Convert the given host name to its ASCII-compatible form.

        This method is never supposed to raise an exception because
        of the content of `host`: any part that cannot be converted
        is to be left intact.
        """


class IdnaCodecConverter:

    r"""
    IDN to ASCII converter based on the Python's built-in `idna` codec
    (which implements RFC 3490, i.e., IDNA 2003).

    The host is split into labels (the separators are: `.` and its
    ideographic/full-width variants: U+3002, U+FF0E, U+FF61); each
    non-ASCII label is converted, the rest are left as they are; then
    all labels are joined with `.`.

    >>> conv = IdnaCodecConverter()
    >>> conv.to_ascii('Bücher.example')
    'xn--bcher-kva.example'
    >>> conv.to_ascii('Bücher\u3002PL')
    'xn--bcher-kva.PL'
    >>> conv.to_ascii('[::1]')
    '[::1]'

    A label that cannot be converted is left intact:

    >>> conv.to_ascii('\udcdd.example')
    '\udcdd.example'
    """

    def to_ascii(self, host: str) -> str:
        return '.'.join(map(self._label_to_ascii, DOMAIN_LABEL_SEPARATOR_REGEX.split(host)))

    def _label_to_ascii(self, label: str) -> str:
        if label.isascii():
            return label
        try:
            return label.encode('idna').decode('ascii')
        except UnicodeError as exc:
            LOGGER.debug('could not convert the domain label %a to ASCII (%s)', label, exc)
            return label


class NoopIdnConverter:

    """
    A passthrough (*no-op*) IDN converter.

    >>> NoopIdnConverter().to_ascii('żółw.pl')
    'żółw.pl'
    """

    def to_ascii(self, host: str) -> str:
        return host


def is_idna_codec_available() -> bool:
    """
    Check whether the `idna` codec can be looked up.

    The check is performed on each call (nothing is cached).

    >>> is_idna_codec_available()
    True
    """
    try:
        codecs.lookup('idna')
    except LookupError:
        return False
    return True


def get_idn_converter(enabled: bool = True) -> IdnToAsciiConverter:
    """
    Get an IDN converter: an `IdnaCodecConverter` if `enabled` is true
    and the `idna` codec is available; otherwise a `NoopIdnConverter`.

    >>> type(get_idn_converter()).__name__
    'IdnaCodecConverter'
    >>> type(get_idn_converter(enabled=False)).__name__
    'NoopIdnConverter'
    """
    if enabled and is_idna_codec_available():
        return IdnaCodecConverter()
    return NoopIdnConverter()
