# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
Conversions between `str`, binary data and other objects.

Binary data are always treated as UTF-8. The `'surrogateescape'`
error handler lets arbitrary bytes survive a decode/encode round trip:

>>> as_bytes(as_unicode(b'\\xdd\\xc5\\xbc', 'surrogateescape'))
b'\\xdd\\xc5\\xbc'
"""


_BINARY_TYPES = (bytes, bytearray, memoryview)

_FLAG_WORDS = {
    True: ('1', 'y', 'yes', 't', 'true', 'on'),
    False: ('0', 'n', 'no', 'f', 'false', 'off'),
}

_LOWERCASE_FLAG_WORD_TO_BOOL = {
    word: value
    for value, words in _FLAG_WORDS.items()
    for word in words}


def as_unicode(obj, decode_error_handling='strict'):
    """
    Get a `str` from any object.

    Binary data are decoded (with the given error handler); any other
    object is passed to `str()` or, if that raises `ValueError` (e.g.,
    a `UnicodeError`), to `repr()`.

    >>> as_unicode(b'ca\\xc5\\x82a') == 'cała'
    True
    >>> as_unicode(memoryview(b'ca\\xc5\\x82a')) == 'cała'
    True
    >>> as_unicode(b'\\xdd', 'surrogateescape') == '\\udcdd'
    True
    >>> as_unicode(b'\\xdd')                       # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    UnicodeDecodeError: ...
    >>> as_unicode(3.5)
    '3.5'
    """
    if isinstance(obj, _BINARY_TYPES):
        return bytes(obj).decode('utf-8', decode_error_handling)
    try:
        return str(obj)
    except ValueError:
        return repr(obj)


def ascii_str(obj):
    """
    Like `as_unicode()`, but never raising on undecodable data and with
    every non-ASCII character backslash-escaped (handy for log and
    error messages).

    >>> ascii_str('gęś')
    'g\\\\u0119\\\\u015b'
    >>> ascii_str(b'g\\xc4\\x99\\xdd')
    'g\\\\u0119\\\\udcdd'
    >>> ascii_str(KeyError('x'))
    "'x'"
    """
    s = as_unicode(obj, 'surrogateescape')
    return s.encode('ascii', 'backslashreplace').decode('ascii')


def as_bytes(obj, encode_error_handling='surrogateescape'):
    """
    Get `bytes` from a `str` (encoded with the given error handler)
    or from other binary data. Anything else causes `TypeError`.

    >>> as_bytes('gęś')
    b'g\\xc4\\x99\\xc5\\x9b'
    >>> as_bytes(bytearray(b'xyz'))
    b'xyz'
    >>> as_bytes(7)                                  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    """
    if isinstance(obj, str):
        return obj.encode('utf-8', encode_error_handling)
    if isinstance(obj, _BINARY_TYPES):
        return bytes(obj)
    raise TypeError('cannot get bytes from {!a}'.format(obj))


def str_to_bool(s):
    """
    Interpret a (case-insensitive) yes/no word.

    >>> [str_to_bool(w) for w in ('1', 'Yes', 'ON', 't')]
    [True, True, True, True]
    >>> [str_to_bool(w) for w in ('0', 'nO', 'off', 'False')]
    [False, False, False, False]
    >>> str_to_bool('perhaps')                       # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    >>> str_to_bool(b'yes')                          # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    """
    if not isinstance(s, str):
        raise TypeError('expected a str, got {!a}'.format(s))
    try:
        return _LOWERCASE_FLAG_WORD_TO_BOOL[s.lower()]
    except KeyError:
        raise ValueError('{!a} is not a yes/no word (expected one of: {})'.format(
            s, ', '.join(_FLAG_WORDS[True] + _FLAG_WORDS[False]))) from None
