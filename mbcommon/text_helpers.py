# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
Multibyte-safe text helpers.

Each of the public functions accepts a `str` or a UTF-8 `bytes`
(`bytearray` and `memoryview` are also accepted) and returns a result
of the same kind: `str` for `str` input, `bytes` for any binary input.
Binary input is decoded with the `surrogateescape` error handler, then
processed with exactly the same code as `str` input, and then encoded
back -- so a multibyte character is never split, undecodable bytes
survive intact, and, for any `str` *s*, `f(s.encode()) == f(s).encode()`
(offsets and lengths are always expressed in code points).
"""

import functools
import re

from mbcommon.encoding_helpers import (
    as_bytes,
    as_unicode,
)


STR_PAD_LEFT = 0
STR_PAD_RIGHT = 1
STR_PAD_BOTH = 2

# (Unicode whitespace + NUL)
_TRIMMED_CHARS_REGEX = re.compile(r'\A[\s\x00]+|[\s\x00]+\Z')

_WORD_START_REGEX = re.compile(r'(?:\A|(?<=[\s\-]))\w')

_BINARY_TYPES = (bytes, bytearray, memoryview)


#
# Non-public helpers

def _decoded(s):
    if isinstance(s, str):
        return s
    if isinstance(s, _BINARY_TYPES):
        return as_unicode(s, 'surrogateescape')
    raise TypeError('{!a} is neither a str nor a bytes-like object'.format(s))


def _like(result, original):
    if isinstance(original, str):
        return result
    return as_bytes(result, 'surrogateescape')


def _recursive_text_transformation(func):

    # The decorated `func` is to take a `str` and return a `str`.
    # The resultant function handles `bytes` as described in the module
    # docstring, and (recursively) the items of lists/tuples and the
    # values of dicts. Any other object is returned intact if `strict`
    # is true; otherwise it is coerced to `str` (`None` to '') first.

    @functools.wraps(func)
    def wrapper(s, strict=False):
        if isinstance(s, (str,) + _BINARY_TYPES):
            return _like(func(_decoded(s)), s)
        if isinstance(s, (list, tuple)):
            return type(s)(wrapper(item, strict) for item in s)
        if isinstance(s, dict):
            return {key: wrapper(value, strict) for key, value in s.items()}
        if strict:
            return s
        return func('' if s is None else as_unicode(s))

    return wrapper


#
# Length, searching, slicing

def strlen(s):
    """
    Get the number of code points.

    >>> strlen('Zażółć')
    6
    >>> strlen('Zażółć'.encode('utf-8'))
    6
    >>> strlen(b'\\xdd-xyz')
    5
    """
    return len(_decoded(s))


def strpos(haystack, needle, offset=0):
    """
    Find the (code point) index of the first occurrence of `needle` in
    `haystack`, starting the search at `offset` (a negative one is
    counted from the end). Return `None` if there is no occurrence.

    Raises `ValueError` if `offset` points outside `haystack`.

    >>> strpos('źdźbło, źdźbło', 'bło')
    3
    >>> strpos('źdźbło, źdźbło'.encode('utf-8'), 'bło'.encode('utf-8'), 4)
    11
    >>> strpos('źdźbło, źdźbło', 'bło', -3)
    11
    >>> strpos('źdźbło', 'x') is None
    True
    """
    haystack = _decoded(haystack)
    needle = _decoded(needle)
    index = haystack.find(needle, _resolve_offset(haystack, offset))
    return index if index >= 0 else None


def strrpos(haystack, needle, offset=0):
    """
    Like `strpos()`, but find the *last* occurrence.

    A non-negative `offset` means that the occurrence must start at
    or after it. A negative one is counted from the end and means
    that the occurrence must start at or *before* that position (the
    search proceeds right to left from there).

    >>> strrpos('źdźbło, źdźbło', 'bło')
    11
    >>> strrpos('źdźbło, źdźbło'.encode('utf-8'), 'źdź'.encode('utf-8'))
    8
    >>> strrpos('źdźbło, źdźbło', 'bło', 12) is None
    True
    >>> strrpos('źdźbło, źdźbło', 'bło', -4)
    3
    >>> strrpos('źdźbło, źdźbło', 'bło', -3)
    11
    """
    haystack = _decoded(haystack)
    needle = _decoded(needle)
    start = _resolve_offset(haystack, offset)
    if offset < 0:
        index = haystack.rfind(needle, 0, start + len(needle))
    else:
        index = haystack.rfind(needle, start)
    return index if index >= 0 else None


def _resolve_offset(haystack, offset):
    length = len(haystack)
    start = offset + length if offset < 0 else offset
    if not 0 <= start <= length:
        raise ValueError('offset {!a} not contained in the string'.format(offset))
    return start


def substr(s, start=0, length=None):
    """
    Get a part of the given string (in the PHP's *substr()* manner).

    A negative `start` is counted from the end; a negative `length`
    means that many code points are left off the end.

    >>> substr('Zażółć gęślą jaźń', 7, 5)
    'gęślą'
    >>> substr('Zażółć gęślą jaźń', -4)
    'jaźń'
    >>> substr('Zażółć gęślą jaźń', 2, -11)
    'żółć'
    >>> substr('Zażółć gęślą jaźń'.encode('utf-8'), -4, 2) == 'ja'.encode('utf-8')
    True
    >>> substr('abc', 5)
    ''
    >>> substr('abc', 1, -5)
    ''
    """
    text = _decoded(s)
    text_length = len(text)
    if start < 0:
        start = max(text_length + start, 0)
    if length is None:
        stop = text_length
    elif length < 0:
        stop = text_length + length
    else:
        stop = start + length
    result = text[start:stop] if stop > start else ''
    return _like(result, s)


def substr_count(haystack, needle):
    """
    Count non-overlapping occurrences of `needle` in `haystack`.

    >>> substr_count('ąąąą', 'ąą')
    2
    >>> substr_count('ąąąą'.encode('utf-8'), 'ą'.encode('utf-8'))
    4
    >>> substr_count('abc', '')                 # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    """
    haystack = _decoded(haystack)
    needle = _decoded(needle)
    if not needle:
        raise ValueError('the needle must not be empty')
    return haystack.count(needle)


#
# Transformations (also applicable to containers)

@_recursive_text_transformation
def strtolower(s):
    """
    >>> strtolower('ZAŻÓŁĆ')
    'zażółć'
    >>> strtolower(['ĄĘ', ('Ó', b'\\xc5\\x81')])
    ['ąę', ('ó', b'\\xc5\\x82')]
    >>> strtolower({'x': 'ŚĆ', 'y': 42})
    {'x': 'ść', 'y': '42'}
    >>> strtolower({'x': 'ŚĆ', 'y': 42}, strict=True)
    {'x': 'ść', 'y': 42}
    """
    return s.lower()


@_recursive_text_transformation
def strtoupper(s):
    """
    >>> strtoupper('zażółć')
    'ZAŻÓŁĆ'
    >>> strtoupper(None)
    ''
    >>> strtoupper(None, strict=True) is None
    True
    """
    return s.upper()


@_recursive_text_transformation
def ucfirst(s):
    """
    >>> ucfirst('łódź')
    'Łódź'
    >>> ucfirst('')
    ''
    """
    return s[:1].upper() + s[1:]


@_recursive_text_transformation
def ucwords(s):
    """
    Upper-case the first letter of each word (words are delimited with
    whitespace characters and hyphens).

    >>> ucwords('żółw i jeż-ślimak')
    'Żółw I Jeż-Ślimak'
    """
    return _WORD_START_REGEX.sub(lambda match: match.group(0).upper(), s)


@_recursive_text_transformation
def strrev(s):
    """
    >>> strrev('kajak ćma')
    'amć kajak'
    >>> strrev('ćma'.encode('utf-8')) == 'amć'.encode('utf-8')
    True
    """
    return s[::-1]


@_recursive_text_transformation
def _trim(s):
    return _TRIMMED_CHARS_REGEX.sub('', s)


def trim(s):
    """
    Strip leading and trailing whitespace (any Unicode whitespace) and
    NUL characters. Lists, tuples and dicts are processed recursively;
    other non-text objects are returned intact.

    >>> trim('\\u3000 \\x00 ąę\\t\\n')
    'ąę'
    >>> trim([b' \\xc4\\x85 ', ' x', 7])
    [b'\\xc4\\x85', 'x', 7]
    """
    return _trim(s, strict=True)


#
# Padding, splitting, wrapping

def str_pad(s, pad_length, pad_string=' ', pad_type=STR_PAD_RIGHT):
    """
    Pad the given string to `pad_length` code points.

    >>> str_pad('ćma', 7, '*')
    'ćma****'
    >>> str_pad('ćma', 7, 'źx', STR_PAD_LEFT)
    'źxźxćma'
    >>> str_pad('ćma', 8, '-', STR_PAD_BOTH)
    '--ćma---'
    >>> str_pad('ćma', 2)
    'ćma'
    """
    text = _decoded(s)
    pad_string = _decoded(pad_string)
    if not pad_string:
        raise ValueError('the pad string must not be empty')
    if pad_type not in (STR_PAD_LEFT, STR_PAD_RIGHT, STR_PAD_BOTH):
        raise ValueError('illegal pad type: {!a}'.format(pad_type))
    missing = pad_length - len(text)
    if missing <= 0:
        return _like(text, s)
    if pad_type == STR_PAD_LEFT:
        left, right = missing, 0
    elif pad_type == STR_PAD_RIGHT:
        left, right = 0, missing
    else:
        left = missing // 2
        right = missing - left
    result = _repeated_to_length(pad_string, left) + text + _repeated_to_length(pad_string, right)
    return _like(result, s)


def _repeated_to_length(pad_string, length):
    count = -(-length // len(pad_string))
    return (pad_string * count)[:length]


def str_split(s, split_length=1):
    """
    Split the given string into chunks (of `split_length` code points;
    the last one can be shorter).

    >>> str_split('żółwik', 4)
    ['żółw', 'ik']
    >>> str_split('żó'.encode('utf-8')) == ['ż'.encode('utf-8'), 'ó'.encode('utf-8')]
    True
    >>> str_split('')
    []
    """
    if split_length < 1:
        raise ValueError('split length must be greater than 0 (got: {!a})'.format(split_length))
    text = _decoded(s)
    return [_like(text[i:i+split_length], s)
            for i in range(0, len(text), split_length)]


def wordwrap(s, width=75, break_='\n', cut=False):
    """
    Wrap the given string to the given number of code points, using
    `break_` as the line separator (in the PHP's *wordwrap()* manner:
    only spaces are treated as word boundaries; if `cut` is true,
    words longer than `width` are split).

    >>> wordwrap('The quick brown fox', 10)
    'The quick\\nbrown fox'
    >>> wordwrap('A very long woooooooooooord.', 8, '\\n', True)
    'A very\\nlong\\nwooooooo\\nooooord.'
    >>> wordwrap('Zażółć gęślą jaźń', 6, '<br>')
    'Zażółć<br>gęślą<br>jaźń'
    """
    text = _decoded(s)
    brk = _decoded(break_)
    if not brk:
        raise ValueError('the break string must not be empty')
    if cut and width == 0:
        raise ValueError('cannot force cut when width is 0')
    text_length = len(text)
    brk_length = len(brk)
    chunks = []
    line_start = last_space = 0
    current = 0
    while current < text_length:
        char = text[current]
        if (char == brk[0]
              and current + brk_length < text_length
              and text.startswith(brk, current)):
            # an existing break: start a new line just after it
            chunks.append(text[line_start:current + brk_length])
            current += brk_length - 1
            line_start = last_space = current + 1
        elif char == ' ':
            if current - line_start >= width:
                chunks.append(text[line_start:current] + brk)
                line_start = current + 1
            last_space = current
        elif current - line_start >= width and cut and line_start >= last_space:
            chunks.append(text[line_start:current] + brk)
            line_start = last_space = current
        elif current - line_start >= width and line_start < last_space:
            chunks.append(text[line_start:last_space] + brk)
            line_start = last_space = last_space + 1
        current += 1
    if line_start != current:
        chunks.append(text[line_start:])
    return _like(''.join(chunks), s)
