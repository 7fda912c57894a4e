# Copyright (c) 2013-2025 NASK. All rights reserved.

import ipaddress


def is_ipv6_address(s):
    """
    Check whether the given `str` is a bare IPv6 address (without
    brackets and without any zone id).

    >>> is_ipv6_address('::1')
    True
    >>> is_ipv6_address('2001:DB8::8:800:200C:417A')
    True
    >>> is_ipv6_address('::ffff:192.0.2.128')
    True
    >>> is_ipv6_address('[::1]')
    False
    >>> is_ipv6_address('fe80::1%eth0')
    False
    >>> is_ipv6_address('192.0.2.128')
    False
    >>> is_ipv6_address('example.com')
    False
    >>> is_ipv6_address(b'::1')
    False
    """
    if not isinstance(s, str) or '%' in s:
        return False
    try:
        ipaddress.IPv6Address(s)
    except ValueError:
        return False
    return True


def normalize_ip_literal(s):
    """
    Get the canonical (compressed, lowercase) form of the given IPv4
    or IPv6 address.

    An IPv6 zone id (`%...`), if any, is kept intact. Raises
    `ValueError` if the given `str` is not a valid IP address.

    >>> normalize_ip_literal('2001:0DB8:0000:0000:0008:0800:200C:417A')
    '2001:db8::8:800:200c:417a'
    >>> normalize_ip_literal('0:0:0:0:0:0:0:1')
    '::1'
    >>> normalize_ip_literal('FE80::0001%eth0')
    'fe80::1%eth0'
    >>> normalize_ip_literal('192.0.2.1')
    '192.0.2.1'
    >>> normalize_ip_literal('example.com')       # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    >>> normalize_ip_literal('::1%')              # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    """
    if not isinstance(s, str):
        raise TypeError('{!a} is not a str'.format(s))
    address, percent, zone = s.partition('%')
    if percent:
        if not zone:
            raise ValueError('{!a} has an empty IPv6 zone id'.format(s))
        return ipaddress.IPv6Address(address).compressed + percent + zone
    return ipaddress.ip_address(address).compressed
