# Copyright (c) 2013-2025 NASK. All rights reserved.


class InvalidComponentError(ValueError):

    r"""
    Raised when a URL component selector is not one of the
    `mbcommon.url_helpers.UrlComponent` members (or their values).

    This is a programming error (contract violation) rather than
    a problem with the processed data -- so it is never degraded
    into an empty result.

    >>> exc = InvalidComponentError('hostname')
    >>> isinstance(exc, ValueError)
    True
    >>> print(exc)
    unknown URL component selector: 'hostname'
    >>> exc.component
    'hostname'

    >>> print(InvalidComponentError(b'Cz\xc4\x99\xc5\x9b\xc4\x87'))
    unknown URL component selector: b'Cz\xc4\x99\xc5\x9b\xc4\x87'
    >>> print(InvalidComponentError('Część'))
    unknown URL component selector: 'Cz\u0119\u015b\u0107'
    """

    def __init__(self, component, *args):
        msg = 'unknown URL component selector: {!a}'.format(component)
        super().__init__(msg, *args)
        self.component = component
