# Copyright (c) 2013-2025 NASK. All rights reserved.

import os.path as osp


TOPLEVEL_MBCOMMON_PACKAGES = 'mbcommon',


ETC_DIR = '/etc/mbcommon'
USER_DIR = osp.expanduser('~/.mbcommon')


# the scheme used to complete protocol-relative URLs (`//host/...`)
DEFAULT_SCHEME = 'https'

# a placeholder scheme prepended to scheme-less input so that its
# first segment is parsed as the host (and not as a part of the path);
# it never appears in any results
SENTINEL_SCHEME = 'mbcommon-scheme-placeholder'
