# Copyright (c) 2013-2025 NASK. All rights reserved.

import glob
import os.path as osp
import sys

from setuptools import setup, find_packages


setup_dir, setup_filename = osp.split(osp.abspath(__file__))
setup_human_readable_ref = osp.join(osp.basename(setup_dir), setup_filename)

def get_mbcommon_version(filename_base):
    path_base = osp.join(setup_dir, filename_base)
    path_glob_pattern = path_base + '*'
    # The non-suffixed path variant should be
    # tried only if another one does not exist.
    matching_paths = sorted(glob.iglob(path_glob_pattern),
                            reverse=True)
    try:
        path = matching_paths[0]
    except IndexError:
        sys.exit('[{}] Cannot determine the mbcommon version '
                 '(no files match the pattern {!a}).'
                 .format(setup_human_readable_ref,
                         path_glob_pattern))
    try:
        with open(path, encoding='ascii') as f:
            return f.read().strip()
    except (OSError, UnicodeError) as exc:
        sys.exit('[{}] Cannot determine the mbcommon version '
                 '(an error occurred when trying to '
                 'read it from the file {!a} - {}).'
                 .format(setup_human_readable_ref,
                         path,
                         exc))

def setup_data_line_generator(filename_base):
    path_base = osp.join(setup_dir, filename_base)
    path_glob_pattern = path_base + '*'
    # Here we sort the paths just to make the order of operations deterministic.
    matching_paths = sorted(glob.iglob(path_glob_pattern))
    for path in matching_paths:
        try:
            with open(path, encoding='ascii') as f:
                for raw_line in f:
                    yield raw_line.strip()
        except (OSError, UnicodeError) as exc:
            sys.exit('[{}] Could not read from the file {!a} ({})'
                     .format(setup_human_readable_ref, path, exc))


mbcommon_version = get_mbcommon_version('.mbcommon-version')

requirements = []
for line in setup_data_line_generator('requirements'):
    if not line or line.startswith('#'):
        continue
    requirements.append(line)


setup(
    name="mbcommon",
    version=mbcommon_version,

    packages=find_packages(exclude=['mbcommon.tests']),
    include_package_data=True,
    python_requires='>=3.11',
    zip_safe=False,
    install_requires=requirements,
    extras_require={
        'dev': [
            'invoke',
            'pytest',
            'unittest_expander',
        ],
    },
    entry_points={
      'console_scripts': [
        'mbcommon_parse_url = mbcommon.scripts:parse_url_main',
      ],
    },

    description='Multibyte-safe text helpers and a lenient URL normalization engine',
    maintainer='CERT Polska',
    maintainer_email='n6@cert.pl',
    classifiers=[
        'License :: OSI Approved :: GNU Affero General Public License v3',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Text Processing',
    ],
    keywords='url normalization idn multibyte strings',
)
