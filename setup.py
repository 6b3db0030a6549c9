#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Installation script

Version handling borrowed from pandas (http://pandas.pydata.org).
Pretty much everything else borrowed from geopandas (http://geopandas.org).
"""

# Copyright (C) 2015, Carson Farmer <carsonfarmer@gmail.com>
# All rights reserved. MIT Licensed.

import os
import subprocess
import warnings

from setuptools import setup, find_packages

PACKAGE_NAME = "msfstore"

LONG_DESCRIPTION = "A mergeable approximate-frequency histogram that bins"\
    " values by a fixed number of significant digits, supporting combine,"\
    " cancel and pointwise-minimum composition and a compact binary format."

MAJOR = 0
MINOR = 1
MICRO = 0
ISRELEASED = True
VERSION = '%d.%d.%d' % (MAJOR, MINOR, MICRO)
QUALIFIER = ''

FULLVERSION = VERSION
if not ISRELEASED:
    FULLVERSION += '.dev'
    try:
        try:
            pipe = subprocess.Popen(["git", "rev-parse", "--short", "HEAD"],
                                    stdout=subprocess.PIPE).stdout
        except OSError:
            # msysgit compatibility
            pipe = subprocess.Popen(
                ["git.cmd", "describe", "HEAD"],
                stdout=subprocess.PIPE).stdout
        rev = pipe.read().strip().decode('ascii')

        FULLVERSION = '%d.%d.%d.dev-%s' % (MAJOR, MINOR, MICRO, rev)
    except OSError:
        warnings.warn("WARNING: Couldn't get git revision")
else:
    FULLVERSION += QUALIFIER


def write_version_py(filename=None):
    cnt = """\
version = '%s'
short_version = '%s'
"""
    if not filename:
        filename = os.path.join(
            os.path.dirname(os.path.abspath(__file__)), PACKAGE_NAME,
            'version.py')

    with open(filename, 'w') as a:
        a.write(cnt % (FULLVERSION, VERSION))

write_version_py()

setup(name=PACKAGE_NAME,
      version=FULLVERSION,
      description='Mergeable approximate-frequency histograms in Python.',
      license='MIT',
      author='Carson Farmer',
      author_email='carsonfarmer@gmail.com',
      url='http://carsonfarmer.com/',
      keywords="histogram frequency binning merge data summary",
      long_description=LONG_DESCRIPTION,
      packages=find_packages(".", exclude=["licenses", "docs", "examples"]),
      install_requires=["sortedcontainers"],
      extras_require={"test": ["pytest"]},
      python_requires=">=3.6",
      zip_safe=True,
      classifiers=["Development Status :: 2 - Pre-Alpha",
                   "Intended Audience :: Science/Research",
                   "Intended Audience :: Developers",
                   "Intended Audience :: Information Technology",
                   "License :: OSI Approved :: MIT License",
                   "Natural Language :: English",
                   "Operating System :: OS Independent",
                   "Programming Language :: Python :: 3",
                   "Topic :: Scientific/Engineering :: Information Analysis",
                   "Topic :: System :: Distributed Computing",
                   ]
      )
