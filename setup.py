#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
from setuptools import setup

scriptPath = os.path.abspath( os.path.dirname( __file__ ) )
with open( os.path.join( scriptPath, 'README.md' ), encoding = 'utf-8' ) as file:
    readmeContents = file.read()

setup(
    name             = 'resourcefs',
    version          = '0.1.0',

    description      = 'Read-Only Directory Hierarchies Synthesized From URL Lists',
    license          = 'MIT',
    classifiers      = [ 'License :: OSI Approved :: MIT License',
                         'Development Status :: 4 - Beta',
                         'Natural Language :: English',
                         'Operating System :: MacOS',
                         'Operating System :: Unix',
                         'Programming Language :: Python :: 3',
                         'Programming Language :: Python :: 3.9',
                         'Programming Language :: Python :: 3.10',
                         'Programming Language :: Python :: 3.11',
                         'Programming Language :: Python :: 3.12',
                         'Topic :: System :: Filesystems' ],

    long_description = readmeContents,
    long_description_content_type = 'text/markdown',

    packages         = [ 'resourcefs' ],
    python_requires  = '>=3.9',
    install_requires = [
        'fsspec',
    ],
    extras_require   = {
        # fsspec's HTTP implementation requires aiohttp.
        'http'  : [ 'aiohttp', 'requests' ],
        'test'  : [ 'pytest' ],
    },
)
