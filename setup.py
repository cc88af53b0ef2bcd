#!/usr/bin/env python

import os
import re
from setuptools import setup

version_file = os.path.join('formbind', '__init__.py')
with open(version_file, 'rb') as f:
    version_data = f.read().strip().decode('ascii')

version_re = re.compile(r'((?:\d+)\.(?:\d+)\.(?:\d+))')
version = version_re.search(version_data).group(0)

tests_require = [
    'pytest',
    'pytest-cov',
    'pytest-timeout',
    'PyYAML',
]

fuzz_require = [
    'atheris',
]

dev_require = tests_require + [
    'invoke',
    'nox',
    'twine',
    'wheel',
]

setup(name='formbind',
      version=version,
      description='Bind urlencoded form pairs to typed Python records',
      license='Apache',
      platforms='any',
      zip_safe=False,
      extras_require={
          'test': tests_require,
          'fuzz': fuzz_require,
          'dev': dev_require,
      },
      packages=[
          'formbind',
      ],
      python_requires='>=3.10',
      classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries :: Python Modules'
      ],
     )
