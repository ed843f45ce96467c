#!/usr/bin/env python
"""
skua
====

skua is a Python client for `Sentry <https://sentry.io/>`_. It captures
events (messages, exceptions, stack traces, breadcrumbs and user context),
encodes them for the store API and reports back the ID Sentry assigned or
the reason it refused them.
"""

from setuptools import setup, find_packages
import re
import ast


_version_re = re.compile(r'VERSION\s+=\s+(.*)')

with open('skua/__init__.py', 'rb') as f:
    version = str(ast.literal_eval(_version_re.search(
        f.read().decode('utf-8')).group(1)))


install_requires = [
    'requests>=2.20',
]

tests_require = [
    'flake8',
    'mock',
    'pytest>=6.0',
    'pytest-cov',
    'pytz',
    'responses',
]


setup(
    name='skua',
    version=version,
    author='Sentry',
    author_email='hello@getsentry.com',
    url='https://github.com/getsentry/skua',
    description='skua is a client for the Sentry store API (https://sentry.io)',
    long_description=__doc__,
    packages=find_packages(exclude=("tests", "tests.*",)),
    zip_safe=False,
    python_requires='>=3.8',
    extras_require={
        'tests': tests_require,
    },
    license='BSD',
    install_requires=install_requires,
    include_package_data=True,
    classifiers=[
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python',
        'Topic :: Software Development',
    ],
)
