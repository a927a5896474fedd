#!/usr/bin/env python

from setuptools import setup

setup(name='cfddns',
    version='1.0',
    description='Settings for the Cloudflare dynamic DNS update plugin',
    author='CFDDNS contributors',
    package_dir = {'': 'src'},
    packages = ['cfddns'],
    python_requires = '>=3.8',
    install_requires = [
        'pyyaml',
        'click',
        'pydantic>=2',
        ],
    extras_require = {
        'test': ['pytest'],
        },
    entry_points = {
        'console_scripts': [
            'cfddns = cfddns:main',
            ],
        },
   )
