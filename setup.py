#!/usr/bin/env python3
"""
Setup script for layout-carousel-niri
"""

from setuptools import setup, find_packages
import os
import sys

# Import the version
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from layout_carousel.__version__ import __version__

# README for long_description
def read_file(filename):
    with open(os.path.join(os.path.dirname(__file__), filename), encoding='utf-8') as f:
        return f.read()

setup(
    name='layout-carousel-niri',
    version=__version__,
    description='A layout carousel for niri WM - toggles and cycles keyboard layouts from one keybinding',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    author='jarkz',
    url='https://github.com/jarkz/layout-carousel-niri',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=[
        'platformdirs',  # Per-user data and config directories
        'shtab',         # Shell completion scripts for the argparse CLI
        'filelock',      # Advisory lock around the state file
    ],
    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },
    entry_points={
        'console_scripts': [
            'lc-niri=layout_carousel.cli:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: End Users/Desktop',
        'Topic :: Utilities',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Operating System :: POSIX :: Linux',
        'Topic :: Desktop Environment :: Window Managers',
    ],
)
