#!/usr/bin/env python3
"""
Setup script for modeless
"""

from setuptools import setup, find_packages
import os
import sys

# Version lives in the package; modeless/__init__.py imports nothing.
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from modeless.__version__ import __version__


def read_file(filename):
    with open(os.path.join(os.path.dirname(__file__), filename), encoding='utf-8') as f:
        return f.read()


setup(
    name='modeless',
    version=__version__,
    description='Modeless romaji-to-Japanese conversion of the word before the cursor',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'docs']),
    python_requires='>=3.8',
    install_requires=[
        'evdev',         # Key names / keycodes for convert and cancel bindings
    ],
    extras_require={
        'gui': ['PyQt5'],  # QPlainTextEdit adapter and the modeless-editor window
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },
    entry_points={
        'console_scripts': [
            'modeless=modeless.cli:main',
        ],
        'gui_scripts': [
            'modeless-editor=modeless.ui.editor_window:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: End Users/Desktop',
        'Topic :: Text Processing :: Linguistic',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Operating System :: POSIX :: Linux',
        'Natural Language :: Japanese',
    ],
)
