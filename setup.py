#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name='passgen',
    version='1.0.0',
    description='Password generator with normalized entropy estimates',
    packages=find_packages(include=['passgen', 'passgen.*']),
    python_requires='>=3.8',
    install_requires=[
        'pynacl',
        'blessed',
        'pyperclip',
    ],
    extras_require={
        'test': ['pytest', 'pytest-asyncio'],
    },
    entry_points={
        'console_scripts': ['passgen = passgen.main:main'],
    },
)
