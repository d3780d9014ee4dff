#!/usr/bin/env python
# -*- coding: utf-8 -*-

import setuptools

with open("README.rst", "r", encoding="utf-8") as fh:
    long_description = fh.read()


setuptools.setup(
    name='comp-db-hook',
    version='0.2.1',
    keywords=['Clang', 'compilation database', 'compile_commands.json'],
    license='LICENSE.txt',
    description='compiler wrapper recording a compilation database.',
    long_description=long_description,
    long_description_content_type="text/x-rst",
    zip_safe=False,
    python_requires=">=3.6",
    packages=['libcompdbhook'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'comp-db-hook = libcompdbhook.hook:comp_db_hook',
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: University of Illinois/NCSA Open Source License",
        "Environment :: Console", "Operating System :: POSIX",
        "Operating System :: MacOS :: MacOS X",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Compilers"
    ]
)
