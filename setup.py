#!/usr/bin/env python

"""
Install jointaf for developers with pip local:
 `cd jointaf/`
 `pip install -e .`
"""

import re
from setuptools import setup, find_packages


# Fetch version from __init__.py
INITFILE = "jointaf/__init__.py"
CUR_VERSION = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                        open(INITFILE, "r").read(),
                        re.M).group(1)

setup(
    name="jointaf",
    version=CUR_VERSION,
    author="jointaf developers",
    description="Posterior estimation of population allele frequencies at variant sites",
    long_description=open('README.rst').read(),
    long_description_content_type='text/x-rst',
    packages=find_packages(),
    install_requires=[
        "numpy",
        "numba",
        "pandas",
        "pydantic>=2",
        "loguru",
        "ipython",
    ],
    extras_require={"test": ["pytest"]},
    license='GPL',
    python_requires=">=3.8",
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
)
