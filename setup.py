#!/usr/bin/env python3

import os
import sys
from typing import List

from setuptools import setup

SETUP_DIR = os.path.dirname(__file__)
README = os.path.join(SETUP_DIR, "README.rst")

needs_pytest = {"pytest", "test", "ptr"}.intersection(sys.argv)
pytest_runner: List[str] = ["pytest < 9", "pytest-runner"] if needs_pytest else []

install_requires = [
    "requests >= 1.0",
    "CacheControl[filecache] >= 0.13.1, < 0.15",
    "rdflib >= 6.0.0, < 8.0.0",
]

extras_require = {
    "testing": ["pytest < 9"],
}

setup(
    name="rdf-isomorphic",
    version="1.0.0",
    description="Isomorphism checks and blank node bijections for RDF graphs",
    long_description=open(README).read(),
    long_description_content_type="text/x-rst",
    author="rdf-isomorphic contributors",
    license="Apache 2.0",
    python_requires=">=3.8",
    setup_requires=pytest_runner,
    packages=["rdf_isomorphic", "rdf_isomorphic.tests"],
    package_data={
        "rdf_isomorphic": ["py.typed"],
        "rdf_isomorphic.tests": [
            "isomorphic/*/*.nt",
            "non_isomorphic/*/*.nt",
            "quads/*.nq",
        ],
    },
    install_requires=install_requires,
    extras_require=extras_require,
    tests_require=["pytest<9"],
    entry_points={
        "console_scripts": [
            "rdf-isomorphic-tool=rdf_isomorphic.main:main",
        ]
    },
    zip_safe=True,
    classifiers=[
        "Environment :: Console",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: POSIX",
        "Operating System :: MacOS :: MacOS X",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Typing :: Typed",
    ],
)
