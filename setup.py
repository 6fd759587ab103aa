#!/usr/bin/env python3
"""
Setup script for the LDES Extractor - time-bounded extractions of
versioned Linked Data Event Streams.
"""

from pathlib import Path
from setuptools import setup, find_packages

# Read README for long description
this_directory = Path(__file__).parent
readme_path = this_directory / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text()

setup(
    name="ldes-extractor",
    version="0.1.0",
    description="Time-window extractions and version materializations of Linked Data Event Streams",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",

    packages=find_packages(exclude=["tests*", "examples*", "docs*"]),
    include_package_data=True,

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],

    python_requires=">=3.9",

    install_requires=[
        "rdflib>=7.0.0",  # RDF stores, parsers and serializers
        "rich>=12.0.0",
        "typer>=0.7.0",
    ],

    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
        ],
    },

    # Entry points for command-line scripts
    entry_points={
        "console_scripts": [
            "ldes-extractor = ldes_extractor.cli:main",
        ],
    },

    zip_safe=False,
)
