#!/usr/bin/env python3
"""
LDES Extractor CLI

This module allows the extractor to be run as:
    python -m ldes_extractor

Or installed and run as:
    ldes-extractor
"""

from .cli import main

if __name__ == "__main__":
    main()
