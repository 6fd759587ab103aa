# -*- coding: utf-8 -*-
"""LDES extractor test suite."""
