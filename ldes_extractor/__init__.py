# -*- coding: utf-8 -*-
"""LDES Extractor - time-bounded extractions and version materializations of Linked Data Event Streams."""

__version__ = "0.1.0"

from .classifier import Classification, classify
from .config import ExtractorSettings, get_settings
from .config.extraction import ExtractionConfig, ExtractionWindow, ExtractorOptions
from .conversion import (
    load_store,
    member_stream_to_store,
    parse_store,
    store_as_member_stream,
    store_to_string,
    turtle_string_to_store,
)
from .errors import (
    ClassificationError,
    ConfigurationError,
    ExtractorError,
    MetadataNotReadyError,
)
from .extractor import Extractor
from .metadata import build_metadata, create_extractor_metadata
from .operators import ExtractorOperator
from .types import MalformedItem, Member, Quad

__all__ = [
    '__version__',
    'Classification',
    'ClassificationError',
    'ConfigurationError',
    'ExtractionConfig',
    'ExtractionWindow',
    'Extractor',
    'ExtractorError',
    'ExtractorOperator',
    'ExtractorOptions',
    'ExtractorSettings',
    'MalformedItem',
    'Member',
    'MetadataNotReadyError',
    'Quad',
    'build_metadata',
    'classify',
    'create_extractor_metadata',
    'get_settings',
    'load_store',
    'member_stream_to_store',
    'parse_store',
    'store_as_member_stream',
    'store_to_string',
    'turtle_string_to_store',
]
