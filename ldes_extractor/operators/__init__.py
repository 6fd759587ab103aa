"""Streaming operators for LDES member streams."""

from .extract import ExtractorOperator, MetadataListener

__all__ = ['ExtractorOperator', 'MetadataListener']
