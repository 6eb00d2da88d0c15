"""Segmenters that cut an issue into article blocks."""

from .document_segmenter import segment_document, split_reference_lines

__all__ = ["segment_document", "split_reference_lines"]
