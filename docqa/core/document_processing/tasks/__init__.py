"""
Task modules for document processing pipeline.

Exports: AcquisitionTask, ParsingTask, ChunkingTask, IndexingTask
"""

from .acquisition_task import AcquisitionTask, detect_format
from .chunking_task import ChunkingTask, FixedWindowTextSplitter
from .indexing_task import IndexingTask
from .parsing_task import ParsingTask

__all__ = [
    "AcquisitionTask",
    "ChunkingTask",
    "FixedWindowTextSplitter",
    "IndexingTask",
    "ParsingTask",
    "detect_format",
]
