#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
gobarchive 核心模块

提供二进制 I/O 封装、定长记录定义和进度跟踪。
"""

from .binary_io import BinaryReader, BinaryWriter
from .schema import (
    GobHeader, FileEntry, SIGNATURE, VERSION, HEADER_SIZE,
    DEFAULT_BODY_OFFSET, FILE_COUNT_SIZE, ENTRY_SIZE,
    PATH_FIELD_SIZE, MAX_PATH_BYTES, content_start
)
from .progress import ProgressInfo, ProgressTracker, ProgressCallback

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "GobHeader",
    "FileEntry",
    "SIGNATURE",
    "VERSION",
    "HEADER_SIZE",
    "DEFAULT_BODY_OFFSET",
    "FILE_COUNT_SIZE",
    "ENTRY_SIZE",
    "PATH_FIELD_SIZE",
    "MAX_PATH_BYTES",
    "content_start",
    # 进度
    "ProgressInfo",
    "ProgressTracker",
    "ProgressCallback",
]
