#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
gobarchive - 零依赖 Python GOB 归档读写库

支持解析 GOB 文件、从内存归档构建 GOB 文件，以及目录树与归档之间的互相转换。
"""

__version__ = "0.1.0"

# 异常类
from .exceptions import (
    GobError,
    InvalidFormatError,
    InvalidSignatureError,
    UnsupportedVersionError,
    TruncatedBufferError,
    OffsetOutOfBoundsError,
    InvalidPathError,
    PathTooLongError,
    ImportIoError,
    ArchiveTooLargeError,
)

# 工具函数
from .utils import normalize_path, encode_path, decode_path_field

# 数据结构
from .core import GobHeader, FileEntry, ProgressInfo

# Archive
from .archive import (
    GobArchive,
    GobReader,
    GobBuilder,
    parse_gob,
    read_gob,
    build_gob,
    write_gob,
    walk_directory,
    import_directory,
    export_directory,
)

__all__ = [
    # 版本
    "__version__",
    # 异常
    "GobError",
    "InvalidFormatError",
    "InvalidSignatureError",
    "UnsupportedVersionError",
    "TruncatedBufferError",
    "OffsetOutOfBoundsError",
    "InvalidPathError",
    "PathTooLongError",
    "ImportIoError",
    "ArchiveTooLargeError",
    # 工具
    "normalize_path",
    "encode_path",
    "decode_path_field",
    # 数据结构
    "GobHeader",
    "FileEntry",
    "ProgressInfo",
    # Archive
    "GobArchive",
    "GobReader",
    "GobBuilder",
    "parse_gob",
    "read_gob",
    "build_gob",
    "write_gob",
    "walk_directory",
    "import_directory",
    "export_directory",
]
