#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
gobarchive Archive

提供 GOB 归档的解析、构建和目录导入导出功能。
"""

from .model import GobArchive
from .reader import GobReader, parse_gob, read_gob
from .builder import GobBuilder, build_gob, write_gob
from .importer import walk_directory, import_directory, export_directory

__all__ = [
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
