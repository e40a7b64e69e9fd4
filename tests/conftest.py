#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
pytest 全局配置

提供共享 fixtures 和手工构造 GOB 字节的工具。
"""

import struct
from typing import List, Tuple

import pytest

from gobarchive import GobArchive


# ==================== 手工构造 GOB ====================

def make_gob(
    files: List[Tuple[bytes, bytes]],
    body_offset: int = 12,
    signature: bytes = b"GOB ",
    version: int = 0x14,
) -> bytes:
    """
    不经过 GobBuilder，直接按格式拼出 GOB 字节
    
    Args:
        files: [(128 字节以内的原始路径字段, 文件内容), ...]
        body_offset: 文件表位置，大于 12 时中间以 0xEE 填充
        
    Returns:
        完整的 GOB 字节
    """
    header = struct.pack("<4sII", signature, version, body_offset)
    padding = b"\xee" * (body_offset - len(header))
    
    data_start = body_offset + 4 + 136 * len(files)
    table = struct.pack("<I", len(files))
    offset = data_start
    for raw_path, data in files:
        table += struct.pack("<II128s", offset, len(data), raw_path)
        offset += len(data)
    
    return header + padding + table + b"".join(data for _, data in files)


def entry_position(index: int, body_offset: int = 12) -> int:
    """第 index 个文件表条目的绝对位置"""
    return body_offset + 4 + 136 * index


# ==================== 基础 Fixtures ====================

@pytest.fixture
def sample_archive() -> GobArchive:
    """两个文件的归档"""
    archive = GobArchive()
    archive.add("foo.bar", b"foobar")
    archive.add("fizz.buzz", b"fizzbuzz")
    return archive


@pytest.fixture
def sample_files(tmp_path) -> tuple:
    """
    创建测试目录
    
    Returns:
        (目录路径, 文件内容字典)
    """
    files = {
        "a/x.txt": b"x content",
        "b.txt": b"b content",
        "3do/mat/dflt.mat": b"MAT \x32\x00\x00\x00" + bytes(range(64)),
        "sound/empty.wav": b"",
        "中文/文件.txt": "中文内容".encode("utf-8"),
    }
    
    root = tmp_path / "src"
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    
    return root, files
