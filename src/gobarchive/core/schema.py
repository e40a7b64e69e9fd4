#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
gobarchive 数据结构定义

定义 GobHeader、FileEntry 两个定长记录及格式常量。

布局 (全部 Little-Endian):

    Header (12 bytes):  "GOB " | version: u32 | body_offset: u32
    Body @ body_offset: file_count: u32 | FileEntry * file_count | 文件数据
    FileEntry (136 bytes): offset: u32 | size: u32 | path: 128 bytes
"""

import struct
from dataclasses import dataclass
from typing import ClassVar


# ==================== 常量定义 ====================

SIGNATURE = b'GOB '
VERSION = 0x14

HEADER_SIZE = 12
DEFAULT_BODY_OFFSET = HEADER_SIZE
FILE_COUNT_SIZE = 4

PATH_FIELD_SIZE = 128
MAX_PATH_BYTES = PATH_FIELD_SIZE - 1  # 保留 1 字节给结束符
ENTRY_SIZE = 4 + 4 + PATH_FIELD_SIZE

MAX_ARCHIVE_SIZE = 0xFFFFFFFF


# ==================== 文件头 ====================

@dataclass
class GobHeader:
    """
    文件头 (12 bytes)
    
    位于文件开头。body_offset 指向文件表所在位置，
    通常紧跟文件头 (12)，但格式本身不强制。
    """
    FORMAT: ClassVar[str] = '<4sII'
    SIZE: ClassVar[int] = HEADER_SIZE
    
    signature: bytes = SIGNATURE
    version: int = VERSION
    body_offset: int = DEFAULT_BODY_OFFSET
    
    def pack(self) -> bytes:
        """序列化为字节"""
        return struct.pack(
            self.FORMAT,
            self.signature,
            self.version,
            self.body_offset
        )
    
    @classmethod
    def unpack(cls, data: bytes) -> 'GobHeader':
        """从字节反序列化"""
        values = struct.unpack(cls.FORMAT, data)
        return cls(
            signature=values[0],
            version=values[1],
            body_offset=values[2]
        )


# ==================== 文件表条目 ====================

@dataclass
class FileEntry:
    """
    文件表条目 (136 bytes)
    
    path_field 保存原始的 128 字节路径字段，结束符之后的字节
    可能是原始打包工具留下的未初始化内存，解码时忽略。
    """
    FORMAT: ClassVar[str] = '<II128s'
    SIZE: ClassVar[int] = ENTRY_SIZE
    
    offset: int = 0           # 文件数据在归档中的绝对位置
    size: int = 0             # 文件数据长度
    path_field: bytes = b'\x00' * PATH_FIELD_SIZE
    
    @property
    def end(self) -> int:
        """文件数据结束位置 (不含)"""
        return self.offset + self.size
    
    def pack(self) -> bytes:
        """序列化为字节"""
        return struct.pack(
            self.FORMAT,
            self.offset,
            self.size,
            self.path_field
        )
    
    @classmethod
    def unpack(cls, data: bytes) -> 'FileEntry':
        """从字节反序列化"""
        values = struct.unpack(cls.FORMAT, data)
        return cls(
            offset=values[0],
            size=values[1],
            path_field=values[2]
        )


def content_start(file_count: int, body_offset: int = DEFAULT_BODY_OFFSET) -> int:
    """
    计算文件数据区的起始位置
    
    Args:
        file_count: 文件数量
        body_offset: 文件表起始位置
        
    Returns:
        紧跟文件表之后的绝对位置
    """
    return body_offset + FILE_COUNT_SIZE + file_count * ENTRY_SIZE
