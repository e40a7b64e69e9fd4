#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
gobarchive 异常定义

所有异常均继承自 GobError，便于统一捕获。
"""

from typing import List, Optional


class GobError(Exception):
    """gobarchive 基础异常"""
    pass


class InvalidFormatError(GobError):
    """
    文件格式无效异常
    
    文件头魔法数或版本号不符合预期时抛出的公共基类。
    """
    pass


class InvalidSignatureError(InvalidFormatError):
    """
    签名无效异常
    
    当文件头前 4 字节不是 b"GOB " 时抛出。
    """
    def __init__(self, actual: bytes, expected: bytes = b"GOB "):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"无效的 GOB 签名: 期望 {expected!r}, 实际 {actual!r}"
        )


class UnsupportedVersionError(InvalidFormatError):
    """
    版本不支持异常
    
    当文件头中的版本号不等于受支持的版本时抛出。
    """
    def __init__(self, version: int, supported: List[int]):
        self.version = version
        self.supported = supported
        super().__init__(
            f"不支持的 GOB 版本 {version:#x}, "
            f"支持的版本: {[hex(v) for v in supported]}"
        )


class TruncatedBufferError(GobError):
    """
    数据截断异常
    
    当缓冲区长度小于文件头或文件表声明的长度时抛出。
    """
    def __init__(self, needed: int, available: int, what: str = "数据"):
        self.needed = needed
        self.available = available
        super().__init__(
            f"{what}被截断: 需要 {needed} 字节，实际只有 {available} 字节"
        )


class OffsetOutOfBoundsError(GobError):
    """
    偏移越界异常
    
    当文件表条目的 offset + size 超出缓冲区长度时抛出。
    """
    def __init__(self, path: str, offset: int, size: int, buffer_size: int):
        self.path = path
        self.offset = offset
        self.size = size
        self.buffer_size = buffer_size
        super().__init__(
            f"文件 '{path}' 越界: offset={offset}, size={size}, "
            f"结束位置 {offset + size} 超出缓冲区长度 {buffer_size}"
        )


class InvalidPathError(GobError):
    """
    路径无效异常
    
    当路径字段的可见部分无法按目标编码解码，
    或路径试图逃逸到解包目录之外时抛出。
    """
    def __init__(self, message: str, raw: Optional[bytes] = None):
        self.raw = raw
        if raw is not None:
            message = f"{message}: {raw!r}"
        super().__init__(message)


class PathTooLongError(GobError):
    """
    路径过长异常
    
    路径字段固定为 128 字节，其中 1 字节保留给结束符，
    编码后超过 127 字节的路径不会被截断，而是直接拒绝。
    """
    def __init__(self, path: str, length: int, limit: int = 127):
        self.path = path
        self.length = length
        self.limit = limit
        super().__init__(
            f"路径过长: '{path}' 编码后为 {length} 字节，上限 {limit} 字节"
        )


class ImportIoError(GobError):
    """
    文件系统 I/O 异常
    
    导入目录、读取或写入归档、解包到目录时底层 I/O 失败时抛出。
    携带出错的路径和原始异常。
    """
    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"文件 I/O 失败 '{path}': {cause}")


class ArchiveTooLargeError(GobError):
    """
    归档过大异常
    
    GOB 使用 u32 偏移，总大小超过 4 GiB 的归档无法寻址。
    """
    def __init__(self, size: int, limit: int = 0xFFFFFFFF):
        self.size = size
        self.limit = limit
        super().__init__(f"归档总大小 {size} 字节超出 u32 寻址上限 {limit}")
