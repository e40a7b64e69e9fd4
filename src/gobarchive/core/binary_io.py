#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
二进制 I/O 封装

提供 BinaryWriter 和 BinaryReader 类，封装所有底层字节操作，
使上层模块不需要直接操作偏移量和 struct。
"""

import struct
from typing import BinaryIO, Tuple, Any, Union

from ..exceptions import TruncatedBufferError


BytesLike = Union[bytes, bytearray, memoryview]


class BinaryWriter:
    """
    二进制写入器
    
    封装所有底层写操作，提供类型化的写入方法。
    上层模块只需调用 write_u32() 等方法，无需关心 struct.pack 细节。
    """
    
    def __init__(self, file: BinaryIO):
        """
        初始化写入器
        
        Args:
            file: 可写的二进制文件对象 (文件或 BytesIO)
        """
        self._file = file
        self._position = 0
    
    @property
    def position(self) -> int:
        """当前写入位置"""
        return self._position
    
    # ==================== 原始写入 ====================
    
    def write_bytes(self, data: BytesLike) -> int:
        """
        写入原始字节
        
        Args:
            data: 要写入的字节
            
        Returns:
            写入的字节数
        """
        written = self._file.write(data)
        self._position += written
        return written
    
    def write_struct(self, fmt: str, *values: Any) -> int:
        """
        按 struct 格式写入
        
        Args:
            fmt: struct 格式字符串
            *values: 要写入的值
            
        Returns:
            写入的字节数
        """
        data = struct.pack(fmt, *values)
        return self.write_bytes(data)
    
    # ==================== 类型化写入 ====================
    
    def write_u32(self, value: int) -> int:
        """写入无符号 32 位整数 (Little-Endian)"""
        return self.write_struct('<I', value)


class BinaryReader:
    """
    二进制读取器
    
    基于内存缓冲区的游标式读取，所有越界读取统一抛出 TruncatedBufferError。
    切片通过 memoryview 完成，不复制整个缓冲区。
    """
    
    def __init__(self, data: BytesLike):
        """
        初始化读取器
        
        Args:
            data: 完整的字节缓冲区
        """
        self._view = memoryview(data)
        self._position = 0
    
    @property
    def position(self) -> int:
        """当前读取位置"""
        return self._position
    
    @property
    def size(self) -> int:
        """缓冲区总长度"""
        return len(self._view)
    
    @property
    def remaining(self) -> int:
        """从当前位置到缓冲区末尾的字节数"""
        return max(0, self.size - self._position)
    
    # ==================== 原始读取 ====================
    
    def read_bytes(self, size: int) -> bytes:
        """
        读取指定字节数
        
        Args:
            size: 要读取的字节数
            
        Returns:
            读取的字节
            
        Raises:
            TruncatedBufferError: 剩余字节不足
        """
        self.require(size)
        start = self._position
        self._position += size
        return self._view[start:self._position].tobytes()
    
    def read_struct(self, fmt: str) -> Tuple[Any, ...]:
        """
        按 struct 格式读取
        
        Args:
            fmt: struct 格式字符串
            
        Returns:
            解包后的值元组
        """
        size = struct.calcsize(fmt)
        data = self.read_bytes(size)
        return struct.unpack(fmt, data)
    
    # ==================== 类型化读取 ====================
    
    def read_u32(self) -> int:
        """读取无符号 32 位整数 (Little-Endian)"""
        return self.read_struct('<I')[0]
    
    # ==================== 位置控制 ====================
    
    def require(self, size: int, what: str = "数据") -> None:
        """
        确认从当前位置起至少还有 size 字节
        
        Raises:
            TruncatedBufferError: 剩余字节不足
        """
        if self.remaining < size:
            raise TruncatedBufferError(size, self.remaining, what)
    
    def seek(self, position: int):
        """
        移动到指定位置
        
        允许移动到缓冲区末尾之外，后续读取会抛出 TruncatedBufferError。
        
        Args:
            position: 目标位置
        """
        self._position = position
    
    def slice(self, offset: int, size: int) -> bytes:
        """
        读取绝对位置的数据，不移动游标
        
        调用方负责边界检查。
        """
        return self._view[offset:offset + size].tobytes()
