#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
GOB 归档解析器

将完整的字节缓冲区解析为 GobArchive。纯函数，除读取输入外无副作用。
"""

import logging
import os
from typing import List, Tuple, Union

from ..core.binary_io import BinaryReader, BytesLike
from ..core.schema import (
    GobHeader, FileEntry, SIGNATURE, VERSION, FILE_COUNT_SIZE
)
from ..utils import DEFAULT_ENCODING, check_encoding, decode_path_field
from ..exceptions import (
    ImportIoError,
    InvalidSignatureError,
    OffsetOutOfBoundsError,
    UnsupportedVersionError,
)
from .model import GobArchive


logger = logging.getLogger(__name__)


class GobReader:
    """
    GOB 解析器
    
    解析流程:
    1. 读取并校验 12 字节文件头
    2. 跳转到 body_offset，读取文件数量和文件表
    3. 按文件表切片出每个文件的内容
    """
    
    def __init__(self, encoding: str = DEFAULT_ENCODING):
        """
        初始化解析器
        
        Args:
            encoding: 路径字段的文本编码，须与 ASCII 兼容
        """
        self._encoding = check_encoding(encoding)
    
    def read_header(self, reader: BinaryReader) -> GobHeader:
        """
        读取并校验文件头
        
        Raises:
            TruncatedBufferError: 不足 12 字节
            InvalidSignatureError: 签名不是 "GOB "
            UnsupportedVersionError: 版本号不是 0x14
        """
        reader.require(GobHeader.SIZE, "文件头")
        header = GobHeader.unpack(reader.read_bytes(GobHeader.SIZE))
        
        if header.signature != SIGNATURE:
            raise InvalidSignatureError(header.signature, SIGNATURE)
        
        if header.version != VERSION:
            raise UnsupportedVersionError(header.version, [VERSION])
        
        return header
    
    def read_entries(self, data: BytesLike) -> Tuple[GobHeader, List[Tuple[str, FileEntry]]]:
        """
        读取文件头和文件表 (不切片文件内容)
        
        Args:
            data: 完整的 GOB 字节
            
        Returns:
            (文件头, [(解码后的路径, 条目), ...])，顺序与文件表一致
            
        Raises:
            TruncatedBufferError: 缓冲区短于文件头或文件表声明的长度
            InvalidPathError: 路径字段的可见部分不是合法文本
        """
        reader = BinaryReader(data)
        header = self.read_header(reader)
        
        # ========== 文件表 ==========
        reader.seek(header.body_offset)
        reader.require(FILE_COUNT_SIZE, "文件数量字段")
        file_count = reader.read_u32()
        reader.require(file_count * FileEntry.SIZE, "文件表")
        
        entries = []
        for _ in range(file_count):
            entry = FileEntry.unpack(reader.read_bytes(FileEntry.SIZE))
            path = decode_path_field(entry.path_field, self._encoding)
            entries.append((path, entry))
        
        logger.debug(
            "GOB 文件表: body_offset=%d, file_count=%d",
            header.body_offset, file_count
        )
        return header, entries
    
    def parse(self, data: BytesLike) -> GobArchive:
        """
        解析 GOB 字节为归档
        
        路径重复时后出现的条目覆盖先出现的条目。
        
        Args:
            data: 完整的 GOB 字节
            
        Returns:
            GobArchive 对象
            
        Raises:
            InvalidSignatureError: 签名不是 "GOB "
            UnsupportedVersionError: 版本号不是 0x14
            TruncatedBufferError: 缓冲区被截断
            InvalidPathError: 路径不是合法文本
            OffsetOutOfBoundsError: 条目的 offset + size 超出缓冲区
        """
        header, entries = self.read_entries(data)
        reader = BinaryReader(data)
        
        archive = GobArchive(encoding=self._encoding)
        for path, entry in entries:
            if entry.end > reader.size:
                raise OffsetOutOfBoundsError(path, entry.offset, entry.size, reader.size)
            
            if path in archive.files:
                logger.warning("GOB 中存在重复路径 '%s'，以后出现的条目为准", path)
            
            archive.files[path] = reader.slice(entry.offset, entry.size)
        
        logger.debug("解析完成: %d 个文件, %d 字节", len(archive), reader.size)
        return archive
    
    def parse_file(self, path: Union[str, os.PathLike]) -> GobArchive:
        """
        读取并解析 GOB 文件
        
        Raises:
            ImportIoError: 文件无法读取
        """
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise ImportIoError(os.fspath(path), e) from e
        
        return self.parse(data)


def parse_gob(data: BytesLike, encoding: str = DEFAULT_ENCODING) -> GobArchive:
    """解析 GOB 字节"""
    return GobReader(encoding=encoding).parse(data)


def read_gob(path: Union[str, os.PathLike], encoding: str = DEFAULT_ENCODING) -> GobArchive:
    """读取并解析 GOB 文件"""
    return GobReader(encoding=encoding).parse_file(path)
