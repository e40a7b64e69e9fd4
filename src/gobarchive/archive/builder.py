#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
GOB 归档构建器

将 GobArchive 序列化为 GOB 字节。相同输入总是得到逐字节相同的输出。
"""

import io
import logging
import os
from typing import List, Tuple, Union

from ..core.binary_io import BinaryWriter
from ..core.schema import (
    GobHeader, FileEntry, DEFAULT_BODY_OFFSET, MAX_ARCHIVE_SIZE, content_start
)
from ..utils import DEFAULT_ENCODING, check_encoding, encode_path
from ..exceptions import ArchiveTooLargeError, ImportIoError
from .model import GobArchive


logger = logging.getLogger(__name__)


class GobBuilder:
    """
    GOB 构建器
    
    文件按路径排序后依次写入，保证输出确定。
    """
    
    def __init__(self, encoding: str = DEFAULT_ENCODING, separator: str = "/"):
        """
        初始化构建器
        
        Args:
            encoding: 路径字段的文本编码，须与 ASCII 兼容
            separator: 路径字段中使用的分隔符，原版游戏资源通常为 "\\"
        """
        if separator not in ("/", "\\"):
            raise ValueError(f"不支持的路径分隔符: {separator!r}")
        self._encoding = check_encoding(encoding)
        self._separator = separator
    
    def layout(self, archive: GobArchive) -> List[Tuple[FileEntry, bytes]]:
        """
        计算布局
        
        先编码并校验全部路径，再分配偏移。任何路径过长都会在
        分配偏移之前失败。
        
        Args:
            archive: 待构建的归档
            
        Returns:
            [(条目, 文件内容), ...]，顺序即写入顺序
            
        Raises:
            PathTooLongError: 路径编码后超过 127 字节
            ArchiveTooLargeError: 总大小超出 u32 寻址范围
        """
        paths = archive.paths()
        
        # ===== 阶段 1: 编码路径 =====
        fields = [encode_path(path, self._encoding, self._separator) for path in paths]
        
        # ===== 阶段 2: 分配偏移 =====
        offset = content_start(len(paths), DEFAULT_BODY_OFFSET)
        layout = []
        for path, field in zip(paths, fields):
            data = archive.files[path]
            layout.append((FileEntry(offset=offset, size=len(data), path_field=field), data))
            offset += len(data)
        
        if offset > MAX_ARCHIVE_SIZE:
            raise ArchiveTooLargeError(offset, MAX_ARCHIVE_SIZE)
        
        return layout
    
    def build_to(self, archive: GobArchive, file) -> int:
        """
        构建并写入可写的二进制文件对象
        
        Returns:
            写入的字节数
        """
        layout = self.layout(archive)
        writer = BinaryWriter(file)
        
        # 1. Header
        writer.write_bytes(GobHeader(body_offset=DEFAULT_BODY_OFFSET).pack())
        
        # 2. 文件数量 + 文件表
        writer.write_u32(len(layout))
        for entry, _ in layout:
            writer.write_bytes(entry.pack())
        
        # 3. 文件数据
        for _, data in layout:
            writer.write_bytes(data)
        
        logger.debug("构建完成: %d 个文件, %d 字节", len(layout), writer.position)
        return writer.position
    
    def build(self, archive: GobArchive) -> bytes:
        """
        构建 GOB 字节
        
        Args:
            archive: 待构建的归档
            
        Returns:
            完整的 GOB 字节
            
        Raises:
            PathTooLongError: 路径编码后超过 127 字节
            ArchiveTooLargeError: 总大小超出 u32 寻址范围
        """
        buffer = io.BytesIO()
        self.build_to(archive, buffer)
        return buffer.getvalue()
    
    def write(self, archive: GobArchive, path: Union[str, os.PathLike]) -> int:
        """
        构建并写出 GOB 文件
        
        先在内存中完成构建，校验失败时不会创建或截断目标文件。
        
        Returns:
            写入的字节数
            
        Raises:
            ImportIoError: 文件写入失败
        """
        data = self.build(archive)
        try:
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise ImportIoError(os.fspath(path), e) from e
        
        logger.info("已写出 %s: %d 个文件, %d 字节", os.fspath(path), len(archive), len(data))
        return len(data)


def build_gob(
    archive: GobArchive,
    encoding: str = DEFAULT_ENCODING,
    separator: str = "/"
) -> bytes:
    """构建 GOB 字节"""
    return GobBuilder(encoding=encoding, separator=separator).build(archive)


def write_gob(
    archive: GobArchive,
    path: Union[str, os.PathLike],
    encoding: str = DEFAULT_ENCODING,
    separator: str = "/"
) -> int:
    """构建并写出 GOB 文件"""
    return GobBuilder(encoding=encoding, separator=separator).write(archive, path)
