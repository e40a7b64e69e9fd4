#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
GOB 归档的内存表示

GobArchive 只保存 "归档内路径 -> 文件内容" 的映射。
文件表、偏移等布局信息在构建时计算，解析时丢弃。
"""

import os
from typing import Dict, Iterator, List, Optional, Union

from ..core.progress import ProgressCallback
from ..utils import DEFAULT_ENCODING, check_encoding, check_path_length, normalize_path


PathLike = Union[str, os.PathLike]


class GobArchive:
    """
    GOB 归档
    
    路径统一为正斜杠形式的相对路径，键唯一。
    迭代顺序按路径排序，与插入顺序无关。
    
    Example:
        >>> archive = GobArchive()
        >>> archive.add("foo.bar", b"foobar")
        >>> archive.add("fizz.buzz", b"fizzbuzz")
        >>> len(archive)
        2
        >>> data = archive.to_bytes()
        >>> data[:4]
        b'GOB '
    """
    
    def __init__(
        self,
        files: Optional[Dict[str, bytes]] = None,
        encoding: str = DEFAULT_ENCODING
    ):
        """
        初始化归档
        
        Args:
            files: 初始文件映射 (可选)，逐个经过 add() 校验
            encoding: 路径字段的文本编码，须与 ASCII 兼容
        """
        self.encoding = check_encoding(encoding)
        self.files: Dict[str, bytes] = {}
        if files:
            for path, data in files.items():
                self.add(path, data)
    
    # ==================== 构造 ====================
    
    @classmethod
    def from_bytes(cls, data: bytes, encoding: str = DEFAULT_ENCODING) -> 'GobArchive':
        """从 GOB 字节解析归档"""
        from .reader import GobReader
        return GobReader(encoding=encoding).parse(data)
    
    @classmethod
    def from_file(cls, path: PathLike, encoding: str = DEFAULT_ENCODING) -> 'GobArchive':
        """从 GOB 文件解析归档"""
        from .reader import GobReader
        return GobReader(encoding=encoding).parse_file(path)
    
    @classmethod
    def from_directory(
        cls,
        root: PathLike,
        encoding: str = DEFAULT_ENCODING,
        progress_callback: Optional[ProgressCallback] = None
    ) -> 'GobArchive':
        """从目录树导入归档"""
        from .importer import import_directory
        return import_directory(root, encoding, progress_callback)
    
    # ==================== 文件操作 ====================
    
    def add(self, path: str, data: bytes) -> str:
        """
        添加或覆盖一个文件
        
        Args:
            path: 归档内路径
            data: 文件内容
            
        Returns:
            规范化后的路径
            
        Raises:
            PathTooLongError: 路径编码后超过 127 字节
        """
        normalized = check_path_length(path, self.encoding)
        self.files[normalized] = bytes(data)
        return normalized
    
    def get(self, path: str, default: Optional[bytes] = None) -> Optional[bytes]:
        """读取文件内容，不存在时返回 default"""
        return self.files.get(normalize_path(path), default)
    
    def remove(self, path: str) -> bytes:
        """
        移除文件并返回其内容
        
        Raises:
            KeyError: 路径不存在
        """
        return self.files.pop(normalize_path(path))
    
    def paths(self) -> List[str]:
        """排序后的全部路径"""
        return sorted(self.files)
    
    @property
    def total_size(self) -> int:
        """全部文件内容的总字节数"""
        return sum(len(data) for data in self.files.values())
    
    # ==================== 输出 ====================
    
    def to_bytes(self, separator: str = "/") -> bytes:
        """构建 GOB 字节"""
        from .builder import GobBuilder
        return GobBuilder(encoding=self.encoding, separator=separator).build(self)
    
    def write(self, path: PathLike, separator: str = "/") -> int:
        """
        写出 GOB 文件
        
        Returns:
            写入的字节数
        """
        from .builder import GobBuilder
        return GobBuilder(encoding=self.encoding, separator=separator).write(self, path)
    
    def extract_to(
        self,
        root: PathLike,
        progress_callback: Optional[ProgressCallback] = None
    ) -> int:
        """
        解包到目录
        
        Returns:
            写出的文件数量
        """
        from .importer import export_directory
        return export_directory(self, root, progress_callback)
    
    # ==================== 容器协议 ====================
    
    def __getitem__(self, path: str) -> bytes:
        return self.files[normalize_path(path)]
    
    def __setitem__(self, path: str, data: bytes) -> None:
        self.add(path, data)
    
    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self.files
    
    def __len__(self) -> int:
        return len(self.files)
    
    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GobArchive):
            return NotImplemented
        return self.files == other.files
    
    def __repr__(self) -> str:
        return f"GobArchive(files={len(self.files)}, total_size={self.total_size})"
