#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
gobarchive 工具函数

提供路径规范化、路径字段编码与解码等通用功能。
"""

from .core.schema import PATH_FIELD_SIZE, MAX_PATH_BYTES
from .exceptions import InvalidPathError, PathTooLongError


DEFAULT_ENCODING = 'utf-8'


def normalize_path(path: str) -> str:
    """
    路径规范化
    
    1. 反斜杠统一为正斜杠
    2. 合并连续斜杠
    3. 移除开头和末尾斜杠
    
    Args:
        path: 原始路径
        
    Returns:
        规范化后的相对路径
        
    Examples:
        >>> normalize_path("3do\\\\mat\\\\dflt.mat")
        '3do/mat/dflt.mat'
        >>> normalize_path("/jkl//01narshadda.jkl")
        'jkl/01narshadda.jkl'
    """
    # 反斜杠 → 正斜杠
    path = path.replace("\\", "/")
    
    # 合并连续斜杠
    while "//" in path:
        path = path.replace("//", "/")
    
    return path.strip("/")


def check_encoding(encoding: str) -> str:
    """
    确认编码与 ASCII 兼容
    
    路径字段以单个零字节结束，UTF-16 这类会在普通字符中产生零字节的编码无法使用。
    
    Raises:
        ValueError: 未知编码或编码与 ASCII 不兼容
    """
    try:
        compatible = "\x00a/\\".encode(encoding) == b"\x00a/\\"
    except (LookupError, UnicodeEncodeError) as e:
        raise ValueError(f"不支持的路径编码: {encoding!r}") from e
    if not compatible:
        raise ValueError(f"路径编码必须与 ASCII 兼容: {encoding!r}")
    return encoding


def encode_path(
    path: str,
    encoding: str = DEFAULT_ENCODING,
    separator: str = "/"
) -> bytes:
    """
    将路径编码为 128 字节的路径字段
    
    结束符之后全部填充零字节，从不写出垃圾数据。
    
    Args:
        path: 归档内路径
        encoding: 文本编码
        separator: 写入时使用的分隔符 ("/" 或 "\\")
        
    Returns:
        恰好 128 字节的路径字段
        
    Raises:
        PathTooLongError: 编码后超过 127 字节
        InvalidPathError: 路径含有 NUL 字符或无法用目标编码表示
    """
    normalized = normalize_path(path)
    if "\x00" in normalized:
        raise InvalidPathError(f"路径含有 NUL 字符: {normalized!r}")
    if separator != "/":
        normalized = normalized.replace("/", separator)
    
    try:
        encoded = normalized.encode(encoding)
    except UnicodeEncodeError as e:
        raise InvalidPathError(
            f"路径无法以 {encoding} 编码: '{normalized}'"
        ) from e
    
    if len(encoded) > MAX_PATH_BYTES:
        raise PathTooLongError(normalized, len(encoded), MAX_PATH_BYTES)
    
    return encoded.ljust(PATH_FIELD_SIZE, b'\x00')


def check_path_length(path: str, encoding: str = DEFAULT_ENCODING) -> str:
    """
    规范化路径并校验长度，返回规范化后的路径
    
    Raises:
        PathTooLongError: 编码后超过 127 字节
    """
    encode_path(path, encoding)
    return normalize_path(path)


def decode_path_field(field: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    """
    解码 128 字节的路径字段
    
    只取第一个零字节之前的内容，之后的字节无论是什么都忽略。
    没有零字节时整个字段都视为路径。
    
    Args:
        field: 原始路径字段
        encoding: 文本编码
        
    Returns:
        规范化后的路径 (正斜杠)
        
    Raises:
        InvalidPathError: 可见部分不是合法文本
        
    Examples:
        >>> decode_path_field(b"a.txt\\x00\\xff\\xff")
        'a.txt'
    """
    end = field.find(b'\x00')
    visible = field if end < 0 else field[:end]
    
    try:
        text = visible.decode(encoding)
    except UnicodeDecodeError as e:
        raise InvalidPathError(f"路径不是合法的 {encoding} 文本", bytes(visible)) from e
    
    return normalize_path(text)
