#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
目录导入与导出

import_directory() 将目录树映射为 GobArchive，
export_directory() 将 GobArchive 写回目录树。
"""

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Iterator, Optional, Tuple, Union

from ..core.progress import ProgressCallback, ProgressTracker
from ..utils import DEFAULT_ENCODING, check_path_length
from ..exceptions import ImportIoError, InvalidPathError
from .model import GobArchive


logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def walk_directory(root: PathLike) -> Iterator[Tuple[str, Path]]:
    """
    递归遍历目录下的全部普通文件
    
    Args:
        root: 根目录
        
    Yields:
        (相对路径, 绝对路径) 元组，相对路径使用正斜杠，按路径排序
        
    Raises:
        ImportIoError: root 不是目录或无法遍历
    """
    base_path = Path(root)
    if not base_path.is_dir():
        raise ImportIoError(os.fspath(root), NotADirectoryError(f"不是目录: {root}"))
    
    try:
        files = sorted(p for p in base_path.rglob("*") if p.is_file())
    except OSError as e:
        raise ImportIoError(os.fspath(root), e) from e
    
    for file_path in files:
        yield file_path.relative_to(base_path).as_posix(), file_path.resolve()


def import_directory(
    root: PathLike,
    encoding: str = DEFAULT_ENCODING,
    progress_callback: Optional[ProgressCallback] = None
) -> GobArchive:
    """
    从目录树导入归档
    
    任一文件读取失败即整体失败，不存在部分成功。
    路径长度在加入归档时立即校验。
    
    Args:
        root: 根目录
        encoding: 路径字段的文本编码
        progress_callback: 进度回调函数
        
    Returns:
        GobArchive 对象，键为相对 root 的路径
        
    Raises:
        ImportIoError: 目录无法遍历或文件无法读取
        PathTooLongError: 相对路径编码后超过 127 字节
    """
    items = list(walk_directory(root))
    tracker = ProgressTracker(total_files=len(items), callback=progress_callback)
    archive = GobArchive(encoding=encoding)
    
    for rel_path, abs_path in items:
        # 读取文件之前先校验路径，尽早失败
        check_path_length(rel_path, encoding)
        
        try:
            data = abs_path.read_bytes()
        except OSError as e:
            raise ImportIoError(str(abs_path), e) from e
        
        archive.add(rel_path, data)
        tracker.update(rel_path, len(data))
        logger.debug("导入 %s (%d 字节)", rel_path, len(data))
    
    logger.info(
        "从 %s 导入 %d 个文件, 耗时 %.3fs",
        os.fspath(root), len(archive), tracker.finish()
    )
    return archive


def _safe_target(root: Path, path: str) -> Path:
    """
    将归档内路径映射为 root 下的本地路径
    
    Raises:
        InvalidPathError: 路径为空、为绝对路径、带盘符或包含 ".."
    """
    pure = PurePosixPath(path)
    parts = pure.parts
    if not parts or pure.is_absolute() or ".." in parts or ":" in parts[0]:
        raise InvalidPathError(f"无法解包到目录之外的路径: '{path}'")
    return root.joinpath(*parts)


def export_directory(
    archive: GobArchive,
    root: PathLike,
    progress_callback: Optional[ProgressCallback] = None
) -> int:
    """
    将归档解包到目录
    
    按需创建父目录，已存在的同名文件会被覆盖。
    
    Args:
        archive: 待解包的归档
        root: 输出目录
        progress_callback: 进度回调函数
        
    Returns:
        写出的文件数量
        
    Raises:
        InvalidPathError: 路径会逃逸到 root 之外
        ImportIoError: 目录创建或文件写入失败
    """
    base_path = Path(root)
    paths = archive.paths()
    
    # 写入任何文件之前先校验全部路径
    targets = [(path, _safe_target(base_path, path)) for path in paths]
    tracker = ProgressTracker(total_files=len(targets), callback=progress_callback)
    
    for path, target in targets:
        data = archive.files[path]
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise ImportIoError(str(target), e) from e
        
        tracker.update(path, len(data))
        logger.debug("解包 %s (%d 字节)", path, len(data))
    
    logger.info(
        "解包 %d 个文件到 %s, 耗时 %.3fs",
        len(targets), os.fspath(root), tracker.finish()
    )
    return len(targets)
