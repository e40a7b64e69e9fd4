#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
进度回调

目录导入和解包时向调用方报告进度。
"""

from dataclasses import dataclass
from typing import Callable, Optional
import time


@dataclass
class ProgressInfo:
    """
    进度信息
    
    传递给进度回调函数的数据结构。
    """
    current: int              # 当前已处理文件数
    total: int                # 总文件数
    current_file: str         # 当前正在处理的文件路径
    bytes_processed: int      # 已处理字节数
    elapsed_time: float       # 已耗时 (秒)
    
    @property
    def progress(self) -> float:
        """进度百分比 (0.0 - 1.0)"""
        if self.total == 0:
            return 0.0
        return self.current / self.total
    
    @property
    def rate(self) -> float:
        """处理速率 (bytes/second)"""
        if self.elapsed_time == 0:
            return 0.0
        return self.bytes_processed / self.elapsed_time


# 进度回调函数类型
ProgressCallback = Callable[[ProgressInfo], None]


class ProgressTracker:
    """
    进度跟踪器
    
    封装进度计算和回调调用逻辑。最后一个文件总会触发回调。
    """
    
    def __init__(
        self,
        total_files: int,
        callback: Optional[ProgressCallback] = None,
        callback_interval: float = 0.0  # 最小回调间隔 (秒)
    ):
        self._total_files = total_files
        self._callback = callback
        self._callback_interval = callback_interval
        
        self._current_file = 0
        self._processed_bytes = 0
        self._start_time = time.monotonic()
        self._last_callback_time = None
    
    @property
    def current(self) -> int:
        return self._current_file
    
    @property
    def bytes_processed(self) -> int:
        return self._processed_bytes
    
    def update(self, file_path: str, bytes_processed: int = 0) -> None:
        """
        更新进度
        
        Args:
            file_path: 当前处理的文件路径
            bytes_processed: 本次处理的字节数
        """
        self._current_file += 1
        self._processed_bytes += bytes_processed
        
        if not self._callback:
            return
        
        now = time.monotonic()
        is_last = self._current_file >= self._total_files
        # 限制回调频率
        if (
            is_last
            or self._last_callback_time is None
            or now - self._last_callback_time >= self._callback_interval
        ):
            self._callback(ProgressInfo(
                current=self._current_file,
                total=self._total_files,
                current_file=file_path,
                bytes_processed=self._processed_bytes,
                elapsed_time=now - self._start_time
            ))
            self._last_callback_time = now
    
    def finish(self) -> float:
        """完成并返回总耗时"""
        return time.monotonic() - self._start_time
