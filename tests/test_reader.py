#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
GobReader 测试

使用手工构造的字节验证解析规则和各类错误。
"""

import struct

import pytest

from gobarchive import GobReader, parse_gob, read_gob
from gobarchive.exceptions import (
    GobError,
    InvalidFormatError,
    InvalidSignatureError,
    UnsupportedVersionError,
    TruncatedBufferError,
    OffsetOutOfBoundsError,
    InvalidPathError,
    ImportIoError,
)

from conftest import make_gob, entry_position


def _patch_entry(data: bytes, index: int, offset: int, size: int) -> bytes:
    """改写第 index 个条目的 offset 和 size"""
    pos = entry_position(index)
    return data[:pos] + struct.pack("<II", offset, size) + data[pos + 8:]


# ==================== 基础解析 ====================

class TestParseBasic:
    """基础解析测试"""
    
    def test_empty_archive(self):
        archive = parse_gob(make_gob([]))
        
        assert len(archive) == 0
    
    def test_two_files(self):
        data = make_gob([(b"foo.bar", b"foobar"), (b"fizz.buzz", b"fizzbuzz")])
        archive = parse_gob(data)
        
        assert archive.files == {"foo.bar": b"foobar", "fizz.buzz": b"fizzbuzz"}
    
    def test_backslash_paths_normalized(self):
        """文件表中的反斜杠统一为正斜杠"""
        data = make_gob([(b"3do\\mat\\dflt.mat", b"MAT ")])
        archive = parse_gob(data)
        
        assert archive.paths() == ["3do/mat/dflt.mat"]
    
    def test_custom_body_offset(self):
        """body_offset 不为 12 时跳过中间字节"""
        data = make_gob([(b"a.txt", b"aaa")], body_offset=64)
        
        assert parse_gob(data).files == {"a.txt": b"aaa"}
    
    def test_empty_file(self):
        data = make_gob([(b"empty.bin", b"")])
        
        assert parse_gob(data)["empty.bin"] == b""
    
    def test_accepts_bytearray_and_memoryview(self):
        data = make_gob([(b"a.txt", b"aaa")])
        
        assert parse_gob(bytearray(data)).files == {"a.txt": b"aaa"}
        assert parse_gob(memoryview(data)).files == {"a.txt": b"aaa"}
    
    def test_data_out_of_table_order(self):
        """文件数据不必按文件表顺序排列"""
        data = make_gob([(b"first", b"11"), (b"second", b"2222")])
        start = entry_position(2)
        data = _patch_entry(data, 0, start + 4, 2)
        data = _patch_entry(data, 1, start, 4)
        data = data[:start] + b"2222" + b"11"
        
        archive = parse_gob(data)
        
        assert archive["first"] == b"11"
        assert archive["second"] == b"2222"
    
    def test_overlapping_regions(self):
        """多个条目可以指向同一段数据"""
        data = make_gob([(b"a", b"shared"), (b"b", b"")])
        data = _patch_entry(data, 1, entry_position(2), 6)
        
        archive = parse_gob(data)
        
        assert archive["a"] == archive["b"] == b"shared"


# ==================== 文件头校验 ====================

class TestHeaderValidation:
    """文件头校验测试"""
    
    @pytest.mark.parametrize("signature", [b"GOB\x00", b"gob ", b"GOO ", b"PK\x03\x04"])
    def test_invalid_signature(self, signature):
        data = make_gob([(b"a.txt", b"a")], signature=signature)
        
        with pytest.raises(InvalidSignatureError) as exc_info:
            parse_gob(data)
        
        assert exc_info.value.actual == signature
        assert exc_info.value.expected == b"GOB "
    
    @pytest.mark.parametrize("version", [0, 0x13, 0x15, 0xFFFFFFFF])
    def test_unsupported_version(self, version):
        data = bytearray(make_gob([(b"a.txt", b"a")]))
        data[4:8] = struct.pack("<I", version)
        
        with pytest.raises(UnsupportedVersionError) as exc_info:
            parse_gob(bytes(data))
        
        assert exc_info.value.version == version
        assert exc_info.value.supported == [20]
    
    def test_format_errors_share_base(self):
        assert issubclass(InvalidSignatureError, InvalidFormatError)
        assert issubclass(UnsupportedVersionError, InvalidFormatError)
        assert issubclass(InvalidFormatError, GobError)


# ==================== 截断 ====================

class TestTruncated:
    """截断测试"""
    
    @pytest.mark.parametrize("length", [0, 4, 11])
    def test_short_header(self, length):
        data = make_gob([])[:length]
        
        with pytest.raises(TruncatedBufferError):
            parse_gob(data)
    
    def test_missing_file_count(self):
        """文件头完整但缺少文件数量字段"""
        with pytest.raises(TruncatedBufferError):
            parse_gob(make_gob([])[:14])
    
    def test_body_offset_beyond_buffer(self):
        data = bytearray(make_gob([]))
        data[8:12] = struct.pack("<I", 1000)
        
        with pytest.raises(TruncatedBufferError):
            parse_gob(bytes(data))
    
    def test_table_shorter_than_count(self):
        """文件数量声明的文件表比剩余字节长"""
        data = make_gob([(b"a.txt", b"a"), (b"b.txt", b"b")])
        
        with pytest.raises(TruncatedBufferError) as exc_info:
            parse_gob(data[:entry_position(1) + 100])
        
        assert exc_info.value.needed == 2 * 136
    
    def test_huge_file_count(self):
        data = bytearray(make_gob([]))
        data[12:16] = struct.pack("<I", 0xFFFFFFFF)
        
        with pytest.raises(TruncatedBufferError):
            parse_gob(bytes(data))


# ==================== 偏移边界 ====================

class TestOffsetBounds:
    """偏移边界测试"""
    
    def test_end_equals_length(self):
        """offset + size == len(buffer) 可以解析"""
        data = make_gob([(b"last.bin", b"12345")])
        
        archive = parse_gob(data)
        
        assert archive["last.bin"] == b"12345"
        assert entry_position(1) + 5 == len(data)
    
    def test_end_one_past_length(self):
        """offset + size == len(buffer) + 1 越界"""
        data = make_gob([(b"last.bin", b"12345")])
        data = _patch_entry(data, 0, entry_position(1), 6)
        
        with pytest.raises(OffsetOutOfBoundsError) as exc_info:
            parse_gob(data)
        
        err = exc_info.value
        assert err.path == "last.bin"
        assert err.offset + err.size == len(data) + 1
        assert err.buffer_size == len(data)
    
    def test_offset_beyond_buffer(self):
        data = make_gob([(b"a", b"")])
        data = _patch_entry(data, 0, 0xFFFFFFF0, 0)
        
        with pytest.raises(OffsetOutOfBoundsError):
            parse_gob(data)


# ==================== 路径字段 ====================

class TestPathField:
    """路径字段测试"""
    
    def test_garbage_after_terminator(self):
        """结束符之后的垃圾字节不影响解析"""
        raw = b"a.txt\x00" + b"\xff" * 122
        
        archive = parse_gob(make_gob([(raw, b"data")]))
        
        assert archive.files == {"a.txt": b"data"}
    
    def test_invalid_visible_path(self):
        with pytest.raises(InvalidPathError):
            parse_gob(make_gob([(b"bad\xff.txt", b"data")]))
    
    def test_full_field_without_terminator(self):
        """没有结束符时整个 128 字节都是路径"""
        archive = parse_gob(make_gob([(b"z" * 128, b"data")]))
        
        assert archive.paths() == ["z" * 128]
    
    def test_incompatible_encoding(self):
        """与 ASCII 不兼容的编码无法定位结束符"""
        with pytest.raises(ValueError):
            GobReader(encoding="utf-16")
    
    def test_encoding_option(self):
        data = make_gob([(b"caf\xe9.txt", b"data")])
        
        archive = GobReader(encoding="latin-1").parse(data)
        
        assert archive.paths() == ["café.txt"]


# ==================== 重复路径 ====================

class TestDuplicatePaths:
    """重复路径测试"""
    
    def test_last_entry_wins(self):
        data = make_gob([(b"dup.txt", b"first"), (b"dup.txt", b"second")])
        
        archive = parse_gob(data)
        
        assert len(archive) == 1
        assert archive["dup.txt"] == b"second"
    
    def test_duplicates_after_normalization(self):
        """不同分隔符写法视为同一路径"""
        data = make_gob([(b"a\\b.txt", b"first"), (b"a/b.txt", b"second")])
        
        assert parse_gob(data).files == {"a/b.txt": b"second"}


# ==================== 文件表读取 ====================

class TestReadEntries:
    """read_entries 测试"""
    
    def test_entries_in_table_order(self):
        data = make_gob([(b"z.txt", b"zz"), (b"a.txt", b"a")])
        
        header, entries = GobReader().read_entries(data)
        
        assert header.body_offset == 12
        assert [path for path, _ in entries] == ["z.txt", "a.txt"]
        assert entries[0][1].offset == entry_position(2)
        assert entries[0][1].size == 2
        assert entries[1][1].offset == entry_position(2) + 2


# ==================== 文件读取 ====================

class TestReadFile:
    """read_gob 测试"""
    
    def test_read_gob(self, tmp_path):
        path = tmp_path / "RES.GOB"
        path.write_bytes(make_gob([(b"a.txt", b"aaa")]))
        
        assert read_gob(path).files == {"a.txt": b"aaa"}
        assert read_gob(str(path)).files == {"a.txt": b"aaa"}
    
    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.gob"
        
        with pytest.raises(ImportIoError) as exc_info:
            read_gob(missing)
        
        assert exc_info.value.path == str(missing)
        assert isinstance(exc_info.value.cause, FileNotFoundError)
        assert exc_info.value.__cause__ is exc_info.value.cause
