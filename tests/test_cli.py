#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
命令行测试
"""

import pytest

from gobarchive import GobArchive
from gobarchive.__main__ import main


class TestCli:
    """python -m gobarchive 测试"""
    
    def test_pack_list_extract(self, tmp_path, sample_files, capsys):
        root, files = sample_files
        gob = tmp_path / "RES.GOB"
        out = tmp_path / "out"
        
        assert main(["pack", str(root), "-o", str(gob)]) == 0
        assert GobArchive.from_file(gob).files == files
        
        assert main(["list", str(gob)]) == 0
        listing = capsys.readouterr().out
        assert "a/x.txt" in listing
        assert f"{len(files)} file(s)" in listing
        
        assert main(["extract", str(gob), str(out)]) == 0
        assert (out / "b.txt").read_bytes() == files["b.txt"]
    
    def test_pack_backslash(self, tmp_path, sample_files):
        root, _ = sample_files
        gob = tmp_path / "RES.GOB"
        
        assert main(["pack", str(root), "-o", str(gob), "--separator", "\\"]) == 0
        assert b"a\\x.txt\x00" in gob.read_bytes()
    
    def test_error_exit_code(self, tmp_path, capsys):
        bad = tmp_path / "bad.gob"
        bad.write_bytes(b"PK\x03\x04" + b"\x00" * 12)
        
        assert main(["list", str(bad)]) == 1
        assert "Error:" in capsys.readouterr().err
    
    def test_missing_archive(self, tmp_path):
        assert main(["extract", str(tmp_path / "none.gob"), str(tmp_path / "out")]) == 1
    
    def test_incompatible_encoding(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["--encoding", "utf-16", "list", str(tmp_path / "x.gob")])
    
    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])
