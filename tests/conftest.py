from pathlib import Path

import pytest


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    src = tmp_path / "source"
    (src / "a" / "deep").mkdir(parents=True)
    (src / "b").mkdir()
    (src / "one.txt").write_text("one\n")
    (src / "a" / "two.bin").write_bytes(b"\x00\x01\x02two")
    (src / "a" / "deep" / "three.md").write_text("# three\n")
    (src / "b" / "unlisted.txt").write_text("nope\n")
    return src


@pytest.fixture
def file_list(tmp_path: Path) -> Path:
    fl = tmp_path / "files.txt"
    fl.write_text("one.txt\ntwo.bin\nthree.md\n")
    return fl
