# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for compilation artifact serialization."""

import json
from pathlib import Path

import pytest

from phasec.compiler.artifact import (
    ARTIFACT_FORMAT_VERSION,
    config_fingerprint,
    deserialize,
    read_artifact,
    read_matching_artifact,
    serialize,
    write_artifact,
)
from phasec.compiler.pipeline import CompilationResult, compile_source
from phasec.model.tree import ScanMode
from phasec.workspace.config import CompilerConfig

# ###############
# Helpers
# ###############

SOURCE = """\
// sample
program Demo {
  function main() {
    var x: int = 1;
    var x: int = 2;
    if (x) { print("big"); }
    return;
  }
}
"""


def _result(scan_mode: ScanMode = ScanMode.FLAT) -> CompilationResult:
    result = compile_source(SOURCE, config=CompilerConfig(scan_mode=scan_mode))
    assert isinstance(result, CompilationResult)
    return result


# ###############
# Serialize / Deserialize
# ###############


class TestSerialize:
    def test_format_version_is_recorded(self) -> None:
        obj = json.loads(serialize(_result()))
        assert obj["v"] == ARTIFACT_FORMAT_VERSION

    def test_output_is_compact(self) -> None:
        data = serialize(_result())
        assert data == json.dumps(json.loads(data), separators=(",", ":"))

    def test_tokens_are_stored_as_rows(self) -> None:
        obj = json.loads(serialize(_result()))
        assert obj["tokens"][0] == ["COMMENT", "// sample", 1, 0]

    def test_result_survives_roundtrip(self) -> None:
        result = _result()
        assert deserialize(serialize(result)) == result

    def test_nested_tree_survives_roundtrip(self) -> None:
        result = _result(ScanMode.NESTED)
        restored = deserialize(serialize(result))
        assert restored.tree == result.tree
        assert restored.tree.children[0].children[2].children != []

    def test_unknown_version_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unsupported artifact format version"):
            deserialize('{"v": "0", "tree": {"kind": "Program"}}')


class TestFiles:
    def test_write_and_read(self, tmp_path: Path) -> None:
        path = tmp_path / "out" / "demo.phasec.json"
        result = _result()
        write_artifact(result, path)
        assert path.exists()
        assert read_artifact(path) == result

    def test_matching_config_is_read(self, tmp_path: Path) -> None:
        path = tmp_path / "demo.phasec.json"
        result = _result()
        write_artifact(result, path, CompilerConfig())
        assert read_matching_artifact(path, CompilerConfig()) == result

    def test_different_config_is_not_read(self, tmp_path: Path) -> None:
        path = tmp_path / "demo.phasec.json"
        write_artifact(_result(), path, CompilerConfig())
        assert read_matching_artifact(path, CompilerConfig(optimize=False)) is None
        assert read_matching_artifact(path, CompilerConfig(scan_mode=ScanMode.NESTED)) is None

    def test_missing_config_is_not_read(self, tmp_path: Path) -> None:
        path = tmp_path / "demo.phasec.json"
        write_artifact(_result(), path)
        assert read_matching_artifact(path, CompilerConfig()) is None


class TestConfigFingerprint:
    def test_recorded_under_cfg(self) -> None:
        obj = json.loads(serialize(_result(), CompilerConfig(scan_mode=ScanMode.NESTED, optimize=False)))
        assert obj["cfg"] == {"scan-mode": "nested", "optimize": False}

    def test_output_directory_is_not_part_of_fingerprint(self) -> None:
        assert config_fingerprint(CompilerConfig(output_directory="a")) == config_fingerprint(
            CompilerConfig(output_directory="b")
        )

    def test_non_object_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="JSON object"):
            deserialize("[1, 2]")
