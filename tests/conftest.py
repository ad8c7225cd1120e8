"""Shared fixtures: a throwaway PackRoot with a couple of packs."""

from pathlib import Path

import pytest

from packserve.config import ALLOW_PACK_AND_MODS, PackPolicy
from packserve.pipeline import PackFileService


@pytest.fixture
def pack_root(tmp_path: Path) -> Path:
    root = tmp_path / "packs"
    demo = root / "demo"
    (demo / "mods" / "sub").mkdir(parents=True)
    (demo / "pack.toml").write_text('name = "Demo"')
    (demo / "index.toml").write_text("[[files]]\n")
    (demo / "mods" / "tool.jar").write_bytes(b"PK\x03\x04jar-bytes")
    (demo / "mods" / "meta.json").write_text('{"id": 1}')
    (demo / "notes.TXT").write_text("upper-case extension")
    (demo / "blob.bin").write_bytes(b"\x00\x01\x02")

    secret = root / "secret"
    secret.mkdir()
    (secret / "pack.toml").write_text('name = "Secret"')

    camel = root / "CamelPack"
    camel.mkdir()
    (camel / "pack.toml").write_text('name = "Camel"')
    return root


@pytest.fixture
def service(pack_root: Path) -> PackFileService:
    return PackFileService(str(pack_root))


@pytest.fixture
def strict_service(pack_root: Path) -> PackFileService:
    return PackFileService(str(pack_root), PackPolicy(allow_list=ALLOW_PACK_AND_MODS))


def case_sensitive_fs(path: Path) -> bool:
    probe = path / "CaseProbe"
    probe.mkdir()
    try:
        return not (path / "caseprobe").exists()
    finally:
        probe.rmdir()
