"""Tests for locating the local intern install."""

import json

import pytest

from errors import DependencyNotFound
from versioning.resolver import find_package_dir, read_package_json, resolve_dependency


def test_resolves_in_basedir(tmp_path, install_intern):
    pkg_dir = install_intern(tmp_path, "4.1.0", {"main": "index.js"})

    resolved = resolve_dependency("intern", str(tmp_path))

    assert resolved.directory == str(pkg_dir)
    assert resolved.version == "4.1.0"
    assert resolved.metadata["main"] == "index.js"


def test_resolves_from_parent_directory(tmp_path, install_intern):
    install_intern(tmp_path, "3.4.6")
    nested = tmp_path / "src" / "app"
    nested.mkdir(parents=True)

    resolved = resolve_dependency("intern", str(nested))

    assert resolved.version == "3.4.6"


def test_nearest_install_wins(tmp_path, install_intern):
    install_intern(tmp_path, "3.4.6")
    nested = tmp_path / "packages" / "web"
    nested.mkdir(parents=True)
    install_intern(nested, "4.2.0")

    assert resolve_dependency("intern", str(nested)).version == "4.2.0"


def test_missing_dependency_raises(tmp_path):
    with pytest.raises(DependencyNotFound) as exc_info:
        resolve_dependency("intern", str(tmp_path))
    assert exc_info.value.name == "intern"
    assert any("npm install --save-dev intern@latest" in line for line in exc_info.value.lines)


def test_missing_dependency_uses_configured_package_manager(tmp_path):
    with pytest.raises(DependencyNotFound) as exc_info:
        resolve_dependency("intern", str(tmp_path), package_manager="pnpm")
    assert exc_info.value.package_manager == "pnpm"
    assert "  pnpm install --save-dev intern@next" in exc_info.value.lines
    assert not any(line.strip().startswith("npm ") for line in exc_info.value.lines)


def test_invalid_package_json_raises(tmp_path):
    pkg_dir = tmp_path / "node_modules" / "intern"
    pkg_dir.mkdir(parents=True)
    (pkg_dir / "package.json").write_text("{not json")

    with pytest.raises(DependencyNotFound) as exc_info:
        resolve_dependency("intern", str(tmp_path))
    assert exc_info.value.reason


def test_package_json_without_version_raises(tmp_path):
    pkg_dir = tmp_path / "node_modules" / "intern"
    pkg_dir.mkdir(parents=True)
    (pkg_dir / "package.json").write_text(json.dumps({"name": "intern"}))

    with pytest.raises(DependencyNotFound):
        resolve_dependency("intern", str(tmp_path))


def test_non_object_package_json_is_rejected(tmp_path):
    (tmp_path / "package.json").write_text("[1, 2]")
    with pytest.raises(ValueError):
        read_package_json(str(tmp_path))


def test_find_package_dir_skips_node_modules_roots(tmp_path, install_intern):
    install_intern(tmp_path, "4.0.0")
    inner = tmp_path / "node_modules" / "other"
    inner.mkdir(parents=True)

    found = find_package_dir("intern", str(inner))

    assert found == str(tmp_path / "node_modules" / "intern")
