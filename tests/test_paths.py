from __future__ import annotations

from pathlib import Path

from memorymatch.paths import get_paths, is_source_checkout, resolve_paths


def _checkout(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    pkg = repo / "src" / "memorymatch"
    pkg.mkdir(parents=True)
    (repo / "pyproject.toml").write_text("[project]\nname = 'memorymatch'\n", encoding="utf-8")
    return pkg


def test_source_checkout_keeps_userdata_in_repo(tmp_path: Path) -> None:
    pkg = _checkout(tmp_path)
    paths = resolve_paths(pkg, home=tmp_path / "home")
    assert is_source_checkout(pkg)
    assert paths.repo_root == tmp_path / "repo"
    assert paths.userdata_dir == tmp_path / "repo" / "userdata"
    assert paths.data_dir == pkg / "data"
    assert paths.schema_dir == pkg / "data" / "schemas"


def test_installed_copy_writes_to_home(tmp_path: Path) -> None:
    pkg = tmp_path / "venv" / "lib" / "python3.11" / "site-packages" / "memorymatch"
    pkg.mkdir(parents=True)
    home = tmp_path / "home"
    paths = resolve_paths(pkg, home=home)
    assert not is_source_checkout(pkg)
    assert paths.userdata_dir == home / ".memorymatch"
    assert tmp_path / "venv" not in paths.userdata_dir.parents
    assert paths.data_dir == pkg / "data"


def test_src_dir_without_pyproject_is_not_a_checkout(tmp_path: Path) -> None:
    pkg = tmp_path / "src" / "memorymatch"
    pkg.mkdir(parents=True)
    assert resolve_paths(pkg, home=tmp_path / "home").userdata_dir == tmp_path / "home" / ".memorymatch"


def test_userdata_override(tmp_path: Path) -> None:
    pkg = _checkout(tmp_path)
    paths = resolve_paths(pkg, home=tmp_path / "home", userdata_dir=tmp_path / "custom")
    assert paths.userdata_dir == tmp_path / "custom"
    assert get_paths(tmp_path / "custom").userdata_dir == tmp_path / "custom"


def test_get_paths_userdata_inside_repo_only_for_checkout() -> None:
    paths = get_paths()
    pkg = paths.data_dir.parent
    if is_source_checkout(pkg):
        assert paths.repo_root in paths.userdata_dir.parents
    else:
        assert paths.userdata_dir == Path.home() / ".memorymatch"
    assert (paths.data_dir / "game.json").is_file()
