from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Paths:
    repo_root: Path
    data_dir: Path
    schema_dir: Path
    userdata_dir: Path


def is_source_checkout(package_dir: Path) -> bool:
    # src/memorymatch -> parents: [src, repo_root]
    return package_dir.parent.name == "src" and (package_dir.parents[1] / "pyproject.toml").is_file()


def resolve_paths(package_dir: Path, home: Path, userdata_dir: Path | None = None) -> Paths:
    """Lay out paths for a package living in ``package_dir``.

    A source checkout keeps userdata inside the repo; an installed copy writes
    to ``~/.memorymatch`` instead of its (possibly read-only) install prefix.
    """
    if is_source_checkout(package_dir):
        repo_root = package_dir.parents[1]
        default_userdata = repo_root / "userdata"
    else:
        repo_root = package_dir
        default_userdata = home / ".memorymatch"
    data_dir = package_dir / "data"
    return Paths(
        repo_root=repo_root,
        data_dir=data_dir,
        schema_dir=data_dir / "schemas",
        userdata_dir=userdata_dir if userdata_dir is not None else default_userdata,
    )


def get_paths(userdata_dir: Path | None = None) -> Paths:
    return resolve_paths(Path(__file__).resolve().parent, Path.home(), userdata_dir)
