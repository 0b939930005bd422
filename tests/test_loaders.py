import json
from pathlib import Path

import pytest

from dependency_reviewers.diff import diff_dependencies
from dependency_reviewers.errors import LoadError, LoaderError
from dependency_reviewers.loaders import LOADERS, get_known_loader_ids, resolve_loader
from dependency_reviewers.models import Dependency


def _as_dict(dependencies: list[Dependency]) -> dict[str, str]:
    return {dep.name: dep.version for dep in dependencies}


def test_package_json_reads_all_sections(tmp_path: Path):
    path = tmp_path / "package.json"
    path.write_text(
        json.dumps(
            {
                "dependencies": {"react": "^18.2.0"},
                "devDependencies": {"jest": "29.0.0", "react": "17.0.0"},
                "peerDependencies": {"react-dom": ">=18"},
            }
        ),
        encoding="utf-8",
    )

    found = _as_dict(LOADERS["package-json"].load(path))

    assert found == {"react": "^18.2.0", "jest": "29.0.0", "react-dom": ">=18"}


def test_package_lock_v2_uses_package_names(tmp_path: Path):
    path = tmp_path / "package-lock.json"
    path.write_text(
        json.dumps(
            {
                "lockfileVersion": 3,
                "packages": {
                    "": {"name": "app"},
                    "node_modules/@scope/pkg": {"version": "2.0.0"},
                    "node_modules/a": {"version": "0.1.0"},
                    "node_modules/a/node_modules/left-pad": {"version": "1.0.0"},
                    "node_modules/left-pad": {"version": "1.3.0"},
                },
            }
        ),
        encoding="utf-8",
    )

    found = _as_dict(LOADERS["package-lock"].load(path))

    assert found == {"left-pad": "1.3.0", "@scope/pkg": "2.0.0", "a": "0.1.0"}


def test_package_lock_hoisted_bump_is_detected(tmp_path: Path):
    def write_lock(name: str, hoisted: str) -> Path:
        path = tmp_path / name / "package-lock.json"
        path.parent.mkdir()
        packages = {
            "node_modules/a": {"version": "1.0.0"},
            "node_modules/a/node_modules/b": {"version": "1.0.0"},
            "node_modules/b": {"version": hoisted},
        }
        path.write_text(json.dumps({"packages": packages}), encoding="utf-8")
        return path

    loader = LOADERS["package-lock"]
    base = loader.load(write_lock("base", "2.0.0"))
    current = loader.load(write_lock("current", "3.0.0"))

    assert diff_dependencies(base, current) == ["b"]


def test_package_lock_v1_fallback(tmp_path: Path):
    path = tmp_path / "package-lock.json"
    path.write_text(
        json.dumps({"dependencies": {"lodash": {"version": "4.17.21"}}}), encoding="utf-8"
    )

    assert _as_dict(LOADERS["package-lock"].load(path)) == {"lodash": "4.17.21"}


def test_pnpm_lock_keys(tmp_path: Path):
    path = tmp_path / "pnpm-lock.yaml"
    path.write_text(
        "lockfileVersion: '9.0'\n"
        "packages:\n"
        "  /lodash@4.17.21:\n"
        "    resolution: {integrity: sha512-x}\n"
        "  /@babel/core@7.24.0:\n"
        "    resolution: {integrity: sha512-y}\n"
        "  react-dom@18.2.0(react@18.2.0):\n"
        "    resolution: {integrity: sha512-z}\n",
        encoding="utf-8",
    )

    found = _as_dict(LOADERS["pnpm-lock"].load(path))

    assert found == {"lodash": "4.17.21", "@babel/core": "7.24.0", "react-dom": "18.2.0"}


def test_yarn_lock_classic_and_berry(tmp_path: Path):
    path = tmp_path / "yarn.lock"
    path.write_text(
        "# yarn lockfile v1\n"
        "\n"
        "__metadata:\n"
        "  version: 6\n"
        "\n"
        '"@babel/core@^7.0.0", "@babel/core@^7.1.0":\n'
        '  version "7.24.0"\n'
        "\n"
        "lodash@^4.17.0:\n"
        "  version: 4.17.21\n",
        encoding="utf-8",
    )

    found = _as_dict(LOADERS["yarn-lock"].load(path))

    assert found == {"@babel/core": "7.24.0", "lodash": "4.17.21"}


def test_requirements_loader(tmp_path: Path):
    path = tmp_path / "requirements.txt"
    path.write_text(
        "# pinned\n"
        "-r base.txt\n"
        "Requests==2.31.0  # http\n"
        "PyYAML>=6.0\n"
        "packaging\n",
        encoding="utf-8",
    )

    found = _as_dict(LOADERS["requirements"].load(path))

    assert found == {"requests": "==2.31.0", "pyyaml": ">=6.0", "packaging": ""}


def test_loader_failure_is_wrapped(tmp_path: Path):
    path = tmp_path / "package.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(LoadError, match="package-json"):
        LOADERS["package-json"].load(path)


def test_missing_file_is_a_load_error(tmp_path: Path):
    with pytest.raises(LoadError):
        LOADERS["requirements"].load(tmp_path / "requirements.txt")


def test_resolve_builtin_loader(tmp_path: Path):
    assert resolve_loader("yarn-lock", [tmp_path]) is LOADERS["yarn-lock"]
    assert "requirements" in get_known_loader_ids()


def test_resolve_module_loader_falls_back_to_workspace(tmp_path: Path):
    cwd = tmp_path / "cwd"
    workspace = tmp_path / "workspace"
    cwd.mkdir()
    (workspace / "loaders").mkdir(parents=True)
    (workspace / "loaders" / "custom.py").write_text(
        "from dependency_reviewers.models import Dependency\n"
        "\n"
        "def load(path):\n"
        "    return [Dependency(name='custom', version=open(path).read().strip())]\n",
        encoding="utf-8",
    )
    manifest = tmp_path / "deps.txt"
    manifest.write_text("9.9.9\n", encoding="utf-8")

    loader = resolve_loader("loaders/custom", [cwd, workspace])

    assert loader.load(manifest) == [Dependency(name="custom", version="9.9.9")]


def test_resolve_module_without_load_function(tmp_path: Path):
    (tmp_path / "broken.py").write_text("VALUE = 1\n", encoding="utf-8")

    with pytest.raises(LoaderError, match="callable 'load'"):
        resolve_loader("broken.py", [tmp_path])


def test_unresolvable_loader_is_a_config_error(tmp_path: Path):
    with pytest.raises(LoaderError, match="Built-in loaders"):
        resolve_loader("does-not-exist", [tmp_path])
