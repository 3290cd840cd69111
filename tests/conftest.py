import stat
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sbatch_submit.config.loader import SETTINGS_ENV  # noqa: E402
from sbatch_submit.utils.logging_config import LOG_LEVEL_ENV  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch):
    """Run every test from an empty directory with a private HOME."""
    home = tmp_path / "home"
    home.mkdir()
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("LOGNAME", "alice")
    monkeypatch.setenv("USER", "alice")
    monkeypatch.setenv("TMPDIR", str(tmp_path / "tmp"))
    (tmp_path / "tmp").mkdir()
    monkeypatch.delenv(SETTINGS_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    monkeypatch.chdir(workspace)
    # tempfile caches the temp directory on first use
    monkeypatch.setattr("tempfile.tempdir", str(tmp_path / "tmp"))
    yield workspace


@pytest.fixture
def fake_sbatch(tmp_path: Path) -> Path:
    """A stand-in submission binary that records its arguments."""
    script = tmp_path / "bin" / "sbatch"
    script.parent.mkdir()
    calls = tmp_path / "sbatch_calls"
    script.write_text(
        "#!/bin/sh\n"
        f'echo "$@" >> "{calls}"\n'
        'echo "Submitted batch job 4242"\n'
        'echo "warning: from stderr" >&2\n'
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def settings_file(tmp_path: Path, fake_sbatch: Path, monkeypatch) -> Path:
    """Settings pointing at the fake submission binary."""
    path = tmp_path / "settings.yaml"
    path.write_text(f"submit_cmd: {fake_sbatch}\naccount: proj01\npartition: batch\n")
    monkeypatch.setenv(SETTINGS_ENV, str(path))
    return path
