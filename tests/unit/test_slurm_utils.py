from pathlib import Path

import pytest

import sbatch_submit.slurm_gen.client
from sbatch_submit.config.schema import JobRequest
from sbatch_submit.slurm_gen.client import SlurmClient, SubmissionError
from sbatch_submit.slurm_gen.shell import run_command


def test_build_argv_passes_partition_account_and_script(tmp_path: Path) -> None:
    client = SlurmClient("sbatch --parsable")
    request = JobRequest(command="true", partition="gpu", account="proj01")

    argv = client.build_argv(tmp_path / "job.sbatch", request)

    assert argv == ["sbatch", "--parsable", "-p", "gpu", "-A", "proj01", str(tmp_path / "job.sbatch")]


def test_submit_redirects_output_to_log(tmp_path: Path, monkeypatch) -> None:
    calls = []

    class MockResult:
        returncode = 0

    def mock_run_command(argv, **kwargs):
        calls.append((argv, kwargs))
        kwargs["output"].write(b"Submitted batch job 12345\n")
        return MockResult()

    monkeypatch.setattr(sbatch_submit.slurm_gen.client, "run_command", mock_run_command)

    log_path = tmp_path / "submit_log"
    log_path.write_text("previous entry\n")
    result = SlurmClient().submit(tmp_path / "job.sbatch", JobRequest(command="true"), log_path)

    assert len(calls) == 1
    assert calls[0][0][0] == "sbatch"
    assert result.return_code == 0
    assert result.log_path == log_path
    assert log_path.read_text() == "previous entry\nSubmitted batch job 12345\n"


def test_submit_does_not_interpret_failures(tmp_path: Path, monkeypatch) -> None:
    class MockResult:
        returncode = 1

    monkeypatch.setattr(
        sbatch_submit.slurm_gen.client, "run_command", lambda argv, **kwargs: MockResult()
    )

    result = SlurmClient().submit(tmp_path / "job.sbatch", JobRequest(command="true"), tmp_path / "log")

    assert result.return_code == 1


def test_submit_missing_binary(tmp_path: Path) -> None:
    client = SlurmClient(str(tmp_path / "no-such-sbatch"))
    with pytest.raises(SubmissionError):
        client.submit(tmp_path / "job.sbatch", JobRequest(command="true"), tmp_path / "log")


def test_run_command_requires_output_target() -> None:
    with pytest.raises(TypeError):
        run_command(["true"])


def test_run_command_combines_streams_into_file(tmp_path: Path) -> None:
    target = tmp_path / "combined"
    with open(target, "ab") as handle:
        run_command(["sh", "-c", "echo out; echo err >&2"], output=handle)
    assert sorted(target.read_text().splitlines()) == ["err", "out"]
