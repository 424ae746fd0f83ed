from unittest.mock import Mock, patch

from click.testing import CliRunner

from cosh import __version__
from cosh.cli import EXIT_ABORTED, load_help, main
from cosh.exceptions import SelectionAborted
from cosh.runtime.status import RunStatus


def test_version_flag():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_other_args_print_help():
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "CONTAINER_BASE_PATH" in result.output
    assert f"Version: {__version__}" in result.output


def test_version_with_extra_args_prints_help():
    result = CliRunner().invoke(main, ["--version", "extra"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_help_document_is_packaged():
    assert "%COMPOSE" in load_help()


def test_no_compose_files_exits_1(tmp_path, monkeypatch):
    a, b = tmp_path / "a", tmp_path / "b"
    monkeypatch.setenv("CONTAINER_BASE_PATH", f"{a}:{b}")
    result = CliRunner().invoke(main, [])
    assert result.exit_code == 1
    assert "No docker compose YAML found in" in result.output
    assert str(a) in result.output
    assert str(b) in result.output


def test_invalid_config_file_exits_1(tmp_path, monkeypatch):
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("max_depth: [1\n")
    monkeypatch.setenv("COSH_CONFIG", str(config_path))
    result = CliRunner().invoke(main, [])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_user_abort_exits_130(base_dir, make_compose, monkeypatch):
    make_compose(base_dir / "svc1" / "docker-compose.yml")
    monkeypatch.setenv("CONTAINER_BASE_PATH", str(base_dir))
    with patch("cosh.cli.run_selection", side_effect=SelectionAborted("user aborted")):
        result = CliRunner().invoke(main, [])
    assert result.exit_code == EXIT_ABORTED
    assert "terminated by user" in result.output


@patch("cosh.runtime.dispatch.probe_status")
@patch("subprocess.run")
def test_end_to_end_not_running(mock_run, mock_probe, base_dir, make_compose, monkeypatch):
    compose = make_compose(base_dir / "svc1" / "docker-compose.yml", "services:\n  app:\n    image: alpine\n")
    monkeypatch.setenv("CONTAINER_BASE_PATH", str(base_dir))
    monkeypatch.setenv("CONTAINER_BASE_PATH_MAX_DEPTH", "2")
    monkeypatch.setenv("CONTAINER_EXEC_COMMAND", "docker compose -f %COMPOSE exec %SERVICE sh")
    monkeypatch.setenv("CONTAINER_EXEC_COMMAND_NOT_RUNNING", "docker compose -f %COMPOSE run --rm %SERVICE sh")
    mock_probe.return_value = RunStatus.NOT_RUNNING
    mock_run.return_value = Mock(returncode=0)

    answers = iter([compose, "app"])

    def fake_select(message, choices, **kwargs):
        values = [c.value for c in choices]
        answer = next(answers)
        assert answer in values
        return Mock(unsafe_ask=Mock(return_value=answer))

    with patch("questionary.select", side_effect=fake_select):
        result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    mock_run.assert_called_once_with(
        ["docker", "compose", "-f", str(compose), "run", "--rm", "app", "sh"]
    )


@patch("cosh.runtime.dispatch.probe_status", return_value=RunStatus.RUNNING)
@patch("subprocess.run")
def test_dispatch_failure_exits_1(mock_run, mock_probe, base_dir, make_compose, monkeypatch):
    make_compose(base_dir / "svc1" / "docker-compose.yml")
    monkeypatch.setenv("CONTAINER_BASE_PATH", str(base_dir))
    mock_run.return_value = Mock(returncode=127)

    with patch("cosh.cli.run_selection", return_value=(base_dir / "svc1" / "docker-compose.yml", "web")):
        result = CliRunner().invoke(main, [])

    assert result.exit_code == 1
    assert "exited with status 127" in result.output


def test_separator_alone_prints_help(tmp_path, monkeypatch):
    monkeypatch.setenv("CONTAINER_BASE_PATH", str(tmp_path / "missing"))
    result = CliRunner().invoke(main, ["--"])
    assert result.exit_code == 0
    assert "CONTAINER_BASE_PATH" in result.output
    assert "No docker compose YAML found" not in result.output


def test_version_after_separator_prints_help():
    result = CliRunner().invoke(main, ["--", "--version"])
    assert result.exit_code == 0
    assert result.output.strip() != __version__
    assert f"Version: {__version__}" in result.output
