"""Unit tests for the command-line entry point."""

from unittest.mock import Mock, patch

import pytest

from nepa_watch.config.environment import EnvironmentConfig
from nepa_watch.config.exceptions import ConfigurationError
from nepa_watch.config.models import AppConfig, QueryConfig
from nepa_watch.feeds.exceptions import FeedWriteError
from nepa_watch.main import build_parser, load_runtime_config, main, run, scheduled_build
from nepa_watch.pipeline import PipelineRunResult
from nepa_watch.reconciliation import RunAbortedError
from nepa_watch.utils.timestamps import utc_now


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("NEPA_WATCH_OUTPUT_DIR", "NEPA_WATCH_BROWSER", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def runtime_config():
    app_config = AppConfig(queries=[QueryConfig(search_text="solar")])
    env_config = EnvironmentConfig(log_level="INFO")
    return app_config, env_config


@pytest.fixture
def run_result():
    now = utc_now()
    return PipelineRunResult(run_started_at=now, run_finished_at=now, record_count=2)


class TestLoadRuntimeConfig:
    def test_config_file_level_used_by_default(self, tmp_path, clean_env):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("queries: [{searchText: solar}]\nlogging: {level: WARNING}\n")

        app_config, env_config = load_runtime_config(config_file, None)

        assert env_config.log_level == "WARNING"
        assert app_config.poll_interval_seconds == 21600

    def test_environment_beats_config(self, tmp_path, clean_env):
        clean_env.setenv("LOG_LEVEL", "ERROR")
        config_file = tmp_path / "config.yaml"
        config_file.write_text("queries: [{searchText: solar}]\nlogging: {level: WARNING}\n")

        _, env_config = load_runtime_config(config_file, None)
        assert env_config.log_level == "ERROR"

    def test_cli_beats_environment(self, tmp_path, clean_env):
        clean_env.setenv("LOG_LEVEL", "ERROR")
        config_file = tmp_path / "config.yaml"
        config_file.write_text("queries: [{searchText: solar}]\n")

        _, env_config = load_runtime_config(config_file, "DEBUG")
        assert env_config.log_level == "DEBUG"


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config is None
        assert not args.once
        assert not args.validate
        assert args.log_level is None

    def test_rejects_unknown_level(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--log-level", "LOUD"])


class TestMain:
    @patch("nepa_watch.main.FeedPipeline")
    @patch("nepa_watch.main.configure_logging")
    @patch("nepa_watch.main.load_runtime_config")
    def test_once_success(self, mock_load, mock_configure, mock_pipeline, runtime_config, run_result):
        mock_load.return_value = runtime_config
        mock_pipeline.return_value.run_once.return_value = run_result

        exit_code = main(["--once", "--config", "config.yaml"])

        assert exit_code == 0
        mock_configure.assert_called_once_with(level="INFO", format_type="key-value", environment="local")
        mock_pipeline.assert_called_once_with(runtime_config[0])
        mock_pipeline.return_value.run_once.assert_called_once()

    @patch("nepa_watch.main.FeedPipeline")
    @patch("nepa_watch.main.configure_logging")
    @patch("nepa_watch.main.load_runtime_config")
    def test_once_aborted_run_exits_nonzero(self, mock_load, mock_configure, mock_pipeline, runtime_config, capsys):
        mock_load.return_value = runtime_config
        mock_pipeline.return_value.run_once.side_effect = RunAbortedError("unreachable", failed_terms=3)

        assert main(["--once"]) == 1
        assert "Feed build failed" in capsys.readouterr().err

    @patch("nepa_watch.main.FeedPipeline")
    @patch("nepa_watch.main.configure_logging")
    @patch("nepa_watch.main.load_runtime_config")
    def test_once_write_failure_exits_nonzero(self, mock_load, mock_configure, mock_pipeline, runtime_config):
        mock_load.return_value = runtime_config
        mock_pipeline.return_value.run_once.side_effect = FeedWriteError("disk full", path="docs/index.xml")

        assert main(["--once"]) == 1

    @patch("nepa_watch.main.logger")
    @patch("nepa_watch.main.FeedPipeline")
    @patch("nepa_watch.main.configure_logging")
    @patch("nepa_watch.main.load_runtime_config")
    def test_unexpected_error_logged_and_exits_nonzero(
        self, mock_load, mock_configure, mock_pipeline, mock_logger, runtime_config, capsys
    ):
        mock_load.return_value = runtime_config
        mock_pipeline.return_value.run_once.side_effect = RuntimeError("boom")

        assert main(["--once", "--config", "config.yaml"]) == 1

        assert "Fatal error: boom" in capsys.readouterr().err
        mock_logger.critical.assert_called_once()
        kwargs = mock_logger.critical.call_args.kwargs
        assert kwargs["exc_info"] is True
        assert kwargs["extra"]["error_type"] == "RuntimeError"

    @patch("nepa_watch.main.load_runtime_config")
    def test_configuration_error(self, mock_load, capsys):
        mock_load.side_effect = ConfigurationError("Configuration file not found", suggestions=["Copy it"])

        assert main(["--once"]) == 1
        assert "Configuration Error" in capsys.readouterr().err

    @patch("nepa_watch.main.load_runtime_config")
    def test_keyboard_interrupt(self, mock_load):
        mock_load.side_effect = KeyboardInterrupt()
        assert main([]) == 0

    @patch("nepa_watch.main.load_runtime_config")
    def test_log_level_passed_through(self, mock_load):
        mock_load.side_effect = ConfigurationError("stop here")

        main(["--log-level", "DEBUG", "--once"])

        assert mock_load.call_args.args[1] == "DEBUG"

    @patch("signal.signal")
    @patch("nepa_watch.main.SchedulerService")
    @patch("nepa_watch.main.FeedPipeline")
    @patch("nepa_watch.main.configure_logging")
    @patch("nepa_watch.main.load_runtime_config")
    def test_daemon_mode(self, mock_load, mock_configure, mock_pipeline, mock_scheduler, mock_signal, runtime_config):
        mock_load.return_value = runtime_config
        mock_scheduler.return_value.start.side_effect = KeyboardInterrupt()

        assert main([]) == 0

        kwargs = mock_scheduler.call_args.kwargs
        assert kwargs["interval_seconds"] == 21600
        mock_scheduler.return_value.start.assert_called_once()
        assert mock_signal.call_count == 2

    def test_validate_flag(self, tmp_path, capsys):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("queries: [{searchText: solar}]\n")

        assert main(["--validate", "--config", str(config_file)]) == 0
        assert main(["--validate", "--config", str(tmp_path / "missing.yaml")]) == 1

    @patch("nepa_watch.main.main", return_value=1)
    def test_run_exits_with_code(self, mock_main):
        with pytest.raises(SystemExit) as exc_info:
            run()
        assert exc_info.value.code == 1


class TestScheduledBuild:
    def test_failure_is_logged_not_raised(self):
        pipeline = Mock()
        pipeline.run_once.side_effect = RunAbortedError("unreachable", failed_terms=1)

        scheduled_build(pipeline)

        pipeline.run_once.assert_called_once()

    def test_success(self, run_result):
        pipeline = Mock()
        pipeline.run_once.return_value = run_result

        scheduled_build(pipeline)

        pipeline.run_once.assert_called_once()

    def test_unexpected_errors_propagate(self):
        pipeline = Mock()
        pipeline.run_once.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError):
            scheduled_build(pipeline)
