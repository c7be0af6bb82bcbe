from pathlib import Path

from gtask.utils import config


def test_explicit_file_wins(monkeypatch, tmp_path):
    monkeypatch.setenv("GTASK_FILE", str(tmp_path / "env.xml"))
    assert config.get_task_file_path(str(tmp_path / "cli.xml")) == tmp_path / "cli.xml"


def test_env_file_then_home(monkeypatch, tmp_path):
    monkeypatch.setenv("GTASK_FILE", str(tmp_path / "env.xml"))
    assert config.get_task_file_path() == tmp_path / "env.xml"

    monkeypatch.delenv("GTASK_FILE")
    monkeypatch.setenv("GTASK_HOME", str(tmp_path / "home"))
    assert config.get_task_file_path() == tmp_path / "home" / "tasks.xml"
    # resolving the path does not create the directory
    assert not (tmp_path / "home").exists()


def test_default_directory(monkeypatch, tmp_path):
    monkeypatch.delenv("GTASK_FILE", raising=False)
    monkeypatch.delenv("GTASK_HOME", raising=False)
    monkeypatch.chdir(tmp_path)
    directory = config.get_main_directory()
    assert directory == Path(tmp_path) / "G Task"
    assert directory.is_dir()


def test_blank_values_fall_back(monkeypatch):
    monkeypatch.setenv("GTASK_LOG_LEVEL", "  ")
    assert config.get_log_level() == "WARNING"


def test_load_env_vars_reads_local_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config.Path, "home", lambda: tmp_path / "nohome")
    monkeypatch.delenv("GTASK_LOG_LEVEL", raising=False)
    (tmp_path / ".gtask.env").write_text("GTASK_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    config.load_env_vars()
    assert config.get_log_level() == "DEBUG"
    monkeypatch.delenv("GTASK_LOG_LEVEL")
