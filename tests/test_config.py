from pathlib import Path

import pytest

from inflight_counter.config import DEFAULT_MARKER_PAIRS, Settings, load_settings
from inflight_counter.line_counter import MarkerPair


def write_config(tmp_path, text):
    path = tmp_path / "config.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_keep_legacy_markers():
    settings = Settings()
    assert settings.input_file == Path("out.txt")
    assert settings.backup_path == Path("out.txt.bak")
    assert settings.marker_pairs == (
        MarkerPair("starting", "fininini"),
        MarkerPair("asdasd_start", "asdasd_end"),
    )


def test_repository_config_matches_defaults():
    repo_config = Path(__file__).resolve().parents[1] / "config.yml"
    settings = load_settings(repo_config)
    assert settings.marker_pairs == DEFAULT_MARKER_PAIRS
    assert settings.input_file == Path("out.txt")
    assert settings.log_file is None
    assert settings.report_path is None


def test_load_full_config(tmp_path):
    path = write_config(
        tmp_path,
        "input_file: logs/run.log\n"
        "backup_suffix: .snap\n"
        "marker_pairs:\n"
        "  - {start: begin, end: done}\n"
        "  - [open, close]\n"
        "log_level: debug\n"
        "log_file: inflight.log\n"
        "report_path: out/report.xlsx\n",
    )
    settings = load_settings(path)
    assert settings.backup_path == Path("logs/run.log.snap")
    assert settings.marker_pairs == (MarkerPair("begin", "done"), MarkerPair("open", "close"))
    assert settings.log_level == "debug"
    assert settings.log_file == tmp_path.resolve() / "inflight.log"
    assert settings.report_path == Path("out/report.xlsx")


def test_missing_keys_fall_back_to_defaults(tmp_path):
    settings = load_settings(write_config(tmp_path, "log_level: WARNING\n"))
    assert settings.marker_pairs == DEFAULT_MARKER_PAIRS
    assert settings.input_file == Path("out.txt")


def test_utf8_bom_is_accepted(tmp_path):
    path = tmp_path / "config.yml"
    path.write_bytes("\ufeffinput_file: 日志.txt\n".encode("utf-8"))
    assert load_settings(path).input_file == Path("日志.txt")


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.yml")


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "marker_pairs: []\n",
        "marker_pairs:\n  - {start: only}\n",
        "marker_pairs:\n  - {start: 1, end: 2}\n",
        "marker_pairs:\n  - {start: \"a\\nb\", end: c}\n",
        "report_path: report.csv\n",
        "input_file: ''\n",
        "backup_suffix: /x\n",
        "backup_suffix: 5\n",
        "input_file: /\n",
        "log_level: basic_format\n",
        "log_level: loud\n",
    ],
)
def test_invalid_config_raises_value_error(tmp_path, text):
    with pytest.raises(ValueError):
        load_settings(write_config(tmp_path, text))


def test_override_input_moves_backup():
    settings = Settings().with_overrides(input_file=Path("other.log"), report_path=None)
    assert settings.backup_path == Path("other.log.bak")
    assert settings.report_path is None


def test_override_backup_file_wins_over_suffix():
    settings = Settings().with_overrides(backup_file=Path("snap/out.copy"))
    assert settings.backup_path == Path("snap/out.copy")


def test_null_backup_suffix_uses_default(tmp_path):
    settings = load_settings(write_config(tmp_path, "backup_suffix: null\n"))
    assert settings.backup_suffix == ".bak"
    assert settings.backup_path == Path("out.txt.bak")


def test_log_level_names_are_case_insensitive(tmp_path):
    assert load_settings(write_config(tmp_path, "log_level: warn\n")).log_level == "warn"


def test_environment_variable_is_read_at_call_time(tmp_path, monkeypatch):
    path = write_config(tmp_path, "input_file: from_env.log\n")
    monkeypatch.setenv("INFLIGHT_COUNTER_CONFIG", str(path))
    assert load_settings().input_file == Path("from_env.log")

    monkeypatch.setenv("INFLIGHT_COUNTER_CONFIG", str(tmp_path / "absent.yml"))
    assert load_settings() == Settings()
