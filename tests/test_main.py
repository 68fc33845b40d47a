import pytest

import timeline_renamer.core as core_module
from timeline_renamer import main as main_module
from timeline_renamer.config import LOG_FILE_NAME


@pytest.fixture
def stub_reader(monkeypatch, fake_reader):
    tags = {"a.jpg": {'DateTimeOriginal': '2024-01-01T00:00:00'}}
    monkeypatch.setattr(core_module, "MetadataReader", lambda settings, local_zone=None: fake_reader(tags))


def test_main_renames_and_saves_plain_log(tmp_path, stub_reader, restore_logging):
    (tmp_path / "a.jpg").write_bytes(b"a")

    code = main_module.main([str(tmp_path), "--save-logs", "--no-progress", "--lang", "en"])

    assert code == 0
    assert (tmp_path / "IMG_2024-01-01_00-00-00.jpg").exists()
    log_text = (tmp_path / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "Renamed: 1" in log_text
    assert "\x1b[" not in log_text


def test_log_file_is_not_renamed_or_counted(tmp_path, stub_reader, restore_logging):
    (tmp_path / LOG_FILE_NAME).write_text("previous run", encoding="utf-8")

    assert main_module.main([str(tmp_path), "--save-logs", "--no-progress", "--no-color", "--lang", "en"]) == 0

    log_text = (tmp_path / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "Skipped: 0" in log_text
    assert "previous run" not in log_text


def test_main_without_saving_logs(tmp_path, stub_reader, restore_logging):
    assert main_module.main([str(tmp_path), "--no-progress", "--lang", "en"]) == 0
    assert not (tmp_path / LOG_FILE_NAME).exists()


def test_missing_root_is_logged_as_an_error(tmp_path, restore_logging, capsys):
    missing = tmp_path / "nope"

    assert main_module.main([str(missing), "--save-logs", "--no-color"]) == 1
    out = capsys.readouterr().out
    assert "Not a directory" in out
    assert "nope" in out
    assert not missing.exists()


def test_parse_args_defaults(tmp_path):
    args = main_module.parse_args([str(tmp_path)])

    assert args.root == tmp_path
    assert not args.save_logs
    assert args.lang is None
