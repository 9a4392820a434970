from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pytest

from flag_quiz import __version__, cli, config
from flag_quiz.config import Settings
from flag_quiz.logging_config import setup_logger

from conftest import make_flag_dir


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger("flag_quiz")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


class TestValidators:
    def test_flag_dir_ok(self, flag_dir: Path) -> None:
        assert cli.valid_flag_dir(str(flag_dir)) == flag_dir

    def test_flag_dir_missing(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="^target is not valid$"):
            cli.valid_flag_dir("target")

    def test_flag_dir_without_png_dir(self, flag_dir: Path) -> None:
        for png in (flag_dir / config.PNG_DIR).iterdir():
            png.unlink()
        (flag_dir / config.PNG_DIR).rmdir()
        with pytest.raises(argparse.ArgumentTypeError):
            cli.valid_flag_dir(str(flag_dir))

    def test_flag_dir_with_broken_json(self, flag_dir: Path) -> None:
        (flag_dir / config.COUNTRIES_JSON).write_text("{", encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError, match="countries.json is not valid"):
            cli.valid_flag_dir(str(flag_dir))

    def test_template_dir_ok(self) -> None:
        template_dir = str(config.DEFAULT_TEMPLATE_DIR)
        assert cli.valid_template_dir(template_dir) == config.DEFAULT_TEMPLATE_DIR

    def test_template_dir_without_template(self, tmp_path: Path) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="is not valid"):
            cli.valid_template_dir(str(tmp_path))

    def test_port_ok(self) -> None:
        assert cli.valid_port("8000") == 8000

    def test_port_not_a_number(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="invalid port value: str"):
            cli.valid_port("str")

    def test_port_at_max(self) -> None:
        with pytest.raises(
            argparse.ArgumentTypeError, match=f"value should be less than {config.MAX_PORT}"
        ):
            cli.valid_port(str(config.MAX_PORT))

    def test_port_zero(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="positive"):
            cli.valid_port("0")


class TestCheck:
    def test_all_flags_present(self, flag_dir: Path, capsys: pytest.CaptureFixture) -> None:
        assert cli.main(["check", "--dir", str(flag_dir)]) == 0
        assert "All flags present." in capsys.readouterr().out

    def test_reports_missing_and_corrupt_flags(
        self, flag_dir: Path, capsys: pytest.CaptureFixture
    ) -> None:
        (flag_dir / config.PNG_DIR / "de.png").unlink()
        (flag_dir / config.PNG_DIR / "fr.png").write_bytes(b"not a png")

        assert cli.main(["check", "--dir", str(flag_dir)]) == 1
        out = capsys.readouterr().out
        assert "2 flag(s) need attention: DE, FR" in out

    def test_excluded_codes_are_not_checked(self, tmp_path: Path) -> None:
        root = make_flag_dir(tmp_path, {"AD": "Andorra", "AQ": "Antarctica"})
        (root / config.PNG_DIR / "aq.png").unlink()
        assert cli.find_broken_flags(root) == []

    def test_bad_dir_exits_through_argparse(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as info:
            cli.main(["check", "--dir", str(tmp_path / "missing")])
        assert info.value.code == 2


class TestServe:
    def test_runs_uvicorn_with_loaded_app(
        self, flag_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls = {}

        def fake_run(app, host, port, log_level):
            calls.update(app=app, host=host, port=port, log_level=log_level)

        monkeypatch.setattr("uvicorn.run", fake_run)
        result = cli.main(
            ["--log-level", "WARNING", "serve", "--dir", str(flag_dir), "--port", "9000"]
        )

        assert result == 0
        assert calls["host"] == config.DEFAULT_HOST
        assert calls["port"] == 9000
        assert calls["log_level"] == "warning"
        settings: Settings = calls["app"].state.settings
        assert settings.flag_dir == flag_dir.resolve()
        assert len(calls["app"].state.catalog) == 7

    def test_invalid_option_count_does_not_start(
        self, flag_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("uvicorn.run", lambda *args, **kwargs: pytest.fail("started"))
        assert cli.main(["serve", "--dir", str(flag_dir), "--options", "0"]) == 2

    def test_invalid_port_exits(self, flag_dir: Path) -> None:
        with pytest.raises(SystemExit):
            cli.main(["serve", "--dir", str(flag_dir), "--port", "40000"])


def test_version_flag(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as info:
        cli.main(["--version"])
    assert info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_setup_logger_is_idempotent() -> None:
    first = setup_logger("flag_quiz.test_logger", level="DEBUG")
    second = setup_logger("flag_quiz.test_logger", level=logging.WARNING)
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.WARNING
