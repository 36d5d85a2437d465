from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from omniextract.main import build_arg_parser, main
from omniextract.storage.exceptions import StorageError


@pytest.fixture()
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at tmp_path with the offline example OCR provider."""
    monkeypatch.setenv("OCR_PROVIDER", "example")
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "state.json"))
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "out"))
    return tmp_path


class TestArgParser:
    def test_process_requires_images(self) -> None:
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args(["process"])

    def test_reset_all_flag(self) -> None:
        args = build_arg_parser().parse_args(["reset", "--all"])
        assert args.command == "reset"
        assert args.all is True


class TestMain:
    def test_process_and_export(
        self, cli_env: Path, make_image_file: Callable[..., Path]
    ) -> None:
        image = make_image_file("card.png")

        assert main(["process", str(image), "--export"]) == 0

        content = (cli_env / "out" / "1.csv").read_text(encoding="utf-8")
        assert content == "Name,Phone 1 - Value\nContact 1,919876543210"

    def test_state_persists_between_runs(
        self, cli_env: Path, make_image_file: Callable[..., Path]
    ) -> None:
        main(["process", str(make_image_file("a.png"))])
        main(["process", str(make_image_file("b.png"))])

        assert main(["export"]) == 0
        assert main(["export"]) == 0

        first = (cli_env / "out" / "1.csv").read_bytes()
        second = (cli_env / "out" / "2.csv").read_bytes()
        assert first == second
        assert first.count(b"919876543210") == 1

    def test_export_with_nothing_fails(self, cli_env: Path) -> None:
        assert main(["export"]) == 1
        assert not (cli_env / "out").exists()

    def test_unreadable_image_still_exits_cleanly(self, cli_env: Path) -> None:
        assert main(["process", str(cli_env / "missing.png")]) == 1

    def test_reset_forgets_numbers(
        self, cli_env: Path, make_image_file: Callable[..., Path]
    ) -> None:
        main(["process", str(make_image_file("a.png"))])

        assert main(["reset"]) == 0

        assert main(["export"]) == 1

    def test_history_and_unknown_redownload(self, cli_env: Path) -> None:
        assert main(["history"]) == 0
        assert main(["redownload", "nope"]) == 1

    def test_unreachable_database_exits_cleanly(
        self, cli_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("STORAGE_BACKEND", "postgres")
        with patch(
            "omniextract.main.init_pool",
            side_effect=StorageError("Could not connect to PostgreSQL at localhost"),
        ), patch("omniextract.main.close_pool") as mock_close:
            assert main(["history"]) == 1
        mock_close.assert_called_once_with()
