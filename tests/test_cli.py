"""Tests for CLI commands."""

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner
from wikistage.cli import cli
from wikistage.config import Config


class TestServeCommand:
    """Tests for the serve command."""

    def test__runs_server_with_env_file_and_overrides(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("APPLICATION_PREFIX=/wiki\nAPPLICATION_PORT=9000\n")

        runner = CliRunner()
        with patch("wikistage.cli.run_server") as run_server:
            result = runner.invoke(
                cli,
                [
                    "serve",
                    "--env-file",
                    str(env_file),
                    "--host",
                    "0.0.0.0",
                    "--pages-dir",
                    str(tmp_path / "pages"),
                ],
                env={"APPLICATION_PORT": None, "APPLICATION_PREFIX": None},
            )

        assert result.exit_code == 0, result.output
        config: Config = run_server.call_args.args[0]
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 9000
        assert config.server.prefix == "/wiki"
        assert config.storage.pages_dir == tmp_path / "pages"
        assert "http://0.0.0.0:9000/wiki/view/FrontPage" in result.output

    def test__missing_env_file__fails(self, tmp_path: Path) -> None:
        runner = CliRunner()
        with patch("wikistage.cli.run_server") as run_server:
            result = runner.invoke(
                cli, ["serve", "--env-file", str(tmp_path / "nonexistent.env")]
            )

        assert result.exit_code == 1
        assert "Environment file not found" in result.output
        run_server.assert_not_called()

    def test__invalid_port__fails(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("APPLICATION_PORT=http\n")

        runner = CliRunner()
        with patch("wikistage.cli.run_server") as run_server:
            result = runner.invoke(
                cli,
                ["serve", "--env-file", str(env_file)],
                env={"APPLICATION_PORT": None, "ASPNETCORE_PORT": None},
            )

        assert result.exit_code == 1
        assert "Port must be numeric" in result.output
        run_server.assert_not_called()

    def test__bind_failure__fails(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("")

        runner = CliRunner()
        with patch("wikistage.cli.run_server", side_effect=OSError("address in use")):
            result = runner.invoke(cli, ["serve", "--env-file", str(env_file)])

        assert result.exit_code == 1
        assert "address in use" in result.output


    def test__undecodable_env_file__fails(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_bytes(b"APPLICATION_PREFIX=\xff\n")

        runner = CliRunner()
        with patch("wikistage.cli.run_server") as run_server:
            result = runner.invoke(cli, ["serve", "--env-file", str(env_file)])

        assert result.exit_code == 1
        assert "Cannot read environment file" in result.output
        run_server.assert_not_called()


class TestPagesCommand:
    """Tests for the pages command."""

    def test__lists_titles(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("")
        pages_dir = tmp_path / "pages"
        pages_dir.mkdir()
        (pages_dir / "Beta.txt").write_text("b")
        (pages_dir / "Alpha.txt").write_text("a")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["pages", "--env-file", str(env_file), "--pages-dir", str(pages_dir)]
        )

        assert result.exit_code == 0
        assert result.output.splitlines() == ["Alpha", "Beta"]

    def test__no_pages(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["pages", "--env-file", str(env_file), "--pages-dir", str(tmp_path / "none")],
        )

        assert result.exit_code == 0
        assert "No pages found" in result.output
