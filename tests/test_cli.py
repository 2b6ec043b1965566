"""Tests for the typebind command line."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from typebind._cli.main import app

runner = CliRunner()

MESSAGE_SCHEMA = """
{
  "definitions": {
    "user": {
      "properties": {
        "id": {"type": "string"},
        "name": {"type": "string"}
      }
    }
  },
  "properties": {
    "messageId": {"type": "string"},
    "timestamp": {"type": "timestamp"},
    "details": {
      "discriminator": {
        "tag": "type",
        "mapping": {
          "user_created": {"properties": {"user": {"ref": "user"}}},
          "user_deleted": {"properties": {"userId": {"type": "string"}}}
        }
      }
    }
  }
}
"""


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    path = tmp_path / "message.json"
    path.write_text(MESSAGE_SCHEMA)
    return path


# =============================================================================
# generate
# =============================================================================


class TestGenerate:
    def test_writes_both_targets(self, tmp_path: Path, schema_file: Path) -> None:
        ts_out = tmp_path / "web"
        go_out = tmp_path / "wire_types"

        result = runner.invoke(
            app,
            ["generate", str(schema_file), "--ts-out", str(ts_out), "--go-out", str(go_out)],
        )

        assert result.exit_code == 0, result.output
        ts_source = (ts_out / "index.ts").read_text()
        assert "export interface MessageDetailsUserCreated {" in ts_source
        assert "export type MessageDetails = MessageDetailsUserCreated | MessageDetailsUserDeleted;" in ts_source

        go_source = (go_out / "message.go").read_text()
        assert go_source.startswith("package wire_types\n")
        assert 'import "time"' in go_source

    def test_go_package_option(self, tmp_path: Path, schema_file: Path) -> None:
        go_out = tmp_path / "out"

        result = runner.invoke(
            app,
            ["generate", str(schema_file), "--go-out", str(go_out), "--go-package", "wire"],
        )

        assert result.exit_code == 0, result.output
        assert (go_out / "message.go").read_text().startswith("package wire\n")

    def test_no_output_requested(self, schema_file: Path) -> None:
        result = runner.invoke(app, ["generate", str(schema_file)])

        assert result.exit_code == 2

    def test_invalid_schema_writes_nothing(self, tmp_path: Path) -> None:
        schema = tmp_path / "broken.json"
        schema.write_text('{"properties": {"a": {"ref": "missing"}}}')
        ts_out = tmp_path / "web"
        go_out = tmp_path / "go"

        result = runner.invoke(
            app,
            ["generate", str(schema), "--ts-out", str(ts_out), "--go-out", str(go_out)],
        )

        assert result.exit_code == 1
        assert not ts_out.exists()
        assert not go_out.exists()

    def test_missing_schema_file(self, tmp_path: Path) -> None:
        ts_out = tmp_path / "web"

        result = runner.invoke(app, ["generate", str(tmp_path / "nope.json"), "--ts-out", str(ts_out)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, FileNotFoundError)
        assert not ts_out.exists()

    def test_schema_not_utf8(self, tmp_path: Path) -> None:
        schema = tmp_path / "latin.json"
        schema.write_bytes(b'{"type": "\xff"}')
        ts_out = tmp_path / "web"

        result = runner.invoke(app, ["generate", str(schema), "--ts-out", str(ts_out)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert not ts_out.exists()

    def test_uses_pyproject_config(
        self,
        tmp_path: Path,
        schema_file: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "pyproject.toml").write_text(
            f"""
[tool.typebind]
schema = "{schema_file.name}"
ts-out = "generated/ts"
go-out = "generated/go"
go-package = "wire"
""",
        )
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["generate"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "generated" / "ts" / "index.ts").is_file()
        assert (tmp_path / "generated" / "go" / "message.go").read_text().startswith("package wire\n")

    def test_invalid_config(self, tmp_path: Path, schema_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.typebind]\nunknown = "x"\n')
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["generate", str(schema_file), "--ts-out", "out"])

        assert result.exit_code == 1

    def test_missing_schema_without_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["generate", "--ts-out", "out"])

        assert result.exit_code == 2


# =============================================================================
# check
# =============================================================================


class TestCheck:
    def test_valid_schema(self, schema_file: Path) -> None:
        result = runner.invoke(app, ["check", str(schema_file)])

        assert result.exit_code == 0, result.output

    def test_duplicate_key(self, tmp_path: Path) -> None:
        schema = tmp_path / "dup.json"
        schema.write_text('{"properties": {"a": {}, "a": {}}}')

        result = runner.invoke(app, ["check", str(schema)])

        assert result.exit_code == 1

    def test_missing_schema_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["check", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert not isinstance(result.exception, FileNotFoundError)

    def test_schema_not_utf8(self, tmp_path: Path) -> None:
        schema = tmp_path / "latin.json"
        schema.write_bytes(b'{"type": "\xff"}')

        result = runner.invoke(app, ["check", str(schema)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_malformed_schema(self, tmp_path: Path) -> None:
        schema = tmp_path / "bad.json"
        schema.write_text('{"type": "decimal"}')

        result = runner.invoke(app, ["check", str(schema)])

        assert result.exit_code == 1


# =============================================================================
# show
# =============================================================================


class TestShow:
    def test_typescript_by_default(self, schema_file: Path) -> None:
        result = runner.invoke(app, ["show", str(schema_file)])

        assert result.exit_code == 0, result.output
        assert "export interface User {\n  id: string;\n  name: string;\n}\n" in result.stdout

    def test_golang_target(self, schema_file: Path) -> None:
        result = runner.invoke(app, ["show", str(schema_file), "--target", "golang"])

        assert result.exit_code == 0, result.output
        assert "package message\n" in result.stdout
        assert "type User struct {" in result.stdout

    def test_unknown_target(self, schema_file: Path) -> None:
        result = runner.invoke(app, ["show", str(schema_file), "-t", "rust"])

        assert result.exit_code == 2
