"""
Unit tests for the 'files' command.
"""

import json

from click.testing import CliRunner

from lpgview.cli.commands.files import files


class TestFilesCommand:
    def test_lists_local_directory(self, demo_file):
        result = CliRunner().invoke(files, ["--root", str(demo_file.parent), "--json"])

        assert result.exit_code == 0
        listing = json.loads(result.output)["data"]
        assert [f["name"] for f in listing] == ["demo.toml"]

    def test_human_table(self, demo_file):
        result = CliRunner().invoke(files, ["--root", str(demo_file.parent)])

        assert result.exit_code == 0
        assert "demo.toml" in result.output

    def test_empty_memory_backend(self):
        result = CliRunner().invoke(files, ["--provider", "memory"])

        assert result.exit_code == 0
        assert "No documents found" in result.output

    def test_gdrive_without_token(self):
        result = CliRunner().invoke(files, ["--provider", "gdrive", "--json"])

        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["error"]["type"] == "AuthError"
