"""
Unit tests for the 'export' command.
"""

import json
from unittest.mock import patch

from click.testing import CliRunner

from lpgview.cli.commands.export import export


class TestExportCommand:
    def test_json_export(self, demo_file, tmp_path):
        out = tmp_path / "frame.json"
        result = CliRunner().invoke(export, [str(demo_file), "-o", str(out)])

        assert result.exit_code == 0
        payload = json.loads(out.read_text(encoding="utf-8"))
        assert set(payload["frame"]["nodes"]) >= {"electrons", "oatmeal"}

    def test_html_export_without_browser(self, demo_file, tmp_path):
        out = tmp_path / "graph.html"
        with patch("lpgview.graph.visualize.webbrowser.open") as mock_open:
            result = CliRunner().invoke(export, [str(demo_file), "-o", str(out), "--no-open"])

        assert result.exit_code == 0
        assert "<!DOCTYPE html>" in out.read_text(encoding="utf-8")
        mock_open.assert_not_called()

    @patch("lpgview.cli.commands.export.open_visualization")
    def test_html_export_opens_browser(self, mock_open_vis, demo_file, tmp_path):
        out = tmp_path / "graph.html"
        result = CliRunner().invoke(export, [str(demo_file), "-o", str(out)])

        assert result.exit_code == 0
        mock_open_vis.assert_called_once()

    def test_unsupported_format(self, demo_file, tmp_path):
        result = CliRunner().invoke(export, [str(demo_file), "-o", str(tmp_path / "graph.dot")])

        assert result.exit_code == 1
        assert "Unsupported format" in result.output
