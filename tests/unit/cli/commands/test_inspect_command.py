"""
Unit tests for the 'inspect' command.
"""

import json

from click.testing import CliRunner

from lpgview.cli.commands.inspect_node import inspect_node


class TestInspectCommand:
    def test_panel(self, demo_file):
        result = CliRunner().invoke(inspect_node, [str(demo_file), "electrons"])

        assert result.exit_code == 0
        assert "Electrons" in result.output
        assert "wikipedia.org" in result.output
        assert "subatomic particles" in result.output

    def test_json_snapshot(self, demo_file):
        result = CliRunner().invoke(inspect_node, [str(demo_file), "oatmeal", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["node_id"] == "oatmeal"
        assert data["label"] == "oatmeal"
        assert data["link"] is None
        assert data["attributes"]["isPlaceholder"] is True

    def test_unknown_node(self, demo_file):
        result = CliRunner().invoke(inspect_node, [str(demo_file), "ghost"])

        assert result.exit_code == 1
        assert "Node not found: ghost" in result.output
