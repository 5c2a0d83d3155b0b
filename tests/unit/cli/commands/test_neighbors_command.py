"""
Unit tests for the 'neighbors' command.
"""

import json

from click.testing import CliRunner

from lpgview.cli.commands.neighbors import neighbors


class TestNeighborsCommand:
    def test_json_neighborhood(self, demo_file):
        result = CliRunner().invoke(neighbors, [str(demo_file), "epistemology", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["neighbors"] == ["empiricism", "logic", "rationalism"]
        assert "electrons" in data["dimmed"]
        assert "epistemology" not in data["dimmed"]
        assert len(data["edges"]) == 3
        assert data["hidden_edges"] == 8

    def test_human_output(self, demo_file):
        result = CliRunner().invoke(neighbors, [str(demo_file), "oatmeal"])

        assert result.exit_code == 0
        assert "2 neighbor(s)" in " ".join(result.output.split())
        assert "feeds" in result.output

    def test_unknown_node_json(self, demo_file):
        result = CliRunner().invoke(neighbors, [str(demo_file), "ghost", "--json"])

        assert result.exit_code == 1
        assert json.loads(result.output)["meta"]["status"] == "error"
