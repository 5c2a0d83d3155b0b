"""
Unit tests for the 'search' command.
"""

import json

from click.testing import CliRunner

from lpgview.cli.commands.search import search


class TestSearchCommand:
    def test_json_results(self, demo_file):
        result = CliRunner().invoke(search, [str(demo_file), "epistem", "--json"])

        assert result.exit_code == 0
        hits = json.loads(result.output)["data"]
        assert hits[0]["node_id"] == "epistemology"
        assert "label" in hits[0]["matched_keys"]
        assert hits[0]["snippet"].endswith("...")

    def test_limit(self, demo_file):
        result = CliRunner().invoke(search, [str(demo_file), "e", "-n", "3", "--json"])
        assert len(json.loads(result.output)["data"]) == 3

    def test_human_table(self, demo_file):
        result = CliRunner().invoke(search, [str(demo_file), "Science"])

        assert result.exit_code == 0
        assert "Science" in result.output

    def test_no_matches(self, demo_file):
        result = CliRunner().invoke(search, [str(demo_file), "zzzzzzzz"])

        assert result.exit_code == 0
        assert "No matches" in result.output
