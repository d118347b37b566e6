#!/usr/bin/env python3
"""
Integration tests for the expense CLI

Runs real command invocations against the JSON-file store in a temporary
data directory.
"""

import json

import pytest
from click.testing import CliRunner

from forkthebill.cli.main import main


def _create(runner: CliRunner, *args: str) -> dict:
    result = runner.invoke(main, ["expense", "create", *args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


@pytest.mark.integration
class TestCLIMain:
    """Test main entry point commands."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_help_lists_subcommands(self):
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Fork the Bill" in result.output
        for command in ["config", "expense", "version"]:
            assert command in result.output

    def test_version(self):
        result = self.runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert "Fork the Bill v" in result.output

    def test_config(self):
        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Environment: test" in result.output
        assert "Store Backend: json" in result.output


@pytest.mark.integration
class TestExpenseWorkflow:
    """Test a full create, claim and settle workflow through the CLI."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_create_claim_and_settle(self):
        created = _create(self.runner, "--item", "Pizza=30.00", "--tax", "3", "--tip", "6")
        expense_id = created["id"]
        item_id = created["items"][0]["id"]

        alice = self.runner.invoke(main, ["expense", "claim", expense_id, item_id, "Alice", "--share", "2/3"])
        assert alice.exit_code == 0, alice.output

        bob = self.runner.invoke(
            main, ["expense", "claim", expense_id, item_id, "Bob", "--share", "1/3", "--json"]
        )
        assert bob.exit_code == 0, bob.output

        people = json.loads(bob.stdout)["settlement"]["people"]
        assert [(p["name"], p["total"]) for p in people] == [("Alice", "26.00"), ("Bob", "13.00")]

        shown = self.runner.invoke(main, ["expense", "show", expense_id])
        assert shown.exit_code == 0
        assert "Alice: $20.00 + tax $2.00 + tip $4.00 = $26.00" in shown.output

    def test_overclaim_is_reported_as_error(self):
        created = _create(self.runner, "--item", "Soup=8.00")
        expense_id = created["id"]
        item_id = created["items"][0]["id"]

        self.runner.invoke(main, ["expense", "claim", expense_id, item_id, "Alice"])
        result = self.runner.invoke(main, ["expense", "claim", expense_id, item_id, "Bob", "--share", "0.1"])

        assert result.exit_code != 0
        assert "left to claim" in result.output

    def test_unclaim_and_unclaimed_warning(self):
        created = _create(self.runner, "--item", "Soup=8.00")
        expense_id = created["id"]
        item_id = created["items"][0]["id"]

        self.runner.invoke(main, ["expense", "claim", expense_id, item_id, "Alice"])
        result = self.runner.invoke(main, ["expense", "unclaim", expense_id, item_id, "Alice"])

        assert result.exit_code == 0
        assert "Unclaimed items: $8.00" in result.output

    def test_set_items_from_file(self, tmp_path):
        created = _create(self.runner, "--item", "Soup=8.00", "--item", "Bread=3.00")
        expense_id = created["id"]
        soup_id = created["items"][0]["id"]
        self.runner.invoke(main, ["expense", "claim", expense_id, soup_id, "Alice"])

        items_file = tmp_path / "items.json"
        items_file.write_text(
            json.dumps({"items": [{"id": soup_id, "description": "Soup", "price": "9.00"}]}), encoding="utf-8"
        )
        result = self.runner.invoke(main, ["expense", "set-items", expense_id, "--from-file", str(items_file), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [item["description"] for item in data["items"]] == ["Soup"]
        assert data["settlement"]["people"][0]["subtotal"] == "9.00"

    def test_set_tax_tip_rejects_negative(self):
        created = _create(self.runner, "--item", "Soup=8.00")

        result = self.runner.invoke(main, ["expense", "set-tax-tip", created["id"], "--tax=-1", "--tip=0"])

        assert result.exit_code != 0
        assert "must not be negative" in result.output

    def test_show_unknown_expense(self):
        result = self.runner.invoke(main, ["expense", "show", "missing"])

        assert result.exit_code != 0
        assert "not found" in result.output

    def test_list(self):
        assert "No expenses found" in self.runner.invoke(main, ["expense", "list"]).output

        created = _create(self.runner, "--item", "Soup=8.00")
        result = self.runner.invoke(main, ["expense", "list"])

        assert created["id"] in result.output

    def test_bad_item_option(self):
        result = self.runner.invoke(main, ["expense", "create", "--item", "Soup"])

        assert result.exit_code != 0
        assert "DESCRIPTION=PRICE" in result.output
