#!/usr/bin/env python3
"""
Expense CLI - Create, Claim and Settle Shared Bills

Each command prints the resulting expense and settlement, or the raw API
view with --json.
"""

import json
from pathlib import Path
from typing import Any

import click

from ..core.json_utils import format_json, read_json
from ..expenses import ExpenseError, ExpenseService, ExpenseView, create_store


def _service(ctx: click.Context) -> ExpenseService:
    obj = ctx.ensure_object(dict)
    if "service" not in obj:
        obj["service"] = ExpenseService(create_store(obj["config"]))
    return obj["service"]


def _parse_item_option(value: str) -> dict[str, str]:
    """Parse "Description=12.50" into an item payload."""
    description, sep, price = value.rpartition("=")
    if not sep:
        raise click.BadParameter(f"Expected DESCRIPTION=PRICE, got {value!r}", param_hint="--item")
    return {"description": description.strip(), "price": price.strip()}


def _load_items_file(path: str) -> Any:
    try:
        data = read_json(Path(path))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}") from e
    if isinstance(data, dict):
        return data.get("items", [])
    return data


def _echo_view(view: ExpenseView, as_json: bool) -> None:
    if as_json:
        click.echo(format_json(view.to_dict()))
        return

    expense = view.expense
    settlement = view.settlement

    click.echo(f"Expense {expense.id}")
    for item in expense.items:
        click.echo(f"  [{item.id}] {item.description or '(no description)'}  {item.price}")
        for claim in item.claims:
            click.echo(f"      {claim.person_name}: {float(claim.share):.2%}")
    click.echo(f"  Subtotal: {expense.subtotal}  Tax: {expense.tax}  Tip: {expense.tip}  Total: {expense.total}")

    if settlement.people:
        click.echo("Settlement:")
        for person in settlement.people:
            click.echo(
                f"  {person.name}: {person.subtotal} + tax {person.tax_share} + tip {person.tip_share}"
                f" = {person.total}"
            )
    if settlement.unclaimed_subtotal.to_cents():
        click.echo(f"⚠️  Unclaimed items: {settlement.unclaimed_subtotal}")
    if settlement.unallocated_tax.to_cents() or settlement.unallocated_tip.to_cents():
        click.echo(f"⚠️  Unallocated tax {settlement.unallocated_tax}, tip {settlement.unallocated_tip}")


def _run(as_json: bool, operation: Any, *args: Any) -> None:
    try:
        view = operation(*args)
    except ExpenseError as e:
        raise click.ClickException(e.message) from e
    _echo_view(view, as_json)


@click.group()
def expense() -> None:
    """Shared expense commands."""
    pass


@expense.command()
@click.option("--item", "items", multiple=True, help="Item as DESCRIPTION=PRICE (repeatable)")
@click.option("--from-file", type=click.Path(exists=True, dir_okay=False), help="JSON file of items")
@click.option("--tax", default=None, help="Tax amount (default: 0)")
@click.option("--tip", default=None, help="Tip amount (default: 0)")
@click.option("--json", "as_json", is_flag=True, help="Print the API view as JSON")
@click.pass_context
def create(
    ctx: click.Context,
    items: tuple[str, ...],
    from_file: str | None,
    tax: str | None,
    tip: str | None,
    as_json: bool,
) -> None:
    """
    Create an expense from receipt items.

    Examples:
      forkthebill expense create --item "Pizza=30.00" --item "Soda=4.50" --tax 3 --tip 6
      forkthebill expense create --from-file receipt_items.json
    """
    payload: list[Any] = [_parse_item_option(value) for value in items]
    if from_file:
        loaded = _load_items_file(from_file)
        if not isinstance(loaded, list):
            raise click.ClickException(f"{from_file} must contain a list of items")
        payload.extend(loaded)

    _run(as_json, _service(ctx).create_expense, payload, tax, tip)


@expense.command()
@click.argument("expense_id")
@click.option("--json", "as_json", is_flag=True, help="Print the API view as JSON")
@click.pass_context
def show(ctx: click.Context, expense_id: str, as_json: bool) -> None:
    """Show an expense and what everyone owes."""
    _run(as_json, _service(ctx).get_expense, expense_id)


@expense.command(name="list")
@click.pass_context
def list_expenses(ctx: click.Context) -> None:
    """List stored expense ids."""
    store = _service(ctx).store
    ids = store.list_ids()
    if not ids:
        click.echo("No expenses found")
        return
    for expense_id in ids:
        click.echo(expense_id)


@expense.command()
@click.argument("expense_id")
@click.argument("item_id")
@click.argument("person")
@click.option("--share", default=None, help="Fraction of the item, e.g. 0.5 or 2/3 (default: all that is left)")
@click.option("--json", "as_json", is_flag=True, help="Print the API view as JSON")
@click.pass_context
def claim(ctx: click.Context, expense_id: str, item_id: str, person: str, share: str | None, as_json: bool) -> None:
    """Claim an item, or part of one, for PERSON."""
    _run(as_json, _service(ctx).claim_item, expense_id, item_id, person, share)


@expense.command()
@click.argument("expense_id")
@click.argument("item_id")
@click.argument("person")
@click.option("--json", "as_json", is_flag=True, help="Print the API view as JSON")
@click.pass_context
def unclaim(ctx: click.Context, expense_id: str, item_id: str, person: str, as_json: bool) -> None:
    """Drop PERSON's claim on an item."""
    _run(as_json, _service(ctx).unclaim_item, expense_id, item_id, person)


@expense.command(name="set-items")
@click.argument("expense_id")
@click.option("--from-file", required=True, type=click.Path(exists=True, dir_okay=False), help="JSON file of items")
@click.option("--json", "as_json", is_flag=True, help="Print the API view as JSON")
@click.pass_context
def set_items(ctx: click.Context, expense_id: str, from_file: str, as_json: bool) -> None:
    """
    Replace the item list of an expense.

    Items that carry the id of an existing item keep its claims; all other
    existing items are dropped.
    """
    _run(as_json, _service(ctx).update_expense_items, expense_id, _load_items_file(from_file))


@expense.command(name="set-tax-tip")
@click.argument("expense_id")
@click.option("--tax", required=True, help="Tax amount")
@click.option("--tip", required=True, help="Tip amount")
@click.option("--json", "as_json", is_flag=True, help="Print the API view as JSON")
@click.pass_context
def set_tax_tip(ctx: click.Context, expense_id: str, tax: str, tip: str, as_json: bool) -> None:
    """Set tax and tip together."""
    _run(as_json, _service(ctx).update_expense_tax_tip, expense_id, tax, tip)
