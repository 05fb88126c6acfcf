from __future__ import annotations

from pathlib import Path

import questionary
from rich.console import Console
from rich.table import Table

from roadbill.constants import now
from roadbill.errors import BillNotFoundError, StorageError, ValidationError
from roadbill.models import format_inr, parse_amount
from roadbill.models.bill import Bill, LineItem
from roadbill.pdf.layout import build_table_rows, format_amount
from roadbill.services.bill_service import BillService, apply_totals
from roadbill.words import amount_to_words

console = Console()


def _format_amount_input(value) -> str:
    """Format a Decimal for use as default input value: Decimal('85.5') -> '85.50'"""
    return f"{value:.2f}"


def _show_bill_detail(bill: Bill) -> None:
    """Display a bill's table, total and amount in words."""
    console.print(f"  Bill No: [bold]{bill.bill_no}[/bold]   Date: {bill.date}")
    console.print(f"  To M/S: {bill.to_ms}")

    detail_table = Table()
    for header in ("Sr.No", "L.R.No", "Date", "Vehicle No.", "Destination", "Invoice No."):
        detail_table.add_column(header)
    for header in ("Weight", "Rate", "Extra", "TOTAL"):
        detail_table.add_column(header, justify="right")

    for row in build_table_rows(bill):
        detail_table.add_row(*row.cells, style="dim" if row.is_blank else None)

    console.print(detail_table)
    console.print(f"  [bold]Grand Total: {format_inr(bill.grand_total)}[/bold]")
    if bill.amount_in_words:
        console.print(f"  {bill.amount_in_words}")


def _ask_amount(label: str, default: str = "", allow_blank: bool = False):
    while True:
        val = questionary.text(label, default=default).ask()
        if allow_blank and not (val or "").strip():
            return parse_amount("0")
        parsed = parse_amount(val or "")
        if parsed is not None and parsed >= 0:
            return parsed
        console.print("[red]Invalid amount. Try again.[/red]")


def _ask_line_items(existing: list[LineItem] | None = None) -> list[LineItem]:
    items: list[LineItem] = []

    for item in existing or []:
        action = questionary.select(
            f"  Row {item.sr_no}: {item.lr_no} / {item.vehicle_no} ({format_amount(item.total)}):",
            choices=["Keep", "Edit", "Remove"],
        ).ask()
        if action == "Keep":
            items.append(item)
        elif action == "Edit":
            items.append(_ask_line_item(item))
        # "Remove": skip it

    while True:
        add = questionary.confirm("Add a line item?", default=not items).ask()
        if not add:
            break
        items.append(_ask_line_item())
        preview = apply_totals(Bill(items=items))
        console.print(f"  [green]Running total: {format_inr(preview.grand_total)}[/green]")

    return items


def _ask_line_item(item: LineItem | None = None) -> LineItem:
    item = item or LineItem(date=now().strftime("%d.%m.%Y"))
    lr_no = questionary.text("  L.R. No:", default=item.lr_no).ask() or ""
    date = questionary.text("  Date (DD.MM.YYYY):", default=item.date).ask() or ""
    vehicle_no = questionary.text("  Vehicle No:", default=item.vehicle_no).ask() or ""
    destination = questionary.text("  Destination:", default=item.destination).ask() or ""
    invoice_no = questionary.text("  Invoice No:", default=item.invoice_no).ask() or ""
    weight = _ask_amount("  Weight:", default=_format_amount_input(item.weight))
    rate = _ask_amount("  Rate:", default=_format_amount_input(item.rate))
    extra = _ask_amount("  Extra (optional):", default=_format_amount_input(item.extra), allow_blank=True)
    return LineItem(
        lr_no=lr_no,
        date=date,
        vehicle_no=vehicle_no,
        destination=destination,
        invoice_no=invoice_no,
        weight=weight,
        rate=rate,
        extra=extra,
    )


def create_bill_menu(bill_service: BillService) -> Bill | None:
    console.print()
    console.print("[bold]Create Bill[/bold]", style="cyan")

    suggested = bill_service.next_bill_no()
    bill_no = questionary.text("Bill No:", default=suggested).ask() or suggested
    to_ms = questionary.text("To M/S:").ask() or ""
    date = questionary.text("Date (DD.MM.YYYY):", default=now().strftime("%d.%m.%Y")).ask() or ""
    items = _ask_line_items()

    bill = Bill(bill_no=bill_no, to_ms=to_ms, date=date, items=items)
    try:
        bill = bill_service.create_bill(bill)
    except ValidationError as exc:
        console.print(f"[red]{exc}[/red]")
        return None

    console.print()
    console.print("[green bold]Bill created![/green bold]")
    console.print(f"  Bill No: [bold]{bill.bill_no}[/bold]")
    console.print(f"  Total: [bold]{format_inr(bill.grand_total)}[/bold]")
    console.print(f"  {amount_to_words(bill.grand_total)}")
    return bill


def edit_bill_menu(bill: Bill, bill_service: BillService) -> Bill:
    console.print()
    console.print(f"[bold]Edit Bill {bill.bill_no}[/bold]", style="cyan")

    to_ms = questionary.text("To M/S:", default=bill.to_ms).ask() or ""
    date = questionary.text("Date (DD.MM.YYYY):", default=bill.date).ask() or ""
    items = _ask_line_items(bill.items)

    updated = bill.model_copy(deep=True)
    updated.to_ms = to_ms
    updated.date = date
    updated.items = items
    try:
        updated = bill_service.update_bill(bill.id, updated)
    except (ValidationError, BillNotFoundError) as exc:
        console.print(f"[red]{exc}[/red]")
        return bill

    console.print("[green bold]Bill updated![/green bold]")
    console.print(f"  Total: [bold]{format_inr(updated.grand_total)}[/bold]")
    return updated


def _save_export(content: bytes, filename: str) -> None:
    target = questionary.text("Save to:", default=str(Path.cwd() / filename)).ask()
    if not target:
        return
    Path(target).write_bytes(content)
    console.print(f"[green]Saved {len(content)} bytes to {target}[/green]")


def export_bills_menu(bill_service: BillService) -> None:
    bills = bill_service.list_bills()
    if not bills:
        console.print("[yellow]No bills to export.[/yellow]")
        return

    choices = [questionary.Choice(f"{b.bill_no} - {b.to_ms}", value=b.id) for b in bills]
    selected = questionary.checkbox("Select bills to export:", choices=choices).ask()
    if not selected:
        return

    fmt = questionary.select("Format:", choices=["zip", "pdf"]).ask()
    if fmt is None:
        return

    try:
        export = bill_service.export_bills(selected, fmt)
    except (BillNotFoundError, StorageError) as exc:
        console.print(f"[red]{exc}[/red]")
        return
    _save_export(export.content, export.filename)


def list_bills_menu(bill_service: BillService) -> None:
    bills = bill_service.list_bills(newest_first=True)

    if not bills:
        console.print("[yellow]No bills yet.[/yellow]")
        return

    summary = bill_service.summary()
    table = Table(title=f"Bills ({summary.count}, {format_inr(summary.total_amount)})")
    table.add_column("Bill No")
    table.add_column("Date")
    table.add_column("To M/S")
    table.add_column("Total", justify="right")

    for b in bills:
        table.add_row(b.bill_no, b.date, b.to_ms, format_inr(b.grand_total))

    console.print()
    console.print(table)

    choices = [questionary.Choice(f"{b.bill_no} - {b.to_ms}", value=b.id) for b in bills]
    choice = questionary.select("Select a bill:", choices=[*choices, "Back"]).ask()

    if choice is None or choice == "Back":
        return

    try:
        bill = bill_service.get_bill(choice)
    except BillNotFoundError:
        console.print("[red]Bill not found.[/red]")
        return

    _bill_detail_menu(bill, bill_service)


def _bill_detail_menu(bill: Bill, bill_service: BillService) -> None:
    while True:
        console.print()
        _show_bill_detail(bill)
        console.print()

        action = questionary.select(
            "Actions:",
            choices=["Edit Bill", "Save PDF", "Delete Bill", "Back"],
        ).ask()

        if action is None or action == "Back":
            break
        elif action == "Edit Bill":
            bill = edit_bill_menu(bill, bill_service)
        elif action == "Save PDF":
            export = bill_service.download_bill(bill.id)
            _save_export(export.content, export.filename)
        elif action == "Delete Bill":
            confirm = questionary.confirm("Delete this bill?", default=False).ask()
            if confirm:
                try:
                    bill_service.delete_bill(bill.id)
                except BillNotFoundError:
                    console.print("[red]Bill not found.[/red]")
                    break
                console.print("[green]Bill deleted.[/green]")
                break
