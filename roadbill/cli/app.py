import questionary
from rich.console import Console

from roadbill.cli.bill_menu import create_bill_menu, export_bills_menu, list_bills_menu
from roadbill.cli.image_menu import image_menu
from roadbill.constants import COMPANY_NAME
from roadbill.errors import StorageError
from roadbill.repositories.factory import get_bill_repository
from roadbill.services.bill_service import BillService
from roadbill.services.image_service import ImageService
from roadbill.settings import settings
from roadbill.storage.factory import get_storage

console = Console()


def _build_services() -> tuple[BillService, ImageService]:
    image_service = ImageService(get_storage(), settings.images_prefix)
    return BillService(get_bill_repository(), image_service), image_service


def main_menu() -> None:
    bill_service, image_service = _build_services()

    console.print()
    console.print(f"[bold]{COMPANY_NAME} - Bills[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "List Bills",
                "Create Bill",
                "Export Bills",
                "Signature & Stamp",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Bye![/bold]")
            break
        try:
            if choice == "List Bills":
                list_bills_menu(bill_service)
            elif choice == "Create Bill":
                create_bill_menu(bill_service)
            elif choice == "Export Bills":
                export_bills_menu(bill_service)
            elif choice == "Signature & Stamp":
                image_menu(image_service)
        except StorageError as exc:
            console.print(f"[red]Storage error: {exc}[/red]")
