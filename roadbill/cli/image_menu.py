from __future__ import annotations

from pathlib import Path

import questionary
from rich.console import Console

from roadbill.errors import ValidationError
from roadbill.services.image_service import IMAGE_NAMES, ImageService

console = Console()


def image_menu(image_service: ImageService) -> None:
    status = image_service.check()
    for kind in IMAGE_NAMES:
        mark = "[green]uploaded[/green]" if status.get(kind) else "[yellow]missing[/yellow]"
        console.print(f"  {kind}: {mark}")

    kind = questionary.select("Upload which image?", choices=[*IMAGE_NAMES, "Back"]).ask()
    if kind is None or kind == "Back":
        return

    path = questionary.path("Image file:").ask()
    if not path:
        return
    try:
        data = Path(path).expanduser().read_bytes()
    except OSError as exc:
        console.print(f"[red]Cannot read {path}: {exc}[/red]")
        return

    try:
        name = image_service.upload(kind, data)
    except ValidationError as exc:
        console.print(f"[red]{exc}[/red]")
        return
    console.print(f"[green]Saved as {name}[/green]")
