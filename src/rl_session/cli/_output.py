from rich.console import Console

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_watch_location(location: str) -> None:
    console.print(f"Looking for saves in: [bold]{location}[/bold]")
