"""Terminal notification adapter."""

from datetime import datetime

import click


class ConsoleNotifier:
    """
    Prints reminders to the terminal.

    Implements Notifier protocol. A terminal can always show text, so
    permission only depends on the user's setting.
    """

    def __init__(self, enabled: bool = False):
        self.enabled = enabled

    def is_enabled(self) -> bool:
        return self.enabled

    def is_permitted(self) -> bool:
        return True

    def fire(self, title: str, body: str) -> None:
        stamp = datetime.now().strftime("%H:%M")
        click.echo(click.style(f"[{stamp}] {title}", bold=True))
        click.echo(f"  {body}")
