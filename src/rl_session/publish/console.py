from rich.console import Console

from rl_session.domain.errors import PublishError
from rl_session.domain.result import Ok, Result


class ConsolePublisher:
    """Writes reports to the terminal instead of a remote channel."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False)

    async def publish(self, text: str) -> Result[None, PublishError]:
        self._console.print(text, markup=False, emoji=False, soft_wrap=True, end="")
        return Ok(None)
