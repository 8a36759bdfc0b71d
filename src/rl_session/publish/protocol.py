from typing import Protocol

from rl_session.domain.errors import PublishError
from rl_session.domain.result import Result


class Publisher(Protocol):
    async def publish(self, text: str) -> Result[None, PublishError]: ...
