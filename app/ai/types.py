from typing import Awaitable, Callable, Protocol


Sleeper = Callable[[float], Awaitable[None]]


class AIClient(Protocol):
    async def generate(self, model: str, prompt: str) -> str: ...
