from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class JudgeResponse:
    text: str


@runtime_checkable
class Judge(Protocol):
    """Protocol for the external text-generation backend."""

    async def invoke(
        self,
        prompt: str,
        *,
        timeout_ms: int,
        max_output_tokens: int,
    ) -> JudgeResponse:
        ...
