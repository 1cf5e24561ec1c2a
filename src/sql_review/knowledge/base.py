from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class Snippet:
    content: str
    source_id: str


@runtime_checkable
class KnowledgeSource(Protocol):
    """Protocol for retrieval backends that enrich worker prompts."""

    async def query(self, query_text: str, top_k: int) -> list[Snippet]:
        ...
