from sql_review.knowledge.base import KnowledgeSource, Snippet

__all__ = ["KnowledgeSource", "Snippet"]
