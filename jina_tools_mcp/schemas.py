"""Declared output shapes of the Jina operations."""

from typing import Any, List, Optional, TypedDict


class Embedding(TypedDict):
    embedding: Any


class RerankResult(TypedDict):
    index: int
    relevance_score: float
    document: Optional[str]


class Content(TypedDict):
    id: str
    title: str
    content: str
    url: str


class SearchResult(TypedDict):
    title: Optional[str]
    description: Optional[str]
    url: str
    content: Optional[str]


class Reference(TypedDict):
    url: Optional[str]
    keyQuote: Optional[str]
    isSupportive: Optional[bool]


class Verification(TypedDict):
    factuality: float
    result: bool
    reason: str
    references: List[Reference]


class Segmentation(TypedDict):
    num_tokens: int
    num_chunks: int
    chunks: List[str]


class Classification(TypedDict):
    index: int
    prediction: str
    score: float


__all__ = [
    "Embedding",
    "RerankResult",
    "Content",
    "SearchResult",
    "Reference",
    "Verification",
    "Segmentation",
    "Classification",
]
