"""Response projections.

Each function maps a decoded JSON body to the declared output of one
operation. Fields the output requires must be present. Optional fields come
through as ``None`` when the service omits them.
"""

from typing import Any, List, Optional

from .dynamic.errors import MalformedResponseError
from .schemas import (
    Classification,
    Content,
    Embedding,
    Reference,
    RerankResult,
    SearchResult,
    Segmentation,
    Verification,
)


def _field(obj: Any, key: str, operation: str, path: str) -> Any:
    if not isinstance(obj, dict) or obj.get(key) is None:
        raise MalformedResponseError(operation, path)
    return obj[key]


def _object(body: Any, key: str, operation: str) -> dict:
    value = _field(body, key, operation, key)
    if not isinstance(value, dict):
        raise MalformedResponseError(operation, key, "expected an object")
    return value


def _items(body: Any, key: str, operation: str, path: Optional[str] = None) -> List[Any]:
    path = path or key
    value = _field(body, key, operation, path)
    if not isinstance(value, list):
        raise MalformedResponseError(operation, path, "expected a list")
    return value


def _optional(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _content(item: Any, operation: str, path: str, id_from_url: bool = False) -> Content:
    url = _field(item, "url", operation, f"{path}.url")
    if id_from_url and _optional(item, "id") is None:
        # The reader identifies a page by its URL
        content_id = url
    else:
        content_id = _field(item, "id", operation, f"{path}.id")
    return {
        "id": str(content_id),
        "title": _field(item, "title", operation, f"{path}.title"),
        "content": _field(item, "content", operation, f"{path}.content"),
        "url": url,
    }


def embeddings(operation: str, body: Any) -> List[Embedding]:
    return [
        {"embedding": _field(item, "embedding", operation, f"data[{i}].embedding")}
        for i, item in enumerate(_items(body, "data", operation))
    ]


def rerank(operation: str, body: Any) -> List[RerankResult]:
    results = []
    for i, item in enumerate(_items(body, "results", operation)):
        document = _optional(item, "document")
        if isinstance(document, dict):
            document = document.get("text")
        results.append({
            "index": _field(item, "index", operation, f"results[{i}].index"),
            "relevance_score": _field(item, "relevance_score", operation, f"results[{i}].relevance_score"),
            "document": document,
        })
    return results


def read_content(operation: str, body: Any) -> Content:
    return _content(_object(body, "data", operation), operation, "data", id_from_url=True)


def search(operation: str, body: Any) -> List[SearchResult]:
    return [
        {
            "title": _optional(item, "title"),
            "description": _optional(item, "description"),
            "url": _field(item, "url", operation, f"data[{i}].url"),
            "content": _optional(item, "content"),
        }
        for i, item in enumerate(_items(body, "data", operation))
    ]


def verification(operation: str, body: Any) -> Verification:
    data = _object(body, "data", operation)
    references_in = []
    if data.get("references") is not None:
        references_in = _items(data, "references", operation, "data.references")
    references: List[Reference] = [
        {
            "url": _optional(ref, "url"),
            "keyQuote": _optional(ref, "keyQuote"),
            "isSupportive": _optional(ref, "isSupportive"),
        }
        for ref in references_in
    ]
    return {
        "factuality": _field(data, "factuality", operation, "data.factuality"),
        "result": _field(data, "result", operation, "data.result"),
        "reason": _field(data, "reason", operation, "data.reason"),
        "references": references,
    }


def segmentation(operation: str, body: Any) -> Segmentation:
    num_chunks = _field(body, "num_chunks", operation, "num_chunks")
    chunks = _items(body, "chunks", operation)
    if len(chunks) != num_chunks:
        raise MalformedResponseError(
            operation, "chunks", f"expected {num_chunks} chunks, got {len(chunks)}"
        )
    return {
        "num_tokens": _field(body, "num_tokens", operation, "num_tokens"),
        "num_chunks": num_chunks,
        "chunks": chunks,
    }


def classification(operation: str, body: Any) -> List[Classification]:
    return [
        {
            "index": _field(item, "index", operation, f"data[{i}].index"),
            "prediction": _field(item, "prediction", operation, f"data[{i}].prediction"),
            "score": _field(item, "score", operation, f"data[{i}].score"),
        }
        for i, item in enumerate(_items(body, "data", operation))
    ]


def content_item(operation: str, body: Any) -> Content:
    return _content(body, operation, "body")


def content_items(operation: str, body: Any) -> List[Content]:
    return [
        _content(item, operation, f"items[{i}]")
        for i, item in enumerate(_items(body, "items", operation))
    ]
