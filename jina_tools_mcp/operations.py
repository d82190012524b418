"""The Jina API operation table.

Every operation is one fixed (method, URL) pair, a typed input record, and
builders for the body, headers and query string of its single request.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from . import projections
from .config import DEFAULT_CONFIG, PackConfig
from .dynamic import APIEndpoint, EndpointManager, HTTPMethod, ParameterKind, parameter
from .schemas import (
    Classification,
    Content,
    Embedding,
    RerankResult,
    SearchResult,
    Segmentation,
    Verification,
)

DEFAULT_EMBEDDING_MODEL = "jina-embeddings-v3"
RERANKER_MODEL = "jina-reranker-v2-base-multilingual"
CLASSIFIER_MODEL = "jina-embeddings-v3"

STRING = ParameterKind.STRING
STRING_ARRAY = ParameterKind.STRING_ARRAY
NUMBER = ParameterKind.NUMBER
BOOLEAN = ParameterKind.BOOLEAN


# ──────────────────────────────────────────────────────────────────────────────
# 📥  Input records
# ──────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EmbeddingsInput:
    input: List[str] = parameter(STRING_ARRAY, "Array of input strings to be embedded.")
    model: Optional[str] = parameter(
        STRING, "Identifier of the model to use.", required=False, suggested=DEFAULT_EMBEDDING_MODEL
    )


@dataclass(frozen=True)
class RerankInput:
    query: str = parameter(STRING, "The search query.")
    documents: List[str] = parameter(STRING_ARRAY, "A list of text documents or strings to rerank.")


@dataclass(frozen=True)
class ReadInput:
    url: str = parameter(STRING, "The URL to retrieve content from.")


@dataclass(frozen=True)
class ReadOptionsInput:
    url: str = parameter(STRING, "The URL to retrieve content from.")
    engine: Optional[str] = parameter(
        STRING, "Page fetching engine.", required=False, header=True,
        suggestions=("browser", "direct", "cf-browser-rendering"),
    )
    timeout: Optional[float] = parameter(NUMBER, "Seconds to wait for the page to load.", required=False, header=True)
    targetSelector: Optional[str] = parameter(
        STRING, "CSS selector of the elements to extract.", required=False, header=True
    )
    waitForSelector: Optional[str] = parameter(
        STRING, "CSS selector to wait for before extracting.", required=False, header=True
    )
    removeSelector: Optional[str] = parameter(
        STRING, "CSS selector of the elements to drop.", required=False, header=True
    )
    withLinksSummary: Optional[bool] = parameter(
        BOOLEAN, "Append a summary of all links on the page.", required=False, header=True
    )
    withImagesSummary: Optional[bool] = parameter(
        BOOLEAN, "Append a summary of all images on the page.", required=False, header=True
    )
    withGeneratedAlt: Optional[bool] = parameter(
        BOOLEAN, "Generate alt text for images lacking it.", required=False, header=True
    )
    noCache: Optional[bool] = parameter(BOOLEAN, "Bypass the reader cache.", required=False, header=True)
    withIframe: Optional[bool] = parameter(BOOLEAN, "Include iframe content.", required=False, header=True)
    withShadowDom: Optional[bool] = parameter(BOOLEAN, "Include shadow DOM content.", required=False, header=True)
    returnFormat: Optional[str] = parameter(
        STRING, "Format of the returned content.", required=False, header=True,
        suggestions=("markdown", "html", "text", "screenshot", "pageshot"),
    )
    tokenBudget: Optional[float] = parameter(
        NUMBER, "Maximum number of tokens the response may use.", required=False, header=True
    )
    retainImages: Optional[str] = parameter(
        STRING, "Which images to keep in the content.", required=False, header=True, suggestions=("none", "all")
    )


@dataclass(frozen=True)
class SearchInput:
    query: str = parameter(STRING, "The search query.")


@dataclass(frozen=True)
class VerifyInput:
    statement: str = parameter(STRING, "The statement to verify.")


@dataclass(frozen=True)
class SegmentInput:
    content: str = parameter(STRING, "The text content to segment.")


@dataclass(frozen=True)
class ClassifyInput:
    input: List[str] = parameter(STRING_ARRAY, "Array of text inputs for classification.")
    labels: List[str] = parameter(STRING_ARRAY, "List of labels to use for classification.")


@dataclass(frozen=True)
class FetchQueryInput:
    query: str = parameter(STRING, "The query to search for content.")


@dataclass(frozen=True)
class FetchIdInput:
    id: str = parameter(STRING, "The content ID to fetch.")


# ──────────────────────────────────────────────────────────────────────────────
# 📤  Request builders
# ──────────────────────────────────────────────────────────────────────────────

READER_HEADERS = {
    "engine": "X-Engine",
    "timeout": "X-Timeout",
    "targetSelector": "X-Target-Selector",
    "waitForSelector": "X-Wait-For-Selector",
    "removeSelector": "X-Remove-Selector",
    "withLinksSummary": "X-With-Links-Summary",
    "withImagesSummary": "X-With-Images-Summary",
    "withGeneratedAlt": "X-With-Generated-Alt",
    "noCache": "X-No-Cache",
    "withIframe": "X-With-Iframe",
    "withShadowDom": "X-With-Shadow-Dom",
    "returnFormat": "X-Return-Format",
    "tokenBudget": "X-Token-Budget",
    "retainImages": "X-Retain-Images",
}


def _header_value(value) -> Optional[str]:
    """Serialize one reader option, or None when no header is sent"""
    if value is None or value is False:
        return None
    if value is True:
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def reader_headers(record: ReadOptionsInput) -> Dict[str, str]:
    headers = {}
    for name, header in READER_HEADERS.items():
        value = _header_value(getattr(record, name))
        if value is not None:
            headers[header] = value
    return headers


def _embeddings_body(record: EmbeddingsInput) -> dict:
    return {"model": record.model or DEFAULT_EMBEDDING_MODEL, "input": record.input}


def _rerank_body(record: RerankInput) -> dict:
    return {"model": RERANKER_MODEL, "query": record.query, "documents": record.documents}


def _read_body(record) -> dict:
    return {"url": record.url}


def _segment_body(record: SegmentInput) -> dict:
    return {"content": record.content, "return_chunks": True}


def _classify_body(record: ClassifyInput) -> dict:
    return {"model": CLASSIFIER_MODEL, "input": record.input, "labels": record.labels}


# ──────────────────────────────────────────────────────────────────────────────
# 📚  Operation table
# ──────────────────────────────────────────────────────────────────────────────

OPERATIONS = (
    APIEndpoint(
        name="GetEmbeddings",
        url="https://api.jina.ai/v1/embeddings",
        method=HTTPMethod.POST,
        description="Generate embeddings for given text using the Jina.ai Embeddings API.",
        input_type=EmbeddingsInput,
        body=_embeddings_body,
        project=projections.embeddings,
        output_type=Embedding,
        returns_list=True,
    ),
    APIEndpoint(
        name="RerankDocuments",
        url="https://api.jina.ai/v1/rerank",
        method=HTTPMethod.POST,
        description="Rerank documents based on a query using the Jina.ai Reranker API.",
        input_type=RerankInput,
        body=_rerank_body,
        project=projections.rerank,
        output_type=RerankResult,
        returns_list=True,
    ),
    APIEndpoint(
        name="ReadContent",
        url="https://r.jina.ai/",
        method=HTTPMethod.POST,
        description="Retrieve and parse content from a URL using the Jina.ai Reader API.",
        input_type=ReadInput,
        body=_read_body,
        project=projections.read_content,
        output_type=Content,
    ),
    APIEndpoint(
        name="ReadContentWithOptions",
        url="https://r.jina.ai/",
        method=HTTPMethod.POST,
        description="Retrieve content from a URL with the Jina.ai Reader API, controlling how the page is fetched and rendered.",
        input_type=ReadOptionsInput,
        body=_read_body,
        headers=reader_headers,
        project=projections.read_content,
        output_type=Content,
    ),
    APIEndpoint(
        name="SearchWeb",
        url="https://s.jina.ai/",
        method=HTTPMethod.POST,
        description="Search the web using the Jina.ai Search API and return LLM-friendly results.",
        input_type=SearchInput,
        body=lambda record: {"q": record.query},
        project=projections.search,
        output_type=SearchResult,
        returns_list=True,
    ),
    APIEndpoint(
        name="VerifyStatement",
        url="https://g.jina.ai/",
        method=HTTPMethod.POST,
        description="Verify the factual accuracy of a statement using the Jina.ai Grounding API.",
        input_type=VerifyInput,
        body=lambda record: {"statement": record.statement},
        project=projections.verification,
        output_type=Verification,
    ),
    APIEndpoint(
        name="SegmentText",
        url="https://segment.jina.ai/",
        method=HTTPMethod.POST,
        description="Segment text into chunks using the Jina.ai Segmenter API.",
        input_type=SegmentInput,
        body=_segment_body,
        project=projections.segmentation,
        output_type=Segmentation,
    ),
    APIEndpoint(
        name="ClassifyText",
        url="https://api.jina.ai/v1/classify",
        method=HTTPMethod.POST,
        description="Classify text inputs using the Jina.ai Classifier API.",
        input_type=ClassifyInput,
        body=_classify_body,
        project=projections.classification,
        output_type=Classification,
        returns_list=True,
    ),
    APIEndpoint(
        name="FetchContent",
        url="https://api.jina.ai/reader/search",
        method=HTTPMethod.GET,
        description="Fetch content by query using the legacy Jina.ai Reader API.",
        input_type=FetchQueryInput,
        query=lambda record: {"query": record.query},
        project=projections.content_items,
        output_type=Content,
        returns_list=True,
    ),
    APIEndpoint(
        name="FetchContentById",
        url="https://api.jina.ai/reader/content/{id}",
        method=HTTPMethod.GET,
        description="Fetch specific content by ID using the legacy Jina.ai Reader API.",
        input_type=FetchIdInput,
        project=projections.content_item,
        output_type=Content,
    ),
    APIEndpoint(
        name="FetchRelatedContent",
        url="https://api.jina.ai/reader/content/{id}/related",
        method=HTTPMethod.GET,
        description="Fetch related content using the legacy Jina.ai Reader API.",
        input_type=FetchIdInput,
        project=projections.content_items,
        output_type=Content,
        returns_list=True,
    ),
)


def register_operations(manager: EndpointManager) -> EndpointManager:
    for endpoint in OPERATIONS:
        manager.add_endpoint(endpoint)
    logging.info(f"[Operations] Registered {len(OPERATIONS)} Jina operations")
    return manager


def build_endpoint_manager(config: PackConfig = DEFAULT_CONFIG, **kwargs) -> EndpointManager:
    """Create an EndpointManager with every Jina operation registered"""
    return register_operations(EndpointManager(config=config, **kwargs))


__all__ = [
    "OPERATIONS",
    "READER_HEADERS",
    "reader_headers",
    "register_operations",
    "build_endpoint_manager",
    "DEFAULT_EMBEDDING_MODEL",
]
