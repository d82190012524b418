"""Data models for Jina API operations and their parameters.

This module contains the core data structures used to declare the operations
that the endpoint manager exposes as MCP tools.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type


class HTTPMethod(Enum):
    """Supported HTTP methods for API endpoints"""
    GET = "GET"
    POST = "POST"


class ParameterKind(Enum):
    """Value kinds an operation parameter may carry"""
    STRING = "string"
    STRING_ARRAY = "string_array"
    NUMBER = "number"
    BOOLEAN = "boolean"


def parameter(
    kind: ParameterKind,
    description: str,
    required: bool = True,
    suggested: Optional[Any] = None,
    suggestions: Tuple[str, ...] = (),
    header: bool = False,
):
    """Declare an input record field together with its tool metadata.

    Optional parameters default to ``None``, meaning "not supplied". The
    ``suggested`` value is advisory and is only surfaced in the tool listing. Parameters
    marked ``header`` are sent as request headers.
    """
    metadata = {
        "kind": kind,
        "description": description,
        "required": required,
        "suggested": suggested,
        "suggestions": tuple(suggestions),
        "header": header,
    }
    if required:
        return field(metadata=metadata)
    return field(default=None, metadata=metadata)


@dataclass(frozen=True)
class APIParameter:
    """Configuration for an API endpoint parameter

    Args:
        name: Parameter name
        type: Parameter kind
        description: Parameter description for tool documentation
        required: Whether parameter is required (default: True)
        default: Suggested value for optional parameters (advisory)
        suggestions: Suggested values for the parameter (advisory)
        header: Whether the value is sent as a request header
    """
    name: str
    type: ParameterKind
    description: str
    required: bool = True
    default: Optional[Any] = None
    suggestions: Tuple[str, ...] = ()
    header: bool = False


@dataclass(frozen=True)
class PreparedRequest:
    """A fully built outbound request, ready for transport"""
    method: HTTPMethod
    url: str
    headers: Dict[str, str]
    body: Optional[Dict[str, Any]] = None
    params: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class APIEndpoint:
    """Configuration for a Jina API operation

    Args:
        name: Unique operation name (becomes tool name)
        url: API endpoint URL (supports templating like /content/{id})
        method: HTTP method to use
        description: Operation description for tool documentation
        input_type: Frozen dataclass holding the bound arguments
        project: Maps (operation name, decoded JSON) to the declared output
        output_type: TypedDict describing one output value
        returns_list: Whether the output is a list of ``output_type``
        body: Builds the JSON body from the input record (POST only)
        headers: Builds operation specific headers from the input record
        query: Builds query parameters from the input record
    """
    name: str
    url: str
    method: HTTPMethod
    description: str
    input_type: Type[Any]
    project: Callable[[str, Any], Any]
    output_type: Type[Any]
    returns_list: bool = False
    body: Optional[Callable[[Any], Dict[str, Any]]] = None
    headers: Optional[Callable[[Any], Dict[str, str]]] = None
    query: Optional[Callable[[Any], Dict[str, str]]] = None

    @property
    def parameters(self) -> List[APIParameter]:
        """Parameters in declaration order, derived from ``input_type``"""
        return [
            APIParameter(
                name=f.name,
                type=f.metadata["kind"],
                description=f.metadata["description"],
                required=f.metadata["required"],
                default=f.metadata["suggested"],
                suggestions=f.metadata["suggestions"],
                header=f.metadata["header"],
            )
            for f in dataclasses.fields(self.input_type)
        ]


__all__ = [
    "HTTPMethod",
    "ParameterKind",
    "parameter",
    "APIParameter",
    "PreparedRequest",
    "APIEndpoint",
]
