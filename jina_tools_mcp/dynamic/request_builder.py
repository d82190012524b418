"""Argument binding and request construction.

Both steps are pure: they never touch the network, so an invalid invocation is
rejected before any request exists.
"""

from typing import Any, Dict
from urllib.parse import quote

from ..config import DEFAULT_CONFIG, PackConfig
from .errors import InvalidInputError
from .models import APIEndpoint, HTTPMethod, ParameterKind, PreparedRequest


def _matches_kind(kind: ParameterKind, value: Any) -> bool:
    if kind is ParameterKind.STRING:
        return isinstance(value, str)
    if kind is ParameterKind.STRING_ARRAY:
        return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)
    if kind is ParameterKind.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind is ParameterKind.BOOLEAN:
        return isinstance(value, bool)
    return False


def _has_control_characters(value: str) -> bool:
    return any(ord(ch) < 32 or ord(ch) == 127 for ch in value)


def bind_arguments(endpoint: APIEndpoint, arguments: Dict[str, Any]) -> Any:
    """Bind an argument mapping to the endpoint's input record

    Args:
        endpoint: Operation being invoked
        arguments: Caller supplied values; ``None`` counts as not supplied

    Returns:
        An instance of ``endpoint.input_type``

    Raises:
        InvalidInputError: On unknown, missing or mistyped parameters, or
            header values carrying control characters
    """
    params = endpoint.parameters
    known = {param.name for param in params}
    for name in arguments:
        if name not in known:
            raise InvalidInputError(endpoint.name, name, "unknown parameter")

    values = {}
    for param in params:
        value = arguments.get(param.name)
        if value is None:
            if param.required:
                raise InvalidInputError(endpoint.name, param.name, "missing required parameter")
            continue
        if not _matches_kind(param.type, value):
            raise InvalidInputError(
                endpoint.name, param.name, f"expected {param.type.value}, got {type(value).__name__}"
            )
        if param.header and isinstance(value, str) and _has_control_characters(value):
            raise InvalidInputError(endpoint.name, param.name, "control characters not allowed in header value")
        if param.type is ParameterKind.STRING_ARRAY:
            value = list(value)
        values[param.name] = value
    return endpoint.input_type(**values)


def build_request(
    endpoint: APIEndpoint,
    record: Any,
    credential: str,
    config: PackConfig = DEFAULT_CONFIG,
) -> PreparedRequest:
    """Build the single outbound request for an invocation

    Raises:
        InvalidInputError: If the credential is empty
        ValueError: If the resolved URL leaves the allowed network domains
    """
    if not credential:
        raise InvalidInputError(endpoint.name, "credential", "missing credential")

    url = endpoint.url
    for name, value in vars(record).items():
        placeholder = f"{{{name}}}"
        if placeholder in url:
            url = url.replace(placeholder, quote(str(value), safe=""))
    if not config.is_allowed_url(url):
        raise ValueError(f"URL '{url}' is outside the allowed network domains")

    headers = {
        "Authorization": config.authorization(credential),
        "Accept": "application/json",
    }
    body = None
    if endpoint.method == HTTPMethod.POST:
        headers["Content-Type"] = "application/json"
        body = endpoint.body(record) if endpoint.body else {}
    if endpoint.headers:
        headers.update(endpoint.headers(record))

    params = endpoint.query(record) if endpoint.query else None
    return PreparedRequest(method=endpoint.method, url=url, headers=headers, body=body, params=params)


__all__ = [
    "bind_arguments",
    "build_request",
]
