"""Response decoding -- maps a :class:`Response` body to typed results.

After a transport call succeeds, :func:`deserialize` validates the JSON
body against the caller's expected result type using a pydantic
:class:`~pydantic.TypeAdapter`. :func:`from_cache` applies the same validation
to values coming out of a cache provider, and :func:`error_message` pulls a
readable message out of an error response.
"""

from __future__ import annotations

import functools
import json
from typing import Any, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from bitbucket_api.client.transport import Response
from bitbucket_api.exceptions import DeserializationError

T = TypeVar("T")


@functools.lru_cache(maxsize=None)
def _adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def deserialize(response: Response, result_type: type[T]) -> T:
    """Decode the JSON body of *response* into *result_type*.

    Args:
        response: A successful transport response.
        result_type: A pydantic model, a builtin, or a parametrised
            generic such as ``list[IssueModel]``.

    Returns:
        The validated value.

    Raises:
        DeserializationError: If the body is empty, is not JSON, or does
            not validate against *result_type*.
    """
    try:
        return _adapter(result_type).validate_json(response.content)
    except ValidationError as exc:
        raise DeserializationError(
            f"Response body does not match {_type_name(result_type)}: {exc}"
        ) from exc


def from_cache(value: Any, result_type: type[T]) -> Optional[T]:
    """Return *value* validated as *result_type*, or ``None`` if it is not one.

    Instances of *result_type* come back unchanged; anything pydantic can
    convert (a ``dict`` for a model, ``"5"`` for ``int``) comes back
    converted, so callers always receive the type they asked for.
    """
    if value is None:
        return None
    try:
        return _adapter(result_type).validate_python(value)
    except ValidationError:
        return None


def error_message(response: Response) -> str:
    """Build the message of an error raised for *response*.

    The message starts with ``HTTP <status>`` and, when the body carries a
    JSON ``message`` / ``error`` / ``detail`` field or plain text, appends
    it (text is cut to 200 characters).
    """
    prefix = f"HTTP {response.status_code}"
    if not response.content:
        return prefix

    try:
        detail = json.loads(response.content)
        if isinstance(detail, dict):
            msg = detail.get("message") or detail.get("error") or detail.get("detail") or ""
            if isinstance(msg, dict):
                msg = msg.get("message", "")
        else:
            msg = str(detail)
    except ValueError:
        msg = response.text[:200]

    msg = str(msg).strip()
    return f"{prefix}: {msg}" if msg else prefix


def _type_name(result_type: Any) -> str:
    return getattr(result_type, "__name__", None) or repr(result_type)
