"""Field-name translation between the domain and the local mirror.

The domain and the SQL tables use snake_case; the local mirror keeps the
camelCase layout of the browser client's localStorage blobs.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")
_SNAKE_BOUNDARY = re.compile(r"_([a-z0-9])")


def snake_to_camel(name: str) -> str:
    return _SNAKE_BOUNDARY.sub(lambda m: m.group(1).upper(), name)


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


def to_mirror(row: Mapping[str, Any]) -> dict:
    return {snake_to_camel(key): value for key, value in row.items()}


def from_mirror(row: Mapping[str, Any]) -> dict:
    return {camel_to_snake(key): value for key, value in row.items()}
