"""Response shape shared by live Playwright responses and synthesized ones."""

import json
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class NetworkResult(Protocol):
    """Anything that answers like a Playwright ``APIResponse``.

    The retry policy only inspects ``ok`` on values of this type; everything
    else is treated as an opaque value and returned as is.
    """

    @property
    def status(self) -> int: ...

    @property
    def ok(self) -> bool: ...

    async def json(self) -> Any: ...

    async def text(self) -> str: ...


@dataclass
class MockResponse:
    """In-process response built by mock mode."""

    status: int
    body: Any = field(default_factory=dict)
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def json(self) -> Any:
        return self.body

    async def text(self) -> str:
        if isinstance(self.body, str):
            return self.body
        return json.dumps(self.body)


def is_network_result(value: Any) -> bool:
    """Whether ``value`` carries a success flag the retry policy can check."""
    return isinstance(value, NetworkResult)
