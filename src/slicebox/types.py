"""Framework-neutral type aliases."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeAlias

Reducer: TypeAlias = Callable[[Any, Any], Any]
Listener: TypeAlias = Callable[[], None]
Unsubscribe: TypeAlias = Callable[[], None]
Dispatch: TypeAlias = Callable[[Any], Any]
GetState: TypeAlias = Callable[[], Any]
Middleware: TypeAlias = Callable[[Any], Callable[[Dispatch], Dispatch]]
