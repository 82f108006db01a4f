"""Base agent class."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import Any


class BaseAgent(ABC):
    """Abstract base class for all agents."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Agent identifier."""

    async def process(self, action: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Process a request and return results.

        Args:
            action: The action to perform.
            payload: Action-specific data.

        Returns:
            Result dictionary.

        Raises:
            ValueError: If action is not supported.
        """
        method_name = f"_handle_{action}"
        handler = getattr(self, method_name, None)
        if handler is None:
            raise ValueError(f"Agent '{self.name}' does not support action '{action}'")
        result = handler(payload)
        if inspect.isawaitable(result):
            result = await result
        return result
