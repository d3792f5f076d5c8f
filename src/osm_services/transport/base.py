"""
base.py - Abstract base class for transports.

All transport implementations must inherit from Transport.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class Response:
    """Result of a transport request."""
    status_code: int
    body: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(ABC):
    """
    Abstract base class for transports.

    Implementations fetch a single URL and either return a Response or
    raise. ConfigStore treats any exception as the server being unreachable.
    """

    @abstractmethod
    def get_response(self, url: str) -> Response:
        """
        Fetch ``url``.

        Returns:
            The server response
        """
        pass
