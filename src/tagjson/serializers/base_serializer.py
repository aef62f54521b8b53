from abc import abstractmethod
from typing import Any, Protocol


class BaseSerializer(Protocol):
    """Protocol for serializers"""

    @abstractmethod
    def serialize(self, obj: Any) -> bytes:
        """Serialize an object graph to bytes, tagging registered types"""
        ...
