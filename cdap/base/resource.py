"""Declarative resource blueprint."""

from abc import ABC, abstractmethod
from typing import Any


class ResourceBlueprint(ABC):
    """Abstract lifecycle contract for a CDAP resource kind.

    An external orchestrator calls :meth:`exists` before planning,
    :meth:`create` and :meth:`delete` to realize a plan, and :meth:`read`
    to refresh its view after a mutation. There is no update: resources
    are replaced by delete-then-create.
    """

    @abstractmethod
    def create(self, spec: Any) -> Any:
        """Realize a desired state remotely.

        Args:
            spec: Desired-state description of the resource.

        Returns:
            The identifier of the created resource.
        """
        pass

    @abstractmethod
    def read(self, resource_id: Any) -> None:
        """Refresh local knowledge of the remote resource.

        Args:
            resource_id: Identifier returned by :meth:`create`.
        """
        pass

    @abstractmethod
    def delete(self, resource_id: Any) -> None:
        """Remove the resource.

        Args:
            resource_id: Identifier returned by :meth:`create`.
        """
        pass

    @abstractmethod
    def exists(self, resource_id: Any) -> bool:
        """Check whether the resource is present remotely.

        Args:
            resource_id: Identifier returned by :meth:`create`.

        Returns:
            True if the backend reports the resource.
        """
        pass
