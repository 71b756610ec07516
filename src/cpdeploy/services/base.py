"""BaseService — abstract foundation for cpdeploy services.

Every host-bound service receives a :class:`Server` at construction time.
The Server provides the control plane, filesystem layout, and network
lookups; services never shell out or touch paths on their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cpdeploy.infrastructure.server import Server


class BaseService:
    """Abstract base for service-layer classes bound to a host.

    Usage::

        class SiteService(BaseService):
            def delete(self, domain: str) -> ServiceResult:
                self._server.control_plane.delete_site(domain)
                ...
    """

    def __init__(self, server: Server) -> None:
        self._server = server
