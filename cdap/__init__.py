"""cdap — declarative lifecycle controllers for CDAP resources.

Entry point for the library. Import :func:`resource_factory` to create
a controller with a single call::

    from cdap import resource_factory
    from cdap.resources import SecureKeySpec

    keys = resource_factory("secure_key", {"host": "http://localhost:11015"})
    key_id = keys.create(SecureKeySpec(name="db-password", data="s3cret"))
"""

from .base import ResourceBlueprint
from .base.config import CdapConfig
from .base.exceptions import CdapError, DecodeError, RemoteCallError, RequestConstructionError
from .factory import resource_factory

__all__ = [
    "ResourceBlueprint",
    "CdapConfig",
    "CdapError",
    "DecodeError",
    "RemoteCallError",
    "RequestConstructionError",
    "resource_factory",
]
