"""Resource factory.

Maps resource kinds to their controller implementations.
``RESOURCE_REGISTRY`` is consumed by :func:`cdap.factory.resource_factory`.
"""

from cdap.resources.secure_key import SecureKey


# Resource registry for CDAP
RESOURCE_REGISTRY: dict[str, type] = {
    "secure_key": SecureKey,
}
