"""Resource factory entry point.

Provides :func:`resource_factory`, the single entry-point for creating
resource controllers. It validates the config once and returns a typed
instance via ``@overload`` signatures so IDEs can autocomplete methods.
"""

from typing import overload, Literal, Any

from cdap.base import ResourceBlueprint, existing_resources
from cdap.base.config import CdapConfig, validate_config
from cdap.resources.factory import RESOURCE_REGISTRY
from cdap.resources.secure_key import SecureKey


@overload
def resource_factory(
    resource_kind: Literal["secure_key"], config: dict | CdapConfig
) -> SecureKey: ...


@overload
def resource_factory(
    resource_kind: str, config: dict | CdapConfig
) -> ResourceBlueprint: ...


def resource_factory(
    resource_kind: existing_resources,
    config: dict | CdapConfig,
) -> Any:
    """
    Factory function to create a resource controller for a CDAP resource kind.
    Args:
        resource_kind: The kind of resource (e.g., 'secure_key').
        config: Configuration dictionary (or validated model) for the CDAP instance.
    Returns:
        An instance of the requested controller class.
    Raises:
        ValueError: If the resource kind is not supported.
        pydantic.ValidationError: If the config is invalid.
    """
    if resource_kind not in RESOURCE_REGISTRY:
        raise ValueError(f"Unsupported resource kind: {resource_kind}")

    resource_class = RESOURCE_REGISTRY[resource_kind]
    configObj = validate_config(config)
    return resource_class(configObj)
