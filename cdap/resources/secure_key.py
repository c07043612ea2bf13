"""CDAP secure key implementation of the Resource blueprint.

Secure keys are write-only secrets scoped to a namespace:

    PUT    /v3/namespaces/{namespace}/securekeys/{name}   create
    DELETE /v3/namespaces/{namespace}/securekeys/{name}   delete
    GET    /v3/namespaces/{namespace}/securekeys          list

The backend has no lookup-by-name endpoint and never returns the stored
value, so existence is decided by scanning the namespace listing and
:meth:`SecureKey.read` has nothing to refresh.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from cdap.base import ResourceBlueprint
from cdap.base.config import CdapConfig
from cdap.base.exceptions import CdapError, DecodeError, RequestConstructionError
from cdap.base.http import HttpClient, url_join
from cdap.base.logger import cdap_logger

_RESOURCE = "secure_key"


class SecureKeyId(BaseModel):
    """Identity of a secure key: the ``(namespace, name)`` pair.

    An empty namespace resolves to the configured default namespace
    when the id is used.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str = ""
    name: str

    @classmethod
    def parse(cls, value: str) -> SecureKeyId:
        """Parse ``"namespace/name"`` or a bare ``"name"``."""
        namespace, sep, name = value.rpartition("/")
        if not sep:
            return cls(name=value)
        return cls(namespace=namespace, name=name)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}" if self.namespace else self.name


class SecureKeySpec(BaseModel):
    """Desired state of a secure key.

    Every field is write-once. Changing any of them means the key has to
    be deleted and created again; see :meth:`replacement_fields`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    namespace: str = Field(default="", description="Namespace; empty means the default one")
    name: str = Field(min_length=1, description="Unique identifier within the namespace")
    data: str = Field(description="The secret to be secured")
    description: str = Field(default="", description="Description of the secure key")
    properties: dict[str, str] = Field(
        default_factory=dict, description="Additional key/value pairs attached to the key"
    )

    def key_id(self, default_namespace: str) -> SecureKeyId:
        return SecureKeyId(namespace=self.namespace or default_namespace, name=self.name)

    def payload(self) -> bytes:
        """Serialize the key for the PUT request body."""
        return self.model_dump_json(include={"name", "data", "description", "properties"}).encode()

    def replacement_fields(self, other: SecureKeySpec, default_namespace: str = "") -> list[str]:
        """Return the names of fields that differ between two desired states.

        A non-empty result means ``other`` can only be realized by deleting
        this key and creating ``other``. Namespaces are compared after
        substituting ``default_namespace`` for empty values, so ``""`` and
        the default namespace count as the same.
        """
        changed = []
        for field in type(self).model_fields:
            mine, theirs = getattr(self, field), getattr(other, field)
            if field == "namespace":
                mine, theirs = mine or default_namespace, theirs or default_namespace
            if mine != theirs:
                changed.append(field)
        return changed


class SecureKeyRecord(BaseModel):
    """One item of the namespace listing. The value is never exposed."""

    name: str


_LISTING = TypeAdapter(list[SecureKeyRecord])


class SecureKey(ResourceBlueprint):
    """Lifecycle controller for CDAP secure keys.

    Holds no state between calls beyond its config and HTTP client. Errors
    are raised on the first failure and never retried here.

    Attributes:
        config: Validated CDAP configuration.
        http: Transport used for every remote call.
    """

    def __init__(self, config: CdapConfig, http: HttpClient | None = None):
        """Initialize the controller.

        Args:
            config: Validated CDAP configuration.
            http: Optional pre-built transport; one is created from ``config`` otherwise.
        """
        self.config = config
        self.http = http or HttpClient(config)

    def _resolve(self, key_id: SecureKeyId) -> SecureKeyId:
        if key_id.namespace:
            return key_id
        return SecureKeyId(namespace=self.config.default_namespace, name=key_id.name)

    def _collection_url(self, namespace: str) -> str:
        return url_join(self.config.host, "v3", "namespaces", namespace, "securekeys")

    def _key_url(self, key_id: SecureKeyId) -> str:
        if not key_id.name.strip("/"):
            raise RequestConstructionError(f"Secure key name {key_id.name!r} does not address a key")
        return url_join(self._collection_url(key_id.namespace), key_id.name)

    def create(self, spec: SecureKeySpec) -> SecureKeyId:
        """Store a secure key with a PUT.

        Args:
            spec: Desired state of the key.

        Returns:
            The key's identity; the response body is ignored.

        Raises:
            RequestConstructionError: If the address cannot be built.
            RemoteCallError: On transport failure or a non-2xx response.
        """
        key_id = spec.key_id(self.config.default_namespace)
        address = self._key_url(key_id)
        log_ctx = {"namespace": key_id.namespace, "resource": _RESOURCE, "operation": "create"}
        cdap_logger.info(f"Creating secure key '{key_id.name}'", **log_ctx)
        try:
            self.http.call("PUT", address, spec.payload())
        except CdapError as e:
            cdap_logger.error(
                f"Failed to create secure key '{key_id.name}': {e}",
                status_code=getattr(e, "status_code", None),
                **log_ctx,
            )
            raise
        return key_id

    def read(self, key_id: SecureKeyId) -> None:
        """Do nothing: the backend never returns a stored secret.

        Drift in ``data``, ``description`` or ``properties`` cannot be
        observed; only presence is, through :meth:`exists`.
        """
        return None

    def delete(self, key_id: SecureKeyId) -> None:
        """Delete a secure key.

        Missing keys are not pre-checked; whatever the backend answers
        (typically 404) is raised as is.

        Raises:
            RequestConstructionError: If the address cannot be built.
            RemoteCallError: On transport failure or a non-2xx response.
        """
        key_id = self._resolve(key_id)
        address = self._key_url(key_id)
        log_ctx = {"namespace": key_id.namespace, "resource": _RESOURCE, "operation": "delete"}
        cdap_logger.info(f"Deleting secure key '{key_id.name}'", **log_ctx)
        try:
            self.http.call("DELETE", address)
        except CdapError as e:
            cdap_logger.error(
                f"Failed to delete secure key '{key_id.name}': {e}",
                status_code=getattr(e, "status_code", None),
                **log_ctx,
            )
            raise

    def exists(self, key_id: SecureKeyId) -> bool:
        """Check for a key by scanning the namespace listing.

        Raises:
            RemoteCallError: On transport failure or a non-2xx response.
            DecodeError: If the listing is not a JSON array of ``{"name": ...}``.
        """
        key_id = self._resolve(key_id)
        log_ctx = {"namespace": key_id.namespace, "resource": _RESOURCE, "operation": "exists"}
        try:
            body = self.http.call("GET", self._collection_url(key_id.namespace))
            try:
                records = _LISTING.validate_json(body)
            except ValidationError as e:
                raise DecodeError(
                    f"Unexpected secure key listing for namespace '{key_id.namespace}': {e}"
                ) from e
        except CdapError as e:
            cdap_logger.error(
                f"Failed to check secure key '{key_id.name}': {e}",
                status_code=getattr(e, "status_code", None),
                **log_ctx,
            )
            raise

        found = any(record.name == key_id.name for record in records)
        cdap_logger.debug(
            f"Secure key '{key_id.name}' {'found' if found else 'not found'} "
            f"among {len(records)} keys",
            **log_ctx,
        )
        return found
