"""cdap-securekey CLI — secure key lifecycle from the command line.

Usage examples::

    cdap-securekey --host http://localhost:11015 create db-password --data s3cret
    cdap-securekey --host http://localhost:11015 exists analytics/db-password
    cdap-securekey -c '{"host": "http://localhost:11015"}' delete db-password
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from pydantic import ValidationError


def _parse_property(value: str) -> tuple[str, str]:
    key, sep, val = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return key, val


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``cdap-securekey`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="cdap-securekey",
        description="Manage CDAP secure keys",
    )
    parser.add_argument("--host", help="CDAP router URL (defaults to $CDAP_HOST)")
    parser.add_argument(
        "--namespace", "-n",
        help="Namespace used when an id has none (defaults to $CDAP_NAMESPACE or 'default')",
    )
    parser.add_argument("--token", help="Bearer token (defaults to $CDAP_AUTH_TOKEN)")
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON config string (e.g. \'{"host":"http://localhost:11015"}\')',
    )
    sub = parser.add_subparsers(dest="operation", required=True)

    create = sub.add_parser("create", help="Create a secure key")
    create.add_argument("id", help="Key name, or namespace/name")
    create.add_argument("--data", required=True, help="The secret to store")
    create.add_argument("--description", default="", help="Description of the key")
    create.add_argument(
        "--property", "-p",
        dest="properties",
        action="append",
        type=_parse_property,
        default=[],
        metavar="KEY=VALUE",
        help="Property to attach to the key (repeatable)",
    )

    for name, text in (
        ("read", "Refresh a secure key (no-op: values are write-only)"),
        ("delete", "Delete a secure key"),
        ("exists", "Print whether a secure key exists"),
    ):
        op = sub.add_parser(name, help=text)
        op.add_argument("id", help="Key name, or namespace/name")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, creates a controller via the resource factory, and
    invokes the requested operation. Prints the key id for ``create``,
    ``true``/``false`` for ``exists`` and ``OK`` otherwise.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    try:
        config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)

    for key, value in (("host", ns.host), ("default_namespace", ns.namespace), ("auth_token", ns.token)):
        if value:
            config[key] = value

    # Lazy-import to keep --help fast
    from cdap.base.exceptions import CdapError
    from cdap.factory import resource_factory
    from cdap.resources.secure_key import SecureKeyId, SecureKeySpec

    try:
        keys = resource_factory("secure_key", config)
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    key_id = SecureKeyId.parse(ns.id)
    try:
        if ns.operation == "create":
            spec = SecureKeySpec(
                namespace=key_id.namespace,
                name=key_id.name,
                data=ns.data,
                description=ns.description,
                properties=dict(ns.properties),
            )
            print(keys.create(spec))
        elif ns.operation == "exists":
            print("true" if keys.exists(key_id) else "false")
        elif ns.operation == "delete":
            keys.delete(key_id)
            print("OK")
        else:
            keys.read(key_id)
            print("OK")
    except (CdapError, ValidationError) as e:
        print(f"Operation failed: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        keys.http.close()


if __name__ == "__main__":
    main()
