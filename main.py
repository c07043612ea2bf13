from cdap import resource_factory
from cdap.resources import SecureKeySpec



def main():
    # Example usage of the resource factory
    config = {"host": "http://localhost:11015", "default_namespace": "default"}

    keys = resource_factory("secure_key", config)
    spec = SecureKeySpec(
        name="db-password",
        data="s3cret",
        description="Warehouse password",
        properties={"owner": "etl"},
    )

    if not keys.exists(spec.key_id(keys.config.default_namespace)):
        key_id = keys.create(spec)
        print(f"Created secure key: {key_id}")
    else:
        print(f"Secure key already present: {spec.name}")

if __name__ == "__main__":
    main()
