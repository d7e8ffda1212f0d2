#!/usr/bin/env python3
"""Example: Standalone usage of lazy-resources.

This example declares the texts an application needs as a Protocol and
reads them from the examples/texts directory.
"""

from pathlib import Path
from typing import Protocol

from lazy_resources import ResourceBuilder, ResourceCatalog, ResourceNotFoundError
from lazy_resources.observability import StdoutAuditSink


class Texts(Protocol):
    Welcome: str
    Signature: str
    Missing: str


def main():
    """Demonstrate standalone usage."""
    print("=" * 60)
    print("lazy-resources - Standalone Usage Example")
    print("=" * 60)
    print()

    builder = (
        ResourceBuilder()
        .add_container(Path(__file__).parent / "texts")
        .with_audit_sink(StdoutAuditSink())
    )

    # Inspect what the accessor will search
    catalog = ResourceCatalog.from_containers(builder.configuration().containers)
    print(f"Catalog holds {len(catalog)} resource(s):")
    for name in catalog.names():
        print(f"  - {name}")
    print()

    # Building enumerates the catalog but reads nothing
    print("Building accessor...")
    texts = builder.build(Texts)
    print(f"Built {texts!r}")
    print()

    print("Reading 'Welcome' (resolved on first access)...")
    print(texts.Welcome)

    print("Reading 'Welcome' again (cached, no audit event)...")
    print(texts.Welcome)

    print("Reading 'Signature' from a sub-directory...")
    print(texts.Signature)

    print("Reading 'Missing'...")
    try:
        texts.Missing
    except ResourceNotFoundError as e:
        print(f"  Error: {e}")

    print()
    print("=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
