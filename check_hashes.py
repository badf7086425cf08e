#!/usr/bin/env python3
"""
Check Hashes Script
Looks up SHA-256 hashes in the reference catalog without running the server

Usage:
    DATABASE_PATH=./rds/minimal.db python check_hashes.py <sha256> [<sha256> ...]
"""

import sys

from hashcatalog.catalog.store import CatalogStore
from hashcatalog.config import get_settings
from hashcatalog.core.exceptions import CatalogError


def check_hashes(hashes):
    """Look the hashes up and print found entries and misses"""
    settings = get_settings()

    try:
        with CatalogStore(settings.resolve_database_path()) as store:
            version = store.get_version()
            result = store.check_hashes(hashes)

    except CatalogError as e:
        print(f"❌ ERROR [{e.code}]: {e.message}")
        print("\nMake sure:")
        print("1. DATABASE_PATH points at the catalog file")
        print("2. The file is a valid SQLite catalog database")
        sys.exit(1)

    if version is not None:
        print(f"Catalog version: {version.version} ({version.build_set})")
    else:
        print("Catalog version: unknown")
    print()

    for entry in result.found:
        print(f"✅ {entry.sha256}")
        print(f"   Package:      {entry.package_id} {entry.package_name}")
        print(f"   OS:           {entry.os_name}")
        print(f"   Manufacturer: {entry.manufacturer_name}")
        print(f"   Type:         {entry.application_type}")

    for sha256 in result.not_found:
        print(f"❔ {sha256} not found")

    print()
    print(f"{len(result.found_hashes)} found, {len(result.not_found)} not found")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)

    print("=" * 60)
    print("CHECK HASHES")
    print("=" * 60)
    print()
    check_hashes(sys.argv[1:])
    print()
    print("=" * 60)
