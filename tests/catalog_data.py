"""
==============================================================================
Fixture Catalog Data
==============================================================================

Small reference catalog written to SQLite files for the test suite.

Layout:
-------
- ACME_HASH ships in packages 9 and 7 (inserted out of order)
- KNOWN_HASH ships in packages 4 and 3; package 4 has no name and an
  unknown OS, so its descriptive fields come back empty
- SECOND_HASH ships in package 3 only, twice (two file names)
- UNKNOWN_HASH is absent

==============================================================================
"""

from pathlib import Path
from typing import Union

from sqlalchemy import create_engine, insert

from hashcatalog.db.schema import (
    file_table,
    manufacturer_table,
    metadata,
    os_table,
    package_table,
    version_table,
)


KNOWN_HASH = "0008B261E386296CFF720B14279F0C5EDA4AC6AA612EE36C7895383C55641CCA"
SECOND_HASH = "002F58AD1C6BEA9B560081FA2A5434D782A5CDE21058FBAC8A9FCFC6EB070DA5"
ACME_HASH = "AA00" + "1" * 60
UNKNOWN_HASH = "0" * 64

VERSION_ROW = {
    "version": "2025.06.1",
    "build_set": "RDS_2025.06.1_modern_minimal",
    "build_date": "2025-06-01T08:15:00",
    "release_date": "2025-06-02",
    "description": "Modern minimal reference data set",
}

MANUFACTURERS = [
    {"manufacturer_id": 1, "name": "Acme Corp"},
    {"manufacturer_id": 2, "name": "Globex"},
]

OPERATING_SYSTEMS = [
    {"operating_system_id": 10, "name": "Linux", "version": "6.1", "manufacturer_id": 1},
    {"operating_system_id": 11, "name": "Windows", "version": "11", "manufacturer_id": 2},
]

PACKAGES = [
    {
        "package_id": 7, "name": "Acme Suite", "version": "1.0", "language": "English",
        "application_type": "Utility", "operating_system_id": 10, "manufacturer_id": 1,
    },
    {
        "package_id": 9, "name": "Acme Suite Lite", "version": "1.1", "language": "English",
        "application_type": "Utility", "operating_system_id": 10, "manufacturer_id": 1,
    },
    {
        "package_id": 3, "name": "Globex Tools", "version": "2.0", "language": None,
        "application_type": "Developer", "operating_system_id": 11, "manufacturer_id": 2,
    },
    {
        "package_id": 4, "name": None, "version": None, "language": None,
        "application_type": None, "operating_system_id": 99, "manufacturer_id": None,
    },
]

FILES = [
    {"sha256": ACME_HASH, "file_name": "acme-lite.bin", "file_size": 10, "package_id": 9},
    {"sha256": ACME_HASH, "file_name": "acme.bin", "file_size": 10, "package_id": 7},
    {"sha256": KNOWN_HASH, "file_name": "orphan.dll", "file_size": 20, "package_id": 4},
    {"sha256": KNOWN_HASH, "file_name": "globex.dll", "file_size": 20, "package_id": 3},
    {"sha256": SECOND_HASH, "file_name": "tool.exe", "file_size": 30, "package_id": 3},
    {"sha256": SECOND_HASH, "file_name": "tool-copy.exe", "file_size": 30, "package_id": 3},
]


def build_catalog(path: Union[str, Path], with_version: bool = True) -> Path:
    """
    Write the fixture catalog to a SQLite file.

    Args:
        path: Target file
        with_version: Insert the VERSION row

    Returns:
        The path written
    """
    path = Path(path)
    engine = create_engine(f"sqlite:///{path}")
    try:
        metadata.create_all(engine)
        with engine.begin() as conn:
            conn.execute(insert(manufacturer_table), MANUFACTURERS)
            conn.execute(insert(os_table), OPERATING_SYSTEMS)
            conn.execute(insert(package_table), PACKAGES)
            conn.execute(insert(file_table), FILES)
            if with_version:
                conn.execute(insert(version_table), [VERSION_ROW])
    finally:
        engine.dispose()
    return path
