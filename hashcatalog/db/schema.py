"""
==============================================================================
Reference Catalog Schema Module
==============================================================================

SQLAlchemy Core table definitions for the NSRL RDS "minimal" reference
database.

The service only ever reads these tables. The metadata is also used by
the test suite to build small fixture catalogs with create_all().

Database Schema:
---------------

    ┌──────────────────────────────┐        ┌──────────────────────────────┐
    │            FILE              │        │           VERSION            │
    ├──────────────────────────────┤        ├──────────────────────────────┤
    │ sha256 (VARCHAR, INDEXED)    │        │ version (VARCHAR)            │
    │ sha1, md5, crc32 (VARCHAR)   │        │ build_set (VARCHAR)          │
    │ file_name (VARCHAR)          │        │ build_date (VARCHAR)         │
    │ file_size (INTEGER)          │        │ release_date (VARCHAR)       │
    │ package_id (INTEGER)         │        │ description (VARCHAR)        │
    └──────────────┬───────────────┘        └──────────────────────────────┘
                   │ N:1
    ┌──────────────▼───────────────┐
    │             PKG              │
    ├──────────────────────────────┤
    │ package_id (INTEGER, PK)     │
    │ name, version, language      │
    │ application_type             │
    │ operating_system_id ─────────┼──▶ OS(operating_system_id, name, version)
    │ manufacturer_id ─────────────┼──▶ MFG(manufacturer_id, name)
    └──────────────────────────────┘

==============================================================================
"""

from sqlalchemy import Column, Index, Integer, MetaData, String, Table


metadata = MetaData()


file_table = Table(
    "FILE",
    metadata,
    Column("sha256", String(64), nullable=False),
    Column("sha1", String(40)),
    Column("md5", String(32)),
    Column("crc32", String(8)),
    Column("file_name", String),
    Column("file_size", Integer),
    Column("package_id", Integer, nullable=False),
)

Index("ix_file_sha256", file_table.c.sha256)


package_table = Table(
    "PKG",
    metadata,
    Column("package_id", Integer, primary_key=True, autoincrement=False),
    Column("name", String),
    Column("version", String),
    Column("language", String),
    Column("application_type", String),
    Column("operating_system_id", Integer),
    Column("manufacturer_id", Integer),
)


os_table = Table(
    "OS",
    metadata,
    Column("operating_system_id", Integer, primary_key=True, autoincrement=False),
    Column("name", String),
    Column("version", String),
    Column("manufacturer_id", Integer),
)


manufacturer_table = Table(
    "MFG",
    metadata,
    Column("manufacturer_id", Integer, primary_key=True, autoincrement=False),
    Column("name", String),
)


version_table = Table(
    "VERSION",
    metadata,
    Column("version", String),
    Column("build_set", String),
    Column("build_date", String),
    Column("release_date", String),
    Column("description", String),
)
