from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .core.constants import DEFAULT_COLLECTION_KEY
from .database.bootstrap import ensure_schema
from .database.connection import DatabaseConnection, DBConfig
from .records.service import AttendanceService
from .records.store import RecordStore
from .reports.exporter import ReportExporter
from .storage.backend import CollectionBackend
from .storage.json_file_backend import JsonFileBackend
from .storage.mysql_backend import MySQLCollectionBackend


@dataclass(frozen=True)
class Container:
    backend: CollectionBackend
    record_store: RecordStore
    exporter: ReportExporter
    attendance_service: AttendanceService
    conn: Optional[DatabaseConnection] = None


def build_backend(settings: dict[str, Any]) -> tuple[CollectionBackend, Optional[DatabaseConnection]]:
    kind = str(settings.get("STORAGE_BACKEND", "json")).lower()
    if kind == "json":
        return JsonFileBackend(settings.get("DATA_DIR", "data")), None
    if kind == "mysql":
        conn = DatabaseConnection(DBConfig.from_dict(settings.get("DB_CONFIG") or {}))
        if settings.get("AUTO_INIT_DB"):
            ensure_schema(conn)
        return MySQLCollectionBackend(conn), conn
    raise ValueError(f"Unknown STORAGE_BACKEND: {kind!r}")


def build_container(settings: dict[str, Any], *, backend: CollectionBackend | None = None) -> Container:
    conn = None
    if backend is None:
        backend, conn = build_backend(settings)

    record_store = RecordStore(backend, key=str(settings.get("COLLECTION_KEY") or DEFAULT_COLLECTION_KEY))
    exporter = ReportExporter()
    attendance_service = AttendanceService(record_store, exporter=exporter)

    return Container(
        backend=backend,
        record_store=record_store,
        exporter=exporter,
        attendance_service=attendance_service,
        conn=conn,
    )
