"""UploadService: store an uploaded source file under a sequential key.

Pipeline: VALIDATE -> CLAIM KEY -> STORE -> RECORD -> RESPOND

The key is claimed and the metadata row written in one database
transaction. If recording fails, the stored file is removed again.
This subsystem is independent of the fixture engine; it only shares
the environment's engine and settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError

from fixturectl.infrastructure.database.counters import next_sequential_key
from fixturectl.infrastructure.database.engine import UPLOAD_COUNTER, init_upload_schema
from fixturectl.infrastructure.database.schema import uploads
from fixturectl.infrastructure.storage import FileStore
from fixturectl.services._helpers import now_iso
from fixturectl.services.base import BaseService
from fixturectl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from fixturectl.infrastructure.environment import FixtureEnvironment


class UploadService(BaseService):
    """Validates, stores, and records uploaded source files."""

    def __init__(self, env: FixtureEnvironment) -> None:
        super().__init__(env)
        directory = Path(env.settings.upload.directory)
        if not directory.is_absolute():
            directory = env.settings.project_root / directory
        self._store = FileStore(directory)

    def upload(
        self,
        source: Path,
        *,
        team: str,
        uploaded_by: str,
    ) -> ServiceResult:
        """Upload the file at *source*."""
        op = "upload"
        if not source.is_file():
            return _error(op, "FILE_NOT_FOUND", f"No file at: {source}")
        return self.upload_bytes(
            source.read_bytes(),
            filename=source.name,
            team=team,
            uploaded_by=uploaded_by,
        )

    def upload_bytes(
        self,
        file_bytes: bytes,
        *,
        filename: str,
        team: str,
        uploaded_by: str,
    ) -> ServiceResult:
        """Store *file_bytes* and record who uploaded them for which team."""
        op = "upload"
        config = self._env.settings.upload

        # ── VALIDATE ─────────────────────────────────────────
        extension = Path(filename).suffix.lstrip(".").lower()
        allowed = [ext.lower() for ext in config.extensions]
        if extension not in allowed:
            return _error(
                op,
                "INVALID_EXTENSION",
                f"Only files with these extensions are allowed: {', '.join(allowed)}",
                filename=filename,
            )
        if not file_bytes:
            return _error(op, "EMPTY_FILE", "Please upload a file.", filename=filename)
        if len(file_bytes) > config.max_size:
            return _error(
                op,
                "FILE_TOO_LARGE",
                f"The file is too big. Its size cannot exceed {config.max_size} bytes.",
                filename=filename,
                size=len(file_bytes),
            )
        if not team.strip() or not uploaded_by.strip():
            return _error(op, "MISSING_UPLOADER", "Team and uploader are required.")

        engine = self._env.engine
        init_upload_schema(engine)
        uploaded_at = now_iso()

        try:
            with engine.begin() as conn:
                # ── CLAIM KEY ────────────────────────────────
                key = next_sequential_key(conn, UPLOAD_COUNTER)

                # ── STORE ────────────────────────────────────
                try:
                    path = self._store.store(file_bytes, key, extension)
                except FileExistsError:
                    return _error(
                        op,
                        "KEY_CONFLICT",
                        f"A file is already stored under key {key}",
                        key=key,
                    )

                # ── RECORD ───────────────────────────────────
                try:
                    conn.execute(
                        insert(uploads).values(
                            key=key,
                            path=self._relative(path),
                            filename=filename,
                            team=team,
                            uploaded_by=uploaded_by,
                            uploaded_at=uploaded_at,
                        )
                    )
                except SQLAlchemyError:
                    self._store.discard(path)
                    raise
        except SQLAlchemyError as exc:
            return _error(op, "DB_ERROR", f"Could not record upload: {exc}")

        # ── RESPOND ──────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "key": key,
                "path": self._relative(path),
                "filename": filename,
                "team": team,
                "uploaded_by": uploaded_by,
                "uploaded_at": uploaded_at,
            },
        )

    def list_uploads(self) -> ServiceResult:
        """All recorded uploads, oldest first."""
        engine = self._env.engine
        init_upload_schema(engine)
        with engine.connect() as conn:
            rows = conn.execute(select(uploads).order_by(uploads.c.key)).mappings().all()
        items = [dict(row) for row in rows]
        return ServiceResult(ok=True, op="list_uploads", data={"items": items, "count": len(items)})

    def _relative(self, path: Path) -> str:
        try:
            return str(path.relative_to(self._env.settings.project_root))
        except ValueError:
            return str(path)


def _error(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )
