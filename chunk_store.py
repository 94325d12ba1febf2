#!/usr/bin/env python3
"""
In-memory reassembly of workbooks uploaded in chunks.
Uploads live only in this process; unfinished or unclaimed uploads expire.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional


@dataclass
class PendingUpload:
    total_chunks: int
    file_name: str
    created_at: float
    chunks: Dict[int, bytes] = field(default_factory=dict)
    data: Optional[bytes] = None

    @property
    def complete(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class UploadProgress:
    upload_id: str
    complete: bool
    received: int
    total: int
    file_name: str


class ChunkStore:
    """Thread-safe chunk buffer keyed by upload id"""

    def __init__(self, expiry_seconds: int = 600, clock: Callable[[], float] = time.monotonic):
        self.expiry_seconds = expiry_seconds
        self._clock = clock
        self._uploads: Dict[str, PendingUpload] = {}
        self._lock = threading.Lock()
        self.logger = logging.getLogger(self.__class__.__name__)

    def add_chunk(self, upload_id: str, chunk_index: int, total_chunks: int,
                  data: bytes, file_name: str = "upload.xlsx") -> UploadProgress:
        if chunk_index >= total_chunks:
            raise ValueError(f"Chunk index {chunk_index} out of range for {total_chunks} chunks")

        with self._lock:
            self._purge_expired()
            upload = self._uploads.get(upload_id)
            if upload is None:
                upload = PendingUpload(total_chunks=total_chunks, file_name=file_name or "upload.xlsx",
                                       created_at=self._clock())
                self._uploads[upload_id] = upload
            elif total_chunks != upload.total_chunks:
                raise ValueError(f"Upload {upload_id} was started with {upload.total_chunks} chunks, "
                                 f"got total of {total_chunks}")

            if not upload.complete:
                upload.chunks[chunk_index] = data
                if len(upload.chunks) == upload.total_chunks:
                    upload.data = b"".join(upload.chunks[i] for i in range(upload.total_chunks))
                    upload.chunks.clear()
                    self.logger.info(f"Upload {upload_id} complete: {len(upload.data)} bytes")

            return self._progress(upload_id, upload)

    def progress(self, upload_id: str) -> Optional[UploadProgress]:
        with self._lock:
            self._purge_expired()
            upload = self._uploads.get(upload_id)
            return self._progress(upload_id, upload) if upload else None

    def get_complete(self, upload_id: str) -> Optional[bytes]:
        with self._lock:
            self._purge_expired()
            upload = self._uploads.get(upload_id)
            return upload.data if upload else None

    def take_complete(self, upload_id: str) -> Optional[bytes]:
        """Hand over a finished upload and forget it"""
        with self._lock:
            self._purge_expired()
            upload = self._uploads.get(upload_id)
            if upload is None or not upload.complete:
                return None
            del self._uploads[upload_id]
            return upload.data

    def __len__(self) -> int:
        with self._lock:
            return len(self._uploads)

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [upload_id for upload_id, upload in self._uploads.items()
                   if now - upload.created_at > self.expiry_seconds]
        for upload_id in expired:
            del self._uploads[upload_id]
            self.logger.info(f"Dropped expired upload {upload_id}")

    @staticmethod
    def _progress(upload_id: str, upload: PendingUpload) -> UploadProgress:
        return UploadProgress(
            upload_id=upload_id,
            complete=upload.complete,
            received=upload.total_chunks if upload.complete else len(upload.chunks),
            total=upload.total_chunks,
            file_name=upload.file_name
        )
