# FileStore — path resolution and the four filesystem operations.
# Created: 2026-10-18
#
# Thin glue over stat/scandir/open/copy/rmtree. Nothing is cached and nothing
# is coordinated between requests: concurrent writers to the same path race at
# the filesystem level.

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from filestore.errors import (
    AbsentError,
    BadRequestError,
    FileStoreError,
    NotFoundError,
    PathOutsideRootError,
)

logger = logging.getLogger(__name__)

_COPY_CHUNK = 1024 * 1024


@dataclass(frozen=True)
class DirectoryEntry:
    """One immediate child of a listed directory."""

    name: str
    is_dir: bool
    date: datetime


class FileStore:
    """All client paths are interpreted relative to ``root``.

    With ``confine_paths`` set, any path that resolves outside the root is
    refused with :class:`PathOutsideRootError`. With it unset, ``..`` segments
    are joined verbatim and may escape the root.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        confine_paths: bool = True,
        atomic_uploads: bool = False,
    ):
        self.root = Path(os.path.abspath(root))
        self.confine_paths = confine_paths
        self.atomic_uploads = atomic_uploads

    @classmethod
    def from_settings(cls, settings) -> FileStore:
        return cls(
            settings.storage_root,
            confine_paths=settings.confine_paths,
            atomic_uploads=settings.atomic_uploads,
        )

    def ensure_root(self) -> None:
        """Create the storage root (and parents) if it is missing."""
        if self.root.is_dir():
            return
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.exception("Cannot create storage root %s", self.root)
            raise
        logger.info("Created storage root %s", self.root)

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def resolve(self, rel: str) -> Path:
        """Join *rel* onto the root lexically and return the absolute path.

        A leading ``/`` does not make *rel* absolute. ``.`` and ``..`` are
        collapsed the way a lexical join would; symlinks are not followed.
        """
        if not rel:
            return self.root
        joined = os.path.normpath(os.path.join(str(self.root), rel.lstrip("/\\")))
        if self.confine_paths and not self._inside_root(joined):
            raise PathOutsideRootError()
        return Path(joined)

    def _inside_root(self, path: str) -> bool:
        root = str(self.root)
        return path == root or path.startswith(root.rstrip(os.sep) + os.sep)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_directory(self, rel: str = "") -> list[DirectoryEntry]:
        """Return the immediate children of *rel* in filesystem order."""
        target = self.resolve(rel)
        try:
            target.stat()
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise AbsentError("该目录不存在") from exc
        except OSError as exc:
            raise FileStoreError("无法列出目录内容") from exc

        entries: list[DirectoryEntry] = []
        try:
            with os.scandir(target) as it:
                for item in it:
                    st = item.stat(follow_symlinks=False)
                    entries.append(
                        DirectoryEntry(
                            name=item.name,
                            is_dir=stat.S_ISDIR(st.st_mode),
                            date=datetime.fromtimestamp(st.st_mtime).astimezone(),
                        )
                    )
        except OSError as exc:
            raise FileStoreError("无法列出目录内容") from exc
        return entries

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def save_upload(self, rel: str, stream: BinaryIO) -> Path:
        """Copy *stream* to *rel*, creating missing parent directories.

        An existing file is overwritten. Without ``atomic_uploads`` a failed
        copy may leave a partially written file behind.
        """
        if not rel:
            raise BadRequestError("缺少存储路径")
        # "a/b/" names a directory; the file inside it is "a/b/b"
        stripped = rel.rstrip("/\\")
        if stripped and stripped != rel:
            rel = rel + os.path.basename(stripped)
        dest = self.resolve(rel)
        parent = dest.parent

        if not parent.exists():
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise FileStoreError("创建目录失败") from exc

        if self.atomic_uploads:
            self._write_atomic(dest, stream)
        else:
            self._write_in_place(dest, stream)
        return dest

    def _write_in_place(self, dest: Path, stream: BinaryIO) -> None:
        try:
            out = open(dest, "wb")
        except OSError as exc:
            raise FileStoreError("创建文件失败") from exc
        with out:
            try:
                shutil.copyfileobj(stream, out, _COPY_CHUNK)
            except OSError as exc:
                raise FileStoreError("文件复制失败") from exc

    def _write_atomic(self, dest: Path, stream: BinaryIO) -> None:
        if dest.is_dir():
            raise FileStoreError("创建文件失败")
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=dest.parent, prefix=f".{dest.name}.", suffix=".part"
            )
        except OSError as exc:
            raise FileStoreError("创建文件失败") from exc

        try:
            with os.fdopen(fd, "wb") as out:
                shutil.copyfileobj(stream, out, _COPY_CHUNK)
            os.replace(tmp_name, dest)
        except OSError as exc:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise FileStoreError("文件复制失败") from exc

    # ------------------------------------------------------------------
    # Download
    # ------------------------------------------------------------------

    def open_download(self, rel: str) -> tuple[Path, os.stat_result]:
        """Return the path and stat result of a downloadable regular file.

        Directories are never downloadable and answer like a missing file.
        """
        target = self.resolve(rel)
        try:
            st = target.stat()
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise NotFoundError("资源文件不存在") from exc
        except OSError as exc:
            raise FileStoreError("服务器错误，请稍后重试") from exc

        if stat.S_ISDIR(st.st_mode):
            raise NotFoundError("资源文件不存在")
        if not os.access(target, os.R_OK):
            raise FileStoreError("服务器错误，请稍后重试")
        return target, st

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete(self, rel: str) -> None:
        """Remove *rel* and, for a directory, everything beneath it."""
        if not rel:
            raise BadRequestError("缺少路径参数")
        target = self.resolve(rel)
        if self.confine_paths and target == self.root:
            raise PathOutsideRootError()

        try:
            st = target.lstat()
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise AbsentError("文件或目录不存在") from exc
        except OSError as exc:
            raise FileStoreError("无法获取文件或目录信息") from exc

        try:
            if stat.S_ISDIR(st.st_mode):
                shutil.rmtree(target)
            else:
                target.unlink()
        except FileNotFoundError:
            # Already gone.
            pass
        except OSError as exc:
            raise FileStoreError("删除失败") from exc
