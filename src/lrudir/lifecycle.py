"""
Creating and opening cache directories.

A directory is a cache when it holds a parseable state file. create_cache()
writes the anchors and the state file into an existing directory;
open_cache() only checks the state file and does not validate entries or
the recency list.

Both provision a FileLock on the lock file in the directory (open_cache
only once the state file checks out). It is handed to the Cache but never
acquired here.
"""

import errno
import json
import logging
import os
import shutil
from dataclasses import asdict, fields
from pathlib import Path
from typing import Optional, Union

from filelock import FileLock

from .cache import Cache
from .config import CacheConfig, CacheState
from .errors import LockError, NotACacheError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _provision_lock(directory: Path, config: CacheConfig) -> FileLock:
    lock_path = directory / config.lock_filename
    try:
        lock_path.touch(exist_ok=True)
    except OSError as exc:
        raise LockError(f"cannot create lock file {lock_path}: {exc}") from exc
    return FileLock(str(lock_path))


def load_state(directory: Path, config: Optional[CacheConfig] = None) -> CacheState:
    """
    Parse the state file in directory.

    Raises NotACacheError unless the state file is a regular file holding a
    JSON object. Other read errors propagate as OSError. Unknown fields are
    ignored.
    """
    config = config or CacheConfig()
    state_path = Path(directory) / config.state_filename

    try:
        raw = state_path.read_bytes()
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise NotACacheError(f"{directory} is not a cache: no {config.state_filename}") from exc
    except IsADirectoryError as exc:
        raise NotACacheError(f"{directory} is not a cache: {config.state_filename} is a directory") from exc

    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise NotACacheError(f"{directory} is not a cache: unreadable state file") from exc

    if not isinstance(data, dict):
        raise NotACacheError(f"{directory} is not a cache: state file is not an object")

    known = {f.name for f in fields(CacheState)}
    try:
        return CacheState(**{k: v for k, v in data.items() if k in known})
    except TypeError as exc:
        raise NotACacheError(f"{directory} is not a cache: bad state record") from exc


def save_state(directory: Path, state: CacheState, config: Optional[CacheConfig] = None) -> None:
    """Write the state file, replacing any existing one."""
    config = config or CacheConfig()
    state_path = Path(directory) / config.state_filename
    state_path.write_text(json.dumps(asdict(state)) + "\n")


def create_cache(path: PathLike, config: Optional[CacheConfig] = None) -> Cache:
    """
    Initialise a cache in path, which must already be a directory.

    If anything fails after that check, the whole directory is removed so
    no half-initialised cache is left behind, and the error is re-raised.
    """
    config = config or CacheConfig()
    directory = Path(path)

    if not directory.exists():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(directory))
    if not directory.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(directory))

    try:
        lock = _provision_lock(directory, config)
        cache = Cache(directory, lock, config)
        cache.recency.init_anchors()
        save_state(directory, CacheState(), config)
    except Exception:
        logger.warning("cache creation failed, removing %s", directory)
        shutil.rmtree(directory, ignore_errors=True)
        raise

    logger.info("created cache in %s", directory)
    return cache


def open_cache(path: PathLike, config: Optional[CacheConfig] = None) -> Cache:
    """
    Open an existing cache directory.

    Raises NotACacheError if the state file is missing or unparseable (a
    missing path included) and LockError if the lock file cannot be
    provisioned. The state file is checked first, so a directory that is
    not a cache is left untouched.
    """
    config = config or CacheConfig()
    directory = Path(path)

    load_state(directory, config)
    lock = _provision_lock(directory, config)

    logger.info("opened cache in %s", directory)
    return Cache(directory, lock, config)


def open_or_create(path: PathLike, config: Optional[CacheConfig] = None) -> Cache:
    """
    Open the cache at path, creating it if path does not exist.

    An existing directory that is not a cache is an error (NotACacheError),
    it is never initialised over.
    """
    directory = Path(path)
    if not directory.exists():
        directory.mkdir(parents=True)
        return create_cache(directory, config)
    return open_cache(directory, config)
