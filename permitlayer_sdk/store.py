"""
Ledger storage for nonces and allowances.

Two logical tables survive restarts:
    nonces:     owner -> uint256
    allowances: owner -> spender -> uint256
"""
import json
import logging
import os
import stat
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, ContextManager, Dict, Iterator, Optional, Protocol, Union

import portalocker

from .constants import UINT256_MAX
from .exceptions import LedgerStoreError

logger = logging.getLogger(__name__)


class LedgerStore(Protocol):
    """Protocol for ledger backends"""

    def get_nonce(self, owner: str) -> int:
        """Current nonce for owner (0 if unseen)"""
        ...

    def increment_nonce(self, owner: str) -> int:
        """Atomically increment the owner's nonce and return the previous value"""
        ...

    def get_allowance(self, owner: str, spender: str) -> int:
        ...

    def set_allowance(self, owner: str, spender: str, amount: int) -> None:
        ...

    def transaction(self) -> ContextManager[None]:
        """Re-entrant exclusive section spanning several calls on this store"""
        ...


def _empty_tables() -> Dict[str, Any]:
    return {"nonces": {}, "allowances": {}}


class MemoryLedgerStore:
    """In-process ledger, guarded by a re-entrant lock"""

    def __init__(self):
        self._lock = threading.RLock()
        self._nonces: Dict[str, int] = {}
        self._allowances: Dict[str, Dict[str, int]] = {}

    def get_nonce(self, owner: str) -> int:
        with self._lock:
            return self._nonces.get(owner, 0)

    def increment_nonce(self, owner: str) -> int:
        with self._lock:
            current = self._nonces.get(owner, 0)
            self._nonces[owner] = (current + 1) & UINT256_MAX
            return current

    def get_allowance(self, owner: str, spender: str) -> int:
        with self._lock:
            return self._allowances.get(owner, {}).get(spender, 0)

    def set_allowance(self, owner: str, spender: str, amount: int) -> None:
        with self._lock:
            self._allowances.setdefault(owner, {})[spender] = amount

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            yield


class JsonFileLedgerStore:
    """Process-safe ledger persisted to a JSON file"""

    def __init__(self, store_path: Union[str, Path], lock_timeout: float = 10):
        """
        Initialize the store.

        Args:
            store_path: Path of the JSON ledger file
            lock_timeout: Seconds to wait for the file lock
        """
        self.store_path = Path(store_path)
        self.lock_timeout = lock_timeout
        # Serializes threads of this process; portalocker serializes processes
        self._thread_lock = threading.RLock()
        self._file_lock: Optional[portalocker.Lock] = None
        self._depth = 0
        self._ensure_file()

    def _ensure_file(self):
        """Create the ledger file with owner-only permissions if missing"""
        directory = self.store_path.parent
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)

        if not self.store_path.exists():
            with portalocker.Lock(self._get_lock_path(), timeout=self.lock_timeout):
                if not self.store_path.exists():
                    self._write_unlocked(_empty_tables())
                    if os.name == 'posix':
                        os.chmod(self.store_path, stat.S_IRUSR | stat.S_IWUSR)  # 0600
                    logger.info("Created ledger file %s", self.store_path)

    def _get_lock_path(self) -> str:
        return str(self.store_path) + '.lock'

    def _read_unlocked(self) -> Dict[str, Any]:
        try:
            with open(self.store_path, 'r') as f:
                content = f.read()
        except FileNotFoundError:
            return _empty_tables()
        if not content.strip():
            return _empty_tables()
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            # Resetting would re-enable already consumed nonces
            raise LedgerStoreError(f"Corrupt ledger file {self.store_path}: {e}")
        if not isinstance(data, dict):
            raise LedgerStoreError(f"Corrupt ledger file {self.store_path}: not an object")
        data.setdefault("nonces", {})
        data.setdefault("allowances", {})
        return data

    def _write_unlocked(self, data: Dict[str, Any]):
        tmp_path = self.store_path.with_name(self.store_path.name + '.tmp')
        with open(tmp_path, 'w') as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self.store_path)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        """Hold the thread lock and the file lock; nested entries reuse the outer file lock"""
        with self._thread_lock:
            if self._depth == 0:
                lock = portalocker.Lock(self._get_lock_path(), timeout=self.lock_timeout)
                try:
                    lock.acquire()
                except portalocker.LockException as e:
                    raise LedgerStoreError(f"Could not lock ledger {self.store_path}: {e}")
                self._file_lock = lock
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
                if self._depth == 0:
                    lock, self._file_lock = self._file_lock, None
                    lock.release()

    def transaction(self) -> ContextManager[None]:
        """
        Keep the ledger locked across several calls.

        Other processes using the same file block until the outermost
        transaction exits.
        """
        return self._locked()

    def read(self) -> Dict[str, Any]:
        """
        Read both tables under the file lock.

        Returns:
            Dictionary with ``nonces`` and ``allowances`` tables
        """
        with self._locked():
            return self._read_unlocked()

    def get_nonce(self, owner: str) -> int:
        return int(self.read()["nonces"].get(owner, "0"))

    def increment_nonce(self, owner: str) -> int:
        with self._locked():
            data = self._read_unlocked()
            current = int(data["nonces"].get(owner, "0"))
            data["nonces"][owner] = str((current + 1) & UINT256_MAX)
            self._write_unlocked(data)
            return current

    def get_allowance(self, owner: str, spender: str) -> int:
        return int(self.read()["allowances"].get(owner, {}).get(spender, "0"))

    def set_allowance(self, owner: str, spender: str, amount: int) -> None:
        with self._locked():
            data = self._read_unlocked()
            data["allowances"].setdefault(owner, {})[spender] = str(amount)
            self._write_unlocked(data)


def open_store(path: Optional[Union[str, Path]] = None) -> LedgerStore:
    """Return a file-backed store for path, or an in-memory store if None."""
    if path:
        return JsonFileLedgerStore(path)
    return MemoryLedgerStore()
