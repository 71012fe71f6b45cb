# stockbodega/modules/inventory/locks.py
from contextlib import contextmanager
from typing import Dict, Iterator
import threading

from .adjustment import BalanceKey


class BalanceLockRegistry:
    """
    Exclusión mutua por (bodega, producto) dentro del proceso.

    Se mantiene durante todo el ciclo leer-validar-escribir-commit. Las
    claves se toman ordenadas, así dos transferencias opuestas entre las
    mismas bodegas no se bloquean mutuamente.

    Los locks no se liberan del registro: hay uno por par (bodega, producto)
    tocado desde el arranque, acotado por bodegas x productos del catálogo.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[BalanceKey, threading.Lock] = {}

    def _lock_for(self, key: BalanceKey) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, *keys: BalanceKey) -> Iterator[None]:
        ordered = sorted(set(keys))
        acquired = []
        try:
            for key in ordered:
                lock = self._lock_for(key)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


# Registro compartido por todos los requests del proceso
balance_locks = BalanceLockRegistry()
