import datetime
import threading
from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

DEFAULT_EXPIRATION = 10 * 60


def _now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass(frozen=True)
class CachedToken:
    value: str
    token_type: str
    expires_at: datetime.datetime

    @property
    def authorization(self) -> str:
        return f"{self.token_type} {self.value}"

    def is_expired(self, now: Union[datetime.datetime, None] = None) -> bool:
        return (now or _now()) >= self.expires_at


class TokenCache(object):
    """
    Cache com expiração, seguro para uso entre threads.

    Cada item expira depois de ``ttl`` segundos (ou ``default_expiration`` quando
    nenhum é informado). Itens expirados são descartados na leitura.
    """

    def __init__(self, default_expiration: Union[int, float] = DEFAULT_EXPIRATION):
        self.default_expiration = default_expiration
        self._items: Dict[str, Tuple[Any, datetime.datetime]] = {}
        self._lock = threading.Lock()

    def get(self, key: str):
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            value, expires_at = item
            if _now() >= expires_at:
                del self._items[key]
                return None
            return value

    def set(self, key: str, value, ttl: Union[int, float, None] = None):
        ttl = self.default_expiration if ttl is None else ttl
        expires_at = _now() + datetime.timedelta(seconds=max(ttl, 0))
        with self._lock:
            self._items[key] = (value, expires_at)

    def delete(self, key: str):
        with self._lock:
            self._items.pop(key, None)

    def clear(self):
        with self._lock:
            self._items.clear()

    def __len__(self):
        with self._lock:
            return len(self._items)
