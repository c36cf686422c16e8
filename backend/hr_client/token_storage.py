# backend/hr_client/token_storage.py

"""
Persistent storage for the access token, refresh token and user profile.

Two backends share one interface: ``MemoryTokenStorage`` for tests and
short-lived scripts, ``FileTokenStorage`` for a JSON file that survives
restarts. Expiry checks read the ``exp`` claim without verifying the
signature; the server remains the authority on validity.
"""

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jose import jwt
from jose.exceptions import JWTError

logger = logging.getLogger(__name__)

TOKEN_KEY = "hr_system_token"
REFRESH_TOKEN_KEY = "hr_system_refresh_token"
USER_KEY = "hr_system_user"


def decode_token(token: Optional[str]) -> Optional[Dict[str, Any]]:
    if not token:
        return None
    try:
        return jwt.get_unverified_claims(token)
    except JWTError as e:
        logger.debug(f"Could not decode token: {e}")
        return None


def is_token_expired(token: Optional[str], now: Optional[float] = None) -> bool:
    claims = decode_token(token)
    if not claims or "exp" not in claims:
        return True
    current = now if now is not None else time.time()
    return claims["exp"] < int(current)


def get_token_expiration(token: Optional[str]) -> Optional[datetime]:
    claims = decode_token(token)
    if not claims or "exp" not in claims:
        return None
    return datetime.fromtimestamp(claims["exp"], tz=timezone.utc)


class TokenStorage:
    """Key/value token store; subclasses provide ``_load`` and ``_save``."""

    def _load(self) -> Dict[str, Any]:
        raise NotImplementedError

    def _save(self, data: Dict[str, Any]) -> None:
        raise NotImplementedError

    def _set(self, key: str, value: Any) -> None:
        data = self._load()
        if value:
            data[key] = value
        else:
            data.pop(key, None)
        self._save(data)

    def get_token(self) -> Optional[str]:
        return self._load().get(TOKEN_KEY)

    def set_token(self, token: Optional[str]) -> None:
        self._set(TOKEN_KEY, token)

    def get_refresh_token(self) -> Optional[str]:
        return self._load().get(REFRESH_TOKEN_KEY)

    def set_refresh_token(self, refresh_token: Optional[str]) -> None:
        self._set(REFRESH_TOKEN_KEY, refresh_token)

    def get_user(self) -> Optional[Dict[str, Any]]:
        return self._load().get(USER_KEY)

    def set_user(self, user: Optional[Dict[str, Any]]) -> None:
        self._set(USER_KEY, user)

    def set_auth_data(
        self,
        token: Optional[str],
        refresh_token: Optional[str],
        user: Optional[Dict[str, Any]],
    ) -> None:
        data = {TOKEN_KEY: token, REFRESH_TOKEN_KEY: refresh_token, USER_KEY: user}
        self._save({k: v for k, v in data.items() if v})

    def get_auth_data(self) -> Dict[str, Any]:
        return {
            "token": self.get_token(),
            "refresh_token": self.get_refresh_token(),
            "user": self.get_user(),
        }

    def clear_auth_data(self) -> None:
        self._save({})

    def has_token(self) -> bool:
        return bool(self.get_token())

    def is_authenticated(self) -> bool:
        token = self.get_token()
        return bool(token) and not is_token_expired(token)


class MemoryTokenStorage(TokenStorage):
    def __init__(self):
        self._data: Dict[str, Any] = {}

    def _load(self) -> Dict[str, Any]:
        return dict(self._data)

    def _save(self, data: Dict[str, Any]) -> None:
        self._data = dict(data)


class FileTokenStorage(TokenStorage):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Any]) -> None:
        if not data:
            self.path.unlink(missing_ok=True)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")
