import json
import os
import re
import tempfile
import logging
from typing import List, Optional

from pydantic import ValidationError

from langcoach.core import config
from langcoach.models.feedback import Message

log = logging.getLogger("storage")

_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class StorageError(RuntimeError):
    ...


class MessageStore:
    """
    Chat messages as one JSON file each under DATA_DIR/messages.
    Only what the feedback path needs: fetch by id and replace parts.
    """

    def __init__(self, root: Optional[str] = None):
        self._root = root

    @property
    def root(self) -> str:
        # resolved per call so tests can repoint config.DATA_DIR
        return self._root or os.path.join(config.DATA_DIR, "messages")

    def _path(self, message_id: str) -> str:
        if not _ID_RE.match(message_id or ""):
            raise StorageError(f"Invalid message id: {message_id!r}")
        return os.path.join(self.root, f"{message_id}.json")

    def _write(self, message: Message) -> None:
        dest = self._path(message.id)
        os.makedirs(self.root, mode=0o700, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", dir=self.root, suffix=".tmp", delete=False, encoding="utf-8"
        ) as tmp:
            json.dump(message.model_dump(), tmp, ensure_ascii=False)
            tmp_path = tmp.name
        os.replace(tmp_path, dest)

    def get(self, message_id: str) -> Optional[Message]:
        path = self._path(message_id)
        if not os.path.isfile(path):
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return Message.model_validate(json.load(f))
        except (ValueError, ValidationError) as e:
            raise StorageError(f"Corrupt message file {path}: {e}") from e

    def save(self, message: Message) -> Message:
        self._write(message)
        log.info("Stored message %s (%d parts)", message.id, len(message.parts))
        return message

    def replace_parts(self, message_id: str, parts: List[dict]) -> Message:
        message = self.get(message_id)
        if message is None:
            raise StorageError(f"Message {message_id} not found")
        message.parts = list(parts)
        self._write(message)
        return message
