"""
Read-only automation repository over a JSON snapshot.

The snapshot is re-read on every call; nothing is cached between
queries. File I/O runs in a worker thread so the event loop is never
blocked.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from automation_browser.core.config import settings
from automation_browser.core.exceptions import SourceUnavailableError
from automation_browser.core.logging import get_logger
from automation_browser.domain.models import Automation

logger = get_logger(__name__)

_RECORDS = TypeAdapter(list[Automation])


class AutomationRepository:
    """Record source backed by a JSON array of automation objects."""

    def __init__(self, data_file: Optional[Path] = None) -> None:
        self._data_file = Path(data_file or settings.data_file)

    @property
    def data_file(self) -> Path:
        return self._data_file

    def _read(self) -> list[Automation]:
        raw = self._data_file.read_text(encoding="utf-8")
        return _RECORDS.validate_python(json.loads(raw))

    async def list_automations(self) -> list[Automation]:
        """
        Load every automation in the snapshot.

        Returns:
            The full, unfiltered list of records in file order.

        Raises:
            SourceUnavailableError: If the file cannot be read, is not valid
                JSON, or holds entries that are not automation records.
        """
        try:
            records = await asyncio.to_thread(self._read)
        except (OSError, ValueError, ValidationError) as exc:
            logger.error(
                "Failed to load automations from %s: %s", self._data_file, exc
            )
            raise SourceUnavailableError.from_exception(exc) from exc

        logger.debug("Loaded %d automations from %s", len(records), self._data_file)
        return records
