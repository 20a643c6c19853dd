"""Local filesystem storage for rendered invoices."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from contentflow.domain.exceptions import ValidationException


class LocalInvoiceStorage:
    """Writes invoices to <storage_root>/invoices/<invoice_number>.html.

    Writes go to a temp file in the target directory and are renamed into
    place, so a reader never sees a partial invoice.
    """

    SUBDIR = "invoices"

    def __init__(self, storage_root: str) -> None:
        self.root = (Path(storage_root) / self.SUBDIR).resolve()

    def path_for(self, invoice_number: str) -> Path:
        """Resolve the file path; rejects names that escape the invoice directory."""
        path = (self.root / f"{invoice_number}.html").resolve()
        if path.parent != self.root:
            raise ValidationException(
                f"Invalid invoice number: {invoice_number!r}", field="invoice_number"
            )
        return path

    async def save(self, invoice_number: str, content: str) -> str:
        target = self.path_for(invoice_number)
        await aiofiles.os.makedirs(self.root, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=self.root, prefix=".tmp_", suffix=".html")
        os.close(fd)
        try:
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(content)
            await aiofiles.os.replace(temp_path, target)
        finally:
            if await aiofiles.os.path.exists(temp_path):
                await aiofiles.os.remove(temp_path)
        return str(target)
