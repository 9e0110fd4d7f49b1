"""
File store infrastructure for scsspkg.

Provides JSON file persistence with:
- Atomic writes (write to temp, then rename)
- Pretty formatting for human readability (2-space indent, trailing newline)
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Union
import logging

logger = logging.getLogger(__name__)


def read_json(path: Union[str, Path]) -> Any:
    """
    Read and parse a JSON file.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the content is not valid JSON
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def write_json_atomic(path: Union[str, Path], data: Any) -> None:
    """Write data atomically using temp file and rename."""
    path = Path(path)
    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write('\n')  # Trailing newline

        # Atomic rename
        os.replace(temp_path, path)
        logger.debug(f"Wrote {path}")

    except Exception:
        # Clean up temp file on error
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise
