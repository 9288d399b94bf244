"""Atomic report persistence."""
from pathlib import Path

from ..errors import WriteFailure


def write_report(target: str | Path, content: str) -> Path:
    """Write content to target atomically.

    Writes to a temp file first, then renames over the target so a failed
    write never leaves a truncated report behind.

    Raises:
        WriteFailure: If the report cannot be persisted
    """
    target = Path(target)
    temp_path = target.with_name(target.name + '.tmp')
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        temp_path.replace(target)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise WriteFailure(target, e.strerror or str(e)) from e
    return target
