from __future__ import annotations
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

# bare hex digits only: no 0x prefix, sign or underscores
HEX_ADDRESS = re.compile(r"[0-9A-Fa-f]+")


class TraceFormatError(ValueError):
    """Raised when a trace line cannot be parsed."""
    def __init__(self, message: str, source: str = "<trace>", lineno: int = 0):
        super().__init__(f"{source}:{lineno}: {message}")
        self.source = source
        self.lineno = lineno


@dataclass(frozen=True)
class TraceRecord:
    """One memory access as recorded in a .trc file."""
    kind: str
    address: int
    lineno: int = 0


def parse_trace_line(line: str, lineno: int = 0, source: str = "<trace>") -> TraceRecord | None:
    """
    Parses a line of the form ``R 1A2F``.

    Returns None for blank lines and ``#`` comments. The access kind is kept
    as written; the cache engine decides whether it is one it can serve.
    """
    text = line.split('#', 1)[0].strip()
    if not text:
        return None

    parts = text.split()
    if len(parts) != 2:
        raise TraceFormatError(f"expected '<R|W> <hex address>', got {line.strip()!r}", source, lineno)

    kind, addr_text = parts
    if not HEX_ADDRESS.fullmatch(addr_text):
        raise TraceFormatError(f"invalid hexadecimal address {addr_text!r}", source, lineno)
    address = int(addr_text, 16)
    return TraceRecord(kind=kind, address=address, lineno=lineno)


def read_trace(path: Union[str, Path]) -> List[TraceRecord]:
    """Reads a whole trace file so it can be replayed once per cache mode."""
    path = Path(path)
    records = []
    with open(path, 'r') as f:
        for lineno, line in enumerate(f, start=1):
            record = parse_trace_line(line, lineno, source=path.name)
            if record is not None:
                records.append(record)
    return records
