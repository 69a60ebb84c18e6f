"""CSV export of scan results."""

from __future__ import annotations

import csv
import io
import re
import time
from collections.abc import Iterable
from pathlib import Path

from lanscope.modules.scan import HostResult

CSV_HEADER = ("IP", "Porta", "Protocolo", "Status", "Latência(ms)", "Mensagem")

_LINE_BREAKS = re.compile(r"[\r\n]+")


def _message_cell(message: str | None) -> str:
    if not message:
        return ""
    return _LINE_BREAKS.sub(" ", message)


def serialize_csv(hosts: Iterable[HostResult]) -> str:
    """Render one row per (host, port) under the fixed header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for host in hosts:
        for item in host.ports:
            writer.writerow(
                [
                    host.ip,
                    item.port,
                    item.protocol.value.upper(),
                    item.status.value.upper(),
                    "" if item.latency_ms is None else item.latency_ms,
                    _message_cell(item.error_message),
                ]
            )
    return buffer.getvalue().rstrip("\n")


def csv_filename(now: float | None = None) -> str:
    """Return the export file name, stamped in epoch milliseconds."""
    stamp = int((time.time() if now is None else now) * 1000)
    return f"lanscope-{stamp}.csv"


def write_csv_report(hosts: Iterable[HostResult], destination: Path) -> Path:
    """Write results as CSV and return the file path.

    ``destination`` may be a directory, in which case a timestamped file name
    is generated inside it.
    """
    hosts = list(hosts)
    if not hosts:
        raise ValueError("No results to export.")

    report_file = destination / csv_filename() if destination.is_dir() else destination
    report_file.write_text(serialize_csv(hosts), encoding="utf-8")
    return report_file
