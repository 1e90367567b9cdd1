import csv, io
from typing import Any, List, Sequence
from fastapi import Response

def render_csv(header: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """
    Texto plano entre comillas (comillas internas dobladas); números sin comillas.
    Líneas separadas por "\\n". Misma entrada, mismos bytes.
    """
    buf = io.StringIO()
    w = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    w.writerow(list(header))
    for r in rows:
        w.writerow(["" if v is None else v for v in r])
    return buf.getvalue()

def write_csv(header: Sequence[str], rows: Sequence[Sequence[Any]], filename: str) -> Response:
    return Response(
        render_csv(header, rows).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
