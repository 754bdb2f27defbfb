from __future__ import annotations

import base64
from pathlib import Path

MAX_DOCUMENT_SIZE = 5 * 1024 * 1024
CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


class DocumentError(ValueError):
    pass


def encode_document(path: str | Path) -> str:
    """Read a proof document and return it as a ``data:`` URL, the format the portal stores.

    Only PDF, PNG and JPEG files up to 5 MB are accepted.
    """
    path = Path(path)
    content_type = CONTENT_TYPES.get(path.suffix.lower())
    if content_type is None:
        raise DocumentError("São válidos somente arquivos do tipo: pdf, png, jpg ou jpeg.")
    if not path.is_file():
        raise DocumentError(f"Arquivo não encontrado: {path}")
    if path.stat().st_size > MAX_DOCUMENT_SIZE:
        raise DocumentError("Tamanho de arquivo não suportado.")
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
