"""Launch the tutorial backend with Uvicorn.

Works from a source checkout without installing the project: the backend
directory is put on ``sys.path`` before ``app.main:app`` is imported, the
same thing ``uvicorn app.main:app`` does when run from ``backend/``.
"""

from __future__ import annotations

import sys
from pathlib import Path

import uvicorn


def _prepare_backend_path() -> Path:
    backend_dir = Path(__file__).resolve().parents[1] / "backend"
    if not backend_dir.exists():
        raise RuntimeError(f"backend directory not found at {backend_dir}")

    backend_path = str(backend_dir)
    if backend_path not in sys.path:
        sys.path.insert(0, backend_path)
    return backend_dir


def main() -> None:
    _prepare_backend_path()

    from app.core.tutorial import load_settings

    settings = load_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        workers=1,
    )


if __name__ == "__main__":
    main()
