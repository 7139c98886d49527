from __future__ import annotations

from pathlib import Path


def project_root() -> Path:
    # typestore/paths.py -> typestore -> project root
    return Path(__file__).resolve().parents[1]


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def kinds_dir(data_dir: Path, namespace: str = "") -> Path:
    base = data_dir / "kinds"
    if namespace:
        base = base / "namespaces" / _safe_segment(namespace)
    return ensure_dir(base)


def kind_file(data_dir: Path, kind: str, namespace: str = "") -> Path:
    return kinds_dir(data_dir, namespace) / f"{_safe_segment(kind)}.json"


def _safe_segment(raw: str) -> str:
    return raw.strip().replace("/", "_").replace("\\", "_") or "_"
