from __future__ import annotations

import json
from pathlib import Path


def save_bytes(data: bytes, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(data)


def write_text(content: str, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")


def write_json(payload: dict, output_path: Path) -> None:
    write_text(json.dumps(payload, indent=2), output_path)
