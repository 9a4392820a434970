from __future__ import annotations

import base64
from pathlib import Path

from .. import config
from .errors import AssetNotFoundError, AssetReadError


def flag_path(code: str, asset_dir: Path) -> Path:
    return Path(asset_dir) / f"{code.lower()}{config.PNG_EXTENSION}"


def encode_bytes(data: bytes, padded: bool = False) -> str:
    """Standard-alphabet base64, with the trailing ``=`` stripped unless ``padded``."""
    encoded = base64.b64encode(data).decode("ascii")
    if padded:
        return encoded
    return encoded.rstrip("=")


def read_flag(code: str, asset_dir: Path) -> bytes:
    path = flag_path(code, asset_dir)
    try:
        data = path.read_bytes()
    except FileNotFoundError as exc:
        raise AssetNotFoundError(f"Flag image missing for {code} at {path}") from exc
    except OSError as exc:
        raise AssetReadError(f"Failed to read flag image {path}: {exc}") from exc
    if not data:
        raise AssetReadError(f"Flag image {path} is empty")
    return data


def encode_flag(code: str, asset_dir: Path, padded: bool = False) -> str:
    return encode_bytes(read_flag(code, asset_dir), padded=padded)
