"""
JSON checkpoints for parameter containers.

A checkpoint stores the container type and every named parameter array as a
base64 payload:

    {
      "format": "keyevo.json.ckpt.v1",
      "container": "package.module:ClassName",
      "state": {
        "layers.0.weight": {"b64": "...", "dtype": "<f8", "shape": [10, 2], "order": "C"},
        ...
      }
    }

Paths ending in ``.gz`` are written and read through gzip.

Notes
-----
- Avoids pickle: loading a checkpoint never executes code. The container
  type is supplied by the caller and only checked against the stored name.
- Arrays keep their exact shape, so checkpoints of containers whose extents
  differ from the canonical shape round-trip unchanged.
"""

from __future__ import annotations

import base64
import gzip
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Type, TypeVar

import numpy as np

if TYPE_CHECKING:
    from ._base import ParameterContainer

_logger = logging.getLogger(__name__)

CHECKPOINT_FORMAT = "keyevo.json.ckpt.v1"

C = TypeVar("C", bound="ParameterContainer")


def array_to_payload(arr: np.ndarray) -> Dict[str, Any]:
    """
    Serialize a NumPy array into a JSON-safe payload.
    """
    a = np.ascontiguousarray(arr)
    return {
        "b64": base64.b64encode(a.tobytes(order="C")).decode("ascii"),
        "dtype": a.dtype.str,
        "shape": list(a.shape),
        "order": "C",
    }


def payload_to_array(payload: Dict[str, Any]) -> np.ndarray:
    """
    Deserialize a payload produced by `array_to_payload`.

    The result is an owning, writable `float64` array.
    """
    raw = base64.b64decode(str(payload["b64"]).encode("ascii"))
    dtype = np.dtype(str(payload["dtype"]))
    shape = tuple(int(x) for x in payload["shape"])
    arr = np.frombuffer(raw, dtype=dtype).reshape(shape)
    return np.array(arr, dtype=np.float64, copy=True, order="C")


def _type_name(cls: type) -> str:
    return f"{cls.__module__}:{cls.__qualname__}"


def container_to_payload(container: "ParameterContainer") -> Dict[str, Any]:
    """
    Build the checkpoint dictionary for `container`.
    """
    return {
        "format": CHECKPOINT_FORMAT,
        "container": _type_name(type(container)),
        "state": {
            name: array_to_payload(arr) for name, arr in container.named_parameters()
        },
    }


def container_from_payload(cls: Type[C], payload: Dict[str, Any]) -> C:
    """
    Rebuild a container of type `cls` from a checkpoint dictionary.

    Raises
    ------
    ValueError
        If the checkpoint format is unsupported.
    TypeError
        If the checkpoint was written for a different container type.
    """
    fmt = payload.get("format")
    if fmt != CHECKPOINT_FORMAT:
        raise ValueError(f"Unsupported checkpoint format: {fmt!r}")

    stored = payload.get("container")
    if stored != _type_name(cls):
        raise TypeError(
            f"Checkpoint holds {stored!r}, expected {_type_name(cls)!r}."
        )

    arrays = {str(k): payload_to_array(v) for k, v in payload["state"].items()}
    return cls.from_named_parameters(arrays)


def save_container(container: "ParameterContainer", path: str | Path) -> None:
    """
    Write `container` to `path` as a JSON checkpoint.

    Parent directories are created as needed. A ``.gz`` suffix selects gzip
    compression.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(container_to_payload(container), indent=2, sort_keys=True)

    if p.suffix == ".gz":
        with gzip.open(p, "wt", encoding="utf-8") as fh:
            fh.write(text)
    else:
        p.write_text(text, encoding="utf-8")
    _logger.debug("Saved %s checkpoint to %s", type(container).__name__, p)


def load_container(cls: Type[C], path: str | Path) -> C:
    """
    Read a container of type `cls` from a checkpoint written by
    `save_container`.
    """
    p = Path(path)
    if p.suffix == ".gz":
        with gzip.open(p, "rt", encoding="utf-8") as fh:
            payload = json.load(fh)
    else:
        payload = json.loads(p.read_text(encoding="utf-8"))
    return container_from_payload(cls, payload)
