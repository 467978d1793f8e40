from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
import logging
import math
from typing import Any

import numpy as np

from isoband_plot.defaults import AESTHETIC_COLUMNS, LEVEL_COLUMNS, REQUIRED_COLUMNS, default_aesthetics
from isoband_plot.errors import PlotDataError
from isoband_plot.rows import RowSet


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


LOGGER = logging.getLogger(__name__)

_OPTIONAL_NUMERIC = ("alpha", "fill_alpha")


def normalize_rows(
    data: Any,
    *,
    overrides: Mapping[str, Any] | None = None,
    na_rm: bool = False,
) -> RowSet:
    columns = _american_colour(_resolve_columns(data))
    if overrides is not None:
        overrides = _american_colour(dict(overrides))

    numeric: dict[str, np.ndarray] = {}
    for key in REQUIRED_COLUMNS + LEVEL_COLUMNS:
        if key not in columns:
            raise PlotDataError(f"missing required column: {key}")
        numeric[key] = _coerce_1d_numeric(columns[key], label=key)

    n = numeric["x"].size
    for key, arr in numeric.items():
        if arr.size != n:
            raise PlotDataError(f"column length mismatch: {key} has {arr.size} rows, expected {n}")

    defaults = default_aesthetics()
    styles: dict[str, list[Any]] = {}
    for key in AESTHETIC_COLUMNS:
        if overrides is not None and key in overrides:
            value = overrides[key]
        else:
            value = columns.get(key, defaults[key])
        styles[key] = _broadcast(value, n, label=key)
    for key in _OPTIONAL_NUMERIC:
        styles[key] = [_optional_float(v, label=key) for v in styles[key]]

    finite = np.isfinite(numeric["x"]) & np.isfinite(numeric["y"]) & np.isfinite(numeric["z"])
    dropped = int(n - np.count_nonzero(finite))
    if dropped:
        if na_rm:
            keep = np.flatnonzero(finite)
            numeric = {k: v[keep] for k, v in numeric.items()}
            styles = {k: [v[i] for i in keep.tolist()] for k, v in styles.items()}
        else:
            LOGGER.warning("kept %d row(s) with non-finite x/y/z; set na_rm=True to drop them", dropped)

    return RowSet(
        x=numeric["x"],
        y=numeric["y"],
        z=numeric["z"],
        zmin=numeric["zmin"],
        zmax=numeric["zmax"],
        colour=tuple(styles["colour"]),
        fill=tuple(styles["fill"]),
        alpha=tuple(styles["alpha"]),
        fill_alpha=tuple(styles["fill_alpha"]),
        size=tuple(float(v) for v in styles["size"]),
        linetype=tuple(styles["linetype"]),
    )


def _resolve_columns(data: Any) -> dict[str, Any]:
    if data is None:
        raise PlotDataError("layer data is required")

    if pd is not None and isinstance(data, pd.DataFrame):
        return {str(c): data[c] for c in data.columns}

    if isinstance(data, Mapping):
        return {str(k): v for k, v in data.items()}

    if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        if len(data) == 0:
            raise PlotDataError("layer data contains no rows")
        if not all(isinstance(row, Mapping) for row in data):
            raise PlotDataError("row sequences must contain mappings")
        keys: list[str] = []
        for row in data:
            for k in row.keys():
                if k not in keys:
                    keys.append(str(k))
        defaults = default_aesthetics()
        return {k: [row.get(k, defaults.get(k)) for row in data] for k in keys}

    raise PlotDataError(f"unsupported layer data type: {type(data)!r}")


def _american_colour(columns: dict[str, Any]) -> dict[str, Any]:
    if "color" in columns and "colour" not in columns:
        columns["colour"] = columns.pop("color")
    return columns


def _broadcast(value: Any, n: int, *, label: str) -> list[Any]:
    if pd is not None and isinstance(value, pd.Series):
        value = value.tolist()
    elif isinstance(value, np.ndarray):
        value = value.tolist() if value.ndim > 0 else value.item()

    # a single RGB(A) tuple is one colour, not a column
    if label in ("colour", "fill") and _is_rgb_tuple(value):
        return [value] * n

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        if len(value) != n:
            raise PlotDataError(f"column length mismatch: {label} has {len(value)} rows, expected {n}")
        return list(value)
    return [value] * n


def _is_rgb_tuple(value: Any) -> bool:
    return (
        isinstance(value, tuple)
        and len(value) in (3, 4)
        and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)
    )


def _optional_float(value: Any, *, label: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, str) and value.upper() == "NA":
        return None
    try:
        out = float(value)
    except Exception as exc:
        raise PlotDataError(f"{label} must be numeric or missing, got {value!r}") from exc
    if math.isnan(out):
        return None
    return out


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except Exception as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
