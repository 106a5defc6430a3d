# core/reference.py
from __future__ import annotations
from typing import Iterable

import numpy as np
import torch

from .moving_mean import check_window


def resolve_device(pref: str | None = "auto") -> str:
    """
    Returns 'cuda' if available and pref is 'auto', else 'mps' (Apple) if available,
    otherwise 'cpu'. If pref is a concrete device string, returns it unchanged.
    """
    if pref is None or pref.lower() == "auto":
        if torch.cuda.is_available():
            return "cuda"
        if hasattr(torch.backends, "mps") and torch.backends.mps.is_available():  # mac
            return "mps"
        return "cpu"
    return pref


def naive_moving_mean(values: Iterable[float], window: int) -> np.ndarray:
    """Mean of every full window, re-summed from scratch each time."""
    w = check_window(window)
    x = np.asarray(list(values), dtype=np.float64)
    if x.size < w:
        return np.empty(0, dtype=np.float64)
    return np.array([x[i:i + w].sum() / w for i in range(x.size - w + 1)])


def batch_moving_mean(values: Iterable[float], window: int, device: str | None = "auto") -> np.ndarray:
    """Same quantity as `naive_moving_mean`, computed in one pass with torch."""
    w = check_window(window)
    dev = resolve_device(device)
    # mps has no float64
    dtype = torch.float32 if dev == "mps" else torch.float64
    x = torch.as_tensor(np.asarray(list(values), dtype=np.float64), dtype=dtype, device=dev)
    if x.numel() < w:
        return np.empty(0, dtype=np.float64)
    out = x.unfold(0, w, 1).mean(dim=1)
    return out.to("cpu", dtype=torch.float64).numpy()
