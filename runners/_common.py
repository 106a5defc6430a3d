# runners/_common.py
from __future__ import annotations
import sys

from config import AppConfig
from core.interfaces import Source
from streaming.sources import RandomSource, TextSource


def log(tag: str, msg: str) -> None:
    # stdout carries data; status goes to stderr
    print(f"[{tag}] {msg}", file=sys.stderr)


def make_source(cfg: AppConfig) -> Source:
    if cfg.source == "random":
        return RandomSource(cfg.count, seed=cfg.seed)
    if cfg.source == "file":
        if not cfg.input_path:
            raise ValueError("source 'file' needs an input path")
        return TextSource(cfg.input_path)
    if cfg.source == "stdin":
        return TextSource(sys.stdin)
    raise ValueError(f"unknown source: {cfg.source!r}")
