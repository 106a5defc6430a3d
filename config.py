# config.py
from dataclasses import dataclass, replace
from typing import Optional, Literal

@dataclass(frozen=True, slots=True)
class AppConfig:
    # shared / global
    window: int = 5
    seed: Optional[int] = None
    device: str = "auto"                 # for the torch batch reference

    # source / sink
    source: Literal["random", "file", "stdin"] = "random"
    count: int = 1000                    # samples drawn by the random source
    input_path: Optional[str] = None
    output_path: Optional[str] = None    # None = stdout
    csv_path: Optional[str] = None

    # live plot
    fps: int = 60
    plot_history: int = 200             # emitted means kept on screen
    render_width: int = 800
    render_height: int = 400
    render_title: str = "Moving mean"
    render_show_hud: bool = True
    render_record_dir: Optional[str] = None

    def with_(self, **kwargs) -> "AppConfig":
        """Convenience: clone with updated values"""
        return replace(self, **kwargs)
