# main.py
import argparse
import sys

from config import AppConfig
from core.moving_mean import InvalidConfiguration

from runners.run_stream import main as stream
from runners.run_live import main as live
from runners.run_compare import main as compare

DEFAULTS = AppConfig()

MODES = {"stream": stream, "live": live, "compare": compare}


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Sliding-window mean over a numeric stream.")
    p.add_argument("mode", choices=list(MODES))
    p.add_argument("-w", "--window", type=float, default=DEFAULTS.window,
                   help="window size (default: %(default)s)")
    p.add_argument("-n", "--count", type=int, default=DEFAULTS.count,
                   help="samples drawn by the random source")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("-i", "--input", default=None,
                   help="read one number per line from this file ('-' for stdin)")
    p.add_argument("-o", "--output", default=None, help="write means here instead of stdout")
    p.add_argument("--csv", default=None, help="also log index,mean rows to this CSV")
    p.add_argument("--fps", type=int, default=DEFAULTS.fps)
    p.add_argument("--record-dir", default=None, help="save live plot frames as PNGs")
    p.add_argument("--device", default=DEFAULTS.device)
    return p.parse_args(argv)


def config_from_args(args) -> AppConfig:
    if args.input is None:
        source, input_path = "random", None
    elif args.input == "-":
        source, input_path = "stdin", None
    else:
        source, input_path = "file", args.input
    # integral floats become ints so `--window 10` and `--window 10.0` agree
    window = int(args.window) if float(args.window).is_integer() else args.window
    return AppConfig().with_(
        window=window,
        count=args.count,
        seed=args.seed,
        source=source,
        input_path=input_path,
        output_path=args.output,
        csv_path=args.csv,
        fps=args.fps,
        render_record_dir=args.record_dir,
        device=args.device,
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = config_from_args(args)
    try:
        MODES[args.mode](cfg)
    except InvalidConfiguration as e:
        print(f"[moving-mean] error: {e}", file=sys.stderr)
        return 2
    except (ValueError, OSError) as e:
        # malformed input lines, missing or unreadable files
        print(f"[moving-mean] error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
