from __future__ import annotations

import argparse
import logging
from pathlib import Path

import matplotlib

from .config import LegtoolsConfig, load_config
from .tools import LegendEditor
from .version import check_host_version


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="legtools")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    host = sub.add_parser("host-check", help="Report whether the installed matplotlib is supported.")
    host.add_argument("--config", type=Path, default=None)

    demo = sub.add_parser("demo", help="Render legend editing scenarios to PNG files.")
    demo.add_argument("--out", type=Path, required=True)
    demo.add_argument("--config", type=Path, default=None)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    config = load_config(args.config) if args.config is not None else LegtoolsConfig()

    if args.command == "host-check":
        result = check_host_version(minimum=config.min_host_version)
        status = "supported" if result.accepted else "unsupported"
        print(f"matplotlib {result.version}: {status} (minimum {config.min_host_version})")
        if result.warning:
            print(result.warning)
        return 0 if result.accepted else 1

    written = run_demo(args.out, LegendEditor(config))
    for path in written:
        print(path)
    return 0


def run_demo(out_dir: Path, editor: LegendEditor) -> list[Path]:
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    fig, ax = plt.subplots()
    ax.plot([0, 1, 2], [0, 1, 0], "o-")
    lh = ax.legend(["Circle"])
    ax.plot([0, 1, 2], [1, 0, 1], "s--")
    editor.append(lh, "Square")
    written.append(_save(fig, out_dir / "append.png"))
    plt.close(fig)

    fig, ax = plt.subplots()
    for offset in range(3):
        ax.plot([0, 1], [offset, offset + 1])
    lh = ax.legend(["One", "Two", "Three"])
    editor.permute(lh, [2, 0, 1])
    written.append(_save(fig, out_dir / "permute.png"))
    plt.close(fig)

    fig, ax = plt.subplots()
    for offset in range(3):
        ax.plot([0, 1], [offset, offset + 1])
    lh = ax.legend(["One", "Two", "Three"])
    editor.remove(lh, [2, 0])
    written.append(_save(fig, out_dir / "remove.png"))
    plt.close(fig)

    fig, ax = plt.subplots()
    ax.plot([0, 1, 2], [0, 1, 0])
    # Annotations never appear in a legend on their own.
    ax.annotate("", xy=(1.0, 1.0), xytext=(1.5, 0.5), arrowprops={"arrowstyle": "->", "color": "tab:red"})
    lh = ax.legend(["Signal"])
    editor.add_placeholder(lh, "Peak", ">", color="tab:red")
    written.append(_save(fig, out_dir / "placeholder.png"))
    plt.close(fig)

    return written


def _save(fig, path: Path) -> Path:
    fig.savefig(path)
    return path
