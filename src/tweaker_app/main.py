# SPDX-License-Identifier: MIT

"""
``const-tweaker`` command: serve a demo set of tunables and print them live.

Open the printed URL, move the sliders and watch the table change.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from tweaker_library.declare import (
    Tunable,
    tweak_bool,
    tweak_f32,
    tweak_f64,
    tweak_i8,
    tweak_i16,
    tweak_i32,
    tweak_i64,
    tweak_str,
    tweak_u8,
    tweak_u16,
    tweak_u32,
    tweak_u64,
    tweak_usize,
)
from tweaker_library.registry import Registry

from .logging_setup import configure_logging
from .server import run
from .settings import TweakerSettings

DEMO_NAMESPACE = "demo"
DEMO_SUB_NAMESPACE = "demo::sub_module"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="const-tweaker",
        description="Serve a demo set of tunables that can be edited from the browser.",
    )
    parser.add_argument("--host", type=str, default=None, help="Host to bind the server to.")
    parser.add_argument("--port", type=int, default=None, help="Port to run the server on.")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level for the tweaker loggers (DEBUG, INFO, WARNING, ...).",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=1.0,
        help="Seconds between printing the demo values.",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print the demo values once and exit without serving.",
    )
    return parser


def register_demo(registry: Registry) -> List[Tunable]:
    """Declare one tunable per kind, split over two namespaces."""
    ns = DEMO_NAMESPACE
    sub = DEMO_SUB_NAMESPACE
    return [
        tweak_f32(registry, "F32_VALUE_CUSTOM", 0.0, min=0.0, max=1.0, step=0.1, namespace=ns),
        tweak_f32(registry, "F32_VALUE_DEFAULT", 0.0, namespace=ns),
        tweak_f64(registry, "F64_VALUE_CUSTOM", 0.0, min=0.0, max=1.0, step=0.1, namespace=ns),
        tweak_f64(registry, "F64_VALUE_DEFAULT", 0.0, namespace=ns),
        tweak_i8(registry, "I8_VALUE_DEFAULT", 0, namespace=ns),
        tweak_u8(registry, "U8_VALUE_DEFAULT", 0, namespace=ns),
        tweak_i16(registry, "I16_VALUE_DEFAULT", 0, namespace=ns),
        tweak_u16(registry, "U16_VALUE_DEFAULT", 0, namespace=ns),
        tweak_i32(registry, "I32_VALUE_DEFAULT", 0, namespace=ns),
        tweak_u32(registry, "U32_VALUE_DEFAULT", 0, namespace=ns),
        tweak_i64(registry, "I64_VALUE_DEFAULT", 0, namespace=ns),
        tweak_u64(registry, "U64_VALUE_DEFAULT", 0, namespace=ns),
        tweak_usize(registry, "USIZE_VALUE_DEFAULT", 0, namespace=ns),
        tweak_bool(registry, "BOOL_VALUE", False, namespace=ns),
        tweak_str(registry, "STRING_VALUE", "Hello", namespace=ns),
        tweak_f64(registry, "SUB_VALUE", 0.5, min=-1.0, max=1.0, step=0.05, namespace=sub),
        tweak_bool(registry, "SUB_ENABLED", True, namespace=sub),
    ]


def render_table(tunables: Sequence[Tunable]) -> Table:
    table = Table(title="Tunables", show_lines=False)
    table.add_column("Key", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Value", style="green")
    for tunable in tunables:
        table.add_row(tunable.key, tunable.kind.value, repr(tunable.get()))
    return table


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv(Path.cwd() / ".env")
    settings = TweakerSettings.from_env()
    if args.host is not None:
        settings.host = args.host
    if args.port is not None:
        settings.port = args.port
    if args.log_level is not None:
        settings.log_level = args.log_level.upper()

    configure_logging(settings.log_level, settings.log_dir)
    console = Console()

    registry = Registry()
    tunables = register_demo(registry)

    if args.once:
        console.print(render_table(tunables))
        return 0

    server = run(registry, settings=settings)
    if server.error is not None:
        console.print(f"[bold red]{server.error}[/bold red]")
        return 1

    console.print(f"[bold]Edit the values at[/bold] [link={settings.url}]{settings.url}[/link]")
    try:
        while True:
            if server.error is not None:
                console.print(f"[bold red]{server.error}[/bold red]")
                return 1
            console.print(render_table(tunables))
            time.sleep(max(0.1, args.interval))
    except KeyboardInterrupt:
        console.print("Stopping...")
    finally:
        server.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
