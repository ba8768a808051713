from __future__ import annotations

"""
Turn a Scratch 3 project into Ruby constructor calls, one per target:

Stage.new("Stage",
          variables: [
            {
              name: "score",
              value: 10
            }
          ])

Sprite.new("Cat",
           x: 20,
           rotation_style: "left-right")

Usage:
python compiler.py input.sb3 output.rb
python compiler.py project.json output.rb --verbose
"""

import argparse
import logging
from pathlib import Path

from codegen import emit_project, write_rb
from loader import load_project
from semantic import analyze

logger = logging.getLogger(__name__)


def compile_file(input_path: Path, output_path: Path) -> None:
    runtime = load_project(input_path)
    analyze(runtime)
    source = emit_project(runtime)
    write_rb(source=source, output_path=output_path)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Emit Ruby source for the targets of a Scratch .sb3 project")
    parser.add_argument("input", type=Path, help="Path to input .sb3 or project.json file")
    parser.add_argument("output", type=Path, help="Path to output .rb file")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every loaded and emitted target.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    input_path: Path = args.input
    output_path: Path = args.output

    if not input_path.exists() or not input_path.is_file():
        raise FileNotFoundError(f"Input file not found: '{input_path}'")

    logger.debug("Compiling %s -> %s", input_path, output_path)
    compile_file(input_path=input_path, output_path=output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
