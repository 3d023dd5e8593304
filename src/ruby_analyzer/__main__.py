"""CLI entry point: run `ruby-analyzer file.rb` or `python -m ruby_analyzer file.rb`."""

import sys
from pathlib import Path


def main() -> int:
    import argparse
    import logging
    from .compiler.driver import AnalyzerDriver
    from .utils.io_utils import read_source_file

    parser = argparse.ArgumentParser(prog="ruby-analyzer", description="Infer types for a source file.")
    parser.add_argument("file", type=Path, help="Path to source file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    path = args.file.resolve()
    if not path.is_file():
        sys.stderr.write(f"ruby-analyzer: error: file not found: {path}\n")
        return 1

    try:
        source = read_source_file(path)
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"ruby-analyzer: error: could not read file: {e}\n")
        return 1

    result = AnalyzerDriver().analyze(source, str(path))
    if not result.success:
        sys.stderr.write(f"{result.parse_error}\n")
        return 1

    env = result.env
    for name, ty in env.instances.as_dict().items():
        print(f"{name} : {ty}")
    for owner, table in env.objects.items():
        for method_name in table.names():
            print(f"{owner}#{method_name}: {table.get(method_name)}")

    if env.has_errors():
        env.reporter.print_errors()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
