"""Entry point: cli | oneshot | engines | restore-defaults."""

import sys


def main():
    mode = "cli"
    if len(sys.argv) > 1:
        mode = sys.argv[1].lower()

    if mode == "cli":
        from src.interfaces.cli import run_cli

        run_cli()

    elif mode == "oneshot":
        from src.interfaces.oneshot import main as run_oneshot_main

        open_top = "--open" in sys.argv[2:]
        query_parts = [arg for arg in sys.argv[2:] if arg != "--open"]
        if query_parts:
            query = " ".join(query_parts)
        else:
            query = sys.stdin.read().rstrip("\n")
        sys.exit(run_oneshot_main(query=query, open_top=open_top))

    elif mode == "engines":
        from src.core.bootstrap import create_registry
        from src.interfaces.formatting import format_engine

        for engine in create_registry().engines:
            print(format_engine(engine))

    elif mode == "restore-defaults":
        from src.core.bootstrap import create_registry

        engines = create_registry().restore_defaults()
        print(f"Restored {len(engines)} default search engines")

    else:
        print(f"Unknown mode: {mode}")
        print("Usage: python -m src.main [cli|oneshot|engines|restore-defaults]")
        sys.exit(1)


if __name__ == "__main__":
    main()
