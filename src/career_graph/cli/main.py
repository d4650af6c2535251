from __future__ import annotations

import argparse
import asyncio

from career_graph.settings import settings


def _configure_logging() -> None:
    import logging

    level = (settings.log_level or "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def cmd_version() -> int:
    from career_graph import __version__

    print(__version__)
    return 0


def cmd_serve(_args: argparse.Namespace) -> int:
    _configure_logging()
    from career_graph.service.server import main

    main()
    return 0


async def _seed(reset: bool) -> dict[str, int]:
    from career_graph.knowledge_graph.neo4j_store import Neo4jGraphStore
    from career_graph.knowledge_graph.seed import seed
    from career_graph.service.server import neo4j_config

    store = await Neo4jGraphStore.connect(neo4j_config())
    try:
        return await seed(store, reset=reset)
    finally:
        await store.close()


def cmd_seed(args: argparse.Namespace) -> int:
    _configure_logging()
    counts = asyncio.run(_seed(args.reset))
    for name, n in counts.items():
        print(f"{name}: {n}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="career-graph")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version").set_defaults(func=lambda _a: cmd_version())

    sub.add_parser("serve", help="Run the HTTP API").set_defaults(func=cmd_serve)

    seed = sub.add_parser("seed", help="Load reference data into Neo4j")
    seed.add_argument("--reset", action="store_true", help="Delete every node before seeding")
    seed.set_defaults(func=cmd_seed)

    return p


def app() -> None:
    parser = build_parser()
    args = parser.parse_args()
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    app()
