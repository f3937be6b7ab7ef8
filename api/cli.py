#!/usr/bin/env python3
"""CLI for shortlink maintenance tasks.

Usage:
    python -m cli <command>

Commands:
    encode     Print the base 60 short code for resource ids
    decode     Print the resource id behind short codes
    resolve    Show where short paths redirect to
    shortlink  Print the shortlink for resource ids
    legacy     Show where legacy /{id} paths redirect to
"""

import argparse
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _services():
    from core.config import get_settings
    from repositories.resource_repository import load_catalog
    from services.bootstrap import build_services

    settings = get_settings()
    return build_services(settings, load_catalog(settings.catalog_file))


def cmd_encode(ids: list[int]) -> int:
    from services import base60

    for resource_id in ids:
        if resource_id < 0:
            logger.error(f"Resource ids are non-negative, got {resource_id}")
            return 1
        print(f"{resource_id}\t{base60.encode(resource_id)}")
    return 0


def cmd_decode(codes: list[str]) -> int:
    from services import base60

    for code in codes:
        print(f"{code}\t{base60.decode(code)}")
    return 0


def cmd_resolve(paths: list[str]) -> int:
    services = _services()
    unresolved = 0
    for path in paths:
        url = services.dispatcher.dispatch(path.strip("/"))
        if url is None:
            unresolved += 1
        print(f"{path}\t{url or '404'}")
    return 1 if unresolved else 0


def cmd_shortlink(ids: list[int]) -> int:
    from services.classifier_service import UnclassifiableResourceError

    services = _services()
    missing = 0
    for resource_id in ids:
        resource = services.store.get_resource(resource_id)
        if resource is None:
            logger.warning(f"No resource with id {resource_id}")
            missing += 1
            continue
        try:
            print(f"{resource_id}\t{services.generator.for_resource(resource).url}")
        except UnclassifiableResourceError as e:
            logger.warning(str(e))
            missing += 1
    return 1 if missing else 0


def cmd_legacy(paths: list[str]) -> int:
    services = _services()
    for path in paths:
        print(f"{path}\t{services.legacy.resolve(path) or '404'}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Hum shortlinks CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    encode = subparsers.add_parser("encode", help="Encode resource ids")
    encode.add_argument("ids", nargs="+", type=int)

    decode = subparsers.add_parser("decode", help="Decode short codes")
    decode.add_argument("codes", nargs="+")

    resolve = subparsers.add_parser("resolve", help="Resolve short paths like b/4c2")
    resolve.add_argument("paths", nargs="+")

    shortlink = subparsers.add_parser("shortlink", help="Shortlinks for resource ids")
    shortlink.add_argument("ids", nargs="+", type=int)

    legacy = subparsers.add_parser("legacy", help="Resolve legacy /{id} paths")
    legacy.add_argument("paths", nargs="+")

    args = parser.parse_args()

    if args.command == "encode":
        return cmd_encode(args.ids)
    elif args.command == "decode":
        return cmd_decode(args.codes)
    elif args.command == "resolve":
        return cmd_resolve(args.paths)
    elif args.command == "shortlink":
        return cmd_shortlink(args.ids)
    elif args.command == "legacy":
        return cmd_legacy(args.paths)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
