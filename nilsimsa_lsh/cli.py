from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .compare import compare
from .errors import NilsimsaError
from .files import ReadConfig, digest_path
from .hasher import Nilsimsa

logger = logging.getLogger(__name__)

EXIT_IO_ERROR = 1
EXIT_BAD_DIGEST = 2


def _emit(args: argparse.Namespace, text: str, obj: Dict[str, Any]) -> None:
    if args.json:
        print(json.dumps(obj, ensure_ascii=False))
    else:
        print(text)


def cmd_digest(args: argparse.Namespace) -> int:
    cfg = ReadConfig(chunk_size=args.chunk_size)

    if args.text is not None:
        hexdigest = Nilsimsa(args.text).hexdigest()
        _emit(args, hexdigest, {"digest": hexdigest, "text": args.text})
        return 0

    paths: List[str] = args.paths or ["-"]
    rc = 0
    for path in paths:
        try:
            hexdigest = digest_path(path, cfg)
        except OSError as e:
            logger.error("Cannot read %s: %s", path, e)
            rc = EXIT_IO_ERROR
            continue
        _emit(args, f"{hexdigest}  {path}", {"digest": hexdigest, "path": path})
    return rc


def cmd_compare(args: argparse.Namespace) -> int:
    score = compare(args.digest_a, args.digest_b, cutoff=args.cutoff)
    _emit(
        args,
        str(score),
        {"a": args.digest_a, "b": args.digest_b, "cutoff": args.cutoff, "score": score},
    )
    return 0


def cmd_compare_files(args: argparse.Namespace) -> int:
    cfg = ReadConfig(chunk_size=args.chunk_size)
    digest_a = digest_path(args.path_a, cfg)
    digest_b = digest_path(args.path_b, cfg)
    score = compare(digest_a, digest_b, cutoff=args.cutoff)
    _emit(
        args,
        str(score),
        {
            "a": {"path": args.path_a, "digest": digest_a},
            "b": {"path": args.path_b, "digest": digest_b},
            "cutoff": args.cutoff,
            "score": score,
        },
    )
    return 0


def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def _positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="nilsimsa-lsh", description="Nilsimsa locality-sensitive digests")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (logs go to stderr)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--json", action="store_true", help="Emit one JSON object per result")

    d = sub.add_parser("digest", parents=[common], help="Print the digest of files (or stdin) or a string")
    d.add_argument("paths", nargs="*", help="Files to hash; '-' or no argument reads stdin")
    d.add_argument("--text", default=None, help="Hash this string (UTF-8) instead of files")
    d.add_argument("--chunk-size", type=_positive_int, default=ReadConfig.chunk_size, help="Read size in bytes")
    d.set_defaults(func=cmd_digest)

    c = sub.add_parser("compare", parents=[common], help="Score two hex digests (0..128, 128 = identical)")
    c.add_argument("digest_a")
    c.add_argument("digest_b")
    c.add_argument("--cutoff", type=_non_negative_int, default=None, help="Stop once the bit distance exceeds this")
    c.set_defaults(func=cmd_compare)

    cf = sub.add_parser("compare-files", parents=[common], help="Hash two files and score them")
    cf.add_argument("path_a")
    cf.add_argument("path_b")
    cf.add_argument("--cutoff", type=_non_negative_int, default=None, help="Stop once the bit distance exceeds this")
    cf.add_argument("--chunk-size", type=_positive_int, default=ReadConfig.chunk_size, help="Read size in bytes")
    cf.set_defaults(func=cmd_compare_files)

    return p


def run(argv: Optional[List[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except NilsimsaError as e:
        logger.error("%s", e)
        return EXIT_BAD_DIGEST
    except OSError as e:
        logger.error("%s", e)
        return EXIT_IO_ERROR


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
