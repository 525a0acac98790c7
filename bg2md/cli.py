"""Command-line interface: look up a passage and print it as Markdown."""

import argparse
import logging
import sys
from pathlib import Path

from bg2md.config import AppConfig, load_config
from bg2md.errors import Bg2mdError
from bg2md.extraction.pipeline import PassageConverter
from bg2md.fetch.client import build_lookup_url, fetch_page, load_page

logger = logging.getLogger(__name__)


def build_arg_parser(config: AppConfig) -> argparse.ArgumentParser:
    """Build the argument parser; defaults come from ``config``."""
    parser = argparse.ArgumentParser(
        prog="bg2md",
        description="Look up a Bible passage on BibleGateway and print it as Markdown.",
    )
    parser.add_argument("reference", nargs="+", help="passage reference, e.g. 'John 3:1-3'")
    parser.add_argument(
        "-c", "--copyright", dest="copyright", action="store_false",
        help="exclude copyright notice",
    )
    parser.add_argument(
        "-e", "--headers", dest="headers", action="store_false",
        help="exclude editorial headers",
    )
    parser.add_argument(
        "-f", "--footnotes", dest="footnotes", action="store_false",
        help="exclude footnotes",
    )
    parser.add_argument(
        "-n", "--numbering", dest="numbering", action="store_false",
        help="exclude verse and chapter numbers",
    )
    parser.add_argument(
        "-i", "--info", dest="verbose", action="store_true",
        help="show information as I work",
    )
    parser.add_argument(
        "-v", "--version", dest="version", default=config.lookup.default_version,
        help=f"version to look up (default: {config.lookup.default_version})",
    )
    parser.add_argument("--file", dest="file", type=Path, help="convert a saved page instead of fetching")
    parser.add_argument("-o", "--output", dest="output", type=Path, help="write to a file instead of stdout")
    parser.add_argument("--config", dest="config", type=Path, default=Path("config.yaml"))
    return parser


def _preparse_config(argv: list[str]) -> Path:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", type=Path, default=Path("config.yaml"))
    known, _ = pre.parse_known_args(argv)
    return known.config


def main(argv: list[str] | None = None) -> int:
    """Run the converter.

    Args:
        argv: Command-line arguments; ``sys.argv[1:]`` when None.

    Returns:
        Process exit status: 0 on success, 1 on failure.
    """
    argv = sys.argv[1:] if argv is None else argv
    config = load_config(_preparse_config(argv))
    args = build_arg_parser(config).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Flags can only switch off what the config file leaves on
    options = config.output.model_copy(
        update={
            "copyright": config.output.copyright and args.copyright,
            "headers": config.output.headers and args.headers,
            "footnotes": config.output.footnotes and args.footnotes,
            "numbering": config.output.numbering and args.numbering,
        }
    )
    logger.debug("Options: %s", options.model_dump())

    reference = " ".join(args.reference)
    try:
        if args.file:
            page_text = load_page(args.file)
        else:
            url = build_lookup_url(reference, args.version, config.lookup.url_template)
            page_text = fetch_page(url, config.lookup)

        document = PassageConverter(config.markers, options).render(page_text)

        if args.output:
            args.output.write_text(document, encoding="utf-8")
        else:
            sys.stdout.write(document)
    except (Bg2mdError, ValueError, OSError) as exc:
        logger.error("Error: %s", exc)
        return 1
    return 0
