import argparse
import json
import logging
from datetime import datetime

import dimparser


def _reference_time(value):
    try:
        reference = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise argparse.ArgumentTypeError("invalid ISO 8601 datetime: %r" % value)
    if reference.tzinfo is None:
        raise argparse.ArgumentTypeError("reference time needs a UTC offset: %r" % value)
    return reference


def build_parser():
    dimparser_argparse = argparse.ArgumentParser(
        description="Extract times, numbers, measures and contact details from text."
    )
    dimparser_argparse.add_argument("text", help="Text to parse")
    dimparser_argparse.add_argument(
        "--dims",
        nargs="*",
        help='Dimensions to report, e.g. "time number" (default: all)',
    )
    dimparser_argparse.add_argument("--locale", default=None, help='Locale, e.g. "en_US" or "en_GB"')
    dimparser_argparse.add_argument(
        "--reference-time",
        type=_reference_time,
        help='"Now" for relative expressions, e.g. 2013-02-12T04:30:00Z',
    )
    dimparser_argparse.add_argument(
        "--timezone",
        help='Wall-clock zone for naive times, e.g. "Europe/Paris", "+02:00" or "local"',
    )
    dimparser_argparse.add_argument(
        "--with-latent",
        help="Also report latent readings such as bare numbers as times",
        action="store_true",
    )
    return dimparser_argparse


def entrance(argv=None):
    dimparser_argparse = build_parser()
    args = dimparser_argparse.parse_args(argv)

    settings = {"WITH_LATENT": args.with_latent}
    if args.reference_time is not None:
        settings["RELATIVE_BASE"] = args.reference_time
    if args.timezone:
        settings["TIMEZONE"] = args.timezone

    try:
        entities = dimparser.parse(args.text, locale=args.locale, dims=args.dims, settings=settings)
    except ValueError as e:
        dimparser_argparse.error(str(e))

    logging.info("dimparser: %d entities found", len(entities))
    for entity in entities:
        print(json.dumps(entity.to_dict(), ensure_ascii=False))
    return 0
