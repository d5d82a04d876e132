import sys
import argparse
import logging

from dotenv import load_dotenv

from contractdiff import Config, DocumentError, get_diff, load_document
from contractdiff.report import TextReport

# Load environment variables
load_dotenv()
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare two OpenAPI documents and report the differences"
    )
    parser.add_argument("base", help="Path or URL of the original document")
    parser.add_argument("revision", help="Path or URL of the revised document")
    parser.add_argument(
        "--format",
        choices=["text", "json", "yaml"],
        default="yaml",
        help="Output format",
    )
    parser.add_argument("--filter", help="Only report endpoints matching this regex")
    parser.add_argument(
        "--summary", action="store_true", help="Print a summary of the changes"
    )
    parser.add_argument("--exclude-description", action="store_true")
    parser.add_argument("--exclude-examples", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def build_config(args: argparse.Namespace) -> Config:
    overrides = {}
    if args.filter is not None:
        overrides["path_filter"] = args.filter
    if args.exclude_description:
        overrides["exclude_description"] = True
    if args.exclude_examples:
        overrides["exclude_examples"] = True
    return Config(**overrides)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT
    )

    try:
        base = load_document(args.base)
        revision = load_document(args.revision)
    except DocumentError as e:
        logger.error(str(e))
        return 1

    diff = get_diff(base, revision, build_config(args))

    if args.summary:
        sys.stdout.write(diff.get_summary().to_yaml())
    elif args.format == "text":
        TextReport(writer=sys.stdout).output(diff)
    elif args.format == "json":
        print(diff.to_json())
    else:
        sys.stdout.write(diff.to_yaml())
    return 0


if __name__ == "__main__":
    sys.exit(main())
