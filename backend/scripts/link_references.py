import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from backend.biblehub_linker.utils.document import LinkedDocument, link_document
from backend.biblehub_linker.utils.markdown import render_markdown_document

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )


def read_input(path: Optional[Path]) -> str:
    if path is None:
        return sys.stdin.read()
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    return path.read_text(encoding="utf-8")


def write_output(path: Optional[Path], content: str) -> None:
    if path is None:
        sys.stdout.write(content)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def link_content(content: str, markdown: bool) -> LinkedDocument:
    if markdown:
        return render_markdown_document(content)
    return link_document(content)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Link Bible references in HTML or markdown to biblehub.com")
    parser.add_argument("input", nargs="?", type=Path, help="File to read (defaults to stdin)")
    parser.add_argument("-o", "--output", type=Path, help="File to write (defaults to stdout)")
    parser.add_argument("--markdown", action="store_true", help="Treat the input as markdown and render it to HTML")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.verbose)

    content = read_input(args.input)
    result = link_content(content, args.markdown)
    write_output(args.output, result.content)

    if result.changed:
        logger.info("Linked %s reference(s)", len(result.links))
    else:
        logger.info("No Bible references found")


if __name__ == "__main__":
    main()
