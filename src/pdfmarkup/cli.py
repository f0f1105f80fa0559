"""CLI entry point for pdfmarkup."""

from __future__ import annotations

import argparse
import base64
from pathlib import Path

from pdfmarkup import __version__, logger
from pdfmarkup.async_runner import run_async
from pdfmarkup.dependencies import ensure_document_dependencies
from pdfmarkup.exceptions import FileTooLargeError, PackageError
from pdfmarkup.logging import configure_logging
from pdfmarkup.settings import Settings, get_settings
from pdfmarkup.typing.models import ClientRect, OutputArtifact


def _rect_from_cli(value: str) -> ClientRect:
    """Parse a `--rect TOP,LEFT,WIDTH,HEIGHT` value.

    Args:
        value (str): Comma-separated display-space coordinates.

    Raises:
        argparse.ArgumentTypeError: If the value is malformed.

    Returns:
        ClientRect: Page-relative display rectangle.
    """
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 4:  # noqa: PLR2004
        raise argparse.ArgumentTypeError("--rect expects TOP,LEFT,WIDTH,HEIGHT")  # noqa: TRY003
    try:
        top, left, width, height = (float(part) for part in parts)
        return ClientRect(top=top, left=left, width=width, height=height)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid --rect value '{value}': {exc}") from exc


def parse_page_spec(value: str) -> list[int]:
    """Parse 1-based page numbers and ranges into zero-based indices.

    `"3,1-2"` gives `[2, 0, 1]`; order and repetitions are kept.

    Args:
        value (str): Comma-separated page numbers or `START-END` ranges.

    Raises:
        argparse.ArgumentTypeError: If the value is malformed.

    Returns:
        list[int]: Zero-based page indices.
    """
    indices: list[int] = []
    for chunk in (part.strip() for part in value.split(",")):
        if not chunk:
            continue
        start_text, sep, end_text = chunk.partition("-")
        try:
            start = int(start_text)
            end = int(end_text) if sep else start
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"Invalid page spec '{chunk}'") from exc
        if start < 1 or end < start:
            raise argparse.ArgumentTypeError(f"Invalid page spec '{chunk}'")
        indices.extend(range(start - 1, end))
    if not indices:
        raise argparse.ArgumentTypeError("--pages must name at least one page")  # noqa: TRY003
    return indices


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="pdfmarkup")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    info_parser = subparsers.add_parser("info", help="Show page count and page sizes")
    info_parser.add_argument("--input", required=True, type=Path, dest="input_path")

    highlight_parser = subparsers.add_parser("highlight", help="Bake highlights into a PDF")
    highlight_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    highlight_parser.add_argument("--output", type=Path, default=None, dest="output_path")
    highlight_parser.add_argument("--page", required=True, type=int, help="1-based page number")
    highlight_parser.add_argument(
        "--search",
        action="append",
        default=[],
        dest="searches",
        help="Highlight every occurrence of a text (repeatable)",
    )
    highlight_parser.add_argument(
        "--rect",
        action="append",
        default=[],
        type=_rect_from_cli,
        dest="rects",
        help="Display-space rectangle TOP,LEFT,WIDTH,HEIGHT (repeatable)",
    )

    extract_parser = subparsers.add_parser("extract", help="Copy selected pages into a new PDF")
    extract_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    extract_parser.add_argument("--output", type=Path, default=None, dest="output_path")
    extract_parser.add_argument("--pages", required=True, type=parse_page_spec, help="1-based, e.g. 1,3-5")
    extract_parser.add_argument(
        "--keep-order",
        action="store_true",
        dest="keep_order",
        help="Keep the given order and repetitions instead of ascending unique pages",
    )

    render_parser = subparsers.add_parser("render", help="Render a page to an image")
    render_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    render_parser.add_argument("--output", required=True, type=Path, dest="output_path")
    render_parser.add_argument("--page", required=True, type=int, help="1-based page number")

    return parser


def _read_input(path: Path, settings: Settings) -> bytes:
    """Read an input document, enforcing the configured size limit.

    Args:
        path (Path): Input document.
        settings (Settings): Runtime settings.

    Raises:
        FileTooLargeError: If the file exceeds `MAX_FILE_SIZE`.

    Returns:
        bytes: File content.
    """
    size = path.stat().st_size
    if size > settings.max_file_size:
        raise FileTooLargeError(path=str(path), size=size, limit=settings.max_file_size)
    return path.read_bytes()


def _persist_artifact(artifact: OutputArtifact, output_path: Path | None, settings: Settings) -> Path:
    """Write a produced document to disk.

    Args:
        artifact (OutputArtifact): Produced document.
        output_path (Path | None): Explicit destination.
        settings (Settings): Runtime settings, for the default output directory.

    Returns:
        Path: Written file.
    """
    target = output_path or Path(settings.output_dir) / artifact.filename
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(artifact.data)
    return target


def _run_info(args: argparse.Namespace, settings: Settings) -> int:
    from pdfmarkup.backends.pymupdf_codec import PyMuPDFCodec  # noqa: PLC0415

    codec = PyMuPDFCodec()
    document = codec.load(_read_input(args.input_path, settings))
    try:
        print(f"{args.input_path.name}: {document.page_count} pages")  # noqa: T201
        for index in range(document.page_count):
            size = document.get_page(index).get_size()
            print(f"  page {index + 1}: {size.width:g} x {size.height:g}")  # noqa: T201
    finally:
        document.close()
    return 0


def _run_highlight(args: argparse.Namespace, settings: Settings) -> int:
    from pdfmarkup.pdf_render import PageRenderer  # noqa: PLC0415
    from pdfmarkup.session import DocumentSession  # noqa: PLC0415

    renderer = PageRenderer.from_settings(settings)
    session = DocumentSession(renderer=renderer)
    data = _read_input(args.input_path, settings)
    session.load(data, args.input_path.name)

    page_index = args.page - 1
    container = renderer.page_container(data, page_index)
    for needle in args.searches:
        highlight = session.capture(renderer.find_text(data, page_index, needle), container, page_index, text=needle)
        if highlight is None:
            logger.warning("Text not found", extra={"search": needle, "page": args.page})
    for rect in args.rects:
        session.capture([rect], container, page_index)

    if session.annotations.count() == 0:
        logger.warning("Nothing to highlight", extra={"input_path": str(args.input_path)})
        return 1

    artifact = run_async(session.commit())
    target = _persist_artifact(artifact, args.output_path, settings)
    logger.info(
        "Highlighted document written",
        extra={"output_path": str(target), "highlights": session.annotations.count()},
    )
    return 0


def _run_extract(args: argparse.Namespace, settings: Settings) -> int:
    from pdfmarkup.session import DocumentSession  # noqa: PLC0415

    session = DocumentSession()
    session.load(_read_input(args.input_path, settings), args.input_path.name)

    if args.keep_order:
        artifact = run_async(session.extract(args.pages))
    else:
        for index in args.pages:
            if index not in session.selection:
                session.toggle_page(index)
        artifact = run_async(session.extract())

    target = _persist_artifact(artifact, args.output_path, settings)
    logger.info("Extracted document written", extra={"output_path": str(target), "pages": artifact.page_count})
    return 0


def _run_render(args: argparse.Namespace, settings: Settings) -> int:
    from pdfmarkup.pdf_render import PageRenderer  # noqa: PLC0415

    renderer = PageRenderer.from_settings(settings)
    rendered = renderer.render_page(_read_input(args.input_path, settings), args.page - 1)
    args.output_path.parent.mkdir(parents=True, exist_ok=True)
    args.output_path.write_bytes(base64.b64decode(rendered.data_base64))
    logger.info("Rendered page written", extra={"output_path": str(args.output_path)})
    return 0


_COMMANDS = {
    "info": _run_info,
    "highlight": _run_highlight,
    "extract": _run_extract,
    "render": _run_render,
}


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        int: Exit code (0 for success, 1 for error).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    command = _COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        ensure_document_dependencies(args.command)
        return command(args, settings)
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130
    except Exception:
        logger.exception("Unexpected error", extra={"command": args.command})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
