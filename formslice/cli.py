import argparse
import json
import os
import sys
from typing import List, Optional

from pydantic import ValidationError

from formslice.config import ParserConfig
from formslice.exceptions import BodyTooLargeException, MultipartException
from formslice.logger import Logger
from formslice.parser import MultipartParser
from formslice.records import FileRecords

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def read_body_file(path: str, max_body_size: Optional[int] = None) -> bytes:
    """
    Read a raw request body from a file, or from stdin when path is '-'.

    Raises:
        BodyTooLargeException: If the body is larger than max_body_size
    """
    if path == "-":
        stream = sys.stdin.buffer
        body = stream.read() if max_body_size is None else stream.read(max_body_size + 1)
    else:
        with open(path, "rb") as f:
            body = f.read() if max_body_size is None else f.read(max_body_size + 1)

    if max_body_size is not None and len(body) > max_body_size:
        raise BodyTooLargeException(
            f"Request body exceeds the limit of {max_body_size} bytes."
        )
    return body


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--max-body-size',
        type=int,
        default=None,
        help='Reject bodies larger than this many bytes.'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        help='Logging level (DEBUG, INFO, WARNING, ...). Defaults to WARNING for inspect/extract.'
    )
    parser.add_argument(
        '--json-logs',
        action='store_true',
        default=None,
        help='Emit structured JSON log lines instead of text.'
    )


def _add_body_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        'body',
        type=str,
        help="Path to a file holding the raw request body, or '-' for stdin."
    )
    parser.add_argument(
        '--content-type',
        type=str,
        required=True,
        help="The request's Content-Type header, including the boundary parameter."
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formslice",
        description="Split multipart/form-data request bodies into their sections.",
        epilog="Example: formslice inspect body.bin --content-type 'multipart/form-data; boundary=XYZ'"
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    # --- Command 'inspect' ---
    inspect_parser = subparsers.add_parser(
        'inspect',
        help='List the sections of a multipart body.',
    )
    _add_body_arguments(inspect_parser)
    inspect_parser.add_argument(
        '--json',
        action='store_true',
        help='Print a JSON document instead of one line per section.'
    )
    _add_common_arguments(inspect_parser)

    # --- Command 'extract' ---
    extract_parser = subparsers.add_parser(
        'extract',
        help='Save every uploaded file of a multipart body into a directory.',
    )
    _add_body_arguments(extract_parser)
    extract_parser.add_argument(
        '--out',
        type=str,
        required=True,
        help='Directory the files are written to (created if missing).'
    )
    _add_common_arguments(extract_parser)

    # --- Command 'serve' ---
    serve_parser = subparsers.add_parser(
        'serve',
        help='Run an HTTP endpoint that answers POSTed multipart bodies with a JSON summary.',
    )
    serve_parser.add_argument(
        '--host',
        type=str,
        default='127.0.0.1',
        help='The interface to bind to.'
    )
    serve_parser.add_argument(
        '--port',
        type=int,
        default=8000,
        help='The port to listen on.'
    )
    _add_common_arguments(serve_parser)

    return parser


def _format_record_line(index: int, record) -> str:
    filename = record.filename if record.filename is not None else "-"
    field_name = record.field_name if record.field_name is not None else "-"
    return f"{index}\t{field_name}\t{filename}\t{record.content_type}\t{record.size}"


def run_inspect(records: FileRecords, as_json: bool) -> None:
    if as_json:
        print(json.dumps({"count": len(records), "records": records.describe()}, indent=2))
        return

    for index, record in enumerate(records):
        print(_format_record_line(index, record))


def run_extract(records: FileRecords, out_dir: str) -> List[str]:
    """
    Save the records that carry a non-empty filename into out_dir.

    Returns:
        Paths written, in record order
    """
    os.makedirs(out_dir, exist_ok=True)
    written = []
    for record in records.files:
        if not record.filename:
            continue
        path = os.path.join(out_dir, record.filename)
        record.save(path)
        written.append(path)
        print(path)
    return written


def run_serve(config: ParserConfig, host: str, port: int) -> int:
    try:
        import uvicorn
    except ImportError:
        print("FATAL ERROR: 'uvicorn' library is not installed", file=sys.stderr)
        print("Please install it using: pip install 'formslice[server]'", file=sys.stderr)
        return EXIT_FAILURE

    from formslice.asgi import UploadInspectorApp

    print(f"formslice: serving on http://{host}:{port}")
    uvicorn.run(
        UploadInspectorApp(config),
        host=host,
        port=port,
        log_level=config.log_level.lower(),
        log_config=None,
    )
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the formslice command line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    command: str = args.command
    log_level = args.log_level
    if log_level is None:
        log_level = "INFO" if command == "serve" else "WARNING"

    try:
        config = ParserConfig.from_mapping(
            {
                "max_body_size": args.max_body_size,
                "log_level": log_level,
                "json_logs": args.json_logs,
            }
        )
    except ValidationError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    logger = Logger.from_config(config, colored_console=sys.stderr.isatty())

    if command == "serve":
        return run_serve(config, args.host, args.port)

    try:
        body = read_body_file(args.body, config.max_body_size)
        records = MultipartParser(logger).parse(body, args.content_type)
    except MultipartException as e:
        print(f"error: {e.kind.value}: {e.message}", file=sys.stderr)
        return EXIT_USAGE
    except OSError as e:
        print(f"error: cannot read body: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if command == "inspect":
        run_inspect(records, args.json)
    elif command == "extract":
        try:
            run_extract(records, args.out)
        except OSError as e:
            print(f"error: cannot write files: {e}", file=sys.stderr)
            return EXIT_FAILURE

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
