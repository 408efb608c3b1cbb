import argparse
import logging
import sys

import png_commands
from png_errors import PngError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="pngchunk", description="Hide, find and remove messages in PNG chunks"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log what the tool is doing"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="fail on the first malformed chunk instead of ignoring the rest",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode = subparsers.add_parser("encode", help="add a message chunk")
    encode.add_argument("file_path", help="PNG file to read")
    encode.add_argument("chunk_type", help="4-letter chunk type, e.g. ruSt")
    encode.add_argument("message", help="text to store")
    encode.add_argument("output", nargs="?", help="where to save (default: file_path)")

    decode = subparsers.add_parser("decode", help="print a message chunk")
    decode.add_argument("file_path")
    decode.add_argument("chunk_type")

    remove = subparsers.add_parser("remove", help="remove a chunk")
    remove.add_argument("file_path")
    remove.add_argument("chunk_type")

    print_ = subparsers.add_parser("print", help="list all chunks")
    print_.add_argument("file_path")

    return parser.parse_args(argv)


def run(args):
    if args.command == "encode":
        path = png_commands.encode(
            args.file_path, args.chunk_type, args.message, args.output, args.strict
        )
        print(f"Message saved in chunk {args.chunk_type} of {path}")
    elif args.command == "decode":
        message = png_commands.decode(args.file_path, args.chunk_type, args.strict)
        if message is None:
            print(f"There is no message for chunk {args.chunk_type}")
        else:
            print(f"The message in chunk {args.chunk_type} is [{message}]")
    elif args.command == "remove":
        removed = png_commands.remove(args.file_path, args.chunk_type, args.strict)
        print(f"Removed chunk {removed.chunk_type} ({removed.length} bytes)")
    elif args.command == "print":
        for line in png_commands.print_chunks(args.file_path, args.strict):
            print(line)


def main(argv=None):
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    try:
        run(args)
    except PngError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Cannot access file: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
