import argparse
import logging
import sys

from . import __version__ as saslprepareVersion
from .core.codec import decode, encode, toUnsigned32
from .core.errors import SASLPrepareError
from .core.prepare import prepare
from .core.reorder import isCanonicallyOrdered
from .core.table import getDecompositionTable

logger = logging.getLogger("saslprepare")

if hasattr(logging, "getLevelNamesMapping"):
    levelNamesMapping = logging.getLevelNamesMapping()
else:
    # Python < 3.11
    levelNamesMapping = {
        "CRITICAL": 50,
        "FATAL": 50,
        "ERROR": 40,
        "WARN": 30,
        "WARNING": 30,
        "INFO": 20,
        "DEBUG": 10,
        "NOTSET": 0,
    }

sortedLevelNames = [
    name for name, value in sorted(levelNamesMapping.items(), key=lambda item: item[1])
]


def codeArgument(value):
    try:
        code = int(value, 0) if value[:2].lower() == "0x" else int(value, 16)
        return toUnsigned32(code)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid code point: {value!r}")


def formatCodes(codes):
    return " ".join(f"0x{code:X}" for code in codes)


def readInputs(args):
    if args.text:
        return [text.encode("utf-8", "surrogateescape") for text in args.text]
    return [sys.stdin.buffer.read().rstrip(b"\r\n")]


def prepareCommand(args):
    table = getDecompositionTable()
    for data in readInputs(args):
        codes = prepare(decode(data, args.encoding), table)
        if args.check and not isCanonicallyOrdered(codes, table):
            raise SASLPrepareError(
                f"result is not canonically ordered: {formatCodes(codes)}"
            )
        if args.codes:
            print(formatCodes(codes))
        else:
            print(encode(codes).decode("utf-8"))


def decodeCommand(args):
    for data in readInputs(args):
        print(formatCodes(decode(data, args.encoding)))


def encodeCommand(args):
    sys.stdout.flush()
    sys.stdout.buffer.write(encode(args.code) + b"\n")


def lookupCommand(args):
    table = getDecompositionTable()
    for code in args.code:
        entry = table.find(code)
        if entry is None:
            print(f"0x{code:X}\tno mapping found")
        else:
            print(formatEntry(entry))


def tableCommand(args):
    for entry in getDecompositionTable():
        if args.decomposable_only and entry.isTerminal and entry.isStarter:
            continue
        print(formatEntry(entry))


def formatEntry(entry):
    return "\t".join(
        [
            f"0x{entry.codePoint:X}",
            str(entry.combiningClass),
            formatCodes(entry.decomposition) if entry.decomposition else "-",
        ]
    )


def addTextArguments(parser):
    parser.add_argument(
        "text",
        nargs="*",
        help="Text to process. Reads standard input when no text is given.",
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="The declared encoding of the input. Only UTF-8 is supported.",
    )


def main(arguments=None) -> int:
    parser = argparse.ArgumentParser(
        prog="saslprepare",
        description="Decompose and canonically order text for SASL authentication",
    )
    parser.add_argument(
        "--logging-level",
        choices=sortedLevelNames,
        default="WARNING",
        help="The logging level for stderr output",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=saslprepareVersion,
        help="Show the version number and exit",
    )
    subParsers = parser.add_subparsers(required=True)

    subParser = subParsers.add_parser("prepare", help="Prepare text")
    addTextArguments(subParser)
    subParser.add_argument(
        "--codes",
        action="store_true",
        help="Print packed code points instead of text",
    )
    subParser.add_argument(
        "--check",
        action="store_true",
        help="Verify the result is in canonical order",
    )
    subParser.set_defaults(command=prepareCommand)

    subParser = subParsers.add_parser("decode", help="Show packed code points")
    addTextArguments(subParser)
    subParser.set_defaults(command=decodeCommand)

    subParser = subParsers.add_parser(
        "encode", help="Turn packed code points into text"
    )
    subParser.add_argument("code", nargs="+", type=codeArgument)
    subParser.set_defaults(command=encodeCommand)

    subParser = subParsers.add_parser("lookup", help="Show table entries")
    subParser.add_argument("code", nargs="+", type=codeArgument)
    subParser.set_defaults(command=lookupCommand)

    subParser = subParsers.add_parser("table", help="Dump the decomposition table")
    subParser.add_argument(
        "--decomposable-only",
        action="store_true",
        help="Only list entries that decompose or have a non-zero combining class",
    )
    subParser.set_defaults(command=tableCommand)

    args = parser.parse_args(arguments)

    logging.basicConfig(
        format="%(asctime)s %(name)-17s %(levelname)-8s %(message)s",
        level=levelNamesMapping[args.logging_level],
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        args.command(args)
    except SASLPrepareError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
