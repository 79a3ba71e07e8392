#!/usr/bin/env python3
"""
SourceWrangler

Parses Java or C++ source files and emits, for each file, a JSON document describing its
declarations (namespaces, classes, functions, variables, imports) with their nesting. The
documents feed the code visualization front end.

Usage:
    python source_wrangler.py --file <input_file> [<input_file> ...] [--target <lang>] [--output <dir>] [--indent <n>] [--workers <n>] [--dump-tree] [--schema] [--verbose] [--help]

Arguments:
    --file, -f      : One or more source files to parse
    --target, -t    : Source language (java or cpp). Inferred from each file's extension
                      when omitted
    --output, -o    : Directory where <file>.json documents are written. Several files keep
                      their directories relative to the deepest common one. Without it the
                      document is printed to stdout (a JSON list when several files are given)
    --indent        : JSON indentation (default: 2)
    --workers, -w   : Number of files parsed in parallel (default: 1)
    --dump-tree     : Print the model tree, function locals included, before the document
    --schema        : Print the JSON schema of the output document and exit
    --verbose, -v   : Enable verbose output for debugging
    --help, -h      : Show this help message

Environment overrides:
    SW_TARGET, SW_INPUT_FILE (space or comma separated), SW_OUTPUT_DIR, SW_VERBOSE

Example:
    python source_wrangler.py -t cpp -f examples/helloworld.cpp
    python source_wrangler.py -f src/Main.java src/Util.java -o ./generated
"""

import argparse
import os
import sys

from asm_errors import AsmError, SourceInputError, TraversalProtocolError, UnsupportedLanguageError
from asm_serializer import serialize
from generators.json_generator import common_source_dir, generate_asm_json, output_path_for, write_asm_json_file
from generators.json_schema_generator import generate_asm_json_schema
from lark_parser import LANGUAGES, LANGUAGE_ALIASES
from model_debug import print_model_tree
from source_parser_facade import SourceParserFacade, parse_source_files

EXIT_INPUT_ERROR = 1
EXIT_CONTRACT_FAULT = 2


def parse_arguments(argv=None):
    """
    Parse command line arguments and apply environment overrides.

    Returns:
        argparse.Namespace: Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        description="Build language-agnostic declaration models from Java and C++ sources",
        formatter_class=argparse.RawTextHelpFormatter
    )
    target_choices = sorted(LANGUAGES) + sorted(LANGUAGE_ALIASES)

    parser.add_argument('--file', '-f', nargs='+', help='Source file(s) to parse')
    parser.add_argument('--target', '-t', type=str.lower, choices=target_choices,
                        help='Source language (default: inferred from the file extension)')
    parser.add_argument('--output', '-o', help='Directory where JSON documents are written (default: stdout)')
    parser.add_argument('--indent', type=int, default=2, help='JSON indentation (default: 2)')
    parser.add_argument('--workers', '-w', type=int, default=1, help='Number of files parsed in parallel')
    parser.add_argument('--dump-tree', action='store_true', help='Print the model tree before the document')
    parser.add_argument('--schema', action='store_true', help='Print the JSON schema of the output document and exit')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output for debugging')

    args = parser.parse_args(argv)

    # Override with environment variables if set
    if 'SW_INPUT_FILE' in os.environ:
        args.file = os.environ['SW_INPUT_FILE'].replace(',', ' ').split()
    if 'SW_TARGET' in os.environ:
        args.target = os.environ['SW_TARGET'].strip().lower()
        if args.target not in target_choices:
            parser.error(f"SW_TARGET: invalid choice: '{args.target}' (choose from {', '.join(target_choices)})")
    args.output = os.environ.get('SW_OUTPUT_DIR', args.output)
    if os.environ.get('SW_VERBOSE', '').strip().lower() in ('1', 'true', 'yes', 'on'):
        args.verbose = True

    if not args.file and not args.schema:
        parser.error("the following arguments are required: --file/-f")
    return args


def run_single(args) -> int:
    path = args.file[0]
    facade = SourceParserFacade(args.target, args.verbose)
    try:
        arena = facade.build_model(facade.read_source(path), path)
    except (SourceInputError, UnsupportedLanguageError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except TraversalProtocolError as e:
        print(f"Fatal: {path}: {e}", file=sys.stderr)
        return EXIT_CONTRACT_FAULT

    if args.dump_tree:
        print_model_tree(arena)
    document = serialize(arena)
    if args.output:
        out_path = output_path_for(path, args.output)
        write_asm_json_file(document, out_path, indent=args.indent)
        print(f"Wrote {out_path}")
    else:
        print(generate_asm_json(document, indent=args.indent))
    return 0


def run_batch(args) -> int:
    report = parse_source_files(args.file, language=args.target, max_workers=args.workers, verbose=args.verbose)

    documents = [report.documents[p] for p in report.paths if p in report.documents]
    if args.output:
        # same-named files from different directories keep their relative directories
        base_dir = common_source_dir(args.file)
        for path, document in report.documents.items():
            write_asm_json_file(document, output_path_for(path, args.output, base_dir), indent=args.indent)
    else:
        print(generate_asm_json(documents, indent=args.indent))

    for path, error in report.skipped.items():
        if isinstance(report.errors.get(path), TraversalProtocolError):
            print(f"Fatal: {path}: {error}", file=sys.stderr)
        else:
            print(f"Error: {error}", file=sys.stderr)
    print(f"Parsed {report.parsed_count} of {report.file_count} file(s), skipped {report.skipped_count}.",
          file=sys.stderr)
    if report.has_contract_fault:
        return EXIT_CONTRACT_FAULT
    return EXIT_INPUT_ERROR if report.skipped_count else 0


def main(argv=None) -> int:
    """
    Main entry point of the script.
    """
    args = parse_arguments(argv)
    if args.schema:
        print(generate_asm_json(generate_asm_json_schema(), indent=args.indent))
        return 0
    try:
        if len(args.file) == 1:
            return run_single(args)
        return run_batch(args)
    except AsmError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR


if __name__ == '__main__':
    sys.exit(main())
