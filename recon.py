import argparse
import os
import sys

from interpreter import debug_log, load_source, set_verbose
from recon_core.errors import ReconError
from recon_core.introspection import collect_calls, missing_functions
from recon_core.lexer import tokenize
from recon_core.parser import parse
from recon_core.projection import to_json
from recon_core.runtime import build_state, load_config
from recon_core.runtime.config import CONFIG_FILE, write_default_config


def log(message):
    """Log informational messages to stderr."""
    print(f"\033[92m\033[1mINFO:\033[0m {message}", file=sys.stderr)


def read_source(filename):
    """Read the whole document from a file, or from stdin for '-'."""
    if filename is None or filename == "-":
        return sys.stdin.read()
    if not os.path.exists(filename):
        print(f"Error: File '{filename}' not found.", file=sys.stderr)
        sys.exit(1)
    with open(filename, 'r', encoding='utf-8') as f:
        return f.read()


def setup(args):
    """Apply --verbose and --config; returns (config, state)."""
    set_verbose(args.verbose)
    try:
        config = load_config(args.config)
        state = build_state(config)
    except ReconError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    debug_log(f"Language version {config.version}")
    return config, state


def cmd_run(args):
    config, state = setup(args)
    source_code = read_source(args.filename)

    result = load_source(source_code, state)
    if result.is_err():
        print(result.error, file=sys.stderr)
        sys.exit(1)

    value = result.unwrap()
    print(repr(value))
    print(to_json(value, indent=config.indent))


def cmd_tokens(args):
    setup(args)
    source_code = read_source(args.filename)
    try:
        tokens = tokenize(source_code)
    except ReconError as e:
        print(e.render(source_code), file=sys.stderr)
        sys.exit(1)
    for token in tokens:
        print(f"{str(token.pos):>12}  {token.kind.name:<14} {token.text!r}")


def cmd_analyse(args):
    """List every call site and flag the ones the active tables cannot resolve."""
    _, state = setup(args)
    source_code = read_source(args.filename)
    try:
        tree = parse(tokenize(source_code))
    except ReconError as e:
        print(e.render(source_code), file=sys.stderr)
        sys.exit(1)

    sites = collect_calls(tree)
    missing = missing_functions(tree, state)
    log(f"🔍 {len(sites)} call site(s)")
    for site in sites:
        sigil = "@" if site["type"] == "value" else "#"
        flag = "  (unknown)" if site in missing else ""
        print(f"{sigil}{site['name']}  at {site['path'] or '<root>'}{flag}")
    if missing:
        log(f"⚠️  {len(missing)} call(s) not resolvable with the current configuration")


def cmd_init(args):
    if os.path.exists(CONFIG_FILE):
        log(f"{CONFIG_FILE} already exists, leaving it untouched.")
        return
    write_default_config(CONFIG_FILE)
    log(f"Wrote default settings to {CONFIG_FILE}.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Recon CLI")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output (sent to stderr)")
    parser.add_argument("--config", help="Config file (default: recon.json, then ~/.recon/config.json)")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Evaluate a document and print it as JSON").add_argument("filename", nargs="?", default="-", help="File to run (default: read from stdin)")
    subparsers.add_parser("tokens", help="Print the token stream").add_argument("filename", nargs="?", default="-")
    subparsers.add_parser("analyse", help="List the functions a document calls").add_argument("filename", nargs="?", default="-")
    subparsers.add_parser("init", help="Write a default recon.json")

    args = parser.parse_args(argv)

    if args.command == "run": cmd_run(args)
    elif args.command == "tokens": cmd_tokens(args)
    elif args.command == "analyse": cmd_analyse(args)
    elif args.command == "init": cmd_init(args)
    else: parser.print_help()

if __name__ == "__main__":
    main()
