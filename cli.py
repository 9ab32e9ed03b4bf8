# Parity v1.0.0
#!/usr/bin/env python3
"""
Parity CLI

Command-line interface for splitting and comparing hardening scan logs.
"""
import argparse
import json
import logging
import sys

from config import settings


def _load_log(file_path: str):
    """Load one log for a command, printing why it failed. Returns ParsedLog or None."""
    from pathlib import Path
    from services.loader import decode_content, load_log_content

    path = Path(file_path)
    if not path.is_file():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return None

    try:
        raw = path.read_bytes()
    except OSError as e:
        print(f"Error: Could not read {file_path}: {e}", file=sys.stderr)
        return None

    if decode_content(raw) is None:
        print(f"Error: {file_path} is not valid UTF-8", file=sys.stderr)
        return None

    parsed = load_log_content(raw, path.name)
    if parsed is None:
        print(f"Error: No sections recognized in {file_path}", file=sys.stderr)
    return parsed


def show_sections(file_path: str, as_json: bool = False) -> int:
    """Print the sections recognized in one log."""
    parsed = _load_log(file_path)
    if parsed is None:
        return 1

    if as_json:
        print(json.dumps(parsed.to_dict(), ensure_ascii=False, indent=2))
        return 0

    print(f"\n{parsed.name}: {parsed.section_count} section(s) [{parsed.grammar.value}]")
    print("-" * 60)

    for section in parsed.sections:
        line_count = len(section.body.splitlines())
        print(f"  {section.ordinal:>3}. {section.title}")
        if section.side_metadata:
            print(f"       Command: {section.side_metadata}")
        print(f"       {line_count} line(s)")

    return 0


def compare_files(before_path: str, after_path: str, as_json: bool = False, changes_only: bool = False) -> int:
    """Compare two logs section by section and print the differences."""
    from core import compare_logs
    from services.report import generate_comparison_report

    before = _load_log(before_path)
    if before is None:
        return 1

    after = _load_log(after_path)
    if after is None:
        return 1

    result = compare_logs(before, after)

    if as_json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(generate_comparison_report(result, changes_only=changes_only))

    return 0


def diff_files(before_path: str, after_path: str) -> int:
    """Line diff of two whole files, ignoring section structure."""
    from pathlib import Path
    from core import diff_documents
    from services.loader import decode_content, extract_text_from_html, is_html_filename
    from services.report import generate_document_diff_report

    texts = []
    for path in (before_path, after_path):
        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            print(f"Error: Could not read {path}: {e}", file=sys.stderr)
            return 1
        text = decode_content(raw)
        if text is None:
            print(f"Error: {path} is not valid UTF-8", file=sys.stderr)
            return 1
        if is_html_filename(path):
            text = extract_text_from_html(text)
        texts.append(text)

    diff = diff_documents(texts[0], texts[1])

    if diff.is_identical:
        print("✅ Files are identical")
        return 0

    print(generate_document_diff_report(diff, before_path, after_path))
    return 0


def show_results(file_path: str, search: str = "", diff_only: bool = False, as_json: bool = False) -> int:
    """Summarize a hardening result report."""
    from pathlib import Path
    from core import parse_result_content
    from services.loader import decode_content
    from services.report import generate_result_report

    try:
        content = decode_content(Path(file_path).read_bytes())
    except OSError as e:
        print(f"Error: Could not read {file_path}: {e}", file=sys.stderr)
        return 1

    report = parse_result_content(content) if content is not None else None
    if report is None:
        print(f"Error: Could not parse {file_path}", file=sys.stderr)
        return 1

    items = report.filter(search, diff_only)

    if as_json:
        print(json.dumps(report.to_dict(items), ensure_ascii=False, indent=2, default=str))
    else:
        print(generate_result_report(report, items))

    return 0


def run_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False, workers: int = 1) -> int:
    """Run the FastAPI server."""
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers if not reload else 1  # reload mode requires single worker
    )
    return 0


def watch_directory(path: str) -> int:
    """Watch a directory for new scan logs."""
    from services.watcher import DirectoryWatcher
    from core import ParsedLog
    import time

    def on_log(parsed: ParsedLog):
        print(f"📁 Detected: {parsed.name}")
        print(f"   Grammar:  {parsed.grammar.value}")
        print(f"   Sections: {parsed.section_count}")
        print()

    print(f"Watching directory: {path}")
    print("Press Ctrl+C to stop\n")

    watcher = DirectoryWatcher(path, on_log, recursive=settings.WATCH_RECURSIVE)
    try:
        watcher.start()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nStopping watcher...")
        watcher.stop()

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parity",
        description="Parity - hardening scan log comparison",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable info logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # sections
    sections_parser = subparsers.add_parser("sections", help="List the sections of a log")
    sections_parser.add_argument("file", help="Log file (.txt, .log, .html)")
    sections_parser.add_argument("--json", action="store_true", help="Print JSON")

    # compare
    compare_parser = subparsers.add_parser("compare", help="Compare two logs section by section")
    compare_parser.add_argument("before", help="Before/baseline log")
    compare_parser.add_argument("after", help="After/target log")
    compare_parser.add_argument("--json", action="store_true", help="Print JSON")
    compare_parser.add_argument("--changes-only", action="store_true", help="Hide unchanged sections")

    # diff
    diff_parser = subparsers.add_parser("diff", help="Line diff of two whole files")
    diff_parser.add_argument("before", help="Before file")
    diff_parser.add_argument("after", help="After file")

    # results
    results_parser = subparsers.add_parser("results", help="Summarize a hardening result JSON")
    results_parser.add_argument("file", help="Result report JSON")
    results_parser.add_argument("--search", default="", help="Filter by id or description")
    results_parser.add_argument("--diff-only", action="store_true", help="Only items whose value changed")
    results_parser.add_argument("--json", action="store_true", help="Print JSON")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.add_argument("--workers", type=int, default=1, help="Number of worker processes")

    # watch
    watch_parser = subparsers.add_parser("watch", help="Watch a directory for logs")
    watch_parser.add_argument("path", help="Directory to watch")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "sections":
        return show_sections(args.file, args.json)
    elif args.command == "compare":
        return compare_files(args.before, args.after, args.json, args.changes_only)
    elif args.command == "diff":
        return diff_files(args.before, args.after)
    elif args.command == "results":
        return show_results(args.file, args.search, args.diff_only, args.json)
    elif args.command == "serve":
        return run_server(args.host, args.port, args.reload, args.workers)
    elif args.command == "watch":
        return watch_directory(args.path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
