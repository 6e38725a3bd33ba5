#!/usr/bin/env python3
"""
java-lens
---------
Reads Java sources and reports:
- package, class, field and method summaries
- callers/callees of the method at a given line
- SystemService lifecycle hooks and published binder services
- the ZygoteInit / SystemServer boot timeline
- risky calls inside synchronized blocks

USAGE EXAMPLES
--------------
# 1) Summarize an in-code sample (no files needed):
java-lens summary

# 2) Summarize one file, as JSON:
java-lens --json summary path/to/Foo.java

# 3) Call graph of the method at line 42:
java-lens graph path/to/Foo.java 42

# 4) Scan a source tree for SystemService classes / the boot timeline:
java-lens services /path/to/aosp/frameworks/base
java-lens lifecycle /path/to/aosp/frameworks/base

# 5) Lock hazards in one file:
java-lens locks path/to/Foo.java

DEPENDENCIES
------------
    pip install tree-sitter tree-sitter-java
"""

import argparse
import logging
import sys
from pathlib import Path

from java_lens.cache import AnalysisCache
from java_lens.call_graph import build_method_call_graph
from java_lens.concurrency import analyze_concurrency_warnings
from java_lens.config import Settings
from java_lens.errors import ConfigError, JavaLensError
from java_lens.inputs.directory_scanning import build_lifecycle_timelines, read_text, scan_system_services
from java_lens.line_index import build_line_index
from java_lens.models.host import SourceDocument
from java_lens.outputs.output import (
    print_call_graph,
    print_summary,
    print_system_service,
    print_timeline,
    print_warnings,
    to_json,
)

logger = logging.getLogger(__name__)
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# --- Demo sample -------------------------------------------------------------

SAMPLE_JAVA = r"""
package com.android.server.demo;

import android.content.Context;

public class DemoManagerService extends SystemService {
    private static final String TAG = "DemoManagerService";
    private final Object mLock = new Object();
    int mState, mPending;

    public DemoManagerService(Context context) {
        super(context);
    }

    @Override
    public void onStart() {
        publishBinderService("demo", new BinderService());
        refresh(0);
    }

    @Override
    public void onBootPhase(int phase) {
        synchronized (mLock) {
            mHandler.post(() -> refresh(phase));
        }
    }

    private void refresh(int reason) {
        mState = reason;
    }

    final class BinderService extends IDemoManager.Stub {
    }
}
"""


def _analyze_file(cache: AnalysisCache, path: str):
    if path == "-":
        document = SourceDocument(uri="sample://DemoManagerService.java", text=SAMPLE_JAVA,
                                  file_name="DemoManagerService.java")
    else:
        document = SourceDocument.from_path(Path(path))
    analysis = cache.get_analysis(document)
    if analysis is None:
        raise JavaLensError(f"could not analyze {path}")
    return document, analysis


def cmd_summary(args, cache: AnalysisCache) -> int:
    _, analysis = _analyze_file(cache, args.file)
    if args.json:
        print(to_json(analysis))
    else:
        print_summary(analysis)
    return 0


def cmd_graph(args, cache: AnalysisCache) -> int:
    document, analysis = _analyze_file(cache, args.file)
    line_starts = build_line_index(document.text)
    if not 1 <= args.line <= len(line_starts):
        raise JavaLensError(f"line {args.line} is outside {args.file}")
    offset = line_starts[args.line - 1] + args.column
    graph = build_method_call_graph(analysis, offset, document.file_name)
    if graph is None:
        print(f"No method at line {args.line}", file=sys.stderr)
        return 1
    if args.json:
        print(to_json(graph))
    else:
        print_call_graph(graph)
    return 0


def cmd_locks(args, cache: AnalysisCache) -> int:
    text = SAMPLE_JAVA if args.file == "-" else read_text(Path(args.file))
    warnings = analyze_concurrency_warnings(text)
    if args.json:
        print(to_json(warnings))
    else:
        print_warnings(warnings)
    return 0


def cmd_services(args, cache: AnalysisCache) -> int:
    summaries = scan_system_services(Path(args.root), cache, excluded_dirs=args.settings.excluded_dirs)
    if args.json:
        print(to_json(summaries))
    elif not summaries:
        print("No SystemService classes found")
    else:
        for summary in summaries:
            print_system_service(summary)
    return 0


def cmd_lifecycle(args, cache: AnalysisCache) -> int:
    settings = args.settings
    timelines = build_lifecycle_timelines(Path(args.root), cache, targets=settings.lifecycle_targets,
                                          excluded_dirs=settings.excluded_dirs)
    if args.json:
        print(to_json(timelines))
    else:
        for timeline in timelines:
            print_timeline(timeline)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="java-lens", description="Structural and lifecycle facts from Java sources.")
    parser.add_argument("--json", action="store_true", help="print JSON instead of text")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("summary", help="class/field/method summary of one file")
    p.add_argument("file", nargs="?", default="-", help="Java file ('-' or omitted: built-in sample)")
    p.set_defaults(func=cmd_summary)

    p = sub.add_parser("graph", help="callers and callees of the method at a line")
    p.add_argument("file")
    p.add_argument("line", type=int, help="1-based line")
    p.add_argument("column", type=int, nargs="?", default=0, help="0-based column")
    p.set_defaults(func=cmd_graph)

    p = sub.add_parser("locks", help="hazards inside synchronized blocks")
    p.add_argument("file", nargs="?", default="-")
    p.set_defaults(func=cmd_locks)

    p = sub.add_parser("services", help="SystemService classes under a directory")
    p.add_argument("root")
    p.set_defaults(func=cmd_services)

    p = sub.add_parser("lifecycle", help="ZygoteInit/SystemServer boot timeline under a directory")
    p.add_argument("root")
    p.set_defaults(func=cmd_lifecycle)
    return parser


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error("%s", e)
        return 1
    args.settings = settings
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level, format=LOG_FORMAT)

    cache = AnalysisCache(max_parse_bytes=settings.max_parse_bytes)
    try:
        return args.func(args, cache)
    except (JavaLensError, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
