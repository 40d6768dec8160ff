from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from rich.console import Console, Group
from rich.markup import escape
from rich.table import Table

from comparison import MistakeSet, MistakeType
from errors import InvalidArgumentError
from metrics import compute_metrics
from stats import DEFAULT_RESULTS_FILE, StatsStore, WordFrequency, master_error_list, passage_stats


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _format_duration(duration_s: int) -> str:
    return f"{duration_s // 60}m {duration_s % 60}s"


def _mistakes_table(mistakes: MistakeSet) -> Table:
    table = Table(show_header=True, box=None, show_edge=False, pad_edge=False)
    table.add_column("Type", width=12, no_wrap=True)
    table.add_column("Word", no_wrap=True)
    table.add_column("Count", justify="right", width=6, no_wrap=True)

    for mistake_type in MistakeType:
        for word, count in mistakes.counts(mistake_type):
            table.add_row(mistake_type.value, escape(word), str(count))
    return table


def _frequency_table(frequencies: list[WordFrequency]) -> Table:
    table = Table(show_header=True, box=None, show_edge=False, pad_edge=False)
    table.add_column("Word", no_wrap=True)
    table.add_column("Type", width=12, no_wrap=True)
    table.add_column("Frequency", justify="right", width=10, no_wrap=True)

    for entry in frequencies:
        table.add_row(escape(entry.word), entry.type.value, str(entry.frequency))
    return table


def run_compare(args: argparse.Namespace, console: Console) -> int:
    reference = _read_text(args.reference)
    typed = _read_text(args.typed)
    metrics = compute_metrics(reference, typed, args.duration)
    mistakes: MistakeSet = metrics["mistakes"]

    if args.json:
        record = {
            "typedContent": typed,
            "duration": args.duration,
            "wpm": metrics["wpm"],
            "accuracy": metrics["accuracy"],
            "mistakes": mistakes.to_dict(),
        }
        if args.passage_id is not None:
            record["passageId"] = args.passage_id
        sys.stdout.write(json.dumps(record, indent=2) + "\n")
        return 0

    summary = (
        f"WPM: {metrics['wpm']}\n"
        f"Accuracy: {metrics['accuracy']}%\n"
        f"Duration: {_format_duration(args.duration)}\n"
        f"Missed: {len(mistakes.missed)}  "
        f"Wrong: {len(mistakes.wrong)}  "
        f"Misspelled: {len(mistakes.misspelled)}\n"
    )
    if mistakes.is_empty:
        console.print(Group(summary, "No mistakes. Well done!"))
    else:
        console.print(Group(summary, _mistakes_table(mistakes)))
    return 0


def run_stats(args: argparse.Namespace, console: Console) -> int:
    results = StatsStore(Path(args.results)).results()

    if args.master:
        frequencies = master_error_list(results)
        if not frequencies:
            console.print("No mistakes recorded yet")
            return 0
        console.print(Group("Master Error List", _frequency_table(frequencies)))
        return 0

    stats = passage_stats(results, passage_id=args.passage_id)
    summary = (
        f"Total Attempts: {stats.total_attempts}\n"
        f"Average WPM: {stats.average_wpm}\n"
        f"Average Accuracy: {stats.average_accuracy}%\n"
    )
    if stats.frequent_mistakes:
        console.print(Group(summary, _frequency_table(stats.frequent_mistakes)))
    else:
        console.print(Group(summary, "No mistakes recorded yet"))
    return 0


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcript-scorer",
        description="Score a typed transcript against its reference passage.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Score one attempt")
    compare.add_argument("reference", help="File holding the reference passage")
    compare.add_argument("typed", help="File holding the typed transcript, or - for stdin")
    compare.add_argument(
        "--duration", "-d", type=int, required=True, help="Time spent typing, in seconds"
    )
    compare.add_argument("--json", action="store_true", help="Print the result record as JSON")
    compare.add_argument(
        "--passage-id", type=int, default=None, help="Passage the attempt belongs to, copied into the JSON record"
    )
    compare.set_defaults(handler=run_compare)

    stats = subparsers.add_parser("stats", help="Summarise stored results")
    stats.add_argument(
        "results",
        nargs="?",
        default=str(DEFAULT_RESULTS_FILE),
        help="JSON file of stored test results",
    )
    stats.add_argument("--passage-id", type=int, default=None, help="Only count one passage")
    stats.add_argument("--master", action="store_true", help="Show every mistake across all results")
    stats.set_defaults(handler=run_stats)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = create_argument_parser().parse_args(argv)
    setup_logging(args.verbose)
    console = Console()
    error_console = Console(stderr=True)

    try:
        return args.handler(args, console)
    except InvalidArgumentError as exc:
        logger.debug("Rejected input", exc_info=True)
        error_console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 2
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read input", exc_info=True)
        error_console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
