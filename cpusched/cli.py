from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import IntPrompt
from rich.table import Table

from .algorithms import ALGORITHM_ORDER, ALGORITHMS, DEFAULT_QUANTUM, run_algorithm, run_all
from .errors import InvalidInput, SchedulerError
from .export import write_results_csv
from .gantt import build_rich_gantt, tick_listing
from .models import Process, ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpusched",
        description="Deterministic CPU dispatch simulator (FCFS, SJF, SRTF, RR).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity (default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=list(ALGORITHMS),
        help="Algorithm to use (fcfs, sjf, srtf, rr).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON, CSV or TXT workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by FCFS, SJF, SRTF).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Print a per-tick listing of the schedule before the summary.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.0,
        help="Seconds to wait between ticks when --step is used (default: 0).",
    )
    run_parser.add_argument(
        "--export",
        "-o",
        default=None,
        help="Write per-process metrics to this CSV file.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON, CSV or TXT workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(ALGORITHM_ORDER),
        help="Algorithms to compare (default: fcfs sjf srtf rr).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )
    compare_parser.add_argument(
        "--parallel",
        "-j",
        type=int,
        default=1,
        help="Number of worker threads to run algorithms on (default: 1).",
    )
    compare_parser.add_argument(
        "--export",
        "-o",
        default=None,
        help="Write per-process metrics for every algorithm to this CSV file.",
    )

    enter_parser = subparsers.add_parser(
        "enter",
        help="Type in processes and a quantum, then run all four algorithms.",
    )
    enter_parser.add_argument(
        "--export",
        "-o",
        default=None,
        help="Write per-process metrics for every algorithm to this CSV file.",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Start",
        "Complete",
        "Response",
        "Wait",
        "Turnaround",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h == "PID" else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            str(p.pid),
            str(p.arrival_time),
            str(p.burst_time),
            str(p.start_time),
            str(p.completion_time),
            str(p.response_time),
            str(p.waiting_time),
            str(p.turnaround_time),
        )

    console.print(proc_table)
    console.print()

    summary = result.averages
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
    sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
    if result.system:
        sys = result.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_comparison(results: List[ScheduleResult], title: str, console: Console) -> None:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")

    for result in results:
        summary = result.averages
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_response']:.2f}",
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
        )

    console.print(summary_table)


def _step_through(result: ScheduleResult, delay: float, console: Console) -> None:
    """
    Per-tick textual listing of the computed schedule.
    """
    console.print(f"[bold]Stepping through {result.algorithm}[/bold]")
    for t, pid in tick_listing(result.timeline):
        owner = "[dim]idle[/dim]" if pid is None else f"[green]P{pid}[/green]"
        console.print(f"t={t:3d}: {owner}")
        if delay > 0:
            time.sleep(delay)


def _collect_processes(console: Console) -> tuple[List[Process], int]:
    """
    Prompt for the process count, one PID/arrival/burst triple per process,
    and the round-robin quantum.
    """
    count = IntPrompt.ask("Number of processes", console=console)
    if count <= 0:
        raise InvalidInput("Number of processes must be positive")
    processes: List[Process] = []
    for n in range(1, count + 1):
        console.print(f"[bold]Process {n}[/bold]")
        pid = IntPrompt.ask("  PID", console=console)
        arrival_time = IntPrompt.ask("  Arrival", console=console)
        burst_time = IntPrompt.ask("  Burst", console=console)
        processes.append(Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time))
    quantum = IntPrompt.ask("Time quantum", console=console, default=DEFAULT_QUANTUM)
    return processes, quantum


def _export(results: List[ScheduleResult], path: str, console: Console) -> None:
    rows = write_results_csv(results, path)
    logger.info("wrote %d rows to %s", rows, path)
    console.print(f"[dim]Exported {rows} rows to {path}[/dim]")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            if args.step:
                try:
                    _step_through(result, args.step_delay, console)
                except KeyboardInterrupt:
                    console.print("[yellow]Step listing skipped.[/yellow]")
            _print_result(result, console)
            if args.export:
                _export([result], args.export, console)
            return 0

        if args.command == "compare":
            workload_path = Path(args.workload)
            processes = load_workload(workload_path)
            results = run_all(
                processes,
                quantum=args.quantum,
                algorithms=args.algorithms,
                workers=args.parallel,
            )
            _print_comparison(results, f"Algorithm comparison: {workload_path}", console)
            if args.export:
                _export(results, args.export, console)
            return 0

        if args.command == "enter":
            processes, quantum = _collect_processes(console)
            results = run_all(processes, quantum=quantum)
            for result in results:
                console.print()
                _print_result(result, console)
            console.print()
            _print_comparison(results, "Algorithm comparison", console)
            if args.export:
                _export(results, args.export, console)
            return 0
    except (SchedulerError, OSError) as exc:
        logger.debug("command failed", exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
