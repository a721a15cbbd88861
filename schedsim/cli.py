from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import Algorithm, run_algorithm
from .config import DEFAULT_QUANTUM, SimulationConfig
from .exceptions import InvalidInputError, UnknownAlgorithmError
from .gantt import build_rich_gantt
from .models import SimulationResult
from .workload_io import generate_random_workload, load_workload, save_workload

logger = logging.getLogger(__name__)

ALGORITHM_NAMES = [a.value for a in Algorithm]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FIFO, SJF, SRTF, RR, MLFQ).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log engine activity (-v for a summary, -vv for every step).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHM_NAMES)}).",
    )
    _add_workload_arguments(run_parser)
    _add_quantum_arguments(run_parser)
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Replay the computed schedule one interval at a time.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=_non_negative_float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    _add_workload_arguments(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=ALGORITHM_NAMES,
        help=f"Algorithms to compare (default: {' '.join(ALGORITHM_NAMES)}).",
    )
    _add_quantum_arguments(compare_parser)

    generate_parser = subparsers.add_parser("generate", help="Write a random workload file.")
    generate_parser.add_argument("output", help="Destination .json or .csv file.")
    generate_parser.add_argument(
        "--count",
        "-n",
        type=int,
        default=5,
        help="Number of processes (default: 5).",
    )
    generate_parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible workload.")

    return parser


def _add_workload_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--random",
        "-r",
        type=int,
        metavar="COUNT",
        help="Use COUNT randomly generated processes instead of a file.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed used with --random.")


def _add_quantum_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin, and base of the MLFQ ladder (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--mlfq-quanta",
        type=int,
        nargs=4,
        metavar=("Q0", "Q1", "Q2", "Q3"),
        default=None,
        help="Explicit MLFQ quanta per level (default: q 2q 3q 4q).",
    )


def _non_negative_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {text}")
    return value


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


def _load_processes(args: argparse.Namespace):
    if args.random is not None:
        return generate_random_workload(args.random, seed=args.seed)
    return load_workload(Path(args.workload))


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm.label}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")
    if result.quanta is not None:
        console.print(f"[bold]Quanta:[/bold] {', '.join(str(q) for q in result.quanta)}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline, by_level=result.algorithm is Algorithm.MLFQ)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Complete",
        "Turnaround",
        "Wait",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics (completion order)", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    m = result.metrics
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{m.avg_waiting:.2f}")
    sys_table.add_row("Avg turnaround", f"{m.avg_turnaround:.2f}")
    sys_table.add_row("Avg response", f"{m.avg_response:.2f}")
    sys_table.add_row("Total execution time", str(m.total_time))
    sys_table.add_row("Idle time", str(m.idle_time))
    sys_table.add_row("Throughput (proc/time)", f"{m.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{m.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _animate_result(result: SimulationResult, delay: float, console: Console) -> None:
    """
    Replay the already computed schedule. Reads the result only.
    """
    timeline = result.timeline
    total = result.metrics.total_time
    console.print(f"[bold]Simulating {result.algorithm.label}[/bold] (duration {total} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for sl in timeline:
        if sl.is_idle:
            msg = f"t={sl.start:3d}-{sl.end:<3d} [dim]idle[/dim]"
        else:
            level = "" if sl.queue_level is None else f" [cyan]Q{sl.queue_level}[/cyan]"
            msg = f"t={sl.start:3d}-{sl.end:<3d} {sl.pid}{level} [green]{'#' * sl.duration}[/green]"
        console.print(msg)
        time.sleep(delay)


def _compare_table(results: List[SimulationResult], title: str) -> Table:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Total time", justify="right")

    for result in results:
        if result.quanta is not None:
            quantum = "/".join(str(q) for q in result.quanta)
        else:
            quantum = "" if result.quantum is None else str(result.quantum)
        m = result.metrics
        summary_table.add_row(
            result.algorithm.label,
            quantum,
            f"{m.avg_waiting:.2f}",
            f"{m.avg_turnaround:.2f}",
            f"{m.avg_response:.2f}",
            str(m.total_time),
        )
    return summary_table


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        if args.command == "run":
            processes = _load_processes(args)
            config = SimulationConfig(quantum=args.quantum, mlfq_quanta=args.mlfq_quanta)
            result = run_algorithm(args.algorithm, processes, config)
            if args.step:
                try:
                    _animate_result(result, delay=args.step_delay, console=console)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            _print_result(result, console)
            return 0

        if args.command == "compare":
            processes = _load_processes(args)
            config = SimulationConfig(quantum=args.quantum, mlfq_quanta=args.mlfq_quanta)
            results = [run_algorithm(alg, processes, config) for alg in args.algorithms]
            console.print(_compare_table(results, "Algorithm comparison"))
            return 0

        if args.command == "generate":
            processes = generate_random_workload(args.count, seed=args.seed)
            path = save_workload(processes, args.output)
            console.print(f"Wrote {len(processes)} processes to [green]{path}[/green]")
            return 0
    except (InvalidInputError, UnknownAlgorithmError, OSError) as exc:
        logger.debug("command failed", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
