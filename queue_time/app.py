from __future__ import annotations

# Single-entrypoint runner.
#
#     python -m queue_time.app compute --durations "2,2,3,3,4,4" --stations 2
#     python -m queue_time.app random --count 50 --stations 11 --seed 7
#     python -m queue_time.app serve                 (MQTT service)
#     python -m queue_time.app request --durations "1,2,3" --stations 2
#
# `compute` and `random` run locally; `serve` and `request` need a broker.

import argparse
import random

from .mqtt_topics import DEFAULT_NAMESPACE
from .simulator import compute_total_time, schedule, simulate_ticks
from .workload import parse_durations, random_durations


def main() -> None:
    parser = argparse.ArgumentParser(description="Supermarket Queue Time - main entrypoint")
    sub = parser.add_subparsers(dest="cmd", required=True)

    def add_mqtt_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--mqtt-host", default="127.0.0.1")
        p.add_argument("--mqtt-port", type=int, default=1883)
        p.add_argument("--namespace", default=DEFAULT_NAMESPACE)

    p_cmp = sub.add_parser("compute", help="Total time for a given line of customers")
    p_cmp.add_argument("--durations", required=True, help='e.g. "1,2,3" or "[1, 2, 3]"')
    p_cmp.add_argument("--stations", type=int, required=True, help="number of open tills")
    p_cmp.add_argument("--method", choices=["event", "tick"], default="event")
    p_cmp.add_argument("--schedule", action="store_true", help="also print which till served whom")

    p_rnd = sub.add_parser("random", help="Generate a random line and compute its total time")
    p_rnd.add_argument("--count", type=int, required=True)
    p_rnd.add_argument("--stations", type=int, required=True)
    p_rnd.add_argument("--max-duration", type=int, default=20)
    p_rnd.add_argument("--seed", type=int, default=None)

    p_srv = sub.add_parser("serve", help="Run the MQTT queue time service")
    add_mqtt_args(p_srv)

    p_req = sub.add_parser("request", help="Send one request to a running service")
    add_mqtt_args(p_req)
    p_req.add_argument("--durations", required=True)
    p_req.add_argument("--stations", type=int, required=True)
    p_req.add_argument("--method", choices=["event", "tick"], default="event")
    p_req.add_argument("--timeout", type=float, default=5.0)

    args = parser.parse_args()

    if args.cmd == "compute":
        try:
            durations = parse_durations(args.durations)
            run = simulate_ticks if args.method == "tick" else compute_total_time
            total = run(durations, args.stations)
            plan = schedule(durations, args.stations) if args.schedule else []
        except ValueError as e:
            parser.error(str(e))

        for a in plan:
            print(f"[queue_time] customer {a.customer} -> till {a.station} ({a.start}..{a.finish})")
        print(f"[queue_time] total_time={total}")
        return

    if args.cmd == "random":
        rng = random.Random(args.seed) if args.seed is not None else None
        try:
            durations = random_durations(count=args.count, max_duration=args.max_duration, rng=rng)
            total = compute_total_time(durations, args.stations)
        except ValueError as e:
            parser.error(str(e))

        print(f"[queue_time] durations={durations}")
        print(f"[queue_time] total_time={total}")
        return

    if args.cmd == "serve":
        from .service import main as run

        run_args = ["--mqtt-host", args.mqtt_host, "--mqtt-port", str(args.mqtt_port), "--namespace", args.namespace]
        _dispatch_to_module_main(run, run_args)
        return

    if args.cmd == "request":
        from .client import main as run

        run_args = [
            "--durations",
            args.durations,
            "--stations",
            str(args.stations),
            "--method",
            args.method,
            "--timeout",
            str(args.timeout),
            "--mqtt-host",
            args.mqtt_host,
            "--mqtt-port",
            str(args.mqtt_port),
            "--namespace",
            args.namespace,
        ]
        _dispatch_to_module_main(run, run_args)
        return


def _dispatch_to_module_main(module_main, argv: list[str]) -> None:
    import sys

    old_argv = sys.argv[:]
    try:
        sys.argv = [old_argv[0], *argv]
        module_main()
    finally:
        sys.argv = old_argv


if __name__ == "__main__":
    main()
