from __future__ import annotations

# Single-entrypoint runner.
#
#     python -m bank_sim.app run --tellers 3 --customers 50
#
# Narration goes to stdout unless --quiet. Passing --mqtt-host additionally
# streams events and status snapshots to a broker.

import argparse
import sys

from .bank import BankController
from .config import BankConfig, DelayRange
from .events import ConsoleNarrator
from .mqtt_topics import DEFAULT_NAMESPACE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bank Teller Simulation - main entrypoint")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Open the bank, serve every customer, close")
    p_run.add_argument("--tellers", type=int, default=3)
    p_run.add_argument("--customers", type=int, default=50)
    p_run.add_argument("--door-capacity", type=int, default=2, help="customers inside the bank at once")
    p_run.add_argument("--safe-capacity", type=int, default=2, help="tellers inside the safe at once")
    p_run.add_argument("--manager-capacity", type=int, default=1)
    p_run.add_argument("--arrival-ms", type=int, nargs=2, default=[0, 100], metavar=("MIN", "MAX"))
    p_run.add_argument("--manager-ms", type=int, nargs=2, default=[5, 30], metavar=("MIN", "MAX"))
    p_run.add_argument("--safe-ms", type=int, nargs=2, default=[10, 50], metavar=("MIN", "MAX"))
    p_run.add_argument("--withdrawal-probability", type=float, default=0.5)
    p_run.add_argument("--seed", type=int, default=None)
    p_run.add_argument("--quiet", action="store_true", help="only print the closing summary")

    # ---- Optional MQTT streaming ----
    p_run.add_argument("--mqtt-host", default=None, help="stream events/status to this broker")
    p_run.add_argument("--mqtt-port", type=int, default=1883)
    p_run.add_argument("--namespace", default=DEFAULT_NAMESPACE)
    p_run.add_argument(
        "--publish-status-every",
        type=float,
        default=1.0,
        help="seconds between broadcast status snapshots",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> BankConfig:
    return BankConfig(
        num_tellers=args.tellers,
        num_customers=args.customers,
        door_capacity=args.door_capacity,
        safe_capacity=args.safe_capacity,
        manager_capacity=args.manager_capacity,
        arrival_delay=DelayRange(*args.arrival_ms),
        manager_delay=DelayRange(*args.manager_ms),
        safe_delay=DelayRange(*args.safe_ms),
        withdrawal_probability=args.withdrawal_probability,
        seed=args.seed,
    )


def run(args: argparse.Namespace) -> int:
    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"[run] invalid configuration: {e}", file=sys.stderr)
        return 2

    bank = BankController(config)
    if not args.quiet:
        bank.add_handler(ConsoleNarrator())

    mqtt_client = None
    publisher = None
    if args.mqtt_host:
        # Import MQTT dependencies only when streaming is requested.
        from .mqtt_client import MqttClient
        from .publisher import MqttEventPublisher

        mqtt_client = MqttClient(client_id="bank-sim", host=args.mqtt_host, port=args.mqtt_port)
        mqtt_client.start()
        publisher = MqttEventPublisher(bank=bank, mqtt=mqtt_client, namespace=args.namespace)
        publisher.start(publish_status_every=args.publish_status_every)
        print(f"[run] streaming to MQTT {args.mqtt_host}:{args.mqtt_port}, namespace={args.namespace}")

    try:
        report = bank.run()
    finally:
        if publisher is not None:
            publisher.stop()
        if mqtt_client is not None:
            mqtt_client.stop()

    print(f"[run] {report.summary()}")
    return 0 if report.departed == report.total_customers else 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.cmd == "run":
        return run(args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
