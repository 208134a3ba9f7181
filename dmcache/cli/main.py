from __future__ import annotations
import argparse
from ..cache.mode import ConfigurationError, generate_modes
from ..cache.engine import MalformedAccessError
from ..trace.reader import read_trace, TraceFormatError
from ..runtime.simulator import run as run_sim
from ..config import SimConfig
from ..utils.reporting import format_stats_table, write_csv, generate_report
from ..utils.logging import get_logger

logger = get_logger("dmcache.cli")


def _parse_modes(text: str):
    try:
        return [int(m) for m in text.split(",") if m.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid mode list {text!r}") from None


def cmd_modes(args):
    """Handles the 'modes' command."""
    for mode in generate_modes():
        print(mode.describe())
    return 0


def cmd_run(args):
    """Handles the 'run' command."""
    try:
        config = SimConfig.from_args(args)
        logger.info("Reading trace %s", config.trace_file)
        records = read_trace(config.trace_file)
        results = run_sim(records, config)
    except FileNotFoundError as e:
        logger.error("Cannot open trace: %s", e)
        return 1
    except (ConfigurationError, TraceFormatError, MalformedAccessError) as e:
        logger.error("%s", e)
        return 1

    snapshots = [r.stats for r in results]
    print(format_stats_table(snapshots))

    try:
        write_csv(snapshots, config.output_csv, config.trace_file, header=config.csv_header)
        logger.info("Results written to %s", config.output_csv)

        if config.report_dir:
            generate_report(results, config)
    except OSError as e:
        logger.error("Cannot write results: %s", e)
        return 1

    print(f"[OK] Simulated {len(records)} accesses across {len(results)} modes.")
    return 0


def build_parser():
    p = argparse.ArgumentParser(
        prog="dmcache",
        description="Direct-mapped cache memory controller simulator",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # --- Modes Command ---
    pm = sub.add_parser("modes", help="List the cache controller modes")
    pm.set_defaults(func=cmd_modes)

    # --- Run Command ---
    pr = sub.add_parser("run", help="Simulate a trace in every cache mode",
                        formatter_class=argparse.ArgumentDefaultsHelpFormatter)

    # Config file
    pr.add_argument("-c", "--config", type=str, default=None,
                    help="Path to YAML config file to override defaults")

    # Core args (set default=None to allow override from YAML)
    pr.add_argument("trace_file", nargs='?', default=None,
                    help="Path to the .trc memory trace (optional if specified in config)")
    pr.add_argument("-o", "--output", type=str, default=None, dest="output_csv",
                    help="Path of the results CSV file")
    pr.add_argument("--report", type=str, default=None, dest="report_dir",
                    help="Directory to save JSON/HTML reports")
    pr.add_argument("--modes", type=_parse_modes, default=None,
                    help="Comma-separated list of mode ids to simulate (default: all)")
    pr.add_argument("--no-header", action="store_const", const=False, default=None,
                    dest="csv_header", help="Omit the CSV header row")
    pr.add_argument("--on-malformed", type=str, default=None, dest="on_malformed",
                    choices=["error", "skip"], help="Abort on or skip rejected accesses")
    pr.add_argument("--debug", action="store_const", const=True, default=None,
                    help="Log every access with its address fields")

    pr.set_defaults(func=cmd_run)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
