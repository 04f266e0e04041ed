"""
Scheduled reminder batch.

Run once per scheduler tick, e.g. from cron:

    python -m worker.main generate   # daily
    python -m worker.main send       # hourly

There is no internal loop; a failed run is simply retried on the next tick.
"""
import argparse
import json
import logging
import sys
from typing import Dict, List

from app.email_utils import SmtpTransport
from core.config import Config, load_config
from core.database import configure_database
from core.reminders.dispatcher import send_due_reminders
from core.reminders.generator import generate_reminders

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("worker")

COMMANDS = ("generate", "send", "all")


def run_once(config: Config, command: str = "all") -> Dict:
    """Run the requested batch step(s) and return their results keyed by step."""
    results: Dict = {}
    if command in ("generate", "all"):
        results["generate"] = generate_reminders()
    if command in ("send", "all"):
        results["send"] = send_due_reminders(config, SmtpTransport.from_config(config))
    return results


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run one reminder batch.")
    parser.add_argument("command", nargs="?", choices=COMMANDS, default="all")
    args = parser.parse_args(argv)

    config = load_config()
    configure_database(config.database_url)

    try:
        results = run_once(config, args.command)
    except Exception:
        log.exception("Reminder run failed", extra={"command": args.command})
        return 1

    print(json.dumps(results, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
