"""
Entry point to run one full reminder batch (generate, then send).
"""
import sys

from worker.main import main as worker_main


if __name__ == "__main__":
    sys.exit(worker_main(["all"]))
