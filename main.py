"""Spatial Tracker — dev launcher. Starts the API under uvicorn in watch mode."""

import argparse
import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "13015")


def main():
    parser = argparse.ArgumentParser(description="Spatial Tracker dev launcher")
    parser.add_argument("--host", default=HOST, help=f"Bind address (default: {HOST})")
    parser.add_argument("--port", default=PORT, help=f"Port (default: {PORT})")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Config storage directory (default: ./data)")
    parser.add_argument("--inactive", action="store_true",
                        help="Start with spatial tracking switched off unless config.json says otherwise")
    args = parser.parse_args()

    # Build env for the subprocess so the app picks up the same settings
    env = os.environ.copy()
    if args.data_dir:
        env["DATA_DIR"] = str(args.data_dir.resolve())
    if args.inactive:
        env["SPATIAL_TRACKER_ACTIVE"] = "false"

    print(f"Starting API on http://localhost:{args.port} ...")
    proc = subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "spatial_tracker.app:app", "--reload",
         "--host", args.host, "--port", str(args.port)],
        cwd=ROOT, env=env,
    )
    try:
        proc.wait()
    except KeyboardInterrupt:
        print("\nShutting down...")
        proc.terminate()
        proc.wait()


if __name__ == "__main__":
    main()
