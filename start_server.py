#!/usr/bin/env python3
"""Start the salon finder API with uvicorn, honouring the PORT environment variable."""

import os
import subprocess
import sys


def main() -> int:
    port = os.environ.get("PORT", "8000")
    try:
        port_int = int(port)
    except ValueError:
        print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
        port_int = 8000

    src_path = os.path.abspath("src")
    if not os.path.isdir(src_path):
        print(f"Warning: src directory not found at {src_path}", file=sys.stderr)
        src_path = os.getcwd()

    pythonpath = os.environ.get("PYTHONPATH", "")
    os.environ["PYTHONPATH"] = f"{src_path}{os.pathsep}{pythonpath}" if pythonpath else src_path
    sys.path.insert(0, src_path)

    try:
        import salon.main  # noqa: F401
    except Exception as exc:
        print(f"Failed to import salon.main: {exc}", file=sys.stderr)
        import traceback

        traceback.print_exc(file=sys.stderr)
        return 1

    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "salon.main:app",
        "--host",
        "0.0.0.0",
        "--port",
        str(port_int),
        "--proxy-headers",
        "--forwarded-allow-ips",
        "*",
    ]
    print(f"Starting server on port {port_int} (PYTHONPATH={os.environ['PYTHONPATH']})", file=sys.stderr)
    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        print("Server interrupted by user", file=sys.stderr)
        return 0


if __name__ == "__main__":
    sys.exit(main())
