#!/usr/bin/env python3
"""
Start all bookstore services locally

Launches the books, users and orders services and the API gateway as uvicorn
subprocesses and stops them together on Ctrl+C.
"""

import argparse
import os
import subprocess
import sys
import time

SERVICES = [
    ("Books Service", "books_service.main:app", "BOOKS_PORT", 3001),
    ("Users Service", "users_service.main:app", "USERS_PORT", 3002),
    ("Orders Service", "orders_service.main:app", "ORDERS_PORT", 3003),
    ("API Gateway", "gateway.main:app", "GATEWAY_PORT", 3000),
]


def main():
    parser = argparse.ArgumentParser(description="Start all bookstore services")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    processes = []
    for name, target, port_env, default_port in SERVICES:
        port = int(os.getenv(port_env, default_port))
        command = [sys.executable, "-m", "uvicorn", target, "--host", args.host, "--port", str(port)]
        if args.reload:
            command.append("--reload")
        processes.append((name, subprocess.Popen(command)))
        print(f"Starting {name} on port {port}")

    gateway_port = os.getenv("GATEWAY_PORT", "3000")
    print(f"\nAPI Gateway: http://{args.host}:{gateway_port}")
    print(f"API docs: http://{args.host}:{gateway_port}/docs")

    try:
        while all(process.poll() is None for _, process in processes):
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        for name, process in processes:
            if process.poll() is None:
                process.terminate()
        for name, process in processes:
            process.wait()
            print(f"{name} stopped")


if __name__ == "__main__":
    main()
