#!/usr/bin/env python3
"""
makefile.py - Task runner for the treetrace project.

Usage:
    python makefile.py <target>

Requires: Python 3.9+ and colorama (installed with the project)
"""

import os
import shutil
import subprocess
import sys
from collections import defaultdict

from colorama import Fore, Style
from colorama import init as _colorama_init

_colorama_init(autoreset=True)


def print_header(title):
    bar = Fore.CYAN + Style.BRIGHT + "=" * 52 + Style.RESET_ALL
    label = Fore.CYAN + Style.BRIGHT + f"  {title}" + Style.RESET_ALL
    print(f"\n{bar}\n{label}\n{bar}")


def print_step(msg):
    print(f"{Fore.YELLOW}-->{Style.RESET_ALL} {msg}")


def print_success(msg):
    print(f"{Fore.GREEN}[OK]{Style.RESET_ALL} {msg}")


def print_warn(msg):
    print(f"{Fore.YELLOW}[WARN]{Style.RESET_ALL} {msg}")


def run_cmd(args, allow_failure=False):
    """
    Run a command as a subprocess, streaming output directly to the terminal.
    Exits with the subprocess exit code on failure unless allow_failure=True.
    """
    try:
        result = subprocess.run(args)
    except FileNotFoundError:
        print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} Command not found: '{args[0]}'")
        print(f"        Ensure '{args[0]}' is installed and on your PATH.")
        if not allow_failure:
            sys.exit(127)
        return 127
    if result.returncode != 0 and not allow_failure:
        sys.exit(result.returncode)
    return result.returncode


def target_test():
    print_header("Running All Tests")
    run_cmd([sys.executable, "-m", "pytest", "tests", "-v"])


def target_test_engines():
    print_header("Running Engine Tests")
    run_cmd([sys.executable, "-m", "pytest", "tests/test_engines", "-v"])


def target_test_coverage():
    print_header("Running Tests with Coverage")
    run_cmd([sys.executable, "-m", "pytest", "tests", "--cov=treetrace",
             "--cov-report=term-missing"])


def target_demo():
    print_header("Running the Step Trace Walkthrough")
    run_cmd([sys.executable, os.path.join("examples", "trace_example.py")])


def target_run():
    print_header("Tracing a Sample B+ Tree")
    run_cmd([sys.executable, "-m", "treetrace.main", "--tree", "bplus", "--order", "3",
             "10, 20, 30, 40, 50, d 10, d 40"])


def target_clean():
    print_header("Cleaning Caches")
    removed = 0
    for root, dirs, _ in os.walk("."):
        for name in dirs:
            if name in ("__pycache__", ".pytest_cache"):
                path = os.path.join(root, name)
                try:
                    shutil.rmtree(path)
                    removed += 1
                except OSError as exc:
                    print_warn(f"Could not remove {path}: {exc}")
    if os.path.exists(".coverage"):
        os.remove(".coverage")
    print_success(f"Removed {removed} cache directories")


TARGETS = {
    "test": (target_test, "Run all tests", "Testing"),
    "test-engines": (target_test_engines, "Run engine tests only", "Testing"),
    "test-coverage": (target_test_coverage, "Run tests with coverage", "Testing"),
    "demo": (target_demo, "Interactive walkthrough of every tree", "Run"),
    "run": (target_run, "Trace a sample B+ tree session", "Run"),
    "clean": (target_clean, "Remove __pycache__, .pytest_cache and .coverage", "Tools"),
    "help": (None, "Show this help message", "Meta"),
}


def target_help():
    title = (
        Fore.CYAN
        + Style.BRIGHT
        + "treetrace - Available Commands"
        + Style.RESET_ALL
    )
    print(f"\n{title}\n")
    groups = defaultdict(list)
    for name, (_, desc, group) in TARGETS.items():
        groups[group].append((name, desc))
    group_order = ["Testing", "Run", "Tools", "Meta"]
    for group in group_order:
        if group not in groups:
            continue
        header = Fore.YELLOW + Style.BRIGHT + f"{group}:" + Style.RESET_ALL
        print(header)
        for name, desc in groups[group]:
            padded = name.ljust(24)
            print(f"  {Fore.GREEN}{padded}{Style.RESET_ALL}  {desc}")
        print()


TARGETS["help"] = (target_help, "Show this help message", "Meta")


def main():
    if len(sys.argv) < 2:
        target_help()
        sys.exit(0)

    name = sys.argv[1]

    if name not in TARGETS:
        print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} Unknown target: '{name}'")
        print("  Run:  python makefile.py help  to list all available targets.")
        sys.exit(1)

    func, _, _ = TARGETS[name]
    func()


if __name__ == "__main__":
    main()
