#!/usr/bin/env python3
"""
Examples of using the lifegrid CLI for different scenarios.
"""

import subprocess


def run_cli_command(args):
    """Run a CLI command and capture its output."""
    cmd = ["lifegrid-cli"] + args
    print(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=30)
    except subprocess.TimeoutExpired:
        print("Command timed out")
        return False

    print(result.stdout)
    if result.stderr:
        print(f"Stderr: {result.stderr}")
    print("-" * 50)
    return result.returncode == 0


def main():
    """Run various CLI examples."""
    print("Conway's Game of Life CLI Examples")
    print("=" * 50)

    examples = [
        (["--list-patterns"], "List all available patterns"),
        (["--pattern", "Block", "-W", "15", "-H", "15", "-t", "5", "--show-grid", "--verbose"],
         "Still life pattern (should be stable)"),
        (["--pattern", "Blinker", "-W", "10", "-H", "10", "-t", "3", "--show-grid"],
         "Oscillating blinker pattern"),
        (["--pattern", "Glider", "-W", "20", "-H", "20", "-t", "100", "--until-stable", "--show-grid"],
         "Glider dies against the dead boundary ring"),
        (["--pattern", "Diehard", "-W", "40", "-H", "30", "-t", "500", "--until-stable"],
         "Diehard - dies after 130 generations"),
        (["-W", "40", "-H", "40", "-p", "10", "-t", "100", "--seed", "1"],
         "Random sparse population"),
        (["-W", "200", "-H", "200", "-p", "25", "-t", "200", "--seed", "1", "--verbose"],
         "Default-sized grid"),
    ]

    success_count = 0
    for args, description in examples:
        print(f"\nExample: {description}")
        print("-" * len(f"Example: {description}"))
        if run_cli_command(args):
            success_count += 1
        else:
            print("Failed")

    print(f"\nSummary: {success_count}/{len(examples)} examples completed successfully")


if __name__ == "__main__":
    main()
