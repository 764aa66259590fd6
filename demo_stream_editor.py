#!/usr/bin/env python3
"""
Complete Pipeline Demo: Script → Script Model → Analysis → Execution

Shows the full workflow:
1. Compile a script
2. Analyze it for dead or dropped commands
3. Serialize the compiled script
4. Run it over some input
"""

import logging
import sys

from lsed.analyzer import analyze_script
from lsed.config import EditorConfig, load_config
from lsed.engine import execute
from lsed.parser import compile_script
from lsed.serialization import script_to_yaml


SAMPLE_INPUT = "alpha\nbravo\ncharlie\ndelta\n"
SAMPLE_SCRIPT = "1p; 2d; 3=; 2p; oops"


def main():
    config = load_config(sys.argv[1]) if len(sys.argv) > 1 else EditorConfig(trace=True, log_level="DEBUG")
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 70)
    print("PIPELINE DEMO: Script → Model → Analysis → Execution")
    print("=" * 70)

    # =========================================================================
    # STEP 1: Compile
    # =========================================================================
    print("\n1. COMPILING SCRIPT...")
    print(f"   Source: {SAMPLE_SCRIPT!r}")
    script = compile_script(SAMPLE_SCRIPT, strict=config.strict)
    print(f"   ✓ Commands: {script}")

    # =========================================================================
    # STEP 2: Analyze
    # =========================================================================
    print("\n2. ANALYZING SCRIPT...")
    report = analyze_script(script)
    print(f"   ✓ Function counts: {report.function_counts}")
    print(f"   ✓ Addressed lines: {report.addressed_lines}")
    if report.warnings:
        print(f"\n   Warnings ({len(report.warnings)}):")
        for warning in report.warnings:
            print(f"      - {warning}")

    # =========================================================================
    # STEP 3: Serialize
    # =========================================================================
    print("\n3. SERIALIZED SCRIPT (YAML):")
    for line in script_to_yaml(script).splitlines():
        print(f"   {line}")

    # =========================================================================
    # STEP 4: Execute
    # =========================================================================
    print("\n4. EXECUTING...")
    output = execute(SAMPLE_INPUT, script, config=config)
    print("-" * 70)
    print(output, end="")
    print("-" * 70)


if __name__ == "__main__":
    main()
