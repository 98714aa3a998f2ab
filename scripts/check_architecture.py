#!/usr/bin/env python3
"""Architecture enforcement checks for orderrouter.

This script runs as part of CI/pre-commit to catch architectural violations.
Exit code 0 = all checks passed, non-zero = violations found.

Violations:
1. Concrete model providers referenced from cortex/ (must go through modules.responders)
2. Concrete transports referenced from cortex/ (must go through the Transport interface)
3. Direct transport sends from flows/ (flows return Reply actions; only deliver() sends)
"""

import subprocess
import sys
from pathlib import Path

# Where to check
CORTEX = "src/orderrouter/cortex"

# Patterns that violate architecture
VIOLATIONS = [
    {
        "name": "Direct chat model provider import",
        "pattern": r"(langchain_google_genai|ChatGoogleGenerativeAI)",
        "message": "Use a `Responder` from orderrouter.modules.responders instead",
        "exclude": [],
    },
    {
        "name": "Concrete transport import",
        "pattern": r"(ConsoleTransport|modules\.transports\.console)",
        "message": "Depend on `orderrouter.modules.transports.base.Transport` only",
        "exclude": [],
    },
    {
        "name": "Direct send from a flow",
        "pattern": r"\.send_(text|image|list)\(",
        "message": "Flows return `Reply` actions; `cortex/presentation` delivers them",
        "exclude": ["cortex/presentation/", "cortex/services/dispatcher.py"],
    },
]


def run_grep(pattern: str, path: str, exclude: list[str]) -> list[str]:
    """Run ripgrep and return matching files with line numbers."""
    cmd = ["rg", "--no-heading", "--line-number", "--color=never", pattern, path]

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError:
        # ripgrep not available, try grep
        cmd = ["grep", "-rn", "-E", pattern, path]
        result = subprocess.run(cmd, capture_output=True, text=True, check=False)

    if result.returncode != 0:
        return []
    lines = result.stdout.strip().split("\n")
    return [line for line in lines if not any(exc in line for exc in exclude)]


def main() -> int:
    """Run all architecture checks."""
    project_root = Path(__file__).parent.parent
    check_path = project_root / CORTEX

    if not check_path.exists():
        print(f"Path not found: {check_path}")
        return 1

    violations_found = 0

    print("Running architecture enforcement checks...")
    print(f"   Checking: {check_path}\n")

    for check in VIOLATIONS:
        matches = run_grep(check["pattern"], str(check_path), check.get("exclude", []))

        if matches:
            violations_found += len(matches)
            print(f"FAIL {check['name']}")
            print(f"   -> {check['message']}")
            print()
            for match in matches:
                print(f"   {match}")
            print()

    if violations_found == 0:
        print("All architecture checks passed!")
        return 0

    print(f"\nFound {violations_found} violation(s). Please fix before committing.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
