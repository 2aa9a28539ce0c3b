#!/usr/bin/env python3
"""Safe math linting script for the StableSwap package.

Settlement-affecting modules (curve, swap, liquidity, pricing, amp,
safe_int) must stay in integer arithmetic: their results decide minted,
burned and transferred amounts and have to match the on-chain program bit
for bit. This script scans them for floating point and for imports of the
advisory analytics module, and should be run as part of CI.

Usage:
    python scripts/check_safe_math.py [--verbose]

Exit codes:
    0 - No issues found
    1 - Issues found (with details printed)
"""

import argparse
import re
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Issue:
    """A detected unsafe math pattern."""

    file: Path
    line_num: int
    line: str
    pattern: str
    severity: str  # CRITICAL, HIGH, MEDIUM
    message: str
    suggestion: str | None = None


PACKAGE_DIR = "stableswap"

# Modules whose outputs affect settled amounts
SETTLEMENT_MODULES = [
    "amp.py",
    "curve.py",
    "liquidity.py",
    "pricing.py",
    "safe_int.py",
    "swap.py",
]

# The one module allowed to use floating point
FLOAT_MODULE = "analytics"


class DocstringTracker:
    """Track docstring state across multiple lines."""

    def __init__(self) -> None:
        self.in_docstring = False
        self.docstring_char: str | None = None

    def process_line(self, line: str) -> tuple[str, bool]:
        """Process a line and return (stripped_line, is_in_docstring).

        Returns the line with strings/comments removed and whether
        the line is entirely within a docstring.
        """
        result = []
        i = 0
        line_start_in_docstring = self.in_docstring

        while i < len(line):
            if line[i : i + 3] in ('"""', "'''"):
                if not self.in_docstring:
                    self.in_docstring = True
                    self.docstring_char = line[i : i + 3]
                    result.append("   ")
                    i += 3
                    continue
                elif line[i : i + 3] == self.docstring_char:
                    self.in_docstring = False
                    self.docstring_char = None
                    result.append("   ")
                    i += 3
                    continue

            if self.in_docstring:
                result.append(" ")
                i += 1
                continue

            char = line[i]

            if char == "#":
                result.append(" " * (len(line) - i))
                break

            if char in ('"', "'") and (i == 0 or line[i - 1] != "\\"):
                quote_char = char
                result.append(" ")
                i += 1
                while i < len(line):
                    if line[i] == quote_char and line[i - 1] != "\\":
                        result.append(" ")
                        i += 1
                        break
                    result.append(" ")
                    i += 1
                continue

            result.append(char)
            i += 1

        entirely_in_docstring = line_start_in_docstring and self.in_docstring

        return "".join(result), entirely_in_docstring


def _code_lines(lines: list[str]) -> Iterator[tuple[int, str, str]]:
    """Yield (line_num, code, original) with strings, comments and docstrings blanked."""
    tracker = DocstringTracker()
    for i, original_line in enumerate(lines, 1):
        code, in_docstring = tracker.process_line(original_line)
        if in_docstring or not code.strip():
            continue
        yield i, code, original_line


def check_true_division(path: Path, lines: list[str]) -> Iterator[Issue]:
    """Check for `/` that isn't floor division."""
    for i, code, original in _code_lines(lines):
        if "/" in code.replace("//", "  "):
            yield Issue(
                file=path,
                line_num=i,
                line=original.rstrip(),
                pattern="true division",
                severity="CRITICAL",
                message="True division produces a float in a settlement module",
                suggestion="Use floor division on SafeInt values",
            )


def check_float_usage(path: Path, lines: list[str]) -> Iterator[Issue]:
    """Check for float() conversions, float annotations and float literals."""
    float_literal = re.compile(r"(?<![\w.])\d+\.\d*(?![\w])|(?<![\w.])\d+[eE][-+]?\d+")
    for i, code, original in _code_lines(lines):
        if re.search(r"\bfloat\b", code) or float_literal.search(code):
            yield Issue(
                file=path,
                line_num=i,
                line=original.rstrip(),
                pattern="float usage",
                severity="CRITICAL",
                message="Floating point in a settlement module",
                suggestion="Keep settlement math in integers; move display metrics to analytics.py",
            )


def check_analytics_import(path: Path, lines: list[str]) -> Iterator[Issue]:
    """Check that the floating-point module is not imported."""
    import_pattern = re.compile(rf"^\s*(from|import)\s+(stableswap\.|\.){FLOAT_MODULE}\b")
    for i, code, original in _code_lines(lines):
        if import_pattern.search(code):
            yield Issue(
                file=path,
                line_num=i,
                line=original.rstrip(),
                pattern="analytics import",
                severity="CRITICAL",
                message=f"Settlement module imports the floating-point {FLOAT_MODULE} module",
            )


def check_tolerance_patterns(path: Path, lines: list[str]) -> Iterator[Issue]:
    """Check for tolerance-based comparisons other than the 1-unit convergence check."""
    abs_pattern = re.compile(r"abs\s*\([^)]+\)\s*[<>]=?\s*(\d+\.?\d*)")
    for i, code, original in _code_lines(lines):
        match = abs_pattern.search(code)
        if match and match.group(1) not in ("0", "1"):
            yield Issue(
                file=path,
                line_num=i,
                line=original.rstrip(),
                pattern="abs() tolerance",
                severity="HIGH",
                message=f"Tolerance-based comparison (tolerance={match.group(1)})",
                suggestion="Use SolverConfig.tolerance or exact integer comparison",
            )


def scan_file(path: Path) -> list[Issue]:
    """Scan a single settlement module for unsafe math patterns."""
    lines = path.read_text().split("\n")

    issues: list[Issue] = []
    issues.extend(check_true_division(path, lines))
    issues.extend(check_float_usage(path, lines))
    issues.extend(check_analytics_import(path, lines))
    issues.extend(check_tolerance_patterns(path, lines))
    return issues


def scan_package(base_dir: Path) -> list[Issue]:
    """Scan every settlement module under base_dir/stableswap."""
    issues: list[Issue] = []
    for name in SETTLEMENT_MODULES:
        path = base_dir / PACKAGE_DIR / name
        if path.exists():
            issues.extend(scan_file(path))
    return issues


def print_report(issues: list[Issue], verbose: bool) -> None:
    """Print the audit report."""
    if not issues:
        print("✓ No unsafe math patterns found!")
        return

    print(f"\n{'=' * 70}")
    print("SAFE MATH AUDIT RESULTS")
    print(f"{'=' * 70}")
    for sev in ["CRITICAL", "HIGH", "MEDIUM"]:
        count = sum(1 for issue in issues if issue.severity == sev)
        if count > 0:
            print(f"  {sev:10} {count:4}")
    print(f"  {'TOTAL':10} {len(issues):4}")
    print(f"{'=' * 70}\n")

    for issue in issues:
        print(f"  {issue.file}:{issue.line_num} [{issue.severity}]")
        print(f"    {issue.pattern}: {issue.message}")
        if verbose:
            print(f"    > {issue.line.strip()[:70]}")
            if issue.suggestion:
                print(f"    Suggestion: {issue.suggestion}")
        print()


def main() -> int:
    parser = argparse.ArgumentParser(description="Safe math linter for StableSwap")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    issues = scan_package(Path(__file__).parent.parent)
    print_report(issues, args.verbose)
    return 1 if issues else 0


if __name__ == "__main__":
    sys.exit(main())
