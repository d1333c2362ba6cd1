"""Plain-text rendering of comparison results."""

from __future__ import annotations

from typing import List

from lexcompare.comparator import ComparisonResult

_RULER = "=" * 72


def _format_matrix(result: ComparisonResult) -> List[str]:
    codes = list(result.jurisdictions)
    width = max(6, max(len(code) for code in codes) + 1)
    header = " " * width + "".join(code.rjust(width) for code in codes)
    lines = [header]
    for i, code in enumerate(codes):
        cells = "".join(f"{result.similarity[i, j]:.2f}".rjust(width) for j in range(len(codes)))
        lines.append(code.ljust(width) + cells)
    return lines


def generate_report(result: ComparisonResult) -> str:
    """Render every part of ``result`` as structured plain text."""

    lines: List[str] = [
        _RULER,
        f"Comparative analysis: {result.topic.label}",
        _RULER,
        f"Jurisdictions compared: {', '.join(result.jurisdictions)}",
        f"Known entries: {result.known_count} of {len(result.jurisdictions)}",
        "",
    ]

    if result.majority is None:
        lines.append("Majority rule: none (no known entries)")
    else:
        adopters = ", ".join(result.adopters(result.majority))
        lines.append(f"Majority rule: {result.majority} ({result.majority_count} jurisdictions: {adopters})")

    if result.minority:
        lines.append("Minority rules:")
        for rule in result.minority:
            adopters = ", ".join(result.adopters(rule))
            lines.append(f"  - {rule} ({result.count_of(rule)}: {adopters})")
    else:
        lines.append("Minority rules: none")

    if result.unknown:
        lines.append(f"Unknown (insufficient data): {', '.join(result.unknown)}")

    lines.append("")
    lines.append("Rules by jurisdiction:")
    for code in result.jurisdictions:
        rule = result.by_jurisdiction.get(code)
        lines.append(f"  {code}: {rule if rule is not None else 'unknown'}")

    lines.append("")
    lines.append("Similarity matrix (1.00 same, 0.00 different, 0.50 insufficient data):")
    lines.extend(_format_matrix(result))
    return "\n".join(lines) + "\n"


__all__ = ["generate_report"]
