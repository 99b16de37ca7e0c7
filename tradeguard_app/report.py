"""Plain-text rendering of validation results for logs and terminals."""

from .models.results import ValidationResult


def format_validation_report(result: ValidationResult) -> str:
    """
    Render a ValidationResult as a short multi-line summary.

    Example:
        Severity: BLOCKED (execution refused)
        Lot size: 0.33 | Risk: $100.00 | Stop: 30.0 pips
        Violations:
          - Stop Loss must be below Entry for BUY orders
    """
    status = "execution refused" if result.severity.blocks_execution else "may execute"
    lines = [
        f"Severity: {result.severity.value} ({status})",
        f"Lot size: {result.lot_size:.2f} | Risk: ${result.risk_amount:.2f} | Stop: {result.pip_distance:.1f} pips",
    ]

    if result.reward_risk_ratio is not None:
        lines.append(f"R:R: {result.reward_risk_ratio:.2f}:1")
    if result.effective_risk is not None:
        lines.append(f"Correlation-adjusted risk: {result.effective_risk:.2f}%")
    if result.risk_reduction is not None:
        lines.append(
            f"Suggested risk: {result.risk_reduction.suggested_risk:g}% ({result.risk_reduction.reason})"
        )

    for title, messages in (
        ("Violations", result.violations),
        ("Warnings", result.warnings),
        ("Recommendations", result.recommendations),
    ):
        if messages:
            lines.append(f"{title}:")
            lines.extend(f"  - {message}" for message in messages)

    return "\n".join(lines)
