"""Plain-text rendering of size reports and history for the terminal."""

from datetime import datetime
from typing import Any, Dict, List

from .scoring import ANIMATION_DURATION_SECONDS, LOWER_LIMIT_KB, UPPER_LIMIT_KB, animated_scale, size_band

RESET = "\033[0m"
BAR_WIDTH = 50
ANIMATION_STEPS = 80


def bar_width_percent(percentage: float) -> float:
    return max(0.0, min(100.0, percentage))


def render_bar(size_kb: float, percentage: float, width: int = BAR_WIDTH, color: bool = True) -> str:
    filled = int(round(bar_width_percent(percentage) / 100 * width))
    optimal_mark = int(round(LOWER_LIMIT_KB / UPPER_LIMIT_KB * width))

    cells = []
    for idx in range(width):
        cells.append("#" if idx < filled else ".")
    # 100KB marker sits on the boundary cell; keep it visible over empty cells only
    if optimal_mark < width and cells[optimal_mark] == ".":
        cells[optimal_mark] = "|"
    body = "".join(cells)

    if color:
        band = size_band(size_kb)
        body = f"{band.color}{body[:filled]}{RESET}{body[filled:]}"

    scale = "0 KB".ljust(optimal_mark - 3) + "100 KB"
    scale = scale.ljust(width - 4) + "128 KB"
    return f"[{body}]\n {scale}"


def render_report(result: Dict[str, Any], color: bool = True) -> str:
    size_kb = float(result["size_kb"])
    percentage = float(result["percentage_of_limit"])
    lines: List[str] = []

    address = result.get("address")
    if address:
        network = result.get("network")
        lines.append(f"Contract: {address}" + (f" ({network})" if network else ""))

    lines.append(f"Contract Size: {size_kb:.2f} KB  ({result.get('status', '')})")
    lines.append(f"Percentage:    {percentage:.1f}% of 128KB")
    score = result.get("optimization_score")
    if score is not None:
        lines.append(f"Score:         {float(score):.0f}/100")
    band = result.get("band") or {}
    if band:
        lines.append(f"Band:          {band.get('label')}")
    lines.append("")
    lines.append(render_bar(size_kb, percentage, color=color))
    lines.append("")

    advice = result.get("recommendation") or {}
    lines.append("Recommendation")
    if advice.get("message"):
        lines.append(f"  {advice['message']}")
    if advice.get("note"):
        lines.append(f"  {advice['note']}")
    return "\n".join(lines)


def render_history(entries: List[Dict[str, Any]]) -> str:
    if not entries:
        return "History is empty."

    lines = [f"{'Address':<44} {'Size':>11} {'Percentage':>11}  Checked"]
    for entry in entries:
        report = entry.get("report") or {}
        observed = datetime.fromtimestamp(int(entry.get("observed_at", 0)) / 1000)
        lines.append(
            f"{entry['address']:<44} "
            f"{float(report.get('size_kb', 0.0)):>8.2f} KB "
            f"{float(report.get('percentage_of_limit', 0.0)):>10.1f}%  "
            f"{observed:%Y-%m-%d %H:%M:%S}"
        )
    return "\n".join(lines)


def render_scale_frames(target: float, steps: int = ANIMATION_STEPS) -> List[str]:
    """One line per animation step, growing the image scale from 0.1 to `target`."""
    steps = max(1, steps)
    interval = ANIMATION_DURATION_SECONDS / steps
    return [
        f"Scale: {animated_scale(target, step * interval):.2f}x"
        for step in range(steps + 1)
    ]
