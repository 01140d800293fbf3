"""
Size scoring for deployed bytecode.

Everything here is pure: a byte length goes in, a report and its display
attributes (band, recommendation, image scale) come out.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

BYTES_PER_KB = 1024
LOWER_LIMIT_KB = 100.0
UPPER_LIMIT_KB = 128.0
EXCELLENT_THRESHOLD_KB = 114.0

VARIANT_PERCENTAGE_ONLY = "A"
VARIANT_SCORED = "B"

ANIMATION_START_SCALE = 0.1
ANIMATION_DURATION_SECONDS = 4.0


@dataclass(frozen=True)
class ContractSizeReport:
    size_bytes: int
    size_kb: float
    percentage_of_limit: float
    optimization_score: Optional[float]
    variant: str


@dataclass(frozen=True)
class SizeBand:
    key: str
    label: str
    gradient: str
    color: str  # ANSI escape used by the terminal gauge


@dataclass(frozen=True)
class Recommendation:
    key: str
    message: str
    note: Optional[str] = None


BAND_TINY = SizeBand("tiny", "<5KB", "bg-gradient-to-r from-red-400 to-red-300", "\033[91m")
BAND_SMALL = SizeBand("small", "5-20KB", "bg-gradient-to-r from-red-300 to-orange-400", "\033[31m")
BAND_MEDIUM_SMALL = SizeBand(
    "medium_small", "20-50KB", "bg-gradient-to-r from-orange-400 to-yellow-500", "\033[33m"
)
BAND_APPROACHING = SizeBand(
    "approaching", "50-100KB", "bg-gradient-to-r from-yellow-500 to-blue-500", "\033[93m"
)
BAND_GOOD = SizeBand("good", "100-114KB", "bg-gradient-to-r from-blue-500 to-green-500", "\033[94m")
BAND_EXCELLENT = SizeBand(
    "excellent", "114-128KB", "bg-gradient-to-r from-green-500 to-emerald-600", "\033[92m"
)
BAND_EXCEEDED = SizeBand("exceeded", ">128KB", "bg-gradient-to-r from-red-500 to-red-700", "\033[1;91m")

BANDS = (
    BAND_TINY,
    BAND_SMALL,
    BAND_MEDIUM_SMALL,
    BAND_APPROACHING,
    BAND_GOOD,
    BAND_EXCELLENT,
    BAND_EXCEEDED,
)


def size_bytes_from_bytecode(bytecode: Optional[str]) -> int:
    """Byte length of a 0x-prefixed hex bytecode string (two hex chars per byte)."""
    if not bytecode:
        return 0
    text = bytecode.strip()
    if text.startswith(("0x", "0X")):
        text = text[2:]
    if len(text) % 2:
        raise ValueError("Bytecode hex must have an even number of characters.")
    return len(text) // 2


def percentage_of_limit(size_kb: float, variant: str = VARIANT_SCORED) -> float:
    if size_kb < 0:
        raise ValueError("size_kb must be non-negative.")
    if variant == VARIANT_SCORED and size_kb > UPPER_LIMIT_KB:
        return 100.0
    return (size_kb / UPPER_LIMIT_KB) * 100


def optimization_score(size_kb: float) -> float:
    """Score in [0, 100] rewarding sizes close to, but not above, the upper limit."""
    if size_kb < 0:
        raise ValueError("size_kb must be non-negative.")
    if size_kb > UPPER_LIMIT_KB:
        return 0.0
    if size_kb > LOWER_LIMIT_KB:
        range_position = (size_kb - LOWER_LIMIT_KB) / (UPPER_LIMIT_KB - LOWER_LIMIT_KB)
        return 78 + range_position * 22
    if size_kb < 5:
        return 5 + (size_kb / 5) * 5
    if size_kb < 20:
        return 10 + ((size_kb - 5) / 15) * 15
    return 25 + ((size_kb - 20) / 80) * 53


def size_band(size_kb: float) -> SizeBand:
    if size_kb > UPPER_LIMIT_KB:
        return BAND_EXCEEDED
    if size_kb < 5:
        return BAND_TINY
    if size_kb < 20:
        return BAND_SMALL
    if size_kb < 50:
        return BAND_MEDIUM_SMALL
    if size_kb < LOWER_LIMIT_KB:
        return BAND_APPROACHING
    if size_kb <= EXCELLENT_THRESHOLD_KB:
        return BAND_GOOD
    return BAND_EXCELLENT


def status_label(size_kb: float) -> str:
    if size_kb > UPPER_LIMIT_KB:
        return "Exceeds limit!"
    if size_kb < LOWER_LIMIT_KB:
        return "Below optimal range"
    return "Within optimal range"


def recommendation(size_kb: float) -> Recommendation:
    size_text = f"{size_kb:.2f}KB"
    if size_kb > UPPER_LIMIT_KB:
        return Recommendation(
            "exceeds",
            f"Your contract ({size_text}) exceeds the 128KB limit and cannot be deployed as is. "
            "Split it into smaller contracts or move logic into libraries.",
        )
    if size_kb >= LOWER_LIMIT_KB:
        note = None
        if size_kb >= EXCELLENT_THRESHOLD_KB:
            note = "Excellent! You are making the most of the available contract space."
        return Recommendation(
            "optimal",
            "Your contract is optimally sized! It's within the ideal range of 100-128KB.",
            note,
        )
    if size_kb < 5:
        return Recommendation("tiny", f"This contract is extremely smol ({size_text})!")
    if size_kb < 20:
        return Recommendation(
            "small",
            f"Your contract is quite smol ({size_text}). There's significant room to add "
            "more functionality while staying well below the 128KB limit.",
        )
    return Recommendation(
        "below_optimal",
        f"Your contract is smaller than the optimal range ({size_text} vs 100-128KB). "
        "You could add more features while still staying under the 128KB limit.",
    )


def image_scale(size_kb: float) -> float:
    """Target scale of the background image for a given size."""
    if not size_kb:
        return 0.0
    if size_kb < 5:
        return 0.1 + (size_kb / 5) * 0.1
    if size_kb < 20:
        return 0.2 + ((size_kb - 5) / 15) * 0.2
    if size_kb < 50:
        return 0.4 + ((size_kb - 20) / 30) * 0.3
    if size_kb < LOWER_LIMIT_KB:
        return 0.7 + ((size_kb - 50) / 50) * 0.3
    if size_kb <= EXCELLENT_THRESHOLD_KB:
        return 2.5 + ((size_kb - LOWER_LIMIT_KB) / 14) * 0.5
    if size_kb <= UPPER_LIMIT_KB:
        return 3.0 + ((size_kb - EXCELLENT_THRESHOLD_KB) / 14) * 1.0
    return 4.5


def animated_scale(
    target: float,
    elapsed_seconds: float,
    duration: float = ANIMATION_DURATION_SECONDS,
    start: float = ANIMATION_START_SCALE,
) -> float:
    """Linear scale-up from `start` to `target`, reaching it after `duration` seconds."""
    if duration <= 0 or elapsed_seconds >= duration:
        return target
    if elapsed_seconds <= 0:
        return start
    return start + (target - start) * (elapsed_seconds / duration)


def score_size(size_bytes: int, variant: str = VARIANT_SCORED) -> ContractSizeReport:
    if size_bytes < 0:
        raise ValueError("size_bytes must be non-negative.")
    if variant not in (VARIANT_PERCENTAGE_ONLY, VARIANT_SCORED):
        raise ValueError(f"Unknown scoring variant '{variant}'. Expected A or B.")

    size_kb = size_bytes / BYTES_PER_KB
    score = optimization_score(size_kb) if variant == VARIANT_SCORED else None
    return ContractSizeReport(
        size_bytes=size_bytes,
        size_kb=size_kb,
        percentage_of_limit=percentage_of_limit(size_kb, variant),
        optimization_score=score,
        variant=variant,
    )


def report_to_dict(report: ContractSizeReport) -> Dict[str, Any]:
    band = size_band(report.size_kb)
    advice = recommendation(report.size_kb)
    return {
        "size_bytes": report.size_bytes,
        "size_kb": report.size_kb,
        "percentage_of_limit": report.percentage_of_limit,
        "optimization_score": report.optimization_score,
        "variant": report.variant,
        "status": status_label(report.size_kb),
        "band": {"key": band.key, "label": band.label, "gradient": band.gradient},
        "recommendation": {"key": advice.key, "message": advice.message, "note": advice.note},
        "image_scale": image_scale(report.size_kb),
    }


def report_from_dict(data: Dict[str, Any]) -> ContractSizeReport:
    if not isinstance(data, dict):
        raise ValueError("report must be an object.")
    size_bytes = int(data["size_bytes"])
    size_kb = float(data.get("size_kb", size_bytes / BYTES_PER_KB))
    score = data.get("optimization_score")
    return ContractSizeReport(
        size_bytes=size_bytes,
        size_kb=size_kb,
        percentage_of_limit=float(data["percentage_of_limit"]),
        optimization_score=float(score) if score is not None else None,
        variant=str(data.get("variant", VARIANT_SCORED)),
    )
