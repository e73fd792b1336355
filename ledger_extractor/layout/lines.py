"""Grouping of positioned fragments into visual text lines."""

import math
from collections import defaultdict
from typing import Dict, Iterable, List

from ledger_extractor.layout.models import Fragment

DEFAULT_BUCKET_SIZE = 3.0


def quantize_y(y: float, bucket_size: float = DEFAULT_BUCKET_SIZE) -> float:
    """Round a vertical coordinate to the nearest multiple of ``bucket_size``.

    Halves round upward, so 1.5 with a bucket of 3 lands on 3.
    """
    return math.floor(y / bucket_size + 0.5) * bucket_size


def reconstruct_lines(
    fragments: Iterable[Fragment],
    bucket_size: float = DEFAULT_BUCKET_SIZE
) -> List[List[Fragment]]:
    """Cluster one page's fragments into reading-order lines.

    Fragments sharing a quantized ``y`` form one line. Lines are returned top
    of page first (descending ``y``), each ordered left to right, with blank
    fragments removed. Lines left empty are not returned.

    Args:
        fragments: Fragments of a single page in any order.
        bucket_size: Vertical quantization step.

    Returns:
        List of non-empty lines.
    """
    buckets: Dict[float, List[Fragment]] = defaultdict(list)
    for fragment in fragments:
        buckets[quantize_y(fragment.y, bucket_size)].append(fragment)

    lines = []
    for key in sorted(buckets, reverse=True):
        line = sorted(buckets[key], key=lambda f: f.x)
        line = [f for f in line if f.text and f.text.strip()]
        if line:
            lines.append(line)

    return lines
