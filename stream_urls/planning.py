"""Pure planning logic for global byte ranges.

No IO; maps a requested range and per-resource content lengths to the number of
resources to drop at each end and a range local to the first kept resource.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import List
from typing import Optional
from typing import Sequence

from stream_urls.types import ByteRange


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class RangePlan:
    urls_skipped_from_start: int = 0
    urls_skipped_from_end: int = 0
    # Range relative to byte 0 of the first kept resource; None when no range was asked for
    range: Optional[ByteRange] = None

    def apply(self, urls: Sequence[str]) -> List[str]:
        """Return the kept URLs as a new list; `urls` itself is left alone."""
        stop = len(urls) - max(0, self.urls_skipped_from_end)
        return list(urls[max(0, self.urls_skipped_from_start) : stop])


def plan_range(content_lengths: Sequence[int], requested: Optional[ByteRange]) -> RangePlan:
    """Work out which resources a requested range touches.

    Args:
        content_lengths: Byte length of each resource, in order (0 when unknown).
        requested: The global range asked for by the caller.

    Returns:
        RangePlan with the front/back trim counts and the adjusted local range.
        The adjusted end is `requested.end - requested.start + 1`.
    """
    if requested is None or not content_lengths:
        return RangePlan()

    lengths = [int(x) for x in content_lengths]
    count = len(lengths)
    total = sum(lengths)

    # Without any known length there is nothing to prune against
    if total <= 0:
        return RangePlan(range=requested)

    adjusted_start = 0
    adjusted_end = 0
    skipped_from_start = 0
    chunk_size = lengths[0]
    i = 0

    if requested.start and requested.start > 0:
        adjusted_start = requested.start
        # chunk_size is seeded with lengths[0] and lengths[i] is added again on each step
        while i < count and chunk_size <= adjusted_start:
            chunk_size += lengths[i]
            adjusted_start -= lengths[i]
            skipped_from_start += 1
            i += 1

    skipped_from_end = 0
    if requested.end and requested.start is not None and requested.end > requested.start:
        adjusted_end = requested.end
        skipped_from_end = count - skipped_from_start - 1

        if i < count and chunk_size > lengths[i]:
            chunk_size -= lengths[i]

        for length in lengths:
            if chunk_size < adjusted_end:
                break
            chunk_size -= length
            skipped_from_end -= 1

        adjusted_end = requested.end - requested.start + 1

    plan = RangePlan(
        urls_skipped_from_start=skipped_from_start,
        urls_skipped_from_end=skipped_from_end,
        range=ByteRange(start=max(0, adjusted_start), end=adjusted_end),
    )
    logger.debug(
        f"PLAN lengths={lengths} total={total} requested={requested} "
        f"skip_start={plan.urls_skipped_from_start} skip_end={plan.urls_skipped_from_end} range={plan.range}"
    )
    return plan
