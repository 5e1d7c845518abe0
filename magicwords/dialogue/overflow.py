"""
Overflow control - decides when the bubble stack must be paged.
"""

from __future__ import annotations


class OverflowController:
    """
    Signals a page clear once the stack nears the top of the viewport.

    A bubble whose top (measured from the bottom-anchored position, see
    BubblePositioner) minus the height already stacked lands within
    `threshold` of the top edge triggers paging.
    """

    def __init__(self, threshold: float = 100):
        self.threshold = threshold

    def should_page(self, next_bubble_top: float, cumulative_height: float) -> bool:
        return next_bubble_top - cumulative_height < self.threshold
