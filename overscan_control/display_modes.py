"""Display-mode fragments and the canvas bound each one implies."""
from __future__ import annotations

from typing import Optional, Tuple

from overscan_control.overscan_geometry import Bound

HDMI_480 = "480"
HDMI_576 = "576"
HDMI_720 = "720"
HDMI_1080 = "1080"
HDMI_4K2K = "2160p"
HDMI_SMPTE = "smpte"
HDMI_640_480 = "640x480"
HDMI_800_480 = "800x480"
HDMI_800_600 = "800x600"
HDMI_1024_600 = "1024x600"
HDMI_1024_768 = "1024x768"
HDMI_1280_800 = "1280x800"
HDMI_1280_1024 = "1280x1024"
HDMI_1360_768 = "1360x768"
HDMI_1366_768 = "1366x768"
HDMI_1440_900 = "1440x900"
HDMI_1600_900 = "1600x900"
HDMI_1600_1200 = "1600x1200"
HDMI_1920_1200 = "1920x1200"

DEFAULT_BOUND = Bound(max_right=1919, max_bottom=1079)

# First match wins. The short fragments at the top shadow some of the VESA
# names below ("640x480p60hz" resolves through "480"); do not reorder.
MODE_BOUNDS: Tuple[Tuple[str, Bound], ...] = (
    (HDMI_480, Bound(719, 479)),
    (HDMI_576, Bound(719, 575)),
    (HDMI_720, Bound(1279, 719)),
    (HDMI_1080, Bound(1919, 1079)),
    (HDMI_4K2K, Bound(3839, 2159)),
    (HDMI_SMPTE, Bound(4095, 2159)),
    (HDMI_640_480, Bound(639, 479)),
    (HDMI_800_480, Bound(799, 479)),
    (HDMI_800_600, Bound(799, 599)),
    (HDMI_1024_600, Bound(1023, 599)),
    (HDMI_1024_768, Bound(1023, 767)),
    (HDMI_1280_800, Bound(1279, 799)),
    (HDMI_1280_1024, Bound(1279, 1023)),
    (HDMI_1360_768, Bound(1359, 767)),
    (HDMI_1366_768, Bound(1365, 767)),
    (HDMI_1440_900, Bound(1439, 899)),
    (HDMI_1600_900, Bound(1599, 899)),
    (HDMI_1600_1200, Bound(1599, 1199)),
    (HDMI_1920_1200, Bound(1919, 1199)),
)


def match_fragment(mode: Optional[str]) -> Optional[str]:
    """Return the table fragment that ``mode`` resolves through, if any."""
    if not mode:
        return None
    for fragment, _bound in MODE_BOUNDS:
        if fragment in mode:
            return fragment
    return None


def resolve_bound(mode: Optional[str]) -> Bound:
    """Map a display-mode name to its canvas bound.

    Matching is by substring against ``MODE_BOUNDS`` in table order; unknown
    or empty modes fall back to a 1920x1080 canvas.
    """
    if not mode:
        return DEFAULT_BOUND
    for fragment, bound in MODE_BOUNDS:
        if fragment in mode:
            return bound
    return DEFAULT_BOUND
