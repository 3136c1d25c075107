"""Named RGB colors carried by entities and log messages.

The core never draws; these are opaque payloads handed to the render sink.
"""

from __future__ import annotations

Color = tuple[int, int, int]

WHITE: Color = (255, 255, 255)
YELLOW: Color = (255, 255, 0)
RED: Color = (255, 0, 0)
DARK_RED: Color = (191, 0, 0)
ORANGE: Color = (255, 127, 0)
LIGHT_GREEN: Color = (127, 255, 127)
DESATURATED_GREEN: Color = (63, 127, 63)
DARKER_GREEN: Color = (0, 127, 0)
LIGHT_CYAN: Color = (127, 255, 255)
LIGHT_VIOLET: Color = (184, 127, 255)
VIOLET: Color = (127, 0, 255)
SKY: Color = (0, 191, 255)
DARKER_ORANGE: Color = (127, 63, 0)
LIGHT_RED: Color = (255, 127, 127)
LIGHT_GREY: Color = (159, 159, 159)
LIGHT_YELLOW: Color = (255, 255, 127)
LIGHT_BLUE: Color = (127, 127, 255)
