"""Application-wide constants for Tombcrawl.

Colors are plain RGB triples; the presentation layer decides how to draw
them. Names and glyphs identify the fixed entity kinds the generator and
the session create.
"""

from __future__ import annotations

# =============================================================================
# Colors
# =============================================================================

Color = tuple[int, int, int]

WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
DARK_RED: Color = (191, 0, 0)
ORANGE: Color = (255, 127, 0)
DARKER_ORANGE: Color = (127, 63, 0)
YELLOW: Color = (255, 255, 0)
LIGHT_YELLOW: Color = (255, 255, 115)
GREEN: Color = (0, 255, 0)
LIGHT_GREEN: Color = (115, 255, 115)
DESATURATED_GREEN: Color = (63, 127, 63)
DARKER_GREEN: Color = (0, 127, 0)
LIGHT_CYAN: Color = (115, 255, 255)
LIGHT_BLUE: Color = (115, 115, 255)
SKY: Color = (0, 191, 255)
VIOLET: Color = (127, 0, 255)
LIGHT_VIOLET: Color = (185, 115, 255)

# =============================================================================
# Glyphs and Names
# =============================================================================

PLAYER_NAME = "player"
"""Name of the player entity."""

STAIRS_NAME = "stairs"
"""Name used to recognise the stairs-down entity."""

CORPSE_GLYPH = "%"
"""Glyph every dead fighter is redrawn with."""

CORPSE_COLOR: Color = DARK_RED

# =============================================================================
# Equipment Slots
# =============================================================================

RIGHT_HAND = "right hand"
LEFT_HAND = "left hand"


__all__ = [
    "Color",
    # Colors
    "WHITE",
    "RED",
    "DARK_RED",
    "ORANGE",
    "DARKER_ORANGE",
    "YELLOW",
    "LIGHT_YELLOW",
    "GREEN",
    "LIGHT_GREEN",
    "DESATURATED_GREEN",
    "DARKER_GREEN",
    "LIGHT_CYAN",
    "LIGHT_BLUE",
    "SKY",
    "VIOLET",
    "LIGHT_VIOLET",
    # Names
    "PLAYER_NAME",
    "STAIRS_NAME",
    "CORPSE_GLYPH",
    "CORPSE_COLOR",
    # Slots
    "RIGHT_HAND",
    "LEFT_HAND",
]
