"""Television regions a game can target."""

from enum import Enum


class Region(Enum):
    """Video standard that decides frame timing."""

    NTSC = "NTSC"
    PAL = "PAL"