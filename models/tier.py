from enum import IntEnum
# Tier model: the integer value is the tier index written to the data file.


class Tier(IntEnum):
    BASE = 0
    SILVER = 1
    GOLD = 2
    DIAMOND = 3
