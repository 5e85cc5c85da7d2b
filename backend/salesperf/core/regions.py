# salesperf/core/regions.py

import enum


class Region(str, enum.Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class ProductCategory(str, enum.Enum):
    SOFTWARE = "software"
    HARDWARE = "hardware"
    CONSULTING = "consulting"
    SUPPORT = "support"


class UserStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
