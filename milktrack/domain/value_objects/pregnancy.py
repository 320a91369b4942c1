from __future__ import annotations

from enum import Enum


class Health(str, Enum):
    GOOD = "Buena"
    FAIR = "Regular"
    POOR = "Mala"


class Activity(str, Enum):
    HIGH = "Alta"
    NORMAL = "Normal"
    LOW = "Baja"
