from __future__ import annotations

from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class FeedUnit(str, Enum):
    LITERS = "litros"
    KILOS = "kilos"


class IncidentType(str, Enum):
    MASTITIS = "mastitis"
    INJURY = "injury"
    OTHER = "other"


# Suggested values offered by the calf tracking forms; free text is accepted too.
FEEDING_TYPE_OPTIONS = (
    "Leche materna",
    "Leche en polvo",
    "Concentrado inicial",
    "Heno",
    "Ensilaje",
    "Pasto fresco",
    "Suplemento vitamínico",
    "Suplemento mineral",
    "Probióticos",
    "Electrolitos",
    "Otro",
)

VACCINATION_TYPE_OPTIONS = (
    "Vacuna contra la diarrea viral bovina",
    "Vacuna contra la rinotraqueítis infecciosa bovina",
    "Vacuna contra la parainfluenza-3",
    "Vacuna contra el rotavirus",
    "Vacuna contra el coronavirus",
    "Vacuna contra la leptospirosis",
    "Vacuna contra la clostridiosis",
    "Vacuna contra la neumonía",
    "Vacuna contra la pasteurelosis",
    "Vacuna contra la salmonelosis",
    "Otra",
)

MILESTONE_OPTIONS = (
    "Primer peso",
    "Destete",
    "Primer celo",
    "Primera inseminación",
    "Primer parto",
    "Inicio de producción de leche",
    "Pico de lactancia",
    "Vacunación completa",
    "Cambio de dieta",
    "Traslado a nuevo corral",
    "Otro",
)
