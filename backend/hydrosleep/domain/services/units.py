"""
Conversions vers les unités d'affichage (litres, heures).
Arrondi "half-up" au dixième : 0.25 L -> 0.3 L, comme côté client.
"""
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, digits: int = 0) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def ml_to_liters(amount_ml: float) -> float:
    return round_half_up(amount_ml / 1000, 1)


def minutes_to_hours(minutes: float) -> float:
    return round_half_up(minutes / 60, 1)


def liters_to_ml(liters: float) -> int:
    return int(round_half_up(liters * 1000))


def hours_to_minutes(hours: float) -> float:
    return hours * 60


def progress_percent(amount: float, goal: float) -> float:
    """Progression vers l'objectif, plafonnée à 100 %."""
    if goal <= 0:
        return 100.0 if amount > 0 else 0.0
    return min(amount / goal * 100, 100.0)
