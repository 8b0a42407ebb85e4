"""
Évaluation d'une série contre un seuil journalier.

Les jours postérieurs à `as_of` ne comptent ni comme réussite ni comme échec :
ils sont exclus du numérateur et du dénominateur.
"""
from datetime import date

from hydrosleep.domain.entities import GoalEvaluation, WeeklySeries
from hydrosleep.domain.services.calendar import DayLike, to_calendar_day


def evaluate(series: WeeklySeries, daily_threshold: float, as_of: DayLike) -> GoalEvaluation:
    as_of_day: date = to_calendar_day(as_of)

    per_day_met = []
    met_count = 0
    eligible_day_count = 0
    for point in series.points:
        if point.day > as_of_day:
            per_day_met.append(False)
            continue
        eligible_day_count += 1
        met = point.value >= daily_threshold
        per_day_met.append(met)
        if met:
            met_count += 1

    return GoalEvaluation(
        per_day_met=per_day_met,
        met_count=met_count,
        eligible_day_count=eligible_day_count,
    )
