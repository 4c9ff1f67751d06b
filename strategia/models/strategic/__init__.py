from .area import StrategicArea
from .contribution import StrategicContribution

__all__ = [
    "StrategicArea",
    "StrategicContribution",
]
