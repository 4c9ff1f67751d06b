from typing import Iterable, List, Optional, Union


def split_lines(value: Optional[Union[str, Iterable[str]]]) -> List[str]:
    """Convierte un textarea (una entrada por línea) en una lista limpia.

    Acepta también una lista ya separada; en ambos casos descarta las líneas
    vacías y recorta espacios.
    """
    if value is None:
        return []
    lines = value.split("\n") if isinstance(value, str) else list(value)
    return [line.strip() for line in lines if line and line.strip()]
