"""
Ubicación de cada cuota en el calendario (año, mes).

Todas las cuotas se anclan al (año, mes) de fecha_inicio del expediente:

- Retroactivas: ocupan los `total_retroactivas` meses inmediatamente
  anteriores al ancla, en orden (la posición 1 es la más antigua y la
  última cae en el mes previo al ancla).
- Consecutivas: la posición 1 cae en el mes ancla y cada posición
  siguiente avanza un mes.

Solo importa la granularidad (año, mes); no hay días ni años bisiestos.
"""

from datetime import date

from dateutil.relativedelta import relativedelta


def desplazar_mes(anio: int, mes: int, meses: int) -> tuple[int, int]:
    """Suma (o resta, si `meses` es negativo) meses a un (año, mes)."""
    if not 1 <= mes <= 12:
        raise ValueError(f"Mes fuera de rango: {mes}")

    periodo = date(anio, mes, 1) + relativedelta(months=meses)
    return periodo.year, periodo.month


def periodo_de_cuota(
    anio_inicio: int,
    mes_inicio: int,
    posicion: int,
    es_retroactivo: bool,
    total_retroactivas: int,
) -> tuple[int, int]:
    """
    Devuelve el (año, mes) en que cae la cuota `posicion` (base 1).

    >>> periodo_de_cuota(2024, 11, 3, False, 0)
    (2025, 1)
    >>> periodo_de_cuota(2024, 3, 1, True, 3)
    (2023, 12)
    >>> periodo_de_cuota(2024, 3, 3, True, 3)
    (2024, 2)
    """
    if posicion < 1:
        raise ValueError(f"La posición de la cuota debe ser >= 1 (recibido {posicion})")

    if es_retroactivo:
        if posicion > total_retroactivas:
            raise ValueError(
                f"Posición retroactiva {posicion} fuera del bloque de {total_retroactivas} cuotas"
            )
        meses_atras = total_retroactivas - posicion + 1
        return desplazar_mes(anio_inicio, mes_inicio, -meses_atras)

    return desplazar_mes(anio_inicio, mes_inicio, posicion - 1)
