from decimal import Decimal, ROUND_HALF_UP

from pensiones.extensions.db import db
from pensiones.models.catalogos import TipoItem
from pensiones.models.valor_cuota import ValorCuota
from pensiones.services.calendario_cuotas import periodo_de_cuota
from pensiones.utils.errors import ValorCuotaNoConfigurado


CENTAVOS = Decimal("0.01")


def _redondear(valor: Decimal) -> Decimal:
    return Decimal(valor).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def obtener_valores_cuota_por_anio() -> dict[int, Decimal]:
    """Mapa {anio: importe} de la tabla valor_cuotas (misma sesión/transacción)."""
    filas = db.session.query(ValorCuota.anio, ValorCuota.importe).order_by(ValorCuota.anio.asc()).all()
    return {int(anio): Decimal(importe) for anio, importe in filas}


def desglose_cuotas(
    tipo: TipoItem,
    cantidad_cuotas: int,
    progreso_previo: int,
    anio_inicio: int,
    mes_inicio: int,
    total_retroactivas: int,
    valores_por_anio: dict[int, Decimal],
) -> list[dict]:
    """
    Cronograma de un ítem: una entrada por cuota con su (año, mes) e importe.

    Para consecutivos la posición en el calendario se desplaza por el
    progreso previo del ítem (cuota_actual_item - 1), de modo que cada cuota
    se valúa en el mes en que realmente cae.
    """
    es_retro = tipo == TipoItem.RETROACTIVO
    cuotas = []

    for i in range(1, cantidad_cuotas + 1):
        posicion = i if es_retro else progreso_previo + i
        anio, mes = periodo_de_cuota(anio_inicio, mes_inicio, posicion, es_retro, total_retroactivas)

        precio = valores_por_anio.get(anio)
        if precio is None:
            raise ValorCuotaNoConfigurado(anio)

        cuotas.append({"posicion": posicion, "anio": anio, "mes": mes, "importe": Decimal(precio)})

    return cuotas


def calcular_importe_item(
    tipo: TipoItem,
    cantidad_cuotas: int,
    progreso_previo: int,
    anio_inicio: int,
    mes_inicio: int,
    total_retroactivas: int,
    valores_por_anio: dict[int, Decimal],
) -> Decimal:
    """
    Importe a guardar en items_resolucion.importe.

    - Retroactivo: suma de todas sus cuotas (pago único que puede cruzar
      un cambio de año en la tabla de valores).
    - Consecutivo: importe unitario de su primera cuota; el total se obtiene
      multiplicando por cantidad_cuotas.

    Todas las cuotas deben tener precio configurado aunque solo se use la
    primera: un año faltante detiene la operación.
    """
    cuotas = desglose_cuotas(
        tipo,
        cantidad_cuotas,
        progreso_previo,
        anio_inicio,
        mes_inicio,
        total_retroactivas,
        valores_por_anio,
    )
    if not cuotas:
        return _redondear(Decimal("0"))

    if tipo == TipoItem.RETROACTIVO:
        return _redondear(sum((c["importe"] for c in cuotas), Decimal("0")))
    return _redondear(cuotas[0]["importe"])


def importe_total_item(tipo: TipoItem, importe: Decimal, cantidad_cuotas: int) -> Decimal:
    if tipo == TipoItem.RETROACTIVO:
        return Decimal(importe)
    return Decimal(importe) * cantidad_cuotas


def calcular_importe_total(items) -> Decimal:
    """Total de la resolución a partir de sus ítems (nunca se persiste)."""
    total = Decimal("0")
    for item in items:
        total += importe_total_item(TipoItem(item.tipo_item_id), item.importe, item.cantidad_cuotas)
    return _redondear(total)
