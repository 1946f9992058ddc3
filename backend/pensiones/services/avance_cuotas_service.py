"""
Job mensual: avanza la cuota actual de los ítems consecutivos.

Se ejecuta una vez por mes desde un cron externo:

    flask resoluciones avanzar-cuotas

No hay marca de período: ejecutarlo dos veces en el mismo mes avanza dos
cuotas. El filtro `cuota_actual_item < cantidad_cuotas` impide que un ítem
supere su cantidad de cuotas.
"""

from datetime import datetime

from flask import current_app
from sqlalchemy import func

from pensiones.models.catalogos import EstadoResolucionId, TipoItem
from pensiones.models.item_resolucion import ItemResolucion
from pensiones.models.resolucion import Resolucion
from pensiones.utils.transacciones import unidad_de_trabajo


def _items_pendientes():
    return (
        ItemResolucion.query.join(Resolucion, ItemResolucion.resolucion_id == Resolucion.id_resolucion)
        .filter(ItemResolucion.tipo_item_id == int(TipoItem.CONSECUTIVO))
        .filter(func.coalesce(ItemResolucion.cuota_actual_item, 0) < ItemResolucion.cantidad_cuotas)
        .filter(Resolucion.estado_id != int(EstadoResolucionId.SUSPENDIDO))
        .order_by(ItemResolucion.id_item_resolucion.asc())
        .all()
    )


def avanzar_cuotas_mensuales(dry_run: bool = False) -> dict:
    """
    1. Selecciona ítems consecutivos pendientes de resoluciones no suspendidas.
    2. Incrementa su cuota_actual_item en 1.
    3. Finaliza las resoluciones tocadas cuyos ítems (de ambos tipos) están
       todos agotados.

    Todo el lote corre en una transacción; con `dry_run` se calcula igual y
    se revierte al final.
    """
    logger = current_app.logger
    logger.info(
        "[Job Cuotas] Ejecutando actualización mensual de cuotas de resoluciones... (%s)%s",
        datetime.now().isoformat(timespec="seconds"),
        " [DRY RUN]" if dry_run else "",
    )

    with unidad_de_trabajo("actualización mensual de cuotas", confirmar=not dry_run) as session:
        items = _items_pendientes()

        resoluciones_tocadas: dict[int, Resolucion] = {}
        for item in items:
            item.cuota_actual_item = (item.cuota_actual_item or 0) + 1
            resoluciones_tocadas[item.resolucion_id] = item.resolucion

        session.flush()

        finalizadas = []
        for id_resolucion, resolucion in resoluciones_tocadas.items():
            if resolucion.finalizada:
                continue
            if all(i.agotado for i in resolucion.items):
                resolucion.estado_id = int(EstadoResolucionId.FINALIZADO)
                finalizadas.append(id_resolucion)

        session.flush()

        resultado = {
            "dry_run": dry_run,
            "items_actualizados": len(items),
            "resoluciones_revisadas": len(resoluciones_tocadas),
            "resoluciones_finalizadas": len(finalizadas),
            "ids_finalizadas": finalizadas,
        }

    if not items:
        logger.info("[Job Cuotas] No hay ítems consecutivos para actualizar este mes.")
    logger.info(
        "[Job Cuotas] Job completado. %s ítems actualizados, %s resoluciones finalizadas.",
        resultado["items_actualizados"],
        resultado["resoluciones_finalizadas"],
    )
    return resultado
