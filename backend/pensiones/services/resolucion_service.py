from decimal import Decimal

from flask import current_app

from pensiones.extensions.db import db
from pensiones.models.catalogos import EstadoResolucion, EstadoResolucionId, TipoItem
from pensiones.models.expediente import Expediente
from pensiones.models.item_resolucion import ItemResolucion
from pensiones.models.resolucion import Resolucion
from pensiones.services.cupo_service import es_primera_resolucion, verificar_cupo
from pensiones.services.tarifa_service import (
    calcular_importe_item,
    calcular_importe_total,
    obtener_valores_cuota_por_anio,
)
from pensiones.utils.errors import (
    ApiError,
    ExpedienteNoEncontrado,
    ResolucionNoEncontrada,
    SinCamposParaActualizar,
    TipoItemInvalido,
)
from pensiones.utils.transacciones import unidad_de_trabajo


CAMPOS_ESCALARES = ("fecha", "estado_id", "descripcion")


def _get_max_items_resolucion() -> int:
    return max(1, int(current_app.config["MAX_ITEMS_RESOLUCION"]))


def _resolucion_finalizada(mensaje: str) -> ApiError:
    return ApiError(mensaje, 409, payload={"code": "RESOLUCION_FINALIZADA"})


# =========================
# Serialización
# =========================

def _item_to_dict(item: ItemResolucion) -> dict:
    tipo = TipoItem(item.tipo_item_id)
    return {
        "id_item_resolucion": item.id_item_resolucion,
        "tipo_item_id": item.tipo_item_id,
        "tipo_item_nombre": item.tipo.nombre if item.tipo is not None else tipo.nombre,
        "importe": float(item.importe) if item.importe is not None else 0.0,
        "cantidad_cuotas": item.cantidad_cuotas,
        "cuota_actual_item": item.cuota_actual_item,
    }


def resolucion_to_dict(resolucion: Resolucion) -> dict:
    estado_nombre = resolucion.estado.nombre if resolucion.estado is not None else None
    return {
        "id_resolucion": resolucion.id_resolucion,
        "fecha": resolucion.fecha.isoformat() if resolucion.fecha else None,
        "descripcion": resolucion.descripcion,
        "estado_id": resolucion.estado_id,
        "estado_nombre": estado_nombre,
        "expediente_id": resolucion.expediente_id,
        "importe_total": float(calcular_importe_total(resolucion.items)),
        "items_resolucion": [_item_to_dict(i) for i in resolucion.items],
    }


# =========================
# Validaciones internas
# =========================

def _tipo_item(valor) -> TipoItem:
    try:
        return TipoItem(int(valor))
    except (TypeError, ValueError):
        raise TipoItemInvalido(valor) from None


def _items_por_tipo(items: list[dict]) -> dict[TipoItem, dict]:
    """
    Agrupa los ítems solicitados por tipo.
    Una resolución admite a lo sumo un ítem Retroactivo y uno Consecutivo.
    """
    max_items = _get_max_items_resolucion()
    if not items:
        raise ApiError("La resolución debe tener al menos un ítem.", 400)
    if len(items) > max_items:
        raise ApiError(f'El campo "items_resolucion" puede tener hasta {max_items} bloques.', 400)

    por_tipo: dict[TipoItem, dict] = {}
    for datos in items:
        tipo = _tipo_item(datos.get("tipo_item_id"))
        if tipo in por_tipo:
            raise ApiError(
                f'Una resolución solo puede tener un máximo de un ítem de tipo "{tipo.nombre}".',
                400,
                payload={"code": "TIPO_ITEM_DUPLICADO", "tipo_item_id": int(tipo)},
            )
        por_tipo[tipo] = datos

    return por_tipo


def _obtener_expediente(expediente_id: int) -> Expediente:
    expediente: Expediente | None = db.session.get(Expediente, expediente_id)
    if expediente is None:
        raise ExpedienteNoEncontrado(expediente_id)
    return expediente


def _validar_estado(estado_id: int) -> None:
    if db.session.get(EstadoResolucion, estado_id) is None:
        raise ApiError("El ID de estado proporcionado no existe.", 400, payload={"estado_id": estado_id})


def _obtener_resolucion(id_resolucion: int) -> Resolucion:
    resolucion: Resolucion | None = db.session.get(Resolucion, id_resolucion)
    if resolucion is None:
        raise ResolucionNoEncontrada(id_resolucion)
    return resolucion


def _calcular_items(por_tipo: dict[TipoItem, dict], expediente: Expediente) -> list[tuple[TipoItem, dict, Decimal, int]]:
    """
    Valúa cada ítem contra la tabla valor_cuotas.

    Devuelve (tipo, datos, importe, cuota_actual_item) por ítem, en el orden
    recibido. Un año sin valor configurado interrumpe toda la operación.
    """
    anio_inicio = expediente.fecha_inicio.year
    mes_inicio = expediente.fecha_inicio.month

    total_retroactivas = sum(
        int(d["cantidad_cuotas"]) for t, d in por_tipo.items() if t == TipoItem.RETROACTIVO
    )
    valores_por_anio = obtener_valores_cuota_por_anio()

    calculados = []
    for tipo, datos in por_tipo.items():
        cantidad = int(datos["cantidad_cuotas"])

        if tipo == TipoItem.RETROACTIVO:
            # Se paga de una sola vez: queda consumido desde el inicio.
            cuota_actual = cantidad
            progreso_previo = 0
        else:
            cuota_actual = int(datos.get("cuota_actual_item") or 1)
            progreso_previo = cuota_actual - 1

        importe = calcular_importe_item(
            tipo,
            cantidad,
            progreso_previo,
            anio_inicio,
            mes_inicio,
            total_retroactivas,
            valores_por_anio,
        )
        calculados.append((tipo, datos, importe, cuota_actual))

    return calculados


def _total_cuotas(por_tipo: dict[TipoItem, dict]) -> int:
    return sum(int(d["cantidad_cuotas"]) for d in por_tipo.values())


# =========================
# Operaciones
# =========================

def crear_resolucion(expediente_id: int, data: dict) -> dict:
    """
    Crea una resolución con sus ítems.

    Pasos:
    - Cargar el expediente (ancla de fechas).
    - Validar el límite de cuotas (solo si es la primera resolución del expediente).
    - Insertar la resolución.
    - Valuar e insertar cada ítem.
    Todo en una transacción: ante cualquier error no queda nada guardado.
    """
    with unidad_de_trabajo("creación de la resolución") as session:
        expediente = _obtener_expediente(expediente_id)
        por_tipo = _items_por_tipo(data.get("items_resolucion") or [])

        if es_primera_resolucion(expediente_id):
            verificar_cupo(expediente_id, _total_cuotas(por_tipo))

        _validar_estado(data["estado_id"])

        resolucion = Resolucion(
            fecha=data["fecha"],
            descripcion=data.get("descripcion"),
            estado_id=data["estado_id"],
            expediente_id=expediente.id_expediente,
        )
        session.add(resolucion)

        for tipo, datos, importe, cuota_actual in _calcular_items(por_tipo, expediente):
            resolucion.items.append(
                ItemResolucion(
                    tipo_item_id=int(tipo),
                    importe=importe,
                    cantidad_cuotas=int(datos["cantidad_cuotas"]),
                    cuota_actual_item=cuota_actual,
                )
            )

        session.flush()

    current_app.logger.info(
        "Resolución %s creada en expediente %s con %s ítems",
        resolucion.id_resolucion,
        expediente_id,
        len(resolucion.items),
    )
    return resolucion_to_dict(resolucion)


def _reconciliar_items(resolucion: Resolucion, items: list[dict]) -> None:
    """
    Upsert con eliminación de huérfanos:
    - ítems existentes que no vienen en el payload se eliminan;
    - ítems con id se actualizan en su lugar;
    - ítems sin id se insertan.
    """
    por_tipo = _items_por_tipo(items)

    verificar_cupo(
        resolucion.expediente_id,
        _total_cuotas(por_tipo),
        excluir_resolucion_id=resolucion.id_resolucion,
    )

    existentes = {i.id_item_resolucion: i for i in resolucion.items}
    ids_enviados = [d["id_item_resolucion"] for d in por_tipo.values() if d.get("id_item_resolucion")]

    if len(ids_enviados) != len(set(ids_enviados)):
        raise ApiError("Un mismo ítem no puede enviarse más de una vez.", 400)

    ajenos = sorted(set(ids_enviados) - set(existentes))
    if ajenos:
        raise ApiError(
            "Uno o más ítems no pertenecen a la resolución.",
            400,
            payload={"id_item_resolucion": ajenos},
        )

    calculados = _calcular_items(por_tipo, _obtener_expediente(resolucion.expediente_id))

    for id_item, item in existentes.items():
        if id_item not in ids_enviados:
            resolucion.items.remove(item)

    for tipo, datos, importe, cuota_actual in calculados:
        id_item = datos.get("id_item_resolucion")
        item = existentes.get(id_item) if id_item else None
        if item is None:
            item = ItemResolucion()
            resolucion.items.append(item)

        item.tipo_item_id = int(tipo)
        item.importe = importe
        item.cantidad_cuotas = int(datos["cantidad_cuotas"])
        item.cuota_actual_item = cuota_actual


def actualizar_resolucion(id_resolucion: int, data: dict) -> dict:
    """
    Actualiza campos de la resolución y, si vienen, reemplaza sus ítems
    (upsert + eliminación de huérfanos) recalculando importes y total.
    """
    campos = {k: data[k] for k in CAMPOS_ESCALARES if k in data}
    items = data.get("items_resolucion")

    if not campos and items is None:
        raise SinCamposParaActualizar()

    with unidad_de_trabajo("actualización de la resolución") as session:
        resolucion = _obtener_resolucion(id_resolucion)

        if "estado_id" in campos:
            _validar_estado(campos["estado_id"])
            if resolucion.finalizada and campos["estado_id"] != EstadoResolucionId.FINALIZADO:
                raise _resolucion_finalizada("La resolución está finalizada y no puede cambiar de estado.")

        if resolucion.finalizada and items is not None:
            raise _resolucion_finalizada("La resolución está finalizada y sus ítems no pueden modificarse.")

        for campo, valor in campos.items():
            setattr(resolucion, campo, valor)

        if items is not None:
            _reconciliar_items(resolucion, items)

        session.flush()

    current_app.logger.info(
        "Resolución %s actualizada (campos=%s, items=%s)",
        id_resolucion,
        sorted(campos),
        items is not None,
    )
    return resolucion_to_dict(resolucion)


def eliminar_resolucion(id_resolucion: int) -> dict:
    with unidad_de_trabajo("eliminación de la resolución") as session:
        resolucion = _obtener_resolucion(id_resolucion)
        eliminada = {
            "id_resolucion": resolucion.id_resolucion,
            "expediente_id": resolucion.expediente_id,
            "items_eliminados": len(resolucion.items),
        }
        # Los ítems se eliminan en cascada (delete-orphan)
        session.delete(resolucion)

    current_app.logger.info("Resolución %s eliminada", id_resolucion)
    return eliminada


def obtener_resolucion(id_resolucion: int) -> dict:
    return resolucion_to_dict(_obtener_resolucion(id_resolucion))


def listar_resoluciones_expediente(expediente_id: int) -> list[dict]:
    _obtener_expediente(expediente_id)

    resoluciones = (
        Resolucion.query.filter(Resolucion.expediente_id == expediente_id)
        .order_by(Resolucion.fecha.desc(), Resolucion.id_resolucion.desc())
        .all()
    )
    return [resolucion_to_dict(r) for r in resoluciones]
