from pensiones.extensions.db import db
from pensiones.models.catalogos import EstadoResolucion, EstadoResolucionId, TipoItem, TipoItemResolucion
from pensiones.utils.transacciones import unidad_de_trabajo


def sembrar_catalogos() -> dict:
    """Inserta los estados de resolución y tipos de ítem que falten (idempotente)."""
    creados = {"estados_resolucion": 0, "tipos_item_resolucion": 0}

    with unidad_de_trabajo("carga de catálogos") as session:
        for estado in EstadoResolucionId:
            if db.session.get(EstadoResolucion, int(estado)) is None:
                session.add(EstadoResolucion(id_estado_resolucion=int(estado), nombre=estado.nombre))
                creados["estados_resolucion"] += 1

        for tipo in TipoItem:
            if db.session.get(TipoItemResolucion, int(tipo)) is None:
                session.add(TipoItemResolucion(id_tipo_item=int(tipo), nombre=tipo.nombre))
                creados["tipos_item_resolucion"] += 1

    return creados
